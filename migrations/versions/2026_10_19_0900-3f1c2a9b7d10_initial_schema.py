"""initial_schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy_utils import UUIDType

# revision identifiers, used by Alembic.
revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None


def _uuid() -> UUIDType:
    return UUIDType(binary=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("nickname", sa.String(length=255), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("yammer_user_id", sa.BigInteger(), nullable=False),
        sa.Column("yammer_network_id", sa.BigInteger(), nullable=True),
        sa.Column("yammer_staging", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("yammer_profile_url", sa.Text(), nullable=True),
        sa.Column("encrypted_access_token", sa.Text(), nullable=False),
        sa.Column("extra", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_yammer_user_id", "users", ["yammer_user_id"], unique=True)
    op.create_index("ix_users_yammer_network_id", "users", ["yammer_network_id"])

    op.create_table(
        "guests",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_guests_email", "guests", ["email"], unique=True)

    op.create_table(
        "groups",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("yammer_group_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_groups_yammer_group_id", "groups", ["yammer_group_id"], unique=True)

    op.create_table(
        "events",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("name", sa.String(length=70), nullable=False),
        sa.Column("public_uuid", sa.String(length=8), nullable=False),
        sa.Column("owner_id", _uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_events_public_uuid", "events", ["public_uuid"], unique=True)
    op.create_index("ix_events_owner_id", "events", ["owner_id"])

    op.create_table(
        "suggestions",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("event_id", _uuid(), nullable=False),
        sa.Column("primary", sa.String(length=255), nullable=False),
        sa.Column("secondary", sa.Text(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_suggestions_event_id", "suggestions", ["event_id"])

    op.create_table(
        "votes",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("user_id", _uuid(), nullable=False),
        sa.Column("suggestion_id", _uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["suggestion_id"], ["suggestions.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("user_id", "suggestion_id", name="uq_votes_user_suggestion"),
    )
    op.create_index("ix_votes_user_id", "votes", ["user_id"])
    op.create_index("ix_votes_suggestion_id", "votes", ["suggestion_id"])

    op.create_table(
        "invitations",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("event_id", _uuid(), nullable=False),
        sa.Column(
            "invitee_type",
            sa.Enum("user", "guest", "group", name="invitee_type_enum"),
            nullable=False,
        ),
        sa.Column("invitee_id", _uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint(
            "invitee_type", "invitee_id", "event_id", name="uq_invitations_invitee_event"
        ),
    )
    op.create_index("ix_invitations_event_id", "invitations", ["event_id"])
    op.create_index("ix_invitations_invitee_id", "invitations", ["invitee_id"])

    op.create_table(
        "email_logs",
        sa.Column("uuid", _uuid(), nullable=False),
        sa.Column("provider_message_id", sa.String(length=255), nullable=True),
        sa.Column("to_address", sa.String(length=255), nullable=False),
        sa.Column("from_address", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("html_body", sa.Text(), nullable=True),
        sa.Column("text_body", sa.Text(), nullable=True),
        sa.Column(
            "email_type",
            sa.Enum("invitation", "reminder", name="email_type_enum"),
            nullable=False,
        ),
        sa.Column("invitation_id", _uuid(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "sent", "failed", name="email_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["invitation_id"], ["invitations.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(
        "ix_email_logs_provider_message_id", "email_logs", ["provider_message_id"], unique=True
    )
    op.create_index("ix_email_logs_to_address", "email_logs", ["to_address"])
    op.create_index("ix_email_logs_email_type", "email_logs", ["email_type"])
    op.create_index("ix_email_logs_invitation_id", "email_logs", ["invitation_id"])
    op.create_index("ix_email_logs_status", "email_logs", ["status"])


def downgrade() -> None:
    op.drop_table("email_logs")
    op.drop_table("invitations")
    op.drop_table("votes")
    op.drop_table("suggestions")
    op.drop_table("events")
    op.drop_table("groups")
    op.drop_table("guests")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_name in ("email_status_enum", "email_type_enum", "invitee_type_enum"):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)

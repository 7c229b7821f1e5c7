"""CLI commands for sched.do event management."""

import asyncio
from uuid import UUID

import typer

from scheddo.config.database import init_db
from scheddo.events.dtos import EventNotFoundError, SuggestionInput
from scheddo.events.features.create_event.write_model import SqlEventCreateWriteModel
from scheddo.events.features.deliver_reminders.write_model import SqlDeliverRemindersWriteModel
from scheddo.events.repository.read_models import SqlEventReadModel
from scheddo.invitations.dtos import InviteeDescriptor, InviteeLookupFailure
from scheddo.invitations.features.create_invitation.write_model import SqlCreateInvitationWriteModel
from scheddo.invitations.features.deliver_reminder.write_model import SqlDeliverReminderWriteModel
from scheddo.invitations.notifier import get_invitation_notifier
from scheddo.jobs import InProcessJobQueue
from scheddo.validation import ValidationError
from scheddo.yammer.client import get_yammer_client

app = typer.Typer(help="CLI commands for sched.do event management")


def _descriptor(value: str) -> InviteeDescriptor:
    """Digits are a Yammer user id, anything else an email address."""
    if value.isdigit():
        return InviteeDescriptor(yammer_user_id=int(value))
    return InviteeDescriptor(name_or_email=value)


@app.command()
def init_database():
    """Run all migrations against the configured database."""
    asyncio.run(init_db())
    typer.secho("Database is up to date!", fg=typer.colors.GREEN)


@app.command()
def create_event(
    owner_id: str = typer.Argument(
        ...,
        help="UUID of the user organizing the event",
    ),
    name: str = typer.Argument(
        ...,
        help="Name of the event",
    ),
    suggestions: list[str] = typer.Option(
        [],
        "--suggestion",
        "-s",
        help="Suggested time, repeat for several",
    ),
    invitees: list[str] = typer.Option(
        [],
        "--invite",
        "-i",
        help="Yammer user id or email address to invite, repeat for several",
    ),
):
    """Create an event and invite people to vote on it."""

    async def _create_event():
        job_queue = InProcessJobQueue()
        write_model = SqlEventCreateWriteModel(
            job_queue=job_queue,
            yammer_client=get_yammer_client(),
            notifier=get_invitation_notifier(),
        )
        event = await write_model.create_event(
            owner_id=UUID(owner_id),
            name=name,
            suggestions=[SuggestionInput(primary=s) for s in suggestions],
            invitees=[_descriptor(i) for i in invitees],
        )
        await job_queue.drain()
        return event

    try:
        event = asyncio.run(_create_event())
    except ValidationError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Event created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {event.name}", fg=typer.colors.BLUE)
    typer.secho(f"  Event ID: {event.uuid}", fg=typer.colors.CYAN)
    for suggestion in event.suggestions:
        typer.secho(f"  - {suggestion.primary}", fg=typer.colors.BLUE)
    for error in event.invitation_errors:
        typer.secho(f"  Not invited: {error}", fg=typer.colors.YELLOW)


@app.command()
def invite(
    event_uuid: str = typer.Argument(
        ...,
        help="Public id of the event",
    ),
    invitee: str = typer.Argument(
        ...,
        help="Yammer user id or email address",
    ),
):
    """Invite somebody to an existing event."""

    async def _invite():
        write_model = SqlCreateInvitationWriteModel(
            yammer_client=get_yammer_client(),
            notifier=get_invitation_notifier(),
        )
        return await write_model.create_invitation(event_uuid, descriptor=_descriptor(invitee))

    try:
        invitation = asyncio.run(_invite())
    except (ValidationError, InviteeLookupFailure) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Invitation created!", fg=typer.colors.GREEN)
    typer.secho(f"  Invitee: {invitation.invitee.name or invitation.invitee.email}", fg=typer.colors.BLUE)
    if invitation.notified:
        typer.secho(f"  Notified by {invitation.channel.value}", fg=typer.colors.CYAN)
    else:
        typer.secho("  Invitee was not notified", fg=typer.colors.YELLOW)


@app.command()
def remind(
    event_uuid: str = typer.Argument(
        ...,
        help="Public id of the event",
    ),
    excluding_user_id: str = typer.Option(
        None,
        "--excluding",
        "-x",
        help="UUID of a user who should not be reminded",
    ),
):
    """Send a reminder to everybody invited to an event."""

    async def _remind():
        write_model = SqlDeliverRemindersWriteModel(
            reminder_write_model=SqlDeliverReminderWriteModel(notifier=get_invitation_notifier()),
        )
        excluded = UUID(excluding_user_id) if excluding_user_id else None
        return await write_model.deliver_reminders(event_uuid, excluded)

    try:
        results = asyncio.run(_remind())
    except EventNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    for result in results:
        who = (result.invitee.name or result.invitee.email) if result.invitee else result.invitation_id
        if result.delivered:
            typer.secho(f"  Reminded {who} by {result.channel.value}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"  Could not remind {who}: {result.error}", fg=typer.colors.RED)


@app.command()
def show_event(
    event_uuid: str = typer.Argument(
        ...,
        help="Public id of the event",
    ),
):
    """Show an event with its suggestions and invitees."""

    async def _show_event():
        read_model = SqlEventReadModel()
        event = await read_model.get_event(event_uuid)
        if event is None:
            raise EventNotFoundError(event_uuid)
        return event, await read_model.invitees(event_uuid)

    try:
        event, invitees = asyncio.run(_show_event())
    except EventNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"Event: {event.name}", fg=typer.colors.GREEN)
    typer.secho(f"  Event ID: {event.uuid}", fg=typer.colors.CYAN)
    typer.secho(f"  Organizer: {event.owner_name}", fg=typer.colors.BLUE)
    typer.echo()
    typer.secho("Suggestions:", fg=typer.colors.GREEN)
    for suggestion in event.suggestions:
        secondary = f" ({suggestion.secondary})" if suggestion.secondary else ""
        typer.secho(f"  - {suggestion.primary}{secondary}", fg=typer.colors.BLUE)
    typer.echo()
    typer.secho("Invitees:", fg=typer.colors.GREEN)
    for invitee in invitees:
        typer.secho(f"  - {invitee.name or invitee.email} ({invitee.type.value})", fg=typer.colors.BLUE)


if __name__ == "__main__":
    app()

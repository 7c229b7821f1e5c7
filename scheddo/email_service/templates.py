from dataclasses import dataclass
from enum import Enum


class EmailType(str, Enum):
    INVITATION = "invitation"
    REMINDER = "reminder"


@dataclass
class EmailTemplates:
    INVITATION_SUBJECT = "{organizer_name} invited you to vote on {event_name}"
    INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>Hi {invitee_name},</p>

        <p>{organizer_name} would like your input on <strong>{event_name}</strong>.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{event_url}" style="background-color: #0072c6; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                Vote Now
            </a>
        </div>

        <p>If the button doesn't work, you can copy and paste the following link into your browser:</p>
        <p style="word-break: break-all;"><a href="{event_url}">{event_url}</a></p>

        <hr style="border: none; border-top: 1px solid #ddd; margin: 30px 0;">

        <p style="font-size: 12px; color: #888; text-align: center;">
            Sent by sched.do on behalf of {organizer_name}.
        </p>
    </body>
    </html>
    """

    INVITATION_TEXT = """
    Hi {invitee_name},

    {organizer_name} would like your input on {event_name}.

    Vote here:
    {event_url}

    Sent by sched.do on behalf of {organizer_name}.
    """

    REMINDER_SUBJECT = "Reminder: {organizer_name} is waiting for your vote on {event_name}"
    REMINDER_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>Hi {invitee_name},</p>

        <p>Just a reminder: {organizer_name} is still waiting for your vote on <strong>{event_name}</strong>.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{event_url}" style="background-color: #0072c6; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                Vote Now
            </a>
        </div>

        <p style="word-break: break-all;"><a href="{event_url}">{event_url}</a></p>
    </body>
    </html>
    """

    REMINDER_TEXT = """
    Hi {invitee_name},

    Just a reminder: {organizer_name} is still waiting for your vote on {event_name}.

    Vote here:
    {event_url}
    """

    @classmethod
    def get_templates(cls, email_type: EmailType) -> tuple[str, str, str]:
        """Get the templates for an email type.

        Returns: (subject, html_body, text_body)
        """
        prefix = email_type.value.upper()
        return (
            getattr(cls, f"{prefix}_SUBJECT"),
            getattr(cls, f"{prefix}_HTML"),
            getattr(cls, f"{prefix}_TEXT"),
        )

    @classmethod
    def render(cls, email_type: EmailType, **context: str) -> tuple[str, str, str]:
        """Render subject, html and text bodies for an email type."""
        subject, html_template, text_template = cls.get_templates(email_type)
        return (
            subject.format(**context),
            html_template.format(**context),
            text_template.format(**context),
        )

from scheddo.email_service.templates import EmailTemplates, EmailType


def test_render_invitation_fills_every_placeholder():
    subject, html_body, text_body = EmailTemplates.render(
        EmailType.INVITATION,
        invitee_name="Anna",
        organizer_name="Ralph Robot",
        event_name="Team Lunch",
        event_url="http://localhost:8000/events/abcd1234",
    )

    assert subject == "Ralph Robot invited you to vote on Team Lunch"
    for body in (html_body, text_body):
        assert "Team Lunch" in body
        assert "http://localhost:8000/events/abcd1234" in body
        assert "{" not in body


def test_get_templates_for_reminder():
    subject, _, text_body = EmailTemplates.get_templates(EmailType.REMINDER)

    assert "{event_name}" in subject
    assert "{event_url}" in text_body

# controllers/contact_controller.py
import html

from controllers.content_controller import get_storage, validate_payload
from models.schemas import ContactMessage, InsertContactMessage
from utils.email_service import send_email_async


def notify_admin(message: ContactMessage, flask_app):
    """Queue a notification email about a new contact message (non-blocking)."""
    admin_email = flask_app.config.get("ADMIN_EMAIL")
    if not admin_email:
        return None

    esc = lambda s: html.escape(s) if s is not None else "-"

    subject = f"New portfolio message: {message.subject}"
    text = (
        "You have a new message from your portfolio contact form.\n\n"
        f"Name: {message.name}\n"
        f"Email: {message.email}\n"
        f"Subject: {message.subject}\n\n"
        f"{message.message}\n"
    )
    html_body = f"""
    <html><body>
      <p>You have a new message from your portfolio contact form.</p>
      <table cellpadding="4" cellspacing="0" border="0">
        <tr><td><strong>Name:</strong></td><td>{esc(message.name)}</td></tr>
        <tr><td><strong>Email:</strong></td><td><a href="mailto:{esc(message.email)}">{esc(message.email)}</a></td></tr>
        <tr><td><strong>Subject:</strong></td><td>{esc(message.subject)}</td></tr>
      </table>
      <p>{esc(message.message).replace(chr(10), "<br/>")}</p>
    </body></html>
    """

    try:
        # replies go straight to the visitor
        return send_email_async(subject, [admin_email], html_body, text, reply_to=message.email)
    except Exception:
        flask_app.logger.exception("Failed to enqueue contact notification for message %s", message.id)
        return None


def process_contact_message(flask_app, payload=None) -> ContactMessage:
    """
    Validates payload, stores the message, enqueues the admin notification.
    May raise pydantic.ValidationError on invalid input.
    """
    data = validate_payload(InsertContactMessage, payload)
    message = get_storage().create_contact_message(data)
    notify_admin(message, flask_app)
    return message

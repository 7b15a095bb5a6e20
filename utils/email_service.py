# utils/email_service.py
from threading import Thread
from typing import List, Optional

from flask import current_app
from flask_mail import Mail, Message

mail = Mail()


def init_mail(app):
    mail.init_app(app)


def _send_async_email(app, msg: Message):
    """Runs in a background thread; failures are logged, never raised."""
    with app.app_context():
        try:
            mail.send(msg)
            app.logger.info("Email sent to %s (subject=%s)", msg.recipients, msg.subject)
        except Exception:
            app.logger.exception("Failed to send email to %s (subject=%s)", msg.recipients, msg.subject)


def send_email_async(subject: str, recipients: List[str], html_body: str, text_body: Optional[str] = None,
                     sender: Optional[str] = None, reply_to: Optional[str] = None):
    """
    Fire-and-forget email using a thread.
    Returns the Thread object in case caller wants to join/check it in tests.
    """
    config = current_app.config
    msg = Message(
        subject=subject,
        recipients=recipients,
        sender=sender or config.get("MAIL_DEFAULT_SENDER") or config.get("FROM_EMAIL"),
        reply_to=reply_to or config.get("NO_REPLY_EMAIL"),
    )
    if text_body:
        msg.body = text_body
    msg.html = html_body

    current_app.logger.debug(
        "Preparing email send: sender=%s reply_to=%s recipients=%s subject=%s",
        msg.sender, msg.reply_to, recipients, subject,
    )

    thr = Thread(target=_send_async_email, args=(current_app._get_current_object(), msg))
    thr.daemon = True
    thr.start()
    return thr

# notifications/transport.py
import logging
import smtplib

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = logging.getLogger(__name__)


class MailTransport:
    """Sends one message through Django's configured email backend."""

    def __init__(self, from_email=None, connection=None):
        self.from_email = from_email
        self.connection = connection

    def send(self, to, subject, body, headers=None, attachments=None, bcc=None, html_body=None):
        message = EmailMultiAlternatives(
            subject=subject,
            body=body,
            from_email=self.from_email or settings.DEFAULT_FROM_EMAIL,
            to=[to],
            bcc=list(bcc or []),
            headers=dict(headers or {}),
            connection=self.connection,
        )
        if html_body:
            message.attach_alternative(html_body, "text/html")
        for attachment in attachments or ():
            if isinstance(attachment, (tuple, list)):
                message.attach(*attachment)
            else:
                message.attach_file(attachment)

        try:
            return message.send() > 0
        except (smtplib.SMTPException, OSError):
            logger.exception("Mail transport error while sending %r to %s", subject, to)
            return False

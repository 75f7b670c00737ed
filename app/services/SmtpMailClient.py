"""SMTP client for sending form notifications through an authenticated mailbox."""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText

from app.schemas.emailSchema import OutboundMessage
from app.services.MailTransport import MailTransportError

logger = logging.getLogger(__name__)


class SmtpMailTransport:
    """
    Sends plain-text emails over SMTP with a single authenticated sender.

    A new connection is opened for every message, so one instance can be
    shared by concurrent requests. The blocking smtplib calls run in a worker
    thread to keep the event loop free.
    """

    name = "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        use_tls: bool = True,
        timeout: float = 30.0
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_mime(self, message: OutboundMessage) -> MIMEText:
        mime = MIMEText(message.body, "plain", "utf-8")
        mime["From"] = message.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        if message.reply_to:
            mime["Reply-To"] = message.reply_to
        return mime

    def _send_blocking(self, message: OutboundMessage) -> None:
        mime = self.build_mime(message)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(message.sender, [message.to], mime.as_string())

    async def send_mail(self, message: OutboundMessage) -> dict:
        """
        Send one email.

        Returns:
            dict with status information

        Raises:
            MailTransportError: authentication, connection or recipient failures.
        """
        try:
            await asyncio.to_thread(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ [SMTP] Failed to send '{message.subject}' to {message.to}: {e}")
            raise MailTransportError(f"SMTP send failed: {e}") from e

        logger.info(f"✅ [SMTP] Email sent to {message.to}")
        return {
            "status": "sent",
            "from": message.sender,
            "to": [message.to],
            "reply_to": message.reply_to,
            "subject": message.subject
        }

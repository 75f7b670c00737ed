"""Mail transport contract shared by the SMTP and Microsoft Graph senders."""

from typing import Protocol

from app.constants.constants import MailTransportKind
from app.schemas.emailSchema import OutboundMessage


class MailTransportError(Exception):
    """Raised when a transport could not hand a message over to the mail provider."""


class MailTransport(Protocol):
    """
    Anything able to deliver one plain-text email.

    Implementations raise MailTransportError when the provider rejects the
    message or cannot be reached, and must be safe to share between
    overlapping requests.
    """

    name: str

    async def send_mail(self, message: OutboundMessage) -> dict:
        ...


def build_mail_transport(settings) -> MailTransport:
    """
    Create the transport selected by MAIL_TRANSPORT.

    Raises:
        - ValueError: The Graph transport is selected without Microsoft credentials.
    """
    if settings.MAIL_TRANSPORT == MailTransportKind.graph:
        from app.services.MicrosoftGraphClientPublic import GraphMailTransport

        if not (settings.MICROSOFT_TENANT_ID and settings.MICROSOFT_CLIENT_ID and settings.MICROSOFT_CLIENT_SECRET):
            raise ValueError(
                "MAIL_TRANSPORT=graph requires MICROSOFT_TENANT_ID, MICROSOFT_CLIENT_ID and MICROSOFT_CLIENT_SECRET"
            )
        return GraphMailTransport(
            tenant_id=settings.MICROSOFT_TENANT_ID,
            client_id=settings.MICROSOFT_CLIENT_ID,
            client_secret=settings.MICROSOFT_CLIENT_SECRET,
            default_sender=settings.EMAIL_USER,
        )

    from app.services.SmtpMailClient import SmtpMailTransport

    return SmtpMailTransport(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.EMAIL_USER,
        password=settings.EMAIL_PASS,
        use_tls=settings.SMTP_USE_TLS,
        timeout=settings.SMTP_TIMEOUT,
    )

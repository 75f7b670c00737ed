"""FastAPI dependencies wiring the mail transport into the notification dispatcher."""

from fastapi import Depends, Request

from app.core.config import settings
from app.schemas.emailSchema import OrganizationBranding
from app.services.MailTransport import MailTransport
from app.services.SubmissionNotifications import NotificationDispatcher


def get_mail_transport(request: Request) -> MailTransport:
    """Return the transport created for this process during start-up."""
    return request.app.state.mail_transport


def get_dispatcher(transport: MailTransport = Depends(get_mail_transport)) -> NotificationDispatcher:
    """Build a dispatcher bound to the configured sender and organization inbox."""
    return NotificationDispatcher(
        transport=transport,
        sender_email=settings.EMAIL_USER,
        organization_email=settings.RECEIVER_EMAIL,
        organization=OrganizationBranding(
            name=settings.ORGANIZATION_NAME,
            short_name=settings.ORGANIZATION_SHORT_NAME,
            team=settings.ORGANIZATION_TEAM,
        ),
    )

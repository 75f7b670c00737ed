"""Organization notices and submitter confirmations for form submissions."""

import logging
from typing import Optional

from app.constants.constants import DispatchStage, FormKind
from app.schemas.emailSchema import DispatchOutcome, OrganizationBranding, OutboundMessage
from app.schemas.submissionSchema import Submission
from app.services.MailTransport import MailTransport

logger = logging.getLogger(__name__)


ORGANIZATION_NOTICES = {
    FormKind.appointment: (
        "New Appointment Booking",
        "New appointment booked:\n"
        "Name: {name}\n"
        "Phone: {phone}\n"
        "Email: {email}\n"
        "Message: {message}"
    ),
    FormKind.contact: (
        "New Message from Contact Form",
        "New contact message from:\n"
        "Name: {name}\n"
        "Phone: {phone}\n"
        "Email: {email}\n"
        "Message: {message}"
    ),
    FormKind.question: (
        "New Question from FAQ Page",
        "New question from the FAQ section:\n"
        "Name: {name}\n"
        "Email: {email}\n"
        "Question: {question}"
    ),
}

SUBMITTER_CONFIRMATIONS = {
    FormKind.appointment: (
        "Appointment Confirmation - {short_name}",
        "Hello {name},\n\n"
        "Thank you for booking an appointment with {organization}. We have received your request "
        "and will contact you shortly to confirm the details.\n\n"
        "Best regards,\n"
        "{team}"
    ),
    FormKind.contact: (
        "Contact Form Submission Confirmation",
        "Hello {name},\n\n"
        "Thank you for reaching out to us. We have received your message "
        "and will get back to you as soon as possible.\n\n"
        "Best regards,\n"
        "{team}"
    ),
    FormKind.question: (
        "Question Submission Confirmation",
        "Hello {name},\n\n"
        "Thank you for your question. We have received it "
        "and will get back to you with an answer shortly.\n\n"
        "Best regards,\n"
        "{team}"
    ),
}


def build_organization_notice(submission: Submission, sender: str, organization_email: str) -> OutboundMessage:
    """Describe a new submission to the organization inbox, replying straight to the submitter."""
    subject, template = ORGANIZATION_NOTICES[submission.kind]
    return OutboundMessage(
        sender=sender,
        to=organization_email,
        subject=subject,
        body=template.format(**submission.model_dump(exclude={"kind"})),
        reply_to=submission.email,
    )


def build_submitter_confirmation(
    submission: Submission,
    sender: str,
    organization: Optional[OrganizationBranding] = None
) -> OutboundMessage:
    """Acknowledge a submission to the person who sent it."""
    organization = organization or OrganizationBranding()
    subject, template = SUBMITTER_CONFIRMATIONS[submission.kind]
    template_vars = {
        "name": submission.name,
        "organization": organization.name,
        "short_name": organization.short_name,
        "team": organization.team,
    }
    return OutboundMessage(
        sender=sender,
        to=submission.email,
        subject=subject.format(**template_vars),
        body=template.format(**template_vars),
    )


class NotificationDispatcher:
    """
    Sends the two emails that follow every accepted form submission.

    The organization notice always goes first; the submitter confirmation is
    only attempted once the notice has been accepted by the transport. Each
    message is sent at most once per dispatch.
    """

    def __init__(
        self,
        transport: MailTransport,
        sender_email: str,
        organization_email: str,
        organization: Optional[OrganizationBranding] = None
    ):
        self.transport = transport
        self.sender_email = sender_email
        self.organization_email = organization_email
        self.organization = organization or OrganizationBranding()

    async def _send(self, stage: DispatchStage, message: OutboundMessage) -> Optional[Exception]:
        logger.info(f"📤 Sending {stage.value} to {message.to}")
        try:
            await self.transport.send_mail(message)
        except Exception as e:
            logger.error(f"❌ {stage.value} failed for {message.to}: {type(e).__name__}: {e}")
            return e
        return None

    async def dispatch(self, submission: Submission) -> DispatchOutcome:
        notice = build_organization_notice(submission, self.sender_email, self.organization_email)
        confirmation = build_submitter_confirmation(submission, self.sender_email, self.organization)

        error = await self._send(DispatchStage.organization_notice, notice)
        if error is not None:
            return DispatchOutcome.failure(DispatchStage.organization_notice, error)

        error = await self._send(DispatchStage.submitter_confirmation, confirmation)
        if error is not None:
            # The organization already has the notice; the caller still sees a failure.
            return DispatchOutcome.failure(DispatchStage.submitter_confirmation, error)

        logger.info(f"✅ {submission.kind.value} submission from {submission.email} delivered")
        return DispatchOutcome.success()

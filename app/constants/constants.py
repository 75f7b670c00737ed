"""Constants for form kinds, dispatch statuses and the response messages returned per form."""

from enum import Enum


class FormKind(str, Enum):
    """Enumeration of the public forms that can be submitted."""

    appointment = "appointment"
    contact = "contact"
    question = "question"


class DispatchStatus(str, Enum):
    """Enumeration of dispatch outcomes."""

    delivered = "delivered"
    failed = "failed"


class DispatchStage(str, Enum):
    """Enumeration of the sends performed for one submission, in the order they happen."""

    organization_notice = "organization_notice"
    submitter_confirmation = "submitter_confirmation"


class MailTransportKind(str, Enum):
    """Enumeration of the supported mail transports."""

    smtp = "smtp"
    graph = "graph"


# Raw JSON keys accepted for the submitter's email address. The first one wins.
EMAIL_FIELD_KEYS = ("email", "e-mail")

# Raw JSON key -> submission field, per form.
FORM_FIELD_KEYS = {
    FormKind.appointment: {"name": "name", "number": "phone", "message": "message"},
    FormKind.contact: {"name": "name", "number": "phone", "message": "message"},
    FormKind.question: {"name": "name", "question": "question"},
}

REQUIRED_FIELDS = {
    FormKind.appointment: ("name", "phone", "email"),
    FormKind.contact: ("name", "phone", "email"),
    FormKind.question: ("name", "email", "question"),
}

SUCCESS_MESSAGES = {
    FormKind.appointment: "Appointment booked successfully! A confirmation has been sent to your email.",
    FormKind.contact: "Message sent successfully! A confirmation has been sent to your email.",
    FormKind.question: "Question submitted successfully! A confirmation has been sent to your email.",
}

MISSING_FIELDS_MESSAGES = {
    FormKind.appointment: "Missing required fields: name, number, or email.",
    FormKind.contact: "Missing required fields: name, number, or email.",
    FormKind.question: "Missing required fields: name, email, or question.",
}

INVALID_EMAIL_MESSAGE = "Please provide a valid email address."

FAILURE_MESSAGES = {
    FormKind.appointment: "Failed to book appointment. Please try again later.",
    FormKind.contact: "Failed to send message. Please try again later.",
    FormKind.question: "Failed to submit question. Please try again later.",
}

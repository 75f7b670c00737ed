import re
from typing import Annotated, Literal, Union
from pydantic import AfterValidator, BaseModel, Field

from app.constants.constants import FormKind

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+")


def check_email_syntax(email: str) -> str:
    """Reject text that cannot be an address (no single @, or whitespace). The value is never rewritten."""
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValueError("value is not an email address")
    return email


SubmitterEmail = Annotated[str, AfterValidator(check_email_syntax)]


class AppointmentSubmission(BaseModel):
    """Validated appointment booking form."""
    kind: Literal[FormKind.appointment] = FormKind.appointment
    name: str
    phone: str
    email: SubmitterEmail
    message: str = ""


class ContactSubmission(BaseModel):
    """Validated contact form message."""
    kind: Literal[FormKind.contact] = FormKind.contact
    name: str
    phone: str
    email: SubmitterEmail
    message: str = ""


class QuestionSubmission(BaseModel):
    """Validated FAQ "Ask a Question" form."""
    kind: Literal[FormKind.question] = FormKind.question
    name: str
    email: SubmitterEmail
    question: str


Submission = Annotated[
    Union[AppointmentSubmission, ContactSubmission, QuestionSubmission],
    Field(discriminator="kind"),
]

SUBMISSION_MODELS = {
    FormKind.appointment: AppointmentSubmission,
    FormKind.contact: ContactSubmission,
    FormKind.question: QuestionSubmission,
}


class SubmissionResponse(BaseModel):
    """Response body returned for every form submission."""
    message: str

from typing import Any, Optional
from pydantic import ValidationError

from app.constants.constants import EMAIL_FIELD_KEYS, FORM_FIELD_KEYS, REQUIRED_FIELDS, FormKind
from app.schemas.submissionSchema import SUBMISSION_MODELS, Submission


class SubmissionValidationError(Exception):
    """Raised when a form payload cannot be turned into a submission."""

    def __init__(self, kind: FormKind, missing_fields: list[str], invalid_fields: Optional[list[str]] = None):
        self.kind = kind
        self.missing_fields = missing_fields
        self.invalid_fields = invalid_fields or []
        problems = []
        if self.missing_fields:
            problems.append(f"missing required fields: {', '.join(self.missing_fields)}")
        if self.invalid_fields:
            problems.append(f"invalid fields: {', '.join(self.invalid_fields)}")
        super().__init__(f"Invalid {kind.value} submission ({'; '.join(problems)})")


def clean_text(value: Any) -> str:
    """Convert a raw JSON value to trimmed text. Objects, arrays, booleans and null become empty."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return ""
    return str(value).strip()


def normalize_email(raw_fields: dict) -> str:
    """
    Pick the submitter's email from either accepted key.

    The canonical "email" key wins whenever it holds a non-empty value;
    otherwise the first non-empty alternative is used.
    """
    for key in EMAIL_FIELD_KEYS:
        email = clean_text(raw_fields.get(key))
        if email:
            return email
    return ""


def validate_submission(kind: FormKind, raw_fields: Any) -> Submission:
    """
    Build a validated submission for a form from its raw JSON body.

    Args:
        - kind (FormKind): Which form was posted.
        - raw_fields (Any): The decoded JSON body. Anything other than an object
          is treated as an empty object.

    Returns:
        - Submission: The appointment, contact or question submission.

    Raises:
        - SubmissionValidationError: A required field is absent or blank, or
          the email address is malformed.
    """
    if not isinstance(raw_fields, dict):
        raw_fields = {}

    fields = {
        field: clean_text(raw_fields.get(raw_key))
        for raw_key, field in FORM_FIELD_KEYS[kind].items()
    }
    fields["email"] = normalize_email(raw_fields)

    missing_fields = [field for field in REQUIRED_FIELDS[kind] if not fields.get(field)]
    if missing_fields:
        raise SubmissionValidationError(kind, missing_fields)

    try:
        return SUBMISSION_MODELS[kind](**fields)
    except ValidationError as e:
        invalid_fields = sorted({str(error["loc"][0]) for error in e.errors() if error.get("loc")})
        raise SubmissionValidationError(kind, [], invalid_fields or ["email"]) from e

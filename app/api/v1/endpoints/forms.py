"""API endpoints for the appointment, contact and FAQ question forms."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.constants.constants import (
    FAILURE_MESSAGES,
    INVALID_EMAIL_MESSAGE,
    MISSING_FIELDS_MESSAGES,
    SUCCESS_MESSAGES,
    FormKind,
)
from app.core.mail import get_dispatcher
from app.schemas.submissionSchema import SubmissionResponse
from app.services.SubmissionNotifications import NotificationDispatcher
from app.utils.validate_submission import SubmissionValidationError, validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["forms"]
)

FORM_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": SubmissionResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": SubmissionResponse},
}


async def read_json_body(request: Request) -> Any:
    """Decode the request body, treating an empty or malformed body as an empty form."""
    try:
        return await request.json()
    except ValueError:
        logger.warning(f"⚠️ Could not decode JSON body for {request.url.path}")
        return {}


async def handle_submission(
    kind: FormKind,
    raw_body: Any,
    dispatcher: NotificationDispatcher
) -> JSONResponse:
    """
    Validate a form body, send both notification emails and map the result to a response.

    Always answers with 200, 400 or 500 and a human-readable message; errors
    never escape to the router.
    """
    try:
        submission = validate_submission(kind, raw_body)
    except SubmissionValidationError as e:
        logger.info(f"🚫 Rejected {kind.value} submission: {e}")
        message = MISSING_FIELDS_MESSAGES[kind] if e.missing_fields else INVALID_EMAIL_MESSAGE
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})
    except Exception:
        logger.exception(f"🔥 Unexpected error validating {kind.value} submission")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": FAILURE_MESSAGES[kind]}
        )

    try:
        outcome = await dispatcher.dispatch(submission)
    except Exception:
        logger.exception(f"🔥 Unexpected error dispatching {kind.value} submission")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": FAILURE_MESSAGES[kind]}
        )

    if not outcome.delivered:
        logger.error(
            f"❌ Email sending failed for {kind.value} submission "
            f"(stage: {outcome.failed_stage.value}): {outcome.error}"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": FAILURE_MESSAGES[kind]}
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content={"message": SUCCESS_MESSAGES[kind]})


@router.post("/appointments", response_model=SubmissionResponse, responses=FORM_RESPONSES)
async def book_appointment(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher)
):
    """Book an appointment and email a confirmation to the patient."""
    return await handle_submission(FormKind.appointment, await read_json_body(request), dispatcher)


@router.post("/contact", response_model=SubmissionResponse, responses=FORM_RESPONSES)
async def send_contact_message(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher)
):
    """Submit a contact form message."""
    return await handle_submission(FormKind.contact, await read_json_body(request), dispatcher)


@router.post("/questions", response_model=SubmissionResponse, responses=FORM_RESPONSES)
async def submit_question(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher)
):
    """Submit a question from the FAQ page."""
    return await handle_submission(FormKind.question, await read_json_body(request), dispatcher)

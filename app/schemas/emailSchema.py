from typing import Optional
from pydantic import BaseModel

from app.constants.constants import DispatchStage, DispatchStatus


class OutboundMessage(BaseModel):
    """A single plain-text email handed to a mail transport."""
    sender: str
    to: str
    subject: str
    body: str
    reply_to: Optional[str] = None


class OrganizationBranding(BaseModel):
    """Names used in the confirmation emails sent back to submitters."""
    name: str = "Good Shepherd Hospital & Maternity"
    short_name: str = "Good Shepherd Hospital"
    team: str = "The Good Shepherd Team"


class DispatchOutcome(BaseModel):
    """Result of sending the organization notice and the submitter confirmation."""
    status: DispatchStatus
    failed_stage: Optional[DispatchStage] = None
    error: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.status == DispatchStatus.delivered

    @classmethod
    def success(cls) -> "DispatchOutcome":
        return cls(status=DispatchStatus.delivered)

    @classmethod
    def failure(cls, stage: DispatchStage, error: Exception) -> "DispatchOutcome":
        return cls(status=DispatchStatus.failed, failed_stage=stage, error=str(error) or type(error).__name__)

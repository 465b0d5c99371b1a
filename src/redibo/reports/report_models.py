"""Pydantic models for renter abuse reports."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

MAX_ADDITIONAL_INFO_LENGTH = 200
DAILY_REPORT_LIMIT = 2  # enforced server-side; shown in messages only


class ReportReason(str, Enum):
    FALSE_INFORMATION = "información_falsa"
    INAPPROPRIATE_BEHAVIOR = "comportamiento_inapropiado"
    PROPERTY_DAMAGE = "daños_propiedad"
    RULES_BREACH = "incumplimiento_normas"
    OTHER = "otro"


REASON_LABELS = {
    ReportReason.FALSE_INFORMATION: "Información falsa en el perfil",
    ReportReason.INAPPROPRIATE_BEHAVIOR: "Comportamiento inapropiado",
    ReportReason.PROPERTY_DAMAGE: "Daños a la propiedad",
    ReportReason.RULES_BREACH: "Incumplimiento de normas",
    ReportReason.OTHER: "Otro motivo",
}


class ReportOutcome(str, Enum):
    SUBMITTED = "SUBMITTED"
    ALREADY_REPORTED = "ALREADY_REPORTED"
    DAILY_LIMIT_REACHED = "DAILY_LIMIT_REACHED"
    REJECTED = "REJECTED"


class ReportDraft(BaseModel):
    """A report about to be sent for one renter."""

    reported_id: str = Field(..., min_length=1, description="Id of the reported renter")
    reason: ReportReason = Field(..., description="Reason picked from the fixed catalogue")
    additional_info: str = Field(
        default="",
        max_length=MAX_ADDITIONAL_INFO_LENGTH,
        description="Free-text details shown to moderators",
    )

    @field_validator("reported_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if isinstance(value, int) else value

    def to_payload(self) -> dict:
        return {
            "id_reportado": self.reported_id,
            "motivo": self.reason.value,
            "informacion_adicional": self.additional_info,
        }


class ReportSubmission(BaseModel):
    """What the server said about a submitted report."""

    outcome: ReportOutcome
    status_code: Optional[int] = None
    message: str = ""

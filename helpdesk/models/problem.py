from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from helpdesk.core.exceptions import ValidationError

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Urgency(str, Enum):
    """Severity tag of a problem report."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def normalize(cls, value: str) -> "Urgency":
        """Map a case-insensitive label, English or Spanish, to its canonical member.

        Raises:
            ValidationError: If the label is not a known urgency level.
        """
        key = (value or "").strip().lower()
        try:
            return _URGENCY_LABELS[key]
        except KeyError:
            raise ValidationError(f"Invalid urgency level: {value!r}") from None


_URGENCY_LABELS = {
    "low": Urgency.LOW,
    "medium": Urgency.MEDIUM,
    "high": Urgency.HIGH,
    "baja": Urgency.LOW,
    "media": Urgency.MEDIUM,
    "alta": Urgency.HIGH,
}


class ProblemCreateRequest(BaseModel):
    title: Text
    description: Text
    category: Text
    urgency: Text


class ProblemReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    category: str
    urgency: Urgency
    created_at: datetime


class ProblemResponse(BaseModel):
    success: bool = True
    message: str
    problem: ProblemReport

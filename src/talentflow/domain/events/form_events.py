"""
Events emitted by an assessment-taking session for the UI layer.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class FormEventType(str, Enum):
    """Kinds of session events."""

    FIELD_CHANGE = "field_change"
    FIELD_BLUR = "field_blur"
    SECTION_CHANGE = "section_change"
    VALIDATION_ERROR = "validation_error"
    SUBMISSION_START = "submission_start"
    SUBMISSION_SUCCESS = "submission_success"
    SUBMISSION_ERROR = "submission_error"
    AUTO_SAVE = "auto_save"


@dataclass
class FormEvent:
    """Event raised on every session transition."""

    type: FormEventType
    question_id: Optional[str] = None
    section_index: Optional[int] = None
    value: Any = None
    error: Optional[str] = None
    occurred_at: Optional[datetime] = None

    def __post_init__(self):
        if self.occurred_at is None:
            self.occurred_at = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "question_id": self.question_id,
            "section_index": self.section_index,
            "value": self.value,
            "error": self.error,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass
class AssessmentSubmitted:
    """Event raised when a candidate response is submitted."""

    response_id: str
    candidate_id: str
    assessment_id: str
    total_answers: int
    occurred_at: Optional[datetime] = None

    def __post_init__(self):
        if self.occurred_at is None:
            self.occurred_at = datetime.utcnow()

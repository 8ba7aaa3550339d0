"""DTOs for assessment authoring and stateless evaluation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SaveAssessmentRequest:
    """Request DTO for creating or replacing an assessment."""

    payload: Dict[str, Any]
    assessment_id: Optional[str] = None  # None creates a new assessment


@dataclass
class SaveAssessmentResponse:
    """Response DTO for a saved assessment."""

    assessment_id: str
    total_sections: int
    total_questions: int
    message: str
    assessment: Optional[dict] = None


@dataclass
class EvaluateResponsesRequest:
    """Request DTO for evaluating an in-progress response set."""

    assessment_id: str
    responses: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EvaluateResponsesResponse:
    """Response DTO with resolved state, errors and completion."""

    assessment_id: str
    conditional_states: Dict[str, Dict[str, bool]]
    errors: Dict[str, str]
    completion_percentage: int
    section_completion: Dict[str, int]
    visible_question_ids: List[str]
    submittable: bool

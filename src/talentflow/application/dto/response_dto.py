"""DTOs for candidate responses and assessment-taking sessions."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...domain.entities.assessment_response import AssessmentResponse


@dataclass
class SaveDraftRequest:
    """Request DTO for saving a draft."""

    candidate_id: str
    assessment_id: str
    responses: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SubmitResponseRequest:
    """Request DTO for submitting a response set."""

    candidate_id: str
    assessment_id: str
    responses: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResponseSummaryDTO:
    """Summary of a persisted response."""

    response_id: str
    candidate_id: str
    assessment_id: str
    status: str
    total_answers: int
    submitted_at: Optional[str]
    updated_at: str
    message: str = ""

    @classmethod
    def from_entity(
        cls, response: AssessmentResponse, message: str = ""
    ) -> "ResponseSummaryDTO":
        return cls(
            response_id=response.id,
            candidate_id=response.candidate_id,
            assessment_id=response.assessment_id,
            status=response.status,
            total_answers=len(response.responses),
            submitted_at=(
                response.submitted_at.isoformat() if response.submitted_at else None
            ),
            updated_at=response.updated_at.isoformat(),
            message=message,
        )


@dataclass
class ListResponsesRequest:
    """Filter for listing responses; at least one id must be given."""

    candidate_id: Optional[str] = None
    assessment_id: Optional[str] = None


@dataclass
class ExportedAnswerDTO:
    """One answered question in an export."""

    question_id: str
    title: str
    type: str
    value: Any


@dataclass
class ResponseExportDTO:
    """JSON export of a response."""

    response_id: str
    candidate_id: str
    assessment_id: str
    assessment_title: str
    status: str
    submitted_at: Optional[str]
    answers: List[ExportedAnswerDTO]


@dataclass
class StartSessionRequest:
    """Request DTO for opening an assessment-taking session."""

    candidate_id: str
    assessment_id: str
    preview: bool = False


@dataclass
class StartSessionResponse:
    """Response DTO for an opened session."""

    session_id: str
    resumed_draft: bool
    state: Dict[str, Any]

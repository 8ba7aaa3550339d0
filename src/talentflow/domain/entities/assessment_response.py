"""Candidate response to an assessment, persisted as draft, submitted or reviewed."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import InvalidStatusTransitionError
from ..value_objects.question_types import ResponseStatus
from ..value_objects.identifiers import ResponseId
from .assessment import Assessment


@dataclass
class QuestionResponse:
    """Answer to a single question."""

    question_id: str
    value: Any
    type: str


@dataclass
class AssessmentResponse:
    """Assessment response domain entity."""

    response_id: ResponseId
    candidate_id: str
    assessment_id: str
    responses: List[QuestionResponse] = field(default_factory=list)
    status: str = ResponseStatus.DRAFT.value  # draft, submitted, reviewed
    submitted_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def id(self) -> str:
        return self.response_id.value

    def replace_answers(self, assessment: Assessment, answers: Dict[str, Any]) -> None:
        """Replace stored answers with a responses map (question id -> value)."""
        if self.status != ResponseStatus.DRAFT:
            raise InvalidStatusTransitionError(self.status, ResponseStatus.DRAFT.value)

        self.responses = build_question_responses(assessment, answers)
        self.updated_at = datetime.utcnow()

    def submit(self) -> None:
        """Mark the response as submitted."""
        if self.status != ResponseStatus.DRAFT:
            raise InvalidStatusTransitionError(
                self.status, ResponseStatus.SUBMITTED.value
            )

        self.status = ResponseStatus.SUBMITTED.value
        self.submitted_at = datetime.utcnow()
        self.updated_at = self.submitted_at

    def mark_reviewed(self) -> None:
        """Mark a submitted response as reviewed by staff."""
        if self.status != ResponseStatus.SUBMITTED:
            raise InvalidStatusTransitionError(
                self.status, ResponseStatus.REVIEWED.value
            )

        self.status = ResponseStatus.REVIEWED.value
        self.updated_at = datetime.utcnow()

    def is_draft(self) -> bool:
        return self.status == ResponseStatus.DRAFT

    def is_submitted(self) -> bool:
        """Submitted or already reviewed."""
        return self.status in (ResponseStatus.SUBMITTED, ResponseStatus.REVIEWED)

    def answers(self) -> Dict[str, Any]:
        """Responses as a question id -> value map."""
        return {r.question_id: r.value for r in self.responses}

    def get_details(self) -> Dict[str, Any]:
        """Get detailed response information."""
        return {
            "id": self.id,
            "candidate_id": self.candidate_id,
            "assessment_id": self.assessment_id,
            "status": self.status,
            "responses": [
                {"question_id": r.question_id, "value": r.value, "type": r.type}
                for r in self.responses
            ],
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


def build_question_responses(
    assessment: Assessment, answers: Dict[str, Any]
) -> List[QuestionResponse]:
    """Turn a responses map into ordered QuestionResponse records.

    Answers for question ids the assessment does not know are dropped.
    """
    records: List[QuestionResponse] = []
    for question in assessment.iter_questions():
        if question.id in answers:
            records.append(
                QuestionResponse(
                    question_id=question.id,
                    value=answers[question.id],
                    type=question.type,
                )
            )
    return records

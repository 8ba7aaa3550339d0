"""Evaluate Responses use case: stateless conditional state, errors and completion."""

from typing import Optional

from ...domain.services.conditional_state import evaluate_all
from ...domain.services.field_validators import FileConstraints
from ...domain.services.response_validator import (
    completion_percentage,
    is_submittable,
    section_completion_percentage,
    validate_all,
)
from ..dto.assessment_dto import EvaluateResponsesRequest, EvaluateResponsesResponse
from ..ports.repositories.assessment_repo import AssessmentRepository
from .get_assessment import GetAssessmentUseCase


class EvaluateResponsesUseCase:
    """Use case for evaluating an in-progress response set without a session."""

    def __init__(
        self,
        assessment_repository: AssessmentRepository,
        file_constraints: Optional[FileConstraints] = None,
    ):
        self._get_assessment = GetAssessmentUseCase(assessment_repository)
        self._file_constraints = file_constraints

    async def execute(
        self, request: EvaluateResponsesRequest
    ) -> EvaluateResponsesResponse:
        """Execute the evaluate responses use case."""
        assessment = await self._get_assessment.execute(request.assessment_id)
        responses = request.responses

        states = evaluate_all(assessment, responses)
        errors = validate_all(assessment, responses, states, self._file_constraints)

        return EvaluateResponsesResponse(
            assessment_id=assessment.id,
            conditional_states={qid: state.to_dict() for qid, state in states.items()},
            errors=errors,
            completion_percentage=completion_percentage(assessment, responses, states),
            section_completion={
                section.id: section_completion_percentage(section, responses, states)
                for section in assessment.ordered_sections()
            },
            visible_question_ids=[
                q.id for q in assessment.iter_questions() if states[q.id].visible
            ],
            submittable=is_submittable(errors),
        )

"""Submit Response use case: validate server-side and persist as submitted."""

import logging
from typing import Optional

from ...domain.entities.assessment_response import AssessmentResponse
from ...domain.errors import ResponseAlreadySubmittedError, ResponseValidationError
from ...domain.events.form_events import AssessmentSubmitted
from ...domain.services.conditional_state import resolve_and_prune
from ...domain.services.field_validators import FileConstraints
from ...domain.services.response_validator import validate_all
from ...domain.value_objects.identifiers import ResponseId
from ..dto.response_dto import ResponseSummaryDTO, SubmitResponseRequest
from ..ports.repositories.assessment_repo import AssessmentRepository
from ..ports.repositories.response_repo import AssessmentResponseRepository
from .get_assessment import GetAssessmentUseCase

logger = logging.getLogger(__name__)


class SubmitResponseUseCase:
    """Use case for submitting a candidate's answers."""

    def __init__(
        self,
        assessment_repository: AssessmentRepository,
        response_repository: AssessmentResponseRepository,
        file_constraints: Optional[FileConstraints] = None,
    ):
        self._get_assessment = GetAssessmentUseCase(assessment_repository)
        self._response_repository = response_repository
        self._file_constraints = file_constraints

    async def execute(self, request: SubmitResponseRequest) -> ResponseSummaryDTO:
        """Execute the submit response use case."""
        assessment = await self._get_assessment.execute(request.assessment_id)

        if await self._response_repository.has_submitted(
            request.candidate_id, assessment.id
        ):
            raise ResponseAlreadySubmittedError(request.candidate_id, assessment.id)

        # Never trust the caller's view of visibility; re-resolve from the answers.
        responses, states = resolve_and_prune(assessment, request.responses)
        errors = validate_all(assessment, responses, states, self._file_constraints)
        if errors:
            raise ResponseValidationError(errors)

        response = await self._response_repository.find_draft(
            request.candidate_id, assessment.id
        )
        if response is None:
            response = AssessmentResponse(
                response_id=ResponseId.generate(),
                candidate_id=request.candidate_id,
                assessment_id=assessment.id,
            )

        response.replace_answers(assessment, responses)
        response.submit()
        saved = await self._response_repository.save(response)

        event = AssessmentSubmitted(
            response_id=saved.id,
            candidate_id=saved.candidate_id,
            assessment_id=saved.assessment_id,
            total_answers=len(saved.responses),
        )
        logger.info(
            "Assessment %s submitted by candidate %s",
            event.assessment_id,
            event.candidate_id,
            extra={"response_id": event.response_id, "total_answers": event.total_answers},
        )

        return ResponseSummaryDTO.from_entity(
            saved, message="Assessment submitted successfully."
        )

"""Save Draft use case: create or update a candidate's draft response."""

import logging

from ...domain.entities.assessment_response import AssessmentResponse
from ...domain.errors import ResponseAlreadySubmittedError
from ...domain.value_objects.identifiers import ResponseId
from ..dto.response_dto import ResponseSummaryDTO, SaveDraftRequest
from ..ports.repositories.assessment_repo import AssessmentRepository
from ..ports.repositories.response_repo import AssessmentResponseRepository
from .get_assessment import GetAssessmentUseCase

logger = logging.getLogger(__name__)


class SaveDraftUseCase:
    """Use case for saving answers without validating them."""

    def __init__(
        self,
        assessment_repository: AssessmentRepository,
        response_repository: AssessmentResponseRepository,
    ):
        self._get_assessment = GetAssessmentUseCase(assessment_repository)
        self._response_repository = response_repository

    async def execute(self, request: SaveDraftRequest) -> ResponseSummaryDTO:
        """Execute the save draft use case."""
        assessment = await self._get_assessment.execute(request.assessment_id)

        if await self._response_repository.has_submitted(
            request.candidate_id, assessment.id
        ):
            raise ResponseAlreadySubmittedError(request.candidate_id, assessment.id)

        draft = await self._response_repository.find_draft(
            request.candidate_id, assessment.id
        )
        if draft is None:
            draft = AssessmentResponse(
                response_id=ResponseId.generate(),
                candidate_id=request.candidate_id,
                assessment_id=assessment.id,
            )

        draft.replace_answers(assessment, request.responses)
        saved = await self._response_repository.save(draft)
        logger.info(
            "Saved draft %s for candidate %s (%d answers)",
            saved.id,
            saved.candidate_id,
            len(saved.responses),
        )

        return ResponseSummaryDTO.from_entity(saved, message="Draft saved.")

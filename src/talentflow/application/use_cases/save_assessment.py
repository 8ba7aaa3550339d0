"""Save Assessment use case: create or replace an assessment document."""

import logging

from ...domain.entities.assessment import Assessment
from ...domain.errors import AssessmentNotFoundError, InvalidConditionalLogicError
from ...domain.services.dependency_check import validate_conditional_logic
from ...domain.value_objects.identifiers import AssessmentId
from ..dto.assessment_dto import SaveAssessmentRequest, SaveAssessmentResponse
from ..ports.repositories.assessment_repo import AssessmentRepository

logger = logging.getLogger(__name__)


class SaveAssessmentUseCase:
    """Use case for persisting an authored assessment."""

    def __init__(self, assessment_repository: AssessmentRepository):
        self._assessment_repository = assessment_repository

    async def execute(self, request: SaveAssessmentRequest) -> SaveAssessmentResponse:
        """Execute the save assessment use case."""
        payload = dict(request.payload)
        existing = None

        if request.assessment_id:
            try:
                key = AssessmentId.from_string(request.assessment_id)
            except ValueError:
                raise AssessmentNotFoundError(request.assessment_id)
            existing = await self._assessment_repository.find_by_id(key)
            if not existing:
                raise AssessmentNotFoundError(request.assessment_id)
            payload["id"] = request.assessment_id
        else:
            payload.pop("id", None)

        assessment = Assessment.from_dict(payload)

        # Rules may only point backwards, so cycles never reach the runtime.
        problems = validate_conditional_logic(assessment)
        if problems:
            raise InvalidConditionalLogicError(problems)

        if existing:
            assessment.created_at = existing.created_at
        assessment.touch()

        saved = await self._assessment_repository.save(assessment)
        logger.info(
            "Saved assessment %s (%s)", saved.id, "updated" if existing else "created"
        )

        return SaveAssessmentResponse(
            assessment_id=saved.id,
            total_sections=len(saved.sections),
            total_questions=len(saved.question_ids()),
            message="Assessment updated." if existing else "Assessment created.",
            assessment=saved.to_dict(),
        )

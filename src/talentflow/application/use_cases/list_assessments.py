"""List and delete assessments."""

import logging
from typing import List, Optional

from ...domain.entities.assessment import Assessment
from ...domain.errors import AssessmentNotFoundError
from ...domain.value_objects.identifiers import AssessmentId
from ..ports.repositories.assessment_repo import AssessmentRepository

logger = logging.getLogger(__name__)


class ListAssessmentsUseCase:
    """Use case for listing assessments, optionally for one job."""

    def __init__(self, assessment_repository: AssessmentRepository):
        self._assessment_repository = assessment_repository

    async def execute(
        self, job_id: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[Assessment]:
        return await self._assessment_repository.find_all(
            job_id=job_id, limit=limit, offset=offset
        )


class DeleteAssessmentUseCase:
    """Use case for deleting an assessment."""

    def __init__(self, assessment_repository: AssessmentRepository):
        self._assessment_repository = assessment_repository

    async def execute(self, assessment_id: str) -> None:
        try:
            key = AssessmentId.from_string(assessment_id)
        except ValueError:
            raise AssessmentNotFoundError(assessment_id)

        if not await self._assessment_repository.delete(key):
            raise AssessmentNotFoundError(assessment_id)
        logger.info("Deleted assessment %s", assessment_id)

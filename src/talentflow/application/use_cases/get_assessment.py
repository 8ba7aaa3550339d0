"""Get Assessment use case."""

from ...domain.entities.assessment import Assessment
from ...domain.errors import AssessmentNotFoundError
from ...domain.value_objects.identifiers import AssessmentId
from ..ports.repositories.assessment_repo import AssessmentRepository


class GetAssessmentUseCase:
    """Use case for loading one assessment."""

    def __init__(self, assessment_repository: AssessmentRepository):
        self._assessment_repository = assessment_repository

    async def execute(self, assessment_id: str) -> Assessment:
        try:
            key = AssessmentId.from_string(assessment_id)
        except ValueError:
            raise AssessmentNotFoundError(assessment_id)

        assessment = await self._assessment_repository.find_by_id(key)
        if not assessment:
            raise AssessmentNotFoundError(assessment_id)
        return assessment

"""Export Response use case: answers joined with their question titles."""

from ..dto.response_dto import ExportedAnswerDTO, ResponseExportDTO
from ..ports.repositories.assessment_repo import AssessmentRepository
from ..ports.repositories.response_repo import AssessmentResponseRepository
from .get_assessment import GetAssessmentUseCase
from .list_responses import GetResponseUseCase


class ExportResponseUseCase:
    """Use case for exporting a response as JSON-ready data."""

    def __init__(
        self,
        assessment_repository: AssessmentRepository,
        response_repository: AssessmentResponseRepository,
    ):
        self._get_assessment = GetAssessmentUseCase(assessment_repository)
        self._get_response = GetResponseUseCase(response_repository)

    async def execute(self, response_id: str) -> ResponseExportDTO:
        response = await self._get_response.execute(response_id)
        assessment = await self._get_assessment.execute(response.assessment_id)

        answers = []
        for record in response.responses:
            question = assessment.find_question(record.question_id)
            answers.append(
                ExportedAnswerDTO(
                    question_id=record.question_id,
                    # questions removed after answering keep their id as title
                    title=question.title if question else record.question_id,
                    type=record.type,
                    value=record.value,
                )
            )

        return ResponseExportDTO(
            response_id=response.id,
            candidate_id=response.candidate_id,
            assessment_id=response.assessment_id,
            assessment_title=assessment.title,
            status=response.status,
            submitted_at=(
                response.submitted_at.isoformat() if response.submitted_at else None
            ),
            answers=answers,
        )

"""Review Response use case: staff marks a submitted response as reviewed."""

from ...domain.errors import ResponseNotFoundError
from ...domain.value_objects.identifiers import ResponseId
from ..dto.response_dto import ResponseSummaryDTO
from ..ports.repositories.response_repo import AssessmentResponseRepository


class ReviewResponseUseCase:
    """Use case for reviewing a submitted response."""

    def __init__(self, response_repository: AssessmentResponseRepository):
        self._response_repository = response_repository

    async def execute(self, response_id: str) -> ResponseSummaryDTO:
        try:
            key = ResponseId.from_string(response_id)
        except ValueError:
            raise ResponseNotFoundError(response_id)

        response = await self._response_repository.find_by_id(key)
        if not response:
            raise ResponseNotFoundError(response_id)

        response.mark_reviewed()
        saved = await self._response_repository.save(response)
        return ResponseSummaryDTO.from_entity(saved, message="Response reviewed.")

"""List and fetch candidate responses."""

from typing import List

from ...domain.entities.assessment_response import AssessmentResponse
from ...domain.errors import DomainError, ResponseNotFoundError
from ...domain.value_objects.identifiers import ResponseId
from ..dto.response_dto import ListResponsesRequest
from ..ports.repositories.response_repo import AssessmentResponseRepository


class GetResponseUseCase:
    """Use case for loading one response."""

    def __init__(self, response_repository: AssessmentResponseRepository):
        self._response_repository = response_repository

    async def execute(self, response_id: str) -> AssessmentResponse:
        try:
            key = ResponseId.from_string(response_id)
        except ValueError:
            raise ResponseNotFoundError(response_id)

        response = await self._response_repository.find_by_id(key)
        if not response:
            raise ResponseNotFoundError(response_id)
        return response


class ListResponsesUseCase:
    """Use case for listing responses by candidate and/or assessment."""

    def __init__(self, response_repository: AssessmentResponseRepository):
        self._response_repository = response_repository

    async def execute(self, request: ListResponsesRequest) -> List[AssessmentResponse]:
        if request.candidate_id:
            responses = await self._response_repository.find_by_candidate(
                request.candidate_id
            )
            if request.assessment_id:
                responses = [
                    r for r in responses if r.assessment_id == request.assessment_id
                ]
        elif request.assessment_id:
            responses = await self._response_repository.find_by_assessment(
                request.assessment_id
            )
        else:
            raise DomainError(
                "Either candidate_id or assessment_id is required",
                "MISSING_FILTER",
            )

        return sorted(responses, key=lambda r: r.updated_at, reverse=True)

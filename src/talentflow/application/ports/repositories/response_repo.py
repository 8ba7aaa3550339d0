"""Assessment response repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ....domain.entities.assessment_response import AssessmentResponse
from ....domain.value_objects.identifiers import ResponseId


class AssessmentResponseRepository(ABC):
    """Abstract repository for candidate responses."""

    @abstractmethod
    async def save(self, response: AssessmentResponse) -> AssessmentResponse:
        """Create or replace a response."""
        pass

    @abstractmethod
    async def find_by_id(self, response_id: ResponseId) -> Optional[AssessmentResponse]:
        """Find a response by ID."""
        pass

    @abstractmethod
    async def find_by_candidate(self, candidate_id: str) -> List[AssessmentResponse]:
        """All responses of one candidate."""
        pass

    @abstractmethod
    async def find_by_assessment(self, assessment_id: str) -> List[AssessmentResponse]:
        """All responses to one assessment."""
        pass

    async def find_draft(
        self, candidate_id: str, assessment_id: str
    ) -> Optional[AssessmentResponse]:
        """The candidate's draft for an assessment, if any."""
        for response in await self.find_by_candidate(candidate_id):
            if response.assessment_id == assessment_id and response.is_draft():
                return response
        return None

    async def has_submitted(self, candidate_id: str, assessment_id: str) -> bool:
        """Whether the candidate already submitted this assessment."""
        return any(
            response.assessment_id == assessment_id and response.is_submitted()
            for response in await self.find_by_candidate(candidate_id)
        )

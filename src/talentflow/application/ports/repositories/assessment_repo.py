"""Assessment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ....domain.entities.assessment import Assessment
from ....domain.value_objects.identifiers import AssessmentId


class AssessmentRepository(ABC):
    """Abstract repository for assessment documents."""

    @abstractmethod
    async def save(self, assessment: Assessment) -> Assessment:
        """Create or replace an assessment."""
        pass

    @abstractmethod
    async def find_by_id(self, assessment_id: AssessmentId) -> Optional[Assessment]:
        """Find an assessment by ID."""
        pass

    @abstractmethod
    async def find_all(
        self, job_id: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[Assessment]:
        """List assessments, optionally for one job."""
        pass

    @abstractmethod
    async def delete(self, assessment_id: AssessmentId) -> bool:
        """Delete an assessment by ID."""
        pass

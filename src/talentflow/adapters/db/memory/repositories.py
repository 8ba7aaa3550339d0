"""
In-process repositories, used as the local store behind the Mongo fallback and in tests.
"""

import copy
from typing import Dict, List, Optional

from talentflow.application.ports.repositories.assessment_repo import AssessmentRepository
from talentflow.application.ports.repositories.response_repo import (
    AssessmentResponseRepository,
)
from talentflow.domain.entities.assessment import Assessment
from talentflow.domain.entities.assessment_response import AssessmentResponse
from talentflow.domain.value_objects.identifiers import AssessmentId, ResponseId


class InMemoryAssessmentRepository(AssessmentRepository):
    """Assessments kept in a dict; entities are copied in and out."""

    def __init__(self):
        self._items: Dict[str, Assessment] = {}

    async def save(self, assessment: Assessment) -> Assessment:
        self._items[assessment.id] = copy.deepcopy(assessment)
        return copy.deepcopy(assessment)

    async def find_by_id(self, assessment_id: AssessmentId) -> Optional[Assessment]:
        item = self._items.get(assessment_id.value)
        return copy.deepcopy(item) if item else None

    async def find_all(
        self, job_id: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[Assessment]:
        items = [
            item
            for item in self._items.values()
            if job_id is None or item.job_id == job_id
        ]
        items.sort(key=lambda a: a.created_at, reverse=True)
        return [copy.deepcopy(item) for item in items[offset : offset + limit]]

    async def delete(self, assessment_id: AssessmentId) -> bool:
        return self._items.pop(assessment_id.value, None) is not None


class InMemoryAssessmentResponseRepository(AssessmentResponseRepository):
    """Responses kept in a dict; entities are copied in and out."""

    def __init__(self):
        self._items: Dict[str, AssessmentResponse] = {}

    async def save(self, response: AssessmentResponse) -> AssessmentResponse:
        self._items[response.id] = copy.deepcopy(response)
        return copy.deepcopy(response)

    async def find_by_id(self, response_id: ResponseId) -> Optional[AssessmentResponse]:
        item = self._items.get(response_id.value)
        return copy.deepcopy(item) if item else None

    async def find_by_candidate(self, candidate_id: str) -> List[AssessmentResponse]:
        return [
            copy.deepcopy(item)
            for item in self._items.values()
            if item.candidate_id == candidate_id
        ]

    async def find_by_assessment(self, assessment_id: str) -> List[AssessmentResponse]:
        return [
            copy.deepcopy(item)
            for item in self._items.values()
            if item.assessment_id == assessment_id
        ]

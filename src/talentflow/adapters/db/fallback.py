"""
Repositories that prefer the remote store and fall back to the local one.

Writes go to the remote store first; when it fails the local store takes the
write instead and the failure is logged. Lookups by id read the local store
first so records written while the remote was down stay reachable. Listings
merge both stores, local copies winning for the same id.
"""

import logging
from typing import List, Optional

from talentflow.application.ports.repositories.assessment_repo import AssessmentRepository
from talentflow.application.ports.repositories.response_repo import (
    AssessmentResponseRepository,
)
from talentflow.domain.entities.assessment import Assessment
from talentflow.domain.entities.assessment_response import AssessmentResponse
from talentflow.domain.value_objects.identifiers import AssessmentId, ResponseId

logger = logging.getLogger(__name__)


class FallbackAssessmentRepository(AssessmentRepository):
    """Assessment repository over a remote and a local store."""

    def __init__(self, remote: AssessmentRepository, local: AssessmentRepository):
        self._remote = remote
        self._local = local

    async def save(self, assessment: Assessment) -> Assessment:
        try:
            saved = await self._remote.save(assessment)
        except Exception:
            logger.warning(
                "Remote save of assessment %s failed, keeping it locally",
                assessment.id,
                exc_info=True,
            )
            return await self._local.save(assessment)

        # Drop any stale local copy so lookups see the remote version.
        await self._local.delete(assessment.assessment_id)
        return saved

    async def find_by_id(self, assessment_id: AssessmentId) -> Optional[Assessment]:
        local = await self._local.find_by_id(assessment_id)
        if local:
            return local
        try:
            return await self._remote.find_by_id(assessment_id)
        except Exception:
            logger.warning(
                "Remote lookup of assessment %s failed", assessment_id, exc_info=True
            )
            return None

    async def find_all(
        self, job_id: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[Assessment]:
        try:
            remote = await self._remote.find_all(job_id=job_id, limit=offset + limit)
        except Exception:
            logger.warning("Remote listing of assessments failed", exc_info=True)
            remote = []
        local = await self._local.find_all(job_id=job_id, limit=offset + limit)

        merged = {item.id: item for item in remote}
        merged.update({item.id: item for item in local})
        items = sorted(merged.values(), key=lambda a: a.created_at, reverse=True)
        return items[offset : offset + limit]

    async def delete(self, assessment_id: AssessmentId) -> bool:
        deleted_locally = await self._local.delete(assessment_id)
        try:
            deleted_remotely = await self._remote.delete(assessment_id)
        except Exception:
            logger.warning(
                "Remote delete of assessment %s failed", assessment_id, exc_info=True
            )
            deleted_remotely = False
        return deleted_locally or deleted_remotely


class FallbackAssessmentResponseRepository(AssessmentResponseRepository):
    """Response repository over a remote and a local store."""

    def __init__(
        self,
        remote: AssessmentResponseRepository,
        local: AssessmentResponseRepository,
    ):
        self._remote = remote
        self._local = local

    async def save(self, response: AssessmentResponse) -> AssessmentResponse:
        try:
            saved = await self._remote.save(response)
        except Exception:
            logger.warning(
                "Remote save of response %s failed, keeping it locally",
                response.id,
                exc_info=True,
            )
            return await self._local.save(response)

        # Keep the local copy in step if one was written during an outage.
        if await self._local.find_by_id(response.response_id):
            await self._local.save(response)
        return saved

    async def find_by_id(self, response_id: ResponseId) -> Optional[AssessmentResponse]:
        local = await self._local.find_by_id(response_id)
        if local:
            return local
        try:
            return await self._remote.find_by_id(response_id)
        except Exception:
            logger.warning(
                "Remote lookup of response %s failed", response_id, exc_info=True
            )
            return None

    async def find_by_candidate(self, candidate_id: str) -> List[AssessmentResponse]:
        try:
            remote = await self._remote.find_by_candidate(candidate_id)
        except Exception:
            logger.warning(
                "Remote listing for candidate %s failed", candidate_id, exc_info=True
            )
            remote = []
        return self._merge(remote, await self._local.find_by_candidate(candidate_id))

    async def find_by_assessment(self, assessment_id: str) -> List[AssessmentResponse]:
        try:
            remote = await self._remote.find_by_assessment(assessment_id)
        except Exception:
            logger.warning(
                "Remote listing for assessment %s failed", assessment_id, exc_info=True
            )
            remote = []
        return self._merge(remote, await self._local.find_by_assessment(assessment_id))

    @staticmethod
    def _merge(
        remote: List[AssessmentResponse], local: List[AssessmentResponse]
    ) -> List[AssessmentResponse]:
        merged = {item.id: item for item in remote}
        merged.update({item.id: item for item in local})
        return list(merged.values())

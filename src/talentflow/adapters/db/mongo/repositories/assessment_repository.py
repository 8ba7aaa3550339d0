"""
MongoDB implementation of AssessmentRepository.
"""

from typing import List, Optional

from talentflow.application.ports.repositories.assessment_repo import AssessmentRepository
from talentflow.domain.entities.assessment import Assessment, AssessmentSection
from talentflow.domain.value_objects.identifiers import AssessmentId

from ..models.assessment_m import AssessmentMongo, AssessmentSectionMongo


class MongoAssessmentRepository(AssessmentRepository):
    """MongoDB implementation of AssessmentRepository."""

    async def save(self, assessment: Assessment) -> Assessment:
        """Save an assessment to MongoDB."""
        assessment_mongo = await self._domain_to_mongo(assessment)
        await assessment_mongo.save()
        return self._mongo_to_domain(assessment_mongo)

    async def find_by_id(self, assessment_id: AssessmentId) -> Optional[Assessment]:
        """Find an assessment by ID."""
        assessment_mongo = await AssessmentMongo.find_one(
            AssessmentMongo.assessment_id == assessment_id.value
        )

        if not assessment_mongo:
            return None

        return self._mongo_to_domain(assessment_mongo)

    async def find_all(
        self, job_id: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[Assessment]:
        """Find assessments with pagination, newest first."""
        query = (
            AssessmentMongo.find(AssessmentMongo.job_id == job_id)
            if job_id
            else AssessmentMongo.find()
        )
        assessments_mongo = (
            await query.sort(-AssessmentMongo.created_at).skip(offset).limit(limit).to_list()
        )
        return [self._mongo_to_domain(item) for item in assessments_mongo]

    async def delete(self, assessment_id: AssessmentId) -> bool:
        """Delete an assessment by ID."""
        assessment_mongo = await AssessmentMongo.find_one(
            AssessmentMongo.assessment_id == assessment_id.value
        )
        if not assessment_mongo:
            return False

        await assessment_mongo.delete()
        return True

    async def _domain_to_mongo(self, assessment: Assessment) -> AssessmentMongo:
        """Convert domain entity to MongoDB model."""
        sections_mongo = [
            AssessmentSectionMongo.model_validate(section.to_dict())
            for section in assessment.sections
        ]

        existing = await AssessmentMongo.find_one(
            AssessmentMongo.assessment_id == assessment.id
        )
        if existing:
            existing.title = assessment.title
            existing.description = assessment.description
            existing.job_id = assessment.job_id
            existing.sections = sections_mongo
            existing.updated_at = assessment.updated_at
            return existing

        return AssessmentMongo(
            assessment_id=assessment.id,
            title=assessment.title,
            description=assessment.description,
            job_id=assessment.job_id,
            sections=sections_mongo,
            created_at=assessment.created_at,
            updated_at=assessment.updated_at,
        )

    def _mongo_to_domain(self, assessment_mongo: AssessmentMongo) -> Assessment:
        """Convert MongoDB model to domain entity."""
        return Assessment(
            assessment_id=AssessmentId(assessment_mongo.assessment_id),
            title=assessment_mongo.title,
            description=assessment_mongo.description,
            job_id=assessment_mongo.job_id,
            sections=[
                AssessmentSection.from_dict(section.model_dump())
                for section in assessment_mongo.sections
            ],
            created_at=assessment_mongo.created_at,
            updated_at=assessment_mongo.updated_at,
        )

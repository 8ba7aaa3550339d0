"""
MongoDB implementation of AssessmentResponseRepository.
"""

from typing import List, Optional

from talentflow.application.ports.repositories.response_repo import (
    AssessmentResponseRepository,
)
from talentflow.domain.entities.assessment_response import (
    AssessmentResponse,
    QuestionResponse,
)
from talentflow.domain.value_objects.identifiers import ResponseId

from ..models.assessment_m import AssessmentResponseMongo, QuestionResponseMongo


class MongoAssessmentResponseRepository(AssessmentResponseRepository):
    """MongoDB implementation of AssessmentResponseRepository."""

    async def save(self, response: AssessmentResponse) -> AssessmentResponse:
        """Save a response to MongoDB."""
        response_mongo = await self._domain_to_mongo(response)
        await response_mongo.save()
        return self._mongo_to_domain(response_mongo)

    async def find_by_id(self, response_id: ResponseId) -> Optional[AssessmentResponse]:
        """Find a response by ID."""
        response_mongo = await AssessmentResponseMongo.find_one(
            AssessmentResponseMongo.response_id == response_id.value
        )

        if not response_mongo:
            return None

        return self._mongo_to_domain(response_mongo)

    async def find_by_candidate(self, candidate_id: str) -> List[AssessmentResponse]:
        """Find all responses of a candidate."""
        responses_mongo = await AssessmentResponseMongo.find(
            AssessmentResponseMongo.candidate_id == candidate_id
        ).to_list()
        return [self._mongo_to_domain(item) for item in responses_mongo]

    async def find_by_assessment(self, assessment_id: str) -> List[AssessmentResponse]:
        """Find all responses to an assessment."""
        responses_mongo = await AssessmentResponseMongo.find(
            AssessmentResponseMongo.assessment_id == assessment_id
        ).to_list()
        return [self._mongo_to_domain(item) for item in responses_mongo]

    async def _domain_to_mongo(
        self, response: AssessmentResponse
    ) -> AssessmentResponseMongo:
        """Convert domain entity to MongoDB model."""
        answers_mongo = [
            QuestionResponseMongo(
                question_id=answer.question_id, value=answer.value, type=answer.type
            )
            for answer in response.responses
        ]

        existing = await AssessmentResponseMongo.find_one(
            AssessmentResponseMongo.response_id == response.id
        )
        if existing:
            existing.responses = answers_mongo
            existing.status = response.status
            existing.submitted_at = response.submitted_at
            existing.updated_at = response.updated_at
            return existing

        return AssessmentResponseMongo(
            response_id=response.id,
            candidate_id=response.candidate_id,
            assessment_id=response.assessment_id,
            responses=answers_mongo,
            status=response.status,
            submitted_at=response.submitted_at,
            created_at=response.created_at,
            updated_at=response.updated_at,
        )

    def _mongo_to_domain(
        self, response_mongo: AssessmentResponseMongo
    ) -> AssessmentResponse:
        """Convert MongoDB model to domain entity."""
        return AssessmentResponse(
            response_id=ResponseId(response_mongo.response_id),
            candidate_id=response_mongo.candidate_id,
            assessment_id=response_mongo.assessment_id,
            responses=[
                QuestionResponse(
                    question_id=answer.question_id,
                    value=answer.value,
                    type=answer.type,
                )
                for answer in response_mongo.responses
            ],
            status=response_mongo.status,
            submitted_at=response_mongo.submitted_at,
            created_at=response_mongo.created_at,
            updated_at=response_mongo.updated_at,
        )

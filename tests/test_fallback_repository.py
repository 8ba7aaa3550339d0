from __future__ import annotations

import asyncio

from talentflow.adapters.db.fallback import (
    FallbackAssessmentRepository,
    FallbackAssessmentResponseRepository,
)
from talentflow.adapters.db.memory.repositories import (
    InMemoryAssessmentRepository,
    InMemoryAssessmentResponseRepository,
)
from talentflow.domain.entities.assessment_response import AssessmentResponse
from talentflow.domain.value_objects.identifiers import ResponseId


class BrokenRepository:
    """Stands in for a remote store that is down."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise ConnectionError("remote store down")

        return fail


def test_assessment_writes_fall_back_to_local(screening):
    local = InMemoryAssessmentRepository()
    repo = FallbackAssessmentRepository(BrokenRepository(), local)

    async def scenario():
        await repo.save(screening)
        found = await repo.find_by_id(screening.assessment_id)
        listed = await repo.find_all()
        deleted = await repo.delete(screening.assessment_id)
        return found, listed, deleted

    found, listed, deleted = asyncio.run(scenario())

    assert found is not None and found.id == screening.id
    assert [a.id for a in listed] == [screening.id]
    assert deleted is True


def test_remote_is_used_when_healthy(screening):
    remote = InMemoryAssessmentRepository()
    local = InMemoryAssessmentRepository()
    repo = FallbackAssessmentRepository(remote, local)

    asyncio.run(repo.save(screening))

    assert asyncio.run(remote.find_by_id(screening.assessment_id)) is not None
    assert asyncio.run(local.find_by_id(screening.assessment_id)) is None
    assert asyncio.run(repo.find_by_id(screening.assessment_id)) is not None


def test_listing_merges_both_stores(screening):
    remote = InMemoryAssessmentRepository()
    local = InMemoryAssessmentRepository()
    repo = FallbackAssessmentRepository(remote, local)
    other = type(screening).from_dict({"title": "Second", "sections": []})

    asyncio.run(remote.save(screening))
    asyncio.run(local.save(other))

    ids = {a.id for a in asyncio.run(repo.find_all())}
    assert ids == {screening.id, other.id}


def test_response_lookups_survive_a_remote_outage(screening):
    local = InMemoryAssessmentResponseRepository()
    repo = FallbackAssessmentResponseRepository(BrokenRepository(), local)
    response = AssessmentResponse(
        response_id=ResponseId.generate(), candidate_id="c1", assessment_id=screening.id
    )

    async def scenario():
        await repo.save(response)
        return (
            await repo.find_by_id(response.response_id),
            await repo.find_by_candidate("c1"),
            await repo.find_by_assessment(screening.id),
            await repo.find_draft("c1", screening.id),
        )

    by_id, by_candidate, by_assessment, draft = asyncio.run(scenario())

    assert by_id.id == response.id
    assert [r.id for r in by_candidate] == [response.id]
    assert [r.id for r in by_assessment] == [response.id]
    assert draft.id == response.id

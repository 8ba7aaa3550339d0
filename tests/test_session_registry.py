from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest

from talentflow.application.session.assessment_session import AssessmentSession, FormConfig
from talentflow.application.session.session_registry import (
    MAX_RECORDED_EVENTS,
    SessionHandle,
    SessionRegistry,
)
from talentflow.domain.errors import SessionNotFoundError
from talentflow.domain.events.form_events import FormEvent, FormEventType

from tests.test_assessment_session import RecordingPersistence


def test_register_get_close(screening):
    registry = SessionRegistry()
    handle = registry.register(
        SessionHandle(
            session_id=registry.new_session_id(),
            candidate_id="c1",
            session=AssessmentSession(screening, RecordingPersistence()),
        )
    )

    assert registry.get(handle.session_id) is handle
    assert len(registry) == 1

    registry.close(handle.session_id)
    assert len(registry) == 0
    with pytest.raises(SessionNotFoundError):
        registry.get(handle.session_id)
    with pytest.raises(SessionNotFoundError):
        registry.close(handle.session_id)


def test_recorded_events_are_capped(screening):
    handle = SessionHandle(
        session_id="s", candidate_id="c1", session=AssessmentSession(screening, RecordingPersistence())
    )
    for index in range(MAX_RECORDED_EVENTS + 5):
        handle.record(FormEvent(FormEventType.SECTION_CHANGE, section_index=index))

    assert len(handle.events) == MAX_RECORDED_EVENTS
    assert handle.events[-1].section_index == MAX_RECORDED_EVENTS + 4

    mark = handle.event_count
    handle.record(FormEvent(FormEventType.AUTO_SAVE))
    assert [e.type for e in handle.events_since(mark)] == [FormEventType.AUTO_SAVE]
    assert handle.events_since(handle.event_count) == []


def _handle(assessment, session_id: str, **config) -> SessionHandle:
    return SessionHandle(
        session_id=session_id,
        candidate_id="c1",
        session=AssessmentSession(
            assessment, RecordingPersistence(), config=FormConfig(**config)
        ),
    )


def test_submitted_and_idle_sessions_are_evicted(screening):
    registry = SessionRegistry(idle_timeout_seconds=60)
    idle = registry.register(_handle(screening, "idle"))
    done = registry.register(_handle(screening, "done"))
    live = registry.register(_handle(screening, "live"))

    done.session.field_change("q1", "no")
    assert asyncio.run(done.session.submit()) is True
    idle.last_activity = datetime.utcnow() - timedelta(seconds=120)

    assert registry.evict_expired() == 2
    assert len(registry) == 1
    assert registry.get("live") is live
    with pytest.raises(SessionNotFoundError):
        registry.get("idle")


def test_registering_sweeps_expired_sessions(screening):
    registry = SessionRegistry(idle_timeout_seconds=60)
    stale = registry.register(_handle(screening, "stale"))
    stale.last_activity = datetime.utcnow() - timedelta(minutes=5)

    registry.register(_handle(screening, "fresh"))

    assert len(registry) == 1
    registry.get("fresh")


def test_access_keeps_a_session_alive(screening):
    registry = SessionRegistry(idle_timeout_seconds=60)
    handle = registry.register(_handle(screening, "s1"))
    handle.last_activity = datetime.utcnow() - timedelta(seconds=50)

    registry.get("s1")

    assert registry.evict_expired(now=datetime.utcnow() + timedelta(seconds=30)) == 0


def test_closing_cancels_auto_save(screening):
    async def scenario():
        registry = SessionRegistry()
        handle = registry.register(
            _handle(screening, "s1", auto_save=True, auto_save_interval_seconds=60)
        )
        handle.start_auto_save()
        task = handle.auto_save_task
        registry.close("s1")
        await asyncio.gather(task, return_exceptions=True)
        return handle, task

    handle, task = asyncio.run(scenario())

    assert task.cancelled()
    assert handle.auto_save_task is None

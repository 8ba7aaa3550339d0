from __future__ import annotations

import asyncio
from typing import Any

import pytest

from talentflow.application.ports.services.response_persistence import ResponsePersistence
from talentflow.application.session.assessment_session import (
    SUBMIT_BLOCKED_MESSAGE,
    AssessmentSession,
    FormConfig,
    SessionStatus,
)
from talentflow.domain.errors import QuestionNotFoundError, SessionClosedError
from talentflow.domain.events.form_events import FormEventType


class RecordingPersistence(ResponsePersistence):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.saved: list[dict[str, Any]] = []
        self.submitted: list[dict[str, Any]] = []

    async def save(self, responses):
        if self.fail:
            raise ConnectionError("store unavailable")
        self.saved.append(responses)

    async def submit(self, responses):
        if self.fail:
            raise ConnectionError("store unavailable")
        self.submitted.append(responses)


def _session(assessment, persistence=None, **config):
    events = []
    session = AssessmentSession(
        assessment,
        persistence or RecordingPersistence(),
        config=FormConfig(**config),
        on_event=events.append,
    )
    return session, events


def _types(events):
    return [event.type for event in events]


def test_hiding_an_answered_question_clears_answer_and_error(screening):
    session, _ = _session(screening, validate_on_change=True)
    session.field_change("q1", "yes")
    session.field_change("q2", "python")
    session.field_change("q3", 99)
    assert session.errors == {"q3": "Value must be at most 40"}

    session.field_change("q1", "no")

    assert session.responses == {"q1": "no"}
    assert session.errors == {}
    assert session.conditional_states["q2"].visible is False
    assert session.conditional_states["q3"].visible is False


def test_field_change_emits_event_and_marks_dirty(screening):
    session, events = _session(screening)
    session.field_change("q1", "yes")

    assert session.is_dirty
    assert _types(events) == [FormEventType.FIELD_CHANGE]
    assert events[0].question_id == "q1"
    assert events[0].value == "yes"


def test_changing_a_field_clears_its_previous_error(screening):
    session, _ = _session(screening)
    session.field_change("q1", "yes")
    assert session.field_blur("q2") == "This field is required"

    session.field_change("q2", "java")
    assert "q2" not in session.errors


def test_unknown_question_is_rejected(screening):
    session, _ = _session(screening)
    with pytest.raises(QuestionNotFoundError):
        session.field_change("nope", 1)


def test_blur_marks_touched_and_validates(screening):
    session, events = _session(screening)

    error = session.field_blur("q1")

    assert error == "This field is required"
    assert session.touched == {"q1": True}
    assert session.errors == {"q1": "This field is required"}
    assert _types(events) == [FormEventType.VALIDATION_ERROR, FormEventType.FIELD_BLUR]


def test_blur_without_blur_validation_only_touches(screening):
    session, events = _session(screening, validate_on_blur=False)

    assert session.field_blur("q1") is None
    assert session.errors == {}
    assert _types(events) == [FormEventType.FIELD_BLUR]


def test_forward_navigation_needs_a_complete_section(screening):
    session, events = _session(screening)

    assert session.section_change(1) is False
    assert session.current_section == 0
    assert session.errors == {"q1": "This field is required"}
    assert events[-1].type == FormEventType.VALIDATION_ERROR
    assert events[-1].section_index == 0

    session.field_change("q1", "no")
    assert session.section_change(1) is True
    assert session.current_section == 1
    assert events[-1].type == FormEventType.SECTION_CHANGE

    # backwards is always allowed
    assert session.section_change(0) is True


def test_navigation_without_enforcement_and_out_of_range(screening):
    session, _ = _session(screening, enforce_section_completion=False)

    assert session.section_change(1) is True
    assert session.section_change(5) is False
    assert session.section_change(-1) is False


def test_navigation_state(screening):
    session, _ = _session(screening)
    nav = session.navigation_state()
    assert (nav.can_go_next, nav.can_go_previous, nav.can_submit) == (False, False, False)

    session.field_change("q1", "no")
    nav = session.navigation_state()
    assert (nav.can_go_next, nav.can_submit) == (True, True)


def test_save_persists_snapshot_and_emits_auto_save(screening):
    persistence = RecordingPersistence()
    session, events = _session(screening, persistence)
    session.field_change("q1", "yes")

    assert asyncio.run(session.save()) is True

    assert persistence.saved == [{"q1": "yes"}]
    assert session.status == SessionStatus.EDITING
    assert not session.is_dirty
    assert events[-1].type == FormEventType.AUTO_SAVE


def test_save_with_no_answers_does_nothing(screening):
    persistence = RecordingPersistence()
    session, _ = _session(screening, persistence)

    assert asyncio.run(session.save()) is False
    assert persistence.saved == []


def test_failed_save_reports_and_returns_to_editing(screening):
    session, events = _session(screening, RecordingPersistence(fail=True))
    session.field_change("q1", "yes")

    assert asyncio.run(session.save()) is False

    assert session.status == SessionStatus.EDITING
    assert session.is_dirty
    assert events[-1].type == FormEventType.SUBMISSION_ERROR
    assert "store unavailable" in events[-1].error


def test_submit_blocked_by_validation_errors(screening):
    persistence = RecordingPersistence()
    session, events = _session(screening, persistence)
    session.field_change("q1", "yes")

    assert asyncio.run(session.submit()) is False

    assert session.errors == {"q2": "This field is required"}
    assert events[-1].type == FormEventType.VALIDATION_ERROR
    assert events[-1].error == SUBMIT_BLOCKED_MESSAGE
    assert persistence.submitted == []


def test_successful_submit_closes_the_session(screening):
    persistence = RecordingPersistence()
    session, events = _session(screening, persistence)
    session.field_change("q1", "yes")
    session.field_change("q2", "python")

    assert asyncio.run(session.submit()) is True

    assert persistence.submitted == [{"q1": "yes", "q2": "python"}]
    assert session.status == SessionStatus.SUBMITTED
    assert _types(events)[-2:] == [
        FormEventType.SUBMISSION_START,
        FormEventType.SUBMISSION_SUCCESS,
    ]
    with pytest.raises(SessionClosedError):
        session.field_change("q4", "late")
    assert asyncio.run(session.submit()) is False


def test_failed_submit_returns_to_editing(screening):
    session, events = _session(screening, RecordingPersistence(fail=True))
    session.field_change("q1", "no")

    assert asyncio.run(session.submit()) is False

    assert session.status == SessionStatus.EDITING
    assert events[-1].type == FormEventType.SUBMISSION_ERROR


def test_save_is_refused_while_another_save_is_in_flight(screening):
    class SlowPersistence(RecordingPersistence):
        async def save(self, responses):
            await asyncio.sleep(0.01)
            await super().save(responses)

    persistence = SlowPersistence()
    session, _ = _session(screening, persistence)
    session.field_change("q1", "yes")

    async def scenario():
        first = asyncio.create_task(session.save())
        await asyncio.sleep(0)
        assert session.is_busy
        # edits stay live while saving
        session.field_change("q2", "go")
        second = await session.save()
        return await first, second

    first, second = asyncio.run(scenario())

    assert (first, second) == (True, False)
    assert persistence.saved == [{"q1": "yes"}]
    # the edit made during the save is still unsaved
    assert session.is_dirty


def test_preview_refuses_persistence(screening):
    persistence = RecordingPersistence()
    session = AssessmentSession(screening, persistence, preview=True)
    session.field_change("q1", "no")

    assert session.status == SessionStatus.PREVIEWING
    assert asyncio.run(session.save()) is False
    assert asyncio.run(session.submit()) is False

    # opened as a preview, so it cannot switch itself into editing
    assert session.exit_preview() is False
    assert session.status == SessionStatus.PREVIEWING


def test_editing_session_can_preview_and_return(screening):
    session, _ = _session(screening)
    session.field_change("q1", "no")

    assert session.enter_preview() is True
    assert session.status == SessionStatus.PREVIEWING
    assert session.enter_preview() is False
    assert asyncio.run(session.submit()) is False

    assert session.exit_preview() is True
    assert asyncio.run(session.submit()) is True
    assert session.enter_preview() is False


def test_initial_responses_are_resolved_and_pruned(screening):
    session = AssessmentSession(
        screening,
        RecordingPersistence(),
        initial_responses={"q1": "no", "q2": "stale", "zz": 1},
    )
    assert session.responses == {"q1": "no"}
    assert session.completion_percentage() == 50


def test_auto_save_only_when_enabled_and_dirty(screening):
    persistence = RecordingPersistence()
    session, _ = _session(screening, persistence, auto_save=True)

    assert asyncio.run(session.auto_save_if_dirty()) is False
    session.field_change("q4", "notes")
    assert asyncio.run(session.auto_save_if_dirty()) is True
    assert asyncio.run(session.auto_save_if_dirty()) is False
    assert persistence.saved == [{"q4": "notes"}]


def test_auto_save_loop_saves_until_submitted(screening):
    persistence = RecordingPersistence()
    session, events = _session(
        screening, persistence, auto_save=True, auto_save_interval_seconds=0.01
    )

    async def scenario():
        loop_task = asyncio.create_task(session.auto_save_loop())
        session.field_change("q1", "no")
        await asyncio.sleep(0.2)
        assert await session.submit()
        await asyncio.wait_for(loop_task, timeout=1)

    asyncio.run(scenario())

    # one save for the single edit, nothing more once it is clean
    assert persistence.saved == [{"q1": "no"}]
    assert persistence.submitted == [{"q1": "no"}]
    assert _types(events).count(FormEventType.AUTO_SAVE) == 1


def test_state_snapshot(screening):
    session, _ = _session(screening)
    session.field_change("q1", "yes")
    state = session.get_state()

    assert state["status"] == "editing"
    assert state["responses"] == {"q1": "yes"}
    assert state["conditional_states"]["q2"]["visible"] is True
    assert state["section_completion"] == [50, 0]
    assert state["navigation"]["total_sections"] == 2

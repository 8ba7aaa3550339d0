"""
Assessment-taking session: the controller between the UI layer and the engine.

A session owns the candidate's in-progress answers, the per-field error map,
the touched set and the current section. Every answer change triggers a full
recomputation of conditional state; answers and errors of questions that end
up hidden are dropped. Maps are replaced wholesale, never mutated in place, so
a caller holding an earlier snapshot never sees a half-applied update.

Save and submit are the only awaits. While one is in flight further
save/submit calls are refused, but field edits stay live.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Set

from ...core.config import FormSettings, UploadSettings
from ...domain.entities.assessment import Assessment, AssessmentSection
from ...domain.errors import QuestionNotFoundError, SessionClosedError
from ...domain.events.form_events import FormEvent, FormEventType
from ...domain.services.conditional_state import ConditionalStates, resolve_and_prune
from ...domain.services.field_validators import (
    FileConstraints,
    validate_question_response,
)
from ...domain.services.response_validator import (
    completion_percentage,
    is_section_complete,
    section_completion_percentage,
    validate_all,
    validate_section,
)
from ..ports.services.response_persistence import ResponsePersistence

logger = logging.getLogger(__name__)

EventListener = Callable[[FormEvent], None]

SECTION_INCOMPLETE_MESSAGE = "Please complete all required questions in this section"
SUBMIT_BLOCKED_MESSAGE = "Please fix all validation errors before submitting"


class SessionStatus(str, Enum):
    """Lifecycle of a session."""

    EDITING = "editing"
    PREVIEWING = "previewing"
    SAVING = "saving"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class FormConfig:
    """Behaviour switches of a session."""

    validate_on_change: bool = False
    validate_on_blur: bool = True
    enforce_section_completion: bool = True
    auto_save: bool = False
    auto_save_interval_seconds: float = 30.0
    file_constraints: Optional[FileConstraints] = None

    @classmethod
    def from_settings(
        cls, form: FormSettings, upload: Optional[UploadSettings] = None
    ) -> "FormConfig":
        constraints = None
        if upload is not None:
            constraints = FileConstraints(
                max_size_bytes=upload.max_size_bytes,
                allowed_types=list(upload.allowed_types),
            )
        return cls(
            validate_on_change=form.validate_on_change,
            validate_on_blur=form.validate_on_blur,
            enforce_section_completion=form.enforce_section_completion,
            auto_save=form.auto_save,
            auto_save_interval_seconds=form.auto_save_interval_seconds,
            file_constraints=constraints,
        )


@dataclass(frozen=True)
class NavigationState:
    """What the section navigation controls may currently do."""

    current_section: int
    total_sections: int
    can_go_next: bool
    can_go_previous: bool
    can_submit: bool


class AssessmentSession:
    """Controller for one candidate taking one assessment."""

    def __init__(
        self,
        assessment: Assessment,
        persistence: ResponsePersistence,
        config: Optional[FormConfig] = None,
        on_event: Optional[EventListener] = None,
        initial_responses: Optional[Mapping[str, Any]] = None,
        preview: bool = False,
    ):
        self._assessment = assessment
        self._persistence = persistence
        self._config = config or FormConfig()
        self._on_event = on_event
        self._sections: List[AssessmentSection] = assessment.ordered_sections()
        self._question_ids: Set[str] = set(assessment.question_ids())

        known = {
            qid: value
            for qid, value in (initial_responses or {}).items()
            if qid in self._question_ids
        }
        self._responses, self._states = resolve_and_prune(self._assessment, known)
        self._errors: Dict[str, str] = {}
        self._touched: Dict[str, bool] = {}
        self._current_section = 0
        self._preview_only = preview
        self._status = SessionStatus.PREVIEWING if preview else SessionStatus.EDITING
        self._dirty = False

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def assessment(self) -> Assessment:
        return self._assessment

    @property
    def config(self) -> FormConfig:
        return self._config

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def responses(self) -> Dict[str, Any]:
        return dict(self._responses)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    @property
    def touched(self) -> Dict[str, bool]:
        return dict(self._touched)

    @property
    def conditional_states(self) -> ConditionalStates:
        return dict(self._states)

    @property
    def current_section(self) -> int:
        return self._current_section

    @property
    def is_busy(self) -> bool:
        return self._status in (SessionStatus.SAVING, SessionStatus.SUBMITTING)

    @property
    def is_dirty(self) -> bool:
        """Answers changed since the last successful save."""
        return self._dirty

    def completion_percentage(self) -> int:
        return completion_percentage(self._assessment, self._responses, self._states)

    def section_completion_percentage(self, index: int) -> int:
        return section_completion_percentage(
            self._sections[index], self._responses, self._states
        )

    def visible_question_ids(self, index: Optional[int] = None) -> List[str]:
        """Visible questions of one section, or of the whole assessment."""
        if index is None:
            questions = self._assessment.iter_questions()
        else:
            questions = self._sections[index].ordered_questions()
        return [q.id for q in questions if self._states[q.id].visible]

    def navigation_state(self) -> NavigationState:
        total = len(self._sections)
        current = self._current_section
        can_go_next = current < total - 1 and (
            not self._config.enforce_section_completion
            or is_section_complete(self._sections[current], self._responses, self._states)
        )
        return NavigationState(
            current_section=current,
            total_sections=total,
            can_go_next=can_go_next,
            can_go_previous=current > 0,
            can_submit=self._status == SessionStatus.EDITING
            and not validate_all(
                self._assessment,
                self._responses,
                self._states,
                self._config.file_constraints,
            ),
        )

    def get_state(self) -> Dict[str, Any]:
        """Snapshot of everything the UI layer renders."""
        navigation = self.navigation_state()
        return {
            "assessment_id": self._assessment.id,
            "status": self._status.value,
            "current_section": self._current_section,
            "responses": self.responses,
            "errors": self.errors,
            "touched": self.touched,
            "conditional_states": {
                qid: state.to_dict() for qid, state in self._states.items()
            },
            "completion_percentage": self.completion_percentage(),
            "section_completion": [
                self.section_completion_percentage(index)
                for index in range(len(self._sections))
            ],
            "navigation": {
                "current_section": navigation.current_section,
                "total_sections": navigation.total_sections,
                "can_go_next": navigation.can_go_next,
                "can_go_previous": navigation.can_go_previous,
                "can_submit": navigation.can_submit,
            },
        }

    # ------------------------------------------------------------------
    # Transitions

    def field_change(self, question_id: str, value: Any) -> None:
        """Record a new answer and re-resolve the whole assessment."""
        self._ensure_open()
        self._ensure_known(question_id)

        responses, states = resolve_and_prune(
            self._assessment, {**self._responses, question_id: value}
        )

        errors = {
            qid: message
            for qid, message in self._errors.items()
            if qid != question_id and states[qid].visible
        }

        field_error = None
        if self._config.validate_on_change and states[question_id].visible:
            field_error = self._validate_field(question_id, responses, states)
            if field_error:
                errors[question_id] = field_error

        self._responses = responses
        self._states = states
        self._errors = errors
        self._dirty = True

        self._emit(FormEvent(FormEventType.FIELD_CHANGE, question_id=question_id, value=value))
        if field_error:
            self._emit(
                FormEvent(
                    FormEventType.VALIDATION_ERROR,
                    question_id=question_id,
                    error=field_error,
                )
            )

    def field_blur(self, question_id: str) -> Optional[str]:
        """Mark a field touched and validate it if configured; returns its error."""
        self._ensure_known(question_id)
        self._touched = {**self._touched, question_id: True}

        error = None
        if self._config.validate_on_blur:
            errors = dict(self._errors)
            if self._states[question_id].visible:
                error = self._validate_field(question_id, self._responses, self._states)
            if error:
                errors[question_id] = error
            else:
                errors.pop(question_id, None)
            self._errors = errors

            if error:
                self._emit(
                    FormEvent(FormEventType.VALIDATION_ERROR, question_id=question_id, error=error)
                )

        self._emit(FormEvent(FormEventType.FIELD_BLUR, question_id=question_id))
        return error

    def section_change(self, index: int) -> bool:
        """Move to another section; forward moves may require complete sections."""
        if not 0 <= index < len(self._sections):
            return False

        if index > self._current_section and self._config.enforce_section_completion:
            for position in range(self._current_section, index):
                section = self._sections[position]
                if is_section_complete(section, self._responses, self._states):
                    continue

                section_errors = validate_section(
                    section,
                    self._responses,
                    self._states,
                    self._config.file_constraints,
                )
                self._errors = {**self._errors, **section_errors}
                self._emit(
                    FormEvent(
                        FormEventType.VALIDATION_ERROR,
                        section_index=position,
                        error=SECTION_INCOMPLETE_MESSAGE,
                    )
                )
                return False

        self._current_section = index
        self._emit(FormEvent(FormEventType.SECTION_CHANGE, section_index=index))
        return True

    def enter_preview(self) -> bool:
        """Switch an editing session to read-only review; True when it switched."""
        if self._status != SessionStatus.EDITING:
            return False
        self._status = SessionStatus.PREVIEWING
        return True

    def exit_preview(self) -> bool:
        """Return to editing; sessions opened as previews stay read-only."""
        if self._status != SessionStatus.PREVIEWING or self._preview_only:
            return False
        self._status = SessionStatus.EDITING
        return True

    async def save(self) -> bool:
        """Persist the answers as a draft; True when the save went through."""
        if not self._can_persist("save"):
            return False
        if not self._responses:
            logger.debug("Nothing to save for assessment %s", self._assessment.id)
            return False

        snapshot = dict(self._responses)
        self._status = SessionStatus.SAVING
        try:
            await self._persistence.save(snapshot)
        except Exception as exc:
            logger.error(
                "Saving responses for assessment %s failed",
                self._assessment.id,
                exc_info=True,
            )
            self._emit(
                FormEvent(FormEventType.SUBMISSION_ERROR, error=f"Save failed: {exc}")
            )
            return False
        finally:
            self._status = SessionStatus.EDITING

        self._dirty = self._responses != snapshot
        self._emit(FormEvent(FormEventType.AUTO_SAVE))
        return True

    async def submit(self) -> bool:
        """Validate everything and hand the answers over; True once submitted."""
        if not self._can_persist("submit"):
            return False

        errors = validate_all(
            self._assessment,
            self._responses,
            self._states,
            self._config.file_constraints,
        )
        if errors:
            self._errors = errors
            self._emit(FormEvent(FormEventType.VALIDATION_ERROR, error=SUBMIT_BLOCKED_MESSAGE))
            return False

        snapshot = dict(self._responses)
        self._status = SessionStatus.SUBMITTING
        self._emit(FormEvent(FormEventType.SUBMISSION_START))
        try:
            await self._persistence.submit(snapshot)
        except Exception as exc:
            logger.error(
                "Submitting responses for assessment %s failed",
                self._assessment.id,
                exc_info=True,
            )
            self._status = SessionStatus.EDITING
            self._emit(FormEvent(FormEventType.SUBMISSION_ERROR, error=str(exc) or "Submission failed"))
            return False

        self._status = SessionStatus.SUBMITTED
        self._dirty = False
        self._emit(FormEvent(FormEventType.SUBMISSION_SUCCESS))
        return True

    async def auto_save_if_dirty(self) -> bool:
        if not self._config.auto_save or not self._dirty:
            return False
        return await self.save()

    async def auto_save_loop(self) -> None:
        """Save dirty drafts every interval until the session is submitted.

        The session registry runs it as a task per session and cancels it
        when the session is closed or evicted.
        """
        while self._status != SessionStatus.SUBMITTED:
            await asyncio.sleep(self._config.auto_save_interval_seconds)
            await self.auto_save_if_dirty()

    # ------------------------------------------------------------------
    # Internals

    def _validate_field(
        self,
        question_id: str,
        responses: Mapping[str, Any],
        states: ConditionalStates,
    ) -> Optional[str]:
        question = self._assessment.find_question(question_id)
        return validate_question_response(
            question,
            responses.get(question_id),
            responses,
            states[question_id].required,
            file_constraints=self._config.file_constraints,
        )

    def _can_persist(self, action: str) -> bool:
        if self._status == SessionStatus.EDITING:
            return True
        logger.info(
            "Ignoring %s for assessment %s while %s",
            action,
            self._assessment.id,
            self._status.value,
        )
        return False

    def _ensure_open(self) -> None:
        if self._status == SessionStatus.SUBMITTED:
            raise SessionClosedError()

    def _ensure_known(self, question_id: str) -> None:
        if question_id not in self._question_ids:
            raise QuestionNotFoundError(question_id)

    def _emit(self, event: FormEvent) -> None:
        logger.debug(
            "Session event %s",
            event.type.value,
            extra={"question_id": event.question_id, "section_index": event.section_index},
        )
        if self._on_event is not None:
            self._on_event(event)

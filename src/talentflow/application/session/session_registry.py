"""In-process registry of live assessment-taking sessions."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ...domain.errors import SessionNotFoundError
from ...domain.events.form_events import FormEvent
from .assessment_session import AssessmentSession, SessionStatus

logger = logging.getLogger(__name__)

MAX_RECORDED_EVENTS = 50
DEFAULT_IDLE_TIMEOUT_SECONDS = 1800.0


@dataclass
class SessionHandle:
    """A live session plus the identity it was opened for."""

    session_id: str
    candidate_id: str
    session: AssessmentSession
    events: List[FormEvent] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    last_activity: datetime = field(default_factory=datetime.utcnow)
    event_count: int = 0
    auto_save_task: Optional[asyncio.Task] = None

    def record(self, event: FormEvent) -> None:
        self.events.append(event)
        self.event_count += 1
        del self.events[:-MAX_RECORDED_EVENTS]

    def events_since(self, mark: int) -> List[FormEvent]:
        """Events recorded after ``event_count`` was ``mark``, as far as still kept."""
        missed = self.event_count - mark
        return self.events[-missed:] if missed > 0 else []

    def touch(self) -> None:
        self.last_activity = datetime.utcnow()

    def start_auto_save(self) -> None:
        """Run the session's auto-save loop as a task on the running event loop."""
        if self.auto_save_task is None or self.auto_save_task.done():
            self.auto_save_task = asyncio.create_task(self.session.auto_save_loop())

    def stop_auto_save(self) -> None:
        if self.auto_save_task is not None and not self.auto_save_task.done():
            self.auto_save_task.cancel()
        self.auto_save_task = None


class SessionRegistry:
    """Keeps sessions alive between HTTP calls until they are closed or expire.

    Submitted sessions and sessions idle for longer than ``idle_timeout_seconds``
    are dropped by :meth:`evict_expired`, which runs whenever a session is
    registered and periodically from the application lifespan.
    """

    def __init__(self, idle_timeout_seconds: float = DEFAULT_IDLE_TIMEOUT_SECONDS):
        self._handles: Dict[str, SessionHandle] = {}
        self._idle_timeout = timedelta(seconds=idle_timeout_seconds)

    def register(self, handle: SessionHandle) -> SessionHandle:
        self.evict_expired()
        self._handles[handle.session_id] = handle
        logger.info(
            "Opened session %s for candidate %s on assessment %s",
            handle.session_id,
            handle.candidate_id,
            handle.session.assessment.id,
        )
        return handle

    @staticmethod
    def new_session_id() -> str:
        return str(uuid.uuid4())

    def get(self, session_id: str) -> SessionHandle:
        handle = self._handles.get(session_id)
        if handle is None:
            raise SessionNotFoundError(session_id)
        handle.touch()
        return handle

    def close(self, session_id: str) -> None:
        handle = self._handles.pop(session_id, None)
        if handle is None:
            raise SessionNotFoundError(session_id)
        handle.stop_auto_save()
        logger.info("Closed session %s", session_id)

    def evict_expired(self, now: Optional[datetime] = None) -> int:
        """Drop submitted and idle sessions; returns how many were dropped."""
        now = now or datetime.utcnow()
        expired = [
            session_id
            for session_id, handle in self._handles.items()
            if handle.session.status == SessionStatus.SUBMITTED
            or now - handle.last_activity > self._idle_timeout
        ]
        for session_id in expired:
            self._handles.pop(session_id).stop_auto_save()
        if expired:
            logger.info("Evicted %d expired session(s)", len(expired))
        return len(expired)

    def close_all(self) -> None:
        for handle in self._handles.values():
            handle.stop_auto_save()
        self._handles.clear()

    def __len__(self) -> int:
        return len(self._handles)

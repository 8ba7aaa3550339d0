"""
Assessment-taking session endpoints.

A session lives in the process between calls. Every call answers with the
full session state and the events the call produced.
"""

from fastapi import APIRouter, status

from talentflow.application.dto.response_dto import StartSessionRequest as StartSessionDTO
from talentflow.application.session.session_registry import SessionHandle
from talentflow.application.use_cases.start_session import StartSessionUseCase
from talentflow.domain.errors import DomainError

from ..deps import (
    AssessmentRepositoryDep,
    FormConfigDep,
    ResponseRepositoryDep,
    SessionRegistryDep,
)
from ..errors import internal_error
from ..schemas.common import ErrorResponse
from ..schemas.session import (
    FieldChangeRequest,
    NavigateRequest,
    SessionStateResponse,
    StartSessionRequest,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found"}}


def _state(handle: SessionHandle, since: int, **extra) -> SessionStateResponse:
    return SessionStateResponse(
        session_id=handle.session_id,
        state=handle.session.get_state(),
        events=[event.to_dict() for event in handle.events_since(since)],
        **extra,
    )


@router.post(
    "",
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Assessment not found"},
        409: {"model": ErrorResponse, "description": "Already submitted"},
    },
)
async def start_session(
    request: StartSessionRequest,
    assessment_repo: AssessmentRepositoryDep,
    response_repo: ResponseRepositoryDep,
    registry: SessionRegistryDep,
    form_config: FormConfigDep,
):
    """Open a session, resuming the candidate's draft when one exists."""
    try:
        use_case = StartSessionUseCase(
            assessment_repo, response_repo, registry, form_config
        )
        result = await use_case.execute(
            StartSessionDTO(
                candidate_id=request.candidate_id,
                assessment_id=request.assessment_id,
                preview=request.preview,
            )
        )
    except DomainError:
        raise
    except Exception as e:
        raise internal_error("start_session", e)

    return SessionStateResponse(
        session_id=result.session_id,
        resumed_draft=result.resumed_draft,
        state=result.state,
    )


@router.get("/{session_id}", response_model=SessionStateResponse, responses=_NOT_FOUND)
async def get_session(session_id: str, registry: SessionRegistryDep):
    handle = registry.get(session_id)
    return _state(handle, handle.event_count)


@router.post(
    "/{session_id}/fields/{question_id}",
    response_model=SessionStateResponse,
    responses=_NOT_FOUND,
)
async def change_field(
    session_id: str,
    question_id: str,
    request: FieldChangeRequest,
    registry: SessionRegistryDep,
):
    """Set an answer; conditional state is recomputed for the whole assessment."""
    handle = registry.get(session_id)
    since = handle.event_count
    handle.session.field_change(question_id, request.value)
    return _state(handle, since)


@router.post(
    "/{session_id}/fields/{question_id}/blur",
    response_model=SessionStateResponse,
    responses=_NOT_FOUND,
)
async def blur_field(session_id: str, question_id: str, registry: SessionRegistryDep):
    """Mark a field touched; validates it when blur validation is enabled."""
    handle = registry.get(session_id)
    since = handle.event_count
    error = handle.session.field_blur(question_id)
    return _state(handle, since, ok=error is None, error=error)


@router.post(
    "/{session_id}/navigate",
    response_model=SessionStateResponse,
    responses=_NOT_FOUND,
)
async def navigate(session_id: str, request: NavigateRequest, registry: SessionRegistryDep):
    """Move to another section; ``ok`` is false when the move was blocked."""
    handle = registry.get(session_id)
    since = handle.event_count
    moved = handle.session.section_change(request.section_index)
    return _state(handle, since, ok=moved)


@router.post("/{session_id}/preview", response_model=SessionStateResponse, responses=_NOT_FOUND)
async def enter_preview(session_id: str, registry: SessionRegistryDep):
    """Switch to read-only review; ``ok`` is false when the session is not editing."""
    handle = registry.get(session_id)
    return _state(handle, handle.event_count, ok=handle.session.enter_preview())


@router.delete("/{session_id}/preview", response_model=SessionStateResponse, responses=_NOT_FOUND)
async def exit_preview(session_id: str, registry: SessionRegistryDep):
    """Return to editing; sessions opened as previews stay read-only."""
    handle = registry.get(session_id)
    return _state(handle, handle.event_count, ok=handle.session.exit_preview())


@router.post("/{session_id}/save", response_model=SessionStateResponse, responses=_NOT_FOUND)
async def save_session(session_id: str, registry: SessionRegistryDep):
    """Save the session's answers as a draft."""
    handle = registry.get(session_id)
    since = handle.event_count
    saved = await handle.session.save()
    return _state(handle, since, ok=saved)


@router.post("/{session_id}/submit", response_model=SessionStateResponse, responses=_NOT_FOUND)
async def submit_session(session_id: str, registry: SessionRegistryDep):
    """Validate and submit the session's answers."""
    handle = registry.get(session_id)
    since = handle.event_count
    submitted = await handle.session.submit()
    return _state(handle, since, ok=submitted)


@router.delete(
    "/{session_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND
)
async def close_session(session_id: str, registry: SessionRegistryDep):
    """Drop a session; unsaved answers are lost."""
    registry.close(session_id)

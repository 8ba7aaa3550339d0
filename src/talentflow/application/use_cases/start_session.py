"""Start Session use case: open a live assessment-taking session."""

from ...domain.errors import ResponseAlreadySubmittedError
from ..dto.response_dto import StartSessionRequest, StartSessionResponse
from ..ports.repositories.assessment_repo import AssessmentRepository
from ..ports.repositories.response_repo import AssessmentResponseRepository
from ..session.assessment_session import AssessmentSession, FormConfig
from ..session.session_registry import SessionHandle, SessionRegistry
from .get_assessment import GetAssessmentUseCase
from .session_persistence import UseCaseResponsePersistence


class StartSessionUseCase:
    """Use case for opening a session, resuming the candidate's draft if any."""

    def __init__(
        self,
        assessment_repository: AssessmentRepository,
        response_repository: AssessmentResponseRepository,
        registry: SessionRegistry,
        config: FormConfig,
    ):
        self._assessment_repository = assessment_repository
        self._response_repository = response_repository
        self._get_assessment = GetAssessmentUseCase(assessment_repository)
        self._registry = registry
        self._config = config

    async def execute(self, request: StartSessionRequest) -> StartSessionResponse:
        """Execute the start session use case."""
        assessment = await self._get_assessment.execute(request.assessment_id)

        draft = None
        if not request.preview:
            if await self._response_repository.has_submitted(
                request.candidate_id, assessment.id
            ):
                raise ResponseAlreadySubmittedError(
                    request.candidate_id, assessment.id
                )
            draft = await self._response_repository.find_draft(
                request.candidate_id, assessment.id
            )

        persistence = UseCaseResponsePersistence(
            candidate_id=request.candidate_id,
            assessment_id=assessment.id,
            assessment_repository=self._assessment_repository,
            response_repository=self._response_repository,
            file_constraints=self._config.file_constraints,
        )

        session = AssessmentSession(
            assessment,
            persistence,
            config=self._config,
            on_event=lambda event: handle.record(event),
            initial_responses=draft.answers() if draft else None,
            preview=request.preview,
        )
        handle = self._registry.register(
            SessionHandle(
                session_id=self._registry.new_session_id(),
                candidate_id=request.candidate_id,
                session=session,
            )
        )
        if self._config.auto_save and not request.preview:
            handle.start_auto_save()

        return StartSessionResponse(
            session_id=handle.session_id,
            resumed_draft=draft is not None,
            state=handle.session.get_state(),
        )

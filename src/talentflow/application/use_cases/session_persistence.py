"""Session persistence backed by the draft and submit use cases."""

from typing import Any, Dict, Optional

from ...domain.services.field_validators import FileConstraints
from ..dto.response_dto import SaveDraftRequest, SubmitResponseRequest
from ..ports.repositories.assessment_repo import AssessmentRepository
from ..ports.repositories.response_repo import AssessmentResponseRepository
from ..ports.services.response_persistence import ResponsePersistence
from .save_draft import SaveDraftUseCase
from .submit_response import SubmitResponseUseCase


class UseCaseResponsePersistence(ResponsePersistence):
    """Routes a session's save/submit through the same use cases as the API."""

    def __init__(
        self,
        candidate_id: str,
        assessment_id: str,
        assessment_repository: AssessmentRepository,
        response_repository: AssessmentResponseRepository,
        file_constraints: Optional[FileConstraints] = None,
    ):
        self._candidate_id = candidate_id
        self._assessment_id = assessment_id
        self._save_draft = SaveDraftUseCase(assessment_repository, response_repository)
        self._submit = SubmitResponseUseCase(
            assessment_repository, response_repository, file_constraints
        )

    async def save(self, responses: Dict[str, Any]) -> None:
        await self._save_draft.execute(
            SaveDraftRequest(
                candidate_id=self._candidate_id,
                assessment_id=self._assessment_id,
                responses=responses,
            )
        )

    async def submit(self, responses: Dict[str, Any]) -> None:
        await self._submit.execute(
            SubmitResponseRequest(
                candidate_id=self._candidate_id,
                assessment_id=self._assessment_id,
                responses=responses,
            )
        )

"""Candidate response endpoints: drafts, submission, review and export."""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Query, status

from talentflow.application.dto.response_dto import (
    ListResponsesRequest,
    SaveDraftRequest,
    SubmitResponseRequest,
)
from talentflow.application.use_cases.export_response import ExportResponseUseCase
from talentflow.application.use_cases.list_responses import (
    GetResponseUseCase,
    ListResponsesUseCase,
)
from talentflow.application.use_cases.review_response import ReviewResponseUseCase
from talentflow.application.use_cases.save_draft import SaveDraftUseCase
from talentflow.application.use_cases.submit_response import SubmitResponseUseCase
from talentflow.domain.errors import DomainError

from ..deps import AssessmentRepositoryDep, FormConfigDep, ResponseRepositoryDep
from ..errors import internal_error
from ..schemas.common import ErrorResponse
from ..schemas.response import (
    ResponseDetailSchema,
    ResponseExportSchema,
    ResponseSetRequest,
    ResponseSummarySchema,
)

router = APIRouter(prefix="/responses", tags=["responses"])


@router.post(
    "/draft",
    response_model=ResponseSummarySchema,
    responses={
        404: {"model": ErrorResponse, "description": "Assessment not found"},
        409: {"model": ErrorResponse, "description": "Already submitted"},
    },
)
async def save_draft(
    request: ResponseSetRequest,
    assessment_repo: AssessmentRepositoryDep,
    response_repo: ResponseRepositoryDep,
):
    """Save answers as the candidate's draft; nothing is validated."""
    try:
        use_case = SaveDraftUseCase(assessment_repo, response_repo)
        result = await use_case.execute(
            SaveDraftRequest(
                candidate_id=request.candidate_id,
                assessment_id=request.assessment_id,
                responses=request.responses,
            )
        )
        return ResponseSummarySchema(**asdict(result))
    except DomainError:
        raise
    except Exception as e:
        raise internal_error("save_draft", e)


@router.post(
    "/submit",
    response_model=ResponseSummarySchema,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Assessment not found"},
        409: {"model": ErrorResponse, "description": "Already submitted"},
        422: {"model": ErrorResponse, "description": "Answers fail validation"},
    },
)
async def submit_response(
    request: ResponseSetRequest,
    assessment_repo: AssessmentRepositoryDep,
    response_repo: ResponseRepositoryDep,
    form_config: FormConfigDep,
):
    """
    Submit a candidate's answers.

    Conditional state is resolved again on the server and answers of hidden
    questions are dropped before validation. Any remaining error rejects the
    submission with the full error map in ``details.errors``.
    """
    try:
        use_case = SubmitResponseUseCase(
            assessment_repo, response_repo, form_config.file_constraints
        )
        result = await use_case.execute(
            SubmitResponseRequest(
                candidate_id=request.candidate_id,
                assessment_id=request.assessment_id,
                responses=request.responses,
            )
        )
        return ResponseSummarySchema(**asdict(result))
    except DomainError:
        raise
    except Exception as e:
        raise internal_error("submit_response", e)


@router.get(
    "",
    response_model=List[ResponseSummarySchema],
    responses={400: {"model": ErrorResponse, "description": "No filter given"}},
)
async def list_responses(
    response_repo: ResponseRepositoryDep,
    candidate_id: Optional[str] = Query(None, description="Filter by candidate"),
    assessment_id: Optional[str] = Query(None, description="Filter by assessment"),
):
    """List responses by candidate and/or assessment, most recent first."""
    responses = await ListResponsesUseCase(response_repo).execute(
        ListResponsesRequest(candidate_id=candidate_id, assessment_id=assessment_id)
    )
    return [
        ResponseSummarySchema(
            response_id=r.id,
            candidate_id=r.candidate_id,
            assessment_id=r.assessment_id,
            status=r.status,
            total_answers=len(r.responses),
            submitted_at=r.submitted_at.isoformat() if r.submitted_at else None,
            updated_at=r.updated_at.isoformat(),
        )
        for r in responses
    ]


@router.get(
    "/{response_id}",
    response_model=ResponseDetailSchema,
    responses={404: {"model": ErrorResponse, "description": "Response not found"}},
)
async def get_response(response_id: str, response_repo: ResponseRepositoryDep):
    """Get a response with all of its answers."""
    response = await GetResponseUseCase(response_repo).execute(response_id)
    return ResponseDetailSchema.model_validate(response.get_details())


@router.post(
    "/{response_id}/review",
    response_model=ResponseSummarySchema,
    responses={
        404: {"model": ErrorResponse, "description": "Response not found"},
        409: {"model": ErrorResponse, "description": "Response not submitted"},
    },
)
async def review_response(response_id: str, response_repo: ResponseRepositoryDep):
    """Mark a submitted response as reviewed."""
    result = await ReviewResponseUseCase(response_repo).execute(response_id)
    return ResponseSummarySchema(**asdict(result))


@router.get(
    "/{response_id}/export",
    response_model=ResponseExportSchema,
    responses={404: {"model": ErrorResponse, "description": "Response not found"}},
)
async def export_response(
    response_id: str,
    assessment_repo: AssessmentRepositoryDep,
    response_repo: ResponseRepositoryDep,
):
    """Export a response with question titles, ready to be saved as JSON."""
    result = await ExportResponseUseCase(assessment_repo, response_repo).execute(
        response_id
    )
    return ResponseExportSchema(**asdict(result))

"""Assessment authoring and evaluation endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from talentflow.application.dto.assessment_dto import (
    EvaluateResponsesRequest as EvaluateResponsesDTO,
    SaveAssessmentRequest as SaveAssessmentDTO,
)
from talentflow.application.use_cases.evaluate_responses import EvaluateResponsesUseCase
from talentflow.application.use_cases.get_assessment import GetAssessmentUseCase
from talentflow.application.use_cases.list_assessments import (
    DeleteAssessmentUseCase,
    ListAssessmentsUseCase,
)
from talentflow.application.use_cases.save_assessment import SaveAssessmentUseCase
from talentflow.domain.errors import DomainError

from ..deps import AssessmentRepositoryDep, FormConfigDep
from ..errors import internal_error
from ..schemas.assessment import (
    AssessmentSchema,
    AssessmentSummarySchema,
    EvaluateResponsesRequest,
    EvaluateResponsesResponse,
    SaveAssessmentRequest,
    SaveAssessmentResponse,
)
from ..schemas.common import ErrorResponse

router = APIRouter(prefix="/assessments", tags=["assessments"])

async def _save(request, assessment_repo, assessment_id=None) -> SaveAssessmentResponse:
    use_case = SaveAssessmentUseCase(assessment_repo)
    result = await use_case.execute(
        SaveAssessmentDTO(payload=request.model_dump(), assessment_id=assessment_id)
    )
    return SaveAssessmentResponse(
        assessment_id=result.assessment_id,
        total_sections=result.total_sections,
        total_questions=result.total_questions,
        message=result.message,
    )


@router.post(
    "",
    response_model=SaveAssessmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid conditional logic"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def create_assessment(
    request: SaveAssessmentRequest, assessment_repo: AssessmentRepositoryDep
):
    """
    Create an assessment.

    Conditional rules are checked before anything is stored: every rule must
    point at an existing, earlier question and the rule graph must be acyclic.
    """
    try:
        return await _save(request, assessment_repo)
    except DomainError:
        raise
    except Exception as e:
        raise internal_error("create_assessment", e)


@router.put(
    "/{assessment_id}",
    response_model=SaveAssessmentResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Assessment not found"},
        422: {"model": ErrorResponse, "description": "Invalid conditional logic"},
    },
)
async def update_assessment(
    assessment_id: str,
    request: SaveAssessmentRequest,
    assessment_repo: AssessmentRepositoryDep,
):
    """Replace an existing assessment, keeping its creation time."""
    try:
        return await _save(request, assessment_repo, assessment_id)
    except DomainError:
        raise
    except Exception as e:
        raise internal_error("update_assessment", e)


@router.get(
    "",
    response_model=List[AssessmentSummarySchema],
    response_model_by_alias=False,
)
async def list_assessments(
    assessment_repo: AssessmentRepositoryDep,
    job_id: Optional[str] = Query(None, description="Only assessments of this job"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """List assessments, newest first."""
    try:
        assessments = await ListAssessmentsUseCase(assessment_repo).execute(
            job_id=job_id, limit=limit, offset=offset
        )
    except Exception as e:
        raise internal_error("list_assessments", e)

    return [
        AssessmentSummarySchema(
            id=a.id,
            title=a.title,
            job_id=a.job_id,
            total_sections=len(a.sections),
            total_questions=len(a.question_ids()),
            updated_at=a.updated_at,
        )
        for a in assessments
    ]


@router.get(
    "/{assessment_id}",
    response_model=AssessmentSchema,
    response_model_by_alias=False,
    responses={404: {"model": ErrorResponse, "description": "Assessment not found"}},
)
async def get_assessment(assessment_id: str, assessment_repo: AssessmentRepositoryDep):
    """Get a full assessment document."""
    assessment = await GetAssessmentUseCase(assessment_repo).execute(assessment_id)
    data = assessment.to_dict()
    data["created_at"] = assessment.created_at
    data["updated_at"] = assessment.updated_at
    return AssessmentSchema.model_validate(data)


@router.delete(
    "/{assessment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Assessment not found"}},
)
async def delete_assessment(assessment_id: str, assessment_repo: AssessmentRepositoryDep):
    """Delete an assessment."""
    await DeleteAssessmentUseCase(assessment_repo).execute(assessment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{assessment_id}/evaluate",
    response_model=EvaluateResponsesResponse,
    responses={404: {"model": ErrorResponse, "description": "Assessment not found"}},
)
async def evaluate_responses(
    assessment_id: str,
    request: EvaluateResponsesRequest,
    assessment_repo: AssessmentRepositoryDep,
    form_config: FormConfigDep,
):
    """
    Evaluate answers against an assessment without storing them.

    Returns the conditional state of every question, the errors of visible
    questions, completion percentages and whether the set could be submitted.
    """
    try:
        use_case = EvaluateResponsesUseCase(assessment_repo, form_config.file_constraints)
        result = await use_case.execute(
            EvaluateResponsesDTO(assessment_id=assessment_id, responses=request.responses)
        )
    except DomainError:
        raise
    except Exception as e:
        raise internal_error("evaluate_responses", e)

    return EvaluateResponsesResponse(
        assessment_id=result.assessment_id,
        conditional_states=result.conditional_states,
        errors=result.errors,
        completion_percentage=result.completion_percentage,
        section_completion=result.section_completion,
        visible_question_ids=result.visible_question_ids,
        submittable=result.submittable,
    )

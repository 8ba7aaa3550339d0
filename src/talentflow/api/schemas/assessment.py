"""
Pydantic schemas for assessment authoring and evaluation endpoints.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, validator

from talentflow.domain.value_objects.question_types import (
    QuestionType,
    ValidationRuleType,
)

_QUESTION_TYPES = [t.value for t in QuestionType]
_VALIDATION_TYPES = [t.value for t in ValidationRuleType]
_CHOICE_TYPES = (QuestionType.SINGLE_CHOICE.value, QuestionType.MULTI_CHOICE.value)


class ValidationRuleSchema(BaseModel):
    """Static validation rule on a question."""

    type: str = Field(..., description="Validation rule type")
    value: Any = Field(None, description="Rule parameter, e.g. a length or range")
    message: str = Field("", description="Message shown when the rule fails")

    @validator("type")
    def validate_type(cls, v):
        if v not in _VALIDATION_TYPES:
            raise ValueError(f'Validation type must be one of: {", ".join(_VALIDATION_TYPES)}')
        return v


class ConditionalRuleSchema(BaseModel):
    """Conditional rule keyed to an earlier question."""

    model_config = ConfigDict(populate_by_name=True)

    depends_on_question_id: str = Field(
        ..., alias="dependsOnQuestionId", description="Question whose answer is read"
    )
    condition: str = Field(..., description="equals, not-equals, contains, greater-than, less-than")
    value: Any = Field(None, description="Value compared against the answer")
    action: str = Field("show", description="show, hide or require")


class QuestionSchema(BaseModel):
    """Question within a section."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Question ID, unique in the assessment")
    type: str = Field(..., description="Question type")
    title: str = Field(..., min_length=1, description="Question text")
    required: bool = Field(False, description="Statically required")
    description: Optional[str] = Field(None, description="Help text")
    options: Optional[List[str]] = Field(None, description="Choices for choice questions")
    validation: List[ValidationRuleSchema] = Field(default_factory=list)
    conditional_logic: List[ConditionalRuleSchema] = Field(
        default_factory=list, alias="conditionalLogic"
    )
    order: int = Field(0, description="Position within the section")

    @validator("type")
    def validate_type(cls, v):
        if v not in _QUESTION_TYPES:
            raise ValueError(f'Question type must be one of: {", ".join(_QUESTION_TYPES)}')
        return v

    @validator("options", always=True)
    def validate_options(cls, v, values):
        if values.get("type") in _CHOICE_TYPES and not v:
            raise ValueError("Choice questions need at least one option")
        return v


class AssessmentSectionSchema(BaseModel):
    """Ordered group of questions."""

    id: str = Field(..., min_length=1, description="Section ID")
    title: str = Field(..., min_length=1, description="Section title")
    description: Optional[str] = Field(None, description="Section description")
    order: int = Field(0, description="Position within the assessment")
    questions: List[QuestionSchema] = Field(default_factory=list)


class SaveAssessmentRequest(BaseModel):
    """Request schema for creating or replacing an assessment."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200, description="Assessment title")
    description: str = Field("", description="Assessment description")
    job_id: Optional[str] = Field(None, alias="jobId", description="Owning job")
    sections: List[AssessmentSectionSchema] = Field(default_factory=list)

    @validator("title")
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @validator("sections")
    def validate_unique_question_ids(cls, v):
        seen = set()
        for section in v:
            for question in section.questions:
                if question.id in seen:
                    raise ValueError(f"Duplicate question ID: {question.id}")
                seen.add(question.id)
        return v


class AssessmentSchema(BaseModel):
    """Full assessment document."""

    id: str = Field(..., description="Assessment ID")
    title: str
    description: str
    job_id: Optional[str] = None
    sections: List[AssessmentSectionSchema]
    created_at: datetime
    updated_at: datetime


class AssessmentSummarySchema(BaseModel):
    """Assessment as listed."""

    id: str = Field(..., description="Assessment ID")
    title: str
    job_id: Optional[str] = None
    total_sections: int
    total_questions: int
    updated_at: datetime


class SaveAssessmentResponse(BaseModel):
    """Response schema for a saved assessment."""

    assessment_id: str = Field(..., description="Assessment ID")
    total_sections: int
    total_questions: int
    message: str = Field(..., description="Success message")


class EvaluateResponsesRequest(BaseModel):
    """Answers to evaluate, keyed by question ID."""

    responses: Dict[str, Any] = Field(default_factory=dict)


class ConditionalStateSchema(BaseModel):
    visible: bool
    required: bool
    dependency_met: bool


class EvaluateResponsesResponse(BaseModel):
    """Resolved state, errors and completion of a response set."""

    assessment_id: str
    conditional_states: Dict[str, ConditionalStateSchema]
    errors: Dict[str, str]
    completion_percentage: int = Field(..., ge=0, le=100)
    section_completion: Dict[str, int]
    visible_question_ids: List[str]
    submittable: bool

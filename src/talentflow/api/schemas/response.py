"""
Pydantic schemas for candidate response endpoints.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, validator


class ResponseSetRequest(BaseModel):
    """Answers of one candidate to one assessment."""

    candidate_id: str = Field(..., min_length=1, description="Candidate ID")
    assessment_id: str = Field(..., min_length=1, description="Assessment ID")
    responses: Dict[str, Any] = Field(default_factory=dict, description="Question ID -> value")

    @validator("candidate_id", "assessment_id")
    def validate_ids(cls, v):
        if not v.strip():
            raise ValueError("ID cannot be empty")
        return v.strip()


class ResponseSummarySchema(BaseModel):
    """Response schema for a persisted response."""

    response_id: str
    candidate_id: str
    assessment_id: str
    status: str = Field(..., description="draft, submitted or reviewed")
    total_answers: int
    submitted_at: Optional[str] = None
    updated_at: str
    message: str = ""


class QuestionResponseSchema(BaseModel):
    question_id: str
    value: Any = None
    type: str


class ResponseDetailSchema(BaseModel):
    """A response with all of its answers."""

    id: str
    candidate_id: str
    assessment_id: str
    status: str
    responses: List[QuestionResponseSchema]
    submitted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ExportedAnswerSchema(BaseModel):
    question_id: str
    title: str
    type: str
    value: Any = None


class ResponseExportSchema(BaseModel):
    """JSON export of a response."""

    response_id: str
    candidate_id: str
    assessment_id: str
    assessment_title: str
    status: str
    submitted_at: Optional[str] = None
    answers: List[ExportedAnswerSchema]

"""
MongoDB Beanie models used by the persistence layer.
"""

from datetime import datetime
from typing import Any, List, Optional

from beanie import Document
from pydantic import BaseModel, Field


class ValidationRuleMongo(BaseModel):
    """Embedded validation rule."""
    type: str = Field(..., description="Validation rule type")
    value: Any = None
    message: str = Field(default="")


class ConditionalRuleMongo(BaseModel):
    """Embedded conditional rule."""
    depends_on_question_id: str = Field(..., description="Question the rule reads")
    condition: str = Field(..., description="Comparison operator")
    value: Any = None
    action: str = Field(default="show")  # show, hide, require


class QuestionMongo(BaseModel):
    """Embedded question."""
    id: str = Field(..., description="Question ID")
    type: str = Field(..., description="Question type")
    title: str = Field(..., description="Question text")
    required: bool = Field(default=False)
    description: Optional[str] = None
    options: Optional[List[str]] = None
    validation: List[ValidationRuleMongo] = Field(default_factory=list)
    conditional_logic: List[ConditionalRuleMongo] = Field(default_factory=list)
    order: int = Field(default=0)


class AssessmentSectionMongo(BaseModel):
    """Embedded section."""
    id: str = Field(..., description="Section ID")
    title: str = Field(..., description="Section title")
    description: Optional[str] = None
    order: int = Field(default=0)
    questions: List[QuestionMongo] = Field(default_factory=list)


class AssessmentMongo(Document):
    """MongoDB model for Assessment entity."""

    assessment_id: str = Field(..., description="Assessment ID")
    title: str = Field(..., description="Assessment title")
    description: str = Field(default="")
    job_id: Optional[str] = Field(default=None, description="Job the assessment belongs to")
    sections: List[AssessmentSectionMongo] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "assessments"
        indexes = [
            "assessment_id",
            "job_id",
            "created_at",
        ]


class QuestionResponseMongo(BaseModel):
    """Embedded answer."""
    question_id: str = Field(..., description="Question ID")
    value: Any = None
    type: str = Field(..., description="Question type at answer time")


class AssessmentResponseMongo(Document):
    """MongoDB model for AssessmentResponse entity."""

    response_id: str = Field(..., description="Response ID")
    candidate_id: str = Field(..., description="Candidate ID")
    assessment_id: str = Field(..., description="Assessment ID reference")
    responses: List[QuestionResponseMongo] = Field(default_factory=list)
    status: str = Field(default="draft")  # draft, submitted, reviewed
    submitted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "assessment_responses"
        indexes = [
            "response_id",
            "candidate_id",
            "assessment_id",
            "status",
        ]

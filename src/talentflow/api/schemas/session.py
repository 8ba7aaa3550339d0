"""
Pydantic schemas for assessment-taking session endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StartSessionRequest(BaseModel):
    """Request schema for opening a session."""

    candidate_id: str = Field(..., min_length=1, description="Candidate ID")
    assessment_id: str = Field(..., min_length=1, description="Assessment ID")
    preview: bool = Field(False, description="Open read-only, without save or submit")


class FieldChangeRequest(BaseModel):
    value: Any = Field(None, description="New answer; null clears it")


class NavigateRequest(BaseModel):
    section_index: int = Field(..., description="Target section index")


class SessionStateResponse(BaseModel):
    """Current state of a session plus the events the call produced."""

    session_id: str
    ok: bool = Field(True, description="Whether the requested action went through")
    error: Optional[str] = Field(None, description="Field error, for blur")
    resumed_draft: Optional[bool] = None
    state: Dict[str, Any]
    events: List[Dict[str, Any]] = Field(default_factory=list)

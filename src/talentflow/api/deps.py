"""FastAPI dependency providers."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from talentflow.adapters.db.fallback import (
    FallbackAssessmentRepository,
    FallbackAssessmentResponseRepository,
)
from talentflow.adapters.db.memory.repositories import (
    InMemoryAssessmentRepository,
    InMemoryAssessmentResponseRepository,
)
from talentflow.adapters.db.mongo.repositories.assessment_repository import (
    MongoAssessmentRepository,
)
from talentflow.adapters.db.mongo.repositories.response_repository import (
    MongoAssessmentResponseRepository,
)
from talentflow.application.ports.repositories.assessment_repo import AssessmentRepository
from talentflow.application.ports.repositories.response_repo import (
    AssessmentResponseRepository,
)
from talentflow.application.session.assessment_session import FormConfig
from talentflow.application.session.session_registry import SessionRegistry
from talentflow.core.config import get_settings


@lru_cache()
def get_assessment_repository() -> AssessmentRepository:
    """Get assessment repository instance."""
    local = InMemoryAssessmentRepository()
    if not get_settings().database.enabled:
        return local
    return FallbackAssessmentRepository(MongoAssessmentRepository(), local)


@lru_cache()
def get_response_repository() -> AssessmentResponseRepository:
    """Get assessment response repository instance."""
    local = InMemoryAssessmentResponseRepository()
    if not get_settings().database.enabled:
        return local
    return FallbackAssessmentResponseRepository(
        MongoAssessmentResponseRepository(), local
    )


@lru_cache()
def get_session_registry() -> SessionRegistry:
    """Get the process-wide session registry."""
    return SessionRegistry(
        idle_timeout_seconds=get_settings().form.session_idle_timeout_seconds
    )


@lru_cache()
def get_form_config() -> FormConfig:
    """Get session behaviour from settings."""
    settings = get_settings()
    return FormConfig.from_settings(settings.form, settings.upload)


# Dependency annotations for FastAPI
AssessmentRepositoryDep = Annotated[
    AssessmentRepository, Depends(get_assessment_repository)
]
ResponseRepositoryDep = Annotated[
    AssessmentResponseRepository, Depends(get_response_repository)
]
SessionRegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]
FormConfigDep = Annotated[FormConfig, Depends(get_form_config)]

"""Mapping of domain errors onto HTTP responses."""

import logging

from fastapi import HTTPException, status

from talentflow.domain.errors import (
    AssessmentNotFoundError,
    DomainError,
    InvalidConditionalLogicError,
    InvalidStatusTransitionError,
    QuestionNotFoundError,
    ResponseAlreadySubmittedError,
    ResponseNotFoundError,
    ResponseValidationError,
    SessionClosedError,
    SessionNotFoundError,
)

logger = logging.getLogger("talentflow.api")

_STATUS_BY_ERROR = [
    (
        (
            AssessmentNotFoundError,
            ResponseNotFoundError,
            QuestionNotFoundError,
            SessionNotFoundError,
        ),
        status.HTTP_404_NOT_FOUND,
    ),
    (
        (
            ResponseAlreadySubmittedError,
            InvalidStatusTransitionError,
            SessionClosedError,
        ),
        status.HTTP_409_CONFLICT,
    ),
    (
        (ResponseValidationError, InvalidConditionalLogicError),
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    ),
]


def status_for(exc: DomainError) -> int:
    """HTTP status code for a domain error; anything unmapped is a 400."""
    for error_types, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_types):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_body(exc: DomainError) -> dict:
    return {
        "error": exc.error_code or "DOMAIN_ERROR",
        "message": exc.message,
        "details": exc.details,
    }


def internal_error(operation: str, exc: Exception) -> HTTPException:
    """Log an unexpected failure and turn it into a 500."""
    logger.error("Unhandled error in %s", operation, exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": {"exception": str(exc) or repr(exc), "type": exc.__class__.__name__},
        },
    )

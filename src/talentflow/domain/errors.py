"""
Domain errors for the assessment service.

Every error carries a human readable message, a machine readable error code
and an optional details payload that the API layer renders verbatim.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base class for all domain errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class AssessmentNotFoundError(DomainError):
    """Raised when an assessment cannot be found."""

    def __init__(self, assessment_id: str):
        super().__init__(
            f"Assessment not found: {assessment_id}",
            error_code="ASSESSMENT_NOT_FOUND",
            details={"assessment_id": assessment_id},
        )


class ResponseNotFoundError(DomainError):
    """Raised when an assessment response cannot be found."""

    def __init__(self, response_id: str):
        super().__init__(
            f"Assessment response not found: {response_id}",
            error_code="RESPONSE_NOT_FOUND",
            details={"response_id": response_id},
        )


class QuestionNotFoundError(DomainError):
    """Raised when a question id does not belong to the assessment."""

    def __init__(self, question_id: str):
        super().__init__(
            f"Question not found: {question_id}",
            error_code="QUESTION_NOT_FOUND",
            details={"question_id": question_id},
        )


class InvalidConditionalLogicError(DomainError):
    """Raised when an assessment's conditional rules are inconsistent."""

    def __init__(self, problems: List[str]):
        super().__init__(
            "Assessment has invalid conditional logic",
            error_code="INVALID_CONDITIONAL_LOGIC",
            details={"problems": problems},
        )
        self.problems = problems


class ResponseValidationError(DomainError):
    """Raised when a response set cannot be submitted."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(
            "Please fix all validation errors before submitting",
            error_code="RESPONSE_VALIDATION_ERROR",
            details={"errors": errors},
        )
        self.errors = errors


class ResponseAlreadySubmittedError(DomainError):
    """Raised when a candidate already submitted a response."""

    def __init__(self, candidate_id: str, assessment_id: str):
        super().__init__(
            "Candidate has already submitted this assessment",
            error_code="RESPONSE_ALREADY_SUBMITTED",
            details={"candidate_id": candidate_id, "assessment_id": assessment_id},
        )


class InvalidStatusTransitionError(DomainError):
    """Raised when a response status change is not allowed."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot change response status from {current} to {target}",
            error_code="INVALID_STATUS_TRANSITION",
            details={"current": current, "target": target},
        )


class SessionNotFoundError(DomainError):
    """Raised when an assessment-taking session does not exist."""

    def __init__(self, session_id: str):
        super().__init__(
            f"Session not found: {session_id}",
            error_code="SESSION_NOT_FOUND",
            details={"session_id": session_id},
        )


class SessionClosedError(DomainError):
    """Raised when a submitted session receives further edits."""

    def __init__(self, message: str = "Session has already been submitted"):
        super().__init__(message, error_code="SESSION_CLOSED")

"""
Closed vocabularies used by assessment documents.

Entity fields keep plain strings; these enums are ``str`` subclasses, so a
member compares equal to its raw value. Dispatch tables are keyed by
``.value`` so they can be looked up with whatever string was stored.
"""

from enum import Enum


class QuestionType(str, Enum):
    """Supported question types."""

    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    NUMERIC = "numeric"
    FILE_UPLOAD = "file-upload"


class ValidationRuleType(str, Enum):
    """Static validation rule types."""

    REQUIRED = "required"
    MIN_LENGTH = "min-length"
    MAX_LENGTH = "max-length"
    NUMERIC_RANGE = "numeric-range"
    EMAIL = "email"
    URL = "url"


class RuleCondition(str, Enum):
    """Comparison applied to a dependency question's answer."""

    EQUALS = "equals"
    NOT_EQUALS = "not-equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater-than"
    LESS_THAN = "less-than"


class RuleAction(str, Enum):
    """Effect of a matching conditional rule on its owning question."""

    SHOW = "show"
    HIDE = "hide"
    REQUIRE = "require"


class ResponseStatus(str, Enum):
    """Lifecycle of a persisted candidate response."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"

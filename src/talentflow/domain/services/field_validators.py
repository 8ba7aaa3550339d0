"""
Per-question validation of a single answer.

Order of checks, first failure wins:

1. required-and-empty (the resolved conditional ``required`` flag wins over
   the question's static flag)
2. the question's static validation rules, in array order
3. the type check registered for the question's type
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..entities.assessment import Question, ValidationRule
from ..value_objects.question_types import QuestionType, ValidationRuleType
from .values import is_empty, to_number

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This field is required"
INVALID_SELECTION_MESSAGE = "Invalid selection: please choose one of the available options"

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class FileConstraints:
    """Limits applied to file-upload answers (file descriptor dicts)."""

    max_size_bytes: Optional[int] = None
    allowed_types: List[str] = field(default_factory=list)


def _format_number(number: float) -> str:
    return str(int(number)) if float(number).is_integer() else str(number)


def _message(rule: ValidationRule, default: str) -> str:
    return rule.message or default


def _required_message(question: Question) -> str:
    for rule in question.validation:
        if rule.type == ValidationRuleType.REQUIRED and rule.message:
            return rule.message
    return REQUIRED_MESSAGE


def _check_min_length(rule: ValidationRule, value: Any) -> Optional[str]:
    limit = to_number(rule.value) or 0
    if isinstance(value, str) and len(value) < limit:
        return _message(rule, f"Minimum length is {_format_number(limit)} characters")
    return None


def _check_max_length(rule: ValidationRule, value: Any) -> Optional[str]:
    limit = to_number(rule.value) or 0
    if isinstance(value, str) and len(value) > limit:
        return _message(rule, f"Maximum length is {_format_number(limit)} characters")
    return None


def _check_numeric_range(rule: ValidationRule, value: Any) -> Optional[str]:
    number = to_number(value)
    if number is None:
        return _message(rule, "Please enter a valid number")

    bounds = rule.value if isinstance(rule.value, dict) else {}
    minimum = to_number(bounds.get("min"))
    maximum = to_number(bounds.get("max"))
    if minimum is not None and number < minimum:
        return _message(rule, f"Value must be at least {_format_number(minimum)}")
    if maximum is not None and number > maximum:
        return _message(rule, f"Value must be at most {_format_number(maximum)}")
    return None


def _check_email(rule: ValidationRule, value: Any) -> Optional[str]:
    if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
        return _message(rule, "Please enter a valid email address")
    return None


def _check_url(rule: ValidationRule, value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return _message(rule, "Please enter a valid URL")
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return _message(rule, "Please enter a valid URL")
    return None


def _check_required(rule: ValidationRule, value: Any) -> Optional[str]:
    return _message(rule, REQUIRED_MESSAGE) if is_empty(value) else None


_RULE_CHECKS: Dict[str, Callable[[ValidationRule, Any], Optional[str]]] = {
    ValidationRuleType.REQUIRED.value: _check_required,
    ValidationRuleType.MIN_LENGTH.value: _check_min_length,
    ValidationRuleType.MAX_LENGTH.value: _check_max_length,
    ValidationRuleType.NUMERIC_RANGE.value: _check_numeric_range,
    ValidationRuleType.EMAIL.value: _check_email,
    ValidationRuleType.URL.value: _check_url,
}


def validate_rule(rule: ValidationRule, value: Any) -> Optional[str]:
    """Apply one static validation rule; unknown rule types pass."""
    check = _RULE_CHECKS.get(rule.type)
    if check is None:
        logger.warning("Unknown validation rule type: %s", rule.type)
        return None
    return check(rule, value)


def _validate_single_choice(
    question: Question, value: Any, constraints: Optional[FileConstraints]
) -> Optional[str]:
    if question.options is not None and value not in question.options:
        return INVALID_SELECTION_MESSAGE
    return None


def _validate_multi_choice(
    question: Question, value: Any, constraints: Optional[FileConstraints]
) -> Optional[str]:
    if not isinstance(value, (list, tuple)):
        return "Invalid selection format"
    if question.options is not None:
        if any(item not in question.options for item in value):
            return "Please select valid options only"
    return None


def _validate_numeric(
    question: Question, value: Any, constraints: Optional[FileConstraints]
) -> Optional[str]:
    if to_number(value) is None:
        return "Please enter a valid number"
    return None


def _validate_text(
    question: Question, value: Any, constraints: Optional[FileConstraints]
) -> Optional[str]:
    if not isinstance(value, str):
        return "Please enter text"
    return None


def _validate_file_upload(
    question: Question, value: Any, constraints: Optional[FileConstraints]
) -> Optional[str]:
    if constraints is None or not isinstance(value, dict):
        return None
    return validate_file(value, constraints)


_TYPE_VALIDATORS: Dict[
    str, Callable[[Question, Any, Optional[FileConstraints]], Optional[str]]
] = {
    QuestionType.SINGLE_CHOICE.value: _validate_single_choice,
    QuestionType.MULTI_CHOICE.value: _validate_multi_choice,
    QuestionType.SHORT_TEXT.value: _validate_text,
    QuestionType.LONG_TEXT.value: _validate_text,
    QuestionType.NUMERIC.value: _validate_numeric,
    QuestionType.FILE_UPLOAD.value: _validate_file_upload,
}


def validate_file(descriptor: Mapping[str, Any], constraints: FileConstraints) -> Optional[str]:
    """Check a file descriptor ``{name, size, type}`` against upload limits."""
    size = to_number(descriptor.get("size"))
    if constraints.max_size_bytes and size is not None and size > constraints.max_size_bytes:
        max_size_mb = round(constraints.max_size_bytes / (1024 * 1024))
        return f"File size must be less than {max_size_mb}MB"

    if constraints.allowed_types:
        file_type = str(descriptor.get("type") or "").lower()
        allowed = False
        for pattern in constraints.allowed_types:
            if "*" in pattern:
                base_type = pattern.split("/")[0].lower()
                allowed = file_type.startswith(base_type + "/")
            else:
                allowed = file_type == pattern.lower()
            if allowed:
                break
        if not allowed:
            return "File type not allowed. Allowed types: " + ", ".join(
                constraints.allowed_types
            )
    return None


def validate_question_response(
    question: Question,
    value: Any,
    all_responses: Optional[Mapping[str, Any]] = None,
    is_required: Optional[bool] = None,
    *,
    file_constraints: Optional[FileConstraints] = None,
) -> Optional[str]:
    """Validate one answer; returns the first error message or None.

    ``is_required`` is the resolved conditional flag; it falls back to the
    question's static flag when not given. ``all_responses`` keeps the
    signature uniform; no built-in check reads it.
    """
    required = question.required if is_required is None else is_required

    if is_empty(value):
        return _required_message(question) if required else None

    for rule in question.validation:
        error = validate_rule(rule, value)
        if error:
            return error

    type_validator = _TYPE_VALIDATORS.get(question.type)
    if type_validator is None:
        return None
    return type_validator(question, value, file_constraints)

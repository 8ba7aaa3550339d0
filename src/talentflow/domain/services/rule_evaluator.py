"""
Evaluation of a single conditional rule against in-progress answers.

The evaluator is pure and total: malformed rules and unparseable numbers
produce ``False`` instead of raising.
"""

import logging
from typing import Any, Callable, Dict, Mapping

from ..entities.assessment import ConditionalRule
from ..value_objects.question_types import RuleCondition
from .values import as_text, is_empty, to_number

logger = logging.getLogger(__name__)


def _equals(actual: Any, expected: Any) -> bool:
    actual_text = as_text(actual)
    expected_text = as_text(expected)
    if actual_text is None or expected_text is None:
        return False
    return actual_text == expected_text


def _not_equals(actual: Any, expected: Any) -> bool:
    return not _equals(actual, expected)


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, (list, tuple)):
        expected_text = as_text(expected)
        return expected_text is not None and any(
            as_text(item) == expected_text for item in actual
        )
    if isinstance(actual, str):
        expected_text = as_text(expected)
        if expected_text is None:
            return False
        return expected_text.lower() in actual.lower()
    return False


def _greater_than(actual: Any, expected: Any) -> bool:
    left, right = to_number(actual), to_number(expected)
    return left is not None and right is not None and left > right


def _less_than(actual: Any, expected: Any) -> bool:
    left, right = to_number(actual), to_number(expected)
    return left is not None and right is not None and left < right


_CONDITIONS: Dict[str, Callable[[Any, Any], bool]] = {
    RuleCondition.EQUALS.value: _equals,
    RuleCondition.NOT_EQUALS.value: _not_equals,
    RuleCondition.CONTAINS.value: _contains,
    RuleCondition.GREATER_THAN.value: _greater_than,
    RuleCondition.LESS_THAN.value: _less_than,
}


def evaluate_condition(rule: ConditionalRule, actual: Any) -> bool:
    """Decide whether ``rule`` holds for the dependency answer ``actual``."""
    compare = _CONDITIONS.get(rule.condition)
    if compare is None:
        logger.warning("Unknown conditional rule condition: %s", rule.condition)
        return False

    # An unanswered dependency is "not equal to any concrete value".
    if is_empty(actual):
        return rule.condition == RuleCondition.NOT_EQUALS

    return compare(actual, rule.value)


def evaluate_rule(rule: ConditionalRule, responses: Mapping[str, Any]) -> bool:
    """Decide whether ``rule`` currently holds given the raw responses map."""
    return evaluate_condition(rule, responses.get(rule.depends_on_question_id))

from __future__ import annotations

import pytest

from talentflow.domain.services.conditional_state import evaluate_all
from talentflow.domain.services.response_validator import (
    completion_percentage,
    is_section_complete,
    is_submittable,
    section_completion_percentage,
    validate_all,
    validate_section,
)
from talentflow.domain.services.values import is_empty

from tests.conftest import build_assessment, question, rule


def test_half_of_visible_questions_answered():
    assessment = build_assessment([question("q1"), question("q2")])
    responses = {"q1": "hello"}

    assert completion_percentage(assessment, responses, evaluate_all(assessment, responses)) == 50


def test_no_visible_questions_means_zero_percent():
    assessment = build_assessment(
        [
            question("q1", conditionalLogic=[rule("q9", "equals", "never")]),
            question("q2", conditionalLogic=[rule("q9", "equals", "never")]),
        ]
    )
    assert completion_percentage(assessment, {}, evaluate_all(assessment, {})) == 0


def test_percentage_rounds_half_up():
    assessment = build_assessment([question("q1"), question("q2"), question("q3")])
    responses = {"q1": "a", "q2": "b"}
    # 2/3 = 66.67 -> 67
    assert completion_percentage(assessment, responses, evaluate_all(assessment, responses)) == 67

    assessment = build_assessment([question(f"q{i}") for i in range(8)])
    responses = {"q0": "a", "q1": "b", "q2": "c"}
    # 3/8 = 37.5 -> 38
    assert completion_percentage(assessment, responses, evaluate_all(assessment, responses)) == 38


def test_hidden_questions_are_neither_validated_nor_counted(screening):
    responses = {"q1": "no"}
    states = evaluate_all(screening, responses)

    errors = validate_all(screening, responses, states)
    assert errors == {}
    assert is_submittable(errors)
    # q1 and q4 are visible; only q1 is answered
    assert completion_percentage(screening, responses, states) == 50


def test_visible_required_questions_are_reported(screening):
    responses = {"q1": "yes", "q2": "python", "q3": 99}
    states = evaluate_all(screening, responses)

    errors = validate_all(screening, responses, states)
    assert errors == {"q3": "Value must be at most 40"}
    assert not is_submittable(errors)

    errors = validate_all(screening, {"q1": "yes"}, evaluate_all(screening, {"q1": "yes"}))
    assert errors == {"q2": "This field is required"}


def test_missing_state_counts_as_hidden(screening):
    assert validate_all(screening, {}, {}) == {}
    assert completion_percentage(screening, {"q1": "yes"}, {}) == 0


def test_section_helpers(screening):
    first, second = screening.ordered_sections()
    responses = {"q1": "yes"}
    states = evaluate_all(screening, responses)

    assert is_section_complete(first, responses, states) is False
    assert validate_section(first, responses, states) == {"q2": "This field is required"}
    assert section_completion_percentage(first, responses, states) == 50

    assert is_section_complete(second, responses, states) is True
    assert section_completion_percentage(second, responses, states) == 0


@pytest.mark.parametrize(
    "responses",
    [
        {},
        {"q1": "no"},
        {"q1": "yes"},
        {"q1": "yes", "q2": ""},
        {"q1": "yes", "q2": "python"},
        {"q1": "yes", "q2": "go", "q3": 5},
        {"q1": "yes", "q2": "Python", "q3": 12, "q4": "notes"},
        {"q1": "no", "q2": "stale"},
    ],
)
def test_no_errors_means_required_visible_questions_are_answered(screening, responses):
    states = evaluate_all(screening, responses)
    errors = validate_all(screening, responses, states)

    unanswered = {
        q.id
        for q in screening.iter_questions()
        if states[q.id].visible and states[q.id].required and is_empty(responses.get(q.id))
    }
    # every unanswered required question is reported, so no errors means none is left
    assert unanswered <= set(errors)
    if not errors:
        assert not unanswered

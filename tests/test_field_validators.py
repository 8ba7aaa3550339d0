from __future__ import annotations

import pytest

from talentflow.domain.entities.assessment import Question, ValidationRule
from talentflow.domain.services.conditional_state import evaluate_question
from talentflow.domain.services.field_validators import (
    INVALID_SELECTION_MESSAGE,
    REQUIRED_MESSAGE,
    FileConstraints,
    validate_file,
    validate_question_response,
    validate_rule,
)

from tests.conftest import build_assessment, question, rule


def _numeric_with_range() -> Question:
    return Question(
        id="q3",
        type="numeric",
        title="Years of experience",
        validation=[ValidationRule(type="numeric-range", value={"min": 1, "max": 10})],
    )


def test_numeric_range_bounds():
    q3 = _numeric_with_range()

    assert validate_question_response(q3, 15) == "Value must be at most 10"
    assert validate_question_response(q3, 0) == "Value must be at least 1"
    assert validate_question_response(q3, 5) is None
    assert validate_question_response(q3, "7") is None
    assert validate_question_response(q3, 10 ** 400) == "Value must be at most 10"
    assert validate_question_response(q3, -(10 ** 400)) == "Value must be at least 1"


def test_empty_optional_answer_skips_all_rules():
    assert validate_question_response(_numeric_with_range(), "") is None


def test_conditionally_required_empty_answer_fails():
    assessment = build_assessment(
        [
            question("q1"),
            question(
                "q3",
                "numeric",
                validation=[{"type": "numeric-range", "value": {"min": 1, "max": 10}}],
                conditionalLogic=[rule("q1", "equals", "yes", "require")],
            ),
        ]
    )
    q3 = assessment.find_question("q3")
    state = evaluate_question(q3, {"q1": "yes"})

    assert validate_question_response(q3, "", {"q1": "yes"}, state.required) == REQUIRED_MESSAGE


def test_resolved_required_flag_overrides_static_one():
    q = Question(id="q", type="short-text", title="Name", required=True)
    assert validate_question_response(q, None, is_required=False) is None
    assert validate_question_response(q, None) == REQUIRED_MESSAGE


def test_required_rule_message_is_used():
    q = Question(
        id="q",
        type="short-text",
        title="Name",
        required=True,
        validation=[ValidationRule(type="required", message="Tell us your name")],
    )
    assert validate_question_response(q, "") == "Tell us your name"


def test_single_choice_rejects_unknown_option():
    q = Question(id="q", type="single-choice", title="Pick", options=["A", "B"])

    error = validate_question_response(q, "C")
    assert error == INVALID_SELECTION_MESSAGE
    assert "invalid selection" in error.lower()
    assert validate_question_response(q, "A") is None


def test_multi_choice_checks_shape_and_members():
    q = Question(id="q", type="multi-choice", title="Pick", options=["A", "B"])

    assert validate_question_response(q, "A") == "Invalid selection format"
    assert validate_question_response(q, ["A", "Z"]) == "Please select valid options only"
    assert validate_question_response(q, ["A", "B"]) is None


def test_numeric_type_check():
    q = Question(id="q", type="numeric", title="Age")
    assert validate_question_response(q, "twelve") == "Please enter a valid number"
    assert validate_question_response(q, 12) is None
    assert validate_question_response(q, 10 ** 400) is None


def test_text_length_rules_run_in_order():
    q = Question(
        id="q",
        type="long-text",
        title="Cover letter",
        validation=[
            ValidationRule(type="min-length", value=5),
            ValidationRule(type="max-length", value=8, message="Too long"),
        ],
    )
    assert validate_question_response(q, "hey") == "Minimum length is 5 characters"
    assert validate_question_response(q, "far too long") == "Too long"
    assert validate_question_response(q, "just ok") is None


@pytest.mark.parametrize(
    "value, ok",
    [
        ("dev@example.com", True),
        ("dev@example", False),
        ("not an email", False),
        ("dev@example.com\n", False),
    ],
)
def test_email_rule(value, ok):
    error = validate_rule(ValidationRule(type="email"), value)
    assert (error is None) is ok


@pytest.mark.parametrize(
    "value, ok",
    [("https://github.com/someone", True), ("github dot com", False)],
)
def test_url_rule(value, ok):
    error = validate_rule(ValidationRule(type="url"), value)
    assert (error is None) is ok


def test_unknown_rule_type_passes():
    assert validate_rule(ValidationRule(type="palindrome"), "abc") is None


def test_file_constraints():
    constraints = FileConstraints(max_size_bytes=1024 * 1024, allowed_types=["application/pdf", "image/*"])

    assert validate_file({"name": "cv.pdf", "size": 1000, "type": "application/pdf"}, constraints) is None
    assert validate_file({"name": "me.png", "size": 1000, "type": "image/png"}, constraints) is None
    assert validate_file(
        {"name": "big.pdf", "size": 5 * 1024 * 1024, "type": "application/pdf"}, constraints
    ) == "File size must be less than 1MB"
    assert validate_file({"name": "a.exe", "size": 10, "type": "application/x-msdownload"}, constraints).startswith(
        "File type not allowed"
    )


def test_file_upload_question_uses_constraints():
    q = Question(id="cv", type="file-upload", title="CV", required=True)
    constraints = FileConstraints(allowed_types=["application/pdf"])
    upload = {"name": "cv.docx", "size": 10, "type": "application/msword"}

    assert validate_question_response(q, upload) is None
    assert validate_question_response(q, upload, file_constraints=constraints) is not None

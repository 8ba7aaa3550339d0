"""
Validation and completion metrics over a whole response set.

Only questions whose resolved state is visible take part; a question with no
resolved state is treated as hidden.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from ..entities.assessment import Assessment, AssessmentSection, Question
from .conditional_state import ConditionalState
from .field_validators import FileConstraints, validate_question_response
from .values import is_empty


def _visible(
    questions: Iterable[Question], states: Mapping[str, ConditionalState]
) -> Iterator[Tuple[Question, ConditionalState]]:
    for question in questions:
        state = states.get(question.id)
        if state is not None and state.visible:
            yield question, state


def _validate_questions(
    questions: Iterable[Question],
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
    file_constraints: Optional[FileConstraints],
) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for question, state in _visible(questions, states):
        error = validate_question_response(
            question,
            responses.get(question.id),
            responses,
            state.required,
            file_constraints=file_constraints,
        )
        if error:
            errors[question.id] = error
    return errors


def validate_all(
    assessment: Assessment,
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
    file_constraints: Optional[FileConstraints] = None,
) -> Dict[str, str]:
    """Error map (question id -> message) for every visible question."""
    return _validate_questions(
        assessment.iter_questions(), responses, states, file_constraints
    )


def validate_section(
    section: AssessmentSection,
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
    file_constraints: Optional[FileConstraints] = None,
) -> Dict[str, str]:
    return _validate_questions(
        section.ordered_questions(), responses, states, file_constraints
    )


def is_section_complete(
    section: AssessmentSection,
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
) -> bool:
    """True when every visible required question of the section is answered."""
    return all(
        not is_empty(responses.get(question.id))
        for question, state in _visible(section.questions, states)
        if state.required
    )


def _percentage(
    questions: Iterable[Question],
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
) -> int:
    total = 0
    answered = 0
    for question, _state in _visible(questions, states):
        total += 1
        if not is_empty(responses.get(question.id)):
            answered += 1

    if total == 0:
        return 0
    ratio = Decimal(answered * 100) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def completion_percentage(
    assessment: Assessment,
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
) -> int:
    """Share of visible questions answered, 0..100; 0 when none is visible."""
    return _percentage(assessment.iter_questions(), responses, states)


def section_completion_percentage(
    section: AssessmentSection,
    responses: Mapping[str, Any],
    states: Mapping[str, ConditionalState],
) -> int:
    return _percentage(section.questions, responses, states)


def is_submittable(errors: Mapping[str, str]) -> bool:
    return len(errors) == 0

"""
Conditional-state resolution for every question of an assessment.

Each question starts visible with its static ``required`` flag. Its
conditional rules are then applied in array order and the last rule to touch
a flag wins:

* ``show``    -> ``visible`` becomes whether the rule matched
* ``hide``    -> a matching rule sets ``visible`` to False
* ``require`` -> ``required`` becomes True on a match, else the static flag

Dependency answers are always read from the raw responses map, never from the
resolved visibility of the dependency question, so a hidden question's stale
answer keeps driving its dependents until the session clears it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from ..entities.assessment import Assessment, AssessmentSection, Question
from ..value_objects.question_types import RuleAction
from .rule_evaluator import evaluate_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConditionalState:
    """Resolved visibility and requiredness of one question."""

    question_id: str
    visible: bool
    required: bool
    dependency_met: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visible": self.visible,
            "required": self.required,
            "dependency_met": self.dependency_met,
        }


ConditionalStates = Dict[str, ConditionalState]


def evaluate_question(
    question: Question, responses: Mapping[str, Any]
) -> ConditionalState:
    """Resolve the conditional state of a single question."""
    visible = True
    required = question.required

    for rule in question.conditional_logic:
        matched = evaluate_rule(rule, responses)

        if rule.action == RuleAction.SHOW:
            visible = matched
        elif rule.action == RuleAction.HIDE:
            if matched:
                visible = False
        elif rule.action == RuleAction.REQUIRE:
            required = True if matched else question.required
        else:
            logger.warning(
                "Ignoring unknown conditional action %r on question %s",
                rule.action,
                question.id,
            )

    return ConditionalState(
        question_id=question.id,
        visible=visible,
        required=required,
        dependency_met=visible,
    )


def evaluate_all(
    assessment: Assessment, responses: Mapping[str, Any]
) -> ConditionalStates:
    """Resolve the conditional state of every question from scratch."""
    return {
        question.id: evaluate_question(question, responses)
        for question in assessment.iter_questions()
    }


def get_visible_questions(
    assessment: Assessment, responses: Mapping[str, Any]
) -> List[Question]:
    states = evaluate_all(assessment, responses)
    return [q for q in assessment.iter_questions() if states[q.id].visible]


def get_required_questions(
    assessment: Assessment, responses: Mapping[str, Any]
) -> List[Question]:
    """Questions that are both visible and required right now."""
    states = evaluate_all(assessment, responses)
    return [
        q
        for q in assessment.iter_questions()
        if states[q.id].visible and states[q.id].required
    ]


def is_section_visible(
    section: AssessmentSection, responses: Mapping[str, Any]
) -> bool:
    """A section is visible while at least one of its questions is."""
    return any(
        evaluate_question(question, responses).visible
        for question in section.questions
    )


def get_question_dependencies(question: Question) -> List[str]:
    return [rule.depends_on_question_id for rule in question.conditional_logic]


def get_dependent_questions(
    question_id: str, assessment: Assessment
) -> List[Question]:
    """Questions that carry at least one rule keyed to ``question_id``."""
    return [
        q
        for q in assessment.iter_questions()
        if question_id in get_question_dependencies(q)
    ]


def resolve_and_prune(
    assessment: Assessment, responses: Mapping[str, Any]
) -> Tuple[Dict[str, Any], ConditionalStates]:
    """Resolve states and drop answers of hidden questions until stable.

    Dropping an answer can hide further questions, so resolution repeats; it
    terminates because every round removes at least one answer. Answers for
    ids the assessment does not know are left untouched.
    """
    current = dict(responses)
    while True:
        states = evaluate_all(assessment, current)
        hidden = [
            qid for qid in current if qid in states and not states[qid].visible
        ]
        if not hidden:
            return current, states
        for qid in hidden:
            del current[qid]

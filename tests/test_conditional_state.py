from __future__ import annotations

from talentflow.domain.services.conditional_state import (
    evaluate_all,
    evaluate_question,
    get_dependent_questions,
    get_question_dependencies,
    get_required_questions,
    get_visible_questions,
    is_section_visible,
    resolve_and_prune,
)

from tests.conftest import build_assessment, question, rule


def _gated():
    return build_assessment(
        [
            question("q1", "single-choice", options=["yes", "no"]),
            question("q2", conditionalLogic=[rule("q1", "equals", "yes")]),
        ]
    )


def test_show_rule_tracks_its_condition():
    assessment = _gated()
    q2 = assessment.find_question("q2")

    assert evaluate_question(q2, {}).visible is False
    assert evaluate_question(q2, {"q1": "yes"}).visible is True
    assert evaluate_question(q2, {"q1": "no"}).visible is False


def test_question_without_rules_keeps_static_flags():
    assessment = build_assessment([question("q1", required=True)])
    state = evaluate_question(assessment.find_question("q1"), {})
    assert state.visible is True
    assert state.required is True


def test_hide_rule_only_hides_on_match():
    assessment = build_assessment(
        [
            question("q1"),
            question("q2", conditionalLogic=[rule("q1", "equals", "skip", "hide")]),
        ]
    )
    q2 = assessment.find_question("q2")

    assert evaluate_question(q2, {}).visible is True
    assert evaluate_question(q2, {"q1": "skip"}).visible is False
    assert evaluate_question(q2, {"q1": "keep"}).visible is True


def test_later_rules_overwrite_earlier_ones():
    # hide first, show second: the show rule decides visibility alone.
    assessment = build_assessment(
        [
            question("q1"),
            question(
                "q2",
                conditionalLogic=[
                    rule("q1", "equals", "a", "hide"),
                    rule("q1", "equals", "b", "show"),
                ],
            ),
        ]
    )
    q2 = assessment.find_question("q2")

    assert evaluate_question(q2, {"q1": "a"}).visible is False
    assert evaluate_question(q2, {"q1": "b"}).visible is True
    assert evaluate_question(q2, {"q1": "c"}).visible is False

    # show first, hide second: a matching hide wins over an earlier show.
    assessment = build_assessment(
        [
            question("q1"),
            question(
                "q2",
                conditionalLogic=[
                    rule("q1", "not-equals", "", "show"),
                    rule("q1", "equals", "b", "hide"),
                ],
            ),
        ]
    )
    q2 = assessment.find_question("q2")

    assert evaluate_question(q2, {"q1": "a"}).visible is True
    assert evaluate_question(q2, {"q1": "b"}).visible is False


def test_require_rule_reverts_to_static_flag():
    assessment = build_assessment(
        [
            question("q1"),
            question("q2", conditionalLogic=[rule("q1", "equals", "yes", "require")]),
        ]
    )
    q2 = assessment.find_question("q2")

    assert evaluate_question(q2, {"q1": "yes"}).required is True
    assert evaluate_question(q2, {"q1": "no"}).required is False
    assert evaluate_question(q2, {"q1": "no"}).visible is True


def test_unknown_action_is_ignored():
    assessment = build_assessment(
        [question("q1"), question("q2", conditionalLogic=[rule("q1", "equals", "x", "explode")])]
    )
    state = evaluate_question(assessment.find_question("q2"), {"q1": "x"})
    assert state.visible is True
    assert state.required is False


def test_recomputation_is_idempotent(screening):
    responses = {"q1": "yes", "q2": "Python and Go"}
    assert evaluate_all(screening, responses) == evaluate_all(screening, responses)


def test_visible_and_required_queries(screening):
    visible = [q.id for q in get_visible_questions(screening, {"q1": "no"})]
    required = [q.id for q in get_required_questions(screening, {"q1": "yes"})]

    assert visible == ["q1", "q4"]
    assert required == ["q1", "q2"]


def test_section_visible_while_any_question_is():
    assessment = build_assessment(
        [question("q1")],
        [question("q2", conditionalLogic=[rule("q1", "equals", "yes")])],
    )
    second = assessment.ordered_sections()[1]

    assert is_section_visible(second, {}) is False
    assert is_section_visible(second, {"q1": "yes"}) is True


def test_dependency_lookups(screening):
    assert get_question_dependencies(screening.find_question("q3")) == ["q2"]
    assert [q.id for q in get_dependent_questions("q1", screening)] == ["q2"]
    assert get_dependent_questions("q4", screening) == []


def test_prune_cascades_through_hidden_questions(screening):
    responses, states = resolve_and_prune(
        screening, {"q1": "no", "q2": "python", "q3": 10, "q4": "notes"}
    )

    # q2 is hidden by q1, and dropping q2's answer hides q3 in turn.
    assert responses == {"q1": "no", "q4": "notes"}
    assert states["q2"].visible is False
    assert states["q3"].visible is False


def test_prune_keeps_unknown_ids(screening):
    responses, _ = resolve_and_prune(screening, {"q1": "yes", "extra": 1})
    assert responses == {"q1": "yes", "extra": 1}

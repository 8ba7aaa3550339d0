"""
Save-time checks on an assessment's conditional-rule graph.

Rules may only reference a question that appears strictly earlier in the
assessment (section order, then question order). Besides that positional
check, the graph is searched for cycles so that data written by other
tools than the builder is rejected too.
"""

from typing import Dict, List, Set

from ..entities.assessment import Assessment


def _dependency_graph(assessment: Assessment) -> Dict[str, List[str]]:
    return {
        question.id: [rule.depends_on_question_id for rule in question.conditional_logic]
        for question in assessment.iter_questions()
    }


def _has_cycle(start: str, graph: Dict[str, List[str]]) -> bool:
    """Depth-first search for a path from ``start`` back onto the current path."""
    on_path: Set[str] = set()
    finished: Set[str] = set()

    def visit(node: str) -> bool:
        if node in on_path:
            return True
        if node in finished or node not in graph:
            return False

        on_path.add(node)
        for dependency in graph[node]:
            if visit(dependency):
                return True
        on_path.discard(node)
        finished.add(node)
        return False

    return visit(start)


def validate_conditional_logic(assessment: Assessment) -> List[str]:
    """Return human readable problems with the assessment's conditional rules."""
    problems: List[str] = []
    questions = list(assessment.iter_questions())
    position = {question.id: index for index, question in enumerate(questions)}
    graph = _dependency_graph(assessment)

    for question in questions:
        for rule in question.conditional_logic:
            dependency = rule.depends_on_question_id

            if dependency == question.id:
                problems.append(f'Question "{question.title}" cannot depend on itself')
            elif dependency not in position:
                problems.append(
                    f'Question "{question.title}" depends on non-existent question ID: {dependency}'
                )
            elif position[dependency] > position[question.id]:
                problems.append(
                    f'Question "{question.title}" depends on a later question: {dependency}'
                )

        if _has_cycle(question.id, graph):
            problems.append(
                f'Circular dependency detected involving question "{question.title}"'
            )

    return problems

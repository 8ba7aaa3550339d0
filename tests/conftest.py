from __future__ import annotations

from typing import Any

import pytest

from talentflow.adapters.db.memory.repositories import (
    InMemoryAssessmentRepository,
    InMemoryAssessmentResponseRepository,
)
from talentflow.domain.entities.assessment import Assessment


def question(qid: str, qtype: str = "short-text", **fields: Any) -> dict:
    """Question payload with sensible defaults."""
    data = {"id": qid, "type": qtype, "title": fields.pop("title", f"Question {qid}")}
    data.update(fields)
    return data


def rule(depends_on: str, condition: str, value: Any = None, action: str = "show") -> dict:
    return {
        "dependsOnQuestionId": depends_on,
        "condition": condition,
        "value": value,
        "action": action,
    }


def build_assessment(*sections: list[dict], title: str = "Backend engineer screen") -> Assessment:
    """One section per positional argument, questions ordered as given."""
    return Assessment.from_dict(
        {
            "title": title,
            "sections": [
                {
                    "id": f"s{index + 1}",
                    "title": f"Section {index + 1}",
                    "order": index,
                    "questions": [
                        {**q, "order": position} for position, q in enumerate(questions)
                    ],
                }
                for index, questions in enumerate(sections)
            ],
        }
    )


def screening_payload() -> dict:
    """Two sections; q2 appears when q1 is "yes", q3 when q2 mentions python."""
    return {
        "title": "Backend engineer screen",
        "job_id": "job-1",
        "sections": [
            {
                "id": "s1",
                "title": "Basics",
                "order": 0,
                "questions": [
                    question("q1", "single-choice", options=["yes", "no"], required=True, order=0),
                    question(
                        "q2",
                        "short-text",
                        required=True,
                        order=1,
                        conditionalLogic=[rule("q1", "equals", "yes")],
                    ),
                ],
            },
            {
                "id": "s2",
                "title": "Details",
                "order": 1,
                "questions": [
                    question(
                        "q3",
                        "numeric",
                        order=0,
                        validation=[{"type": "numeric-range", "value": {"min": 0, "max": 40}}],
                        conditionalLogic=[rule("q2", "contains", "python")],
                    ),
                    question("q4", "long-text", order=1),
                ],
            },
        ],
    }


@pytest.fixture
def screening() -> Assessment:
    return Assessment.from_dict(screening_payload())


@pytest.fixture
def assessment_repo() -> InMemoryAssessmentRepository:
    return InMemoryAssessmentRepository()


@pytest.fixture
def response_repo() -> InMemoryAssessmentResponseRepository:
    return InMemoryAssessmentResponseRepository()

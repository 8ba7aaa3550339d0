"""Assessment domain entity: sections of typed questions with validation and conditional rules."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from ..value_objects.identifiers import AssessmentId


def _pick(data: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    """Read a key that may arrive in snake_case or camelCase."""
    if snake in data:
        return data[snake]
    return data.get(camel, default)


@dataclass
class ValidationRule:
    """Static constraint on a single answer."""

    type: str
    value: Any = None
    message: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationRule":
        return cls(
            type=data.get("type", ""),
            value=data.get("value"),
            message=data.get("message") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value, "message": self.message}


@dataclass
class ConditionalRule:
    """Show/hide/require directive keyed to another question's answer."""

    depends_on_question_id: str
    condition: str
    value: Any = None
    action: str = "show"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConditionalRule":
        return cls(
            depends_on_question_id=_pick(
                data, "depends_on_question_id", "dependsOnQuestionId", ""
            ),
            condition=data.get("condition", ""),
            value=data.get("value"),
            action=data.get("action", "show"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "depends_on_question_id": self.depends_on_question_id,
            "condition": self.condition,
            "value": self.value,
            "action": self.action,
        }


@dataclass
class Question:
    """A single typed question inside a section."""

    id: str
    type: str
    title: str
    required: bool = False
    description: Optional[str] = None
    options: Optional[List[str]] = None
    validation: List[ValidationRule] = field(default_factory=list)
    conditional_logic: List[ConditionalRule] = field(default_factory=list)
    order: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        options = data.get("options")
        return cls(
            id=data["id"],
            type=data.get("type", ""),
            title=data.get("title", ""),
            required=bool(data.get("required", False)),
            description=data.get("description"),
            options=list(options) if options is not None else None,
            validation=[
                ValidationRule.from_dict(rule) for rule in data.get("validation") or []
            ],
            conditional_logic=[
                ConditionalRule.from_dict(rule)
                for rule in _pick(data, "conditional_logic", "conditionalLogic") or []
            ],
            order=int(data.get("order", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "required": self.required,
            "description": self.description,
            "options": list(self.options) if self.options is not None else None,
            "validation": [rule.to_dict() for rule in self.validation],
            "conditional_logic": [rule.to_dict() for rule in self.conditional_logic],
            "order": self.order,
        }


@dataclass
class AssessmentSection:
    """Ordered grouping of questions."""

    id: str
    title: str
    questions: List[Question] = field(default_factory=list)
    description: Optional[str] = None
    order: int = 0

    def ordered_questions(self) -> List[Question]:
        """Questions sorted by their order (stable for ties)."""
        return sorted(self.questions, key=lambda q: q.order)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssessmentSection":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            questions=[Question.from_dict(q) for q in data.get("questions") or []],
            description=data.get("description"),
            order=int(data.get("order", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "order": self.order,
            "questions": [q.to_dict() for q in self.questions],
        }


@dataclass
class Assessment:
    """Assessment domain entity."""

    assessment_id: AssessmentId
    title: str
    description: str = ""
    job_id: Optional[str] = None
    sections: List[AssessmentSection] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def id(self) -> str:
        return self.assessment_id.value

    def ordered_sections(self) -> List[AssessmentSection]:
        """Sections sorted by their order (stable for ties)."""
        return sorted(self.sections, key=lambda s: s.order)

    def iter_questions(self) -> Iterator[Question]:
        """Yield every question in section order, then question order."""
        for section in self.ordered_sections():
            yield from section.ordered_questions()

    def question_ids(self) -> List[str]:
        return [q.id for q in self.iter_questions()]

    def find_question(self, question_id: str) -> Optional[Question]:
        for question in self.iter_questions():
            if question.id == question_id:
                return question
        return None

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assessment":
        """Build an assessment from a plain (JSON-like) dict."""
        raw_id = data.get("id")
        assessment_id = (
            AssessmentId.from_string(raw_id) if raw_id else AssessmentId.generate()
        )
        assessment = cls(
            assessment_id=assessment_id,
            title=data.get("title", ""),
            description=data.get("description") or "",
            job_id=_pick(data, "job_id", "jobId"),
            sections=[
                AssessmentSection.from_dict(s) for s in data.get("sections") or []
            ],
        )
        created_at = _pick(data, "created_at", "createdAt")
        updated_at = _pick(data, "updated_at", "updatedAt")
        if isinstance(created_at, datetime):
            assessment.created_at = created_at
        if isinstance(updated_at, datetime):
            assessment.updated_at = updated_at
        return assessment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "job_id": self.job_id,
            "sections": [s.to_dict() for s in self.sections],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

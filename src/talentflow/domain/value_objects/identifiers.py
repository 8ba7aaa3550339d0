"""UUID-backed identifiers for assessments and responses.

Ids are kept in canonical lowercase hyphenated form so the same record is
found under the same key in the remote and the local store.
"""

import uuid
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class UuidIdentifier:
    """Base for immutable UUID identifiers; subclasses only set ``label``."""

    value: str
    label: ClassVar[str] = "Identifier"

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValueError(f"{self.label} must be a non-empty string")
        try:
            canonical = str(uuid.UUID(self.value))
        except ValueError:
            raise ValueError(f"{self.label} must be a valid UUID, got {self.value!r}")
        object.__setattr__(self, "value", canonical)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls):
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str):
        return cls(value)


@dataclass(frozen=True)
class AssessmentId(UuidIdentifier):
    label: ClassVar[str] = "Assessment ID"


@dataclass(frozen=True)
class ResponseId(UuidIdentifier):
    label: ClassVar[str] = "Response ID"

"""
Persistence port used by an assessment-taking session.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class ResponsePersistence(ABC):
    """Stores a session's answers; either call may raise."""

    @abstractmethod
    async def save(self, responses: Dict[str, Any]) -> None:
        """Store the answers as a draft."""
        pass

    @abstractmethod
    async def submit(self, responses: Dict[str, Any]) -> None:
        """Store the answers as a final submission."""
        pass

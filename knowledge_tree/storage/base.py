"""
Base document source interface for Knowledge Tree.
"""

from abc import ABC, abstractmethod
from typing import Any


class DocumentSource(ABC):
    """
    Abstract base class for topic document sources.

    A source hands back the structured record of one topic. Implementations
    may read JSON files, in-memory fixtures, etc.
    """

    @abstractmethod
    def load(self, key: str) -> dict[str, Any]:
        """
        Return the structured document stored under ``key``.

        Raises:
            SourceUnavailable: the document cannot be obtained.
        """
        pass

    @abstractmethod
    def describe(self, key: str) -> str:
        """Human-readable identity of the document, used in error messages."""
        pass

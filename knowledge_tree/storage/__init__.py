"""
Document sources for Knowledge Tree.

Provides the abstract source interface and concrete implementations
for JSON files and in-memory documents.
"""

from .base import DocumentSource
from .json_source import JsonFileSource, InMemoryDocumentSource

__all__ = [
    "DocumentSource",
    "JsonFileSource",
    "InMemoryDocumentSource",
]

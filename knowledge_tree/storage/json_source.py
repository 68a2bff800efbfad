"""
JSON-backed document sources.

JsonFileSource reads one topic document per file from a base directory.
InMemoryDocumentSource serves already-decoded documents, for tests and
embedding callers.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from ..exceptions import SourceUnavailable
from .base import DocumentSource


logger = logging.getLogger(__name__)


class JsonFileSource(DocumentSource):
    """
    Reads topic documents from JSON files.

    Keys are file names relative to ``base_dir``; absolute paths are used
    as given.
    """

    def __init__(self, base_dir: str | Path = ".", encoding: str = "utf-8") -> None:
        self._base_dir = Path(base_dir)
        self._encoding = encoding

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, key: str) -> Path:
        path = Path(key)
        return path if path.is_absolute() else self._base_dir / path

    def describe(self, key: str) -> str:
        return str(self.path_for(key))

    def load(self, key: str) -> dict[str, Any]:
        """Read and decode one JSON document."""
        path = self.path_for(key)
        try:
            with path.open("r", encoding=self._encoding) as f:
                document = json.load(f)
        except OSError as e:
            raise SourceUnavailable(f"Cannot open document {path}: {e}", source=str(path)) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceUnavailable(f"Cannot parse JSON in {path}: {e}", source=str(path)) from e

        logger.debug(f"Read document: {path}")
        return document


class InMemoryDocumentSource(DocumentSource):
    """
    In-memory document source for testing and development.

    Documents are copied on the way in and out, so callers cannot change a
    stored document after the fact.
    """

    def __init__(self, documents: dict[str, Any] | None = None) -> None:
        self._documents: dict[str, Any] = {}
        for key, document in (documents or {}).items():
            self.put(key, document)

    def put(self, key: str, document: Any) -> None:
        self._documents[key] = copy.deepcopy(document)

    def describe(self, key: str) -> str:
        return f"memory://{key}"

    def load(self, key: str) -> dict[str, Any]:
        if key not in self._documents:
            raise SourceUnavailable(f"Document not found: {key}", source=self.describe(key))
        return copy.deepcopy(self._documents[key])

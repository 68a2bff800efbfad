"""
Pytest configuration for Knowledge Tree tests.

Provides shared documents, trees and registries.
"""

from pathlib import Path

import pytest

from knowledge_tree import (
    InMemoryDocumentSource,
    KnowledgeTree,
    TopicRegistry,
)


DATA_DIR = Path(__file__).parent.parent / "knowledge_tree" / "data"


def leaf(name: str, domain: str = "animale", kind: str = "animal") -> dict:
    """Entity record in document form."""
    return {"entitate": {"nume": name, "domeniu": domain, "tip": kind}}


def question(text: str, yes: dict, no: dict) -> dict:
    """Question record in document form."""
    return {"intrebare": text, "da": yes, "nu": no}


@pytest.fixture
def data_dir():
    """Directory with the bundled topic documents."""
    return DATA_DIR


@pytest.fixture
def flying_document():
    """Two-leaf tree: "zboara?" -> vultur / pisica."""
    return {
        "radacina": question(
            "zboara?",
            leaf("vultur", kind="pasare"),
            leaf("pisica", kind="mamifer"),
        )
    }


@pytest.fixture
def deep_document():
    """Three-level tree with an uneven shape."""
    return {
        "radacina": question(
            "Este mamifer?",
            question(
                "Latra?",
                leaf("caine", kind="mamifer"),
                leaf("pisica", kind="mamifer"),
            ),
            leaf("crap", kind="peste"),
        )
    }


@pytest.fixture
def flying_tree(flying_document):
    """Parsed two-leaf tree."""
    return KnowledgeTree.from_document(flying_document, source="zboara.json")


@pytest.fixture
def registry(flying_document, deep_document):
    """Registry with "animale" (two leaves) and "mamifere" (three levels)."""
    registry = TopicRegistry()
    registry.load("animale", flying_document)
    registry.load("mamifere", deep_document)
    return registry


@pytest.fixture
def memory_source(flying_document, deep_document):
    """In-memory source keyed by file-like names."""
    return InMemoryDocumentSource({
        "animale.json": flying_document,
        "mamifere.json": deep_document,
    })

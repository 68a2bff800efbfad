"""
Knowledge Tree Domain Models.

Pydantic models for entities and tree nodes, the document parser,
and the KnowledgeTree that owns a topic's nodes.
"""

from .base import (
    Entity,
    LeafNode,
    QuestionNode,
    TreeNode,
    GuessOutcome,
    GuessState,
    InconclusiveReason,
    ConfirmationPolicy,
)

from .document import (
    parse_document,
    parse_node,
)

from .tree import KnowledgeTree

__all__ = [
    # Base models
    "Entity",
    "LeafNode",
    "QuestionNode",
    "TreeNode",
    "GuessOutcome",
    # Enums
    "GuessState",
    "InconclusiveReason",
    "ConfirmationPolicy",
    # Documents
    "parse_document",
    "parse_node",
    # Tree
    "KnowledgeTree",
]

"""
Knowledge Tree Library.

A 20-questions guessing engine: binary trees of yes/no questions ending in
named entities, loaded per topic from declarative documents and walked
against a stream of answers.

Quick Start:
    from knowledge_tree import TopicRegistry, GuessSession, tokenize

    registry = TopicRegistry()
    registry.load("animale", {
        "radacina": {
            "intrebare": "zboara?",
            "da": {"entitate": {"nume": "vultur", "domeniu": "animale", "tip": "pasare"}},
            "nu": {"entitate": {"nume": "pisica", "domeniu": "animale", "tip": "mamifer"}},
        }
    })

    outcome = GuessSession(registry).run(tokenize("animale da da"))
    outcome.label()  # "vultur"
"""

from .exceptions import (
    KnowledgeTreeError,
    SourceUnavailable,
    MalformedDocument,
    UnknownTopic,
    TraversalError,
    InputExhausted,
    UnrecognizedAnswer,
)

from .models import (
    Entity,
    LeafNode,
    QuestionNode,
    TreeNode,
    KnowledgeTree,
    GuessOutcome,
    GuessState,
    InconclusiveReason,
    ConfirmationPolicy,
    parse_document,
)

from .storage import (
    DocumentSource,
    JsonFileSource,
    InMemoryDocumentSource,
)

from .services import (
    TopicRegistry,
    GuessSession,
    GuessTraversal,
    TraversalState,
    guess,
    tokenize,
    iter_tokens,
    normalize_answer,
)

from .config import Settings

__all__ = [
    # Exceptions
    "KnowledgeTreeError",
    "SourceUnavailable",
    "MalformedDocument",
    "UnknownTopic",
    "TraversalError",
    "InputExhausted",
    "UnrecognizedAnswer",
    # Models
    "Entity",
    "LeafNode",
    "QuestionNode",
    "TreeNode",
    "KnowledgeTree",
    "GuessOutcome",
    "GuessState",
    "InconclusiveReason",
    "ConfirmationPolicy",
    "parse_document",
    # Storage
    "DocumentSource",
    "JsonFileSource",
    "InMemoryDocumentSource",
    # Services
    "TopicRegistry",
    "GuessSession",
    "GuessTraversal",
    "TraversalState",
    "guess",
    "tokenize",
    "iter_tokens",
    "normalize_answer",
    # Config
    "Settings",
]

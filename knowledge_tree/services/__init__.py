"""
Services layer for Knowledge Tree.

Provides the topic registry, the guess traversal and the session
that ties them together.
"""

from .registry import TopicRegistry
from .session import GuessSession
from .traversal import (
    AFFIRMATIVE_ANSWERS,
    NEGATIVE_ANSWERS,
    GuessTraversal,
    TraversalState,
    guess,
    iter_tokens,
    normalize_answer,
    parse_answer,
    tokenize,
)

__all__ = [
    "TopicRegistry",
    "GuessSession",
    "AFFIRMATIVE_ANSWERS",
    "NEGATIVE_ANSWERS",
    "GuessTraversal",
    "TraversalState",
    "guess",
    "iter_tokens",
    "normalize_answer",
    "parse_answer",
    "tokenize",
]

"""
Exceptions for Knowledge Tree operations.

Load-time errors (SourceUnavailable, MalformedDocument) propagate to whoever
started the load. Traversal errors (InputExhausted, UnrecognizedAnswer) are
raised by the token reader and absorbed into an inconclusive GuessOutcome.
"""


class KnowledgeTreeError(Exception):
    """Base exception for knowledge tree operations."""
    pass


class SourceUnavailable(KnowledgeTreeError):
    """Raised when a topic document cannot be obtained."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class MalformedDocument(KnowledgeTreeError):
    """Raised when a document does not describe a valid tree."""

    def __init__(self, source: str, path: str, cause: str):
        super().__init__(f"Malformed document {source!r} at '{path}': {cause}")
        self.source = source
        self.path = path
        self.cause = cause


class UnknownTopic(KnowledgeTreeError):
    """Raised when a topic has no registered tree."""

    def __init__(self, topic: str):
        super().__init__(f"Topic not found: {topic}")
        self.topic = topic


class TraversalError(KnowledgeTreeError):
    """Base exception for errors while walking a tree."""
    pass


class InputExhausted(TraversalError):
    """Raised when the answer source runs out before a terminal state."""
    pass


class UnrecognizedAnswer(TraversalError):
    """Raised when a token is neither affirmative nor negative."""

    def __init__(self, token: str):
        super().__init__(f"Unrecognized answer: {token!r}")
        self.token = token

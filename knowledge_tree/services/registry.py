"""
TopicRegistry - keyed collection of topic trees.

Each topic name maps to one KnowledgeTree. Loading a topic builds the new
tree completely before installing it, so a failed load leaves the previous
tree (or the topic's absence) untouched.
"""

import logging
from collections.abc import Iterator
from typing import Any

from ..exceptions import MalformedDocument, SourceUnavailable, UnknownTopic
from ..models import KnowledgeTree
from ..storage import DocumentSource


logger = logging.getLogger(__name__)


class TopicRegistry:
    """
    Owns one KnowledgeTree per topic.

    Copying a registry (``copy()``, ``copy.copy`` or ``copy.deepcopy``)
    clones every tree, so the copy shares no nodes with the original.
    """

    def __init__(self, trees: dict[str, KnowledgeTree] | None = None) -> None:
        self._trees: dict[str, KnowledgeTree] = dict(trees or {})

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def load(self, topic: str, document: Any, source: str | None = None) -> KnowledgeTree:
        """
        Parse ``document`` and install it as the tree for ``topic``.

        Raises:
            MalformedDocument: the document does not describe a valid tree.
        """
        try:
            tree = KnowledgeTree.from_document(document, source=source or topic)
        except MalformedDocument as e:
            logger.warning(f"Failed to load topic '{topic}': {e}")
            raise
        return self.install(topic, tree)

    def load_from_source(
        self,
        topic: str,
        source: DocumentSource,
        key: str | None = None,
    ) -> KnowledgeTree:
        """
        Fetch the topic document from ``source`` and install it.

        ``key`` defaults to the topic name.

        Raises:
            SourceUnavailable: the document cannot be obtained.
            MalformedDocument: the document does not describe a valid tree.
        """
        key = key or topic
        try:
            document = source.load(key)
        except SourceUnavailable as e:
            logger.warning(f"Failed to load topic '{topic}': {e}")
            raise
        return self.load(topic, document, source=source.describe(key))

    def install(self, topic: str, tree: KnowledgeTree) -> KnowledgeTree:
        """Install an already built tree, replacing any previous one."""
        replaced = topic in self._trees
        self._trees[topic] = tree
        logger.info(
            f"{'Reloaded' if replaced else 'Loaded'} topic '{topic}' "
            f"({tree.node_count()} nodes, depth {tree.depth()})"
        )
        return tree

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def exists(self, topic: str) -> bool:
        return topic in self._trees

    def get(self, topic: str) -> KnowledgeTree:
        """
        Return the tree of an existing topic.

        Raises:
            UnknownTopic: no tree is registered under ``topic``.
        """
        try:
            return self._trees[topic]
        except KeyError:
            raise UnknownTopic(topic) from None

    def topics(self) -> list[str]:
        """Registered topic names, sorted."""
        return sorted(self._trees)

    def __contains__(self, topic: object) -> bool:
        return topic in self._trees

    def __len__(self) -> int:
        return len(self._trees)

    def __iter__(self) -> Iterator[str]:
        return iter(self.topics())

    # ─────────────────────────────────────────────────────────────────────────
    # Copy and display
    # ─────────────────────────────────────────────────────────────────────────

    def copy(self) -> "TopicRegistry":
        return TopicRegistry({topic: tree.clone() for topic, tree in self._trees.items()})

    def __copy__(self) -> "TopicRegistry":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "TopicRegistry":
        return self.copy()

    def summary(self) -> dict[str, int]:
        """Node count per topic."""
        return {topic: self._trees[topic].node_count() for topic in self.topics()}

    def __str__(self) -> str:
        topics = ", ".join(f"{topic}({count} nodes)" for topic, count in self.summary().items())
        return f"TopicRegistry{{ topics=[{topics}] }}"

    def __repr__(self) -> str:
        return str(self)

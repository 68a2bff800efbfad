"""
KnowledgeTree - owner of one topic's decision tree.

A tree is either empty (no root) or owns a root node and everything below
it. Structural queries and cloning walk the tree with an explicit stack.
"""

import logging
from collections.abc import Iterator
from typing import Any

from .base import Entity, LeafNode, QuestionNode, TreeNode
from .document import DEFAULT_SOURCE, parse_document


logger = logging.getLogger(__name__)


class KnowledgeTree:
    """
    A binary tree of yes/no questions ending in entities.

    An empty tree is a valid state and is distinct from a tree whose root is
    a single leaf.
    """

    def __init__(self, root: TreeNode | None = None) -> None:
        self._root = root

    @classmethod
    def from_document(cls, document: Any, source: str = DEFAULT_SOURCE) -> "KnowledgeTree":
        """Build a tree from a structured topic document."""
        return cls().load_from(document, source=source)

    @property
    def root(self) -> TreeNode | None:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    # ─────────────────────────────────────────────────────────────────────────
    # Structural queries
    # ─────────────────────────────────────────────────────────────────────────

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        if self._root is None:
            return 0

        deepest = 0
        stack: list[tuple[TreeNode, int]] = [(self._root, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            if isinstance(node, QuestionNode):
                stack.append((node.yes, level + 1))
                stack.append((node.no, level + 1))
        return deepest

    def node_count(self) -> int:
        """Total number of question and leaf nodes."""
        return sum(1 for _ in self.iter_nodes())

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Yield nodes in pre-order, yes branch before no branch."""
        if self._root is None:
            return
        stack: list[TreeNode] = [self._root]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, QuestionNode):
                stack.append(node.no)
                stack.append(node.yes)

    def entities(self) -> list[Entity]:
        """Entities of all leaves, left to right."""
        return [node.entity for node in self.iter_nodes() if isinstance(node, LeafNode)]

    # ─────────────────────────────────────────────────────────────────────────
    # Copy and load
    # ─────────────────────────────────────────────────────────────────────────

    def clone(self) -> "KnowledgeTree":
        """
        Deep copy of the tree.

        Every node and every entity of the clone is a new object; nothing is
        shared with this tree.
        """
        if self._root is None:
            return KnowledgeTree()

        built: list[TreeNode] = []
        stack: list[tuple[TreeNode, bool]] = [(self._root, False)]
        while stack:
            node, children_done = stack.pop()
            if isinstance(node, LeafNode):
                built.append(LeafNode(entity=node.entity.model_copy()))
            elif children_done:
                no_branch = built.pop()
                yes_branch = built.pop()
                built.append(QuestionNode(question=node.question, yes=yes_branch, no=no_branch))
            else:
                stack.append((node, True))
                stack.append((node.no, False))
                stack.append((node.yes, False))

        return KnowledgeTree(built.pop())

    def __copy__(self) -> "KnowledgeTree":
        return self.clone()

    def __deepcopy__(self, memo: dict) -> "KnowledgeTree":
        return self.clone()

    def load_from(self, document: Any, source: str = DEFAULT_SOURCE) -> "KnowledgeTree":
        """
        Replace the root with the tree described by ``document``.

        The current root is kept if parsing fails.

        Raises:
            MalformedDocument: the document does not describe a valid tree.
        """
        self._root = parse_document(document, source=source)
        logger.debug(f"Loaded tree from {source}: {self}")
        return self

    def __str__(self) -> str:
        return f"KnowledgeTree{{ depth={self.depth()}, nodes={self.node_count()} }}"

    def __repr__(self) -> str:
        return str(self)

"""
Guess traversal over a KnowledgeTree.

The traversal is a small state machine fed one answer token at a time:

    AT_NODE ──answer──▶ AT_NODE | AWAITING_CONFIRMATION | INCONCLUSIVE
    AWAITING_CONFIRMATION ──token──▶ RESOLVED | INCONCLUSIVE

``guess`` drives it from any iterable of tokens. Running out of tokens is
the only abort signal. Prompting and logging hang off the optional
``on_question`` observer and never change the outcome.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import TextIO

from ..exceptions import InputExhausted, UnrecognizedAnswer
from ..models import (
    ConfirmationPolicy,
    GuessOutcome,
    InconclusiveReason,
    KnowledgeTree,
    LeafNode,
    QuestionNode,
    TreeNode,
)


logger = logging.getLogger(__name__)


AFFIRMATIVE_ANSWERS = frozenset({"da", "d", "y", "yes"})
NEGATIVE_ANSWERS = frozenset({"nu", "n", "no"})

QuestionObserver = Callable[[QuestionNode], None]


class TraversalState(str, Enum):
    """States of a guess traversal."""
    AT_NODE = "at_node"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    RESOLVED = "resolved"
    INCONCLUSIVE = "inconclusive"


# ─────────────────────────────────────────────────────────────────────────────
# Tokens
# ─────────────────────────────────────────────────────────────────────────────

def normalize_answer(token: str) -> bool | None:
    """True for an affirmative token, False for a negative one, else None."""
    lowered = token.strip().lower()
    if lowered in AFFIRMATIVE_ANSWERS:
        return True
    if lowered in NEGATIVE_ANSWERS:
        return False
    return None


def parse_answer(token: str) -> bool:
    """
    Interpret a yes/no token.

    Raises:
        UnrecognizedAnswer: the token is in neither answer set.
    """
    decision = normalize_answer(token)
    if decision is None:
        raise UnrecognizedAnswer(token)
    return decision


def tokenize(text: str) -> Iterator[str]:
    """Split whitespace-separated text into tokens."""
    return iter(text.split())


def iter_tokens(stream: TextIO) -> Iterator[str]:
    """Lazily yield whitespace-separated tokens from a text stream."""
    for line in stream:
        yield from line.split()


def read_token(tokens: Iterator[str]) -> str:
    """
    Take the next token.

    Raises:
        InputExhausted: no token is left.
    """
    try:
        return next(tokens)
    except StopIteration:
        raise InputExhausted("Answer source exhausted") from None


# ─────────────────────────────────────────────────────────────────────────────
# State machine
# ─────────────────────────────────────────────────────────────────────────────

class GuessTraversal:
    """
    One walk from the root of a tree to a resolved or inconclusive end.

    Feed tokens with ``feed``; call ``exhaust`` when the input runs out.
    """

    def __init__(
        self,
        tree: KnowledgeTree,
        policy: ConfirmationPolicy = ConfirmationPolicy.STRICT,
        on_question: QuestionObserver | None = None,
    ) -> None:
        self._policy = policy
        self._on_question = on_question
        self._node: TreeNode | None = tree.root
        self._state = TraversalState.AT_NODE
        self._outcome: GuessOutcome | None = None
        self._questions_asked = 0

        if self._node is None:
            self._finish(GuessOutcome.inconclusive(InconclusiveReason.EMPTY_TREE))
        else:
            self._settle()

    @property
    def state(self) -> TraversalState:
        return self._state

    @property
    def current_node(self) -> TreeNode | None:
        return self._node

    @property
    def outcome(self) -> GuessOutcome | None:
        return self._outcome

    @property
    def is_finished(self) -> bool:
        return self._outcome is not None

    @property
    def questions_asked(self) -> int:
        return self._questions_asked

    def feed(self, token: str) -> TraversalState:
        """Apply one token and return the new state."""
        if self.is_finished:
            return self._state

        if self._state == TraversalState.AWAITING_CONFIRMATION:
            self._confirm(token)
            return self._state

        node = self._node
        try:
            decision = parse_answer(token)
        except UnrecognizedAnswer as e:
            logger.debug(f"{e} at question {node}")
            self._finish(self._inconclusive(InconclusiveReason.UNRECOGNIZED_ANSWER))
            return self._state

        self._questions_asked += 1
        self._node = node.yes if decision else node.no
        logger.debug(f"{node} -> {'yes' if decision else 'no'}")
        self._settle()
        return self._state

    def exhaust(self) -> GuessOutcome:
        """Signal that no more tokens will arrive and return the outcome."""
        if self._outcome is not None:
            return self._outcome

        if (
            self._state == TraversalState.AWAITING_CONFIRMATION
            and self._policy == ConfirmationPolicy.IMPLICIT_ACCEPT
        ):
            self._finish(GuessOutcome.resolved(self._node.entity.name, self._questions_asked))
        else:
            self._finish(self._inconclusive(InconclusiveReason.INPUT_EXHAUSTED))
        return self._outcome

    def _settle(self) -> None:
        """Enter the state matching the current node."""
        node = self._node
        if isinstance(node, QuestionNode):
            self._state = TraversalState.AT_NODE
            if self._on_question is not None:
                self._on_question(node)
        elif isinstance(node, LeafNode) and getattr(node, "entity", None) is not None:
            self._state = TraversalState.AWAITING_CONFIRMATION
        else:
            logger.warning(f"Reached a node without an entity: {type(node).__name__}")
            self._finish(self._inconclusive(InconclusiveReason.MISSING_ENTITY))

    def _confirm(self, token: str) -> None:
        entity = self._node.entity
        decision = normalize_answer(token)
        if decision is True:
            self._finish(GuessOutcome.resolved(entity.name, self._questions_asked))
        elif decision is False:
            self._finish(self._inconclusive(InconclusiveReason.REJECTED))
        else:
            logger.debug(f"Unrecognized confirmation {token!r} for {entity.name}")
            self._finish(self._inconclusive(InconclusiveReason.UNRECOGNIZED_ANSWER))

    def _inconclusive(self, reason: InconclusiveReason) -> GuessOutcome:
        return GuessOutcome.inconclusive(reason, self._questions_asked)

    def _finish(self, outcome: GuessOutcome) -> None:
        self._outcome = outcome
        self._state = (
            TraversalState.RESOLVED if outcome.is_resolved else TraversalState.INCONCLUSIVE
        )


def guess(
    tree: KnowledgeTree,
    tokens: Iterable[str],
    policy: ConfirmationPolicy = ConfirmationPolicy.STRICT,
    on_question: QuestionObserver | None = None,
) -> GuessOutcome:
    """
    Walk ``tree`` using answers read from ``tokens``.

    Consumes exactly the tokens it needs: one per question answered plus one
    confirmation. Never raises for bad or missing input; those end the walk
    with an inconclusive outcome.
    """
    traversal = GuessTraversal(tree, policy=policy, on_question=on_question)
    answers = iter(tokens)

    while not traversal.is_finished:
        try:
            token = read_token(answers)
        except InputExhausted:
            return traversal.exhaust()
        traversal.feed(token)

    return traversal.outcome

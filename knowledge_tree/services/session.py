"""
GuessSession - plays one topic of a registry against an answer source.
"""

import logging
from collections.abc import Iterable

from ..exceptions import InputExhausted, KnowledgeTreeError, UnknownTopic
from ..models import ConfirmationPolicy, GuessOutcome, InconclusiveReason, KnowledgeTree
from .registry import TopicRegistry
from .traversal import QuestionObserver, guess, read_token


logger = logging.getLogger(__name__)


class GuessSession:
    """
    Session over a shared registry.

    The session does not own the registry. The current topic is checked
    against the registry when it is selected.
    """

    def __init__(
        self,
        registry: TopicRegistry,
        topic: str | None = None,
        policy: ConfirmationPolicy = ConfirmationPolicy.STRICT,
        on_question: QuestionObserver | None = None,
    ) -> None:
        self._registry = registry
        self._policy = policy
        self._on_question = on_question
        self._topic: str | None = None

        if topic is not None:
            self.select_topic(topic)

    @property
    def registry(self) -> TopicRegistry:
        return self._registry

    @property
    def current_topic(self) -> str | None:
        return self._topic

    @property
    def policy(self) -> ConfirmationPolicy:
        return self._policy

    def select_topic(self, topic: str) -> None:
        """
        Make ``topic`` the current topic.

        Raises:
            UnknownTopic: the registry has no tree for ``topic``.
        """
        if not self._registry.exists(topic):
            raise UnknownTopic(topic)
        if topic != self._topic:
            logger.info(f"Session topic: {topic}")
        self._topic = topic

    def current_tree(self) -> KnowledgeTree:
        if self._topic is None:
            raise KnowledgeTreeError("No topic selected")
        return self._registry.get(self._topic)

    def run(self, answer_source: Iterable[str]) -> GuessOutcome:
        """
        Play one game.

        The first token of ``answer_source`` names the topic; the rest are
        the answers and the final confirmation. Unknown topics and missing
        input end in an inconclusive outcome instead of an exception.
        """
        tokens = iter(answer_source)

        try:
            topic = read_token(tokens)
        except InputExhausted:
            logger.warning("Answer source exhausted before a topic was given")
            return GuessOutcome.inconclusive(InconclusiveReason.INPUT_EXHAUSTED)

        try:
            self.select_topic(topic)
        except UnknownTopic as e:
            logger.warning(str(e))
            return GuessOutcome.inconclusive(InconclusiveReason.UNKNOWN_TOPIC)

        outcome = guess(
            self._registry.get(topic),
            tokens,
            policy=self._policy,
            on_question=self._on_question,
        )
        if outcome.is_resolved:
            logger.info(f"Topic '{topic}' resolved to {outcome.entity_name}")
        else:
            logger.info(f"Topic '{topic}' inconclusive: {outcome.reason.value}")
        return outcome

    def __str__(self) -> str:
        return f"GuessSession(current_topic={self._topic}, {self._registry})"

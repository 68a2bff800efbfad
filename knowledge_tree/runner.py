"""
End-to-end game runner.

Loads the configured topics, plays one session from an answer stream and
writes the result followed by a short structure report.
"""

import logging
from collections.abc import Iterable
from typing import TextIO

from .config import Settings
from .models import GuessOutcome
from .services import GuessSession, TopicRegistry
from .storage import DocumentSource, JsonFileSource


logger = logging.getLogger(__name__)


def build_registry(settings: Settings, source: DocumentSource | None = None) -> TopicRegistry:
    """
    Load every configured topic into a new registry.

    Raises:
        SourceUnavailable: a topic document cannot be read.
        MalformedDocument: a topic document does not describe a valid tree.
    """
    source = source or JsonFileSource(settings.data_dir)
    registry = TopicRegistry()
    for topic, key in settings.topics.items():
        registry.load_from_source(topic, source, key=key)
    logger.info(f"Registry initialized: {registry}")
    return registry


def run_game(
    registry: TopicRegistry,
    answers: Iterable[str],
    output: TextIO,
    settings: Settings | None = None,
) -> GuessOutcome:
    """
    Play one session and write the result report to ``output``.

    The session starts on ``settings.default_topic``. The answers normally
    re-select the topic with their first token; when they do not, the
    report's tree depth line describes the default topic instead.
    """
    settings = settings or Settings()
    initial_topic = settings.default_topic if registry.exists(settings.default_topic) else None

    session = GuessSession(
        registry,
        topic=initial_topic,
        policy=settings.confirmation_policy,
    )
    outcome = session.run(answers)

    output.write(f"{outcome.label(settings.inconclusive_label)}\n")
    output.write("\n--- Structure checks ---\n")
    output.write(f"Registry: {registry}\n")
    if session.current_topic is not None:
        tree = session.current_tree()
        output.write(f"Current tree ({session.current_topic}) depth: {tree.depth()}\n")

    return outcome

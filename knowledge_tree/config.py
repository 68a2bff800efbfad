"""
Configuration for Knowledge Tree.

Environment variables:
    KNOWLEDGE_TREE_DATA_DIR: directory holding topic documents
        (default: the topics bundled with the package)
    KNOWLEDGE_TREE_TOPICS: "name=file,name=file" topic map override
    KNOWLEDGE_TREE_DEFAULT_TOPIC: topic a session starts on (default "tari");
        the report shows this tree when the answers never select a topic
    KNOWLEDGE_TREE_CONFIRMATION: "strict" or "implicit_accept"
    KNOWLEDGE_TREE_INCONCLUSIVE_LABEL: result text when nothing is guessed
    KNOWLEDGE_TREE_LOG_LEVEL: logging level name (default "WARNING")
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .models import ConfirmationPolicy


BUNDLED_DATA_DIR = Path(__file__).parent / "data"

DEFAULT_TOPICS = {
    "tari": "tari_arbore.json",
    "animale": "animale_arbore.json",
    "vedete": "vedeta_arbore.json",
}


def parse_topic_map(value: str) -> dict[str, str]:
    """Parse ``"name=file,name=file"`` into a topic map."""
    topics: dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, filename = item.partition("=")
        if not sep or not name.strip() or not filename.strip():
            raise ValueError(f"Invalid topic mapping: {item!r} (expected name=file)")
        topics[name.strip()] = filename.strip()
    return topics


class Settings(BaseModel):
    """Runtime settings for loading topics and running sessions."""

    data_dir: Path = Field(default=BUNDLED_DATA_DIR)
    topics: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TOPICS))
    default_topic: str = Field(
        default="tari",
        description="Starting topic; the report falls back to its tree when no topic token is accepted",
    )
    confirmation_policy: ConfirmationPolicy = ConfirmationPolicy.STRICT
    inconclusive_label: str = Field(default="NECUNOSCUT", min_length=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from KNOWLEDGE_TREE_* environment variables."""
        values: dict[str, object] = {}

        if data_dir := os.getenv("KNOWLEDGE_TREE_DATA_DIR"):
            values["data_dir"] = data_dir
        if topics := os.getenv("KNOWLEDGE_TREE_TOPICS"):
            values["topics"] = parse_topic_map(topics)
        if default_topic := os.getenv("KNOWLEDGE_TREE_DEFAULT_TOPIC"):
            values["default_topic"] = default_topic
        if policy := os.getenv("KNOWLEDGE_TREE_CONFIRMATION"):
            values["confirmation_policy"] = policy.lower()
        if label := os.getenv("KNOWLEDGE_TREE_INCONCLUSIVE_LABEL"):
            values["inconclusive_label"] = label
        if log_level := os.getenv("KNOWLEDGE_TREE_LOG_LEVEL"):
            values["log_level"] = log_level

        return cls(**values)

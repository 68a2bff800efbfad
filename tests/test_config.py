"""
Unit tests for settings.
"""

import pytest
from pydantic import ValidationError

from knowledge_tree import ConfirmationPolicy, Settings
from knowledge_tree.config import BUNDLED_DATA_DIR, DEFAULT_TOPICS, parse_topic_map


ENV_VARS = [
    "KNOWLEDGE_TREE_DATA_DIR",
    "KNOWLEDGE_TREE_TOPICS",
    "KNOWLEDGE_TREE_DEFAULT_TOPIC",
    "KNOWLEDGE_TREE_CONFIRMATION",
    "KNOWLEDGE_TREE_INCONCLUSIVE_LABEL",
    "KNOWLEDGE_TREE_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings.data_dir == BUNDLED_DATA_DIR
        assert (settings.data_dir / "tari_arbore.json").is_file()
        assert settings.topics == DEFAULT_TOPICS
        assert settings.default_topic == "tari"
        assert settings.confirmation_policy == ConfirmationPolicy.STRICT
        assert settings.inconclusive_label == "NECUNOSCUT"
        assert settings.log_level == "WARNING"

    def test_from_env(self, clean_env, tmp_path):
        clean_env.setenv("KNOWLEDGE_TREE_DATA_DIR", str(tmp_path))
        clean_env.setenv("KNOWLEDGE_TREE_TOPICS", "animale=a.json, tari=t.json")
        clean_env.setenv("KNOWLEDGE_TREE_DEFAULT_TOPIC", "animale")
        clean_env.setenv("KNOWLEDGE_TREE_CONFIRMATION", "IMPLICIT_ACCEPT")
        clean_env.setenv("KNOWLEDGE_TREE_INCONCLUSIVE_LABEL", "unknown")
        clean_env.setenv("KNOWLEDGE_TREE_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.data_dir == tmp_path
        assert settings.topics == {"animale": "a.json", "tari": "t.json"}
        assert settings.default_topic == "animale"
        assert settings.confirmation_policy == ConfirmationPolicy.IMPLICIT_ACCEPT
        assert settings.inconclusive_label == "unknown"
        assert settings.log_level == "DEBUG"

    def test_invalid_policy(self, clean_env):
        clean_env.setenv("KNOWLEDGE_TREE_CONFIRMATION", "poate")
        with pytest.raises(ValidationError):
            Settings.from_env()

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="volume")

    def test_default_topics_are_not_shared(self):
        first = Settings()
        first.topics["extra"] = "extra.json"
        assert "extra" not in Settings().topics


class TestTopicMap:

    def test_parse(self):
        assert parse_topic_map("a=a.json,b = b.json,") == {"a": "a.json", "b": "b.json"}

    @pytest.mark.parametrize("value", ["a", "=a.json", "a=", "a=a.json,b"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_topic_map(value)

"""
Tests for the runner and the command line entry point.
"""

import io
import json

import pytest

from knowledge_tree import (
    InMemoryDocumentSource,
    MalformedDocument,
    Settings,
    SourceUnavailable,
    tokenize,
)
from knowledge_tree.cli import main
from knowledge_tree.runner import build_registry, run_game


@pytest.fixture
def bundled_settings(data_dir):
    return Settings(data_dir=data_dir)


@pytest.fixture
def cli_env(monkeypatch):
    for name in ("KNOWLEDGE_TREE_TOPICS", "KNOWLEDGE_TREE_DEFAULT_TOPIC",
                 "KNOWLEDGE_TREE_CONFIRMATION", "KNOWLEDGE_TREE_INCONCLUSIVE_LABEL",
                 "KNOWLEDGE_TREE_LOG_LEVEL", "KNOWLEDGE_TREE_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestBuildRegistry:

    def test_loads_bundled_topics(self, bundled_settings):
        registry = build_registry(bundled_settings)
        assert registry.topics() == ["animale", "tari", "vedete"]
        assert registry.summary() == {"animale": 9, "tari": 9, "vedete": 7}
        assert registry.get("animale").depth() == 4

    def test_default_settings_use_bundled_topics(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        registry = build_registry(Settings())
        assert registry.summary() == {"animale": 9, "tari": 9, "vedete": 7}

    def test_custom_source(self, memory_source):
        settings = Settings(topics={"animale": "animale.json"})
        registry = build_registry(settings, source=memory_source)
        assert registry.topics() == ["animale"]

    def test_missing_document(self, tmp_path):
        with pytest.raises(SourceUnavailable):
            build_registry(Settings(data_dir=tmp_path))

    def test_malformed_document(self):
        source = InMemoryDocumentSource({"x.json": {"root": {}}})
        with pytest.raises(MalformedDocument):
            build_registry(Settings(topics={"x": "x.json"}), source=source)


class TestRunGame:

    def test_resolved_report(self, bundled_settings):
        registry = build_registry(bundled_settings)
        output = io.StringIO()

        outcome = run_game(registry, tokenize("animale nu da da"), output, settings=bundled_settings)

        assert outcome.entity_name == "vultur"
        lines = output.getvalue().splitlines()
        assert lines[0] == "vultur"
        assert "--- Structure checks ---" in lines
        assert f"Registry: {registry}" in lines
        assert "Current tree (animale) depth: 4" in lines

    def test_inconclusive_report(self, bundled_settings):
        registry = build_registry(bundled_settings)
        output = io.StringIO()

        run_game(registry, tokenize("necunoscuta da"), output, settings=bundled_settings)

        lines = output.getvalue().splitlines()
        assert lines[0] == "NECUNOSCUT"
        # The session stays on the default topic
        assert "Current tree (tari) depth: 4" in lines

    def test_default_topic_reported_without_topic_token(self, bundled_settings):
        registry = build_registry(bundled_settings)
        settings = bundled_settings.model_copy(update={"default_topic": "vedete"})
        output = io.StringIO()

        run_game(registry, [], output, settings=settings)

        lines = output.getvalue().splitlines()
        assert lines[0] == "NECUNOSCUT"
        assert "Current tree (vedete) depth: 3" in lines

    def test_custom_label(self, registry):
        output = io.StringIO()
        run_game(registry, [], output, settings=Settings(inconclusive_label="unknown"))
        assert output.getvalue().startswith("unknown\n")
        assert "Current tree" not in output.getvalue()


class TestCli:

    def test_input_and_output_files(self, cli_env, tmp_path, data_dir):
        answers = tmp_path / "tastatura.txt"
        answers.write_text("vedete\nda\nda\nda\n", encoding="utf-8")
        result = tmp_path / "raspuns.txt"

        code = main(["--data-dir", str(data_dir), "--input", str(answers), "--output", str(result)])

        assert code == 0
        assert result.read_text(encoding="utf-8").splitlines()[0] == "George Enescu"

    def test_topic_mapping_and_policy(self, cli_env, tmp_path, flying_document):
        (tmp_path / "zbor.json").write_text(json.dumps(flying_document), encoding="utf-8")
        answers = tmp_path / "in.txt"
        answers.write_text("zbor nu", encoding="utf-8")
        result = tmp_path / "out.txt"

        code = main([
            "--data-dir", str(tmp_path),
            "--topic", "zbor=zbor.json",
            "--confirmation", "implicit_accept",
            "-i", str(answers),
            "-o", str(result),
        ])

        assert code == 0
        assert result.read_text(encoding="utf-8").startswith("pisica\n")

    def test_load_failure_exit_code(self, cli_env, tmp_path):
        answers = tmp_path / "in.txt"
        answers.write_text("tari da", encoding="utf-8")
        result = tmp_path / "out.txt"

        code = main(["--data-dir", str(tmp_path), "-i", str(answers), "-o", str(result)])

        assert code == 1

    def test_invalid_topic_mapping(self, cli_env, tmp_path):
        answers = tmp_path / "in.txt"
        answers.write_text("", encoding="utf-8")
        code = main(["--topic", "fara-fisier", "-i", str(answers), "-o", str(tmp_path / "o.txt")])
        assert code == 2

    def test_undecodable_document_exit_code(self, cli_env, tmp_path):
        (tmp_path / "rau.json").write_bytes(b'{"radacina": "\xff\xfe"}')
        answers = tmp_path / "in.txt"
        answers.write_text("rau da", encoding="utf-8")

        code = main(["--data-dir", str(tmp_path), "--topic", "rau=rau.json",
                     "-i", str(answers), "-o", str(tmp_path / "out.txt")])

        assert code == 1

    def test_bundled_topics_by_default(self, cli_env, tmp_path):
        cli_env.chdir(tmp_path)
        answers = tmp_path / "in.txt"
        answers.write_text("tari da nu nu da", encoding="utf-8")
        result = tmp_path / "out.txt"

        code = main(["-i", str(answers), "-o", str(result)])

        assert code == 0
        assert result.read_text(encoding="utf-8").splitlines()[0] == "Franta"

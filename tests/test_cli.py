"""Tests for the npcgen command-line entry point."""

import json

import pytest
from unittest.mock import patch

from npcgen import cli
from npcgen.models import CollaboratorResult


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every CLI test with default settings."""
    for key in (
        "NPCGEN_ENABLE_AI",
        "NPCGEN_GEMINI_MODEL",
        "NPCGEN_TEMPERATURE",
        "NPCGEN_MAX_OUTPUT_TOKENS",
        "NPCGEN_ABILITY_VARIANCE",
        "NPCGEN_LOG_LEVEL",
        "GeminiImageAPI",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def actor_file(tmp_path, sample_actor_data):
    path = tmp_path / "veteran.json"
    path.write_text(json.dumps(sample_actor_data), encoding="utf-8")
    return path


@pytest.mark.unit
class TestGenerateCommand:
    """Tests for `npcgen generate`."""

    def test_prints_sheet_json(self, capsys):
        exit_code = cli.main(["generate", "--rating", "3", "--species", "Dwarf", "--role", "Cleric", "--seed", "7"])

        assert exit_code == 0
        sheet = json.loads(capsys.readouterr().out)
        assert sheet["rating"] == "3"
        assert sheet["species"] == "Dwarf"
        assert set(sheet["abilities"]) == {"str", "dex", "con", "int", "wis", "cha"}

    def test_seed_is_reproducible(self, capsys):
        argv = ["generate", "--rating", "1/2", "--seed", "11"]

        cli.main(argv)
        first = capsys.readouterr().out
        cli.main(argv)
        second = capsys.readouterr().out

        assert first == second

    def test_foundry_payload(self, capsys):
        exit_code = cli.main(["generate", "--rating", "5", "--name", "Bram", "--foundry", "--seed", "3"])

        assert exit_code == 0
        actor = json.loads(capsys.readouterr().out)
        assert actor["name"] == "Bram"
        assert actor["type"] == "npc"
        assert actor["system"]["details"]["cr"] == 5.0

    def test_writes_output_file(self, tmp_path, capsys):
        output = tmp_path / "out" / "npc.json"

        exit_code = cli.main(["generate", "--rating", "2", "--seed", "1", "-o", str(output)])

        assert exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["rating"] == "2"
        assert capsys.readouterr().out == ""

    def test_invalid_rating(self, capsys):
        exit_code = cli.main(["generate", "--rating", "1/3"])

        assert exit_code == 2
        assert "1/3" in capsys.readouterr().err

    def test_ai_name_used_when_available(self, capsys):
        with patch.object(cli, "GeminiFlavorProvider") as provider_class:
            async def generate(request):
                return CollaboratorResult.ok(["Tessa Stonebrow"])

            provider_class.return_value.generate = generate
            exit_code = cli.main(["generate", "--rating", "1", "--seed", "2", "--ai-name"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["name"] == "Tessa Stonebrow"

    def test_ai_name_unavailable_keeps_empty_name(self, capsys):
        exit_code = cli.main(["generate", "--rating", "1", "--seed", "2", "--ai-name"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["name"] == ""

    def test_bad_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("NPCGEN_ABILITY_VARIANCE", "many")

        assert cli.main(["generate", "--rating", "1"]) == 2
        assert "Configuration error" in capsys.readouterr().err


@pytest.mark.unit
class TestRescaleCommand:
    """Tests for `npcgen rescale`."""

    def test_rescales_actor(self, actor_file, capsys):
        exit_code = cli.main(["rescale", str(actor_file), "--rating", "5", "--role", "Fighter"])

        assert exit_code == 0
        actor = json.loads(capsys.readouterr().out)
        assert actor["name"] == "Veteran"
        assert actor["system"]["details"]["cr"] == 5.0
        assert actor["system"]["attributes"]["ac"]["flat"] == 15

    def test_merges_several_actors(self, actor_file, tmp_path, sample_actor_data, capsys):
        guard = dict(sample_actor_data, name="Guard")
        guard_file = tmp_path / "guard.json"
        guard_file.write_text(json.dumps(guard), encoding="utf-8")

        exit_code = cli.main(["rescale", str(actor_file), str(guard_file), "--rating", "2"])

        assert exit_code == 0
        actor = json.loads(capsys.readouterr().out)
        assert len(actor["items"]) == 8

    def test_unreadable_file(self, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{oops", encoding="utf-8")

        assert cli.main(["rescale", str(broken), "--rating", "2"]) == 1

    def test_invalid_target_rating(self, actor_file):
        assert cli.main(["rescale", str(actor_file), "--rating", "0.3"]) == 2

    def test_missing_file(self, tmp_path):
        assert cli.main(["rescale", str(tmp_path / "absent.json"), "--rating", "2"]) == 1

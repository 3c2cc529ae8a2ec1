"""Tests for flavour prompt construction."""

import pytest
from pydantic import ValidationError

from npcgen.flavor.prompts import FlavorRequest, build_prompt, split_name_suggestions


@pytest.mark.unit
class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_name_prompt(self):
        prompt = build_prompt(FlavorRequest(kind="name", species="Dwarf", alignment="Lawful Good"))

        assert "Generate 1 creative and appropriate name" in prompt
        assert "- Species: Dwarf" in prompt
        assert "- Alignment: Lawful Good" in prompt
        assert "template actor" not in prompt

    def test_name_prompt_defaults(self):
        prompt = build_prompt(FlavorRequest(kind="name"))

        assert "- Species: Human" in prompt
        assert "- Alignment: Neutral" in prompt

    def test_name_prompt_with_template(self):
        prompt = build_prompt(FlavorRequest(kind="name", template_actor_name="Veteran"))

        assert 'based on the template actor "Veteran"' in prompt

    def test_biography_prompt(self):
        request = FlavorRequest(
            kind="biography",
            name="Bram Ironfoot",
            species="Dwarf",
            role="Blacksmith",
            alignment="Lawful Good",
            rating="3",
            description="Lost an eye in the war",
            template_actor_name="Commoner",
            template_actor_description="an ordinary villager",
        )

        prompt = build_prompt(request)

        assert "- Name: Bram Ironfoot" in prompt
        assert "- Role: Blacksmith" in prompt
        assert "- Challenge Rating: 3" in prompt
        assert "- Based on template actor: Commoner (an ordinary villager)" in prompt
        assert "- Additional context: Lost an eye in the war" in prompt
        assert "wrapped in a <p> tag" in prompt

    def test_biography_prompt_omits_missing_fields(self):
        prompt = build_prompt(FlavorRequest(kind="biography"))

        assert "- Name:" not in prompt
        assert "- Additional context:" not in prompt
        assert "- Challenge Rating: 1" in prompt

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            FlavorRequest(kind="portrait")


@pytest.mark.unit
class TestSplitNameSuggestions:
    """Tests for split_name_suggestions()."""

    def test_drops_blank_lines(self):
        assert split_name_suggestions("Bram\n\n  Tessa  \n") == ["Bram", "Tessa"]

    def test_limits_to_five(self):
        text = "\n".join(f"Name {i}" for i in range(8))

        assert len(split_name_suggestions(text)) == 5

    def test_empty(self):
        assert split_name_suggestions("") == []

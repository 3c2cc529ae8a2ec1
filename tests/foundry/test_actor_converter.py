"""Tests for converting statblocks to FoundryVTT actor JSON."""

import re

import pytest

from npcgen.foundry.converter import convert_to_foundry, hit_dice_formula
from npcgen.foundry.parser import DEFAULT_PORTRAIT, parse_actor_data
from npcgen.generator.stats import generate_character
from npcgen.models import Item


@pytest.mark.unit
class TestHitDiceFormula:
    """Tests for hit_dice_formula()."""

    def test_positive_con(self):
        assert hit_dice_formula(80, 1) == "10d8+10"

    def test_negative_con(self):
        assert hit_dice_formula(80, -1) == "10d8-10"

    def test_small_hp(self):
        assert hit_dice_formula(7, 0) == "0d8+0"


@pytest.mark.smoke
@pytest.mark.unit
class TestConvertToFoundry:
    """Tests for convert_to_foundry()."""

    def test_statblock_only(self, cr1_fighter):
        actor = convert_to_foundry(cr1_fighter)

        assert actor["name"] == "Veteran Recruit"
        assert actor["type"] == "npc"
        assert actor["img"] == "tokens/recruit.webp"
        assert actor["prototypeToken"] == {
            "name": "Veteran Recruit",
            "texture": {"src": "tokens/recruit-token.webp"},
        }

        system = actor["system"]
        assert system["abilities"]["str"] == {"value": 14, "proficient": 0}
        assert system["attributes"]["hp"]["max"] == 78
        assert system["attributes"]["hp"]["formula"] == "9d8+9"
        assert system["attributes"]["ac"] == {"calc": "natural", "flat": 13, "formula": ""}
        assert system["attributes"]["movement"]["walk"] == 30
        assert system["details"]["cr"] == 1.0
        assert system["details"]["alignment"] == "true neutral"
        assert system["skills"] == {}
        assert "currency" not in system

    def test_fractional_cr_is_float(self, cr1_fighter):
        actor = convert_to_foundry(cr1_fighter.model_copy(update={"rating": "1/4"}))

        assert actor["system"]["details"]["cr"] == 0.25

    def test_weapon_item(self, cr1_fighter):
        item = convert_to_foundry(cr1_fighter)["items"][0]

        assert item["name"] == "Longsword"
        assert item["type"] == "weapon"
        assert re.fullmatch(r"[A-Za-z0-9]{16}", item["_id"])
        assert item["system"]["damage"]["parts"] == [["1d8+2", "slashing"]]
        assert item["system"]["attack"] == {"bonus": "3", "flat": True}
        assert item["system"]["proficient"] == 1

    def test_feature_save_dc(self, cr1_fighter):
        breath = Item(name="Poison Breath", kind="feature", save_dc=13)
        statblock = cr1_fighter.model_copy(update={"items": (breath,)})

        item = convert_to_foundry(statblock)["items"][0]

        assert item["type"] == "feat"
        assert item["system"]["save"]["dc"] == 13
        assert "attack" not in item["system"]

    def test_biography_from_description(self, cr1_fighter):
        statblock = cr1_fighter.model_copy(update={"description": "A grizzled soldier."})

        biography = convert_to_foundry(statblock)["system"]["details"]["biography"]

        assert biography["value"] == "<p>A grizzled soldier.</p>"

    def test_biography_html_kept_without_description(self, cr1_fighter):
        statblock = cr1_fighter.model_copy(update={"biography_html": "<p>Stern.</p>"})

        assert convert_to_foundry(statblock)["system"]["details"]["biography"]["value"] == "<p>Stern.</p>"

    def test_with_generated_sheet(self, zero_rng):
        character = generate_character(1, "Human", "Fighter", "Lawful Good", name="Bram", rng=zero_rng)

        actor = convert_to_foundry(character.to_statblock(), character)

        system = actor["system"]
        assert actor["img"] == DEFAULT_PORTRAIT
        assert system["abilities"]["str"]["proficient"] == 1
        assert system["abilities"]["dex"]["proficient"] == 0
        assert system["attributes"]["hp"]["formula"] == "10d8+10"
        assert system["skills"] == {"ath": {"value": 1, "prof": 2}, "acr": {"value": 1, "prof": 2}}
        assert system["traits"]["languages"]["value"] == ["common"]
        assert system["currency"] == {"cp": 0, "sp": 0, "ep": 0, "gp": 10, "pp": 0}
        assert system["details"]["alignment"] == "lawful good"

    def test_parses_back(self, cr1_fighter):
        """A converted actor reads back into the same combat numbers."""
        statblock = parse_actor_data(convert_to_foundry(cr1_fighter))

        assert statblock.rating == cr1_fighter.rating
        assert statblock.abilities == cr1_fighter.abilities
        assert statblock.hp == cr1_fighter.hp
        assert statblock.ac == cr1_fighter.ac
        assert statblock.items == cr1_fighter.items
        assert statblock.alignment == cr1_fighter.alignment

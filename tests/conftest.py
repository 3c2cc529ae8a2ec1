"""
Shared pytest fixtures for npcgen tests.
"""

import os
import random

import pytest
from pathlib import Path

from npcgen.damage.formula import parse_formula
from npcgen.models import AbilityScores, Item, Statblock


def pytest_addoption(parser):
    """Add --full flag to run entire test suite"""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite (including slow and integration tests)"
    )


def pytest_configure(config):
    """Configure test run based on flags"""
    if config.getoption("--full"):
        # Only clear the default marker expression, never an explicit -m
        if config.option.markexpr == "smoke or (not integration and not slow)":
            config.option.markexpr = ""


# Project root
PROJECT_ROOT = Path(__file__).parent.parent


class ZeroOffsetRandom(random.Random):
    """Random source whose randint() always lands as close to 0 as allowed.

    Ability offsets come out as exactly 0, so generated scores equal the
    rating baseline plus modifiers.
    """

    def randint(self, a, b):
        return max(a, min(b, 0))


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Fixed-seed random source."""
    return random.Random(1234)


@pytest.fixture
def zero_rng():
    """Random source with zero ability offsets."""
    return ZeroOffsetRandom(0)


@pytest.fixture(scope="session")
def check_api_key():
    """Check if Gemini API key is available."""
    from dotenv import load_dotenv
    load_dotenv(PROJECT_ROOT / ".env")
    api_key = os.getenv("GeminiImageAPI")
    if not api_key:
        pytest.skip("Gemini API key not found. Set GeminiImageAPI in .env file.")
    return api_key


@pytest.fixture
def longsword():
    """Melee weapon doing 1d8+2 slashing."""
    return Item(
        name="Longsword",
        kind="weapon",
        damage=(parse_formula("1d8+2 slashing"),),
        attack_bonus=3,
    )


@pytest.fixture
def cr1_fighter(longsword):
    """CR 1 template with STR 14 and a longsword."""
    return Statblock(
        name="Veteran Recruit",
        rating="1",
        abilities=AbilityScores(str=14, dex=12, con=12, int=10, wis=11, cha=10),
        hp=78,
        ac=13,
        items=(longsword,),
        portrait="tokens/recruit.webp",
        token="tokens/recruit-token.webp",
    )


@pytest.fixture
def sample_actor_data():
    """FoundryVTT dnd5e actor document for a CR 3 Veteran."""
    return {
        "name": "Veteran",
        "type": "npc",
        "img": "systems/dnd5e/tokens/humanoid/Veteran.webp",
        "system": {
            "abilities": {
                "str": {"value": 16, "proficient": 0},
                "dex": {"value": 13, "proficient": 0},
                "con": {"value": 14, "proficient": 0},
                "int": {"value": 10, "proficient": 0},
                "wis": {"value": 11, "proficient": 0},
                "cha": {"value": 10, "proficient": 0},
            },
            "attributes": {
                "hp": {"value": 58, "max": 58, "formula": "9d8+18"},
                "ac": {"flat": 17, "calc": "default"},
                "movement": {"walk": 30},
            },
            "details": {
                "cr": 3,
                "alignment": "ln",
                "type": {"value": "humanoid", "subtype": "any race"},
                "biography": {"value": "<p>Veterans are <em>professional</em> fighters &amp; soldiers.</p>"},
            },
            "skills": {"ath": {"value": 1}, "prc": {"value": 1}},
        },
        "prototypeToken": {
            "name": "Veteran",
            "texture": {"src": "systems/dnd5e/tokens/humanoid/Veteran-token.webp"},
        },
        "items": [
            {
                "name": "Multiattack",
                "type": "feat",
                "system": {"damage": {"parts": []}},
            },
            {
                "name": "Longsword",
                "type": "weapon",
                "system": {
                    "damage": {"parts": [["1d8+3", "slashing"], ["1d6", "fire"]]},
                    "attack": {"bonus": "5"},
                    "properties": {"ver": True, "fin": False},
                },
            },
            {
                "name": "Heavy Crossbow",
                "type": "weapon",
                "system": {
                    "damage": {
                        "base": {"number": 1, "denomination": 10, "bonus": "1", "types": ["piercing"]},
                    },
                    "properties": ["amm", "hvy", "ran"],
                },
            },
            {
                "name": "Poison Breath",
                "type": "feat",
                "system": {"damage": {"parts": [["3d6", "poison"]]}, "save": {"dc": 12}},
            },
            {"name": "Chain Mail", "type": "equipment", "system": {}},
        ],
    }

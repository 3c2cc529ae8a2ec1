"""Convert Statblock values to FoundryVTT dnd5e npc actor JSON."""

import logging
import secrets
import string
from typing import Any, Dict, List, Optional

from npcgen.damage.formula import format_formula
from npcgen.foundry.parser import DEFAULT_PORTRAIT
from npcgen.models import ABILITY_ORDER, GeneratedCharacter, Item, SpeedProfile, Statblock
from npcgen.ratings.table import lookup_band

logger = logging.getLogger(__name__)

FOUNDRY_ITEM_TYPES = {"weapon": "weapon", "feature": "feat", "spell": "spell"}


def _generate_id() -> str:
    """Generate a 16-character ID for embedded items.

    FoundryVTT requires exactly 16 alphanumeric characters [a-zA-Z0-9].
    """
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(16))


def hit_dice_formula(hp: int, con_modifier: int) -> str:
    """Hit-dice formula for an HP total, e.g. 80 HP with CON +1 -> '10d8+10'."""
    dice = hp // 8
    return f"{dice}d8{con_modifier * dice:+d}"


def _convert_item(item: Item) -> Dict[str, Any]:
    parts = [
        [format_formula(part.model_copy(update={"damage_type": ""})), part.damage_type]
        for part in item.damage
    ]
    system: Dict[str, Any] = {
        "description": {"value": ""},
        "damage": {"parts": parts},
    }
    if item.kind == "weapon":
        system["proficient"] = 1
        system["properties"] = sorted(item.properties)
        if item.attack_bonus is not None:
            system["attack"] = {"bonus": str(item.attack_bonus), "flat": True}
    if item.save_dc is not None:
        system["save"] = {"dc": item.save_dc, "scaling": "flat"}

    return {
        "_id": _generate_id(),
        "name": item.name,
        "type": FOUNDRY_ITEM_TYPES[item.kind],
        "system": system,
    }


def convert_to_foundry(
    statblock: Statblock,
    generated: Optional[GeneratedCharacter] = None,
) -> Dict[str, Any]:
    """
    Convert a Statblock to a FoundryVTT npc actor payload.

    The statblock supplies the combat numbers and items. The optional
    generated sheet adds save and skill proficiencies, movement, languages
    and currency; without it the actor gets a 30 ft walk and nothing else.

    Args:
        statblock: Statblock to convert
        generated: Generated sheet for the same NPC, if any

    Returns:
        Dict ready to pass to Actor.create
    """
    logger.info(f"Converting '{statblock.name}' to FoundryVTT format...")
    band = lookup_band(statblock.rating_value)
    con_mod = statblock.abilities.modifier("con")

    saves = set(generated.saves) if generated else set()
    abilities = {
        ability: {
            "value": statblock.abilities.get(ability),
            "proficient": 1 if ability in saves else 0,
        }
        for ability in ABILITY_ORDER
    }

    speed = generated.speed if generated else SpeedProfile()
    attributes = {
        "hp": {
            "value": statblock.hp,
            "max": statblock.hp,
            "temp": 0,
            "tempmax": 0,
            "formula": hit_dice_formula(statblock.hp, con_mod),
        },
        "ac": {"calc": "natural", "flat": statblock.ac, "formula": ""},
        "movement": {
            "walk": speed.walk,
            "fly": speed.fly,
            "climb": speed.climb,
            "swim": speed.swim,
            "units": "ft",
            "hover": False,
        },
    }

    if statblock.description:
        biography = f"<p>{statblock.description}</p>"
    else:
        biography = statblock.biography_html

    details = {
        "cr": statblock.rating_value,
        "type": {"value": statblock.species.lower(), "subtype": ""},
        "alignment": statblock.alignment.lower(),
        "biography": {"value": biography, "public": ""},
    }

    skills = {}
    if generated:
        for skill in generated.skills:
            skills[skill] = {"value": 1, "prof": band.proficiency_bonus}

    traits: Dict[str, Any] = {}
    if generated:
        traits["languages"] = {
            "value": sorted(language.lower() for language in generated.languages),
            "custom": "",
        }

    system: Dict[str, Any] = {
        "abilities": abilities,
        "attributes": attributes,
        "details": details,
        "skills": skills,
        "traits": traits,
    }
    if generated:
        system["currency"] = generated.currency.model_dump()

    portrait = statblock.portrait or DEFAULT_PORTRAIT
    items: List[Dict[str, Any]] = [_convert_item(item) for item in statblock.items]

    actor = {
        "name": statblock.name,
        "type": "npc",
        "img": portrait,
        "system": system,
        "items": items,
        "prototypeToken": {
            "name": statblock.name,
            "texture": {"src": statblock.token or portrait},
        },
    }
    logger.debug(f"Built actor payload for '{statblock.name}' with {len(items)} items")
    return actor

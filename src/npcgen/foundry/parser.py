"""Read FoundryVTT dnd5e actor documents into Statblock values."""

import html
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from npcgen.damage.formula import DamageFormula, parse_formula
from npcgen.exceptions import ConversionError
from npcgen.generator.data import ALIGNMENTS
from npcgen.models import ABILITY_ORDER, AbilityScores, Item, Statblock
from npcgen.ratings.parser import format_rating, parse_rating

logger = logging.getLogger(__name__)

DEFAULT_PORTRAIT = "icons/svg/mystery-man.svg"

ALIGNMENT_CODES = {
    "lg": "Lawful Good",
    "ng": "Neutral Good",
    "cg": "Chaotic Good",
    "ln": "Lawful Neutral",
    "n": "True Neutral",
    "tn": "True Neutral",
    "cn": "Chaotic Neutral",
    "le": "Lawful Evil",
    "ne": "Neutral Evil",
    "ce": "Chaotic Evil",
}

ITEM_KINDS = {"weapon": "weapon", "feat": "feature", "spell": "spell"}

_TAG_PATTERN = re.compile(r"<[^>]+>")


def format_alignment(alignment: str) -> str:
    """Map a Foundry alignment code or name to its display form."""
    normalized = re.sub(r"\s+", "", alignment or "").lower()
    if normalized in ALIGNMENT_CODES:
        return ALIGNMENT_CODES[normalized]
    for name in ALIGNMENTS:
        if name.replace(" ", "").lower() == normalized:
            return name
    return "True Neutral"


def strip_html(text: str) -> str:
    """Plain text of an HTML fragment."""
    return " ".join(html.unescape(_TAG_PATTERN.sub(" ", text or "")).split())


def _cr_to_rating(cr: Any) -> str:
    """Foundry stores CR as a number (0.25) or occasionally a string ("1/4")."""
    if cr is None or cr == "":
        return "1"
    if isinstance(cr, str):
        try:
            return format_rating(parse_rating(cr))
        except ValueError:
            pass
    try:
        return format_rating(float(cr))
    except (TypeError, ValueError):
        logger.warning(f"Unreadable challenge rating {cr!r}; defaulting to 1")
        return "1"


def _parse_damage_parts(damage: Dict[str, Any]) -> List[DamageFormula]:
    """Damage parts as [formula, type] pairs, plus the newer 'base' block."""
    formulas = []

    base = damage.get("base")
    if isinstance(base, dict) and base.get("number") and base.get("denomination"):
        types = base.get("types") or []
        formulas.append(DamageFormula(
            dice_count=int(base["number"]),
            die_size=int(base["denomination"]),
            # Roll-data bonuses like "@mod" resolve at roll time; count them as 0
            flat_bonus=_int_or_none(base.get("bonus")) or 0,
            damage_type=sorted(types)[0] if types else "",
        ))

    for part in damage.get("parts") or []:
        if not part:
            continue
        formula = parse_formula(str(part[0]))
        damage_type = part[1] if len(part) > 1 and part[1] else formula.damage_type
        formulas.append(formula.model_copy(update={"damage_type": damage_type}))
    return formulas


def _parse_properties(properties: Any) -> frozenset:
    if isinstance(properties, dict):
        return frozenset(key for key, enabled in properties.items() if enabled)
    if isinstance(properties, (list, tuple, set, frozenset)):
        return frozenset(properties)
    return frozenset()


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(str(value).replace("+", "").replace(" ", "")) if value not in (None, "") else None
    except ValueError:
        return None


def parse_item(item: Dict[str, Any]) -> Optional[Item]:
    """Convert one embedded item; non-combat item types return None."""
    kind = ITEM_KINDS.get(item.get("type", ""))
    if kind is None:
        logger.debug(f"Skipping item '{item.get('name')}' of type {item.get('type')!r}")
        return None

    system = item.get("system") or {}
    return Item(
        name=item.get("name") or "Unnamed",
        kind=kind,
        damage=tuple(_parse_damage_parts(system.get("damage") or {})),
        save_dc=_int_or_none((system.get("save") or {}).get("dc")),
        attack_bonus=_int_or_none((system.get("attack") or {}).get("bonus")),
        properties=_parse_properties(system.get("properties")),
    )


def parse_items(items: Iterable[Dict[str, Any]]) -> List[Item]:
    parsed = (parse_item(item) for item in items or [])
    return [item for item in parsed if item is not None]


def parse_actor_data(actor: Dict[str, Any]) -> Optional[Statblock]:
    """
    Parse a FoundryVTT actor document into a Statblock.

    Missing abilities default to 10 and a missing CR to 1. HP and AC are
    taken as stored (floored at 1); rescaling recomputes them anyway.

    Returns:
        Statblock, or None if the document is malformed (not a mapping, no
        system data, or values of the wrong shape)
    """
    if not isinstance(actor, dict):
        logger.warning(f"Invalid actor data: expected a mapping, got {type(actor).__name__}")
        return None
    if not isinstance(actor.get("system"), dict):
        logger.warning("Invalid actor data: missing system block")
        return None

    try:
        return _build_statblock(actor)
    except (AttributeError, TypeError, ValueError, ValidationError) as e:
        logger.warning(f"Invalid actor data for '{actor.get('name')}': {e}")
        return None


def _build_statblock(actor: Dict[str, Any]) -> Statblock:
    system = actor["system"]
    details = system.get("details") or {}
    attributes = system.get("attributes") or {}

    raw_abilities = system.get("abilities") or {}
    abilities = AbilityScores.from_mapping({
        ability: (raw_abilities.get(ability) or {}).get("value") or 10
        for ability in ABILITY_ORDER
    })

    rating = _cr_to_rating(details.get("cr"))

    creature_type = details.get("type")
    if isinstance(creature_type, dict) and creature_type.get("value"):
        species = str(creature_type["value"]).capitalize()
    elif details.get("race"):
        species = str(details["race"])
    else:
        species = "Humanoid"

    biography_html = (details.get("biography") or {}).get("value") or ""
    description = strip_html(biography_html) or f"A {species.lower()} of CR {rating}"

    portrait = actor.get("img") or DEFAULT_PORTRAIT
    token_texture = ((actor.get("prototypeToken") or {}).get("texture") or {}).get("src")

    hp = (attributes.get("hp") or {}).get("max") or (attributes.get("hp") or {}).get("value") or 1
    ac_block = attributes.get("ac") or {}
    ac = ac_block.get("flat") or ac_block.get("value") or 10

    return Statblock(
        name=actor.get("name") or "Unknown",
        rating=rating,
        abilities=abilities,
        hp=max(1, int(hp)),
        ac=max(1, int(ac)),
        items=tuple(parse_items(actor.get("items") or [])),
        species=species,
        alignment=format_alignment(details.get("alignment") or ""),
        description=description,
        biography_html=biography_html,
        portrait=portrait,
        token=token_texture or portrait,
    )


def load_actor_file(path: Path) -> Statblock:
    """
    Load a FoundryVTT actor JSON export from disk.

    Raises:
        ConversionError: If the file is not valid JSON or not an actor document
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConversionError(f"{path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConversionError(f"Cannot read {path}: {e}") from e

    statblock = parse_actor_data(data) if isinstance(data, dict) else None
    if statblock is None:
        raise ConversionError(f"{path} is not a FoundryVTT actor document")
    return statblock

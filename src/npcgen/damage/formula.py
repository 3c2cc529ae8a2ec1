"""Dice damage formulas: parsing, expected values and CR-targeted resynthesis."""

import logging
import math
import re
from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from npcgen.ratings.parser import parse_rating, round_half_up
from npcgen.ratings.table import target_damage_for_rating

logger = logging.getLogger(__name__)

# Standard die sizes in D&D, smallest first (ties prefer the earlier entry)
STANDARD_DIE_SIZES = (4, 6, 8, 10, 12)

# "2d6+3 slashing", "d8", "1d10 - 1 fire"
_DICE_PATTERN = re.compile(r"^(\d*)d(\d+)(?:\s*([+-])\s*(\d+))?(?:\s+(.*))?$", re.IGNORECASE)
# "4", "4 piercing"
_FLAT_PATTERN = re.compile(r"^(\d+)(?:\s+(.*))?$")


class DamageFormula(BaseModel):
    """Parsed damage formula: dice count, die size, flat bonus and damage type.

    dice_count == 0 and die_size == 0 is a pure flat-bonus formula.
    """

    model_config = ConfigDict(frozen=True)

    dice_count: int = Field(default=0, ge=0)
    die_size: int = Field(default=0, ge=0)
    flat_bonus: int = 0
    damage_type: str = ""

    @property
    def expected_value(self) -> float:
        return expected_value(self)

    @property
    def has_dice(self) -> bool:
        return self.dice_count > 0 and self.die_size > 0

    def __str__(self) -> str:
        return format_formula(self)


def parse_formula(formula: str) -> DamageFormula:
    """
    Parse a damage formula like "2d6+3 slashing", "1d8" or "4".

    Unparseable input degrades to a zero-damage formula (keeping any damage
    type word) instead of raising, so malformed template data never blocks
    generation.
    """
    text = (formula or "").strip()

    dice_match = _DICE_PATTERN.match(text)
    if dice_match:
        count, size, sign, bonus, damage_type = dice_match.groups()
        flat = int(bonus) if bonus else 0
        return DamageFormula(
            dice_count=int(count) if count else 1,
            die_size=int(size),
            flat_bonus=-flat if sign == "-" else flat,
            damage_type=(damage_type or "").strip(),
        )

    flat_match = _FLAT_PATTERN.match(text)
    if flat_match:
        bonus, damage_type = flat_match.groups()
        return DamageFormula(flat_bonus=int(bonus), damage_type=(damage_type or "").strip())

    logger.debug(f"Unparseable damage formula {formula!r}; treating as zero damage")
    parts = text.split(maxsplit=1)
    return DamageFormula(damage_type=parts[1].strip() if len(parts) > 1 else "")


def format_formula(formula: DamageFormula) -> str:
    """Serialize a DamageFormula back to dice notation."""
    if formula.has_dice:
        text = f"{formula.dice_count}d{formula.die_size}"
        if formula.flat_bonus > 0:
            text += f"+{formula.flat_bonus}"
        elif formula.flat_bonus < 0:
            text += f"{formula.flat_bonus}"
    else:
        text = f"{formula.flat_bonus}"

    if formula.damage_type:
        text += f" {formula.damage_type}"
    return text


def expected_value(formula: DamageFormula) -> float:
    """Average damage: dice_count * (die_size + 1) / 2 + flat_bonus."""
    if not formula.has_dice:
        return float(formula.flat_bonus)
    return formula.dice_count * (formula.die_size + 1) / 2 + formula.flat_bonus


def synthesize(
    target_expected_value: float,
    ability_modifier: int = 0,
    damage_type: str = ""
) -> DamageFormula:
    """
    Build the dice formula whose average best matches a target.

    The ability modifier is taken out of the target first (leaving at least
    1 point for the dice), each standard die size gets its best dice count,
    and the size with the smallest deviation wins. The modifier is added
    back as the flat bonus.

    Example:
        >>> str(synthesize(10.5, 3, "slashing"))
        '3d4+3 slashing'
    """
    dice_budget = max(1, target_expected_value - ability_modifier)

    best_count, best_size, best_diff = 1, STANDARD_DIE_SIZES[0], math.inf
    for size in STANDARD_DIE_SIZES:
        mean_roll = (size + 1) / 2
        count = max(1, round_half_up(dice_budget / mean_roll))
        diff = abs(count * mean_roll - dice_budget)
        if diff < best_diff:
            best_count, best_size, best_diff = count, size, diff

    return DamageFormula(
        dice_count=best_count,
        die_size=best_size,
        flat_bonus=ability_modifier,
        damage_type=damage_type,
    )


def scale_to_target(
    original: DamageFormula,
    target_damage: float,
    ability_modifier: int = 0
) -> DamageFormula:
    """Rescale a formula to a target average, keeping its damage type."""
    if not original.has_dice:
        # Flat damage stays flat
        return DamageFormula(
            flat_bonus=max(1, math.floor(target_damage)),
            damage_type=original.damage_type,
        )
    return synthesize(target_damage, ability_modifier, original.damage_type)


def scale_formula(
    original: DamageFormula,
    target_rating: str,
    ability_modifier: int = 0
) -> DamageFormula:
    """Rescale a formula to the damage budget of a challenge rating."""
    target_damage = target_damage_for_rating(parse_rating(target_rating))
    return scale_to_target(original, target_damage, ability_modifier)


def scale_damage_parts(
    parts: Sequence[DamageFormula],
    target_rating: str,
    ability_modifier: int = 0
) -> List[DamageFormula]:
    """
    Rescale every damage part of an item.

    The first (primary) part gets the full budget plus the ability modifier.
    Additional parts (poison, fire riders...) get half the primary budget
    and no modifier.
    """
    if not parts:
        return []

    primary_target = target_damage_for_rating(parse_rating(target_rating))
    scaled = [scale_to_target(parts[0], primary_target, ability_modifier)]
    for part in parts[1:]:
        scaled.append(scale_to_target(part, primary_target * 0.5, 0))
    return scaled

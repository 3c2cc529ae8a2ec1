"""Rescale a template statblock to a new challenge rating."""

import logging
from typing import Iterable, Optional

from npcgen.damage.formula import scale_damage_parts
from npcgen.generator.stats import generate_hp
from npcgen.models import ABILITY_ORDER, AbilityScores, Item, Statblock
from npcgen.ratings.parser import format_rating, parse_rating, round_half_up
from npcgen.ratings.table import RatingBand, lookup_band
from npcgen.scaling.templates import matches_preserved_name

logger = logging.getLogger(__name__)

MIN_RATIO = 0.5
MAX_RATIO = 2.0
MIN_TEMPLATE_RATING = 0.125


def scaling_ratio(template_rating: float, target_rating: float) -> float:
    """Target/template rating ratio, clamped to [0.5, 2.0]."""
    ratio = target_rating / max(template_rating, MIN_TEMPLATE_RATING)
    return min(max(ratio, MIN_RATIO), MAX_RATIO)


def scale_abilities(abilities: AbilityScores, ratio: float) -> AbilityScores:
    """Multiply every score by the ratio, round half up, clamp to [1, 30]."""
    scaled = {
        ability: round_half_up(abilities.get(ability) * ratio)
        for ability in ABILITY_ORDER
    }
    return AbilityScores.from_mapping(scaled).clamped(1, 30)


def rescale_item(
    item: Item,
    target_rating: str,
    band: RatingBand,
    abilities: AbilityScores,
) -> Item:
    """Rescale one non-preserved item to the target rating."""
    if item.kind == "weapon":
        ability = "dex" if item.is_finesse_or_ranged else "str"
        modifier = abilities.modifier(ability)
        return item.model_copy(update={
            "damage": tuple(scale_damage_parts(item.damage, target_rating, modifier)),
            "attack_bonus": band.attack_bonus,
        })

    update = {"damage": tuple(scale_damage_parts(item.damage, target_rating, 0))}
    if item.save_dc is not None:
        update["save_dc"] = band.save_dc
    return item.model_copy(update=update)


def rescale(
    template: Statblock,
    target_rating: str,
    new_abilities: Optional[AbilityScores] = None,
    preserve_features: Iterable[str] = (),
) -> Statblock:
    """
    Produce a copy of a template statblock rescaled to a target rating.

    Steps:
    1. ratio = clamp(target / max(template, 1/8), 0.5, 2.0)
    2. abilities scaled by the ratio (or new_abilities when given), clamped to [1, 30]
    3. HP recomputed from the target band and the new CON modifier
    4. AC taken from the target band
    5. items rescaled, except preserved ones which are copied as-is
    6. a new Statblock is returned; the template is never modified

    Args:
        template: Statblock to rescale
        target_rating: Target rating display string (e.g. "5", "1/2")
        new_abilities: Already generated scores for the target, used instead of
            ratio-scaling the template's scores
        preserve_features: Feature names (substring, case-insensitive) that keep
            their template values

    Raises:
        InvalidRatingFormat: If target_rating is not a canonical rating
    """
    target_value = parse_rating(target_rating)
    band = lookup_band(target_value)
    ratio = scaling_ratio(template.rating_value, target_value)
    preserve_features = tuple(preserve_features)

    if new_abilities is None:
        abilities = scale_abilities(template.abilities, ratio)
    else:
        abilities = new_abilities.clamped(1, 30)

    items = []
    for item in template.items:
        if item.preserved or matches_preserved_name(item.name, preserve_features):
            logger.debug(f"Preserving '{item.name}' unchanged")
            items.append(item)
            continue
        items.append(rescale_item(item, target_rating, band, abilities))

    logger.info(
        f"Rescaled '{template.name}' from CR {template.rating} to CR {target_rating} "
        f"(ratio {ratio:.2f}, {len(items)} items)"
    )
    return template.model_copy(update={
        "rating": format_rating(target_value),
        "abilities": abilities,
        "hp": generate_hp(target_value, abilities.modifier("con")),
        "ac": band.armor_class,
        "items": tuple(items),
    })

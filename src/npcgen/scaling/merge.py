"""Combine several template statblocks into one composite."""

import logging
from typing import Sequence

from npcgen.generator.stats import generate_hp
from npcgen.models import ABILITY_ORDER, AbilityScores, Statblock
from npcgen.ratings.parser import format_rating, parse_rating, round_half_up
from npcgen.ratings.table import lookup_band

logger = logging.getLogger(__name__)


def average_statblocks(templates: Sequence[Statblock]) -> Statblock:
    """
    Average several statblocks into one.

    - One input is returned unchanged.
    - Abilities are the rounded mean of every input.
    - The rating is the mean numeric rating snapped to a canonical rating.
    - Items from every input are concatenated in order (duplicates kept).
    - Name, portrait, token, species and alignment come from the first input.
    - HP and AC are derived from the merged rating's band.

    Raises:
        ValueError: If no statblocks are given
    """
    if not templates:
        raise ValueError("Cannot merge an empty list of statblocks")
    if len(templates) == 1:
        return templates[0]

    count = len(templates)
    abilities = AbilityScores.from_mapping({
        ability: round_half_up(sum(t.abilities.get(ability) for t in templates) / count)
        for ability in ABILITY_ORDER
    })

    mean_rating = sum(parse_rating(t.rating) for t in templates) / count
    rating = format_rating(mean_rating)
    rating_value = parse_rating(rating)

    items = tuple(item for template in templates for item in template.items)
    first = templates[0]
    names = ", ".join(t.name for t in templates)

    logger.info(f"Merged {count} statblocks ({names}) at CR {rating}")
    return first.model_copy(update={
        "rating": rating,
        "abilities": abilities,
        "hp": generate_hp(rating_value, abilities.modifier("con")),
        "ac": lookup_band(rating_value).armor_class,
        "items": items,
        "description": f"Merged from {count} actors: {names}",
    })

"""Fresh NPC stat generation from challenge rating, species and role.

Every function here is total: unknown species, roles or modifiers fall back
to neutral defaults. Randomness comes from an injected random source (any
object with randint() and shuffle(), normally random.Random) so a seeded
source reproduces the same sheet.
"""

import logging
import random
from typing import List, Mapping, Optional, Tuple

from npcgen.generator.data import (
    ALL_SKILLS,
    CLASS_SKILLS,
    CURRENCY_BANDS,
    DEFAULT_LANGUAGES,
    DEFAULT_SPEED,
    ROLE_ABILITY_MODIFIERS,
    SAVE_COUNT_STEPS,
    SKILL_COUNT_STEPS,
    SPECIES_ABILITY_MODIFIERS,
    SPECIES_LANGUAGES,
    SPECIES_SPEED,
)
from npcgen.models import (
    ABILITY_ORDER,
    AbilityScores,
    CurrencyPurse,
    GeneratedCharacter,
    SpeedProfile,
)
from npcgen.ratings.parser import format_rating, rating_to_tier
from npcgen.ratings.table import baseline_ability_score, lookup_band

logger = logging.getLogger(__name__)

DEFAULT_ABILITY_VARIANCE = 2


def species_modifiers(species: str) -> Mapping[str, int]:
    return SPECIES_ABILITY_MODIFIERS.get(species, {})


def role_modifiers(role: str) -> Mapping[str, int]:
    return ROLE_ABILITY_MODIFIERS.get(role, {})


def _safe_modifier(modifiers: Optional[Mapping[str, int]], ability: str) -> int:
    """Read one modifier, treating missing or malformed entries as 0."""
    if not modifiers:
        return 0
    value = modifiers.get(ability, 0)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed modifier {ability}={value!r}")
        return 0


def generate_abilities(
    rating: float,
    species_mods: Optional[Mapping[str, int]] = None,
    role_mods: Optional[Mapping[str, int]] = None,
    rng: Optional[random.Random] = None,
    variance: int = DEFAULT_ABILITY_VARIANCE,
    extra_mods: Optional[Mapping[str, int]] = None,
) -> AbilityScores:
    """
    Roll ability scores around the rating baseline.

    Each score is baseline + uniform offset in [-variance, variance] +
    species, role and extra modifiers, floored at 1.
    """
    rng = rng or random.Random()
    base = baseline_ability_score(rating, capped=False)

    scores = {}
    for ability in ABILITY_ORDER:
        score = (
            base
            + rng.randint(-variance, variance)
            + _safe_modifier(species_mods, ability)
            + _safe_modifier(role_mods, ability)
            + _safe_modifier(extra_mods, ability)
        )
        scores[ability] = max(1, score)
    return AbilityScores.from_mapping(scores)


def generate_hp(rating: float, con_modifier: int) -> int:
    """HP from the rating band midpoint adjusted by twice the CON modifier."""
    return max(1, lookup_band(rating).hp_midpoint + 2 * con_modifier)


def generate_ac(rating: float) -> int:
    return lookup_band(rating).armor_class


def _step_count(rating: float, steps: Tuple[Tuple[float, int], ...]) -> int:
    for threshold, count in steps:
        if rating >= threshold:
            return count
    return steps[-1][1]


def skill_count(rating: float) -> int:
    """Number of skill proficiencies: 2 rising to 6 at ratings 5/10/15/20."""
    return _step_count(rating, SKILL_COUNT_STEPS)


def save_count(rating: float) -> int:
    """Number of saving throw proficiencies: 1 rising to 4 at ratings 5/10/20."""
    return _step_count(rating, SAVE_COUNT_STEPS)


def select_skills(rating: float, role: str, rng: Optional[random.Random] = None) -> List[str]:
    """
    Pick skill proficiencies: the role's class skills first, then random fill.

    The count is exact and no skill appears twice.
    """
    rng = rng or random.Random()
    count = skill_count(rating)

    skills: List[str] = []
    for skill in CLASS_SKILLS.get(role, ()):
        if len(skills) >= count:
            break
        if skill not in skills:
            skills.append(skill)

    remaining = [skill for skill in ALL_SKILLS if skill not in skills]
    rng.shuffle(remaining)
    skills.extend(remaining[:count - len(skills)])
    return skills


def select_saves(rating: float, abilities: AbilityScores) -> List[str]:
    """Proficient saves: the highest scores, ties in str/dex/con/int/wis/cha order."""
    ranked = sorted(ABILITY_ORDER, key=lambda ability: -abilities.get(ability))
    return ranked[:save_count(rating)]


def generate_currency(rating: float, rng: Optional[random.Random] = None) -> CurrencyPurse:
    """Starting gold drawn from the rating's treasure band; other coins zero."""
    rng = rng or random.Random()
    for max_rating, low, high in CURRENCY_BANDS:
        if rating <= max_rating:
            return CurrencyPurse(gp=rng.randint(low, high))
    _, low, high = CURRENCY_BANDS[-1]
    return CurrencyPurse(gp=rng.randint(low, high))


def generate_speed(species: str) -> SpeedProfile:
    return SpeedProfile(walk=SPECIES_SPEED.get(species, DEFAULT_SPEED))


def generate_languages(species: str) -> frozenset:
    return SPECIES_LANGUAGES.get(species, DEFAULT_LANGUAGES)


def generate_character(
    rating: float,
    species: str,
    role: str,
    alignment: str,
    alignment_mods: Optional[Mapping[str, int]] = None,
    name: str = "",
    rng: Optional[random.Random] = None,
    variance: int = DEFAULT_ABILITY_VARIANCE,
) -> GeneratedCharacter:
    """
    Generate a complete NPC sheet for an internal (already parsed) rating.

    Args:
        rating: Numeric challenge rating
        species: Species name (unknown species get neutral defaults)
        role: Role/class name (unknown roles get no preferred skills)
        alignment: Alignment display string
        alignment_mods: Optional additive ability modifiers
        name: Optional NPC name
        rng: Random source (seed it for reproducible output)
        variance: Half-width of the per-ability random offset

    Returns:
        GeneratedCharacter with abilities, HP, AC, skills, saves, speed,
        languages and currency
    """
    rng = rng or random.Random()
    band = lookup_band(rating)

    abilities = generate_abilities(
        rating,
        species_modifiers(species),
        role_modifiers(role),
        rng=rng,
        variance=variance,
        extra_mods=alignment_mods,
    )
    hp = generate_hp(rating, abilities.modifier("con"))

    character = GeneratedCharacter(
        name=name,
        species=species,
        role=role,
        alignment=alignment,
        rating=format_rating(rating),
        tier=rating_to_tier(rating),
        abilities=abilities,
        hp=hp,
        ac=band.armor_class,
        saves=tuple(select_saves(rating, abilities)),
        skills=tuple(select_skills(rating, role, rng)),
        speed=generate_speed(species),
        languages=generate_languages(species),
        currency=generate_currency(rating, rng),
        proficiency_bonus=band.proficiency_bonus,
    )
    logger.info(
        f"Generated {species} {role} at CR {character.rating}: "
        f"HP {character.hp}, AC {character.ac}"
    )
    return character

"""Fresh NPC stat generation."""

from .data import ALIGNMENTS, ALL_SKILLS, CLASS_SKILLS, ROLES, SPECIES
from .stats import (
    generate_abilities,
    generate_ac,
    generate_character,
    generate_currency,
    generate_hp,
    generate_languages,
    generate_speed,
    role_modifiers,
    save_count,
    select_saves,
    select_skills,
    skill_count,
    species_modifiers,
)

__all__ = [
    "ALIGNMENTS",
    "ALL_SKILLS",
    "CLASS_SKILLS",
    "ROLES",
    "SPECIES",
    "generate_abilities",
    "generate_ac",
    "generate_character",
    "generate_currency",
    "generate_hp",
    "generate_languages",
    "generate_speed",
    "role_modifiers",
    "save_count",
    "select_saves",
    "select_skills",
    "skill_count",
    "species_modifiers",
]

"""Damage formula model."""

from .formula import (
    STANDARD_DIE_SIZES,
    DamageFormula,
    expected_value,
    format_formula,
    parse_formula,
    scale_damage_parts,
    scale_formula,
    scale_to_target,
    synthesize,
)

__all__ = [
    "STANDARD_DIE_SIZES",
    "DamageFormula",
    "expected_value",
    "format_formula",
    "parse_formula",
    "scale_damage_parts",
    "scale_formula",
    "scale_to_target",
    "synthesize",
]

"""FoundryVTT actor document parsing and conversion."""

from .converter import convert_to_foundry, hit_dice_formula
from .parser import (
    ALIGNMENT_CODES,
    DEFAULT_PORTRAIT,
    format_alignment,
    load_actor_file,
    parse_actor_data,
    parse_item,
    parse_items,
    strip_html,
)

__all__ = [
    "convert_to_foundry",
    "hit_dice_formula",
    "ALIGNMENT_CODES",
    "DEFAULT_PORTRAIT",
    "format_alignment",
    "load_actor_file",
    "parse_actor_data",
    "parse_item",
    "parse_items",
    "strip_html",
]

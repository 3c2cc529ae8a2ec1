"""Challenge rating parsing and the canonical rating table."""

from .parser import (
    CANONICAL_RATINGS,
    InvalidRatingFormat,
    format_rating,
    is_canonical_rating,
    parse_rating,
    rating_to_tier,
    round_half_up,
)
from .table import (
    RATING_TABLE,
    RatingBand,
    baseline_ability_score,
    lookup_band,
    target_damage_for_rating,
)

__all__ = [
    "CANONICAL_RATINGS",
    "InvalidRatingFormat",
    "format_rating",
    "is_canonical_rating",
    "parse_rating",
    "rating_to_tier",
    "round_half_up",
    "RATING_TABLE",
    "RatingBand",
    "baseline_ability_score",
    "lookup_band",
    "target_damage_for_rating",
]

"""Conversion between challenge rating display strings and numeric values."""

import logging
import math
import re
from typing import Tuple

from npcgen.exceptions import InvalidRatingFormat

logger = logging.getLogger(__name__)

FRACTIONAL_RATINGS = {"1/8": 0.125, "1/4": 0.25, "1/2": 0.5}
MAX_RATING = 30
MAX_TIER = 20

CANONICAL_RATINGS: Tuple[str, ...] = (
    ("0",) + tuple(FRACTIONAL_RATINGS) + tuple(str(n) for n in range(1, MAX_RATING + 1))
)

# Snap points for values below 1
_LOW_SNAP_POINTS = ((0.0, "0"), (0.125, "1/8"), (0.25, "1/4"), (0.5, "1/2"), (1.0, "1"))

_INTEGER_PATTERN = re.compile(r"^\d+$")
_FRACTION_PATTERN = re.compile(r"^(\d+)\s*/\s*(\d+)$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def parse_rating(display: str) -> float:
    """
    Parse a challenge rating display string into its numeric value.

    Args:
        display: "0".."30" or one of "1/8", "1/4", "1/2"

    Returns:
        Numeric rating (e.g. "1/4" -> 0.25)

    Raises:
        InvalidRatingFormat: For non-numeric, negative, out of range or
            non-canonical fractional input
    """
    if not isinstance(display, str):
        raise InvalidRatingFormat(str(display), "rating must be a string")

    text = display.strip()
    if not text:
        raise InvalidRatingFormat(display, "empty rating")

    if _INTEGER_PATTERN.match(text):
        value = int(text)
        if value > MAX_RATING:
            raise InvalidRatingFormat(display, f"rating above {MAX_RATING}")
        return float(value)

    fraction = _FRACTION_PATTERN.match(text)
    if fraction:
        key = f"{int(fraction.group(1))}/{int(fraction.group(2))}"
        if key in FRACTIONAL_RATINGS:
            return FRACTIONAL_RATINGS[key]
        raise InvalidRatingFormat(display, "non-canonical fraction")

    if text.startswith("-"):
        raise InvalidRatingFormat(display, "negative rating")
    raise InvalidRatingFormat(display, "not a number or fraction")


def is_canonical_rating(display: str) -> bool:
    """Check whether a string is one of the canonical rating strings."""
    return display in CANONICAL_RATINGS


def format_rating(value: float) -> str:
    """
    Format a numeric rating as its nearest canonical display string.

    Values of 1 and above snap to the nearest integer (capped at 30); values
    below 1 snap to the nearest of 0, 1/8, 1/4, 1/2 and 1.
    """
    if value >= 1:
        return str(min(MAX_RATING, round_half_up(value)))
    if value <= 0:
        return "0"

    # min() keeps the first of equal distances, so ties go to the lower point
    _, label = min(_LOW_SNAP_POINTS, key=lambda point: abs(point[0] - value))
    return label


def rating_to_tier(value: float) -> int:
    """
    Map a rating to a coarse tier (an equivalent character level).

    Tier climbs every half point up to rating 2, tracks the rating up to 10,
    then climbs every 1.25 points until the cap of 20.
    """
    if value <= 0.5:
        tier = 1
    elif value <= 2:
        tier = math.ceil(value * 2)
    elif value <= 10:
        tier = math.ceil(value)
    else:
        tier = math.ceil(value * 0.8)
    return max(1, min(MAX_TIER, tier))

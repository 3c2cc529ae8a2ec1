"""Canonical stat bands per challenge rating (DMG monster statistics table)."""

import bisect
import logging
import math
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class RatingBand(BaseModel):
    """Expected monster statistics for one challenge rating."""

    model_config = ConfigDict(frozen=True)

    rating: float
    proficiency_bonus: int
    armor_class: int
    hp_range: Tuple[int, int]
    attack_bonus: int
    save_dc: int
    xp_budget: int
    damage_range: Tuple[int, int]  # Damage per round

    @property
    def hp_midpoint(self) -> int:
        return (self.hp_range[0] + self.hp_range[1]) // 2

    @property
    def damage_budget(self) -> float:
        return (self.damage_range[0] + self.damage_range[1]) / 2


# rating: (prof, AC, HP min, HP max, attack, save DC, XP, damage min, damage max)
_BAND_ROWS: Dict[float, Tuple[int, ...]] = {
    0: (2, 13, 1, 6, 3, 13, 10, 0, 1),
    0.125: (2, 13, 7, 35, 3, 13, 25, 2, 3),
    0.25: (2, 13, 36, 49, 3, 13, 50, 4, 5),
    0.5: (2, 13, 50, 70, 3, 13, 100, 6, 8),
    1: (2, 13, 71, 85, 3, 13, 200, 9, 14),
    2: (2, 13, 86, 100, 3, 13, 450, 15, 20),
    3: (2, 13, 101, 115, 4, 13, 700, 21, 26),
    4: (2, 14, 116, 130, 5, 14, 1100, 27, 32),
    5: (3, 15, 131, 145, 6, 15, 1800, 33, 38),
    6: (3, 15, 146, 160, 6, 15, 2300, 39, 44),
    7: (3, 15, 161, 175, 6, 15, 2900, 45, 50),
    8: (3, 16, 176, 190, 7, 16, 3900, 51, 56),
    9: (4, 16, 191, 205, 7, 16, 5000, 57, 62),
    10: (4, 17, 206, 220, 7, 16, 5900, 63, 68),
    11: (4, 17, 221, 235, 8, 17, 7200, 69, 74),
    12: (4, 17, 236, 250, 8, 17, 8400, 75, 80),
    13: (5, 18, 251, 265, 8, 18, 10000, 81, 86),
    14: (5, 18, 266, 280, 8, 18, 11500, 87, 92),
    15: (5, 18, 281, 295, 8, 18, 13000, 93, 98),
    16: (5, 18, 296, 310, 9, 18, 15000, 99, 104),
    17: (6, 19, 311, 325, 10, 19, 18000, 105, 110),
    18: (6, 19, 326, 340, 10, 19, 20000, 111, 116),
    19: (6, 19, 341, 355, 10, 19, 22000, 117, 122),
    20: (6, 19, 356, 400, 10, 19, 25000, 123, 140),
    21: (7, 19, 401, 445, 11, 20, 33000, 141, 158),
    22: (7, 19, 446, 490, 11, 20, 41000, 159, 176),
    23: (7, 19, 491, 535, 11, 20, 50000, 177, 194),
    24: (7, 19, 536, 580, 12, 21, 62000, 195, 212),
    25: (8, 19, 581, 625, 12, 21, 75000, 213, 230),
    26: (8, 19, 626, 670, 12, 21, 90000, 231, 248),
    27: (8, 19, 671, 715, 13, 22, 105000, 249, 266),
    28: (8, 19, 716, 760, 13, 22, 120000, 267, 284),
    29: (9, 19, 761, 805, 13, 22, 135000, 285, 302),
    30: (9, 19, 806, 850, 14, 23, 155000, 303, 320),
}

RATING_TABLE: Dict[float, RatingBand] = {
    float(rating): RatingBand(
        rating=float(rating),
        proficiency_bonus=prof,
        armor_class=ac,
        hp_range=(hp_min, hp_max),
        attack_bonus=attack,
        save_dc=dc,
        xp_budget=xp,
        damage_range=(dmg_min, dmg_max),
    )
    for rating, (prof, ac, hp_min, hp_max, attack, dc, xp, dmg_min, dmg_max) in _BAND_ROWS.items()
}

_SORTED_RATINGS: List[float] = sorted(RATING_TABLE)


def lookup_band(rating: float) -> RatingBand:
    """
    Look up the stat band for a rating.

    Non-canonical ratings fall back to the nearest lower defined entry
    (ratings below 0 use the rating 0 band) instead of failing.
    """
    band = RATING_TABLE.get(float(rating))
    if band is not None:
        return band

    index = bisect.bisect_right(_SORTED_RATINGS, rating) - 1
    fallback = _SORTED_RATINGS[max(index, 0)]
    logger.warning(f"No rating band for {rating}; using band for {fallback}")
    return RATING_TABLE[fallback]


def baseline_ability_score(rating: float, capped: bool = True) -> int:
    """
    Baseline ability score for a rating.

    CR 0: 10, CR 1: 12, CR 5: 14, CR 10: 16, CR 20: 18, CR 30: 20.
    Above rating 20 the curve is capped at 20 unless capped=False, which
    ability generation uses.
    """
    if rating <= 0:
        return 10
    if rating <= 1:
        return 12
    if rating <= 5:
        return 13 + math.floor((rating - 1) / 4)
    if rating <= 10:
        return 14 + math.floor((rating - 5) / 2.5)
    if rating <= 20:
        return 16 + math.floor((rating - 10) / 5)

    score = 18 + math.floor((rating - 20) / 5)
    return min(20, score) if capped else score


def target_damage_for_rating(rating: float) -> float:
    """
    Damage budget (expected damage per round) for a rating.

    Canonical ratings use the midpoint of their damage range; other values
    are interpolated linearly between the neighbouring canonical ratings.
    """
    band = RATING_TABLE.get(float(rating))
    if band is not None:
        return band.damage_budget

    if rating <= _SORTED_RATINGS[0]:
        return RATING_TABLE[_SORTED_RATINGS[0]].damage_budget
    if rating >= _SORTED_RATINGS[-1]:
        return RATING_TABLE[_SORTED_RATINGS[-1]].damage_budget

    upper_index = bisect.bisect_right(_SORTED_RATINGS, rating)
    low = _SORTED_RATINGS[upper_index - 1]
    high = _SORTED_RATINGS[upper_index]
    low_budget = RATING_TABLE[low].damage_budget
    high_budget = RATING_TABLE[high].damage_budget
    fraction = (rating - low) / (high - low)
    return low_budget + (high_budget - low_budget) * fraction

"""Pydantic value types for statblocks and generated NPCs.

All models are frozen: transforms build new instances and never edit
their inputs in place.
"""

from typing import Any, Dict, FrozenSet, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from npcgen.damage.formula import DamageFormula
from npcgen.ratings.parser import format_rating, parse_rating

ABILITY_ORDER: Tuple[str, ...] = ("str", "dex", "con", "int", "wis", "cha")


def ability_modifier(score: int) -> int:
    """D&D ability modifier: floor((score - 10) / 2)."""
    return (score - 10) // 2


class AbilityScores(BaseModel):
    """The six ability scores."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    str_: int = Field(default=10, alias="str")
    dex: int = 10
    con: int = 10
    int_: int = Field(default=10, alias="int")
    wis: int = 10
    cha: int = 10

    @classmethod
    def from_mapping(cls, scores: Dict[str, int], default: int = 10) -> "AbilityScores":
        """Build from a mapping keyed by ability abbreviation (any case)."""
        normalized = {key.lower(): value for key, value in scores.items()}
        return cls(**{ability: int(normalized.get(ability, default)) for ability in ABILITY_ORDER})

    def get(self, ability: str) -> int:
        key = ability.lower()
        if key == "str":
            return self.str_
        if key == "int":
            return self.int_
        return getattr(self, key)

    def modifier(self, ability: str) -> int:
        return ability_modifier(self.get(ability))

    def as_dict(self) -> Dict[str, int]:
        return {ability: self.get(ability) for ability in ABILITY_ORDER}

    def clamped(self, low: int = 1, high: int = 30) -> "AbilityScores":
        return AbilityScores.from_mapping(
            {ability: max(low, min(high, score)) for ability, score in self.as_dict().items()}
        )


class Item(BaseModel):
    """Embedded weapon, feature or spell with the fields scaling touches."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["weapon", "feature", "spell"]
    damage: Tuple[DamageFormula, ...] = ()
    save_dc: Optional[int] = None
    attack_bonus: Optional[int] = None
    properties: FrozenSet[str] = frozenset()  # "fin", "ran", ...
    preserved: bool = False

    @property
    def is_finesse_or_ranged(self) -> bool:
        return bool({"fin", "ran"} & self.properties)


class Statblock(BaseModel):
    """Combat-relevant stats of one character plus its item list."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    rating: str  # Display form, e.g. "1/4"
    abilities: AbilityScores
    hp: int = Field(ge=1)
    ac: int = Field(ge=1)
    items: Tuple[Item, ...] = ()

    # Identity / flavour
    species: str = "Humanoid"
    alignment: str = "True Neutral"
    description: str = ""
    biography_html: str = ""
    role: Optional[str] = None
    portrait: Optional[str] = None
    token: Optional[str] = None

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: str) -> str:
        """Validate the rating and store its canonical display form ("01/4" -> "1/4")."""
        return format_rating(parse_rating(v))

    @property
    def rating_value(self) -> float:
        return parse_rating(self.rating)


class SpeedProfile(BaseModel):
    """Movement speeds in feet."""

    model_config = ConfigDict(frozen=True)

    walk: int = 30
    fly: int = 0
    climb: int = 0
    swim: int = 0


class CurrencyPurse(BaseModel):
    """Coins carried, by denomination."""

    model_config = ConfigDict(frozen=True)

    cp: int = 0
    sp: int = 0
    ep: int = 0
    gp: int = 0
    pp: int = 0


class GeneratedCharacter(BaseModel):
    """Freshly generated NPC sheet, ready for a form or a storable record."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    species: str
    role: str
    alignment: str
    rating: str
    tier: int
    abilities: AbilityScores
    hp: int
    ac: int
    skills: Tuple[str, ...]
    saves: Tuple[str, ...]
    speed: SpeedProfile
    languages: FrozenSet[str]
    currency: CurrencyPurse
    proficiency_bonus: int

    def to_statblock(self) -> Statblock:
        """Statblock view of the sheet (no items yet)."""
        return Statblock(
            name=self.name,
            rating=self.rating,
            abilities=self.abilities,
            hp=self.hp,
            ac=self.ac,
            species=self.species,
            alignment=self.alignment,
            role=self.role,
        )


class CollaboratorResult(BaseModel):
    """Success/failure report from an external collaborator.

    Collaborator failures are reported through this value, never raised
    across the public boundary.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    content: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, content: Any = None) -> "CollaboratorResult":
        return cls(success=True, content=content)

    @classmethod
    def failure(cls, error: str) -> "CollaboratorResult":
        return cls(success=False, error=error)

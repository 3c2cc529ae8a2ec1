"""Reference tables for NPC generation: species, roles, skills, alignments."""

from typing import Dict, FrozenSet, Tuple

SPECIES: Tuple[str, ...] = (
    "Human",
    "Elf",
    "Dwarf",
    "Halfling",
    "Gnome",
    "Half-Elf",
    "Half-Orc",
    "Tiefling",
    "Dragonborn",
    "Goblin",
    "Orc",
    "Kobold",
)

ALIGNMENTS: Tuple[str, ...] = (
    "Lawful Good",
    "Neutral Good",
    "Chaotic Good",
    "Lawful Neutral",
    "True Neutral",
    "Chaotic Neutral",
    "Lawful Evil",
    "Neutral Evil",
    "Chaotic Evil",
)

ADVENTURING_CLASSES: Tuple[str, ...] = (
    "Fighter",
    "Barbarian",
    "Wizard",
    "Sorcerer",
    "Cleric",
    "Druid",
    "Rogue",
    "Ranger",
    "Paladin",
    "Monk",
    "Bard",
    "Warlock",
)

ROLES: Tuple[str, ...] = ADVENTURING_CLASSES + (
    # Adventure NPCs
    "Spy", "Assassin", "Bounty Hunter", "Smuggler", "Pirate", "Bandit",
    "Mercenary", "Explorer", "Sailor", "Criminal Contact",
    # Authority & leadership
    "Noble", "Guildmaster", "Diplomat", "Politician", "City Guard",
    "Guard Captain", "Town Crier", "Tax Collector",
    # Religion & magic
    "Priest", "Acolyte", "Healer", "Alchemist", "Herbalist", "Fortune Teller",
    # Merchants & traders
    "Merchant", "Pawnbroker", "Jeweler", "Fence", "Caravan Master",
    # Artisans & crafters
    "Blacksmith", "Armorer", "Weaponsmith", "Fletcher", "Leatherworker",
    "Jeweler (Artisan)",
    # Service & hospitality
    "Innkeeper", "Tavern Keeper", "Cook", "Barkeep", "Stable Master", "Guide",
    # Scholars & artists
    "Scholar", "Scribe", "Cartographer", "Librarian", "Sage", "Minstrel",
    "Entertainer", "Artist",
    # Common folk
    "Farmer", "Fisherman", "Miner", "Beggar", "Street Urchin", "Servant", "Laborer",
    # Outcasts & criminals
    "Thief", "Cultist", "Witch", "Hermit", "Exile",
)

SPECIES_ABILITY_MODIFIERS: Dict[str, Dict[str, int]] = {
    "Human": {"str": 1, "dex": 1, "con": 1, "int": 1, "wis": 1, "cha": 1},
    "Elf": {"dex": 2},
    "Dwarf": {"con": 2},
    "Halfling": {"dex": 2},
    "Gnome": {"int": 2},
    "Half-Elf": {"cha": 2},
    "Half-Orc": {"str": 2, "con": 1},
    "Tiefling": {"cha": 2, "int": 1},
    "Dragonborn": {"str": 2, "cha": 1},
    "Goblin": {"dex": 2, "con": 1},
    "Orc": {"str": 2, "con": 1, "int": -2},
    "Kobold": {"dex": 2, "str": -2},
}

# Primary ability of each adventuring class
ROLE_ABILITY_MODIFIERS: Dict[str, Dict[str, int]] = {
    "Barbarian": {"str": 1},
    "Bard": {"cha": 1},
    "Cleric": {"wis": 1},
    "Druid": {"wis": 1},
    "Fighter": {"str": 1},
    "Monk": {"dex": 1},
    "Paladin": {"str": 1},
    "Ranger": {"dex": 1},
    "Rogue": {"dex": 1},
    "Sorcerer": {"cha": 1},
    "Warlock": {"cha": 1},
    "Wizard": {"int": 1},
}

SPECIES_SPEED: Dict[str, int] = {
    "Human": 30,
    "Elf": 30,
    "Dwarf": 25,
    "Halfling": 25,
    "Gnome": 25,
    "Half-Elf": 30,
    "Half-Orc": 30,
    "Tiefling": 30,
    "Dragonborn": 30,
    "Goblin": 30,
    "Orc": 30,
    "Kobold": 30,
}
DEFAULT_SPEED = 30

SPECIES_LANGUAGES: Dict[str, FrozenSet[str]] = {
    "Human": frozenset({"Common"}),
    "Elf": frozenset({"Common", "Elvish"}),
    "Dwarf": frozenset({"Common", "Dwarvish"}),
    "Halfling": frozenset({"Common", "Halfling"}),
    "Gnome": frozenset({"Common", "Gnomish"}),
    "Half-Elf": frozenset({"Common", "Elvish"}),
    "Half-Orc": frozenset({"Common", "Orc"}),
    "Tiefling": frozenset({"Common", "Infernal"}),
    "Dragonborn": frozenset({"Common", "Draconic"}),
    "Goblin": frozenset({"Common", "Goblin"}),
    "Orc": frozenset({"Common", "Orc"}),
    "Kobold": frozenset({"Common", "Draconic"}),
}
DEFAULT_LANGUAGES: FrozenSet[str] = frozenset({"Common"})

# FoundryVTT dnd5e skill keys
ALL_SKILLS: Tuple[str, ...] = (
    "acr", "ani", "arc", "ath", "dec", "his", "ins", "itm", "inv",
    "med", "nat", "prc", "prf", "per", "rel", "slt", "ste", "sur",
)

CLASS_SKILLS: Dict[str, Tuple[str, ...]] = {
    "Barbarian": ("ath", "itm", "nat", "prc", "sur", "ani"),
    "Bard": ("prf", "per", "dec", "his", "arc", "inv", "prc", "slt", "ste", "acr"),
    "Cleric": ("his", "ins", "med", "per", "rel"),
    "Druid": ("arc", "ani", "ins", "med", "nat", "prc", "rel", "sur"),
    "Fighter": ("ath", "acr", "ani", "his", "ins", "itm", "prc", "sur"),
    "Monk": ("acr", "ath", "his", "ins", "rel", "ste"),
    "Paladin": ("ath", "ins", "itm", "med", "per", "rel"),
    "Ranger": ("ani", "ath", "ins", "inv", "nat", "prc", "ste", "sur"),
    "Rogue": ("acr", "ath", "dec", "ins", "itm", "inv", "prc", "per", "slt", "ste"),
    "Sorcerer": ("arc", "dec", "ins", "itm", "per", "rel"),
    "Warlock": ("arc", "dec", "his", "itm", "inv", "nat", "rel"),
    "Wizard": ("arc", "his", "ins", "inv", "med", "rel"),
}

# Skill proficiency count steps: (minimum rating, count)
SKILL_COUNT_STEPS: Tuple[Tuple[float, int], ...] = ((20, 6), (15, 5), (10, 4), (5, 3), (0, 2))
SAVE_COUNT_STEPS: Tuple[Tuple[float, int], ...] = ((20, 4), (10, 3), (5, 2), (0, 1))

# Individual treasure: (maximum rating, lowest gp, highest gp)
CURRENCY_BANDS: Tuple[Tuple[float, int, int], ...] = (
    (0.5, 1, 10),
    (4, 10, 59),
    (10, 50, 249),
    (16, 200, 699),
    (float("inf"), 500, 1499),
)

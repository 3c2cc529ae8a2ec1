"""Role to template-actor mapping for template-based NPC generation.

Each role belongs to a category with a primary and a fallback template
actor (looked up by name in the host's compendium) and a short list of
signature features that keep their template values when rescaled.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

DEFAULT_TEMPLATE = "Commoner"


class TemplateMapping(BaseModel):
    """Template actors and preserved features for a group of roles."""

    model_config = ConfigDict(frozen=True)

    category: str
    primary_template: str
    fallback_template: str
    preserve_features: Tuple[str, ...] = ()
    roles: Tuple[str, ...] = ()


TEMPLATE_CATEGORIES: Tuple[TemplateMapping, ...] = (
    TemplateMapping(
        category="MARTIAL_COMBATANT",
        primary_template="Veteran",
        fallback_template="Guard",
        preserve_features=("Multiattack", "Parry"),
        roles=("Fighter", "Guard Captain", "City Guard", "Mercenary", "Bounty Hunter"),
    ),
    TemplateMapping(
        category="SKIRMISHER",
        primary_template="Assassin",
        fallback_template="Bandit",
        preserve_features=("Assassinate", "Sneak Attack", "Cunning Action", "Evasion"),
        roles=("Rogue", "Assassin", "Spy", "Thief", "Smuggler", "Street Urchin", "Criminal Contact"),
    ),
    TemplateMapping(
        category="ARCANE_CASTER",
        primary_template="Mage",
        fallback_template="Acolyte",
        preserve_features=("Spellcasting",),
        roles=("Wizard", "Sorcerer", "Warlock", "Witch", "Alchemist"),
    ),
    TemplateMapping(
        category="DIVINE_CASTER",
        primary_template="Priest",
        fallback_template="Acolyte",
        preserve_features=("Spellcasting", "Divine Eminence"),
        roles=("Cleric", "Druid", "Healer", "Priest", "Acolyte", "Herbalist"),
    ),
    TemplateMapping(
        category="SUPPORT_PERFORMER",
        primary_template="Noble",
        fallback_template="Commoner",
        roles=("Bard", "Entertainer", "Minstrel", "Artist", "Fortune Teller", "Barkeep"),
    ),
    TemplateMapping(
        category="NOBLE_AUTHORITY",
        primary_template="Noble",
        fallback_template="Knight",
        preserve_features=("Parry", "Leadership"),
        roles=("Noble", "Diplomat", "Politician", "Guildmaster", "Tax Collector", "Town Crier"),
    ),
    TemplateMapping(
        category="SKILLED_ARTISAN",
        primary_template="Commoner",
        fallback_template="Commoner",
        roles=(
            "Blacksmith", "Armorer", "Weaponsmith", "Fletcher", "Leatherworker",
            "Jeweler", "Jeweler (Artisan)", "Cartographer",
        ),
    ),
    TemplateMapping(
        category="MERCHANT_SERVICE",
        primary_template="Commoner",
        fallback_template="Noble",
        roles=(
            "Merchant", "Innkeeper", "Tavern Keeper", "Cook", "Pawnbroker", "Fence",
            "Caravan Master", "Stable Master", "Guide",
        ),
    ),
    TemplateMapping(
        category="SCHOLARLY",
        primary_template="Acolyte",
        fallback_template="Mage",
        roles=("Scholar", "Sage", "Scribe", "Librarian"),
    ),
    TemplateMapping(
        category="COMMON_FOLK",
        primary_template="Commoner",
        fallback_template="Commoner",
        roles=("Farmer", "Fisherman", "Miner", "Beggar", "Servant", "Laborer", "Hermit", "Exile"),
    ),
    TemplateMapping(
        category="ADVENTURER_SPECIALIST",
        primary_template="Bandit Captain",
        fallback_template="Veteran",
        preserve_features=("Multiattack",),
        roles=(
            "Pirate", "Bandit", "Sailor", "Explorer", "Cultist", "Barbarian",
            "Paladin", "Ranger", "Monk",
        ),
    ),
)


def get_template_mapping_for_role(role: str) -> Optional[TemplateMapping]:
    for mapping in TEMPLATE_CATEGORIES:
        if role in mapping.roles:
            return mapping
    return None


def get_template_actor_name(role: str, prefer_primary: bool = True) -> str:
    """Template actor name for a role; unknown roles use Commoner."""
    mapping = get_template_mapping_for_role(role)
    if mapping is None:
        return DEFAULT_TEMPLATE
    return mapping.primary_template if prefer_primary else mapping.fallback_template


def template_candidates(role: str) -> List[str]:
    """Template names to try in order: primary, then fallback if different."""
    names = [get_template_actor_name(role, True), get_template_actor_name(role, False)]
    return list(dict.fromkeys(names))


def preserved_features_for_role(role: Optional[str]) -> Tuple[str, ...]:
    mapping = get_template_mapping_for_role(role) if role else None
    return mapping.preserve_features if mapping else ()


def matches_preserved_name(feature_name: str, preserve_features) -> bool:
    """Case-insensitive substring match of a feature name against a preserve list."""
    lowered = feature_name.lower()
    return any(preserved.lower() in lowered for preserved in preserve_features)


def should_preserve_feature(role: str, feature_name: str) -> bool:
    """Whether a role's template feature keeps its values when rescaled."""
    return matches_preserved_name(feature_name, preserved_features_for_role(role))

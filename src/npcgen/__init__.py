"""Challenge-rating driven NPC stat generation and statblock rescaling."""

from npcgen.api import (
    GenerateFreshRequest,
    MergeRequest,
    RescaleRequest,
    TemplateNPCRequest,
    create_npc_from_template,
    generate_fresh_statblock,
    handle_request,
    merge_statblocks,
    parse_request,
    rescale_statblock,
)
from npcgen.exceptions import InvalidRatingFormat, NPCGenError
from npcgen.models import AbilityScores, CollaboratorResult, GeneratedCharacter, Item, Statblock

__version__ = "0.1.0"

__all__ = [
    "AbilityScores",
    "CollaboratorResult",
    "GenerateFreshRequest",
    "GeneratedCharacter",
    "InvalidRatingFormat",
    "Item",
    "MergeRequest",
    "NPCGenError",
    "RescaleRequest",
    "Statblock",
    "TemplateNPCRequest",
    "create_npc_from_template",
    "generate_fresh_statblock",
    "handle_request",
    "merge_statblocks",
    "parse_request",
    "rescale_statblock",
]

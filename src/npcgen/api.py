"""
Public API for NPC stat generation and template rescaling.

This module is the boundary for external callers (host UI, persistence
layer, scripts). Ratings cross it only as display strings ("1/4", "5").
The only exception a caller needs to handle is InvalidRatingFormat, raised
when a supplied rating string is not a canonical challenge rating.
External collaborators (template lookup, persistence) are injected as
callables and report failures through CollaboratorResult.

Example usage:
    from npcgen.api import generate_fresh_statblock, rescale_statblock

    npc = generate_fresh_statblock("3", "Dwarf", "Cleric")
    print(f"{npc.species} {npc.role}: HP {npc.hp}, AC {npc.ac}")

    scaled = rescale_statblock(template, "5", role="Fighter")
"""

import logging
import random
from typing import Annotated, Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from npcgen.exceptions import InvalidRatingFormat
from npcgen.foundry.converter import convert_to_foundry
from npcgen.foundry.parser import parse_actor_data
from npcgen.generator.data import ALIGNMENTS
from npcgen.generator.stats import DEFAULT_ABILITY_VARIANCE, generate_character
from npcgen.models import AbilityScores, CollaboratorResult, GeneratedCharacter, Statblock
from npcgen.ratings.parser import format_rating, parse_rating
from npcgen.scaling.merge import average_statblocks
from npcgen.scaling.rescale import rescale
from npcgen.scaling.templates import preserved_features_for_role, template_candidates

logger = logging.getLogger(__name__)

TemplateLookup = Callable[[str], CollaboratorResult]
Persist = Callable[[Dict[str, Any]], CollaboratorResult]


def generate_fresh_statblock(
    rating: str,
    species: str,
    role: str,
    alignment_modifiers: Optional[Mapping[str, int]] = None,
    *,
    name: str = "",
    alignment: Optional[str] = None,
    rng: Optional[random.Random] = None,
    variance: int = DEFAULT_ABILITY_VARIANCE,
) -> GeneratedCharacter:
    """
    Generate a fresh NPC sheet.

    Args:
        rating: Challenge rating display string ("1/4", "5")
        species: Species name; unknown species get neutral defaults
        role: Role or class name; unknown roles get no preferred skills
        alignment_modifiers: Optional additive ability modifiers
        name: NPC name (may be filled in later by the caller)
        alignment: Alignment display string; drawn at random when omitted
        rng: Random source; seed it for reproducible output
        variance: Half-width of the random offset applied to each ability

    Returns:
        GeneratedCharacter

    Raises:
        InvalidRatingFormat: If rating is not a canonical challenge rating
    """
    value = parse_rating(rating)
    rng = rng or random.Random()
    if alignment is None:
        alignment = rng.choice(ALIGNMENTS)
    return generate_character(
        value,
        species,
        role,
        alignment,
        alignment_mods=alignment_modifiers,
        name=name,
        rng=rng,
        variance=variance,
    )


def rescale_statblock(
    template: Statblock,
    target_rating: str,
    *,
    new_abilities: Optional[AbilityScores] = None,
    role: Optional[str] = None,
) -> Statblock:
    """
    Rescale a stored template statblock to a new challenge rating.

    Args:
        template: Template statblock (left untouched)
        target_rating: Target rating display string
        new_abilities: Scores to use instead of ratio-scaling the template's
        role: Role whose signature features keep their template values

    Raises:
        InvalidRatingFormat: If target_rating is not a canonical challenge rating
    """
    return rescale(
        template,
        target_rating,
        new_abilities=new_abilities,
        preserve_features=preserved_features_for_role(role),
    )


def merge_statblocks(templates: Sequence[Statblock]) -> Statblock:
    """Merge several template statblocks into one composite.

    Raises:
        ValueError: If templates is empty
    """
    return average_statblocks(list(templates))


def _validate_rating(value: str) -> str:
    return format_rating(parse_rating(value))


class GenerateFreshRequest(BaseModel):
    """Request a freshly generated NPC sheet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["generate_fresh"] = "generate_fresh"
    rating: str
    species: str
    role: str
    alignment_modifiers: Dict[str, int] = Field(default_factory=dict)
    name: str = ""
    alignment: Optional[str] = None
    seed: Optional[int] = None

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: str) -> str:
        return _validate_rating(v)


class RescaleRequest(BaseModel):
    """Request a template statblock rescaled to a new rating."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rescale"] = "rescale"
    template: Statblock
    target_rating: str
    new_abilities: Optional[AbilityScores] = None
    role: Optional[str] = None

    @field_validator("target_rating")
    @classmethod
    def validate_target_rating(cls, v: str) -> str:
        return _validate_rating(v)


class MergeRequest(BaseModel):
    """Request several template statblocks merged into one."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["merge"] = "merge"
    templates: List[Statblock] = Field(min_length=1)


class TemplateNPCRequest(BaseModel):
    """Everything needed to build an NPC from a role's template actor."""

    model_config = ConfigDict(frozen=True)

    rating: str
    species: str
    role: str
    name: str = ""
    alignment: Optional[str] = None
    alignment_modifiers: Dict[str, int] = Field(default_factory=dict)
    description: str = ""
    portrait: Optional[str] = None
    token: Optional[str] = None
    seed: Optional[int] = None


NPCRequest = Annotated[
    Union[GenerateFreshRequest, RescaleRequest, MergeRequest],
    Field(discriminator="kind"),
]

_request_adapter = TypeAdapter(NPCRequest)


def parse_request(data: Mapping[str, Any]) -> Union[GenerateFreshRequest, RescaleRequest, MergeRequest]:
    """Validate a raw request mapping into its tagged request type.

    Raises:
        pydantic.ValidationError: If the kind is unknown or a field is invalid
    """
    return _request_adapter.validate_python(data)


def handle_request(
    request: Union[GenerateFreshRequest, RescaleRequest, MergeRequest],
) -> Union[GeneratedCharacter, Statblock]:
    """Dispatch a tagged request to the matching entry point."""
    if isinstance(request, GenerateFreshRequest):
        rng = random.Random(request.seed) if request.seed is not None else None
        return generate_fresh_statblock(
            request.rating,
            request.species,
            request.role,
            request.alignment_modifiers,
            name=request.name,
            alignment=request.alignment,
            rng=rng,
        )
    if isinstance(request, RescaleRequest):
        return rescale_statblock(
            request.template,
            request.target_rating,
            new_abilities=request.new_abilities,
            role=request.role,
        )
    if isinstance(request, MergeRequest):
        return merge_statblocks(request.templates)
    raise TypeError(f"Unsupported request type: {type(request).__name__}")


def _call_collaborator(label: str, func: Callable[..., Any], *args: Any) -> CollaboratorResult:
    """Call an injected collaborator, turning raised errors into failure results."""
    try:
        result = func(*args)
    except Exception as e:
        logger.error(f"{label} failed: {e}")
        return CollaboratorResult.failure(f"{label} failed: {e}")
    if not isinstance(result, CollaboratorResult):
        return CollaboratorResult.failure(f"{label} returned {type(result).__name__}, not a result")
    if not result.success:
        logger.warning(f"{label} reported failure: {result.error}")
    return result


def _find_template(role: str, lookup_template: TemplateLookup) -> CollaboratorResult:
    errors = []
    for template_name in template_candidates(role):
        result = _call_collaborator(f"Template lookup '{template_name}'", lookup_template, template_name)
        if result.success and result.content:
            logger.info(f"Using template actor '{template_name}' for role {role}")
            return result
        errors.append(result.error or f"Template actor '{template_name}' not found")
    return CollaboratorResult.failure("; ".join(errors))


def create_npc_from_template(
    request: TemplateNPCRequest,
    lookup_template: TemplateLookup,
    persist: Optional[Persist] = None,
) -> CollaboratorResult:
    """
    Build an NPC by rescaling the role's template actor.

    Pipeline:
    1. Generate a fresh sheet for the target rating (abilities, skills, saves...)
    2. Look up the role's primary template actor, then its fallback
    3. Parse the template document and rescale it with the generated abilities
    4. Convert to a FoundryVTT actor payload and hand it to persist, if given

    Args:
        request: NPC parameters
        lookup_template: Returns a CollaboratorResult holding the template
            actor document for a template name
        persist: Stores the actor payload; returns a CollaboratorResult

    Returns:
        CollaboratorResult whose content holds "statblock", "actor" and
        "persisted" (the persist result's content, or None)

    Raises:
        InvalidRatingFormat: If request.rating is not a canonical challenge rating
    """
    rng = random.Random(request.seed) if request.seed is not None else random.Random()
    generated = generate_fresh_statblock(
        request.rating,
        request.species,
        request.role,
        request.alignment_modifiers,
        name=request.name,
        alignment=request.alignment,
        rng=rng,
    )

    found = _find_template(request.role, lookup_template)
    if not found.success:
        return found

    template = parse_actor_data(found.content)
    if template is None:
        return CollaboratorResult.failure(f"Template actor for role {request.role} could not be parsed")

    scaled = rescale_statblock(
        template,
        generated.rating,
        new_abilities=generated.abilities,
        role=request.role,
    )
    scaled = scaled.model_copy(update={
        "name": request.name or template.name,
        "species": request.species,
        "alignment": generated.alignment,
        "role": request.role,
        "description": request.description or scaled.description,
        "biography_html": "" if request.description else scaled.biography_html,
        "portrait": request.portrait or scaled.portrait,
        "token": request.token or request.portrait or scaled.token,
    })
    actor = convert_to_foundry(scaled, generated)

    persisted = None
    if persist is not None:
        stored = _call_collaborator("Persisting actor", persist, actor)
        if not stored.success:
            return stored
        persisted = stored.content

    logger.info(f"Created {request.species} {request.role} '{scaled.name}' at CR {scaled.rating}")
    return CollaboratorResult.ok({"statblock": scaled, "actor": actor, "persisted": persisted})


__all__ = [
    "GenerateFreshRequest",
    "InvalidRatingFormat",
    "MergeRequest",
    "NPCRequest",
    "RescaleRequest",
    "TemplateNPCRequest",
    "create_npc_from_template",
    "generate_fresh_statblock",
    "handle_request",
    "merge_statblocks",
    "parse_request",
    "rescale_statblock",
]

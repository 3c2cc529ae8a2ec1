"""Prompt construction for NPC name and biography generation."""

import logging
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = "You are a creative D&D dungeon master helping to generate NPCs for a campaign."

MAX_NAME_SUGGESTIONS = 5


class FlavorRequest(BaseModel):
    """What to generate and the NPC context to generate it for."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["name", "biography"]
    name: Optional[str] = None
    species: Optional[str] = None
    role: Optional[str] = None
    alignment: Optional[str] = None
    rating: Optional[str] = None
    description: Optional[str] = None
    template_actor_name: Optional[str] = None
    template_actor_description: Optional[str] = None


def _build_name_prompt(request: FlavorRequest) -> str:
    based_on = ""
    if request.template_actor_name:
        based_on = f'based on the template actor "{request.template_actor_name}" '
    return (
        f"Generate 1 creative and appropriate name for a D&D 5e NPC {based_on}"
        "with these characteristics:\n"
        f"- Species: {request.species or 'Human'}\n"
        f"- Alignment: {request.alignment or 'Neutral'}\n"
        "\n"
        "Provide ONLY the name, nothing else. No explanation, numbering, or extra text. "
        "Just the name."
    )


def _build_biography_prompt(request: FlavorRequest) -> str:
    lines = ["Create a single paragraph biography for a D&D 5e NPC with these characteristics:"]
    if request.name:
        lines.append(f"- Name: {request.name}")
    lines.append(f"- Species: {request.species or 'Human'}")
    if request.role:
        lines.append(f"- Role: {request.role}")
    lines.append(f"- Alignment: {request.alignment or 'Neutral'}")
    lines.append(f"- Challenge Rating: {request.rating or '1'}")
    if request.template_actor_name:
        template = f"- Based on template actor: {request.template_actor_name}"
        if request.template_actor_description:
            template += f" ({request.template_actor_description})"
        lines.append(template)
    if request.description:
        lines.append(f"- Additional context: {request.description}")

    lines.extend([
        "",
        "Write ONE concise paragraph (4-6 sentences) that includes:",
        "1. A quick rundown of who they are and their background",
        "2. What they look like (physical appearance, clothing, distinguishing features)",
        "3. A brief sentence about their personality and demeanor",
        "",
        "IMPORTANT: DO NOT mention any specific locations, place names, cities, forests, "
        "or geographical features. Keep the description generic so it fits any campaign setting.",
        "",
        "Format the output as HTML wrapped in a <p> tag. Make it engaging, specific, and "
        "suitable for a D&D campaign. Return ONLY the HTML paragraph, no other text.",
    ])
    return "\n".join(lines)


def build_prompt(request: FlavorRequest) -> str:
    """Build the generation prompt for a name or biography request."""
    if request.kind == "name":
        prompt = _build_name_prompt(request)
    else:
        prompt = _build_biography_prompt(request)
    logger.debug(f"Flavor prompt ({request.kind}): {prompt}")
    return prompt


def split_name_suggestions(text: str, limit: int = MAX_NAME_SUGGESTIONS) -> list:
    """Split a name response into at most `limit` non-empty trimmed lines."""
    names = [line.strip() for line in (text or "").splitlines()]
    return [name for name in names if name][:limit]

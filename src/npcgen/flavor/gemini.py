"""
Gemini-backed provider for NPC names and biographies.

Flavour text is optional: every failure (AI disabled, no key, API error,
empty response) comes back as a failed CollaboratorResult and the caller
carries on with placeholder text. Calls are not retried.
"""

import asyncio
import logging
from typing import Any, Optional

from google import genai

from npcgen.config import GeneratorSettings
from npcgen.exceptions import CollaboratorError
from npcgen.flavor.prompts import (
    SYSTEM_INSTRUCTION,
    FlavorRequest,
    build_prompt,
    split_name_suggestions,
)
from npcgen.models import CollaboratorResult

logger = logging.getLogger(__name__)


class GeminiFlavorProvider:
    """Generate names and biographies with the Gemini API."""

    def __init__(self, settings: GeneratorSettings, client: Optional[Any] = None):
        """
        Args:
            settings: Generator settings (AI toggle, key, model, sampling)
            client: Preconfigured genai.Client; created lazily from the
                settings' API key when omitted
        """
        self.settings = settings
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.settings.gemini_api_key:
                raise CollaboratorError("Gemini API key not configured")
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    async def _generate_text(self, prompt: str) -> str:
        client = self._get_client()
        response = await asyncio.to_thread(
            client.models.generate_content,
            model=self.settings.gemini_model,
            contents=prompt,
            config={
                "system_instruction": SYSTEM_INSTRUCTION,
                "temperature": self.settings.temperature,
                "max_output_tokens": self.settings.max_output_tokens,
            },
        )
        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise CollaboratorError("Gemini returned an empty response")
        return text

    async def generate(self, request: FlavorRequest) -> CollaboratorResult:
        """
        Generate flavour text for a request.

        Returns:
            CollaboratorResult whose content is a list of up to five names
            for name requests, or an HTML paragraph for biography requests
        """
        if not self.settings.enable_ai:
            return CollaboratorResult.failure("AI features are not enabled")
        if not self.settings.gemini_api_key and self._client is None:
            logger.warning("Gemini API key not configured; skipping flavour generation")
            return CollaboratorResult.failure("Gemini API key not configured")

        prompt = build_prompt(request)
        logger.info(f"Generating NPC {request.kind} with {self.settings.gemini_model}")
        try:
            text = await self._generate_text(prompt)
        except Exception as e:
            logger.error(f"Flavour generation failed for {request.kind}: {e}")
            return CollaboratorResult.failure(str(e) or e.__class__.__name__)

        if request.kind == "name":
            return CollaboratorResult.ok(split_name_suggestions(text))
        return CollaboratorResult.ok(text)

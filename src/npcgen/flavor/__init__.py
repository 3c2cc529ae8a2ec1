"""Optional AI flavour text (names and biographies)."""

from .gemini import GeminiFlavorProvider
from .prompts import FlavorRequest, build_prompt, split_name_suggestions

__all__ = ["GeminiFlavorProvider", "FlavorRequest", "build_prompt", "split_name_suggestions"]

"""Centralized configuration for the NPC generator.

This module provides:
- PROJECT_ROOT and SRC_DIR paths
- Environment variable access with get_env()
- Automatic .env loading
- GeneratorSettings, the explicit options object handed to adapters

Usage:
    from npcgen.config import GeneratorSettings, get_env

    settings = GeneratorSettings.from_env()
    api_key = get_env("GeminiImageAPI")

Core stat functions never read settings themselves; callers pass the values
they need as parameters.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from npcgen.exceptions import ConfigurationError

# Calculate paths once at import time
PACKAGE_DIR = Path(__file__).parent.resolve()
SRC_DIR = PACKAGE_DIR.parent
PROJECT_ROOT = SRC_DIR.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

def get_env(key: str, default: Optional[str] = None) -> str:
    """Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class GeneratorSettings(BaseModel):
    """Recognized generator options.

    Replaces the ambient module-settings map of the host: anything that needs
    an option receives this object (or a field of it) explicitly.
    """

    model_config = ConfigDict(frozen=True)

    enable_ai: bool = False
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=500, gt=0)
    ability_variance: int = Field(default=2, ge=0, le=5)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        """Build settings from NPCGEN_* environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        try:
            return cls(
                enable_ai=_env_bool(get_env("NPCGEN_ENABLE_AI", default="false")),
                gemini_api_key=os.environ.get("GeminiImageAPI"),
                gemini_model=get_env("NPCGEN_GEMINI_MODEL", default="gemini-2.0-flash"),
                temperature=float(get_env("NPCGEN_TEMPERATURE", default="0.8")),
                max_output_tokens=int(get_env("NPCGEN_MAX_OUTPUT_TOKENS", default="500")),
                ability_variance=int(get_env("NPCGEN_ABILITY_VARIANCE", default="2")),
                log_level=get_env("NPCGEN_LOG_LEVEL", default="INFO"),
            )
        except (ValueError, PydanticValidationError) as e:
            raise ConfigurationError(f"Invalid generator settings: {e}") from e

"""Centralized exception hierarchy for the NPC generator.

Usage:
    from npcgen.exceptions import InvalidRatingFormat

    raise InvalidRatingFormat("1/3")
"""


class NPCGenError(Exception):
    """Base exception for all NPC generator errors."""
    pass


class InvalidRatingFormat(NPCGenError, ValueError):
    """Raised when a challenge rating string cannot be parsed.

    Only raised at the rating parser boundary. Ratings derived internally
    are always canonical floats.

    Examples:
        - "abc" (non-numeric)
        - "-1" (negative)
        - "1/3" (non-canonical denominator)
    """

    def __init__(self, value: str, reason: str = "not a canonical challenge rating"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid challenge rating '{value}': {reason}")


class ConversionError(NPCGenError):
    """Raised when an actor document cannot be converted.

    Examples:
        - Actor payload missing its system data
        - Unsupported item type in a payload
    """
    pass


class ConfigurationError(NPCGenError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Missing API key
        - Invalid temperature value
    """
    pass


class CollaboratorError(NPCGenError):
    """Raised inside adapters when an external collaborator fails.

    Never crosses the public boundary: orchestration turns it into a
    failed CollaboratorResult.
    """
    pass

"""Tests for exception hierarchy."""

import pytest

from npcgen.exceptions import (
    CollaboratorError,
    ConfigurationError,
    ConversionError,
    InvalidRatingFormat,
    NPCGenError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Tests for exception classes."""

    def test_base_exception_exists(self):
        """Should have NPCGenError base exception."""
        assert issubclass(NPCGenError, Exception)

    @pytest.mark.parametrize("exc_class", [
        InvalidRatingFormat,
        ConversionError,
        ConfigurationError,
        CollaboratorError,
    ])
    def test_inherits_from_base(self, exc_class):
        assert issubclass(exc_class, NPCGenError)

    def test_invalid_rating_is_value_error(self):
        """Callers catching ValueError also catch bad ratings."""
        assert issubclass(InvalidRatingFormat, ValueError)

    def test_invalid_rating_message(self):
        err = InvalidRatingFormat("1/3", "non-canonical fraction")

        assert err.value == "1/3"
        assert err.reason == "non-canonical fraction"
        assert str(err) == "Invalid challenge rating '1/3': non-canonical fraction"

    def test_invalid_rating_default_reason(self):
        err = InvalidRatingFormat("abc")

        assert "not a canonical challenge rating" in str(err)

    def test_exception_has_message(self):
        """Exceptions should store message."""
        err = ConversionError("parsing failed")

        assert str(err) == "parsing failed"

    def test_can_catch_with_base(self):
        """Should be able to catch all errors with base class."""
        with pytest.raises(NPCGenError):
            raise ConfigurationError("bad temperature")

"""
Validation models for the game compiler.

ValidationResult is the outcome of checking a parsed document against one
schema level. It either carries the finished game definition or exactly
one error explaining the first problem found.

Example:
    >>> # Successful validation
    >>> result = valid_result(Level1Game(character="bunny"))
    >>> result.valid
    True

    >>> # Failed validation
    >>> result = invalid_result(
    ...     OutOfRange(field="lives", min=1, max=9, value=0),
    ...     SchemaLevel.LEVEL2,
    ... )
    >>> result.error.kind
    'out_of_range'
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from gamespeak.models.errors import KidFriendlyError, YamlError
from gamespeak.models.game import AnyGameDefinition
from gamespeak.models.level import SchemaLevel


class ValidationResult(BaseModel):
    """Result of validating a document at a schema level.

    Attributes:
        valid: Whether the document is a valid game
        level: The schema level the document was checked against
        game: The validated definition (if valid)
        error: The first problem found (if invalid)
    """

    valid: bool
    level: SchemaLevel

    game: AnyGameDefinition | None = None
    error: YamlError | None = None

    @model_validator(mode="after")
    def check_outcome_fields(self) -> "ValidationResult":
        """Ensure exactly one of game/error is present."""
        if self.valid:
            if self.game is None:
                raise ValueError("game is required when valid=True")
            if self.error is not None:
                raise ValueError("error must be empty when valid=True")
        else:
            if self.error is None:
                raise ValueError("error is required when valid=False")
            if self.game is not None:
                raise ValueError("game must be empty when valid=False")
        return self

    def to_kid_friendly(self) -> KidFriendlyError:
        """Convert the error of an invalid result for display.

        Raises:
            ValueError: If called on a valid result
        """
        if self.valid:
            raise ValueError("Cannot create KidFriendlyError from valid result")

        # Type narrowing for mypy
        assert self.error is not None

        return self.error.to_kid_friendly()


# Convenience factory functions


def valid_result(game: AnyGameDefinition) -> ValidationResult:
    """Create a successful ValidationResult for a finished definition."""
    return ValidationResult(valid=True, level=game.level, game=game)


def invalid_result(error: YamlError, level: SchemaLevel) -> ValidationResult:
    """Create a failed ValidationResult.

    Args:
        error: The first problem found
        level: The level the document was checked against

    Returns:
        ValidationResult with valid=False
    """
    return ValidationResult(valid=False, level=level, error=error)

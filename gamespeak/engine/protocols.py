"""
Protocol definitions for the game compiler.

This module defines the interfaces shared by the per-level components:

- LevelValidator: checks a parsed document against one schema level
- Migration: upgrades a valid game one level up

Component Flow:
    YAML text -> parser -> LevelValidator -> ValidationResult
                                                  |
                                                  v (if invalid)
                                         ScaffoldingEngine -> ScaffoldedError

    valid game -> Migration -> MigrationResult (one level up)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gamespeak.models.level import SchemaLevel
    from gamespeak.models.migration import MigrationHint, MigrationResult
    from gamespeak.models.validation import ValidationResult


@runtime_checkable
class LevelValidator(Protocol):
    """Protocol for validating a parsed document at one schema level.

    Validators stop at the first problem and never raise for bad input:
    every problem comes back inside the ValidationResult.
    """

    level: "SchemaLevel"

    def validate(self, data: Any, source: str = "") -> "ValidationResult":
        """Validate a parsed document.

        Args:
            data: The parsed document with normalized keys
            source: The original text, used to point at lines

        Returns:
            ValidationResult with the game definition or the first error
        """
        ...


@runtime_checkable
class Migration(Protocol):
    """Protocol for upgrading a game definition by one level.

    One implementation exists per source level. Migration never loses
    information: everything in the source game is present in the result.
    """

    def migrate(self) -> "MigrationResult":
        """Upgrade the game one level.

        Returns:
            MigrationResult with the upgraded game, or the original game
            and an error
        """
        ...

    def can_migrate(self) -> bool:
        """Whether there is a level above this one to migrate to."""
        ...

    def migration_hints(self) -> list["MigrationHint"]:
        """What the next level adds, for the upgrade screen."""
        ...

"""
Migration models - results, errors and hints for level upgrades
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from gamespeak.models.game import AnyGameDefinition, MigratedGame
from gamespeak.models.level import SchemaLevel


class CannotDowngrade(BaseModel):
    """Migration only goes up a level, never down"""
    kind: Literal["cannot_downgrade"] = "cannot_downgrade"
    from_level: SchemaLevel
    to_level: SchemaLevel

    @property
    def summary(self) -> str:
        return f"Cannot downgrade from {self.from_level.label} to {self.to_level.label}"


class AlreadyAtLevel(BaseModel):
    kind: Literal["already_at_level"] = "already_at_level"
    level: SchemaLevel

    @property
    def summary(self) -> str:
        return f"Already at {self.level.label}"


class IncompatibleData(BaseModel):
    """The game could not be carried over without breaking the target level"""
    kind: Literal["incompatible_data"] = "incompatible_data"
    reason: str

    @property
    def summary(self) -> str:
        return f"Migration failed: {self.reason}"


MigrationError = Annotated[
    Union[CannotDowngrade, AlreadyAtLevel, IncompatibleData],
    Field(discriminator="kind"),
]


class HintCategory(str, Enum):
    """What kind of novelty a migration hint describes"""

    VOCABULARY = "vocabulary"
    STRUCTURE = "structure"
    MECHANICS = "mechanics"
    CONTENT = "content"
    SYNTAX = "syntax"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class MigrationHint(BaseModel):
    """A 'what's new' note shown when a game moves up a level"""

    category: HintCategory
    description: str
    unlocks_feature: bool = True

    @classmethod
    def vocabulary(cls, description: str) -> "MigrationHint":
        return cls(category=HintCategory.VOCABULARY, description=description)

    @classmethod
    def structure(cls, description: str) -> "MigrationHint":
        return cls(category=HintCategory.STRUCTURE, description=description)

    @classmethod
    def mechanics(cls, description: str) -> "MigrationHint":
        return cls(category=HintCategory.MECHANICS, description=description)

    @classmethod
    def content(cls, description: str) -> "MigrationHint":
        return cls(category=HintCategory.CONTENT, description=description)


class MigrationResult(BaseModel):
    """Outcome of a migration.

    On success ``game`` is the migrated definition. On failure ``error`` is
    set and ``game`` is the original definition, unchanged.
    """

    success: bool
    game: AnyGameDefinition
    error: MigrationError | None = None

    @property
    def level(self) -> SchemaLevel:
        return self.game.level

    @property
    def migrated(self) -> MigratedGame | None:
        """The upgraded game tagged with its level, or None on failure"""
        if not self.success:
            return None
        return MigratedGame(game=self.game)


def migration_succeeded(game: AnyGameDefinition) -> MigrationResult:
    return MigrationResult(success=True, game=game)


def migration_failed(original: AnyGameDefinition, error: MigrationError) -> MigrationResult:
    return MigrationResult(success=False, game=original, error=error)

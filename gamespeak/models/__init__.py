"""Pydantic models for gamespeak"""

from gamespeak.models.level import SchemaLevel
from gamespeak.models.errors import (
    YamlError,
    YamlSyntaxError,
    UnknownWord,
    NestingTooDeep,
    MissingRequired,
    OutOfRange,
    InvalidEnumValue,
    FileNotFound,
    IncompatibleModel,
    ValidationError,
    KidFriendlyError,
    ErrorLocation,
    HelperCharacter,
)
from gamespeak.models.game import (
    Level1Game,
    TouchEvent,
    Level2Game,
    Level2Character,
    Level2Rule,
    AddScore,
    LoseLife,
    PlaySound,
    ShowMessage,
    EntityAction,
    Level3Game,
    Level3Assets,
    Level3World,
    Level3Entity,
    AnyGameDefinition,
    MigratedGame,
)
from gamespeak.models.validation import ValidationResult, valid_result, invalid_result
from gamespeak.models.migration import (
    MigrationResult,
    MigrationError,
    MigrationHint,
    HintCategory,
    CannotDowngrade,
    AlreadyAtLevel,
    IncompatibleData,
)
from gamespeak.models.scaffold import Scaffold, ScaffoldedError, Correction, Intent

__all__ = [
    "SchemaLevel",
    # Error models
    "YamlError",
    "YamlSyntaxError",
    "UnknownWord",
    "NestingTooDeep",
    "MissingRequired",
    "OutOfRange",
    "InvalidEnumValue",
    "FileNotFound",
    "IncompatibleModel",
    "ValidationError",
    "KidFriendlyError",
    "ErrorLocation",
    "HelperCharacter",
    # Game models
    "Level1Game",
    "TouchEvent",
    "Level2Game",
    "Level2Character",
    "Level2Rule",
    "AddScore",
    "LoseLife",
    "PlaySound",
    "ShowMessage",
    "EntityAction",
    "Level3Game",
    "Level3Assets",
    "Level3World",
    "Level3Entity",
    "AnyGameDefinition",
    "MigratedGame",
    # Validation models
    "ValidationResult",
    "valid_result",
    "invalid_result",
    # Migration models
    "MigrationResult",
    "MigrationError",
    "MigrationHint",
    "HintCategory",
    "CannotDowngrade",
    "AlreadyAtLevel",
    "IncompatibleData",
    # Scaffold models
    "Scaffold",
    "ScaffoldedError",
    "Correction",
    "Intent",
]

"""
Game Validator - Entry point for compiling game YAML

Parses the text, detects its schema level and hands it to the validator
for that level. Every outcome is a ValidationResult, including YAML that
cannot be parsed at all.
"""

import logging
from typing import Any

from gamespeak.engine.parser import ParsedDocument, detect_level_from_data, parse_document
from gamespeak.engine.protocols import LevelValidator
from gamespeak.engine.validators import Level1Validator, Level2Validator, Level3Validator
from gamespeak.models.errors import YamlSyntaxError
from gamespeak.models.level import SchemaLevel
from gamespeak.models.validation import ValidationResult, invalid_result

logger = logging.getLogger(__name__)


class GameValidator:
    """Validates documents at any schema level.

    Level validators are created on first use and reused afterwards.
    """

    def __init__(self, validators: dict[SchemaLevel, LevelValidator] | None = None):
        self._validators: dict[SchemaLevel, LevelValidator] = dict(validators or {})

    def validator_for(self, level: SchemaLevel) -> LevelValidator:
        level = SchemaLevel(level)
        if level not in self._validators:
            self._validators[level] = _VALIDATOR_CLASSES[level]()
        return self._validators[level]

    def validate(self, data: Any, level: SchemaLevel, source: str = "") -> ValidationResult:
        """Validate a parsed document at the given level"""
        return self.validator_for(level).validate(data, source)

    def compile(self, text: str) -> ValidationResult:
        """Parse, detect the level and validate YAML source"""
        parsed = parse_document(text)
        if isinstance(parsed, YamlSyntaxError):
            return invalid_result(parsed, SchemaLevel.LEVEL1)

        level = parsed.level
        logger.debug(f"Detected {level.label} ({len(parsed.top_level_keys)} top-level keys)")
        return self.validate(parsed.data, level, source=text)

    def compile_document(self, parsed: ParsedDocument) -> ValidationResult:
        """Validate an already parsed document at its detected level"""
        return self.validate(parsed.data, detect_level_from_data(parsed.data), parsed.source)


_VALIDATOR_CLASSES = {
    SchemaLevel.LEVEL1: Level1Validator,
    SchemaLevel.LEVEL2: Level2Validator,
    SchemaLevel.LEVEL3: Level3Validator,
}

_default_validator: GameValidator | None = None


def get_validator() -> GameValidator:
    """Get the shared GameValidator"""
    global _default_validator
    if _default_validator is None:
        _default_validator = GameValidator()
    return _default_validator


def validate(data: Any, level: SchemaLevel, source: str = "") -> ValidationResult:
    """Validate a parsed document at the given level"""
    return get_validator().validate(data, level, source)


def compile_game(text: str) -> ValidationResult:
    """Compile YAML source into a validated game definition.

    Example:
        >>> result = compile_game("character: bunny")
        >>> result.valid, result.level
        (True, <SchemaLevel.LEVEL1: 1>)
    """
    return get_validator().compile(text)

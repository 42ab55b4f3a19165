"""
Shared field checks for the level validators.

Each check returns the cleaned value or raises Rejected carrying the error
to report. Validators catch Rejected at their boundary and turn it into an
invalid ValidationResult, so nothing here escapes to callers.
"""

from __future__ import annotations

from typing import Any

from gamespeak.engine.parser import calculate_depth
from gamespeak.engine.vocabulary import Vocabulary
from gamespeak.models.errors import (
    InvalidEnumValue,
    MissingRequired,
    NestingTooDeep,
    OutOfRange,
    ValidationError,
    YamlError,
)
from gamespeak.models.level import SchemaLevel


class Rejected(Exception):
    """Stops validation at the first problem found"""

    def __init__(self, error: YamlError):
        super().__init__(error.summary)
        self.error = error


def check_depth(data: Any, level: SchemaLevel) -> None:
    depth = calculate_depth(data)
    if depth > level.max_nesting_depth:
        raise Rejected(NestingTooDeep(max=level.max_nesting_depth, found=depth))


def require(field: str, value: Any, example: str) -> Any:
    """Reject a missing (or empty) value with a runnable example"""
    if value is None or value == "":
        raise Rejected(MissingRequired(field=field, example=example))
    return value


def mapping(field: str, value: Any) -> dict:
    """A nested section; a missing section is an empty one"""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise Rejected(ValidationError(
            message=f"'{field}' should have settings inside it, each on its own indented line."
        ))
    return value


def sequence(field: str, value: Any) -> list:
    """A list section; a missing list is an empty one"""
    if value is None:
        return []
    if not isinstance(value, list):
        raise Rejected(ValidationError(
            message=f"'{field}' should be a list, with each item starting with '- '."
        ))
    return value


def text(field: str, value: Any) -> str | None:
    """Free text such as a name or a message"""
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise Rejected(ValidationError(
            message=f"'{field}' should be written on one line, like '{field}: hello'."
        ))
    return str(value)


def word(vocabulary: Vocabulary, field: str, value: Any, *categories: str) -> str | None:
    """A single word that must come from the given vocabulary categories.

    The word is returned lowercase so the game always uses the known spelling.
    """
    if value is None:
        return None

    options = vocabulary.options(*categories)
    if isinstance(value, (dict, list)):
        example = options[0] if options else "bunny"
        raise Rejected(ValidationError(
            message=f"'{field}' should be a single word, like '{example}'."
        ))

    written = str(value)
    if not vocabulary.is_valid_for_category(written, *categories):
        raise Rejected(InvalidEnumValue(field=field, value=written, valid_options=options))
    return written.lower()


def whole_number(field: str, value: Any, minimum: int, maximum: int) -> int | None:
    """A whole number within [minimum, maximum]"""
    if value is None:
        return None
    # YAML reads yes/no as booleans, which are ints in Python
    if isinstance(value, bool) or not isinstance(value, int):
        raise Rejected(ValidationError(
            message=f"'{field}' should be a whole number, like {max(minimum, 1)}."
        ))
    if not minimum <= value <= maximum:
        raise Rejected(OutOfRange(field=field, min=minimum, max=maximum, value=value))
    return value


def number(field: str, value: Any) -> float | int | None:
    """Any number, whole or decimal"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise Rejected(ValidationError(message=f"'{field}' should be a number, like 1."))
    return value

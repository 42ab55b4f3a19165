"""
Parser - Reads game YAML into a normalized tree and detects its schema level.

Setting names are matched loosely so young authors are not tripped up by
spelling:
    - case does not matter ("Character" == "character")
    - "-" and "_" are interchangeable ("when-touch" == "when_touch")
    - British spellings are accepted ("colour" -> "color")
    - "game" at the top level means "name"

Names the author makes up (characters, entities, assets, tiles, UI
elements) and free-form ``components`` are kept exactly as written, as are
all values.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

import yaml

from gamespeak.models.errors import YamlSyntaxError
from gamespeak.models.level import SchemaLevel

logger = logging.getLogger(__name__)

KEY_ALIASES = {
    "colour": "color",
    "behaviour": "behavior",
}

TOP_LEVEL_ALIASES = {
    "game": "name",
}

# Any of these top-level keys marks a document as that level
LEVEL3_KEYS = frozenset({"assets", "entities", "world", "version"})
LEVEL2_KEYS = frozenset({"characters", "rules", "lives"})

# Sections whose keys are names chosen by the author. Paths are made of
# setting names, with "*" standing for one chosen name.
NAMED_SECTIONS = frozenset({
    ("characters",),
    ("entities",),
    ("ui",),
    ("assets", "sprites"),
    ("assets", "sounds"),
    ("assets", "models"),
    ("world", "tiles"),
})

# Sections kept as written all the way down
FREE_FORM_SECTIONS = frozenset({
    ("entities", "*", "components"),
})

TOO_DEEP_MESSAGE = "the game is too deeply nested to read"
SELF_REFERENCE_MESSAGE = "an alias points back at the section it is part of"


@dataclass
class ParsedDocument:
    """A YAML document with normalized keys"""
    source: str
    data: Any

    @property
    def depth(self) -> int:
        return calculate_depth(self.data)

    @property
    def top_level_keys(self) -> list[str]:
        if isinstance(self.data, dict):
            return list(self.data)
        return []

    @property
    def level(self) -> SchemaLevel:
        return detect_level_from_data(self.data)


def normalize_key(key: Any) -> str:
    """Normalize a single mapping key"""
    normalized = str(key).strip().lower().replace("-", "_")
    return KEY_ALIASES.get(normalized, normalized)


def normalize_keys(value: Any, path: tuple[str, ...] = ()) -> Any:
    """Normalize the setting names in a parsed YAML value.

    Args:
        value: Parsed YAML
        path: Setting names leading to value ("*" for a chosen name)
    """
    if path in FREE_FORM_SECTIONS:
        return value
    if isinstance(value, dict):
        named = path in NAMED_SECTIONS
        normalized = {}
        for key, child in value.items():
            if named:
                normalized[key] = normalize_keys(child, path + ("*",))
                continue
            new_key = normalize_key(key)
            if not path:
                new_key = TOP_LEVEL_ALIASES.get(new_key, new_key)
            normalized[new_key] = normalize_keys(child, path + (new_key,))
        return normalized
    if isinstance(value, list):
        return [normalize_keys(item, path) for item in value]
    return value


def refers_to_itself(value: Any, _enclosing: frozenset[int] = frozenset()) -> bool:
    """True when an alias makes a mapping or list contain itself"""
    if not isinstance(value, (dict, list)):
        return False
    if id(value) in _enclosing:
        return True
    children = value.values() if isinstance(value, dict) else value
    enclosing = _enclosing | {id(value)}
    return any(refers_to_itself(child, enclosing) for child in children)


def calculate_depth(value: Any) -> int:
    """Nesting depth of a parsed value.

    Mappings and lists count one level plus their deepest child; scalars
    count zero. So ``character: bunny`` has depth 1.
    """
    deepest = 0
    pending = [(value, 1)]
    while pending:
        node, depth = pending.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        deepest = max(deepest, depth)
        pending.extend((child, depth + 1) for child in children)
    return deepest


def _syntax_error_from(exc: yaml.YAMLError) -> YamlSyntaxError:
    """Build a YamlSyntaxError from a PyYAML exception (1-indexed position)"""
    mark = getattr(exc, "problem_mark", None)
    parts = [getattr(exc, "context", None), getattr(exc, "problem", None)]
    message = ", ".join(part for part in parts if part) or str(exc)

    if mark is None:
        return YamlSyntaxError(message=message)
    return YamlSyntaxError(message=message, line=mark.line + 1, column=mark.column + 1)


def parse_document(text: str) -> ParsedDocument | YamlSyntaxError:
    """Parse YAML source into a ParsedDocument.

    Returns:
        ParsedDocument on success, YamlSyntaxError if the text is not YAML
        or cannot be read as a tree of settings
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        error = _syntax_error_from(e)
        logger.debug(f"YAML parse failed: {error.message} (line {error.line})")
        return error
    except RecursionError:
        logger.warning("YAML parse failed: nesting exceeded the recursion limit")
        return YamlSyntaxError(message=TOO_DEEP_MESSAGE)

    try:
        if refers_to_itself(data):
            logger.debug("YAML parse failed: self-referencing alias")
            return YamlSyntaxError(message=SELF_REFERENCE_MESSAGE)
        normalized = normalize_keys(data)
    except RecursionError:
        logger.warning("Key normalization failed: nesting exceeded the recursion limit")
        return YamlSyntaxError(message=TOO_DEEP_MESSAGE)

    return ParsedDocument(source=text, data=normalized)


def detect_level_from_data(data: Any) -> SchemaLevel:
    """Pick the schema level from top-level keys only.

    Anything that is not a mapping (an empty file, a list, a lone word) is
    treated as Level 1 so that validation can explain what is missing.
    """
    if not isinstance(data, dict):
        return SchemaLevel.LEVEL1

    keys = set(data)
    if keys & LEVEL3_KEYS:
        return SchemaLevel.LEVEL3
    if keys & LEVEL2_KEYS:
        return SchemaLevel.LEVEL2
    return SchemaLevel.LEVEL1


def detect_level(text: str) -> SchemaLevel | YamlSyntaxError:
    """Detect the schema level of YAML source.

    Example:
        >>> detect_level("character: bunny")
        <SchemaLevel.LEVEL1: 1>
        >>> detect_level("characters:\\n  hero:\\n    type: knight")
        <SchemaLevel.LEVEL2: 2>
    """
    parsed = parse_document(text)
    if isinstance(parsed, YamlSyntaxError):
        return parsed
    return parsed.level


# Alternative name used by editor integrations
detect_schema_level = detect_level


KEY_PATTERN = re.compile(r"^\s*(?:-\s*)?([^\s:#][^:#]*?)\s*:")


def find_written_key(text: str, key: str) -> tuple[int, str] | None:
    """Where a key is first written and how it is spelled there.

    The key is matched loosely, so ``back_grund`` finds ``Back-Grund``.
    List items (``- when: ...``) are found too.

    Returns:
        (1-indexed line, key as written), or None if the key is not written
    """
    target = normalize_key(key)
    for number, line in enumerate(text.splitlines(), start=1):
        match = KEY_PATTERN.match(line)
        if match:
            written = match.group(1).strip("'\"")
            if normalize_key(written) == target:
                return number, written
    return None


def find_line(text: str, key: str) -> int | None:
    """1-indexed line where a key is first written, matched loosely"""
    found = find_written_key(text, key)
    return found[0] if found else None

"""
Intent Patterns - Loads the scaffolding heuristics from intent_patterns.yaml

The file holds the pattern words that hint at each kind of intent, the
synonym hints used to pick a replacement word, the fallback words and the
fuzzy matching distances.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

from gamespeak.config import get_data_dir

logger = logging.getLogger(__name__)

PATTERNS_FILE = "intent_patterns.yaml"


@dataclass(frozen=True)
class FuzzyConfig:
    """Edit-distance thresholds"""
    short_word_length: int = 4
    short_word_distance: int = 1
    long_word_distance: int = 2
    default_distance: int = 2
    vocabulary_distance: int = 2


@dataclass(frozen=True)
class IntentPatterns:
    """Immutable heuristics tables for the scaffolding engine"""
    fuzzy: FuzzyConfig = field(default_factory=FuzzyConfig)
    patterns: dict[str, tuple[str, ...]] = field(default_factory=dict)
    synonyms: dict[str, dict[str, tuple[str, ...]]] = field(default_factory=dict)
    defaults: dict[str, str] = field(default_factory=dict)
    line_keywords: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def patterns_for(self, category: str) -> tuple[str, ...]:
        return self.patterns.get(category, ())

    def synonyms_for(self, category: str) -> dict[str, tuple[str, ...]]:
        return self.synonyms.get(category, {})

    def default_for(self, category: str) -> str:
        """Fallback word for a category

        Raises:
            KeyError: If no default is configured for the category
        """
        if category not in self.defaults:
            raise KeyError(f"No default word configured for '{category}'")
        return self.defaults[category]

    def keywords_for(self, category: str) -> tuple[str, ...]:
        return self.line_keywords.get(category, ())


def _words(values) -> tuple[str, ...]:
    return tuple(str(value).lower() for value in (values or []))


def load_patterns(path: Path) -> IntentPatterns:
    """Load intent patterns from a YAML file

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Intent patterns file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    patterns = IntentPatterns(
        fuzzy=FuzzyConfig(**(raw.get("fuzzy") or {})),
        patterns={name: _words(words) for name, words in (raw.get("patterns") or {}).items()},
        synonyms={
            category: {str(target): _words(hints) for target, hints in (mapping or {}).items()}
            for category, mapping in (raw.get("synonyms") or {}).items()
        },
        defaults={str(category): str(word) for category, word in (raw.get("defaults") or {}).items()},
        line_keywords={
            name: _words(words) for name, words in (raw.get("line_keywords") or {}).items()
        },
    )
    logger.info(
        f"Loaded intent patterns: {sum(len(p) for p in patterns.patterns.values())} "
        f"pattern words in {len(patterns.patterns)} categories"
    )
    return patterns


@lru_cache(maxsize=None)
def _cached_patterns(path: Path) -> IntentPatterns:
    return load_patterns(path)


def get_patterns() -> IntentPatterns:
    """Get the shared intent patterns"""
    return _cached_patterns(get_data_dir() / PATTERNS_FILE)


def reload_patterns() -> None:
    """Drop cached patterns so the next lookup reads the file again"""
    _cached_patterns.cache_clear()

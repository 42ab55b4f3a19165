"""
Vocabulary - Controlled word lists for each schema level

Words are grouped into categories (characters, sounds, backgrounds...).
Each level is loaded from vocabulary.yaml and may extend a lower level, so
Level 2 knows every Level 1 word plus its own.

Vocabularies are immutable and shared: use get_vocabulary(level) rather
than building new ones.
"""

import logging
from difflib import SequenceMatcher
from functools import lru_cache
from pathlib import Path

import yaml

from gamespeak.config import get_data_dir
from gamespeak.models.level import SchemaLevel

logger = logging.getLogger(__name__)

VOCABULARY_FILE = "vocabulary.yaml"

# Suggestions for unknown words stay within this many edits
SUGGESTION_MAX_DISTANCE = 3
DEFAULT_MAX_SUGGESTIONS = 5


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings"""
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current
    return previous[-1]


class Vocabulary:
    """The accepted words for one schema level, by category.

    Lookups are case-insensitive. Category order and word order follow the
    data file, which is the order options are shown to the player.
    """

    def __init__(self, level: SchemaLevel, categories: dict[str, list[str]]):
        self.level = level
        self._ordered: dict[str, tuple[str, ...]] = {
            name: tuple(dict.fromkeys(word.lower() for word in words))
            for name, words in categories.items()
        }
        self._members: dict[str, frozenset[str]] = {
            name: frozenset(words) for name, words in self._ordered.items()
        }
        all_words: dict[str, None] = {}
        for words in self._ordered.values():
            all_words.update(dict.fromkeys(words))
        self._all = tuple(all_words)
        self._all_members = frozenset(self._all)

    def __repr__(self) -> str:
        return f"Vocabulary(level={self.level.label!r}, words={self.word_count()})"

    @property
    def categories(self) -> list[str]:
        return list(self._ordered)

    def has_category(self, category: str) -> bool:
        return category in self._ordered

    def contains(self, word: str) -> bool:
        """Check if a word appears in any category"""
        return word.lower() in self._all_members

    def word_count(self) -> int:
        """Number of distinct words across all categories"""
        return len(self._all)

    def all_words(self) -> list[str]:
        return list(self._all)

    def words_in_category(self, category: str) -> list[str]:
        """Get the words of one category.

        Raises:
            KeyError: If the category does not exist at this level
        """
        if category not in self._ordered:
            raise KeyError(f"Unknown vocabulary category '{category}' at {self.level.label}")
        return list(self._ordered[category])

    def options(self, *categories: str) -> list[str]:
        """Combined word list of several categories, without duplicates"""
        combined: dict[str, None] = {}
        for category in categories:
            combined.update(dict.fromkeys(self.words_in_category(category)))
        return list(combined)

    def is_valid_for_category(self, word: str, *categories: str) -> bool:
        """Check if a word belongs to at least one of the given categories.

        Raises:
            KeyError: If any category does not exist at this level
        """
        lowered = word.lower()
        for category in categories:
            if category not in self._members:
                raise KeyError(f"Unknown vocabulary category '{category}' at {self.level.label}")
            if lowered in self._members[category]:
                return True
        return False

    def suggest_similar(
        self, word: str, max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    ) -> list[str]:
        """Find known words close to a misspelled one.

        Words within SUGGESTION_MAX_DISTANCE edits are returned closest
        first. Ties are broken by similarity ratio, then alphabetically.
        """
        return _rank_candidates(word, self._all, SUGGESTION_MAX_DISTANCE)[:max_suggestions]

    def closest_in_category(
        self, word: str, category: str, max_distance: int = 2
    ) -> str | None:
        """The nearest word of one category within max_distance edits"""
        ranked = _rank_candidates(word, self.words_in_category(category), max_distance)
        return ranked[0] if ranked else None


def _rank_candidates(word: str, candidates, max_distance: int) -> list[str]:
    lowered = word.lower()
    scored = []
    for candidate in candidates:
        distance = edit_distance(lowered, candidate)
        if distance <= max_distance:
            ratio = SequenceMatcher(None, lowered, candidate).ratio()
            scored.append((distance, -ratio, candidate))
    scored.sort()
    return [candidate for _, _, candidate in scored]


# =============================================================================
# Loading
# =============================================================================


def _level_key(level: SchemaLevel) -> str:
    return f"level{level.value}"


def _resolve_categories(
    raw: dict, key: str, seen: tuple[str, ...] = ()
) -> dict[str, list[str]]:
    """Collect a level's categories, following 'extends' chains"""
    if key in seen:
        raise ValueError(f"Circular 'extends' in vocabulary: {' -> '.join(seen + (key,))}")
    if key not in raw:
        raise ValueError(f"Vocabulary level '{key}' is not defined")

    section = dict(raw[key] or {})
    base = section.pop("extends", None)

    categories: dict[str, list[str]] = {}
    if base:
        categories.update(_resolve_categories(raw, base, seen + (key,)))
    for name, words in section.items():
        categories[name] = [str(word) for word in (words or [])]
    return categories


def load_vocabularies(path: Path) -> dict[SchemaLevel, Vocabulary]:
    """Load every level's vocabulary from a YAML file

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Vocabulary file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    vocabularies = {}
    for level in SchemaLevel:
        categories = _resolve_categories(raw, _level_key(level))
        vocabularies[level] = Vocabulary(level, categories)
        logger.info(
            f"Loaded {level.label} vocabulary: {len(categories)} categories, "
            f"{vocabularies[level].word_count()} words"
        )
    return vocabularies


@lru_cache(maxsize=None)
def _cached_vocabularies(path: Path) -> dict[SchemaLevel, Vocabulary]:
    return load_vocabularies(path)


def get_vocabulary(level: SchemaLevel) -> Vocabulary:
    """Get the shared vocabulary for a level"""
    return _cached_vocabularies(get_data_dir() / VOCABULARY_FILE)[SchemaLevel(level)]


def reload_vocabularies() -> None:
    """Drop cached vocabularies so the next lookup reads the file again"""
    _cached_vocabularies.cache_clear()

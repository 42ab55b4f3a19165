"""
Schema levels for age-tiered game creation.

Three levels match the reading and reasoning skills of young authors:

    - LEVEL1 (ages 5-7): one character, flat settings, ~50 words
    - LEVEL2 (ages 8-10): several characters and when/then rules, ~150 words
    - LEVEL3 (ages 11+): entities, assets, procedural worlds, ~500 words

Levels are ordered, so ``SchemaLevel.LEVEL1 < SchemaLevel.LEVEL3`` holds.

Example:
    >>> SchemaLevel.LEVEL2.max_nesting_depth
    5
    >>> SchemaLevel.LEVEL1.next()
    <SchemaLevel.LEVEL2: 2>
"""

from __future__ import annotations

from enum import IntEnum


class SchemaLevel(IntEnum):
    """Schema level of a game definition."""

    LEVEL1 = 1
    LEVEL2 = 2
    LEVEL3 = 3

    @property
    def max_nesting_depth(self) -> int:
        """Deepest mapping/list nesting allowed (root counts as one)."""
        return _MAX_NESTING[self]

    @property
    def age_range(self) -> str:
        return _AGE_RANGES[self]

    @property
    def vocabulary_size(self) -> int:
        """Nominal number of words available at this level."""
        return _VOCABULARY_SIZES[self]

    @property
    def label(self) -> str:
        """Display name, e.g. 'Level 2'."""
        return f"Level {self.value}"

    def next(self) -> SchemaLevel | None:
        """The level directly above this one, or None at the top."""
        if self is SchemaLevel.LEVEL3:
            return None
        return SchemaLevel(self.value + 1)


_MAX_NESTING = {
    SchemaLevel.LEVEL1: 3,
    SchemaLevel.LEVEL2: 5,
    SchemaLevel.LEVEL3: 6,
}

_AGE_RANGES = {
    SchemaLevel.LEVEL1: "5-7",
    SchemaLevel.LEVEL2: "8-10",
    SchemaLevel.LEVEL3: "11+",
}

_VOCABULARY_SIZES = {
    SchemaLevel.LEVEL1: 50,
    SchemaLevel.LEVEL2: 150,
    SchemaLevel.LEVEL3: 500,
}

"""
Level 1 validator (ages 5-7).

Level 1 games are a flat list of settings with one optional touch event:

    character: bunny
    move: arrows
    when_touch:
      target: star
      sound: ding
      score: 1

Unknown setting names are reported as unknown words with spelling
suggestions, since at this level a typo is the most likely cause.
"""

from __future__ import annotations

from typing import Any

from gamespeak.engine.parser import find_written_key
from gamespeak.engine.validators import checks
from gamespeak.engine.validators.checks import Rejected
from gamespeak.engine.vocabulary import Vocabulary, get_vocabulary
from gamespeak.models.errors import MissingRequired, UnknownWord, ValidationError
from gamespeak.models.game import (
    LEVEL1_SCORE_MAX,
    LEVEL1_SCORE_MIN,
    Level1Game,
    TouchEvent,
)
from gamespeak.models.level import SchemaLevel
from gamespeak.models.validation import ValidationResult, invalid_result, valid_result

LEVEL1_KEYS = ("name", "character", "move", "background", "music", "color", "when_touch")
TOUCH_EVENT_KEYS = ("target", "sound", "score", "target_action")


class Level1Validator:
    """Validates Level 1 documents.

    Checks, stopping at the first problem:
        1. Nesting depth
        2. Unknown setting names
        3. Required settings (character, touch target)
        4. Words against the Level 1 vocabulary
        5. Score range

    Example:
        >>> validator = Level1Validator()
        >>> result = validator.validate({"character": "bunny"})
        >>> result.game.character
        'bunny'
    """

    level = SchemaLevel.LEVEL1

    def __init__(self, vocabulary: Vocabulary | None = None):
        self.vocabulary = vocabulary or get_vocabulary(self.level)

    def validate(self, data: Any, source: str = "") -> ValidationResult:
        """Validate a parsed document.

        Args:
            data: The parsed document with normalized keys
            source: The original text, used to find line numbers

        Returns:
            ValidationResult with the Level1Game or the first error
        """
        try:
            game = self._build(data, source)
        except Rejected as rejected:
            return invalid_result(rejected.error, self.level)
        return valid_result(game)

    def _build(self, data: Any, source: str) -> Level1Game:
        if data is None:
            raise Rejected(MissingRequired(field="character", example="bunny"))
        if not isinstance(data, dict):
            raise Rejected(ValidationError(
                message="Your game should be a list of settings, like 'character: bunny'."
            ))

        checks.check_depth(data, self.level)
        self._check_known_keys(data, LEVEL1_KEYS, source)

        touch_data = checks.mapping("when_touch", data.get("when_touch"))
        if touch_data:
            self._check_known_keys(touch_data, TOUCH_EVENT_KEYS, source)

        vocab = self.vocabulary
        character = checks.require("character", data.get("character"), "bunny")

        game = Level1Game(
            name=checks.text("name", data.get("name")),
            character=checks.word(vocab, "character", character, "characters"),
            move=checks.word(vocab, "move", data.get("move"), "movement"),
            background=checks.word(vocab, "background", data.get("background"), "backgrounds"),
            music=checks.word(vocab, "music", data.get("music"), "music"),
            color=checks.word(vocab, "color", data.get("color"), "colors"),
        )

        if "when_touch" in data:
            game.when_touch = self._build_touch_event(touch_data)
        return game

    def _build_touch_event(self, touch: dict) -> TouchEvent:
        vocab = self.vocabulary
        target = checks.require("target", touch.get("target"), "star")

        event = TouchEvent(
            target=checks.word(vocab, "target", target, "targets"),
            sound=checks.word(vocab, "sound", touch.get("sound"), "sounds"),
            target_action=checks.word(
                vocab, "target_action", touch.get("target_action"), "target_actions"
            ),
        )
        event.score = checks.whole_number(
            "score", touch.get("score"), LEVEL1_SCORE_MIN, LEVEL1_SCORE_MAX
        )
        return event

    def _check_known_keys(self, section: dict, allowed: tuple[str, ...], source: str) -> None:
        for key in section:
            if key not in allowed:
                # Report the word the way the author typed it
                line, written = find_written_key(source, key) or (None, key)
                raise Rejected(UnknownWord(
                    word=written,
                    suggestions=self.vocabulary.suggest_similar(key),
                    line=line,
                ))

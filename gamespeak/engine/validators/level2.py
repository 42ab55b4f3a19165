"""
Level 2 validator (ages 8-10).

Level 2 adds a map of named characters, when/then rules, lives and a
score goal:

    characters:
      player:
        type: bunny
        move: arrows
      enemy:
        type: ghost
        pattern: chase
    rules:
      - when: "player touches enemy"
        then:
          - lose_life: 1
    lives: 3

A Level 1 style ``character`` / ``when_touch`` written in a Level 2 game is
folded into ``characters.player`` and an extra rule.

The section checks are module functions so the Level 3 validator can reuse
them for its Level 2 compatible fields.
"""

from __future__ import annotations

from typing import Any

from gamespeak.engine.validators import checks
from gamespeak.engine.validators.checks import Rejected
from gamespeak.engine.vocabulary import Vocabulary, get_vocabulary
from gamespeak.models.errors import InvalidEnumValue, MissingRequired, ValidationError
from gamespeak.models.game import (
    LEVEL1_SCORE_MAX,
    LEVEL1_SCORE_MIN,
    LIVES_MAX,
    LIVES_MIN,
    PLAYER_NAME,
    SCORE_GOAL_MAX,
    SCORE_GOAL_MIN,
    AddScore,
    EntityAction,
    Level2Character,
    Level2Game,
    Level2Rule,
    LoseLife,
    PlaySound,
    RuleAction,
    ShowMessage,
    TouchEvent,
)
from gamespeak.models.level import SchemaLevel
from gamespeak.models.validation import ValidationResult, invalid_result, valid_result

CHARACTER_CATEGORIES = ("characters", "characters_l2")
SOUND_CATEGORIES = ("sounds", "sounds_l2")
BACKGROUND_CATEGORIES = ("backgrounds", "backgrounds_l2")
MUSIC_CATEGORIES = ("music", "music_l2")

ACTION_KEYS = ["add_score", "lose_life", "play", "show", "entity"]
ENTITY_ACTION_KEYS = frozenset({"entity", "action"})


class Level2Validator:
    """Validates Level 2 documents.

    Example:
        >>> validator = Level2Validator()
        >>> result = validator.validate({"lives": 0})
        >>> result.error.summary
        'Value out of range: lives must be between 1 and 9, got 0'
    """

    level = SchemaLevel.LEVEL2

    def __init__(self, vocabulary: Vocabulary | None = None):
        self.vocabulary = vocabulary or get_vocabulary(self.level)

    def validate(self, data: Any, source: str = "") -> ValidationResult:
        """Validate a parsed document.

        Args:
            data: The parsed document with normalized keys
            source: The original text (unused at this level)

        Returns:
            ValidationResult with the Level2Game or the first error
        """
        try:
            game = self._build(data)
        except Rejected as rejected:
            return invalid_result(rejected.error, self.level)
        return valid_result(game)

    def _build(self, data: Any) -> Level2Game:
        if not isinstance(data, dict):
            raise Rejected(ValidationError(
                message="Your game should be a list of settings, like 'lives: 3'."
            ))

        checks.check_depth(data, self.level)
        vocab = self.vocabulary

        characters = build_characters(vocab, data.get("characters"))
        rules = build_rules(vocab, data.get("rules"))
        fold_level1_fields(vocab, data, characters, rules)

        return Level2Game(
            name=checks.text("name", data.get("name")),
            characters=characters,
            rules=rules,
            lives=checks.whole_number("lives", data.get("lives"), LIVES_MIN, LIVES_MAX),
            score_goal=checks.whole_number(
                "score_goal", data.get("score_goal"), SCORE_GOAL_MIN, SCORE_GOAL_MAX
            ),
            background=checks.word(
                vocab, "background", data.get("background"), *BACKGROUND_CATEGORIES
            ),
            music=checks.word(vocab, "music", data.get("music"), *MUSIC_CATEGORIES),
        )


def build_character(vocab: Vocabulary, path: str, value: Any) -> Level2Character:
    settings = checks.mapping(path, value)
    character_type = checks.require("type", settings.get("type"), "bunny")
    return Level2Character(
        type=checks.word(vocab, f"{path}.type", character_type, *CHARACTER_CATEGORIES),
        move=checks.word(vocab, f"{path}.move", settings.get("move"), "movement"),
        speed=checks.word(vocab, f"{path}.speed", settings.get("speed"), "speed"),
        pattern=checks.word(vocab, f"{path}.pattern", settings.get("pattern"), "patterns"),
        color=checks.word(vocab, f"{path}.color", settings.get("color"), "colors"),
    )


def build_characters(vocab: Vocabulary, value: Any) -> dict[str, Level2Character]:
    section = checks.mapping("characters", value)
    return {
        str(name): build_character(vocab, f"characters.{name}", settings)
        for name, settings in section.items()
    }


def _more_than_one_thing(path: str) -> Rejected:
    return Rejected(ValidationError(
        message=f"Each action in '{path}' should do just one thing. Put each on its own '- ' line."
    ))


def build_action(vocab: Vocabulary, path: str, value: Any) -> RuleAction:
    """Build one rule action from a one-key mapping (or entity + action)"""
    if not isinstance(value, dict) or not value:
        raise Rejected(ValidationError(
            message=f"Each action in '{path}' should look like '- add_score: 10'."
        ))

    if "entity" in value or "action" in value:
        if set(value) - ENTITY_ACTION_KEYS:
            raise _more_than_one_thing(path)
        entity = checks.text(f"{path}.entity", checks.require("entity", value.get("entity"), "star"))
        action = checks.require("action", value.get("action"), "disappear")
        return EntityAction(
            entity=entity,
            action=checks.word(vocab, f"{path}.action", action, "entity_actions"),
        )

    if len(value) > 1:
        raise _more_than_one_thing(path)

    key, setting = next(iter(value.items()))
    if key == "add_score":
        score = checks.require("add_score", setting, "10")
        return AddScore(add_score=checks.whole_number(
            f"{path}.add_score", score, -SCORE_GOAL_MAX, SCORE_GOAL_MAX
        ))
    if key == "lose_life":
        lives = checks.require("lose_life", setting, "1")
        return LoseLife(lose_life=checks.whole_number(
            f"{path}.lose_life", lives, LIVES_MIN, LIVES_MAX
        ))
    if key == "play":
        sound = checks.require("play", setting, "ding")
        return PlaySound(play=checks.word(vocab, f"{path}.play", sound, *SOUND_CATEGORIES))
    if key == "show":
        message = checks.require("show", setting, '"You win!"')
        return ShowMessage(show=checks.text(f"{path}.show", message))

    raise Rejected(InvalidEnumValue(field=path, value=str(key), valid_options=list(ACTION_KEYS)))


def build_rule(vocab: Vocabulary, path: str, value: Any) -> Level2Rule:
    settings = checks.mapping(path, value)
    when = checks.text(
        f"{path}.when", checks.require("when", settings.get("when"), '"player touches star"')
    )

    then = settings.get("then")
    if isinstance(then, dict):
        # A single action written without the '- '
        then = [then]
    actions = checks.sequence(f"{path}.then", then)

    return Level2Rule(
        when=when,
        then=[
            build_action(vocab, f"{path}.then[{index}]", action)
            for index, action in enumerate(actions)
        ],
    )


def build_rules(vocab: Vocabulary, value: Any) -> list[Level2Rule]:
    return [
        build_rule(vocab, f"rules[{index}]", rule)
        for index, rule in enumerate(checks.sequence("rules", value))
    ]


def build_touch_event(vocab: Vocabulary, value: Any) -> TouchEvent:
    touch = checks.mapping("when_touch", value)
    target = checks.require("target", touch.get("target"), "star")
    event = TouchEvent(
        target=checks.word(vocab, "target", target, "targets"),
        sound=checks.word(vocab, "sound", touch.get("sound"), *SOUND_CATEGORIES),
        target_action=checks.word(
            vocab, "target_action", touch.get("target_action"), "entity_actions"
        ),
    )
    event.score = checks.whole_number(
        "score", touch.get("score"), LEVEL1_SCORE_MIN, LEVEL1_SCORE_MAX
    )
    return event


def fold_level1_fields(
    vocab: Vocabulary,
    data: dict,
    characters: dict[str, Level2Character],
    rules: list[Level2Rule],
) -> None:
    """Merge Level 1 style character/move/when_touch into the Level 2 fields"""
    if data.get("character") is not None and PLAYER_NAME not in characters:
        characters[PLAYER_NAME] = Level2Character(
            type=checks.word(vocab, "character", data["character"], *CHARACTER_CATEGORIES),
            move=checks.word(vocab, "move", data.get("move"), "movement"),
            color=checks.word(vocab, "color", data.get("color"), "colors"),
        )

    if "when_touch" in data:
        rules.append(build_touch_event(vocab, data["when_touch"]).to_rule())

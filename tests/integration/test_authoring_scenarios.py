"""
End-to-end authoring scenarios.

Each test follows a young author through the editor: typing YAML, getting a
compiled game or an explained error, and upgrading a game to the next level.
"""

import pytest

from gamespeak.engine.migration import migrate_to
from gamespeak.engine.preview import Debouncer, LivePreview, PreviewError, PreviewSuccess
from gamespeak.engine.scaffolding import ScaffoldingEngine
from gamespeak.engine.validator import compile_game
from gamespeak.models.errors import InvalidEnumValue, OutOfRange
from gamespeak.models.game import Level2Game, Level3Game
from gamespeak.models.level import SchemaLevel

pytestmark = [pytest.mark.integration, pytest.mark.scenario]


class TestFirstGame:
    """A five year old's first game."""

    def test_bunny_compiles_and_upgrades(self) -> None:
        """'character: bunny' is a game and becomes the Level 2 player."""
        result = compile_game("character: bunny")
        assert result.valid
        assert result.level == SchemaLevel.LEVEL1

        upgraded = migrate_to(result.game, SchemaLevel.LEVEL2)

        assert upgraded.success
        assert isinstance(upgraded.game, Level2Game)
        assert list(upgraded.game.characters) == ["player"]
        assert upgraded.game.characters["player"].type == "bunny"

    def test_dinosaur_is_scaffolded(self) -> None:
        """An unknown animal is explained with a working example."""
        text = "character: dinosaur"
        result = compile_game(text)

        assert isinstance(result.error, InvalidEnumValue)
        assert result.error.field == "character"
        assert result.error.value == "dinosaur"

        scaffolded = ScaffoldingEngine(result.level).scaffold(text, result.error)

        assert "character: bunny" in scaffolded.scaffold.working_example
        assert scaffolded.scaffold.confidence >= 0.7
        rendered = scaffolded.render()
        assert "dinosaur" in rendered
        assert "character: bunny" in rendered

    def test_big_score(self) -> None:
        """A score of 100 is too big for Level 1."""
        result = compile_game(
            "character: bunny\nwhen_touch:\n  target: star\n  score: 100\n"
        )

        assert result.error == OutOfRange(field="score", min=-9, max=9, value=100)
        assert "between -9 and 9" in result.to_kid_friendly().render()


class TestGrowingUp:
    """Games that move up the levels."""

    def test_no_lives(self) -> None:
        """A Level 2 game with no lives is out of range."""
        result = compile_game(
            "characters:\n  player:\n    type: rocket\nrules: []\nlives: 0\n"
        )

        assert result.level == SchemaLevel.LEVEL2
        assert result.error == OutOfRange(field="lives", min=1, max=9, value=0)

    def test_level2_to_level3(self, level2_game) -> None:
        """Characters become entities with their type as sprite."""
        result = migrate_to(level2_game, SchemaLevel.LEVEL3)

        assert result.success
        assert isinstance(result.game, Level3Game)
        assert set(result.game.entities) == set(level2_game.characters)
        for name, entity in result.game.entities.items():
            assert entity.sprite == level2_game.characters[name].type
            assert entity.ai is None
            assert entity.components == {}

        recompiled = compile_game(result.game.to_yaml())
        assert recompiled.valid
        assert recompiled.level == SchemaLevel.LEVEL3

    def test_full_climb_keeps_touch_event(self, level1_game) -> None:
        """The Level 1 touch event survives all the way to Level 3."""
        result = migrate_to(level1_game, SchemaLevel.LEVEL3)

        rule = result.game.rules[0]
        assert "star" in rule.when
        assert result.game.entities["player"].sprite == "bunny"
        assert result.game.background == "grass"


class TestTypingInTheEditor:
    """The live preview while typing."""

    def test_debounce_timeline(self, fake_clock) -> None:
        """With a 100 ms delay: run at 0, hold at 30 and 90, run at 110."""
        debouncer = Debouncer(100, clock=fake_clock)
        timeline = []
        for ms in (0, 30, 90, 110):
            fake_clock.set_ms(ms)
            timeline.append(debouncer.schedule())

        assert timeline == [True, False, False, True]

    def test_typing_session(self, fake_clock) -> None:
        """Keystrokes, a typo, a tick and a fix."""
        preview = LivePreview(debounce_ms=100, clock=fake_clock)

        assert isinstance(preview.on_change("character: bunny"), PreviewSuccess)

        fake_clock.set_ms(40)
        preview.on_change("character: bunnyy")
        fake_clock.set_ms(150)
        typo = preview.check_pending("character: bunnyy")
        assert isinstance(typo, PreviewError)
        assert preview.last_valid_game.character == "bunny"

        scaffolded = preview.scaffold_last_error("character: bunnyy")
        assert "character: bunny" in scaffolded.scaffold.working_example

        fake_clock.set_ms(300)
        fixed = preview.on_change("character: bunny\nmove: arrows")
        assert isinstance(fixed, PreviewSuccess)
        assert preview.last_errors == []
        assert preview.stats().total_compilations == 3
        assert preview.success_rate == pytest.approx(2 / 3)

"""Unit tests for LivePreview.

Tests cover:
- Debounced edits and held-back compiles
- Success and error results
- Last good game and stored errors
- Counters, status and statistics
- Scaffolding the stored error
"""

import pytest

from gamespeak.engine.preview import (
    LivePreview,
    PreviewDebounced,
    PreviewError,
    PreviewStatus,
    PreviewSuccess,
)
from gamespeak.models.errors import InvalidEnumValue, OutOfRange, YamlSyntaxError


@pytest.fixture
def preview(fake_clock, game_validator) -> LivePreview:
    return LivePreview(debounce_ms=100, validator=game_validator, clock=fake_clock)


class TestOnChange:
    """Tests for LivePreview.on_change()."""

    def test_first_edit_compiles(self, preview) -> None:
        """The first edit compiles right away."""
        result = preview.on_change("character: bunny")

        assert isinstance(result, PreviewSuccess)
        assert result.game.character == "bunny"
        assert result.compile_time_ms >= 0
        assert preview.last_valid_game == result.game

    def test_rapid_edit_is_debounced(self, preview, fake_clock) -> None:
        """An edit inside the window is not compiled."""
        preview.on_change("character: bunny")
        fake_clock.set_ms(30)

        result = preview.on_change("character: cat")

        assert isinstance(result, PreviewDebounced)
        assert preview.compilation_count == 1
        assert preview.has_pending

    def test_held_back_edit_compiles_later(self, preview, fake_clock) -> None:
        """check_pending() compiles the held-back edit once the window passes."""
        preview.on_change("character: bunny")
        fake_clock.set_ms(30)
        preview.on_change("character: cat")

        fake_clock.set_ms(50)
        assert preview.check_pending("character: cat") is None

        fake_clock.set_ms(130)
        result = preview.check_pending("character: cat")

        assert isinstance(result, PreviewSuccess)
        assert result.game.character == "cat"
        assert preview.check_pending("character: cat") is None

    def test_alternative_name(self, preview) -> None:
        """on_yaml_change behaves like on_change."""
        assert isinstance(preview.on_yaml_change("character: bunny"), PreviewSuccess)


class TestErrors:
    """Tests for failed compiles."""

    def test_error_result(self, preview) -> None:
        """A failed compile returns its error."""
        result = preview.on_change("character: dinosaur")

        assert isinstance(result, PreviewError)
        assert isinstance(result.errors[0], InvalidEnumValue)
        assert preview.last_errors == result.errors

    def test_runaway_nesting_is_an_error(self, preview) -> None:
        """Deeply nested brackets show an error instead of stopping the editor."""
        result = preview.on_change("character: " + "[" * 2000 + "]" * 2000)

        assert isinstance(result, PreviewError)
        assert isinstance(result.errors[0], YamlSyntaxError)
        assert preview.compilation_count == 1

    def test_last_good_game_survives_errors(self, preview, fake_clock) -> None:
        """The last good game is kept while the player is mid-edit."""
        preview.on_change("character: bunny")
        fake_clock.set_ms(200)
        preview.on_change("character: dinosau")

        assert preview.last_valid_game.character == "bunny"
        assert len(preview.last_errors) == 1

    def test_success_clears_errors(self, preview) -> None:
        """A good compile clears the stored errors."""
        preview.compile_now("characters:\n  hero:\n    type: cat\nlives: 0\n")
        assert isinstance(preview.last_errors[0], OutOfRange)

        preview.compile_now("character: cat")

        assert preview.last_errors == []

    def test_scaffold_last_error(self, preview) -> None:
        """The stored error can be explained with a scaffold."""
        text = "character: dinosaur"
        preview.on_change(text)

        scaffolded = preview.scaffold_last_error(text)

        assert "character: bunny" in scaffolded.scaffold.working_example
        assert scaffolded.scaffold.confidence >= 0.7

    def test_no_error_to_scaffold(self, preview) -> None:
        """Nothing to explain after a good compile."""
        preview.on_change("character: bunny")

        assert preview.scaffold_last_error("character: bunny") is None


class TestCompileNow:
    """Tests for LivePreview.compile_now()."""

    def test_bypasses_debounce(self, preview, fake_clock) -> None:
        """Saving compiles even inside the window."""
        preview.on_change("character: bunny")
        fake_clock.set_ms(10)
        preview.on_change("character: cat")

        result = preview.compile_now("character: cat")

        assert isinstance(result, PreviewSuccess)
        assert not preview.has_pending


class TestCountersAndStatus:
    """Tests for counters, status and stats."""

    def test_fresh_preview(self, preview) -> None:
        """Nothing compiled yet."""
        assert preview.status == PreviewStatus.READY
        assert preview.success_rate == 1.0
        assert preview.stats().avg_compile_time_ms is None

    def test_counts(self, preview) -> None:
        """Compiles and successes are counted."""
        preview.compile_now("character: bunny")
        preview.compile_now("character: dinosaur")
        preview.compile_now("lives: 3")

        stats = preview.stats()

        assert stats.total_compilations == 3
        assert stats.successful_compilations == 2
        assert stats.success_rate == pytest.approx(2 / 3)
        assert stats.avg_compile_time_ms >= 0

    def test_status_follows_last_result(self, preview, fake_clock) -> None:
        """Status shows success, error or pending."""
        preview.on_change("character: bunny")
        assert preview.status == PreviewStatus.SUCCESS

        fake_clock.set_ms(200)
        preview.on_change("character: dinosaur")
        assert preview.status == PreviewStatus.ERROR

        fake_clock.set_ms(210)
        preview.on_change("character: bunny")
        assert preview.status == PreviewStatus.PENDING

    def test_debounce_delay(self, preview) -> None:
        """The debounce delay can be read and changed."""
        assert preview.debounce_delay == 100

        preview.set_debounce_delay(20)

        assert preview.debounce_delay == 50

    def test_reset(self, preview) -> None:
        """reset() starts the session over."""
        preview.compile_now("character: dinosaur")

        preview.reset()

        assert preview.compilation_count == 0
        assert preview.last_valid_game is None
        assert preview.last_errors == []
        assert preview.status == PreviewStatus.READY

    def test_level_of_last_compile_is_used_for_scaffolds(self, preview) -> None:
        """Scaffolds use the level of the failed compile."""
        text = "characters:\n  hero:\n    type: cat\nlives: 0\n"
        preview.compile_now(text)

        scaffolded = preview.scaffold_last_error(text)

        assert "Level 2" in scaffolded.scaffold.learning_hint

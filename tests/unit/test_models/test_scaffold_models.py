"""Unit tests for scaffold models and rendering."""

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gamespeak.models.errors import MissingRequired
from gamespeak.models.scaffold import (
    CreateCharacter,
    Correction,
    DefineRules,
    Intent,
    Scaffold,
    ScaffoldedError,
    SetMovement,
    Unknown,
)


@pytest.fixture
def base_error():
    """A kid-friendly error to attach scaffolds to."""
    return MissingRequired(field="character", example="bunny").to_kid_friendly()


class TestIntent:
    """Tests for intent variants."""

    def test_payloads(self) -> None:
        """Payload is the attempted word, or empty."""
        assert CreateCharacter(name="dinosaur").payload == "dinosaur"
        assert SetMovement(style="fly").payload == "fly"
        assert DefineRules().payload == ""
        assert Unknown().payload == ""

    def test_discriminated_parse(self) -> None:
        """Intents parse by their tag."""
        parsed = TypeAdapter(Intent).validate_python({"intent": "set_movement", "style": "auto"})

        assert parsed == SetMovement(style="auto")


class TestScaffold:
    """Tests for the Scaffold model."""

    def test_confidence_bounds(self) -> None:
        """Confidence is a share between 0 and 1."""
        with pytest.raises(PydanticValidationError):
            Scaffold(
                detected_intent=Unknown(),
                working_example="character: bunny",
                learning_hint="hint",
                confidence=1.5,
            )


class TestScaffoldedErrorRender:
    """Tests for ScaffoldedError.render()."""

    def test_without_scaffold(self, base_error) -> None:
        """Without a scaffold only the error is shown."""
        assert ScaffoldedError(base=base_error).render() == base_error.render()

    def test_with_scaffold(self, base_error) -> None:
        """The hint, example and fixes follow the error."""
        scaffold = Scaffold(
            detected_intent=CreateCharacter(name="dinosaur"),
            working_example="character: bunny",
            learning_hint="Characters are who you play as.",
            corrections=[
                Correction(
                    line=1,
                    original="character: dinosaur",
                    replacement="character: bunny",
                    reason="Use a character I know",
                )
            ],
            confidence=0.9,
        )

        text = ScaffoldedError(base=base_error, scaffold=scaffold).render()

        assert text.startswith(base_error.render())
        assert "Learning moment:\nCharacters are who you play as." in text
        assert "```yaml\ncharacter: bunny\n```" in text
        assert "Line 1: Use a character I know" in text
        assert "Before: character: dinosaur" in text
        assert "After:  character: bunny" in text

    def test_added_line_has_no_before(self, base_error) -> None:
        """A correction that adds a line shows only the new text."""
        scaffold = Scaffold(
            detected_intent=Unknown(),
            working_example="character: bunny",
            learning_hint="hint",
            corrections=[Correction(line=1, original="", replacement="character: bunny", reason="Add")],
            confidence=0.5,
        )

        text = ScaffoldedError(base=base_error, scaffold=scaffold).render()

        assert "Before:" not in text
        assert "After:  character: bunny" in text

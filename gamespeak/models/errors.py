"""
Error models for the game compiler.

Every problem found in a player's game is returned as one of the models in
the ``YamlError`` union. They are values, not exceptions: validation and
migration hand them back inside result objects so the editor can explain
them instead of crashing.

Each error converts to a ``KidFriendlyError`` for display: a short headline,
a friendly explanation, an optional line/column pointer, a few suggestions
and a helper character who "says" the message.

Example:
    >>> error = OutOfRange(field="score", min=-9, max=9, value=100)
    >>> error.summary
    'Value out of range: score must be between -9 and 9, got 100'
    >>> error.to_kid_friendly().helper
    <HelperCharacter.ROBOT: 'robot'>
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

# Most suggestions shown to a player at once
MAX_DISPLAYED_SUGGESTIONS = 5


class HelperCharacter(str, Enum):
    """Helper characters that deliver error messages.

    Each helper covers a kind of problem:
        OWL: unknown words and suggestions
        ROBOT: formatting and numbers
        BUNNY: missing things
        DRAGON: complicated structure and AI models
    """

    OWL = "owl"
    ROBOT = "robot"
    BUNNY = "bunny"
    DRAGON = "dragon"

    @property
    def emoji(self) -> str:
        return _HELPER_EMOJI[self]


_HELPER_EMOJI = {
    HelperCharacter.OWL: "\U0001F989",
    HelperCharacter.ROBOT: "\U0001F916",
    HelperCharacter.BUNNY: "\U0001F430",
    HelperCharacter.DRAGON: "\U0001F409",
}


class ErrorLocation(BaseModel):
    """Position in the source text (1-indexed)."""

    line: int
    column: int | None = None


class KidFriendlyError(BaseModel):
    """Display form of an error, ready for the editor.

    Attributes:
        headline: Short headline that fits on one line
        explanation: Friendly explanation of what went wrong
        location: Where the problem is, when known
        suggestions: Things to try, at most MAX_DISPLAYED_SUGGESTIONS
        helper: Helper character who delivers the message
    """

    headline: str
    explanation: str
    location: ErrorLocation | None = None
    suggestions: list[str] = Field(default_factory=list)
    helper: HelperCharacter

    def render(self) -> str:
        """Render as plain text."""
        lines = [f"{self.helper.emoji} {self.headline}", "-" * 50, self.explanation, ""]

        if self.location is not None:
            pointer = f"Line {self.location.line}"
            if self.location.column is not None:
                pointer += f", column {self.location.column}"
            lines.append(pointer)

        if self.suggestions:
            lines.append("")
            lines.append("Try this instead:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines) + "\n"


class YamlSyntaxError(BaseModel):
    """The text could not be read as YAML."""

    kind: Literal["syntax_error"] = "syntax_error"
    message: str
    line: int | None = None
    column: int | None = None

    @property
    def summary(self) -> str:
        return f"YAML syntax error: {self.message}"

    def to_kid_friendly(self) -> KidFriendlyError:
        location = None
        if self.line is not None:
            location = ErrorLocation(line=self.line, column=self.column)
        return KidFriendlyError(
            headline="Oops, something's not quite right!",
            explanation=(
                "I had trouble reading your game. "
                f"{simplify_syntax_error(self.message)}"
            ),
            location=location,
            suggestions=[
                "Check that each line is indented correctly",
                "Make sure colons (:) have a space after them",
            ],
            helper=HelperCharacter.ROBOT,
        )


class UnknownWord(BaseModel):
    """A word that is not part of the vocabulary."""

    kind: Literal["unknown_word"] = "unknown_word"
    word: str
    suggestions: list[str] = Field(default_factory=list)
    line: int | None = None

    @property
    def summary(self) -> str:
        return f"Unknown word: '{self.word}'"

    def to_kid_friendly(self) -> KidFriendlyError:
        if self.suggestions:
            suggestions = [
                f"Did you mean '{word}'?"
                for word in self.suggestions[:MAX_DISPLAYED_SUGGESTIONS]
            ]
        else:
            suggestions = ["Check the spelling and try again"]
        return KidFriendlyError(
            headline="I don't know that word!",
            explanation=f"Hmm, I don't know the word '{self.word}'.",
            location=ErrorLocation(line=self.line) if self.line is not None else None,
            suggestions=suggestions,
            helper=HelperCharacter.OWL,
        )


class NestingTooDeep(BaseModel):
    """The game is indented deeper than the level allows."""

    kind: Literal["nesting_too_deep"] = "nesting_too_deep"
    max: int
    found: int

    @property
    def summary(self) -> str:
        return f"Nesting too deep: found {self.found} levels, max is {self.max}"

    def to_kid_friendly(self) -> KidFriendlyError:
        return KidFriendlyError(
            headline="That's too complicated for me!",
            explanation=(
                f"You have {self.found} levels of nesting, "
                f"but I can only handle {self.max}."
            ),
            suggestions=[
                "Try keeping things simpler",
                "Move some parts to the top level",
            ],
            helper=HelperCharacter.DRAGON,
        )


class MissingRequired(BaseModel):
    """A required setting is missing.

    ``example`` is a value that would make the line valid, so
    ``f"{field}: {example}"`` is always a runnable line.
    """

    kind: Literal["missing_required"] = "missing_required"
    field: str
    example: str

    @property
    def summary(self) -> str:
        return f"Missing required field: '{self.field}'"

    def to_kid_friendly(self) -> KidFriendlyError:
        return KidFriendlyError(
            headline="You forgot to tell me something!",
            explanation=f"Every game needs a '{self.field}' but I couldn't find one.",
            suggestions=[f"Try adding: {self.field}: {self.example}"],
            helper=HelperCharacter.BUNNY,
        )


class OutOfRange(BaseModel):
    """A number is outside its allowed range."""

    kind: Literal["out_of_range"] = "out_of_range"
    field: str
    min: int
    max: int
    value: int | float

    @property
    def summary(self) -> str:
        return (
            f"Value out of range: {self.field} must be between "
            f"{self.min} and {self.max}, got {self.value}"
        )

    def to_kid_friendly(self) -> KidFriendlyError:
        return KidFriendlyError(
            headline="That number is too big or too small!",
            explanation=(
                f"The '{self.field}' should be between {self.min} and {self.max}, "
                f"but you wrote {self.value}."
            ),
            suggestions=[f"Try a number between {self.min} and {self.max}"],
            helper=HelperCharacter.ROBOT,
        )


class InvalidEnumValue(BaseModel):
    """A word is not one of the choices for a setting.

    ``valid_options`` is the full accepted set; only the display is trimmed.
    """

    kind: Literal["invalid_enum_value"] = "invalid_enum_value"
    field: str
    value: str
    valid_options: list[str] = Field(default_factory=list)

    @property
    def summary(self) -> str:
        return f"Invalid value '{self.value}' for {self.field}"

    def to_kid_friendly(self) -> KidFriendlyError:
        setting = self.field.rsplit(".", 1)[-1]
        return KidFriendlyError(
            headline=f"I don't know that {setting}!",
            explanation=f"'{self.value}' isn't a {setting} I know about.",
            suggestions=[
                f"Try: {setting}: {option}"
                for option in self.valid_options[:MAX_DISPLAYED_SUGGESTIONS]
            ],
            helper=HelperCharacter.OWL,
        )


class FileNotFound(BaseModel):
    """An asset reference points at nothing."""

    kind: Literal["file_not_found"] = "file_not_found"
    path: str

    @property
    def summary(self) -> str:
        return f"File not found: '{self.path}'"

    def to_kid_friendly(self) -> KidFriendlyError:
        return KidFriendlyError(
            headline="I can't find that file!",
            explanation=f"I looked for '{self.path}' but couldn't find it.",
            suggestions=[
                "Check that the file name is spelled correctly",
                "Make sure the file is listed under assets",
            ],
            helper=HelperCharacter.BUNNY,
        )


class IncompatibleModel(BaseModel):
    """An AI model reference cannot be used."""

    kind: Literal["incompatible_model"] = "incompatible_model"
    model: str
    reason: str

    @property
    def summary(self) -> str:
        return f"AI model '{self.model}' is incompatible: {self.reason}"

    def to_kid_friendly(self) -> KidFriendlyError:
        return KidFriendlyError(
            headline="That AI model doesn't fit!",
            explanation=f"The model '{self.model}' can't be used here: {self.reason}",
            suggestions=[
                "Try a different AI model",
                "Check that the model is the right type",
            ],
            helper=HelperCharacter.DRAGON,
        )


class ValidationError(BaseModel):
    """Catch-all for problems without a more specific kind."""

    kind: Literal["validation_error"] = "validation_error"
    message: str

    @property
    def summary(self) -> str:
        return f"Validation error: {self.message}"

    def to_kid_friendly(self) -> KidFriendlyError:
        return KidFriendlyError(
            headline="Something isn't quite right!",
            explanation=self.message,
            suggestions=["Check the requirements and try again"],
            helper=HelperCharacter.OWL,
        )


# Any compiler error, discriminated by ``kind``
YamlError = Annotated[
    Union[
        YamlSyntaxError,
        UnknownWord,
        NestingTooDeep,
        MissingRequired,
        OutOfRange,
        InvalidEnumValue,
        FileNotFound,
        IncompatibleModel,
        ValidationError,
    ],
    Field(discriminator="kind"),
]


def simplify_syntax_error(message: str) -> str:
    """Turn a parser message into a sentence a child can act on."""
    lowered = message.lower()

    if "nested" in lowered:
        return "There are too many brackets or layers inside each other. Try making it flatter."
    if "points back" in lowered:
        return "A '*' name can't point at the section it is inside."
    if "tab" in lowered or "\\t" in lowered:
        return "Use spaces instead of tabs to line things up."
    if "duplicate" in lowered:
        return "You used the same name twice."
    if "expected" in lowered and "found" in lowered:
        return "Something looks out of place."
    if "mapping" in lowered:
        return "Check your indentation - each section should line up."
    if "scalar" in lowered:
        return "There might be a problem with a value."

    return "Something in the formatting isn't quite right."

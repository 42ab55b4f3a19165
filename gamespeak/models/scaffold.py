"""
Scaffold models - guessed intent, working example and fixes for an error.

A Scaffold is attached to a failed compile to help the player get from
what they wrote to something that runs. It is built fresh for every error
and never stored.

Intent variants (discriminated by ``intent``):
    - CreateCharacter: trying to make a character (``name`` is the attempt)
    - SetMovement: trying to set how something moves
    - DefineEvent: trying to make something happen on touch
    - AddAudio: trying to add a sound or music
    - SetVisuals: trying to change a background or colour
    - DefineRules: trying to write Level 2 rules
    - Unknown: no usable signal
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from gamespeak.models.errors import KidFriendlyError


class CreateCharacter(BaseModel):
    intent: Literal["create_character"] = "create_character"
    name: str = ""

    @property
    def payload(self) -> str:
        return self.name


class SetMovement(BaseModel):
    intent: Literal["set_movement"] = "set_movement"
    style: str = ""

    @property
    def payload(self) -> str:
        return self.style


class DefineEvent(BaseModel):
    intent: Literal["define_event"] = "define_event"
    event_type: str = ""

    @property
    def payload(self) -> str:
        return self.event_type


class AddAudio(BaseModel):
    intent: Literal["add_audio"] = "add_audio"
    audio_type: str = ""

    @property
    def payload(self) -> str:
        return self.audio_type


class SetVisuals(BaseModel):
    intent: Literal["set_visuals"] = "set_visuals"
    element: str = ""

    @property
    def payload(self) -> str:
        return self.element


class DefineRules(BaseModel):
    intent: Literal["define_rules"] = "define_rules"

    @property
    def payload(self) -> str:
        return ""


class Unknown(BaseModel):
    intent: Literal["unknown"] = "unknown"

    @property
    def payload(self) -> str:
        return ""


Intent = Annotated[
    Union[
        CreateCharacter,
        SetMovement,
        DefineEvent,
        AddAudio,
        SetVisuals,
        DefineRules,
        Unknown,
    ],
    Field(discriminator="intent"),
]


class Correction(BaseModel):
    """A single line fix.

    ``original`` is empty when the fix adds a new line.
    """

    line: int  # 1-indexed
    original: str
    replacement: str
    reason: str


class Scaffold(BaseModel):
    """Best-guess repair for a failed compile"""

    detected_intent: Intent
    working_example: str
    learning_hint: str
    corrections: list[Correction] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)


class ScaffoldedError(BaseModel):
    """A kid-friendly error with its scaffold"""

    base: KidFriendlyError
    scaffold: Scaffold | None = None

    def render(self) -> str:
        """Render the error followed by the hint, example and fixes."""
        output = self.base.render()
        if self.scaffold is None:
            return output

        lines = [
            "",
            "\U0001F4A1 Learning moment:",
            self.scaffold.learning_hint,
            "",
            "✨ Here's how to do it:",
            "```yaml",
            self.scaffold.working_example,
            "```",
        ]

        if self.scaffold.corrections:
            lines.append("")
            lines.append("\U0001F527 Specific fixes:")
            for correction in self.scaffold.corrections:
                lines.append(f"  Line {correction.line}: {correction.reason}")
                if correction.original:
                    lines.append(f"    Before: {correction.original.strip()}")
                lines.append(f"    After:  {correction.replacement.strip()}")

        return output + "\n".join(lines) + "\n"

"""
Scaffolding Engine - Turns a compile error into a guided fix.

Instead of stopping at "that's wrong", the engine guesses what the player
was trying to do and hands back:

    - the detected intent (make a character, set movement, add a sound...)
    - a short working example that does that thing
    - a learning hint explaining what went wrong
    - line-level corrections where a concrete fix is known
    - a confidence score for the guess

The engine is pure: the same text and error always give the same scaffold.
Pattern words, synonyms and distances come from intent_patterns.yaml.

Example:
    >>> engine = ScaffoldingEngine(SchemaLevel.LEVEL1)
    >>> error = InvalidEnumValue(field="character", value="dinosaur", valid_options=["bunny"])
    >>> scaffolded = engine.scaffold("character: dinosaur", error)
    >>> "character: bunny" in scaffolded.scaffold.working_example
    True
"""

import logging
import re

from gamespeak.engine.patterns import IntentPatterns, get_patterns
from gamespeak.engine.vocabulary import Vocabulary, edit_distance, get_vocabulary
from gamespeak.models.errors import (
    FileNotFound,
    IncompatibleModel,
    InvalidEnumValue,
    MissingRequired,
    NestingTooDeep,
    OutOfRange,
    UnknownWord,
    YamlError,
    YamlSyntaxError,
)
from gamespeak.models.level import SchemaLevel
from gamespeak.models.scaffold import (
    AddAudio,
    Correction,
    CreateCharacter,
    DefineEvent,
    DefineRules,
    Intent,
    Scaffold,
    ScaffoldedError,
    SetMovement,
    SetVisuals,
    Unknown,
)

logger = logging.getLogger(__name__)

# Vocabulary category used to pick a replacement word, per synonym category.
# Level 1 categories keep the working example valid at every level.
REPLACEMENT_CATEGORIES = {
    "character": "characters",
    "movement": "movement",
    "sound": "sounds",
    "background": "backgrounds",
}

LEVEL_REMARKS = {
    SchemaLevel.LEVEL1: "At Level 1, we use simple words for beginners.",
    SchemaLevel.LEVEL2: "At Level 2, you have more words to choose from!",
    SchemaLevel.LEVEL3: "At Level 3, you can use advanced features.",
}

MISSING_FIELD_INTENTS = {
    "character": CreateCharacter,
    "type": CreateCharacter,
    "move": SetMovement,
    "movement": SetMovement,
    "sound": AddAudio,
    "music": AddAudio,
    "when_touch": DefineEvent,
    "when": DefineEvent,
    "event": DefineEvent,
    "target": DefineEvent,
    "rules": DefineRules,
}

INVALID_VALUE_INTENTS = {
    "character": CreateCharacter,
    "type": CreateCharacter,
    "sprite": CreateCharacter,
    "move": SetMovement,
    "pattern": SetMovement,
    "sound": AddAudio,
    "music": AddAudio,
    "play": AddAudio,
    "background": SetVisuals,
    "color": SetVisuals,
    "colour": SetVisuals,
    "target": DefineEvent,
}

BASE_CONFIDENCE = {
    "unknown": 0.2,
    "define_event": 0.7,
    "add_audio": 0.7,
    "set_visuals": 0.7,
    "define_rules": 0.6,
}
EMPTY_PAYLOAD_CONFIDENCE = 0.5
PAYLOAD_CONFIDENCE = 0.8
CORRECTION_BOOST = 0.1


def _with_payload(intent_class, value: str) -> Intent:
    if intent_class is CreateCharacter:
        return CreateCharacter(name=value)
    if intent_class is SetMovement:
        return SetMovement(style=value)
    if intent_class is AddAudio:
        return AddAudio(audio_type=value)
    if intent_class is SetVisuals:
        return SetVisuals(element=value)
    if intent_class is DefineEvent:
        return DefineEvent(event_type=value)
    return intent_class()


def fix_common_syntax_issues(line: str) -> str | None:
    """Fix the usual formatting slips on a single line.

    Handles a missing space after a colon, tabs used for indenting and a
    missing colon between two words. Returns None if nothing applies.

    Example:
        >>> fix_common_syntax_issues("character:bunny")
        'character: bunny'
    """
    stripped = line.strip()
    indent = line[: len(line) - len(line.lstrip())].replace("\t", "  ")

    if ":" in stripped and ": " not in stripped and not stripped.endswith(":"):
        return indent + re.sub(r":(?=\S)", ": ", stripped)

    if "\t" in line:
        return line.replace("\t", "  ")

    if stripped and ":" not in stripped and not stripped.startswith("#"):
        words = stripped.split()
        if len(words) == 2:
            return f"{indent}{words[0]}: {words[1]}"

    return None


class ScaffoldingEngine:
    """Builds scaffolds for compile errors at one schema level.

    Args:
        level: Level the player is writing at (affects hints and suggestions)
        vocabulary: Vocabulary override, defaults to the shared one for level
        patterns: Intent patterns override, defaults to the shared table
    """

    def __init__(
        self,
        level: SchemaLevel,
        vocabulary: Vocabulary | None = None,
        patterns: IntentPatterns | None = None,
    ):
        self.level = SchemaLevel(level)
        self.vocabulary = vocabulary or get_vocabulary(self.level)
        self.patterns = patterns or get_patterns()

    def scaffold(self, text: str, error: YamlError) -> ScaffoldedError:
        """Pair an error's kid-friendly form with a scaffold"""
        return ScaffoldedError(
            base=error.to_kid_friendly(),
            scaffold=self.build_scaffold(text, error),
        )

    def build_scaffold(self, text: str, error: YamlError) -> Scaffold:
        intent = self.detect_intent(text, error)
        corrections = self.corrections(text, error, intent)
        scaffold = Scaffold(
            detected_intent=intent,
            working_example=self.working_example(intent),
            learning_hint=self.learning_hint(error, intent),
            corrections=corrections,
            confidence=self.confidence(intent, corrections),
        )
        logger.debug(
            f"Scaffolded {error.kind}: intent={intent.intent} "
            f"confidence={scaffold.confidence:.1f}"
        )
        return scaffold

    # =========================================================================
    # Intent detection
    # =========================================================================

    def detect_intent(self, text: str, error: YamlError) -> Intent:
        """Guess what the player was trying to do from the error"""
        lines = text.splitlines()

        if isinstance(error, UnknownWord):
            return self._intent_from_word(error.word, lines)
        if isinstance(error, MissingRequired):
            return MISSING_FIELD_INTENTS.get(error.field, Unknown)()
        if isinstance(error, InvalidEnumValue):
            setting = error.field.rsplit(".", 1)[-1]
            intent_class = INVALID_VALUE_INTENTS.get(setting)
            if intent_class is None:
                return Unknown()
            return _with_payload(intent_class, error.value)
        if isinstance(error, YamlSyntaxError):
            intent = self._intent_from_line(error.line or 1, lines)
            if isinstance(intent, Unknown):
                return self._intent_from_structure(lines)
            return intent
        return self._intent_from_structure(lines)

    def _intent_from_word(self, word: str, lines: list[str]) -> Intent:
        lowered = word.lower()
        if self.is_character_like(lowered):
            return CreateCharacter(name=word)
        if self._matches(lowered, "movement"):
            return SetMovement(style=word)
        if self._matches(lowered, "audio"):
            return AddAudio(audio_type=word)
        if self._matches(lowered, "event"):
            return DefineEvent(event_type=word)
        return self._intent_from_structure(lines)

    def _intent_from_line(self, line_number: int, lines: list[str]) -> Intent:
        if line_number < 1 or line_number > len(lines):
            return Unknown()

        line = lines[line_number - 1].lower()
        if any(keyword in line for keyword in self.patterns.keywords_for("character")):
            return CreateCharacter()
        if any(keyword in line for keyword in self.patterns.keywords_for("event")):
            return DefineEvent(event_type="touch")
        if any(keyword in line for keyword in self.patterns.keywords_for("movement")):
            return SetMovement()
        return Unknown()

    def _intent_from_structure(self, lines: list[str]) -> Intent:
        for line in lines:
            stripped = line.strip().lower()
            if stripped.startswith("character"):
                return CreateCharacter()
            if stripped.startswith("when"):
                return DefineEvent(event_type="touch")
            if stripped.startswith("move"):
                return SetMovement()
            if stripped.startswith("rules"):
                return DefineRules()
        return Unknown()

    def is_character_like(self, word: str) -> bool:
        """Character names get a stricter distance when the word is short"""
        fuzzy = self.patterns.fuzzy
        if len(word) <= fuzzy.short_word_length:
            threshold = fuzzy.short_word_distance
        else:
            threshold = fuzzy.long_word_distance

        for pattern in self.patterns.patterns_for("character"):
            if pattern in word or edit_distance(word, pattern) <= threshold:
                return True
        return False

    def _matches(self, word: str, category: str) -> bool:
        threshold = self.patterns.fuzzy.default_distance
        return any(
            pattern in word or edit_distance(word, pattern) <= threshold
            for pattern in self.patterns.patterns_for(category)
        )

    # =========================================================================
    # Suggestions
    # =========================================================================

    def suggest_word(self, category: str, attempted: str) -> str:
        """Best valid word for an attempt: synonym hint, nearest word, default"""
        lowered = attempted.lower()
        for word, hints in self.patterns.synonyms_for(category).items():
            if any(hint in lowered for hint in hints):
                return word

        if lowered:
            closest = self.vocabulary.closest_in_category(
                lowered,
                REPLACEMENT_CATEGORIES[category],
                max_distance=self.patterns.fuzzy.vocabulary_distance,
            )
            if closest is not None:
                return closest

        return self.patterns.default_for(category)

    def _replacement_for(self, word: str, intent: Intent) -> str:
        if isinstance(intent, CreateCharacter):
            return self.suggest_word("character", word)
        if isinstance(intent, SetMovement):
            return self.suggest_word("movement", word)
        if isinstance(intent, AddAudio):
            return self.suggest_word("sound", word)
        if isinstance(intent, SetVisuals):
            return self.suggest_word("background", word)

        similar = self.vocabulary.suggest_similar(word, 3)
        return similar[0] if similar else word

    # =========================================================================
    # Scaffold parts
    # =========================================================================

    def working_example(self, intent: Intent) -> str:
        """A short snippet that does what the player was going for"""
        if isinstance(intent, CreateCharacter):
            character = self.suggest_word("character", intent.name)
            return (
                "# Here's how to create your character:\n"
                f"character: {character}\n"
                "move: arrows  # Use arrow keys to move"
            )
        if isinstance(intent, SetMovement):
            movement = self.suggest_word("movement", intent.style)
            return f"# Here's how to set movement:\nmove: {movement}"
        if isinstance(intent, DefineEvent):
            return (
                "# Here's how to make things happen when you touch something:\n"
                "when_touch:\n"
                "  target: star\n"
                "  sound: ding\n"
                "  score: 1"
            )
        if isinstance(intent, AddAudio):
            sound = self.suggest_word("sound", intent.audio_type)
            return (
                "# Here's how to add sounds:\n"
                "music: happy\n"
                "\n"
                "# Or in a touch event:\n"
                "when_touch:\n"
                "  target: star\n"
                f"  sound: {sound}"
            )
        if isinstance(intent, SetVisuals):
            background = self.suggest_word("background", intent.element)
            return f"# Here's how to set the background:\nbackground: {background}"
        if isinstance(intent, DefineRules):
            return (
                "# Here's how to create rules (Level 2):\n"
                "rules:\n"
                '  - when: "player touches star"\n'
                "    then:\n"
                "      - add_score: 10"
            )
        return (
            "# Here's a complete example game:\n"
            "character: bunny\n"
            "move: arrows\n"
            "background: grass\n"
            "\n"
            "when_touch:\n"
            "  target: star\n"
            "  sound: ding\n"
            "  score: 1"
        )

    def learning_hint(self, error: YamlError, intent: Intent) -> str:
        """Explain the intent, the level and the error in plain words"""
        parts = []
        context = self._intent_context(intent)
        if context:
            parts.append(context)
        parts.append(f"{self._error_explanation(error)} {LEVEL_REMARKS[self.level]}")
        return "\n\n".join(parts)

    def _intent_context(self, intent: Intent) -> str:
        if isinstance(intent, CreateCharacter) and intent.name:
            return f"It looks like you want to create a character called '{intent.name}'."
        if isinstance(intent, SetMovement) and intent.style:
            return f"It looks like you want to set movement to '{intent.style}'."
        if isinstance(intent, AddAudio) and intent.audio_type:
            return f"It looks like you want to add the sound '{intent.audio_type}'."
        if isinstance(intent, SetVisuals) and intent.element:
            return f"It looks like you want to change how your game looks with '{intent.element}'."
        if isinstance(intent, DefineRules):
            return "It looks like you want to write game rules."
        return ""

    def _error_explanation(self, error: YamlError) -> str:
        if isinstance(error, UnknownWord):
            return (
                f"The word '{error.word}' isn't in my vocabulary yet. "
                "But don't worry - I can help you find the right word!"
            )
        if isinstance(error, YamlSyntaxError):
            return (
                "The way the code is written is a bit confusing for me. "
                "In YAML, spaces and colons are very important!"
            )
        if isinstance(error, MissingRequired):
            return (
                f"Every game needs a '{error.field}'. It's like a recipe - "
                "some ingredients are required!"
            )
        if isinstance(error, InvalidEnumValue):
            preview = ", ".join(f"'{option}'" for option in error.valid_options[:3])
            return f"'{error.value}' isn't one of the choices I know. Some options are: {preview}"
        if isinstance(error, OutOfRange):
            return f"Numbers for '{error.field}' need to stay between {error.min} and {error.max}."
        if isinstance(error, NestingTooDeep):
            return "Your game has too many indented layers. Try moving things to the left."
        if isinstance(error, (FileNotFound, IncompatibleModel)):
            return "Your game points at a file that I can't use. Check the 'assets' section."
        return "Something didn't quite work, but we can fix it together!"

    def corrections(self, text: str, error: YamlError, intent: Intent) -> list[Correction]:
        """Line-level fixes for the error, when a concrete one is known"""
        lines = text.splitlines()

        if isinstance(error, UnknownWord):
            line_number = error.line or 1
            if line_number > len(lines):
                return []
            original = lines[line_number - 1]
            replacement = self._replacement_for(error.word, intent)
            if replacement.lower() == error.word.lower():
                return []
            fixed, count = re.subn(
                re.escape(error.word), replacement, original, count=1, flags=re.IGNORECASE
            )
            if count == 0:
                return []
            return [Correction(
                line=line_number,
                original=original,
                replacement=fixed,
                reason=f"Replace '{error.word}' with '{replacement}'",
            )]

        if isinstance(error, YamlSyntaxError):
            line_number = error.line or 1
            if line_number > len(lines):
                return []
            original = lines[line_number - 1]
            fixed = fix_common_syntax_issues(original)
            if fixed is None:
                return []
            return [Correction(
                line=line_number,
                original=original,
                replacement=fixed,
                reason="Fixed formatting",
            )]

        if isinstance(error, MissingRequired):
            return [Correction(
                line=len(lines) + 1,
                original="",
                replacement=f"{error.field}: {error.example}",
                reason=f"Add the required '{error.field}' field",
            )]

        return []

    @staticmethod
    def confidence(intent: Intent, corrections: list[Correction]) -> float:
        """How sure the guess is, from 0 to 1"""
        if intent.intent in BASE_CONFIDENCE:
            base = BASE_CONFIDENCE[intent.intent]
        elif intent.payload:
            base = PAYLOAD_CONFIDENCE
        else:
            base = EMPTY_PAYLOAD_CONFIDENCE

        boost = CORRECTION_BOOST if corrections else 0.0
        return min(round(base + boost, 2), 1.0)

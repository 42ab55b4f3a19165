"""
Game definition models - Pydantic models for each schema level

Instances are produced by the level validators after every check has
passed, so a model in hand is always a valid game for its level.
"""

from __future__ import annotations

from typing import Any, ClassVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from gamespeak.models.level import SchemaLevel

# Level 1 score deltas are a single signed digit
LEVEL1_SCORE_MIN = -9
LEVEL1_SCORE_MAX = 9

LIVES_MIN = 1
LIVES_MAX = 9

SCORE_GOAL_MIN = 1
SCORE_GOAL_MAX = 9999

DEFAULT_GAME_NAME = "my-game"
SCHEMA_VERSION_MAX = 99

# Instance name given to the Level 1 character when it joins a character map
PLAYER_NAME = "player"


class GameDefinition(BaseModel):
    """Base for the per-level game definitions"""

    level: ClassVar[SchemaLevel]

    def to_yaml(self) -> str:
        """Render back to YAML source that validates at the same level"""
        data = self.model_dump(mode="json", exclude_none=True)
        return yaml.safe_dump(
            data, default_flow_style=False, allow_unicode=True, sort_keys=False
        )


# =============================================================================
# Level 1 (ages 5-7)
# =============================================================================


class TouchEvent(BaseModel):
    """What happens when the character touches something"""
    target: str
    sound: str | None = None
    score: int | None = Field(default=None, ge=LEVEL1_SCORE_MIN, le=LEVEL1_SCORE_MAX)
    target_action: str | None = None  # new_place or disappear

    def to_rule(self) -> Level2Rule:
        """The equivalent Level 2 rule: play, then score, then the target action"""
        actions: list[RuleAction] = []
        if self.sound is not None:
            actions.append(PlaySound(play=self.sound))
        if self.score is not None:
            actions.append(AddScore(add_score=self.score))
        if self.target_action is not None:
            actions.append(EntityAction(entity=self.target, action=self.target_action))
        return Level2Rule(when=f"{PLAYER_NAME} touches {self.target}", then=actions)


class Level1Game(GameDefinition):
    """A single character with flat settings"""

    level: ClassVar[SchemaLevel] = SchemaLevel.LEVEL1

    name: str | None = None
    character: str
    move: str | None = None
    background: str | None = None
    music: str | None = None
    color: str | None = None
    when_touch: TouchEvent | None = None


# =============================================================================
# Level 2 (ages 8-10)
# =============================================================================


class Level2Character(BaseModel):
    """One named character in a Level 2 game"""
    type: str
    move: str | None = None
    speed: str | None = None
    pattern: str | None = None  # Built-in AI movement pattern
    color: str | None = None


class AddScore(BaseModel):
    model_config = ConfigDict(extra="forbid")
    add_score: int


class LoseLife(BaseModel):
    model_config = ConfigDict(extra="forbid")
    lose_life: int


class PlaySound(BaseModel):
    model_config = ConfigDict(extra="forbid")
    play: str


class ShowMessage(BaseModel):
    model_config = ConfigDict(extra="forbid")
    show: str


class EntityAction(BaseModel):
    """Make a named thing do something (disappear, respawn, blink...)"""
    model_config = ConfigDict(extra="forbid")
    entity: str
    action: str


RuleAction = Union[AddScore, LoseLife, PlaySound, ShowMessage, EntityAction]


class Level2Rule(BaseModel):
    """A when/then rule, e.g. when 'player touches star' then add_score: 10"""
    when: str = Field(min_length=1)
    then: list[RuleAction] = Field(default_factory=list)


class Level2Game(GameDefinition):
    """Several characters plus rules"""

    level: ClassVar[SchemaLevel] = SchemaLevel.LEVEL2

    name: str | None = None
    characters: dict[str, Level2Character] = Field(default_factory=dict)
    rules: list[Level2Rule] = Field(default_factory=list)
    lives: int | None = Field(default=None, ge=LIVES_MIN, le=LIVES_MAX)
    score_goal: int | None = Field(default=None, ge=SCORE_GOAL_MIN, le=SCORE_GOAL_MAX)
    background: str | None = None
    music: str | None = None


# =============================================================================
# Level 3 (ages 11+)
# =============================================================================


class Level3Assets(BaseModel):
    """Custom asset files, keyed by the name used in the game"""
    sprites: dict[str, str] = Field(default_factory=dict)
    sounds: dict[str, str] = Field(default_factory=dict)
    models: dict[str, str] = Field(default_factory=dict)  # AI models (.apr files)


class Level3World(BaseModel):
    """World layout, static or procedurally generated"""
    type: str | None = None
    algorithm: str | None = None  # grid, wfc, noise
    seed: str | int | None = None  # "auto" or a fixed number
    size: tuple[int, int] | None = None  # [width, height]
    tiles: dict[str, float] = Field(default_factory=dict)  # Tile name -> share of the map


class Level3Controls(BaseModel):
    """Control scheme"""
    move: str | None = None
    attack: str | None = None


class Level3Entity(BaseModel):
    """An entity with a sprite, an optional AI model and free-form components"""
    sprite: str | None = None
    ai: str | None = None
    components: dict[str, Any] = Field(default_factory=dict)
    controls: Level3Controls | None = None


class Level3Physics(BaseModel):
    type: str | None = None  # grid, continuous
    collision: str | None = None  # tile_based, aabb, circle, continuous


class Level3Camera(BaseModel):
    follow: str | None = None  # Entity to follow
    zoom: float | None = Field(default=None, gt=0)


class Level3UiElement(BaseModel):
    anchor: str | None = None
    bind: str | None = None  # Game value to display, e.g. score


class Level3Game(GameDefinition):
    """Full power: entities, assets, worlds, physics

    The Level 2 fields are kept so older games keep working after an upgrade.
    """

    level: ClassVar[SchemaLevel] = SchemaLevel.LEVEL3

    name: str = DEFAULT_GAME_NAME
    version: int = Field(default=1, ge=1, le=SCHEMA_VERSION_MAX)
    assets: Level3Assets = Field(default_factory=Level3Assets)
    world: Level3World | None = None
    entities: dict[str, Level3Entity] = Field(default_factory=dict)
    physics: Level3Physics | None = None
    camera: Level3Camera | None = None
    ui: dict[str, Level3UiElement] = Field(default_factory=dict)

    # Level 2 compatibility
    characters: dict[str, Level2Character] = Field(default_factory=dict)
    rules: list[Level2Rule] = Field(default_factory=list)
    lives: int | None = Field(default=None, ge=LIVES_MIN, le=LIVES_MAX)
    score_goal: int | None = Field(default=None, ge=SCORE_GOAL_MIN, le=SCORE_GOAL_MAX)
    background: str | None = None
    music: str | None = None


AnyGameDefinition = Union[Level1Game, Level2Game, Level3Game]


class MigratedGame(BaseModel):
    """A game definition at any level, tagged with that level"""

    game: AnyGameDefinition

    @property
    def level(self) -> SchemaLevel:
        return self.game.level

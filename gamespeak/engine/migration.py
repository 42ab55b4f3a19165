"""
Migration Engine - Upgrades games to a higher schema level.

Transforms:
- Level 1 -> Level 2: the single character becomes ``characters.player``
  and a touch event becomes a rule ``when: "player touches <target>"``
- Level 2 -> Level 3: every character becomes an entity whose sprite is the
  character's type, with no AI and no components yet

Migrations only add. Everything in the old game is still in the new one,
and a migration either produces a valid game at the new level or returns
the original game untouched with an error.

Example:
    >>> result = migrate_to(Level1Game(character="bunny"), SchemaLevel.LEVEL2)
    >>> result.game.characters["player"].type
    'bunny'
"""

import logging

from gamespeak.engine.protocols import Migration
from gamespeak.engine.validator import get_validator
from gamespeak.models.game import (
    DEFAULT_GAME_NAME,
    PLAYER_NAME,
    AnyGameDefinition,
    Level1Game,
    Level2Character,
    Level2Game,
    Level3Entity,
    Level3Game,
)
from gamespeak.models.level import SchemaLevel
from gamespeak.models.migration import (
    AlreadyAtLevel,
    CannotDowngrade,
    IncompatibleData,
    MigrationHint,
    MigrationResult,
    migration_failed,
    migration_succeeded,
)

logger = logging.getLogger(__name__)


def upgrade_level1(game: Level1Game) -> Level2Game:
    """Level 1 -> Level 2 transform"""
    player = Level2Character(type=game.character, move=game.move, color=game.color)
    rules = [game.when_touch.to_rule()] if game.when_touch is not None else []
    return Level2Game(
        name=game.name,
        characters={PLAYER_NAME: player},
        rules=rules,
        background=game.background,
        music=game.music,
    )


def upgrade_level2(game: Level2Game) -> Level3Game:
    """Level 2 -> Level 3 transform"""
    entities = {
        name: Level3Entity(sprite=character.type)
        for name, character in game.characters.items()
    }
    return Level3Game(
        name=game.name or DEFAULT_GAME_NAME,
        version=1,
        entities=entities,
        characters={
            name: character.model_copy(deep=True)
            for name, character in game.characters.items()
        },
        rules=[rule.model_copy(deep=True) for rule in game.rules],
        lives=game.lives,
        score_goal=game.score_goal,
        background=game.background,
        music=game.music,
    )


def _checked(original: AnyGameDefinition, upgraded: AnyGameDefinition) -> MigrationResult:
    """Accept an upgraded game only if it validates at its new level"""
    data = upgraded.model_dump(mode="json", exclude_none=True)
    result = get_validator().validate(data, upgraded.level)
    if not result.valid:
        reason = f"the upgraded game does not fit {upgraded.level.label}: {result.error.summary}"
        logger.warning(f"Migration from {original.level.label} rejected, {reason}")
        return migration_failed(original, IncompatibleData(reason=reason))
    return migration_succeeded(upgraded)


class Level1Migration:
    """Upgrades a Level 1 game to Level 2"""

    def __init__(self, game: Level1Game):
        self.game = game

    def migrate(self) -> MigrationResult:
        return _checked(self.game, upgrade_level1(self.game))

    def can_migrate(self) -> bool:
        return True

    def migration_hints(self) -> list[MigrationHint]:
        return [
            MigrationHint.vocabulary(
                "Level 2 adds ~100 new words including 'rocket', 'spaceship', 'ninja', 'wizard'"
            ),
            MigrationHint.structure(
                "You can now have multiple characters with 'characters:' instead of 'character:'"
            ),
            MigrationHint.mechanics(
                "Add game rules with 'rules:' to create more complex interactions"
            ),
            MigrationHint.mechanics(
                "New movement patterns: 'zigzag', 'circle', 'chase', 'wander', 'patrol', 'bounce'"
            ),
            MigrationHint.structure("Set 'lives:' to add lives to your game"),
        ]


class Level2Migration:
    """Upgrades a Level 2 game to Level 3"""

    def __init__(self, game: Level2Game):
        self.game = game

    def migrate(self) -> MigrationResult:
        return _checked(self.game, upgrade_level2(self.game))

    def can_migrate(self) -> bool:
        return True

    def migration_hints(self) -> list[MigrationHint]:
        return [
            MigrationHint.content("Level 3 supports custom .apr AI models in 'assets.models:'"),
            MigrationHint.structure("Create procedural worlds with 'world.type: procedural'"),
            MigrationHint.mechanics(
                "Add custom components like 'health', 'inventory' to entities"
            ),
            MigrationHint.content(
                "Use custom sprites and sounds in 'assets.sprites:' and 'assets.sounds:'"
            ),
            MigrationHint.structure(
                "Advanced physics with 'collision: tile_based | aabb | continuous'"
            ),
        ]


class Level3Migration:
    """Level 3 is the top level, so there is nothing to migrate to"""

    def __init__(self, game: Level3Game):
        self.game = game

    def migrate(self) -> MigrationResult:
        return migration_failed(self.game, AlreadyAtLevel(level=SchemaLevel.LEVEL3))

    def can_migrate(self) -> bool:
        return False

    def migration_hints(self) -> list[MigrationHint]:
        return []


def migrator_for(game: AnyGameDefinition) -> Migration:
    """Pick the migration for a game's level"""
    if isinstance(game, Level1Game):
        return Level1Migration(game)
    if isinstance(game, Level2Game):
        return Level2Migration(game)
    if isinstance(game, Level3Game):
        return Level3Migration(game)
    raise TypeError(f"Not a game definition: {type(game).__name__}")


def migrate(game: AnyGameDefinition) -> MigrationResult:
    """Upgrade a game by one level"""
    return migrator_for(game).migrate()


def migrate_to(game: AnyGameDefinition, target: SchemaLevel) -> MigrationResult:
    """Upgrade a game to any higher level in one call.

    Returns:
        MigrationResult with the game at the target level, or the original
        game with CannotDowngrade / AlreadyAtLevel / IncompatibleData
    """
    current = game.level
    target = SchemaLevel(target)

    if target < current:
        return migration_failed(game, CannotDowngrade(from_level=current, to_level=target))
    if target == current:
        return migration_failed(game, AlreadyAtLevel(level=current))

    upgraded = game
    while upgraded.level < target:
        step = migrate(upgraded)
        if not step.success:
            return migration_failed(game, step.error)
        upgraded = step.game

    logger.debug(f"Migrated game from {current.label} to {target.label}")
    return migration_succeeded(upgraded)

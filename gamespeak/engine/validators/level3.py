"""
Level 3 validator (ages 11+).

Level 3 games describe entities, custom assets, worlds, physics, camera and
UI. Level 2 sections (characters, rules, lives...) are still accepted so an
upgraded game keeps working.

Asset references are checked against the ``assets`` section: an entity's
``ai`` must name a model listed under ``assets.models`` (or a built-in
movement pattern), and every model file must be an ``.apr`` file.
"""

from __future__ import annotations

from typing import Any

from gamespeak.engine.validators import checks
from gamespeak.engine.validators.checks import Rejected
from gamespeak.engine.validators.level2 import (
    BACKGROUND_CATEGORIES,
    CHARACTER_CATEGORIES,
    MUSIC_CATEGORIES,
    build_characters,
    build_rules,
    fold_level1_fields,
)
from gamespeak.engine.vocabulary import Vocabulary, get_vocabulary
from gamespeak.models.errors import (
    FileNotFound,
    IncompatibleModel,
    InvalidEnumValue,
    OutOfRange,
    ValidationError,
)
from gamespeak.models.game import (
    DEFAULT_GAME_NAME,
    LIVES_MAX,
    LIVES_MIN,
    SCHEMA_VERSION_MAX,
    SCORE_GOAL_MAX,
    SCORE_GOAL_MIN,
    Level3Assets,
    Level3Camera,
    Level3Controls,
    Level3Entity,
    Level3Game,
    Level3Physics,
    Level3UiElement,
    Level3World,
)
from gamespeak.models.level import SchemaLevel
from gamespeak.models.validation import ValidationResult, invalid_result, valid_result

# File extension of trained AI behaviour models
AI_MODEL_EXTENSION = ".apr"

SPRITE_CATEGORIES = CHARACTER_CATEGORIES + ("characters_l3",)

SEED_MAX = 2**32 - 1
WORLD_SIZE_MAX = 1000


class Level3Validator:
    """Validates Level 3 documents.

    Sections are checked in order: version, assets, world, entities,
    physics, camera, ui, then the Level 2 compatible fields.
    """

    level = SchemaLevel.LEVEL3

    def __init__(self, vocabulary: Vocabulary | None = None):
        self.vocabulary = vocabulary or get_vocabulary(self.level)

    def validate(self, data: Any, source: str = "") -> ValidationResult:
        try:
            game = self._build(data)
        except Rejected as rejected:
            return invalid_result(rejected.error, self.level)
        return valid_result(game)

    def _build(self, data: Any) -> Level3Game:
        if not isinstance(data, dict):
            raise Rejected(ValidationError(
                message="Your game should be a list of settings, like 'version: 1'."
            ))

        checks.check_depth(data, self.level)
        vocab = self.vocabulary

        version = checks.whole_number("version", data.get("version"), 1, SCHEMA_VERSION_MAX)
        assets = self._build_assets(data.get("assets"))
        world = self._build_world(data.get("world")) if "world" in data else None

        entities = {
            str(name): self._build_entity(f"entities.{name}", settings, assets)
            for name, settings in checks.mapping("entities", data.get("entities")).items()
        }

        characters = build_characters(vocab, data.get("characters"))
        rules = build_rules(vocab, data.get("rules"))
        fold_level1_fields(vocab, data, characters, rules)

        game = Level3Game(
            name=checks.text("name", data.get("name")) or DEFAULT_GAME_NAME,
            version=version if version is not None else 1,
            assets=assets,
            world=world,
            entities=entities,
            characters=characters,
            rules=rules,
        )

        if "physics" in data:
            game.physics = self._build_physics(data["physics"])
        if "camera" in data:
            game.camera = self._build_camera(data["camera"], set(entities) | set(characters))
        game.ui = {
            str(name): self._build_ui_element(f"ui.{name}", settings)
            for name, settings in checks.mapping("ui", data.get("ui")).items()
        }

        game.lives = checks.whole_number("lives", data.get("lives"), LIVES_MIN, LIVES_MAX)
        game.score_goal = checks.whole_number(
            "score_goal", data.get("score_goal"), SCORE_GOAL_MIN, SCORE_GOAL_MAX
        )
        game.background = checks.word(
            vocab, "background", data.get("background"), *BACKGROUND_CATEGORIES
        )
        game.music = checks.word(vocab, "music", data.get("music"), *MUSIC_CATEGORIES)
        return game

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _build_assets(self, value: Any) -> Level3Assets:
        section = checks.mapping("assets", value)
        files = {}
        for kind in ("sprites", "sounds", "models"):
            files[kind] = {
                str(name): checks.text(f"assets.{kind}.{name}", checks.require(str(name), path, "file.png"))
                for name, path in checks.mapping(f"assets.{kind}", section.get(kind)).items()
            }

        for name, path in files["models"].items():
            if not path.lower().endswith(AI_MODEL_EXTENSION):
                raise Rejected(IncompatibleModel(
                    model=str(name),
                    reason=f"AI models must be {AI_MODEL_EXTENSION} files, but this one is '{path}'",
                ))

        return Level3Assets(**files)

    def _build_world(self, value: Any) -> Level3World:
        vocab = self.vocabulary
        section = checks.mapping("world", value)

        world = Level3World(
            type=checks.word(vocab, "world.type", section.get("type"), "world_types"),
            algorithm=checks.word(vocab, "world.algorithm", section.get("algorithm"), "algorithms"),
        )

        seed = section.get("seed")
        if isinstance(seed, str) and seed.lower() == "auto":
            world.seed = "auto"
        else:
            world.seed = checks.whole_number("world.seed", seed, 0, SEED_MAX)

        size = section.get("size")
        if size is not None:
            if not isinstance(size, list) or len(size) != 2:
                raise Rejected(ValidationError(
                    message="'world.size' should be two numbers, like [20, 15]."
                ))
            world.size = (
                checks.whole_number(
                    "world.size.width", checks.require("size", size[0], "[20, 15]"), 1, WORLD_SIZE_MAX
                ),
                checks.whole_number(
                    "world.size.height", checks.require("size", size[1], "[20, 15]"), 1, WORLD_SIZE_MAX
                ),
            )

        tiles = {}
        for name, weight in checks.mapping("world.tiles", section.get("tiles")).items():
            weight = checks.number(f"world.tiles.{name}", checks.require(str(name), weight, "0.5"))
            if not 0 <= weight <= 1:
                raise Rejected(OutOfRange(field=f"world.tiles.{name}", min=0, max=1, value=weight))
            tiles[str(name)] = float(weight)
        world.tiles = tiles
        return world

    def _build_entity(self, path: str, value: Any, assets: Level3Assets) -> Level3Entity:
        vocab = self.vocabulary
        settings = checks.mapping(path, value)
        entity = Level3Entity()

        sprite = settings.get("sprite")
        if sprite is not None:
            sprite = checks.text(f"{path}.sprite", sprite)
            if sprite not in assets.sprites and not vocab.is_valid_for_category(
                sprite, *SPRITE_CATEGORIES
            ):
                raise Rejected(InvalidEnumValue(
                    field=f"{path}.sprite",
                    value=sprite,
                    valid_options=list(assets.sprites) + vocab.options(*SPRITE_CATEGORIES),
                ))
            entity.sprite = sprite if sprite in assets.sprites else sprite.lower()

        ai = settings.get("ai")
        if ai is not None:
            ai = checks.text(f"{path}.ai", ai)
            if ai not in assets.models and not vocab.is_valid_for_category(ai, "patterns"):
                raise Rejected(FileNotFound(path=ai))
            entity.ai = ai

        entity.components = checks.mapping(f"{path}.components", settings.get("components"))

        if "controls" in settings:
            controls = checks.mapping(f"{path}.controls", settings["controls"])
            entity.controls = Level3Controls(
                move=checks.word(vocab, f"{path}.controls.move", controls.get("move"), "controls"),
                attack=checks.text(f"{path}.controls.attack", controls.get("attack")),
            )
        return entity

    def _build_physics(self, value: Any) -> Level3Physics:
        vocab = self.vocabulary
        section = checks.mapping("physics", value)
        return Level3Physics(
            type=checks.word(vocab, "physics.type", section.get("type"), "physics_types"),
            collision=checks.word(
                vocab, "physics.collision", section.get("collision"), "collisions"
            ),
        )

    def _build_camera(self, value: Any, known_names: set[str]) -> Level3Camera:
        section = checks.mapping("camera", value)
        camera = Level3Camera()

        follow = checks.text("camera.follow", section.get("follow"))
        if follow is not None and follow not in known_names:
            raise Rejected(InvalidEnumValue(
                field="camera.follow", value=follow, valid_options=sorted(known_names)
            ))
        camera.follow = follow

        zoom = checks.number("camera.zoom", section.get("zoom"))
        if zoom is not None and zoom <= 0:
            raise Rejected(ValidationError(message="'camera.zoom' should be more than 0, like 1.5."))
        camera.zoom = zoom
        return camera

    def _build_ui_element(self, path: str, value: Any) -> Level3UiElement:
        settings = checks.mapping(path, value)
        return Level3UiElement(
            anchor=checks.word(self.vocabulary, f"{path}.anchor", settings.get("anchor"), "ui_anchors"),
            bind=checks.text(f"{path}.bind", settings.get("bind")),
        )

"""
Shared pytest fixtures for gamespeak tests.

This module provides:
- Sample YAML sources for each schema level
- Parsed Level 1/2/3 games built through the validators
- Engines (validator, scaffolding) and a fake clock for timing tests
- Custom markers for test categorization
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gamespeak.engine.validator import GameValidator
from gamespeak.models.game import Level1Game, Level2Game, Level3Game
from gamespeak.models.level import SchemaLevel

if TYPE_CHECKING:
    from tests.mocks.clock import FakeClock


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "scenario: marks end-to-end authoring scenarios")


# =============================================================================
# YAML Sources
# =============================================================================


LEVEL1_SOURCE = """\
character: bunny
move: arrows
background: grass
music: happy

when_touch:
  target: star
  sound: ding
  score: 1
  target_action: new_place
"""

LEVEL2_SOURCE = """\
name: space-chase
characters:
  player:
    type: rocket
    move: arrows
    speed: fast
  enemy:
    type: asteroid
    pattern: chase
    speed: slow
rules:
  - when: "player touches enemy"
    then:
      - lose_life: 1
      - play: crash
  - when: "player touches star"
    then:
      - add_score: 10
      - entity: star
        action: respawn
lives: 3
score_goal: 100
background: space
"""

LEVEL3_SOURCE = """\
name: dungeon-crawler
version: 1
assets:
  sprites:
    hero_sprite: sprites/hero.png
  models:
    goblin_ai: models/goblin.apr
world:
  type: procedural
  algorithm: wfc
  seed: auto
  size: [20, 15]
  tiles:
    floor: 0.6
    wall: 0.3
    water: 0.1
entities:
  hero:
    sprite: hero_sprite
    controls:
      move: wasd
      attack: space
    components:
      health: 100
  goblin:
    sprite: goblin
    ai: goblin_ai
  slime:
    sprite: slime
    ai: wander
physics:
  type: grid
  collision: tile_based
camera:
  follow: hero
  zoom: 1.5
ui:
  score_label:
    anchor: top_left
    bind: score
"""


@pytest.fixture
def level1_source() -> str:
    """A complete Level 1 game."""
    return LEVEL1_SOURCE


@pytest.fixture
def level2_source() -> str:
    """A Level 2 game with two characters and two rules."""
    return LEVEL2_SOURCE


@pytest.fixture
def level3_source() -> str:
    """A Level 3 game using assets, a procedural world and AI models."""
    return LEVEL3_SOURCE


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def game_validator() -> GameValidator:
    """A fresh GameValidator."""
    return GameValidator()


@pytest.fixture
def fake_clock() -> "FakeClock":
    """A clock starting at t=0 that only moves when told to."""
    from tests.mocks.clock import FakeClock

    return FakeClock()


# =============================================================================
# Game Fixtures
# =============================================================================


@pytest.fixture
def level1_game(game_validator, level1_source) -> Level1Game:
    """The sample Level 1 source, validated."""
    result = game_validator.compile(level1_source)
    assert result.valid, result.error
    assert result.level == SchemaLevel.LEVEL1
    return result.game


@pytest.fixture
def level2_game(game_validator, level2_source) -> Level2Game:
    """The sample Level 2 source, validated."""
    result = game_validator.compile(level2_source)
    assert result.valid, result.error
    assert result.level == SchemaLevel.LEVEL2
    return result.game


@pytest.fixture
def level3_game(game_validator, level3_source) -> Level3Game:
    """The sample Level 3 source, validated."""
    result = game_validator.compile(level3_source)
    assert result.valid, result.error
    assert result.level == SchemaLevel.LEVEL3
    return result.game

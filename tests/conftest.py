from __future__ import annotations

import random

import pytest

from frogger.game import Game
from frogger.lanes import lanes_from_cfg
from frogger.models import DifficultyProfile, GridDimensions


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def grid() -> GridDimensions:
    return GridDimensions(cols=20, rows=13, cell_size=40)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def frozen() -> DifficultyProfile:
    # spawning never fires within a test
    return DifficultyProfile(
        name="frozen",
        car_speed_multiplier=1.0,
        log_speed_multiplier=1.0,
        obstacle_density=0.7,
        lives=3,
        obstacle_spawn_interval_ms=1e9,
    )


@pytest.fixture
def small_grid() -> GridDimensions:
    return GridDimensions(cols=5, rows=4, cell_size=10)


@pytest.fixture
def small_lanes(small_grid):
    return lanes_from_cfg(
        [
            {"kind": "goal", "pads": [1, 3]},
            {"kind": "grass"},
            {"kind": "grass"},
            {"kind": "grass"},
        ],
        small_grid,
    )


@pytest.fixture
def make_game(grid, rng, frozen):
    def _make(difficulty=None, *, lanes=None, game_grid=None):
        g = game_grid or (lanes.grid if lanes is not None else grid)
        return Game(g, lanes, difficulty or frozen, rng=rng, cfg={})
    return _make

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from .models import GameState, GridDimensions, Obstacle, Player

log = logging.getLogger(__name__)


def wrap_offset(grid: GridDimensions, density: float, rng: random.Random) -> float:
    # Randomised gap so wrapped obstacles do not re-enter in lockstep.
    return rng.random() * grid.play_width * (1.0 - density)


def advance(obstacles: Iterable[Obstacle], dt: float, *, grid: GridDimensions,
            density: float, rng: random.Random) -> None:
    cell = grid.cell_size
    width = grid.play_width
    for o in obstacles:
        o.x += o.velocity * dt * cell
        if o.direction == 1:
            if o.x > width:
                o.x = -o.width_px(cell) - wrap_offset(grid, density, rng)
                log.debug("obstacle #%d wrapped to %.1f", o.id, o.x)
        elif o.x + o.width_px(cell) < 0:
            o.x = width + wrap_offset(grid, density, rng)
            log.debug("obstacle #%d wrapped to %.1f", o.id, o.x)


def carry_rider(player: Player, ridden: Optional[Obstacle], dt: float, cell_size: int) -> None:
    if player.riding_obstacle_id is None:
        return
    if ridden is None or ridden.id != player.riding_obstacle_id:
        # the log is gone
        player.riding_obstacle_id = None
        return
    player.x += ridden.velocity * dt * cell_size


def clamp_player(player: Player, grid: GridDimensions) -> None:
    player.x = max(0.0, min(float(player.x), grid.max_x))
    player.row = max(0, min(int(player.row), grid.rows - 1))


def integrate(state: GameState, dt: float, *, grid: GridDimensions, rng: random.Random) -> None:
    """One motion step: carry the rider, clamp, then move every obstacle."""
    player = state.player
    carry_rider(player, state.obstacle_by_id(player.riding_obstacle_id), dt, grid.cell_size)
    clamp_player(player, grid)
    advance(state.obstacles, dt, grid=grid, density=state.difficulty.obstacle_density, rng=rng)


__all__ = ["wrap_offset", "advance", "carry_rider", "clamp_player", "integrate"]

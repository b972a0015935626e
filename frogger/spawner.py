from __future__ import annotations

import itertools
import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence

from .constants import (
    CAR_WIDE_CHANCE,
    CAR_WIDTHS,
    LOG_WIDE_CHANCE,
    LOG_WIDTHS,
    RIVER_MIN_SPACING_CELLS,
    ROAD_MIN_SPACING_CELLS,
    SPAWN_BACKOFF_MS,
)
from .models import DifficultyProfile, GridDimensions, Lane, LaneKind, Obstacle, ObstacleKind, ObstacleSpec

log = logging.getLogger(__name__)

# ids stay unique across games and spawner instances
_ids = itertools.count(1)


def next_obstacle_id() -> int:
    return next(_ids)


class ObstacleSpawner:
    """Per-lane spawn scheduling with edge spacing.

    Each Road/River lane accumulates elapsed milliseconds. Once the
    accumulator reaches the difficulty's spawn interval, a new obstacle is
    placed just off-screen on the edge the lane travels away from, unless
    the nearest obstacle is still too close to that edge. A suppressed spawn
    backs the accumulator off by ``SPAWN_BACKOFF_MS`` so the next attempt
    comes sooner than a full interval.
    """

    def __init__(self, grid: GridDimensions, *, rng: Optional[random.Random] = None,
                 backoff_ms: float = SPAWN_BACKOFF_MS) -> None:
        self.grid = grid
        self.rng = rng or random.Random()
        self.backoff_ms = float(backoff_ms)
        self._timers: Dict[int, float] = {}

    @property
    def timers(self) -> Dict[int, float]:
        return dict(self._timers)

    def reset(self, lanes: Iterable[Lane] = ()) -> None:
        self._timers = {lane.index: 0.0 for lane in lanes if lane.spawns}

    def min_spacing(self, lane: Lane) -> float:
        cells = ROAD_MIN_SPACING_CELLS if lane.kind is LaneKind.ROAD else RIVER_MIN_SPACING_CELLS
        return self.grid.cell_size * cells

    def edge_threshold(self, lane: Lane, difficulty: DifficultyProfile) -> float:
        return self.min_spacing(lane) * difficulty.obstacle_density * (self.grid.cols / 2)

    def edge_is_clear(self, lane: Lane, existing: Sequence[Obstacle], difficulty: DifficultyProfile) -> bool:
        if not existing:
            return True
        threshold = self.edge_threshold(lane, difficulty)
        ordered = sorted(existing, key=lambda o: o.x)
        cell = self.grid.cell_size
        if lane.direction == 1:
            return ordered[0].x >= threshold
        rightmost = ordered[-1]
        return rightmost.x + rightmost.width_px(cell) <= self.grid.play_width - threshold

    def maybe_spawn(self, lane: Lane, elapsed_ms: float, existing: Sequence[Obstacle],
                    difficulty: DifficultyProfile) -> Optional[ObstacleSpec]:
        if not lane.spawns:
            return None

        acc = self._timers.get(lane.index, 0.0) + elapsed_ms
        if acc < difficulty.obstacle_spawn_interval_ms:
            self._timers[lane.index] = acc
            return None

        if not self.edge_is_clear(lane, existing, difficulty):
            self._timers[lane.index] = acc - self.backoff_ms
            log.debug("lane %d: spawn suppressed, retry in %.0f ms", lane.index, self.backoff_ms)
            return None

        self._timers[lane.index] = 0.0
        spec = self._build(lane, difficulty)
        log.debug("lane %d: spawned %s #%d width=%d", lane.index, spec.kind.name, spec.id, spec.width_cells)
        return spec

    def _pick_width(self, kind: ObstacleKind) -> int:
        if kind is ObstacleKind.CAR:
            narrow, wide = CAR_WIDTHS
            return wide if self.rng.random() < CAR_WIDE_CHANCE else narrow
        narrow, wide = LOG_WIDTHS
        return wide if self.rng.random() < LOG_WIDE_CHANCE else narrow

    def _build(self, lane: Lane, difficulty: DifficultyProfile) -> ObstacleSpec:
        kind = lane.obstacle_kind
        width = self._pick_width(kind)
        if lane.direction == 1:
            x = -width * self.grid.cell_size
        else:
            x = float(self.grid.play_width)
        velocity = lane.base_speed * lane.direction * difficulty.speed_multiplier(kind)
        return ObstacleSpec(
            id=next_obstacle_id(),
            lane=lane.index,
            kind=kind,
            x=float(x),
            width_cells=width,
            velocity=velocity,
        )

    def step(self, lanes: Iterable[Lane], elapsed_ms: float, obstacles: List[Obstacle],
             difficulty: DifficultyProfile) -> List[Obstacle]:
        """Run ``maybe_spawn`` over every lane and append new obstacles to ``obstacles``."""
        spawned: List[Obstacle] = []
        for lane in lanes:
            if not lane.spawns:
                continue
            existing = [o for o in obstacles if o.lane == lane.index]
            spec = self.maybe_spawn(lane, elapsed_ms, existing, difficulty)
            if spec is not None:
                obstacle = spec.build()
                obstacles.append(obstacle)
                spawned.append(obstacle)
        return spawned


__all__ = ["ObstacleSpawner", "next_obstacle_id"]

from __future__ import annotations

import logging
import random
from typing import Optional, Union

from .collision import resolve
from .constants import (
    LEVEL_RESTART_DELAY,
    LIFE_BONUS_POINTS,
    MSG_GOAL,
    MSG_IDLE,
    PAD_POINTS,
    ROW_ADVANCE_POINTS,
)
from .errors import ConfigurationError
from .input_queue import InputQueue
from .lanes import LaneTable
from .level_config import default_grid, lanes_for, resolve_difficulty
from .models import (
    DifficultyProfile,
    GameState,
    GridDimensions,
    LaneKind,
    Move,
    ObstacleView,
    Outcome,
    OutcomeKind,
    Phase,
    Player,
    Snapshot,
)
from .motion import clamp_player, integrate
from .spawner import ObstacleSpawner
from .timers import DeferredAction, SimClock

log = logging.getLogger(__name__)


class Game:
    """Owns the game state and advances it one tick or one move at a time.

    The presentation layer only calls :meth:`start`, :meth:`reset`,
    :meth:`tick`, :meth:`move` (or :meth:`queue_move`) and reads
    :meth:`snapshot`; it never touches the state directly.
    """

    # ---- Core lifecycle wiring ----

    def __init__(
        self,
        grid: Optional[GridDimensions] = None,
        lanes: Optional[LaneTable] = None,
        difficulty: Union[str, DifficultyProfile, None] = None,
        *,
        rng: Optional[random.Random] = None,
        cfg: Optional[dict] = None,
    ) -> None:
        self.cfg = cfg
        self.rng = rng or random.Random()
        self.clock = SimClock()
        self.auto_restart = DeferredAction(self.clock.now)
        self.inputs = InputQueue()
        self._in_tick = False

        grid = grid or (lanes.grid if lanes is not None else default_grid())
        self.configure(difficulty, grid, lanes)

    def configure(
        self,
        difficulty: Union[str, DifficultyProfile, None],
        grid: GridDimensions,
        lanes: Optional[LaneTable] = None,
    ) -> None:
        profile = resolve_difficulty(difficulty, self.cfg)
        lanes = lanes if lanes is not None else lanes_for(grid, self.cfg)
        if lanes.grid != grid:
            raise ConfigurationError(f"lane table built for {lanes.grid}, not {grid}")

        self.grid = grid
        self.lanes = lanes
        self.spawner = ObstacleSpawner(grid, rng=self.rng)
        self.state = GameState(player=self._start_player(), difficulty=profile)
        self.reset()

    def set_difficulty(self, difficulty: Union[str, DifficultyProfile]) -> None:
        self.configure(difficulty, self.grid, self.lanes)

    def _start_player(self) -> Player:
        return Player(x=self.grid.start_x, row=self.grid.start_row, max_row_reached=self.grid.start_row)

    def reset(self) -> None:
        s = self.state
        self.auto_restart.cancel()
        self.inputs.clear()
        self.spawner.reset(self.lanes)

        s.player = self._start_player()
        s.lives = s.difficulty.lives
        s.score = 0
        s.obstacles.clear()
        s.claimed_pads.clear()
        s.spawn_timers = self.spawner.timers
        s.phase = Phase.IDLE
        s.message = MSG_IDLE

    def start(self) -> None:
        self.reset()
        self.state.phase = Phase.RUNNING
        self.state.message = ""
        log.info("game started (%s, %d lives)", self.state.difficulty.name, self.state.lives)

    def _restart_after_level(self) -> None:
        log.info("auto-restarting after level completion")
        self.start()

    # ---- Timing ----

    def now(self) -> float:
        return self.clock.now()

    def tick(self, dt: float) -> None:
        dt = max(0.0, float(dt))
        self.clock.advance(dt)
        self.state.sim_time = self.clock.now()

        if self.state.phase is not Phase.RUNNING:
            self.auto_restart.poll()
            return

        self._in_tick = True
        try:
            for move in self.inputs.pop_all():
                self._apply_move(move)
            self._simulate(dt)
        finally:
            self._in_tick = False

    def _simulate(self, dt: float) -> None:
        s = self.state
        integrate(s, dt, grid=self.grid, rng=self.rng)
        self.spawner.step(self.lanes, dt * 1000.0, s.obstacles, s.difficulty)
        s.spawn_timers = self.spawner.timers

        lane = self.lanes.lane_at(s.player.row)
        outcome = resolve(s.player, lane, s.obstacles_in_lane(lane.index), s.claimed_pads, self.grid.cell_size)
        self._apply_outcome(outcome, lane.kind)

    # ---- Outcomes ----

    def _apply_outcome(self, outcome: Outcome, lane_kind: LaneKind) -> None:
        s = self.state
        if outcome.fatal:
            self.lose_life(outcome.cause)
        elif outcome.kind is OutcomeKind.CLAIMED_PAD:
            self._claim_pad(outcome.column)
        elif outcome.kind is OutcomeKind.RIDING_PLATFORM:
            s.player.riding_obstacle_id = outcome.obstacle_id
        elif lane_kind is not LaneKind.RIVER:
            s.player.riding_obstacle_id = None

    def _claim_pad(self, column: int) -> None:
        s = self.state
        s.claimed_pads.add(column)
        s.score += PAD_POINTS
        s.message = MSG_GOAL
        log.info("pad %d claimed (%d/%d)", column, len(s.claimed_pads), len(self.lanes.goal_pads))
        if len(s.claimed_pads) == len(self.lanes.goal_pads):
            self.win_level()
        else:
            self.reset_player_to_start()

    def lose_life(self, cause: str) -> None:
        s = self.state
        s.lives -= 1
        s.message = f"Oh no! {cause} Lives left: {s.lives}"
        log.info("life lost: %s (%d left)", cause, s.lives)
        if s.lives <= 0:
            self.game_over()
        else:
            self.reset_player_to_start()

    def reset_player_to_start(self) -> None:
        self.state.player = self._start_player()

    def game_over(self) -> None:
        s = self.state
        s.phase = Phase.GAME_OVER
        s.message = f"GAME OVER! Final Score: {s.score}"
        self.inputs.clear()
        log.info("game over, score %d", s.score)

    def win_level(self) -> None:
        s = self.state
        s.score += s.lives * LIFE_BONUS_POINTS
        s.phase = Phase.LEVEL_COMPLETE
        s.message = f"LEVEL COMPLETE! Score: {s.score}"
        self.inputs.clear()
        self.auto_restart.schedule(LEVEL_RESTART_DELAY, self._restart_after_level)
        log.info("level complete, score %d", s.score)

    # ---- Input ----

    def queue_move(self, move: Move) -> None:
        if self.state.phase is Phase.RUNNING:
            self.inputs.push(move)

    def move(self, move: Move) -> None:
        if self.state.phase is not Phase.RUNNING:
            return
        if self._in_tick:
            self.inputs.push(move)
            return
        self._apply_move(move)

    def _apply_move(self, move: Move) -> None:
        p = self.state.player
        p.x += move.dx * self.grid.cell_size
        p.row += move.dy
        clamp_player(p, self.grid)
        p.riding_obstacle_id = None
        if p.row < p.max_row_reached:
            self.state.score += ROW_ADVANCE_POINTS
            p.max_row_reached = p.row

    # ---- Read-only view ----

    def snapshot(self) -> Snapshot:
        s = self.state
        cell = self.grid.cell_size
        return Snapshot(
            player_x=s.player.x,
            player_y=s.player.y(cell),
            player_row=s.player.row,
            riding_obstacle_id=s.player.riding_obstacle_id,
            obstacles=tuple(ObstacleView(o.id, o.kind, o.x, o.width_cells, o.lane) for o in s.obstacles),
            lives=s.lives,
            score=s.score,
            phase=s.phase,
            message=s.message,
            claimed_pads=frozenset(s.claimed_pads),
            goal_pads=frozenset(self.lanes.goal_pads),
            difficulty=s.difficulty.name,
            grid=self.grid,
        )

    def start_label(self) -> str:
        s = self.state
        if s.phase is Phase.RUNNING:
            return "Restart Game"
        if s.phase is Phase.GAME_OVER:
            return "Play Again"
        if s.phase is Phase.LEVEL_COMPLETE:
            return "Next Level"
        return "Start Game"


__all__ = ["Game"]

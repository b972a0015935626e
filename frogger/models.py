from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Optional, Set, Tuple


class LaneKind(Enum):
    GOAL = auto()
    RIVER = auto()
    ROAD = auto()
    GRASS = auto()


class ObstacleKind(Enum):
    CAR = auto()
    LOG = auto()


class Phase(Enum):
    IDLE = auto()
    RUNNING = auto()
    GAME_OVER = auto()
    LEVEL_COMPLETE = auto()


class Move(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class OutcomeKind(Enum):
    SAFE = auto()
    CLAIMED_PAD = auto()
    MISSED_PAD = auto()
    HIT_VEHICLE = auto()
    SUBMERGED = auto()
    FELL_OFF_PLATFORM = auto()
    RIDING_PLATFORM = auto()


FATAL_OUTCOMES = frozenset({
    OutcomeKind.MISSED_PAD,
    OutcomeKind.HIT_VEHICLE,
    OutcomeKind.SUBMERGED,
    OutcomeKind.FELL_OFF_PLATFORM,
})


@dataclass(frozen=True)
class GridDimensions:
    cols: int
    rows: int
    cell_size: int

    @property
    def play_width(self) -> int:
        return self.cols * self.cell_size

    @property
    def play_height(self) -> int:
        return self.rows * self.cell_size

    @property
    def start_x(self) -> float:
        return self.play_width / 2 - self.cell_size / 2

    @property
    def start_row(self) -> int:
        return self.rows - 1

    @property
    def max_x(self) -> float:
        return float(self.play_width - self.cell_size)


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    car_speed_multiplier: float
    log_speed_multiplier: float
    obstacle_density: float
    lives: int
    obstacle_spawn_interval_ms: float

    def speed_multiplier(self, kind: ObstacleKind) -> float:
        if kind is ObstacleKind.CAR:
            return self.car_speed_multiplier
        return self.log_speed_multiplier


@dataclass(frozen=True)
class Lane:
    index: int
    kind: LaneKind
    direction: int = 1
    base_speed: float = 0.0
    goal_pads: FrozenSet[int] = frozenset()

    @property
    def is_safe(self) -> bool:
        return self.kind in (LaneKind.GRASS, LaneKind.GOAL)

    @property
    def spawns(self) -> bool:
        return self.kind in (LaneKind.ROAD, LaneKind.RIVER)

    @property
    def obstacle_kind(self) -> Optional[ObstacleKind]:
        if self.kind is LaneKind.ROAD:
            return ObstacleKind.CAR
        if self.kind is LaneKind.RIVER:
            return ObstacleKind.LOG
        return None


@dataclass(frozen=True)
class ObstacleSpec:
    """A freshly spawned obstacle, not yet owned by the simulation."""
    id: int
    lane: int
    kind: ObstacleKind
    x: float
    width_cells: int
    velocity: float

    def build(self) -> "Obstacle":
        return Obstacle(self.id, self.lane, self.kind, self.x, self.width_cells, self.velocity)


@dataclass
class Obstacle:
    id: int
    lane: int
    kind: ObstacleKind
    x: float
    width_cells: int
    velocity: float

    @property
    def direction(self) -> int:
        return 1 if self.velocity >= 0 else -1

    def width_px(self, cell_size: int) -> float:
        return self.width_cells * cell_size

    def rect(self, cell_size: int) -> Tuple[float, float, float, float]:
        return (self.x, self.lane * cell_size, self.width_px(cell_size), cell_size)


@dataclass
class Player:
    x: float
    row: int
    max_row_reached: int
    riding_obstacle_id: Optional[int] = None

    def y(self, cell_size: int) -> float:
        return self.row * cell_size

    def center_x(self, cell_size: int) -> float:
        return self.x + cell_size / 2

    def rect(self, cell_size: int) -> Tuple[float, float, float, float]:
        return (self.x, self.y(cell_size), cell_size, cell_size)


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    column: Optional[int] = None
    obstacle_id: Optional[int] = None
    cause: str = ""

    @property
    def fatal(self) -> bool:
        return self.kind in FATAL_OUTCOMES


SAFE = Outcome(OutcomeKind.SAFE)


@dataclass
class GameState:
    player: Player
    difficulty: DifficultyProfile
    lives: int = 0
    score: int = 0
    phase: Phase = Phase.IDLE
    message: str = ""
    claimed_pads: Set[int] = field(default_factory=set)
    obstacles: List[Obstacle] = field(default_factory=list)
    spawn_timers: Dict[int, float] = field(default_factory=dict)
    sim_time: float = 0.0

    def obstacles_in_lane(self, lane: int) -> List[Obstacle]:
        return [o for o in self.obstacles if o.lane == lane]

    def obstacle_by_id(self, obstacle_id: Optional[int]) -> Optional[Obstacle]:
        if obstacle_id is None:
            return None
        for o in self.obstacles:
            if o.id == obstacle_id:
                return o
        return None


@dataclass(frozen=True)
class ObstacleView:
    id: int
    kind: ObstacleKind
    x: float
    width_cells: int
    lane: int


@dataclass(frozen=True)
class Snapshot:
    player_x: float
    player_y: float
    player_row: int
    riding_obstacle_id: Optional[int]
    obstacles: Tuple[ObstacleView, ...]
    lives: int
    score: int
    phase: Phase
    message: str
    claimed_pads: FrozenSet[int]
    goal_pads: FrozenSet[int]
    difficulty: str
    grid: GridDimensions


__all__ = [
    "LaneKind", "ObstacleKind", "Phase", "Move", "OutcomeKind", "FATAL_OUTCOMES",
    "GridDimensions", "DifficultyProfile", "Lane", "ObstacleSpec", "Obstacle",
    "Player", "Outcome", "SAFE", "GameState", "ObstacleView", "Snapshot",
]

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Sequence

from .errors import ConfigurationError, OutOfRange
from .models import GridDimensions, Lane, LaneKind


class LaneTable:
    """Read-only table of lanes indexed by row; row 0 is the goal side."""

    def __init__(self, lanes: Sequence[Lane], grid: GridDimensions) -> None:
        self._lanes: tuple[Lane, ...] = tuple(lanes)
        self.grid = grid
        self._validate()

    def _validate(self) -> None:
        grid = self.grid
        if grid.rows < 2 or grid.cols < 1 or grid.cell_size <= 0:
            raise ConfigurationError(f"invalid grid {grid.cols}x{grid.rows} cells of {grid.cell_size}px")
        if len(self._lanes) != grid.rows:
            raise ConfigurationError(
                f"lane table has {len(self._lanes)} lanes, grid has {grid.rows} rows"
            )
        for i, lane in enumerate(self._lanes):
            if lane.index != i:
                raise ConfigurationError(f"lane at row {i} is indexed {lane.index}")
            if lane.kind is LaneKind.GOAL and i != 0:
                raise ConfigurationError(f"goal lane must be row 0, found one at row {i}")
            if lane.spawns:
                if lane.direction not in (-1, 1):
                    raise ConfigurationError(f"lane {i}: direction must be -1 or +1, got {lane.direction}")
                if lane.base_speed <= 0:
                    raise ConfigurationError(f"lane {i}: speed must be positive, got {lane.base_speed}")
        goal = self._lanes[0]
        if goal.kind is not LaneKind.GOAL:
            raise ConfigurationError("row 0 must be the goal lane")
        if not goal.goal_pads:
            raise ConfigurationError("goal lane needs at least one pad")
        bad = [p for p in goal.goal_pads if not 0 <= p < grid.cols]
        if bad:
            raise ConfigurationError(f"goal pads outside the grid: {sorted(bad)}")
        if self._lanes[-1].kind is not LaneKind.GRASS:
            raise ConfigurationError("the starting row must be grass")

    def __len__(self) -> int:
        return len(self._lanes)

    def __iter__(self) -> Iterator[Lane]:
        return iter(self._lanes)

    def lane_at(self, row: int) -> Lane:
        if not 0 <= row < len(self._lanes):
            raise OutOfRange(f"row {row} outside 0..{len(self._lanes) - 1}")
        return self._lanes[row]

    @property
    def goal_lane(self) -> Lane:
        return self._lanes[0]

    @property
    def goal_pads(self) -> List[int]:
        return sorted(self.goal_lane.goal_pads)

    def spawning_lanes(self) -> List[Lane]:
        return [lane for lane in self._lanes if lane.spawns]


def _parse_kind(raw: Any, row: int) -> LaneKind:
    try:
        return LaneKind[str(raw).upper()]
    except KeyError:
        raise ConfigurationError(f"lane {row}: unknown kind {raw!r}") from None


def lane_from_dict(row: int, data: Dict[str, Any]) -> Lane:
    kind = _parse_kind(data.get("kind"), row)
    if kind is LaneKind.GOAL:
        pads = data.get("pads") or []
        try:
            pad_set = frozenset(int(p) for p in pads)
        except (TypeError, ValueError):
            raise ConfigurationError(f"lane {row}: pads must be integers, got {pads!r}") from None
        if len(pad_set) != len(pads):
            raise ConfigurationError(f"lane {row}: duplicate pad columns {pads!r}")
        return Lane(row, kind, goal_pads=pad_set)
    if kind is LaneKind.GRASS:
        return Lane(row, kind)
    try:
        direction = int(data.get("direction", 1))
        speed = float(data.get("speed", 0.0))
    except (TypeError, ValueError):
        raise ConfigurationError(f"lane {row}: bad speed/direction in {data!r}") from None
    return Lane(row, kind, direction=direction, base_speed=speed)


def lanes_from_cfg(entries: Iterable[Dict[str, Any]], grid: GridDimensions) -> LaneTable:
    lanes = []
    for row, data in enumerate(entries):
        if not isinstance(data, dict):
            raise ConfigurationError(f"lane {row}: expected an object, got {data!r}")
        lanes.append(lane_from_dict(row, data))
    return LaneTable(lanes, grid)


__all__ = ["LaneTable", "lane_from_dict", "lanes_from_cfg"]

from __future__ import annotations

import math
from typing import AbstractSet, Optional, Sequence, Tuple

from .constants import CAUSE_FELL_OFF, CAUSE_HIT_VEHICLE, CAUSE_MISSED_PAD, CAUSE_SUBMERGED
from .models import SAFE, Lane, LaneKind, Obstacle, ObstacleKind, Outcome, OutcomeKind, Player

Rect = Tuple[float, float, float, float]


def rects_overlap(a: Rect, b: Rect) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def player_column(player: Player, cell_size: int) -> int:
    # round half up, so a player exactly between two cells lands on the right one
    return int(math.floor(player.x / cell_size + 0.5))


def _overlapping(player: Player, obstacles: Sequence[Obstacle], kind: ObstacleKind, cell_size: int) -> list[Obstacle]:
    box = player.rect(cell_size)
    return [o for o in obstacles if o.kind is kind and rects_overlap(box, o.rect(cell_size))]


def _resolve_goal(player: Player, lane: Lane, claimed: AbstractSet[int], cell_size: int) -> Outcome:
    col = player_column(player, cell_size)
    if col not in lane.goal_pads:
        return Outcome(OutcomeKind.MISSED_PAD, column=col, cause=CAUSE_MISSED_PAD)
    if col in claimed:
        return SAFE
    return Outcome(OutcomeKind.CLAIMED_PAD, column=col)


def _resolve_river(player: Player, obstacles: Sequence[Obstacle], cell_size: int) -> Outcome:
    logs = _overlapping(player, obstacles, ObstacleKind.LOG, cell_size)
    if not logs:
        return Outcome(OutcomeKind.SUBMERGED, cause=CAUSE_SUBMERGED)

    # Mounting uses box overlap; staying on needs the centre over the log.
    center = player.center_x(cell_size)
    mounted: Optional[Obstacle] = next(
        (o for o in logs if o.x <= center <= o.x + o.width_px(cell_size)), None
    )
    if mounted is None:
        return Outcome(OutcomeKind.FELL_OFF_PLATFORM, obstacle_id=logs[0].id, cause=CAUSE_FELL_OFF)
    return Outcome(OutcomeKind.RIDING_PLATFORM, obstacle_id=mounted.id)


def resolve(player: Player, lane: Lane, obstacles: Sequence[Obstacle],
            claimed_pads: AbstractSet[int], cell_size: int) -> Outcome:
    """Classify the player's situation on its current lane.

    Only obstacles of ``lane`` are considered; the caller passes the lane the
    player is standing on. Pure: nothing passed in is modified.
    """
    if lane.kind is LaneKind.GRASS:
        return SAFE
    if lane.kind is LaneKind.GOAL:
        return _resolve_goal(player, lane, claimed_pads, cell_size)
    if lane.kind is LaneKind.ROAD:
        if _overlapping(player, obstacles, ObstacleKind.CAR, cell_size):
            return Outcome(OutcomeKind.HIT_VEHICLE, cause=CAUSE_HIT_VEHICLE)
        return SAFE
    return _resolve_river(player, obstacles, cell_size)


__all__ = ["rects_overlap", "player_column", "resolve"]

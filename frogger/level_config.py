from __future__ import annotations

from typing import Union

from .config import CFG
from .constants import (
    CELL_SIZE,
    DEFAULT_DIFFICULTY,
    DIFFICULTY_SETTINGS,
    GAME_COLS,
    GAME_ROWS,
    LANE_TABLE,
)
from .errors import ConfigurationError
from .lanes import LaneTable, lanes_from_cfg
from .models import DifficultyProfile, GridDimensions


def default_grid() -> GridDimensions:
    return GridDimensions(cols=GAME_COLS, rows=GAME_ROWS, cell_size=CELL_SIZE)


def difficulty_names(cfg: dict | None = None) -> list[str]:
    cfg = CFG if cfg is None else cfg
    names = list(DIFFICULTY_SETTINGS)
    names += [n for n in (cfg.get("difficulties") or {}) if n not in names]
    return names


def difficulty_from_cfg(name: str | None = None, cfg: dict | None = None) -> DifficultyProfile:
    cfg = CFG if cfg is None else cfg
    key = str(name or cfg.get("difficulty", DEFAULT_DIFFICULTY)).lower()
    overrides = (cfg.get("difficulties") or {}).get(key, {})
    if key not in DIFFICULTY_SETTINGS and not overrides:
        raise ConfigurationError(f"unknown difficulty {key!r}")
    values = dict(DIFFICULTY_SETTINGS.get(key, DIFFICULTY_SETTINGS["medium"]))
    values.update(overrides)
    return profile_from_dict(key, values)


def profile_from_dict(name: str, values: dict) -> DifficultyProfile:
    try:
        profile = DifficultyProfile(
            name=name,
            car_speed_multiplier=float(values["car_speed_multiplier"]),
            log_speed_multiplier=float(values["log_speed_multiplier"]),
            obstacle_density=float(values["obstacle_density"]),
            lives=int(values["lives"]),
            obstacle_spawn_interval_ms=float(values["obstacle_spawn_interval_ms"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"difficulty {name!r}: {exc}") from None
    validate_difficulty(profile)
    return profile


def validate_difficulty(profile: DifficultyProfile) -> None:
    if profile.lives < 1:
        raise ConfigurationError(f"difficulty {profile.name!r}: lives must be at least 1")
    if not 0.0 <= profile.obstacle_density < 1.0:
        raise ConfigurationError(f"difficulty {profile.name!r}: density must be in [0, 1)")
    if profile.obstacle_spawn_interval_ms <= 0:
        raise ConfigurationError(f"difficulty {profile.name!r}: spawn interval must be positive")
    if profile.car_speed_multiplier <= 0 or profile.log_speed_multiplier <= 0:
        raise ConfigurationError(f"difficulty {profile.name!r}: speed multipliers must be positive")


def resolve_difficulty(value: Union[str, DifficultyProfile, None], cfg: dict | None = None) -> DifficultyProfile:
    if isinstance(value, DifficultyProfile):
        validate_difficulty(value)
        return value
    return difficulty_from_cfg(value, cfg)


def lanes_for(grid: GridDimensions, cfg: dict | None = None) -> LaneTable:
    cfg = CFG if cfg is None else cfg
    entries = cfg.get("lanes") or LANE_TABLE
    return lanes_from_cfg(entries, grid)


__all__ = [
    "default_grid",
    "difficulty_names",
    "difficulty_from_cfg",
    "profile_from_dict",
    "validate_difficulty",
    "resolve_difficulty",
    "lanes_for",
]

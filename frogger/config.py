# frogger/config.py
from __future__ import annotations
import json, logging, os
from typing import Dict, Any

from pathlib import Path
PKG_DIR = Path(__file__).resolve().parent

log = logging.getLogger(__name__)

def _abs(path: str) -> str:
    # absolute paths are kept as given
    p = Path(path)
    return str(p) if p.is_absolute() else str((PKG_DIR / p).resolve())

PACKAGE_DIR = os.path.dirname(__file__)
CONFIG_PATH = os.path.join(PACKAGE_DIR, "config.json")

DEFAULT_CFG: Dict[str, Any] = {
    "pins": {"UP": 19, "DOWN": 18, "LEFT": 17, "RIGHT": 16},
    "display": {"fullscreen": False, "fps": 60, "windowed_size": [800, 600]},
    "grid": {"cols": 20, "rows": 13, "cell_size": 40},
    "difficulty": "medium",
    "difficulties": {},
    "lanes": [],
    "images": {
        "car_red": "assets/images/car_red.png",
        "car_blue": "assets/images/car_blue.png",
        "log": "assets/images/log.png",
        "frog": "assets/images/frog.png",
    },
    "log_level": "INFO",
}

DIFFICULTY_KEYS = (
    "car_speed_multiplier",
    "log_speed_multiplier",
    "obstacle_density",
    "lives",
    "obstacle_spawn_interval_ms",
)

# fallback for mistyped difficulty values (the medium profile)
DEFAULT_DIFFICULTY_VALUES: Dict[str, Any] = {
    "car_speed_multiplier": 1.2,
    "log_speed_multiplier": 1.2,
    "obstacle_density": 0.7,
    "lives": 3,
    "obstacle_spawn_interval_ms": 1000.0,
}

def _deepcopy(obj):
    return json.loads(json.dumps(obj))

def _merge(dst: dict, src: dict) -> dict:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _merge(dst[k], v)
        else:
            dst[k] = v
    return dst

def _section(cfg: dict, key: str) -> dict:
    # missing or non-object sections are replaced by their defaults
    sec = cfg.get(key)
    if not isinstance(sec, dict):
        if key in cfg:
            log.warning("config: %r must be an object, using defaults", key)
        sec = _deepcopy(DEFAULT_CFG[key])
        cfg[key] = sec
    return sec

def _clamp(value, lo, hi, default, cast, where: str):
    try:
        v = cast(value)
    except (TypeError, ValueError, OverflowError):
        log.warning("config: %s=%r is not a number, using %r", where, value, default)
        return cast(default)
    return cast(max(lo, min(hi, v)))

def _sanitize_difficulty(name: str, raw: dict) -> dict:
    base = DEFAULT_DIFFICULTY_VALUES
    out: Dict[str, Any] = {}
    for key in DIFFICULTY_KEYS:
        if key not in raw:
            continue
        where = f"difficulties.{name}.{key}"
        v = raw[key]
        if key == "lives":
            out[key] = _clamp(v, 1, 9, base[key], int, where)
        elif key == "obstacle_density":
            out[key] = _clamp(v, 0.0, 0.99, base[key], float, where)
        elif key == "obstacle_spawn_interval_ms":
            out[key] = _clamp(v, 50.0, 60000.0, base[key], float, where)
        else:
            out[key] = _clamp(v, 0.05, 10.0, base[key], float, where)
    return out

def _sanitize_cfg(cfg: dict) -> dict:
    d = _section(cfg, "display")
    d["fullscreen"] = bool(d.get("fullscreen", False))
    if "fps" in d:
        d["fps"] = _clamp(d["fps"], 30, 240, DEFAULT_CFG["display"]["fps"], int, "display.fps")
    ws = d.get("windowed_size", [800, 600])
    if isinstance(ws, (list, tuple)) and len(ws) == 2 and all(isinstance(x, (int, float)) for x in ws):
        w, h = max(200, min(10000, int(ws[0]))), max(200, min(10000, int(ws[1])))
        d["windowed_size"] = [w, h]
    else:
        d["windowed_size"] = [800, 600]

    g = _section(cfg, "grid")
    dg = DEFAULT_CFG["grid"]
    g["cols"]      = _clamp(g.get("cols", dg["cols"]), 1, 200, dg["cols"], int, "grid.cols")
    g["rows"]      = _clamp(g.get("rows", dg["rows"]), 2, 200, dg["rows"], int, "grid.rows")
    g["cell_size"] = _clamp(g.get("cell_size", dg["cell_size"]), 4, 256, dg["cell_size"], int, "grid.cell_size")

    p = _section(cfg, "pins")
    for name, default in DEFAULT_CFG["pins"].items():
        p[name] = _clamp(p.get(name, default), 0, 40, default, int, f"pins.{name}")
    for extra in [k for k in p if k not in DEFAULT_CFG["pins"]]:
        log.warning("config: unknown pin %r ignored", extra)
        del p[extra]

    cfg["difficulty"] = str(cfg.get("difficulty", "medium")).lower()
    diffs = cfg.get("difficulties") or {}
    if not isinstance(diffs, dict):
        log.warning("config: 'difficulties' must be an object, ignoring %r", diffs)
        diffs = {}
    cfg["difficulties"] = {
        str(name).lower(): _sanitize_difficulty(str(name).lower(), v)
        for name, v in diffs.items() if isinstance(v, dict)
    }

    if not isinstance(cfg.get("lanes"), list):
        log.warning("config: 'lanes' must be a list, using the built-in lane table")
        cfg["lanes"] = []

    cfg["log_level"] = str(cfg.get("log_level", "INFO")).upper()

    imgs = _section(cfg, "images")
    for k, v in list(imgs.items()):
        if isinstance(v, str):
            imgs[k] = _abs(v)
        else:
            log.warning("config: image %r must be a path, ignoring %r", k, v)
            del imgs[k]
    cfg["config_path"] = str(Path(CONFIG_PATH).resolve())
    return cfg

def save_config(partial_cfg: dict) -> None:
    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            base = json.load(f)
        if not isinstance(base, dict): base = {}
    except (OSError, ValueError):
        base = {}
    merged = _merge(base, partial_cfg)
    try:
        with open(CONFIG_PATH, "w", encoding="utf-8") as f:
            json.dump(merged, f, ensure_ascii=False, indent=2)
    except OSError as exc:
        log.warning("could not write %s: %s", CONFIG_PATH, exc)

def load_config() -> dict:
    cfg = _deepcopy(DEFAULT_CFG)
    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            user = json.load(f)
        if isinstance(user, dict):
            _merge(cfg, user)
        else:
            log.warning("%s does not hold an object, using defaults", CONFIG_PATH)
    except FileNotFoundError:
        save_config(cfg)
    except (OSError, ValueError) as exc:
        log.warning("could not read %s (%s), using defaults", CONFIG_PATH, exc)
    return _sanitize_cfg(cfg)

CFG = load_config()

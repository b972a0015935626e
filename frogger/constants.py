from __future__ import annotations

from .config import CFG

# --- Palette ----------------------------------------------------------------
BG = (8, 10, 12)                 # window background around the play area
INK = (235, 235, 235)            # primary text colour
ACCENT = (255, 210, 90)          # accent colour for highlights

LANE_COLORS = {
    "GOAL":  (106, 13, 173),
    "RIVER": (30, 144, 255),
    "GRASS": (76, 175, 80),
    "ROAD":  (51, 51, 51),
}

# Vector palette used when sprites are unavailable
CAR_COLORS = [(220, 60, 60), (60, 110, 230)]
LOG_COLOR = (133, 94, 66)
LOG_GRAIN_COLOR = (101, 67, 33)
FROG_COLOR = (120, 230, 90)
FROG_EYE_COLOR = (20, 20, 20)
PAD_COLOR = (60, 160, 70)
PAD_FILLED_COLOR = (250, 230, 90)

# --- Grid -------------------------------------------------------------------
CELL_SIZE = int(CFG["grid"]["cell_size"])
GAME_COLS = int(CFG["grid"]["cols"])
GAME_ROWS = int(CFG["grid"]["rows"])

# --- Difficulty -------------------------------------------------------------
DEFAULT_DIFFICULTY = str(CFG.get("difficulty", "medium"))

DIFFICULTY_SETTINGS = {
    "easy": {
        "car_speed_multiplier": 0.8,
        "log_speed_multiplier": 0.8,
        "obstacle_density": 0.5,
        "lives": 5,
        "obstacle_spawn_interval_ms": 1500,
    },
    "medium": {
        "car_speed_multiplier": 1.2,
        "log_speed_multiplier": 1.2,
        "obstacle_density": 0.7,
        "lives": 3,
        "obstacle_spawn_interval_ms": 1000,
    },
    "hard": {
        "car_speed_multiplier": 1.8,
        "log_speed_multiplier": 1.8,
        "obstacle_density": 0.9,
        "lives": 1,
        "obstacle_spawn_interval_ms": 700,
    },
}

# --- Lanes ------------------------------------------------------------------
# Row 0 is the goal side, the last row is the starting safe zone.
LANE_TABLE = [
    {"kind": "goal", "pads": [2, 6, 10, 14, 18]},
    {"kind": "river", "speed": 1.0, "direction": -1},
    {"kind": "river", "speed": 0.8, "direction": 1},
    {"kind": "river", "speed": 1.2, "direction": -1},
    {"kind": "river", "speed": 0.9, "direction": 1},
    {"kind": "river", "speed": 1.1, "direction": -1},
    {"kind": "grass"},
    {"kind": "road", "speed": 1.5, "direction": 1},
    {"kind": "road", "speed": 1.0, "direction": -1},
    {"kind": "road", "speed": 1.3, "direction": 1},
    {"kind": "road", "speed": 0.7, "direction": -1},
    {"kind": "road", "speed": 1.6, "direction": 1},
    {"kind": "grass"},
]

# --- Spawning ---------------------------------------------------------------
CAR_WIDTHS = (2, 3)
CAR_WIDE_CHANCE = 0.5            # chance of the longer car
LOG_WIDTHS = (3, 4)
LOG_WIDE_CHANCE = 0.3            # chance of the longer log
ROAD_MIN_SPACING_CELLS = 2.0
RIVER_MIN_SPACING_CELLS = 2.5
SPAWN_BACKOFF_MS = 200.0

# --- Scoring ----------------------------------------------------------------
ROW_ADVANCE_POINTS = 10
PAD_POINTS = 50
LIFE_BONUS_POINTS = 100

# --- Timing -----------------------------------------------------------------
FPS = int(CFG.get("display", {}).get("fps", 60))
MAX_FRAME_DT = 0.1               # seconds; longer frames are clamped
LEVEL_RESTART_DELAY = 1.5        # seconds after level completion

# --- Messages ---------------------------------------------------------------
MSG_IDLE = "Press Start to play!"
MSG_GOAL = "Goal reached!"
CAUSE_HIT_VEHICLE = "Hit by a car!"
CAUSE_SUBMERGED = "Fell in the water!"
CAUSE_FELL_OFF = "Fell off the log!"
CAUSE_MISSED_PAD = "Missed the lily pad!"

# --- HUD ----------------------------------------------------------------------
WINDOWED_DEFAULT_SIZE = tuple(CFG.get("display", {}).get("windowed_size", (800, 600)))
HUD_HEIGHT = 64
HUD_PAD_X = 16
FONT_SIZE_SMALL = 18
FONT_SIZE_MID = 24
FONT_SIZE_BIG = 48
HUD_LABEL_COLOR = (180, 200, 230)
HUD_VALUE_COLOR = INK
LIVES_COLOR = (90, 220, 255)
LIVES_RADIUS = 6
OVERLAY_BG = (0, 0, 0, 150)

from __future__ import annotations

from typing import Dict, Optional

import pygame

from .models import Move

KEY_TO_MOVE: Dict[int, Move] = {
    pygame.K_UP: Move.UP,
    pygame.K_DOWN: Move.DOWN,
    pygame.K_LEFT: Move.LEFT,
    pygame.K_RIGHT: Move.RIGHT,
    pygame.K_w: Move.UP,
    pygame.K_s: Move.DOWN,
    pygame.K_a: Move.LEFT,
    pygame.K_d: Move.RIGHT,
}

KEY_TO_DIFFICULTY: Dict[int, str] = {
    pygame.K_1: "easy",
    pygame.K_2: "medium",
    pygame.K_3: "hard",
}

START_KEYS = (pygame.K_RETURN, pygame.K_SPACE)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)

# GPIO buttons report by name
BUTTON_TO_MOVE: Dict[str, Move] = {m.name: m for m in Move}


def intent_for_key(key: int) -> Optional[Move]:
    return KEY_TO_MOVE.get(key)


def intent_for_button(name: str) -> Optional[Move]:
    return BUTTON_TO_MOVE.get(str(name).upper())


__all__ = [
    "KEY_TO_MOVE",
    "KEY_TO_DIFFICULTY",
    "START_KEYS",
    "QUIT_KEYS",
    "BUTTON_TO_MOVE",
    "intent_for_key",
    "intent_for_button",
]

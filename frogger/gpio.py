from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, TYPE_CHECKING

from .config import CFG
from .input_map import intent_for_button

if TYPE_CHECKING:
    from .models import Move


log = logging.getLogger(__name__)

GPIO_AVAILABLE = True
IS_WINDOWS = sys.platform.startswith("win")
try:
    from gpiozero import Button  # type: ignore
except Exception:  # pragma: no cover - gpiozero is optional
    GPIO_AVAILABLE = False
    Button = None  # type: ignore


@dataclass
class Pins:
    UP: int
    DOWN: int
    LEFT: int
    RIGHT: int


PINS = Pins(**CFG["pins"])

GPIO_PULL_UP = True
GPIO_BOUNCE_TIME = 0.05


def init_gpio(push: Callable[["Move"], None]) -> Dict[str, "Button"]:
    """Wire the D-pad buttons to ``push``; a no-op off the Raspberry Pi."""
    if IS_WINDOWS or not GPIO_AVAILABLE or Button is None:
        log.debug("gpio input disabled")
        return {}
    pins = {
        "UP": PINS.UP,
        "DOWN": PINS.DOWN,
        "LEFT": PINS.LEFT,
        "RIGHT": PINS.RIGHT,
    }
    buttons = {
        name: Button(pin, pull_up=GPIO_PULL_UP, bounce_time=GPIO_BOUNCE_TIME)
        for name, pin in pins.items()
    }
    for name, btn in buttons.items():
        btn.when_pressed = (lambda n=name: push(intent_for_button(n)))
    log.info("gpio buttons on pins %s", pins)
    return buttons


__all__ = [
    "GPIO_AVAILABLE",
    "IS_WINDOWS",
    "Pins",
    "PINS",
    "GPIO_PULL_UP",
    "GPIO_BOUNCE_TIME",
    "init_gpio",
]

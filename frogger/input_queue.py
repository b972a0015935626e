from __future__ import annotations

from collections import deque
from typing import Deque, List

from .models import Move


class InputQueue:
    """Moves waiting for the next tick.

    ``push`` may be called from the gpiozero callback thread; ``append`` and
    ``popleft`` are each atomic on a deque, so draining pops one at a time.
    """

    def __init__(self) -> None:
        self._q: Deque[Move] = deque()

    def push(self, move: Move) -> None:
        self._q.append(move)

    def pop_all(self) -> list[Move]:
        out: List[Move] = []
        while True:
            try:
                out.append(self._q.popleft())
            except IndexError:
                return out

    def clear(self) -> None:
        self._q.clear()

    def __len__(self) -> int:
        return len(self._q)


__all__ = ["InputQueue"]

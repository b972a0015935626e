from __future__ import annotations

from typing import Callable, Optional


class SimClock:
    """Logical time in seconds, advanced only by the simulation."""

    def __init__(self) -> None:
        self.t = 0.0

    def advance(self, dt: float) -> None:
        self.t += max(0.0, float(dt))

    def now(self) -> float:
        return self.t


class DeferredAction:
    """Runs a callback once after a delay of logical time, unless cancelled."""

    def __init__(self, now_fn: Callable[[], float]) -> None:
        self._now = now_fn
        self._due = 0.0
        self._action: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._action is not None

    def remaining(self) -> float:
        if not self.pending:
            return 0.0
        return max(0.0, self._due - self._now())

    def schedule(self, seconds: float, action: Callable[[], None]) -> None:
        self._action = action
        self._due = self._now() + max(0.0, float(seconds))

    def cancel(self) -> None:
        self._action = None
        self._due = 0.0

    def poll(self) -> bool:
        """Fire the action if due. Returns True when it fired."""
        if self._action is None or self._now() < self._due:
            return False
        action = self._action
        self.cancel()
        action()
        return True


__all__ = ["SimClock", "DeferredAction"]

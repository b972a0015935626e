from __future__ import annotations


class FroggerError(Exception):
    """Base class for errors raised by the simulation core."""


class ConfigurationError(FroggerError, ValueError):
    """Invalid grid, lane table or difficulty. Raised at configuration time."""


class OutOfRange(FroggerError, IndexError):
    """A lane or column query fell outside the grid."""


__all__ = ["FroggerError", "ConfigurationError", "OutOfRange"]

"""Exception types raised by the maze core."""

from __future__ import annotations


class MazeError(Exception):
    """Base class for maze core failures."""


class PreconditionError(MazeError, ValueError):
    """An operation was called with arguments it cannot act on."""


class StaleGraphError(PreconditionError):
    """A graph was used with a grid whose layout changed after the graph was built."""


class MazeSizeError(PreconditionError):
    """The requested maze size is too small or not odd."""


__all__ = ["MazeError", "PreconditionError", "StaleGraphError", "MazeSizeError"]

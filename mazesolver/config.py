"""Configuration for maze sessions and their command line front end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .generator import default_endpoints, normalize_size
from .grid import Cell, CellLike, as_cell

DEFAULT_SIZE = 25
DEFAULT_CELL_SIZE = 20
DEFAULT_FRAME_MS = 60


@dataclass
class MazeConfig:
    """Settings for generating, solving and rendering a maze.

    Attributes:
        size: Side length of the grid; even values are rounded up to odd
        seed: Seed for the carving RNG, ``None`` for a random maze
        start: Start cell, defaults to ``(1, 1)``
        end: End cell, defaults to ``(size - 2, size - 2)``
        cell_size: Pixel size of one cell when rendering
        frame_duration_ms: Delay between animation frames
        grid_lines: Whether rendered images outline each cell
    """

    size: int = DEFAULT_SIZE
    seed: Optional[int] = None
    start: Optional[CellLike] = None
    end: Optional[CellLike] = None
    cell_size: int = DEFAULT_CELL_SIZE
    frame_duration_ms: int = DEFAULT_FRAME_MS
    grid_lines: bool = True

    def __post_init__(self) -> None:
        self.size = normalize_size(self.size)
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive")
        if self.frame_duration_ms <= 0:
            raise ValueError("frame_duration_ms must be positive")
        if self.start is not None:
            self.start = as_cell(self.start)
        if self.end is not None:
            self.end = as_cell(self.end)

    def endpoints(self) -> Tuple[Cell, Cell]:
        default_start, default_end = default_endpoints(self.size)
        start = as_cell(self.start) if self.start is not None else default_start
        end = as_cell(self.end) if self.end is not None else default_end
        return start, end


__all__ = ["DEFAULT_CELL_SIZE", "DEFAULT_FRAME_MS", "DEFAULT_SIZE", "MazeConfig"]

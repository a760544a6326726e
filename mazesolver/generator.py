"""Perfect maze generation by randomized depth-first carving."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import MazeSizeError, PreconditionError
from .grid import Cell, CellLike, CellState, Grid, as_cell, place_endpoints

logger = logging.getLogger(__name__)

MIN_SIZE = 5
DEFAULT_ORIGIN = Cell(1, 1)
CARVE_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 2), (0, -2), (2, 0), (-2, 0))


def validate_size(size: int) -> int:
    if size < MIN_SIZE:
        raise MazeSizeError(f"Maze size must be at least {MIN_SIZE}, got {size}")
    if size % 2 == 0:
        raise MazeSizeError(f"Maze size must be odd, got {size}")
    return size


def normalize_size(size: int) -> int:
    """Round an even size up to the next odd one; reject sizes below the minimum."""

    if size < MIN_SIZE:
        raise MazeSizeError(f"Maze size must be at least {MIN_SIZE}, got {size}")
    return size if size % 2 == 1 else size + 1


def default_endpoints(size: int) -> Tuple[Cell, Cell]:
    return Cell(1, 1), Cell(size - 2, size - 2)


@dataclass
class _CarveFrame:
    cell: Cell
    directions: Iterator[Tuple[int, int]]


class MazeGenerator:
    """Carve perfect mazes into all-wall grids.

    Every cell with odd coordinates inside the one-cell wall border ends up
    connected to ``origin`` by exactly one passage. The carving order comes
    from ``rng`` (or a ``random.Random`` seeded with ``seed``), so equal seeds
    give equal mazes.
    """

    def __init__(
        self,
        size: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        origin: CellLike = DEFAULT_ORIGIN,
    ) -> None:
        self.size = validate_size(size)
        self.seed = seed
        self.origin = self._validate_origin(as_cell(origin))
        self._rng = rng if rng is not None else random.Random(seed)

    def generate(self) -> Grid:
        grid = Grid(self.size)
        self._carve(grid)
        logger.debug(
            "Carved %d walkable cells in a %dx%d maze (seed=%s)",
            grid.walkable_count(),
            self.size,
            self.size,
            self.seed,
        )
        return grid

    def create_maze(
        self,
        *,
        start: Optional[CellLike] = None,
        end: Optional[CellLike] = None,
    ) -> Grid:
        """Generate a maze and place the start and end markers on it."""

        default_start, default_end = default_endpoints(self.size)
        return place_endpoints(
            self.generate(),
            start if start is not None else default_start,
            end if end is not None else default_end,
        )

    # ------------------------------------------------------------------

    def _carve(self, grid: Grid) -> None:
        grid[self.origin] = CellState.PATH
        stack: List[_CarveFrame] = [_CarveFrame(self.origin, self._shuffled_directions())]
        while stack:
            frame = stack[-1]
            step = next(frame.directions, None)
            if step is None:
                stack.pop()
                continue
            dr, dc = step
            candidate = frame.cell.offset(dr, dc)
            if self._is_carvable(grid, candidate):
                grid[frame.cell.offset(dr // 2, dc // 2)] = CellState.PATH
                grid[candidate] = CellState.PATH
                stack.append(_CarveFrame(candidate, self._shuffled_directions()))

    def _shuffled_directions(self) -> Iterator[Tuple[int, int]]:
        directions = list(CARVE_DIRECTIONS)
        self._rng.shuffle(directions)
        return iter(directions)

    def _is_carvable(self, grid: Grid, cell: Cell) -> bool:
        row, col = cell
        if not (1 <= row < self.size - 1 and 1 <= col < self.size - 1):
            return False
        return int(grid.cells[row, col]) == CellState.WALL

    def _validate_origin(self, origin: Cell) -> Cell:
        row, col = origin
        if not (1 <= row < self.size - 1 and 1 <= col < self.size - 1):
            raise PreconditionError(f"Carving origin {origin} must lie inside the wall border")
        if row % 2 == 0 or col % 2 == 0:
            raise PreconditionError(f"Carving origin {origin} must have odd coordinates")
        return origin


def generate_maze(
    size: int,
    seed: Optional[int] = None,
    *,
    origin: CellLike = DEFAULT_ORIGIN,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Return a freshly carved maze without start or end markers."""

    return MazeGenerator(size, seed=seed, rng=rng, origin=origin).generate()


def new_maze(
    size: int,
    seed: Optional[int] = None,
    *,
    start: Optional[CellLike] = None,
    end: Optional[CellLike] = None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Return a carved maze with start and end placed, ready to solve."""

    return MazeGenerator(size, seed=seed, rng=rng).create_maze(start=start, end=end)


__all__ = [
    "CARVE_DIRECTIONS",
    "DEFAULT_ORIGIN",
    "MIN_SIZE",
    "MazeGenerator",
    "default_endpoints",
    "generate_maze",
    "new_maze",
    "normalize_size",
    "validate_size",
]

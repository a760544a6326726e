"""Square cell-state grid shared by the generator, graph builder and renderers."""

from __future__ import annotations

import itertools
import numbers
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .errors import MazeSizeError, PreconditionError


class CellState(IntEnum):
    WALL = 0
    PATH = 1
    START = 2
    END = 3
    VISITED = 4
    SOLUTION = 5
    EXPLORING = 6


class Cell(NamedTuple):
    row: int
    col: int

    def offset(self, dr: int, dc: int) -> "Cell":
        return Cell(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


CellLike = Tuple[int, int]

OVERLAY_STATES = frozenset({CellState.VISITED, CellState.SOLUTION, CellState.EXPLORING})
# States that can change without altering walls or endpoints.
_OPEN_STATES = frozenset({CellState.PATH}) | OVERLAY_STATES

ASCII_SYMBOLS = {
    CellState.WALL: "#",
    CellState.PATH: " ",
    CellState.START: "S",
    CellState.END: "E",
    CellState.VISITED: ".",
    CellState.SOLUTION: "*",
    CellState.EXPLORING: "o",
}
_ASCII_LOOKUP = {symbol: state for state, symbol in ASCII_SYMBOLS.items()}

# Layout versions are unique per process, so grids of equal size never share one.
_LAYOUT_VERSIONS = itertools.count(1)


def as_cell(value: CellLike) -> Cell:
    """Coerce a ``(row, col)`` pair into a :class:`Cell`."""

    if isinstance(value, Cell):
        return value
    try:
        row, col = value
    except (TypeError, ValueError) as exc:
        raise PreconditionError(f"Expected a (row, col) pair, got {value!r}") from exc
    for coordinate in (row, col):
        if isinstance(coordinate, bool) or not isinstance(coordinate, numbers.Integral):
            raise PreconditionError(f"Cell coordinates must be integers, got {value!r}")
    return Cell(int(row), int(col))


class Grid:
    """A ``size`` x ``size`` array of :class:`CellState` codes.

    The grid carries a layout ``version`` that is replaced by a fresh value
    whenever a wall, the start marker or the end marker changes. Copies keep
    the version of their source. Search overlays (visited,
    exploring, solution) leave the version untouched, so a graph built from
    the grid stays valid while a renderer paints on it.
    """

    def __init__(
        self,
        size: int,
        *,
        cells: Optional[np.ndarray] = None,
        version: Optional[int] = None,
    ) -> None:
        if size < 1:
            raise MazeSizeError(f"Grid size must be positive, got {size}")
        self.size = size
        if cells is None:
            self.cells = np.full((size, size), int(CellState.WALL), dtype=np.int8)
        else:
            array = np.array(cells, dtype=np.int8)
            if array.shape != (size, size):
                raise PreconditionError(f"Expected a {size}x{size} array, got shape {array.shape}")
            self.cells = array
        self._version = version if version is not None else next(_LAYOUT_VERSIONS)

    @classmethod
    def from_ascii(cls, text: str) -> "Grid":
        """Parse the format produced by :meth:`to_ascii`."""

        lines = text.strip("\n").splitlines()
        size = len(lines)
        rows: List[List[int]] = []
        for line in lines:
            padded = line.ljust(size)
            if len(padded) != size:
                raise PreconditionError("ASCII maze must be square")
            try:
                rows.append([int(_ASCII_LOOKUP[ch]) for ch in padded])
            except KeyError as exc:
                raise PreconditionError(f"Unknown maze symbol {exc.args[0]!r}") from exc
        return cls(size, cells=np.array(rows, dtype=np.int8))

    @property
    def version(self) -> int:
        return self._version

    def in_bounds(self, cell: CellLike) -> bool:
        row, col = cell
        return 0 <= row < self.size and 0 <= col < self.size

    def require_in_bounds(self, cell: CellLike) -> Cell:
        cell = as_cell(cell)
        if not self.in_bounds(cell):
            raise PreconditionError(f"Cell {cell} is outside the {self.size}x{self.size} grid")
        return cell

    def __getitem__(self, cell: CellLike) -> CellState:
        row, col = self.require_in_bounds(cell)
        return CellState(int(self.cells[row, col]))

    def __setitem__(self, cell: CellLike, state: CellState) -> None:
        row, col = self.require_in_bounds(cell)
        state = CellState(state)
        previous = CellState(int(self.cells[row, col]))
        if previous == state:
            return
        self.cells[row, col] = int(state)
        if previous not in _OPEN_STATES or state not in _OPEN_STATES:
            self._version = next(_LAYOUT_VERSIONS)

    def is_wall(self, cell: CellLike) -> bool:
        return self[cell] == CellState.WALL

    def is_walkable(self, cell: CellLike) -> bool:
        return self.in_bounds(cell) and not self.is_wall(cell)

    def find(self, state: CellState) -> List[Cell]:
        return [Cell(int(r), int(c)) for r, c in np.argwhere(self.cells == int(state))]

    @property
    def start(self) -> Optional[Cell]:
        found = self.find(CellState.START)
        return found[0] if found else None

    @property
    def end(self) -> Optional[Cell]:
        found = self.find(CellState.END)
        return found[0] if found else None

    def is_ready(self) -> bool:
        return len(self.find(CellState.START)) == 1 and len(self.find(CellState.END)) == 1

    def walkable_cells(self) -> Iterator[Cell]:
        for r, c in np.argwhere(self.cells != int(CellState.WALL)):
            yield Cell(int(r), int(c))

    def walkable_count(self) -> int:
        return int(np.count_nonzero(self.cells != int(CellState.WALL)))

    def clear_overlay(self) -> None:
        mask = np.isin(self.cells, [int(state) for state in OVERLAY_STATES])
        self.cells[mask] = int(CellState.PATH)

    def copy(self) -> "Grid":
        return Grid(self.size, cells=self.cells.copy(), version=self._version)

    def to_rows(self) -> List[List[int]]:
        return self.cells.astype(int).tolist()

    def to_ascii(self) -> str:
        return "\n".join(
            "".join(ASCII_SYMBOLS[CellState(int(value))] for value in row) for row in self.cells
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.cells, other.cells))

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, version={self._version})"


def set_start(grid: Grid, cell: CellLike) -> Grid:
    """Return a copy of ``grid`` with the start marker moved to ``cell``."""

    return _relocate(grid, cell, CellState.START, CellState.END)


def set_end(grid: Grid, cell: CellLike) -> Grid:
    """Return a copy of ``grid`` with the end marker moved to ``cell``."""

    return _relocate(grid, cell, CellState.END, CellState.START)


def _relocate(grid: Grid, cell: CellLike, marker: CellState, other: CellState) -> Grid:
    target = grid.require_in_bounds(cell)
    current = grid[target]
    if current == CellState.WALL:
        raise PreconditionError(f"Cannot place the {marker.name.lower()} marker on wall cell {target}")
    if current == other:
        raise PreconditionError(f"Cell {target} already holds the {other.name.lower()} marker")
    relocated = grid.copy()
    for previous in relocated.find(marker):
        relocated[previous] = CellState.PATH
    relocated[target] = marker
    return relocated


def place_endpoints(grid: Grid, start: CellLike, end: CellLike) -> Grid:
    """Return a copy of ``grid`` with both markers placed."""

    start_cell = grid.require_in_bounds(start)
    end_cell = grid.require_in_bounds(end)
    if start_cell == end_cell:
        raise PreconditionError(f"Start and end markers cannot share cell {start_cell}")
    cleared = grid.copy()
    for marker in (CellState.START, CellState.END):
        for previous in cleared.find(marker):
            cleared[previous] = CellState.PATH
    return set_end(set_start(cleared, start_cell), end_cell)


def parse_cell(text: str) -> Cell:
    """Parse ``"row,col"`` into a :class:`Cell`."""

    values = text.replace(" ", "").split(",")
    if len(values) != 2:
        raise PreconditionError(f"Expected 'row,col', got {text!r}")
    try:
        return Cell(int(values[0]), int(values[1]))
    except ValueError as exc:
        raise PreconditionError(f"Expected integer coordinates, got {text!r}") from exc


__all__ = [
    "Cell",
    "CellLike",
    "CellState",
    "Grid",
    "OVERLAY_STATES",
    "ASCII_SYMBOLS",
    "as_cell",
    "parse_cell",
    "place_endpoints",
    "set_end",
    "set_start",
]

"""Path reconstruction, the ``solve`` entry point and replayable step sequences."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from itertools import chain
from typing import Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

from .errors import PreconditionError
from .graph import MazeGraph
from .grid import Cell, CellLike, CellState, Grid, as_cell
from .pathfinder import SearchMode, SearchResult, find_path


def reconstruct_path(parents: Mapping[Cell, Cell], start: CellLike, end: CellLike) -> Tuple[Cell, ...]:
    """Follow parent links from ``end`` back to ``start`` and return them start first.

    Returns an empty tuple when the chain does not lead back to ``start``.
    """

    start = as_cell(start)
    end = as_cell(end)
    path: List[Cell] = [end]
    current = end
    # A parent chain over n cells has at most n links.
    for _ in range(len(parents) + 1):
        if current == start:
            path.reverse()
            return tuple(path)
        parent = parents.get(current)
        if parent is None:
            return ()
        path.append(parent)
        current = parent
    return ()


def solution_path(result: SearchResult) -> Tuple[Cell, ...]:
    if not result.found:
        return ()
    return reconstruct_path(result.parents, result.start, result.end)


@dataclass(frozen=True)
class SolveResult:
    found: bool
    mode: SearchMode
    start: Cell
    end: Cell
    exploration_order: Tuple[Cell, ...]
    solution_path: Tuple[Cell, ...]
    elapsed_ms: float = 0.0

    @property
    def explored_count(self) -> int:
        return len(self.exploration_order)

    @property
    def path_length(self) -> Optional[int]:
        """Number of edges on the solution path, or ``None`` when nothing was found."""

        if not self.found:
            return None
        return len(self.solution_path) - 1

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "mode": self.mode.value,
            "start": list(self.start),
            "end": list(self.end),
            "explored_count": self.explored_count,
            "path_length": self.path_length,
            "elapsed_ms": round(self.elapsed_ms, 3),
            "exploration_order": [list(cell) for cell in self.exploration_order],
            "solution_path": [list(cell) for cell in self.solution_path],
        }


def solve(
    graph: MazeGraph,
    start: CellLike,
    end: CellLike,
    mode: Union[SearchMode, str] = SearchMode.BFS,
    *,
    grid: Optional[Grid] = None,
) -> SolveResult:
    """Search ``graph`` for a route from ``start`` to ``end``.

    Invalid endpoints raise :class:`PreconditionError` before any traversal;
    an unreachable end is reported through ``found=False``. Passing ``grid``
    additionally checks that ``graph`` still matches its layout.
    """

    mode = SearchMode.parse(mode)
    if grid is not None:
        graph.ensure_current(grid)
    start = _require_endpoint(graph, start, "start")
    end = _require_endpoint(graph, end, "end")

    began = time.perf_counter()
    search = find_path(graph, start, end, mode)
    path = solution_path(search)
    elapsed_ms = (time.perf_counter() - began) * 1000.0
    return SolveResult(
        found=search.found,
        mode=mode,
        start=start,
        end=end,
        exploration_order=search.exploration_order,
        solution_path=path,
        elapsed_ms=elapsed_ms,
    )


def _require_endpoint(graph: MazeGraph, cell: CellLike, label: str) -> Cell:
    cell = as_cell(cell)
    if not len(graph):
        raise PreconditionError("Graph has no walkable cells")
    if not graph.in_bounds(cell):
        raise PreconditionError(f"The {label} cell {cell} is outside the {graph.size}x{graph.size} maze")
    if cell not in graph:
        raise PreconditionError(f"The {label} cell {cell} is a wall")
    return cell


class StepPhase(str, Enum):
    EXPLORE = "explore"
    SETTLE = "settle"
    SOLUTION = "solution"


class Step(NamedTuple):
    phase: StepPhase
    position: int
    cell: Cell
    # None leaves the cell as it is (start and end markers are never painted over).
    state: Optional[CellState]


class StepSequencer:
    """Turn a solve result into the overlay steps a renderer plays back.

    Playback runs in three phases: every explored cell is marked
    ``EXPLORING`` in search order, the explored cells then settle to
    ``VISITED``, and finally the solution path is marked ``SOLUTION`` from
    start to end. The sequences are tuples, so they can be iterated any
    number of times and are unaffected by later solves.
    """

    def __init__(self, result: SolveResult) -> None:
        self.result = result
        self.exploration: Tuple[Cell, ...] = result.exploration_order
        self.solution: Tuple[Cell, ...] = result.solution_path
        self._endpoints = frozenset({result.start, result.end})

    def exploration_steps(self) -> Iterator[Step]:
        return self._steps(StepPhase.EXPLORE, self.exploration, CellState.EXPLORING)

    def settle_steps(self) -> Iterator[Step]:
        return self._steps(StepPhase.SETTLE, self.exploration, CellState.VISITED)

    def solution_steps(self) -> Iterator[Step]:
        return self._steps(StepPhase.SOLUTION, self.solution, CellState.SOLUTION)

    def __iter__(self) -> Iterator[Step]:
        return chain(self.exploration_steps(), self.settle_steps(), self.solution_steps())

    def __len__(self) -> int:
        return 2 * len(self.exploration) + len(self.solution)

    @staticmethod
    def apply(grid: Grid, step: Step) -> None:
        if step.state is None:
            return
        current = grid[step.cell]
        if current == CellState.WALL:
            raise PreconditionError(f"Cannot overlay wall cell {step.cell}; the grid does not match this solve")
        if current in (CellState.START, CellState.END):
            return
        grid[step.cell] = step.state

    def replay(self, grid: Grid, *, phases: Optional[Tuple[StepPhase, ...]] = None) -> Grid:
        """Apply the steps to a copy of ``grid`` with any previous overlay cleared."""

        painted = grid.copy()
        painted.clear_overlay()
        for step in self:
            if phases is None or step.phase in phases:
                self.apply(painted, step)
        return painted

    def _steps(self, phase: StepPhase, cells: Tuple[Cell, ...], state: CellState) -> Iterator[Step]:
        for position, cell in enumerate(cells):
            yield Step(phase, position, cell, None if cell in self._endpoints else state)


__all__ = [
    "SolveResult",
    "Step",
    "StepPhase",
    "StepSequencer",
    "reconstruct_path",
    "solution_path",
    "solve",
]

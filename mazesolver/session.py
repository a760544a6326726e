"""Long-lived maze state for an interactive front end."""

from __future__ import annotations

import logging
import random
import threading
from typing import Optional, Union

from .config import MazeConfig
from .errors import PreconditionError, StaleGraphError
from .generator import MazeGenerator
from .graph import MazeGraph, build_graph
from .grid import Cell, CellLike, Grid, set_end, set_start
from .pathfinder import SearchMode
from .sequencer import SolveResult, StepSequencer, solve

logger = logging.getLogger(__name__)


class MazeSession:
    """Own one grid and its graph, and serialize every change to them.

    Generation and endpoint relocation replace the grid and graph wholesale.
    ``solve`` takes the current graph snapshot under the lock and searches it
    outside the lock, so a concurrent ``generate`` cannot change the graph a
    search is reading. Overlays are only painted by :meth:`apply_overlay`.
    """

    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or MazeConfig()
        self._rng = rng
        self._lock = threading.RLock()
        self._grid: Grid
        self._graph: MazeGraph
        self._last_result: Optional[SolveResult] = None
        self._last_version: Optional[int] = None
        self.generate()

    @property
    def grid(self) -> Grid:
        """A copy of the current grid, safe to read while the session changes."""

        with self._lock:
            return self._grid.copy()

    @property
    def graph(self) -> MazeGraph:
        with self._lock:
            return self._graph

    @property
    def start(self) -> Optional[Cell]:
        with self._lock:
            return self._grid.start

    @property
    def end(self) -> Optional[Cell]:
        with self._lock:
            return self._grid.end

    @property
    def last_result(self) -> Optional[SolveResult]:
        with self._lock:
            return self._last_result

    def generate(self, seed: Optional[int] = None) -> Grid:
        """Carve a new maze and place the configured endpoints on it."""

        # An explicit seed always wins over the injected generator.
        rng = self._rng if seed is None else None
        seed = seed if seed is not None else self.config.seed
        start, end = self.config.endpoints()
        with self._lock:
            generator = MazeGenerator(self.config.size, seed=seed, rng=rng)
            self._replace(generator.create_maze(start=start, end=end))
            grid = self._grid.copy()
        logger.info("Generated %dx%d maze (seed=%s)", self.config.size, self.config.size, seed)
        return grid

    def set_start(self, cell: CellLike) -> Grid:
        with self._lock:
            self._replace(set_start(self._cleared(), cell))
            logger.info("Start moved to %s", self._grid.start)
            return self._grid.copy()

    def set_end(self, cell: CellLike) -> Grid:
        with self._lock:
            self._replace(set_end(self._cleared(), cell))
            logger.info("End moved to %s", self._grid.end)
            return self._grid.copy()

    def solve(self, mode: Union[SearchMode, str] = SearchMode.BFS) -> SolveResult:
        with self._lock:
            graph = self._graph
            start, end = self._grid.start, self._grid.end
            version = self._grid.version
        if start is None or end is None:
            raise PreconditionError("Both start and end must be set before solving")
        result = solve(graph, start, end, mode)
        with self._lock:
            if self._grid.version == version:
                self._last_result = result
                self._last_version = version
        if result.found:
            logger.info(
                "%s found a %d-step path after exploring %d cells",
                result.mode.name,
                result.path_length,
                result.explored_count,
            )
        else:
            logger.info("%s found no path from %s to %s", result.mode.name, start, end)
        return result

    def sequencer(self, result: Optional[SolveResult] = None) -> StepSequencer:
        result = result or self._require_last_result()
        return StepSequencer(result)

    def apply_overlay(self) -> Grid:
        """Paint the most recent solve onto the grid and return a copy of it."""

        with self._lock:
            result = self._require_last_result()
            if self._last_version != self._grid.version:
                raise StaleGraphError("The maze changed after the last solve")
            self._grid = StepSequencer(result).replay(self._grid)
            return self._grid.copy()

    def clear(self) -> Grid:
        """Remove search overlays, keeping walls and endpoints."""

        with self._lock:
            self._grid.clear_overlay()
            return self._grid.copy()

    # ------------------------------------------------------------------

    def _replace(self, grid: Grid) -> None:
        self._grid = grid
        self._graph = build_graph(grid)
        self._last_result = None
        self._last_version = None

    def _cleared(self) -> Grid:
        grid = self._grid.copy()
        grid.clear_overlay()
        return grid

    def _require_last_result(self) -> SolveResult:
        with self._lock:
            if self._last_result is None:
                raise PreconditionError("No solve has been run on the current maze")
            return self._last_result


__all__ = ["MazeSession"]

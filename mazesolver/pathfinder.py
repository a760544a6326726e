"""Depth-first and breadth-first search over a maze graph."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Deque, Dict, List, Mapping, Tuple, Type, Union

from .errors import PreconditionError
from .graph import MazeGraph
from .grid import Cell, CellLike, as_cell

logger = logging.getLogger(__name__)


class SearchMode(str, Enum):
    DFS = "dfs"
    BFS = "bfs"

    @classmethod
    def parse(cls, value: Union["SearchMode", str]) -> "SearchMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            choices = ", ".join(mode.value for mode in cls)
            raise PreconditionError(f"Unknown search mode {value!r}; expected one of {choices}") from exc


class Frontier(ABC):
    """Pending cells of a traversal. Subclasses decide which end ``pop`` takes from."""

    def __init__(self) -> None:
        self._items: Deque[Cell] = deque()

    def push(self, cell: Cell) -> None:
        self._items.append(cell)

    @abstractmethod
    def pop(self) -> Cell:
        """Remove and return the next cell to explore."""

    def __len__(self) -> int:
        return len(self._items)


class StackFrontier(Frontier):
    """Last in, first out."""

    def pop(self) -> Cell:
        return self._items.pop()


class QueueFrontier(Frontier):
    """First in, first out."""

    def pop(self) -> Cell:
        return self._items.popleft()


FRONTIERS: Dict[SearchMode, Type[Frontier]] = {
    SearchMode.DFS: StackFrontier,
    SearchMode.BFS: QueueFrontier,
}


@dataclass(frozen=True)
class SearchResult:
    mode: SearchMode
    start: Cell
    end: Cell
    found: bool
    exploration_order: Tuple[Cell, ...]
    parents: Mapping[Cell, Cell] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def explored_count(self) -> int:
        return len(self.exploration_order)


def find_path(
    graph: MazeGraph,
    start: CellLike,
    end: CellLike,
    mode: Union[SearchMode, str] = SearchMode.BFS,
) -> SearchResult:
    """Search ``graph`` from ``start`` until ``end`` leaves the frontier.

    Endpoints missing from the graph yield ``found=False`` without any
    traversal. Neighbours enter the frontier in the graph's fixed order, so
    repeated searches produce identical exploration orders.
    """

    mode = SearchMode.parse(mode)
    start = as_cell(start)
    end = as_cell(end)
    if start not in graph or end not in graph:
        logger.debug("Skipping %s search: %s or %s is not walkable", mode.value, start, end)
        return SearchResult(mode=mode, start=start, end=end, found=False, exploration_order=())

    frontier = FRONTIERS[mode]()
    frontier.push(start)
    visited = {start}
    parents: Dict[Cell, Cell] = {}
    order: List[Cell] = []
    found = False

    while len(frontier):
        current = frontier.pop()
        order.append(current)
        if current == end:
            found = True
            break
        for neighbor in graph.neighbors(current):
            if neighbor not in visited:
                visited.add(neighbor)
                parents[neighbor] = current
                frontier.push(neighbor)

    logger.debug(
        "%s search from %s to %s explored %d cells (found=%s)",
        mode.name,
        start,
        end,
        len(order),
        found,
    )
    return SearchResult(
        mode=mode,
        start=start,
        end=end,
        found=found,
        exploration_order=tuple(order),
        parents=MappingProxyType(parents),
    )


__all__ = [
    "FRONTIERS",
    "Frontier",
    "QueueFrontier",
    "SearchMode",
    "SearchResult",
    "StackFrontier",
    "find_path",
]

"""Adjacency view over the walkable cells of a grid."""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Tuple

from .errors import StaleGraphError
from .grid import Cell, CellLike, CellState, Grid, as_cell

# Up, down, left, right. Pathfinders insert neighbours in this order.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MazeGraph(Mapping[Cell, Tuple[Cell, ...]]):
    """Read-only mapping from each walkable cell to its walkable neighbours.

    A graph is a snapshot: it remembers the size and layout version of the
    grid it came from and never changes afterwards.
    """

    def __init__(
        self,
        adjacency: Mapping[Cell, Tuple[Cell, ...]],
        *,
        size: int,
        version: int,
    ) -> None:
        self._adjacency: Dict[Cell, Tuple[Cell, ...]] = {
            as_cell(cell): tuple(as_cell(n) for n in neighbors)
            for cell, neighbors in adjacency.items()
        }
        self.size = size
        self.version = version

    def __getitem__(self, cell: CellLike) -> Tuple[Cell, ...]:
        return self._adjacency[as_cell(cell)]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, cell: object) -> bool:
        try:
            return as_cell(cell) in self._adjacency  # type: ignore[arg-type]
        except ValueError:
            return False

    def neighbors(self, cell: CellLike) -> Tuple[Cell, ...]:
        return self._adjacency.get(as_cell(cell), ())

    def has_edge(self, a: CellLike, b: CellLike) -> bool:
        return as_cell(b) in self.neighbors(a)

    def edges(self) -> Iterator[Tuple[Cell, Cell]]:
        """Yield each undirected edge once, smaller cell first."""

        for cell, neighbors in self._adjacency.items():
            for neighbor in neighbors:
                if cell < neighbor:
                    yield cell, neighbor

    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency.values()) // 2

    def in_bounds(self, cell: CellLike) -> bool:
        row, col = as_cell(cell)
        return 0 <= row < self.size and 0 <= col < self.size

    def is_stale(self, grid: Grid) -> bool:
        return grid.size != self.size or grid.version != self.version

    def ensure_current(self, grid: Grid) -> None:
        if self.is_stale(grid):
            raise StaleGraphError(
                f"Graph was built from layout version {self.version}, grid is at version {grid.version}"
            )

    def __repr__(self) -> str:
        return f"MazeGraph(size={self.size}, cells={len(self)}, edges={self.edge_count()})"


def build_graph(grid: Grid) -> MazeGraph:
    """Derive the 4-neighbour adjacency of every non-wall cell in ``grid``."""

    walls = grid.cells == int(CellState.WALL)
    adjacency: Dict[Cell, Tuple[Cell, ...]] = {}
    for cell in grid.walkable_cells():
        neighbors = []
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = cell.row + dr, cell.col + dc
            if 0 <= nr < grid.size and 0 <= nc < grid.size and not walls[nr, nc]:
                neighbors.append(Cell(nr, nc))
        adjacency[cell] = tuple(neighbors)
    return MazeGraph(adjacency, size=grid.size, version=grid.version)


__all__ = ["MazeGraph", "NEIGHBOR_OFFSETS", "build_graph"]

"""Check a candidate route against a maze and score it."""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import PreconditionError
from .graph import MazeGraph, build_graph
from .grid import Cell, CellLike, Grid, as_cell
from .pathfinder import SearchMode
from .sequencer import solve


@dataclass
class PathEvaluationResult:
    starts_at_start: bool
    connected: bool
    touches_goal: bool
    stray_in_walls: bool
    cells: List[Cell]
    length: int
    shortest_length: Optional[int]
    message: str

    @property
    def success(self) -> bool:
        return self.starts_at_start and self.connected and self.touches_goal and not self.stray_in_walls

    @property
    def is_shortest(self) -> bool:
        return self.success and self.shortest_length is not None and self.length == self.shortest_length

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "starts_at_start": self.starts_at_start,
            "connected": self.connected,
            "touches_goal": self.touches_goal,
            "stray_in_walls": self.stray_in_walls,
            "cells": [list(cell) for cell in self.cells],
            "length": self.length,
            "shortest_length": self.shortest_length,
            "is_shortest": self.is_shortest,
            "message": self.message,
        }


class PathEvaluator:
    """Evaluate routes drawn through a ready maze from its start to its end."""

    def __init__(self, grid: Grid, *, graph: Optional[MazeGraph] = None) -> None:
        if not grid.is_ready():
            raise PreconditionError("Maze must have exactly one start and one end")
        self.grid = grid.copy()
        self.graph = graph if graph is not None else build_graph(self.grid)
        self.graph.ensure_current(self.grid)
        self.start: Cell = self.grid.start  # type: ignore[assignment]
        self.goal: Cell = self.grid.end  # type: ignore[assignment]
        reference = solve(self.graph, self.start, self.goal, SearchMode.BFS)
        self.shortest_length = reference.path_length

    def evaluate(self, candidate: Sequence[CellLike]) -> PathEvaluationResult:
        cells = [as_cell(cell) for cell in candidate]
        stray_in_walls = any(cell not in self.graph for cell in cells)
        starts_at_start = bool(cells) and cells[0] == self.start
        touches_goal = bool(cells) and cells[-1] == self.goal
        connected = bool(cells) and not stray_in_walls and all(
            self.graph.has_edge(a, b) for a, b in zip(cells, cells[1:])
        )

        if not cells:
            message = "No path given."
        elif stray_in_walls:
            message = "Path crosses walls."
        elif not starts_at_start:
            message = "Path does not begin at the start."
        elif not touches_goal:
            message = "Path does not reach the goal."
        elif not connected:
            message = "Path is not continuous from start to goal."
        else:
            message = "Path successfully connects start to goal."

        return PathEvaluationResult(
            starts_at_start=starts_at_start,
            connected=connected,
            touches_goal=touches_goal,
            stray_in_walls=stray_in_walls,
            cells=cells,
            length=max(len(cells) - 1, 0),
            shortest_length=self.shortest_length,
            message=message,
        )


__all__ = ["PathEvaluator", "PathEvaluationResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a route through a maze")
    parser.add_argument("maze", type=Path, help="Text file with an ASCII maze (#, space, S, E)")
    parser.add_argument("route", type=Path, help="JSON file holding a list of [row, col] pairs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    grid = Grid.from_ascii(args.maze.read_text(encoding="utf-8"))
    route = json.loads(args.route.read_text(encoding="utf-8"))
    result = PathEvaluator(grid).evaluate(route)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()

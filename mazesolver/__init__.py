"""Maze generation, graph search and step playback."""

__all__ = [
    "Cell",
    "CellState",
    "Grid",
    "MazeGraph",
    "MazeGenerator",
    "MazeConfig",
    "MazeSession",
    "SearchMode",
    "SearchResult",
    "SolveResult",
    "Step",
    "StepPhase",
    "StepSequencer",
    "PathEvaluator",
    "PathEvaluationResult",
    "MazeError",
    "PreconditionError",
    "StaleGraphError",
    "MazeSizeError",
    "build_graph",
    "find_path",
    "generate_maze",
    "new_maze",
    "reconstruct_path",
    "set_end",
    "set_start",
    "solve",
]

from .errors import MazeError, MazeSizeError, PreconditionError, StaleGraphError
from .grid import Cell, CellState, Grid, set_end, set_start
from .generator import MazeGenerator, generate_maze, new_maze
from .graph import MazeGraph, build_graph
from .pathfinder import SearchMode, SearchResult, find_path
from .sequencer import SolveResult, Step, StepPhase, StepSequencer, reconstruct_path, solve
from .config import MazeConfig
from .session import MazeSession
from .evaluator import PathEvaluator, PathEvaluationResult

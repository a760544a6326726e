"""Command line entry point: generate a maze, solve it and optionally render it."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_CELL_SIZE, DEFAULT_FRAME_MS, DEFAULT_SIZE, MazeConfig
from .errors import MazeError
from .grid import parse_cell
from .pathfinder import SearchMode
from .render import MazeRenderer
from .session import MazeSession


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a random maze and solve it with DFS or BFS")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Grid side length (even values round up)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mode", choices=("dfs", "bfs", "both"), default="both")
    parser.add_argument("--start", type=str, default=None, help="Start cell as row,col")
    parser.add_argument("--end", type=str, default=None, help="End cell as row,col")
    parser.add_argument("--ascii", action="store_true", help="Print the solved maze as text")
    parser.add_argument("--image", type=Path, default=None, help="Write the solved maze as a PNG")
    parser.add_argument("--animation", type=Path, default=None, help="Write the search playback as a GIF")
    parser.add_argument("--cell-size", type=int, default=DEFAULT_CELL_SIZE)
    parser.add_argument("--frame-ms", type=int, default=DEFAULT_FRAME_MS)
    parser.add_argument("--no-grid-lines", action="store_true")
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Omit the exploration order and solution path from the JSON output",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = MazeConfig(
            size=args.size,
            seed=args.seed,
            start=parse_cell(args.start) if args.start else None,
            end=parse_cell(args.end) if args.end else None,
            cell_size=args.cell_size,
            frame_duration_ms=args.frame_ms,
            grid_lines=not args.no_grid_lines,
        )
        session = MazeSession(config)
        modes = list(SearchMode) if args.mode == "both" else [SearchMode.parse(args.mode)]
        results = [session.solve(mode) for mode in modes]
    except (MazeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    # The last solve is the one shown in text and image output.
    final = results[-1]
    sequencer = session.sequencer(final)
    if args.ascii:
        print(session.apply_overlay().to_ascii())
        session.clear()
    renderer = MazeRenderer(config.cell_size, grid_lines=config.grid_lines)
    if args.image is not None:
        renderer.save_solution(session.grid, sequencer, args.image)
    if args.animation is not None:
        renderer.save_animation(
            session.grid,
            sequencer,
            args.animation,
            frame_duration_ms=config.frame_duration_ms,
        )

    payload = {
        "size": config.size,
        "seed": config.seed,
        "start": list(session.start) if session.start else None,
        "end": list(session.end) if session.end else None,
        "results": [_result_payload(result.to_dict(), summary=args.summary) for result in results],
    }
    print(json.dumps(payload, indent=2))
    return 0


def _result_payload(payload: dict, *, summary: bool) -> dict:
    if summary:
        payload.pop("exploration_order", None)
        payload.pop("solution_path", None)
    return payload


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Solve a batch of seeded mazes with DFS and BFS and compare the effort."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from statistics import mean
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazesolver import SearchMode, build_graph, new_maze, solve


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("count", type=int, help="Number of mazes to solve")
    parser.add_argument("--size", type=int, default=25, help="Odd maze side length")
    parser.add_argument("--first-seed", type=int, default=0, help="Seed of the first maze")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional JSON file for the per-maze measurements",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    rows: List[Dict[str, object]] = []
    for index in range(args.count):
        seed = args.first_seed + index
        grid = new_maze(args.size, seed)
        graph = build_graph(grid)
        row: Dict[str, object] = {"seed": seed}
        for mode in SearchMode:
            result = solve(graph, grid.start, grid.end, mode)
            row[f"{mode.value}_explored"] = result.explored_count
            row[f"{mode.value}_length"] = result.path_length
        if row["bfs_length"] > row["dfs_length"]:  # type: ignore[operator]
            raise RuntimeError(f"BFS returned a longer path than DFS for seed {seed}")
        rows.append(row)
        print(
            f"[{index + 1}/{args.count}] seed={seed} "
            f"dfs={row['dfs_explored']}/{row['dfs_length']} bfs={row['bfs_explored']}/{row['bfs_length']}"
        )

    if rows:
        for mode in SearchMode:
            explored = mean(row[f"{mode.value}_explored"] for row in rows)  # type: ignore[misc]
            length = mean(row[f"{mode.value}_length"] for row in rows)  # type: ignore[misc]
            print(f"{mode.name}: mean explored {explored:.1f}, mean path length {length:.1f}")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(rows, indent=2), encoding="utf-8")
        print(f"Wrote {len(rows)} measurements to {args.output}")


if __name__ == "__main__":
    main()

import random
import unittest
from collections import deque

from mazesolver.errors import MazeSizeError, PreconditionError
from mazesolver.generator import MazeGenerator, generate_maze, new_maze, normalize_size
from mazesolver.graph import build_graph
from mazesolver.grid import Cell, CellState


def _reachable(graph, origin):
    seen = {origin}
    queue = deque([origin])
    while queue:
        cell = queue.popleft()
        for neighbor in graph[cell]:
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


class MazeGeneratorTests(unittest.TestCase):
    def test_same_seed_gives_same_maze(self) -> None:
        self.assertEqual(generate_maze(21, seed=42), generate_maze(21, seed=42))

    def test_different_seeds_vary_the_layout(self) -> None:
        layouts = {generate_maze(21, seed=seed).to_ascii() for seed in range(5)}
        self.assertGreater(len(layouts), 1)

    def test_injected_rng_matches_seed(self) -> None:
        injected = MazeGenerator(15, rng=random.Random(9)).generate()
        self.assertEqual(injected, generate_maze(15, seed=9))

    def test_every_odd_cell_is_carved_and_border_stays_wall(self) -> None:
        size = 15
        grid = generate_maze(size, seed=3)
        for row in range(size):
            for col in range(size):
                state = grid[(row, col)]
                if row in (0, size - 1) or col in (0, size - 1):
                    self.assertEqual(state, CellState.WALL)
                elif row % 2 == 1 and col % 2 == 1:
                    self.assertEqual(state, CellState.PATH)
                elif row % 2 == 0 and col % 2 == 0:
                    self.assertEqual(state, CellState.WALL)

    def test_maze_is_a_spanning_tree(self) -> None:
        for seed in range(10):
            grid = generate_maze(17, seed=seed)
            graph = build_graph(grid)
            self.assertEqual(len(graph) - graph.edge_count(), 1)
            self.assertEqual(_reachable(graph, Cell(1, 1)), set(graph))

    def test_five_by_five_carves_four_rooms_and_three_passages(self) -> None:
        grid = generate_maze(5, seed=11)
        self.assertEqual(grid.walkable_count(), 7)

    def test_large_maze_does_not_overflow_the_call_stack(self) -> None:
        grid = generate_maze(401, seed=1)
        self.assertEqual(grid.walkable_count(), 2 * 200 * 200 - 1)

    def test_new_maze_places_default_endpoints(self) -> None:
        grid = new_maze(11, seed=5)
        self.assertTrue(grid.is_ready())
        self.assertEqual(grid.start, Cell(1, 1))
        self.assertEqual(grid.end, Cell(9, 9))

    def test_new_maze_rejects_wall_endpoints(self) -> None:
        with self.assertRaises(PreconditionError):
            new_maze(11, seed=5, end=(2, 2))

    def test_degenerate_sizes_are_rejected(self) -> None:
        for size in (0, 3, 4, 6, 10):
            with self.assertRaises(MazeSizeError):
                generate_maze(size)

    def test_normalize_size_rounds_even_sizes_up(self) -> None:
        self.assertEqual(normalize_size(6), 7)
        self.assertEqual(normalize_size(9), 9)
        with self.assertRaises(MazeSizeError):
            normalize_size(4)

    def test_origin_must_be_odd_and_inside_border(self) -> None:
        with self.assertRaises(PreconditionError):
            MazeGenerator(9, origin=(2, 1))
        with self.assertRaises(PreconditionError):
            MazeGenerator(9, origin=(9, 1))
        grid = MazeGenerator(9, seed=0, origin=(7, 7)).generate()
        self.assertEqual(grid.walkable_count(), 2 * 16 - 1)


if __name__ == "__main__":
    unittest.main()

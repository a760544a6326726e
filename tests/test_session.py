import random
import threading
import unittest

from mazesolver.config import MazeConfig
from mazesolver.errors import MazeSizeError, PreconditionError
from mazesolver.generator import new_maze
from mazesolver.grid import Cell, CellState
from mazesolver.pathfinder import SearchMode
from mazesolver.session import MazeSession


class MazeConfigTests(unittest.TestCase):
    def test_even_size_is_rounded_up(self) -> None:
        config = MazeConfig(size=10)
        self.assertEqual(config.size, 11)
        self.assertEqual(config.endpoints(), (Cell(1, 1), Cell(9, 9)))

    def test_invalid_values_are_rejected(self) -> None:
        with self.assertRaises(MazeSizeError):
            MazeConfig(size=3)
        with self.assertRaises(ValueError):
            MazeConfig(cell_size=0)
        with self.assertRaises(ValueError):
            MazeConfig(frame_duration_ms=0)


class MazeSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MazeSession(MazeConfig(size=15, seed=3))

    def test_generated_maze_is_ready(self) -> None:
        grid = self.session.grid
        self.assertTrue(grid.is_ready())
        self.assertEqual(self.session.start, Cell(1, 1))
        self.assertEqual(self.session.end, Cell(13, 13))
        self.assertFalse(self.session.graph.is_stale(grid))

    def test_seeded_sessions_agree(self) -> None:
        other = MazeSession(MazeConfig(size=15, seed=3))
        self.assertEqual(self.session.grid, other.grid)

    def test_injected_rng_drives_generation(self) -> None:
        first = MazeSession(MazeConfig(size=15), rng=random.Random(4))
        second = MazeSession(MazeConfig(size=15, seed=4))
        self.assertEqual(first.grid, second.grid)

    def test_explicit_seed_overrides_injected_rng(self) -> None:
        session = MazeSession(MazeConfig(size=15), rng=random.Random(4))
        grid = session.generate(seed=99)
        self.assertEqual(grid, new_maze(15, 99))
        self.assertEqual(session.grid, new_maze(15, 99))

    def test_generate_returns_a_copy(self) -> None:
        grid = self.session.generate(seed=5)
        grid[(1, 1)] = CellState.WALL
        self.assertEqual(self.session.grid[(1, 1)], CellState.START)

    def test_grid_property_returns_a_copy(self) -> None:
        grid = self.session.grid
        grid[(1, 1)] = CellState.WALL
        self.assertEqual(self.session.grid[(1, 1)], CellState.START)
        self.assertFalse(self.session.graph.is_stale(self.session.grid))

    def test_solve_both_modes(self) -> None:
        dfs = self.session.solve(SearchMode.DFS)
        bfs = self.session.solve("bfs")
        self.assertTrue(dfs.found)
        self.assertTrue(bfs.found)
        self.assertLessEqual(bfs.path_length, dfs.path_length)
        self.assertIs(self.session.last_result, bfs)

    def test_apply_overlay_and_clear(self) -> None:
        result = self.session.solve(SearchMode.BFS)
        painted = self.session.apply_overlay()
        for cell in result.solution_path[1:-1]:
            self.assertEqual(painted[cell], CellState.SOLUTION)
        self.assertEqual(painted[result.start], CellState.START)
        cleared = self.session.clear()
        self.assertEqual(cleared.find(CellState.SOLUTION), [])
        self.assertEqual(cleared.find(CellState.VISITED), [])
        self.assertTrue(cleared.is_ready())

    def test_overlay_requires_a_solve(self) -> None:
        with self.assertRaises(PreconditionError):
            self.session.apply_overlay()

    def test_relocation_discards_previous_solve(self) -> None:
        self.session.solve(SearchMode.BFS)
        self.session.set_end((1, 3))
        self.assertIsNone(self.session.last_result)
        with self.assertRaises(PreconditionError):
            self.session.apply_overlay()

    def test_set_start_rebuilds_graph(self) -> None:
        before = self.session.graph
        grid = self.session.set_start((1, 3))
        self.assertEqual(grid.start, Cell(1, 3))
        self.assertEqual(grid[(1, 1)], CellState.PATH)
        self.assertIsNot(self.session.graph, before)
        self.assertFalse(self.session.graph.is_stale(self.session.grid))
        result = self.session.solve(SearchMode.DFS)
        self.assertEqual(result.start, Cell(1, 3))

    def test_relocation_onto_wall_leaves_state_untouched(self) -> None:
        before = self.session.grid
        with self.assertRaises(PreconditionError):
            self.session.set_start((0, 0))
        with self.assertRaises(PreconditionError):
            self.session.set_end((2, 2))
        self.assertEqual(self.session.grid, before)

    def test_relocation_clears_overlay(self) -> None:
        self.session.solve(SearchMode.BFS)
        self.session.apply_overlay()
        grid = self.session.set_end((1, 3))
        self.assertEqual(grid.find(CellState.VISITED), [])
        self.assertEqual(grid.find(CellState.SOLUTION), [])

    def test_regenerate_with_new_seed(self) -> None:
        before = self.session.grid
        self.session.generate(seed=99)
        self.assertNotEqual(self.session.graph.version, before.version)
        self.assertTrue(self.session.grid.is_ready())

    def test_concurrent_requests_do_not_corrupt_state(self) -> None:
        errors = []

        def solve_many() -> None:
            try:
                for _ in range(20):
                    result = self.session.solve(SearchMode.BFS)
                    self.assertTrue(result.found)
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        def regenerate_many() -> None:
            try:
                for seed in range(20):
                    self.session.generate(seed=seed)
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        threads = [threading.Thread(target=solve_many) for _ in range(3)]
        threads.append(threading.Thread(target=regenerate_many))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(errors, [])
        self.assertFalse(self.session.graph.is_stale(self.session.grid))


if __name__ == "__main__":
    unittest.main()

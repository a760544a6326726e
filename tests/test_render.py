import tempfile
import unittest
from pathlib import Path

from PIL import Image

from mazesolver.generator import new_maze
from mazesolver.graph import build_graph
from mazesolver.grid import CellState
from mazesolver.pathfinder import SearchMode
from mazesolver.render import DEFAULT_COLORS, MazeRenderer, frame_count
from mazesolver.sequencer import StepSequencer, solve


class MazeRendererTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.grid = new_maze(9, seed=6)
        result = solve(build_graph(self.grid), self.grid.start, self.grid.end, SearchMode.BFS)
        self.result = result
        self.sequencer = StepSequencer(result)
        self.renderer = MazeRenderer(cell_size=10)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _center(self, image: Image.Image, cell) -> tuple:
        row, col = cell
        return image.getpixel((col * 10 + 5, row * 10 + 5))

    def test_image_matches_grid_dimensions_and_colors(self) -> None:
        image = self.renderer.render(self.grid)
        self.assertEqual(image.size, (90, 90))
        self.assertEqual(image.mode, "RGB")
        self.assertEqual(self._center(image, (0, 0)), DEFAULT_COLORS[CellState.WALL])
        self.assertEqual(self._center(image, self.grid.start), DEFAULT_COLORS[CellState.START])
        self.assertEqual(self._center(image, self.grid.end), DEFAULT_COLORS[CellState.END])

    def test_frames_follow_playback(self) -> None:
        frames = list(self.renderer.frames(self.grid, self.sequencer))
        self.assertEqual(len(frames), frame_count(self.sequencer))
        second_explored = self.result.exploration_order[1]
        self.assertEqual(self._center(frames[2], second_explored), DEFAULT_COLORS[CellState.EXPLORING])
        middle = self.result.solution_path[1]
        self.assertEqual(self._center(frames[-1], middle), DEFAULT_COLORS[CellState.SOLUTION])

    def test_frames_for_solve_between_unmarked_cells(self) -> None:
        result = solve(build_graph(self.grid), (1, 3), (7, 5), SearchMode.BFS)
        sequencer = StepSequencer(result)
        frames = list(self.renderer.frames(self.grid, sequencer))
        self.assertEqual(len(frames), frame_count(sequencer))
        self.assertEqual(self._center(frames[-1], self.grid.start), DEFAULT_COLORS[CellState.START])
        self.assertEqual(self._center(frames[-1], self.grid.end), DEFAULT_COLORS[CellState.END])

    def test_save_solution_png(self) -> None:
        target = self.renderer.save_solution(self.grid, self.sequencer, Path(self.tmp.name) / "out" / "maze.png")
        self.assertTrue(target.exists())
        with Image.open(target) as image:
            middle = self.result.solution_path[1]
            self.assertEqual(self._center(image.convert("RGB"), middle), DEFAULT_COLORS[CellState.SOLUTION])

    def test_save_animation_gif(self) -> None:
        target = self.renderer.save_animation(
            self.grid, self.sequencer, Path(self.tmp.name) / "maze.gif", frame_duration_ms=20
        )
        with Image.open(target) as image:
            self.assertGreater(getattr(image, "n_frames", 1), 1)

    def test_rejects_non_positive_cell_size(self) -> None:
        with self.assertRaises(ValueError):
            MazeRenderer(cell_size=0)


if __name__ == "__main__":
    unittest.main()

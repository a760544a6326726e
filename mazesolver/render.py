"""Pillow renderer that plays solve steps back as images.

The maze core never draws; this module is one consumer of its grids and step
sequences.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

from .grid import CellState, Grid
from .sequencer import StepPhase, StepSequencer

PathLike = Union[str, Path]
Color = Tuple[int, int, int]

DEFAULT_COLORS = {
    CellState.WALL: (45, 197, 244),
    CellState.PATH: (255, 255, 134),
    CellState.START: (255, 105, 180),
    CellState.END: (123, 239, 178),
    CellState.VISITED: (255, 153, 51),
    CellState.SOLUTION: (120, 77, 255),
    CellState.EXPLORING: (0, 255, 242),
}
GRID_LINE_COLOR = (244, 67, 54)


class MazeRenderer:
    """Draw grids as RGB images, one square of ``cell_size`` pixels per cell."""

    def __init__(
        self,
        cell_size: int = 20,
        *,
        grid_lines: bool = True,
        colors: Optional[dict] = None,
        grid_line_color: Color = GRID_LINE_COLOR,
    ) -> None:
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        self.cell_size = cell_size
        self.grid_lines = grid_lines
        self.grid_line_color = grid_line_color
        merged = dict(DEFAULT_COLORS)
        merged.update(colors or {})
        self._palette = np.array([merged[state] for state in CellState], dtype=np.uint8)

    def render(self, grid: Grid) -> Image.Image:
        rgb = self._palette[grid.cells.astype(np.intp)]
        scaled = np.repeat(np.repeat(rgb, self.cell_size, axis=0), self.cell_size, axis=1)
        image = Image.fromarray(np.ascontiguousarray(scaled))
        if self.grid_lines:
            self._draw_grid_lines(image, grid.size)
        return image

    def frames(self, grid: Grid, sequencer: StepSequencer) -> Iterator[Image.Image]:
        """Yield one frame per playback tick.

        The first frame is the clean maze. Each explored cell and each
        solution cell gets its own frame; the sweep from exploring to
        visited happens in a single frame.
        """

        painted = grid.copy()
        painted.clear_overlay()
        yield self.render(painted)
        for step in sequencer.exploration_steps():
            sequencer.apply(painted, step)
            yield self.render(painted)
        for step in sequencer.settle_steps():
            sequencer.apply(painted, step)
        yield self.render(painted)
        for step in sequencer.solution_steps():
            sequencer.apply(painted, step)
            yield self.render(painted)

    def save_image(self, grid: Grid, path: PathLike) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self.render(grid).save(target)
        return target

    def save_solution(self, grid: Grid, sequencer: StepSequencer, path: PathLike) -> Path:
        """Save the final state of a playback: visited cells plus the solution."""

        phases = (StepPhase.SETTLE, StepPhase.SOLUTION)
        return self.save_image(sequencer.replay(grid, phases=phases), path)

    def save_animation(
        self,
        grid: Grid,
        sequencer: StepSequencer,
        path: PathLike,
        *,
        frame_duration_ms: int = 60,
    ) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        frames: List[Image.Image] = list(self.frames(grid, sequencer))
        frames[0].save(
            target,
            save_all=True,
            append_images=frames[1:],
            duration=frame_duration_ms,
            loop=0,
        )
        return target

    def _draw_grid_lines(self, image: Image.Image, size: int) -> None:
        draw = ImageDraw.Draw(image)
        extent = size * self.cell_size
        for index in range(size + 1):
            offset = min(index * self.cell_size, extent - 1)
            draw.line((0, offset, extent - 1, offset), fill=self.grid_line_color)
            draw.line((offset, 0, offset, extent - 1), fill=self.grid_line_color)


def frame_count(sequencer: StepSequencer) -> int:
    """Number of frames :meth:`MazeRenderer.frames` yields for ``sequencer``."""

    return 2 + len(sequencer.exploration) + len(sequencer.solution)


__all__ = ["DEFAULT_COLORS", "GRID_LINE_COLOR", "MazeRenderer", "frame_count"]

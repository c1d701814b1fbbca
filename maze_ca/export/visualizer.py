"""Rendering of search progress: PNG snapshots and GIF animations."""

from pathlib import Path
from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from PIL import Image

from ..model.cell import CellState

if TYPE_CHECKING:
    from ..model.state import MazeSnapshot


class Visualizer:
    """
    Draws the cell state layer of a maze with matplotlib.

    Each snapshot is shown as one pixel per cell in the CellState colour key,
    with the start and goal marked on top. Frames for the animation are
    rasterized straight from the Agg canvas and kept in memory until
    generate_gif() is called.
    """

    # Colour key, indexed by CellState
    COLORS = {
        CellState.UNEXPLORED: (255, 255, 255),  # White
        CellState.SEARCHING: (255, 179, 0),     # Orange
        CellState.EXPLORED: (0, 171, 255),      # Blue
        CellState.WALL: (0, 0, 0),              # Black
        CellState.SOLUTION: (255, 0, 0),        # Red
    }

    def __init__(self, grid_width: int, grid_height: int, title: str = "Maze",
                 start: Optional[Tuple[int, int]] = None,
                 goal: Optional[Tuple[int, int]] = None):
        self.width = grid_width
        self.height = grid_height
        self.title = title
        self.start = start
        self.goal = goal
        self.frames: List[Image.Image] = []
        self._palette = np.zeros((len(CellState), 3), dtype=np.uint8)
        for state, rgb in self.COLORS.items():
            self._palette[state] = rgb

    def state_to_rgb(self, states: np.ndarray) -> np.ndarray:
        """Map a CellState layer to an (height, width, 3) uint8 image."""
        return self._palette[states]

    def _draw_endpoints(self, ax) -> None:
        if self.start is not None:
            ax.plot(*self.start, marker='o', color='limegreen',
                    markeredgecolor='black', markersize=7, label='Start')
        if self.goal is not None:
            ax.plot(*self.goal, marker='*', color='magenta',
                    markeredgecolor='black', markersize=10, label='Goal')

    def _create_figure(self, state: "MazeSnapshot") -> plt.Figure:
        # Keep the long side at 8 inches whatever the maze proportions
        scale = 8 / max(self.width, self.height)
        fig, ax = plt.subplots(figsize=(max(4, self.width * scale),
                                        max(4, self.height * scale) + 1))

        # Image coordinates: (0, 0) at the top-left, y grows downward
        ax.imshow(self.state_to_rgb(state.states), origin='upper',
                  interpolation='nearest',
                  extent=(-0.5, self.width - 0.5, self.height - 0.5, -0.5))
        self._draw_endpoints(ax)

        status = "path found" if state.metrics.get('path_found') else "searching"
        ax.set_title(f"{self.title}\nUpdates: {state.step}  "
                     f"Frontier: {int(state.metrics.get('frontier', 0))}  ({status})",
                     fontsize=10)
        ax.set_xticks([])
        ax.set_yticks([])

        handles = [Patch(facecolor=np.array(rgb) / 255, edgecolor='gray',
                         label=s.name.capitalize())
                   for s, rgb in self.COLORS.items()]
        ax.legend(handles=handles, loc='upper center', fontsize=8,
                  bbox_to_anchor=(0.5, -0.02), ncol=len(handles), frameon=False)

        fig.tight_layout()
        return fig

    def render(self, state: "MazeSnapshot", dpi: int = 80) -> Image.Image:
        """Rasterize one snapshot to an RGB image."""
        fig = self._create_figure(state)
        try:
            fig.set_dpi(dpi)
            fig.canvas.draw()
            rgba = np.asarray(fig.canvas.buffer_rgba())
            return Image.fromarray(rgba[..., :3].copy())
        finally:
            plt.close(fig)

    def buffer_frame(self, state: "MazeSnapshot") -> None:
        """Queue a frame for the animation."""
        self.frames.append(self.render(state))

    def save_snapshot(self, state: "MazeSnapshot", output_path: Path) -> Path:
        """Save one snapshot as a PNG file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        try:
            fig.savefig(output_path, dpi=150, bbox_inches='tight')
        finally:
            plt.close(fig)
        return output_path

    def generate_gif(self, output_path: Path, fps: int = 10) -> Optional[Path]:
        """Write the queued frames as a looping GIF. Nothing is written without frames."""
        if not self.frames:
            return None

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        first, *rest = self.frames
        first.save(output_path, save_all=True, append_images=rest,
                   duration=max(1, round(1000 / fps)), loop=0)
        return output_path

    def clear_frames(self) -> None:
        self.frames.clear()

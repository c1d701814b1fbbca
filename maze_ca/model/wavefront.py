"""Synchronous breadth-first (wavefront) update strategy."""

import numpy as np
from scipy.ndimage import binary_dilation, minimum_filter

from .cell import CellState
from .grid import MazeGrid, WallMask


class WavefrontMaze(MazeGrid):
    """
    Maze updated as a full cellular automaton.

    Every step has two phases over all cells: compute the next state from
    the current snapshot, then commit it. Each step advances the search
    front by one hop, so distances are BFS hop counts from the goal.

    Two execution modes give identical layers:
    - cellwise:   literal per-cell loop over Cell.compute_next/commit
    - vectorized: the same rule applied to whole layers with scipy.ndimage
    """

    name = "bfs"

    # von Neumann neighborhood without the center cell
    NEIGHBORHOOD = np.array([
        [False, True, False],
        [True, False, True],
        [False, True, False]
    ])

    def __init__(self, walls: WallMask, start, goal, vectorized: bool = True):
        super().__init__(walls, start, goal)
        self.vectorized = vectorized

    def step(self) -> None:
        if self.vectorized:
            self._compute_next_layers()
            np.copyto(self.state, self.next_state)
        else:
            for row in self.cells:
                for cell in row:
                    cell.compute_next()
            for row in self.cells:
                for cell in row:
                    cell.commit()

    def _compute_next_layers(self) -> None:
        """Whole-layer version of Cell.compute_next."""
        current = self.state
        searching = current == CellState.SEARCHING
        explored = current == CellState.EXPLORED

        # Unexplored cells next to a searching cell start searching
        reached = binary_dilation(searching, structure=self.NEIGHBORHOOD)
        newly_searching = (current == CellState.UNEXPLORED) & reached

        # No distance can reach the cell count, so it marks "no explored neighbor"
        unreached = self.size
        explored_distance = np.where(explored, self.distance, unreached)
        nearest = minimum_filter(explored_distance, footprint=self.NEIGHBORHOOD,
                                 mode='constant', cval=unreached)
        nearest = nearest[searching]
        self.distance[searching] = np.where(nearest >= unreached, 0, nearest + 1)

        np.copyto(self.next_state, current)
        self.next_state[newly_searching] = CellState.SEARCHING
        self.next_state[searching] = CellState.EXPLORED

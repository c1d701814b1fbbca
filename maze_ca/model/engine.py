"""Solver engine: drives a maze automaton until it terminates."""

import logging
from typing import Callable, Dict, Optional, Tuple, Type, TYPE_CHECKING, Any

from .cell import CellState
from .grid import MazeGrid, WallMask
from .priority import PriorityMaze
from .state import MazeSnapshot, SolveResult
from .wavefront import WavefrontMaze

if TYPE_CHECKING:
    from ..config import SolverConfig

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, Type[MazeGrid]] = {
    'bfs': WavefrontMaze,
    'wavefront': WavefrontMaze,
    'mystery': PriorityMaze,
    'priority': PriorityMaze,
}


def create_maze(algorithm: str, walls: WallMask,
                start: Tuple[int, int], goal: Tuple[int, int],
                vectorized: bool = True) -> MazeGrid:
    """Build the maze subclass registered under the given algorithm name."""
    maze_cls = ALGORITHMS.get(algorithm.lower())
    if maze_cls is None:
        raise ValueError(
            f"Unknown algorithm: {algorithm} "
            f"(choose from {', '.join(sorted(ALGORITHMS))})")
    if maze_cls is WavefrontMaze:
        return WavefrontMaze(walls, start, goal, vectorized=vectorized)
    return maze_cls(walls, start, goal)


class SolverEngine:
    """
    Orchestrates the discrete-time solving loop.

    Steps the maze until the start cell is explored, the step budget runs
    out, or the strategy has nothing left to explore. The budget defaults
    to the number of cells in the grid.
    """

    def __init__(self, walls: WallMask,
                 start: Tuple[int, int],
                 goal: Tuple[int, int],
                 algorithm: str = 'bfs',
                 max_steps: Optional[int] = None,
                 vectorized: bool = True):
        self.grid = create_maze(algorithm, walls, start, goal, vectorized)
        self.algorithm = self.grid.name
        self.max_steps = self.grid.size if max_steps is None else max_steps
        self.current_step = 0
        self.labels = None

    @classmethod
    def from_config(cls, walls: WallMask,
                    start: Tuple[int, int],
                    goal: Tuple[int, int],
                    config: "SolverConfig") -> "SolverEngine":
        return cls(walls, start, goal,
                   algorithm=config.algorithm,
                   max_steps=config.max_steps,
                   vectorized=config.vectorized)

    def step(self) -> MazeSnapshot:
        """Execute one update of the maze and return its snapshot."""
        self.grid.step()
        self.current_step += 1
        return self.snapshot()

    def snapshot(self) -> MazeSnapshot:
        counts = self.grid.count_states()
        metrics = {state.name.lower(): count for state, count in counts.items()}
        metrics['frontier'] = counts[CellState.SEARCHING]
        metrics['path_found'] = self.grid.path_found()
        return MazeSnapshot(
            step=self.current_step,
            states=self.grid.state_layer(),
            metrics=metrics
        )

    def budget_exhausted(self) -> bool:
        return self.current_step >= self.max_steps

    def is_finished(self) -> bool:
        """Check if solving should terminate."""
        return (self.grid.path_found() or
                self.budget_exhausted() or
                self.grid.is_exhausted())

    def run(self, on_step: Optional[Callable[[MazeSnapshot], Any]] = None) -> SolveResult:
        """
        Step until finished, then extract the solution if there is one.

        An unreachable start is reported through SolveResult.found rather
        than raised.
        """
        while not self.is_finished():
            state = self.step()
            if on_step is not None:
                on_step(state)
        return self.result()

    def result(self) -> SolveResult:
        if not self.grid.path_found():
            reason = ("step budget exhausted" if self.budget_exhausted()
                      else "nothing left to explore")
            logger.info("No path found after %d steps (%s)",
                        self.current_step, reason)
            return SolveResult(algorithm=self.algorithm, found=False,
                               steps=self.current_step)

        self.labels = self.grid.solution_labels()
        logger.info("Path found after %d steps, distance %d",
                    self.current_step, self.grid.start_cell.distance)
        return SolveResult(
            algorithm=self.algorithm,
            found=True,
            steps=self.current_step,
            distance=self.grid.start_cell.distance,
            labels=self.labels,
            path=list(self.grid.solution_path)
        )

    def get_summary(self) -> Dict:
        """Get summary statistics for the run."""
        found = self.grid.path_found()
        return {
            'algorithm': self.algorithm,
            'total_steps': self.current_step,
            'max_steps': self.max_steps,
            'path_found': found,
            'distance': self.grid.start_cell.distance if found else None,
            'path_length': len(self.grid.solution_path),
        }

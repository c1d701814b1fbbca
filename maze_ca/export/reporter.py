"""Summary report generation for the maze solver."""

from typing import Dict, List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import MazeSnapshot, SolveResult


class Reporter:
    """Tracks search progress and formats the final text report."""

    def __init__(self, source: str, algorithm: str,
                 start: tuple, goal: tuple):
        self.source = source
        self.algorithm = algorithm
        self.start = start
        self.goal = goal
        self.peak_frontier = 0
        self.peak_frontier_step = 0

    def update(self, state: "MazeSnapshot") -> None:
        """Accumulate metrics per step."""
        frontier = int(state.metrics.get('frontier', 0))
        if frontier > self.peak_frontier:
            self.peak_frontier = frontier
            self.peak_frontier_step = state.step

    def generate_summary(self, result: "SolveResult",
                         outputs: Dict[str, Optional[Path]]) -> str:
        """Returns formatted text report. A None output means disabled."""
        lines: List[str] = [
            "",
            "=" * 80,
            "                         MAZE CA SOLVER REPORT",
            "=" * 80,
            f"Maze:        {self.source}",
            f"Algorithm:   {self.algorithm}",
            f"Start:       {self.start}",
            f"Goal:        {self.goal}",
            "",
            "SEARCH METRICS",
            "-" * 40,
            f"Updates:               {result.steps}",
            f"Peak Frontier:         {self.peak_frontier} cells (update {self.peak_frontier_step})",
        ]

        if result.found:
            lines += [
                f"Start Distance:        {result.distance} hops",
                f"Solution Cells:        {result.path_length}",
            ]
        else:
            lines.append("Result:                NO PATH FOUND")

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]
        for label, path in outputs.items():
            shown = str(path) if path is not None else "(disabled)"
            lines.append(f"{label + ':':<16}{shown}")

        lines.append("=" * 80)

        return "\n".join(lines)

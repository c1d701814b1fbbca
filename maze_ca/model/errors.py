"""Exceptions raised by the maze model."""

from typing import Tuple


class MazeError(Exception):
    """Base class for maze construction and solving errors."""


class MalformedMaskError(MazeError, ValueError):
    """Wall mask is empty, not two-dimensional, or has ragged rows."""


class InvalidCoordinateError(MazeError, ValueError):
    """Start or goal lies outside the grid or on a wall cell."""

    def __init__(self, role: str, position: Tuple[int, int], reason: str):
        self.role = role
        self.position = position
        self.reason = reason
        super().__init__(f"Invalid {role} {position}: {reason}")


class NoPathFoundError(MazeError):
    """The start cell was never reached, so there is no solution to extract."""


class SearchExhaustedError(MazeError):
    """The priority work list is empty; nothing is left to explore."""

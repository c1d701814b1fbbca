import numpy as np
import pytest

from maze_ca.model import (
    CellState,
    InvalidCoordinateError,
    Label,
    MalformedMaskError,
    MazeGrid,
    NoPathFoundError,
    WavefrontMaze,
    coerce_wall_mask,
)


def test_initial_states(maze_from_text):
    walls, start, goal = maze_from_text("""
        S.#
        ..#
        ..G
    """)
    grid = WavefrontMaze(walls, start, goal)
    states = grid.state_layer()

    assert states[2, 2] == CellState.SEARCHING
    assert states[0, 2] == CellState.WALL
    assert states[1, 2] == CellState.WALL
    assert np.count_nonzero(states == CellState.UNEXPLORED) == 6
    assert grid.width == 3 and grid.height == 3 and grid.size == 9
    assert not grid.path_found()


def test_start_on_wall_is_rejected(maze_from_text):
    walls, _, goal = maze_from_text("""
        #..
        ...
        ..G
    """)
    with pytest.raises(InvalidCoordinateError) as excinfo:
        WavefrontMaze(walls, (0, 0), goal)
    assert excinfo.value.role == "start"
    assert excinfo.value.position == (0, 0)


@pytest.mark.parametrize("goal", [(3, 0), (0, 3), (-1, 0)])
def test_goal_out_of_bounds_is_rejected(goal):
    walls = np.zeros((3, 3), dtype=bool)
    with pytest.raises(InvalidCoordinateError) as excinfo:
        WavefrontMaze(walls, (0, 0), goal)
    assert excinfo.value.role == "goal"


def test_non_pair_coordinate_is_rejected():
    walls = np.zeros((3, 3), dtype=bool)
    with pytest.raises(InvalidCoordinateError):
        WavefrontMaze(walls, (0, 0, 0), (1, 1))


def test_ragged_mask_is_rejected():
    with pytest.raises(MalformedMaskError):
        WavefrontMaze([[False, False], [False]], (0, 0), (1, 0))


@pytest.mark.parametrize("walls", [
    [],
    np.zeros((0, 4), dtype=bool),
    np.zeros((2, 2, 2), dtype=bool),
])
def test_empty_or_non_2d_mask_is_rejected(walls):
    with pytest.raises(MalformedMaskError):
        coerce_wall_mask(walls)


def test_malformed_mask_is_a_value_error():
    with pytest.raises(ValueError):
        coerce_wall_mask([[0, 1], [0]])


def test_integer_mask_is_read_as_label_grid():
    labels = np.array([
        [Label.EMPTY, Label.WALL],
        [Label.SOLUTION, Label.EMPTY],
    ], dtype=np.uint8)
    mask = coerce_wall_mask(labels)
    assert mask.tolist() == [[False, True], [False, False]]


def test_nested_list_mask_is_accepted():
    grid = WavefrontMaze([[False, True], [False, False]], (0, 0), (1, 1))
    assert grid.is_wall(1, 0)
    assert not grid.is_wall(0, 1)


def test_state_layer_is_read_only_copy():
    grid = WavefrontMaze(np.zeros((2, 2), dtype=bool), (0, 0), (1, 1))
    layer = grid.state_layer()
    with pytest.raises(ValueError):
        layer[0, 0] = CellState.WALL
    grid.step()
    assert layer[1, 1] == CellState.SEARCHING


def test_labels_refused_before_path_found():
    grid = WavefrontMaze(np.zeros((3, 3), dtype=bool), (0, 0), (2, 2))
    with pytest.raises(NoPathFoundError):
        grid.solution_labels()


def test_base_grid_has_no_update_rule():
    grid = MazeGrid(np.zeros((2, 2), dtype=bool), (0, 0), (1, 1))
    with pytest.raises(NotImplementedError):
        grid.step()
    assert not grid.is_exhausted()


def test_start_equal_to_goal_marks_nothing():
    grid = WavefrontMaze(np.zeros((2, 2), dtype=bool), (1, 1), (1, 1))
    grid.step()
    assert grid.path_found()
    labels = grid.solution_labels()
    assert not np.any(labels == Label.SOLUTION)


def test_count_states_covers_every_cell(looped_maze):
    walls, start, goal = looped_maze
    grid = WavefrontMaze(walls, start, goal)
    for _ in range(5):
        grid.step()
    counts = grid.count_states()
    assert sum(counts.values()) == grid.size
    assert counts[CellState.WALL] == int(walls.sum())


def test_distance_layer_hides_unexplored_cells():
    grid = WavefrontMaze(np.zeros((1, 4), dtype=bool), (3, 0), (0, 0))
    grid.step()
    grid.step()
    assert grid.distance_layer().tolist() == [[0, 1, -1, -1]]


def test_to_text_shows_states(maze_from_text):
    walls, start, goal = maze_from_text("""
        S#G
        ...
    """)
    grid = WavefrontMaze(walls, start, goal)
    text = grid.to_text()
    assert "[XX]" in text
    assert "~??~" in text
    grid.step()
    assert " 0  " in grid.to_text()


@pytest.mark.parametrize("start", [(1.7, 2), (1.0, 2), ("1", 2)])
def test_non_integral_coordinate_is_rejected(start):
    walls = np.zeros((3, 3), dtype=bool)
    with pytest.raises(InvalidCoordinateError) as excinfo:
        WavefrontMaze(walls, start, (0, 0))
    assert excinfo.value.role == "start"


def test_numpy_integer_coordinates_are_accepted():
    walls = np.zeros((3, 3), dtype=bool)
    grid = WavefrontMaze(walls, (np.int64(2), np.int32(1)), (0, 0))
    assert grid.start == (2, 1)

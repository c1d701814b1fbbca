from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from maze_ca.config import BlurSpec
from maze_ca.export.image_io import (
    binarize,
    blur,
    intensity,
    labels_to_image,
    load_wall_mask,
    save_solution_image,
    solved_path,
)
from maze_ca.model import Label


def solid(value, width=3, height=3):
    return np.full((height, width, 3), value, dtype=np.uint8)


def test_intensity_scale():
    pixels = np.array([[[0, 0, 0], [255, 255, 255], [127, 127, 127], [126, 126, 126]]],
                      dtype=np.uint8)
    assert intensity(pixels).tolist() == [[0, 255, 127, 126]]


def test_binarize_threshold_is_exclusive():
    pixels = np.array([[[127, 127, 127], [126, 126, 126]]], dtype=np.uint8)
    assert binarize(pixels, threshold=127).tolist() == [[False, True]]


def test_colored_pixels_use_vector_length():
    # Pure red: sqrt(255^2) * 255 / 441 = 147
    pixels = np.array([[[255, 0, 0]]], dtype=np.uint8)
    assert intensity(pixels)[0, 0] == 147
    assert not binarize(pixels)[0, 0]


def test_load_wall_mask(tmp_path):
    rgb = solid(255, width=4, height=2)
    rgb[0, 1] = 0
    rgb[1, 3] = (20, 20, 20)
    path = tmp_path / "maze.png"
    Image.fromarray(rgb).save(path)

    mask = load_wall_mask(path)
    assert mask.shape == (2, 4)
    assert mask.tolist() == [[False, True, False, False],
                             [False, False, False, True]]


def test_grayscale_image_is_converted(tmp_path):
    path = tmp_path / "maze.png"
    Image.fromarray(np.array([[0, 255]], dtype=np.uint8)).save(path)
    assert load_wall_mask(path).tolist() == [[True, False]]


@pytest.mark.parametrize("kind", ["mean", "median"])
def test_blur_removes_single_dark_speck(kind):
    rgb = solid(255, width=5, height=5)
    rgb[2, 2] = 0
    assert binarize(rgb)[2, 2]
    smoothed = blur(rgb, kind, 3)
    assert not binarize(smoothed).any()


def test_load_wall_mask_with_blur(tmp_path):
    rgb = solid(255, width=5, height=5)
    rgb[2, 2] = 0
    path = tmp_path / "speck.png"
    Image.fromarray(rgb).save(path)
    mask = load_wall_mask(path, blur_spec=BlurSpec(kind="median", window=3))
    assert not mask.any()


def test_unknown_blur():
    with pytest.raises(ValueError):
        blur(solid(255), "gaussian", 3)


@pytest.mark.parametrize("source,expected", [
    ("mazes/westworld.jpg", "mazes/westworld_solved.jpg"),
    ("prim.maze.png", "prim.maze_solved.png"),
])
def test_solved_path(source, expected):
    assert solved_path(Path(source)) == Path(expected)


def test_labels_to_image_colors():
    labels = np.array([[Label.EMPTY, Label.WALL, Label.SOLUTION]], dtype=np.uint8)
    img = labels_to_image(labels)
    assert img.size == (3, 1)
    assert [img.getpixel((x, 0)) for x in range(3)] == [
        (255, 255, 255), (0, 0, 0), (255, 0, 0)]


def test_labels_to_image_rejects_unknown_values():
    with pytest.raises(ValueError):
        labels_to_image(np.array([[7]], dtype=np.uint8))


def test_save_solution_image(tmp_path):
    labels = np.array([[0, 2], [1, 2]], dtype=np.uint8)
    out = save_solution_image(labels, tmp_path / "out" / "maze_solved.png")
    assert out.exists()
    with Image.open(out) as img:
        assert img.getpixel((1, 0)) == (255, 0, 0)
        assert img.getpixel((0, 1)) == (0, 0, 0)

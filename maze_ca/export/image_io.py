"""Image decoding, binarization and solution image encoding."""

from pathlib import Path
from typing import Optional, TYPE_CHECKING
import numpy as np
from PIL import Image
from scipy.ndimage import median_filter, uniform_filter

from ..model.state import Label

if TYPE_CHECKING:
    from ..config import BlurSpec

# RGB colors of the solution image, by label value
LABEL_COLORS = np.array([
    [255, 255, 255],  # empty: white
    [0, 0, 0],        # wall: black
    [255, 0, 0],      # solution: red
], dtype=np.uint8)


def load_image(path: Path) -> np.ndarray:
    """Read an image file as an (height, width, 3) uint8 RGB array."""
    with Image.open(path) as img:
        return np.asarray(img.convert('RGB'), dtype=np.uint8)


def intensity(rgb: np.ndarray) -> np.ndarray:
    """
    Pixel brightness on a 0-255 scale.

    Formula: sqrt(r^2 + g^2 + b^2) * 255 / 441, truncated to an integer
    (441 is the length of the (255, 255, 255) vector).
    """
    channels = rgb.astype(np.float64)
    magnitude = np.sqrt(np.sum(channels ** 2, axis=-1))
    return (magnitude * 255 / 441).astype(np.int32)


def binarize(rgb: np.ndarray, threshold: int = 127) -> np.ndarray:
    """Wall mask of an RGB image: True where the pixel is darker than threshold."""
    return intensity(rgb) < threshold


def blur(rgb: np.ndarray, kind: str, window: int) -> np.ndarray:
    """Smooth each channel with a square mean or median window."""
    size = (window, window, 1)
    if kind == 'mean':
        smoothed = uniform_filter(rgb.astype(np.float64), size=size, mode='nearest')
        return np.clip(np.rint(smoothed), 0, 255).astype(np.uint8)
    elif kind == 'median':
        return median_filter(rgb, size=size, mode='nearest')
    raise ValueError(f"Unknown blur type: {kind}")


def load_wall_mask(path: Path, threshold: int = 127,
                   blur_spec: Optional["BlurSpec"] = None) -> np.ndarray:
    """Decode a maze image into a boolean wall mask (True = wall)."""
    rgb = load_image(path)
    if blur_spec is not None:
        rgb = blur(rgb, blur_spec.kind, blur_spec.window)
    return binarize(rgb, threshold)


def solved_path(path: Path) -> Path:
    """Output path for a solved maze: <stem>_solved<suffix> beside the input."""
    path = Path(path)
    return path.with_name(f"{path.stem}_solved{path.suffix}")


def labels_to_image(labels: np.ndarray) -> Image.Image:
    """Render a label grid as an RGB image, one pixel per cell."""
    labels = np.asarray(labels)
    if labels.max(initial=0) > Label.SOLUTION:
        raise ValueError(f"Unexpected label value {int(labels.max())}")
    return Image.fromarray(LABEL_COLORS[labels])


def save_solution_image(labels: np.ndarray, output_path: Path) -> Path:
    """Save the label grid as an image; the format follows the file suffix."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    labels_to_image(labels).save(output_path)
    return output_path

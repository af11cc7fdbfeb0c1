"""
Pure utility functions for marking logic.

These functions have no side effects and can be tested in isolation.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from .state import Mark
from .transform import points_to_screen_space


def marks_to_array(marks: Sequence[Mark]) -> np.ndarray:
    """
    Stack mark positions into an array.

    Args:
        marks: Marks to convert

    Returns:
        (N, 2) float array of image-space (x, y)
    """
    if not marks:
        return np.zeros((0, 2), dtype=float)
    return np.array([m.position for m in marks], dtype=float)


def find_mark_at(
    marks: Sequence[Mark],
    screen_pos: Sequence[float],
    zoom: float,
    radius: float,
) -> Optional[Mark]:
    """
    Find the mark drawn under a screen position.

    Marks are drawn in insertion order, so on overlap the last one wins.

    Args:
        marks: Marks in drawing order
        screen_pos: (x, y) relative to the rendered image's top-left corner
        zoom: Current zoom factor
        radius: Hit radius in screen pixels (marks keep their size on zoom)

    Returns:
        The topmost hit mark, or None
    """
    if not marks:
        return None
    screen = points_to_screen_space(marks_to_array(marks), zoom)
    distances = np.hypot(screen[:, 0] - screen_pos[0], screen[:, 1] - screen_pos[1])
    hits = np.nonzero(distances <= radius)[0]
    if len(hits) == 0:
        return None
    return marks[int(hits[-1])]


def is_inside_image(point: Sequence[float], image_size: Tuple[int, int]) -> bool:
    """Whether an image-space point lies within (width, height)."""
    width, height = image_size
    x, y = point
    return 0 <= x < width and 0 <= y < height


def validate_image(image: np.ndarray) -> None:
    """
    Validate that image has correct format.

    Raises:
        ValueError: If image is invalid
    """
    if image is None:
        raise ValueError("Image is None")

    if not isinstance(image, np.ndarray):
        raise ValueError(f"Image must be numpy array, got {type(image)}")

    if image.ndim != 3:
        raise ValueError(f"Image must be 3D (H, W, C), got shape {image.shape}")

    if image.shape[2] != 3:
        raise ValueError(f"Image must have 3 channels, got {image.shape[2]}")

    if image.dtype != np.uint8:
        raise ValueError(f"Invalid image dtype: {image.dtype}")

"""
Coordinate transform between viewport pixels and image pixels.

Image-space coordinates are expressed in the image's native resolution and
never change when the zoom factor does; screen-space positions are derived
from them each time the image is rendered.
"""

import logging
from typing import Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_ZOOM_STEP = 0.1
MIN_ZOOM = 0.2

Point = Tuple[float, float]


def _check_zoom(zoom: float):
    if not zoom > 0:
        raise ValueError(f"Zoom factor must be positive, got {zoom}")


def to_image_space(
    pointer_pos: Sequence[float],
    image_origin: Sequence[float],
    zoom: float,
) -> Point:
    """
    Convert a pointer position into image-space coordinates.

    Args:
        pointer_pos: (x, y) of the pointer in viewport pixels
        image_origin: (x, y) of the image's top-left corner in viewport pixels
        zoom: Current zoom factor

    Returns:
        (x, y) in native image pixels
    """
    _check_zoom(zoom)
    pointer = np.asarray(pointer_pos, dtype=float)
    origin = np.asarray(image_origin, dtype=float)
    pos = (pointer - origin) / zoom
    return (float(pos[0]), float(pos[1]))


def to_screen_space(image_coord: Sequence[float], zoom: float) -> Point:
    """Scale an image-space coordinate to the rendered size."""
    _check_zoom(zoom)
    pos = np.asarray(image_coord, dtype=float) * zoom
    return (float(pos[0]), float(pos[1]))


def points_to_screen_space(points: np.ndarray, zoom: float) -> np.ndarray:
    """Vectorised :func:`to_screen_space` for an (N, 2) array."""
    _check_zoom(zoom)
    return np.asarray(points, dtype=float).reshape(-1, 2) * zoom


def scaled_size(width: int, height: int, zoom: float) -> Tuple[int, int]:
    """Rendered (width, height) of an image at ``zoom``, at least 1x1."""
    _check_zoom(zoom)
    return (max(1, int(round(width * zoom))), max(1, int(round(height * zoom))))


def zoom_in(zoom: float, step: float = DEFAULT_ZOOM_STEP) -> float:
    return round(zoom + step, 6)


def zoom_out(
    zoom: float, step: float = DEFAULT_ZOOM_STEP, minimum: float = MIN_ZOOM
) -> float:
    """Decrease ``zoom`` by ``step``, never going below ``minimum``."""
    return round(max(minimum, zoom - step), 6)


class ZoomState:
    """Current zoom factor with its step and floor."""

    def __init__(
        self,
        initial: float = 1.0,
        step: float = DEFAULT_ZOOM_STEP,
        minimum: float = MIN_ZOOM,
    ):
        _check_zoom(initial)
        _check_zoom(minimum)
        if step <= 0:
            raise ValueError(f"Zoom step must be positive, got {step}")
        if initial < minimum:
            raise ValueError(
                f"Initial zoom {initial} is below the minimum zoom {minimum}"
            )
        self.initial = initial
        self.step = step
        self.minimum = minimum
        self.value = initial

    def zoom_in(self) -> float:
        self.value = zoom_in(self.value, self.step)
        logger.debug(f"Zoom set to {self.value}")
        return self.value

    def zoom_out(self) -> float:
        self.value = zoom_out(self.value, self.step, self.minimum)
        logger.debug(f"Zoom set to {self.value}")
        return self.value

    def reset(self) -> float:
        self.value = self.initial
        return self.value

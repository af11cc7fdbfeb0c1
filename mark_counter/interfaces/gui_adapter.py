"""
GUI adapter for marking session.

Bridges the MarkingSession with GUI components and renders the zoomed image
with its mark overlay.
"""

from typing import Callable, Optional, Sequence, Tuple

import cv2
import numpy as np
from matplotlib.colors import to_rgb

from ..core.marking import EventType, MarkingEvent, MarkingSession, Section
from ..core.marking.transform import points_to_screen_space, scaled_size
from ..core.marking.utils import marks_to_array

BORDER_COLOR = (255, 255, 255)
SELECTED_COLOR = (255, 165, 0)

REDRAW_EVENTS = (
    EventType.IMAGE_LOADED,
    EventType.ZOOM_CHANGED,
    EventType.MARK_ADDED,
    EventType.MARK_UPDATED,
    EventType.MARK_REMOVED,
    EventType.MARKS_CLEARED,
    EventType.SELECTION_CHANGED,
)


def color_to_rgb(color: str) -> Tuple[int, int, int]:
    """Resolve a color key (any matplotlib/CSS color name or hex) to 0-255 RGB."""
    r, g, b = to_rgb(color)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def draw_mark(
    image: np.ndarray,
    center: Sequence[float],
    color: Tuple[int, int, int],
    section: Section,
    radius: int = 7,
    border: int = 2,
    selected: bool = False,
) -> np.ndarray:
    """
    Draw a single mark in place.

    Whole marks are filled discs. Half marks fill the half facing the
    split: the left half for a vertical split, the top half for a
    horizontal one.

    Args:
        image: RGB image to draw on
        center: (x, y) in screen pixels
        color: Fill color (RGB)
        section: Section of the mark
        radius: Disc radius in pixels
        border: Border width in pixels
        selected: Draw a highlight ring around the mark

    Returns:
        The same image
    """
    center = (int(round(center[0])), int(round(center[1])))
    if section is Section.WHOLE:
        cv2.circle(image, center, radius, color, -1, lineType=cv2.LINE_AA)
    else:
        start = 90 if section is Section.HALF_VERTICAL else 180
        cv2.ellipse(
            image,
            center,
            (radius, radius),
            0,
            start,
            start + 180,
            color,
            -1,
            lineType=cv2.LINE_AA,
        )
    cv2.circle(image, center, radius, BORDER_COLOR, border, lineType=cv2.LINE_AA)
    if selected:
        cv2.circle(
            image, center, radius + border + 2, SELECTED_COLOR, border, cv2.LINE_AA
        )
    return image


class GUIMarkingAdapter:
    """
    Adapter connecting MarkingSession to a GUI.

    Provides a compatibility layer that:
    - Translates session events to a redraw callback
    - Renders the zoomed image with all marks drawn on top
    """

    def __init__(
        self,
        session: MarkingSession,
        update_image_callback: Optional[Callable] = None,
        mark_radius: int = 7,
        border: int = 2,
    ):
        """
        Initialize adapter.

        Args:
            session: Core marking session
            update_image_callback: Callback to update GUI image
            mark_radius: Radius for drawing marks
            border: Border width of drawn marks
        """
        self.session = session
        self.update_image_callback = update_image_callback
        self.mark_radius = mark_radius
        self.border = border

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        for event_type in REDRAW_EVENTS:
            self.session.events.on(event_type, self._on_redraw_needed)

    def _on_redraw_needed(self, event: MarkingEvent):
        if self.update_image_callback:
            self.update_image_callback()

    def click(self, x: float, y: float):
        """Forward a click given in rendered-image pixels."""
        return self.session.handle_pointer((x, y), (0, 0))

    def get_visualization(self) -> Optional[np.ndarray]:
        """
        Get visualization for display.

        Returns:
            RGB image at the current zoom with marks drawn, or None when no
            image is loaded
        """
        viz_data = self.session.get_visualization_data()

        image = viz_data["image"]
        if image is None:
            return None

        zoom = viz_data["zoom"]
        height, width = image.shape[:2]
        size = scaled_size(width, height, zoom)
        interpolation = cv2.INTER_AREA if zoom < 1 else cv2.INTER_LINEAR
        vis = cv2.resize(image, size, interpolation=interpolation)

        marks = viz_data["marks"]
        centers = points_to_screen_space(marks_to_array(marks), zoom)
        for mark, center in zip(marks, centers):
            draw_mark(
                vis,
                center,
                color_to_rgb(mark.color),
                mark.section,
                radius=self.mark_radius,
                border=self.border,
                selected=mark.id == viz_data["selected_id"],
            )
        return vis

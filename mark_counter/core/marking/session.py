"""
Marking session management.

Core logic for marking a single image. UI-agnostic - can be used with any
interface (GUI, Web, CLI).
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from ..errors import UnknownColor
from .events import EventEmitter, EventType, MarkingEvent
from .selection import SelectionController
from .state import ColorRegistry, Mark, ToolAttributes
from .store import MarkStore
from .transform import ZoomState, scaled_size, to_image_space
from .utils import find_mark_at, is_inside_image, validate_image

logger = logging.getLogger(__name__)


class MarkingSession:
    """
    Manages the state and logic of a marking session.

    This class handles:
    - The loaded image and the zoom factor
    - Routing pointer clicks to mark creation or selection
    - Keeping marks consistent with the color registry
    - Building and exporting the count report

    The session is UI-agnostic - it emits events that UI components
    can listen to, rather than directly manipulating UI elements.
    """

    def __init__(
        self,
        registry: ColorRegistry,
        zoom: Optional[ZoomState] = None,
        mark_radius: float = 7,
        default_color: Optional[str] = None,
    ):
        """
        Initialize marking session.

        Args:
            registry: Color definitions marks may use
            zoom: Zoom state, 1.0 with the standard step when omitted
            mark_radius: Radius of a drawn mark in screen pixels, used for hit tests
            default_color: Color of new marks, the first registered one by default
        """
        if len(registry) == 0:
            raise ValueError("Color registry is empty")
        self.registry = registry
        self.zoom = zoom if zoom is not None else ZoomState()
        self.mark_radius = mark_radius

        if default_color is None:
            default_color = registry.colors[0]
        self._check_color(default_color)

        # Event emitter for UI notifications
        self.events = EventEmitter()

        self.store = MarkStore()
        self.selection = SelectionController(
            self.store, ToolAttributes(color=default_color), self.events
        )

        self._image: Optional[np.ndarray] = None
        self.image_path: Optional[str] = None

    @classmethod
    def from_config(cls, cfg) -> "MarkingSession":
        registry = ColorRegistry.from_pairs(cfg.colors)
        zoom = ZoomState(
            initial=float(cfg.zoom.initial),
            step=float(cfg.zoom.step),
            minimum=float(cfg.zoom.minimum),
        )
        return cls(registry, zoom=zoom, mark_radius=float(cfg.marks.radius))

    @property
    def image(self) -> Optional[np.ndarray]:
        return self._image

    @property
    def image_size(self) -> Optional[Tuple[int, int]]:
        """Native (width, height) of the loaded image."""
        if self._image is None:
            return None
        return (self._image.shape[1], self._image.shape[0])

    @property
    def display_size(self) -> Optional[Tuple[int, int]]:
        """(width, height) of the image at the current zoom."""
        if self._image is None:
            return None
        width, height = self.image_size
        return scaled_size(width, height, self.zoom.value)

    @property
    def marks(self) -> Tuple[Mark, ...]:
        return self.store.marks

    def load_image(self, image: np.ndarray, image_path: Optional[str] = None):
        """
        Load a new image for marking.

        Marks placed on a previous image are dropped and the zoom is reset.

        Args:
            image: RGB image as numpy array
            image_path: Optional path to the image file
        """
        validate_image(image)
        self._image = image
        self.image_path = image_path
        self.selection.reset()
        if len(self.store):
            self.selection.clear_all()
        self.zoom.reset()

        height, width = image.shape[:2]
        logger.info(f"Loaded image {image_path or ''} {width}x{height}")
        self.events.emit(
            MarkingEvent(
                EventType.IMAGE_LOADED, {"image_shape": image.shape, "path": image_path}
            )
        )

    # Zoom

    def zoom_in(self) -> float:
        value = self.zoom.zoom_in()
        self.events.emit(MarkingEvent(EventType.ZOOM_CHANGED, {"zoom": value}))
        return value

    def zoom_out(self) -> float:
        previous = self.zoom.value
        value = self.zoom.zoom_out()
        if value != previous:
            self.events.emit(MarkingEvent(EventType.ZOOM_CHANGED, {"zoom": value}))
        return value

    # Pointer input

    def mark_at(self, screen_pos: Sequence[float]) -> Optional[Mark]:
        """Mark drawn under ``screen_pos`` (relative to the rendered image)."""
        return find_mark_at(self.marks, screen_pos, self.zoom.value, self.mark_radius)

    def handle_pointer(
        self,
        pointer_pos: Sequence[float],
        image_origin: Sequence[float] = (0, 0),
    ) -> Optional[Mark]:
        """
        Handle a click at ``pointer_pos``.

        A click on a drawn mark selects it (unless adding). Otherwise the
        click goes to the canvas: in add mode a mark is created when the
        point lies inside the image, in edit mode the selection is dropped.

        Args:
            pointer_pos: (x, y) of the click in viewport pixels
            image_origin: (x, y) of the image's top-left corner in viewport pixels

        Returns:
            The created or selected mark, or None
        """
        if self._image is None:
            raise ValueError("No image loaded")

        screen_pos = (
            pointer_pos[0] - image_origin[0],
            pointer_pos[1] - image_origin[1],
        )
        hit = self.mark_at(screen_pos)
        if hit is not None:
            if self.selection.is_adding:
                # the click belongs to the mark, not to the canvas under it
                return None
            self.selection.click_mark(hit.id)
            return hit

        point = to_image_space(pointer_pos, image_origin, self.zoom.value)
        if self.selection.is_adding and not is_inside_image(point, self.image_size):
            logger.debug(f"Ignoring click outside the image at {point}")
            return None
        return self.selection.click_canvas(*point)

    # Marks and tool attributes

    def add_mark(self, x: float, y: float, **attrs) -> Mark:
        """Place a mark directly, bypassing add mode."""
        full = self.selection.create_defaults.updated(**attrs)
        self._check_color(full.color)
        mark = self.store.add(
            x, y, color=full.color, thickness=full.thickness, section=full.section
        )
        self.events.emit(MarkingEvent(EventType.MARK_ADDED, {"mark": mark.to_dict()}))
        return mark

    def set_tool_attributes(self, **changes):
        """
        Change color/thickness/section.

        Patches the selected mark in edit mode, otherwise changes the
        defaults for the next created mark.
        """
        if "color" in changes:
            self._check_color(changes["color"])
        return self.selection.set_tool_attributes(**changes)

    def set_color_label(self, color: str, label: str):
        self.registry.set_label(color, label)
        self.events.emit(
            MarkingEvent(EventType.LABEL_CHANGED, {"color": color, "label": label})
        )

    def delete_selected(self) -> bool:
        return self.selection.delete_selected()

    def remove_mark(self, mark_id: int) -> bool:
        return self.selection.remove_mark(mark_id)

    def clear_marks(self):
        self.selection.clear_all()

    # Report

    def build_report(self, fmt="general", escape: bool = False) -> str:
        """
        Aggregate the current marks into report text.

        Args:
            fmt: A ``ReportFormat`` or its value ("general", "reduced")
            escape: Quote labels containing delimiters or line breaks
        """
        from ..report.writer import build_report

        return build_report(self.marks, self.registry, fmt=fmt, escape=escape)

    def export_report(self, sink, fmt="general", escape: bool = False) -> bytes:
        """
        Build the report and hand its UTF-8 bytes to ``sink``.

        Args:
            sink: A ``ReportSink``
            fmt: A ``ReportFormat`` or its value
            escape: Quote labels containing delimiters or line breaks

        Raises:
            SinkError: If the sink could not take the report
        """
        from ..report.writer import ReportFormat, encode_report

        payload = encode_report(self.build_report(fmt, escape=escape))
        sink.export(payload)
        self.events.emit(
            MarkingEvent(
                EventType.REPORT_EXPORTED,
                {"format": ReportFormat(fmt).value, "size": len(payload)},
            )
        )
        return payload

    def get_visualization_data(self) -> Dict[str, Any]:
        """
        Get data needed for visualization.

        Returns:
            Dictionary with visualization data
        """
        return {
            "image": self._image,
            "zoom": self.zoom.value,
            "marks": self.marks,
            "selected_id": self.selection.selected_id,
            "mode": self.selection.mode.name,
            "colors": self.registry.labels(),
        }

    def _check_color(self, color: str):
        if color not in self.registry:
            raise UnknownColor(color)

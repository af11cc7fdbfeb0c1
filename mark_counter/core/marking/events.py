"""
Event system for the marking workflow.

Lets the marking core notify UI components about state changes without
depending on a specific UI framework.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur while marking an image."""

    # Image events
    IMAGE_LOADED = "image_loaded"
    ZOOM_CHANGED = "zoom_changed"

    # Mark events
    MARK_ADDED = "mark_added"
    MARK_UPDATED = "mark_updated"
    MARK_REMOVED = "mark_removed"
    MARKS_CLEARED = "marks_cleared"

    # Selection events
    MODE_CHANGED = "mode_changed"
    SELECTION_CHANGED = "selection_changed"
    TOOL_ATTRIBUTES_CHANGED = "tool_attributes_changed"

    # Registry / report events
    LABEL_CHANGED = "label_changed"
    REPORT_EXPORTED = "report_exported"


@dataclass
class MarkingEvent:
    """Event that occurs while marking."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[MarkingEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def on_any(self, callback: Callable[[MarkingEvent], None]):
        """Subscribe to every event type."""
        for event_type in EventType:
            self.on(event_type, callback)

    def off(self, event_type: EventType, callback: Callable[[MarkingEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: MarkingEvent):
        """Emit an event to all subscribers."""
        if event.event_type in self._listeners:
            for callback in list(self._listeners[event.event_type]):
                try:
                    callback(event)
                except Exception:
                    # Log but don't crash on listener errors
                    logger.exception(
                        f"Error in listener for {event.event_type.value}"
                    )

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()

"""
Core marking module - UI-agnostic marking logic.

This module provides the mark model, the coordinate transform and the
selection state machine, usable with any UI framework (Tkinter, Web, CLI).
"""

from .events import EventEmitter, EventType, MarkingEvent
from .selection import (
    Adding,
    DefaultsForCreate,
    Editing,
    Idle,
    PatchTargetFor,
    SelectionController,
)
from .session import MarkingSession
from .state import (
    ColorDefinition,
    ColorRegistry,
    Mark,
    Section,
    Thickness,
    ToolAttributes,
)
from .store import MarkStore
from .transform import ZoomState, to_image_space, to_screen_space

__all__ = [
    "MarkingSession",
    "MarkingEvent",
    "EventType",
    "EventEmitter",
    "SelectionController",
    "Idle",
    "Adding",
    "Editing",
    "DefaultsForCreate",
    "PatchTargetFor",
    "ColorDefinition",
    "ColorRegistry",
    "Mark",
    "Section",
    "Thickness",
    "ToolAttributes",
    "MarkStore",
    "ZoomState",
    "to_image_space",
    "to_screen_space",
]

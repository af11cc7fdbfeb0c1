"""
Single-selection state machine.

The controller is always in exactly one of three modes:

- ``Idle``: nothing selected, clicks on the canvas do nothing
- ``Adding``: clicks on the canvas create marks with the create defaults
- ``Editing(mark_id)``: one mark is selected and tool attribute changes
  are patched onto it

Adding and editing are mutually exclusive: entering add mode always drops
the selection.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .events import EventEmitter, EventType, MarkingEvent
from .state import Mark, ToolAttributes
from .store import MarkStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    name = "idle"


@dataclass(frozen=True)
class Adding:
    name = "adding"


@dataclass(frozen=True)
class Editing:
    mark_id: int
    name = "editing"


Mode = Union[Idle, Adding, Editing]


@dataclass(frozen=True)
class DefaultsForCreate:
    """Tool attributes are the defaults for the next created mark."""


@dataclass(frozen=True)
class PatchTargetFor:
    """Tool attribute changes are applied to the selected mark."""

    mark_id: int


ToolTarget = Union[DefaultsForCreate, PatchTargetFor]


class SelectionController:
    """
    Tracks the active mode and at most one selected mark.

    Args:
        store: Mark store the controller creates, patches and deletes in
        create_defaults: Attributes given to newly created marks
        events: Optional emitter notified about every transition
    """

    def __init__(
        self,
        store: MarkStore,
        create_defaults: ToolAttributes,
        events: Optional[EventEmitter] = None,
    ):
        self.store = store
        self._create_defaults = create_defaults
        self.events = events if events is not None else EventEmitter()
        self._mode: Mode = Idle()

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def selected_id(self) -> Optional[int]:
        if isinstance(self._mode, Editing):
            return self._mode.mark_id
        return None

    @property
    def selected(self) -> Optional[Mark]:
        mark_id = self.selected_id
        return self.store.get(mark_id) if mark_id is not None else None

    @property
    def is_adding(self) -> bool:
        return isinstance(self._mode, Adding)

    @property
    def can_delete(self) -> bool:
        return isinstance(self._mode, Editing)

    @property
    def tool_target(self) -> ToolTarget:
        if isinstance(self._mode, Editing):
            return PatchTargetFor(self._mode.mark_id)
        return DefaultsForCreate()

    @property
    def create_defaults(self) -> ToolAttributes:
        return self._create_defaults

    @property
    def tool_attributes(self) -> ToolAttributes:
        """Attributes the tool controls should display."""
        selected = self.selected
        if selected is not None:
            return selected.attributes
        return self._create_defaults

    # Mode transitions

    def enable_add_mode(self):
        if isinstance(self._mode, Adding):
            return
        self._set_mode(Adding())

    def disable_add_mode(self):
        if isinstance(self._mode, Adding):
            self._set_mode(Idle())

    def toggle_add_mode(self) -> bool:
        """Flip add mode. Returns True when add mode is now active."""
        if isinstance(self._mode, Adding):
            self.disable_add_mode()
        else:
            self.enable_add_mode()
        return self.is_adding

    def click_mark(self, mark_id: int) -> bool:
        """
        Select an existing mark.

        Ignored while adding, and for ids the store does not know.

        Returns:
            True if the mark is now selected
        """
        if isinstance(self._mode, Adding):
            logger.debug(f"Ignoring click on mark {mark_id} while adding")
            return False
        if mark_id not in self.store:
            return False
        if self._mode != Editing(mark_id):
            self._set_mode(Editing(mark_id))
        return True

    def click_canvas(self, x: float, y: float) -> Optional[Mark]:
        """
        Handle a click on empty canvas at image-space (x, y).

        Returns:
            The created mark when in add mode, otherwise None
        """
        if isinstance(self._mode, Adding):
            attrs = self._create_defaults
            mark = self.store.add(
                x,
                y,
                color=attrs.color,
                thickness=attrs.thickness,
                section=attrs.section,
            )
            self.events.emit(
                MarkingEvent(EventType.MARK_ADDED, {"mark": mark.to_dict()})
            )
            return mark
        if isinstance(self._mode, Editing):
            self._set_mode(Idle())
        return None

    # Tool attributes

    def set_create_defaults(self, **changes) -> ToolAttributes:
        self._create_defaults = self._create_defaults.updated(**changes)
        self.events.emit(
            MarkingEvent(
                EventType.TOOL_ATTRIBUTES_CHANGED,
                {"target": "defaults", "attributes": self._create_defaults.to_dict()},
            )
        )
        return self._create_defaults

    def patch_selected(self, **changes) -> Optional[Mark]:
        """Apply attribute changes to the selected mark, if any."""
        mark_id = self.selected_id
        if mark_id is None:
            return None
        # validate before touching the store
        self.tool_attributes.updated(**changes)
        mark = self.store.update_by_id(mark_id, **changes)
        if mark is None:
            # the mark vanished from under us
            self._set_mode(Idle())
            return None
        self.events.emit(MarkingEvent(EventType.MARK_UPDATED, {"mark": mark.to_dict()}))
        self.events.emit(
            MarkingEvent(
                EventType.TOOL_ATTRIBUTES_CHANGED,
                {"target": "selected", "attributes": mark.attributes.to_dict()},
            )
        )
        return mark

    def set_tool_attributes(self, **changes):
        """Route a tool change to the selected mark or to the create defaults."""
        if isinstance(self.tool_target, PatchTargetFor):
            return self.patch_selected(**changes)
        return self.set_create_defaults(**changes)

    # Deletion

    def delete_selected(self) -> bool:
        mark_id = self.selected_id
        if mark_id is None:
            return False
        removed = self.store.remove_by_id(mark_id)
        self._set_mode(Idle())
        if removed:
            self.events.emit(MarkingEvent(EventType.MARK_REMOVED, {"mark_id": mark_id}))
        return removed

    def remove_mark(self, mark_id: int) -> bool:
        """Remove any mark, dropping the selection if it was the selected one."""
        if mark_id == self.selected_id:
            return self.delete_selected()
        removed = self.store.remove_by_id(mark_id)
        if removed:
            self.events.emit(MarkingEvent(EventType.MARK_REMOVED, {"mark_id": mark_id}))
        return removed

    def clear_all(self):
        self.store.clear()
        if not isinstance(self._mode, Idle):
            self._set_mode(Idle())
        self.events.emit(MarkingEvent(EventType.MARKS_CLEARED))

    def reset(self):
        """Drop selection and add mode without touching the store."""
        if not isinstance(self._mode, Idle):
            self._set_mode(Idle())

    def _set_mode(self, mode: Mode):
        previous = self._mode
        self._mode = mode
        logger.debug(f"Mode {previous.name} -> {mode.name}")
        if type(previous) is not type(mode):
            self.events.emit(
                MarkingEvent(
                    EventType.MODE_CHANGED,
                    {"previous": previous.name, "mode": mode.name},
                )
            )
        previous_id = previous.mark_id if isinstance(previous, Editing) else None
        if previous_id != self.selected_id:
            self.events.emit(
                MarkingEvent(
                    EventType.SELECTION_CHANGED,
                    {"previous_id": previous_id, "selected_id": self.selected_id},
                )
            )

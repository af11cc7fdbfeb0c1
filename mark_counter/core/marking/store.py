"""
Ordered collection of marks.

The store hands out ids from a counter scoped to itself, so an id is never
reused while the store lives, even after the mark it named is deleted.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from ...utils.misc import incrf
from .state import EDITABLE_FIELDS, Mark, Section

logger = logging.getLogger(__name__)


class MarkStore:
    """
    Owns the marks placed on the current image.

    Insertion order is kept for stable iteration (and drawing order); it
    carries no other meaning.
    """

    def __init__(self):
        self._marks: List[Mark] = []
        self._ids = incrf()

    def __len__(self) -> int:
        return len(self._marks)

    def __iter__(self) -> Iterator[Mark]:
        return iter(list(self._marks))

    def __contains__(self, mark_id: object) -> bool:
        return self._index_of(mark_id) is not None

    @property
    def marks(self) -> Tuple[Mark, ...]:
        return tuple(self._marks)

    def get(self, mark_id: int) -> Optional[Mark]:
        index = self._index_of(mark_id)
        return self._marks[index] if index is not None else None

    def add(
        self,
        x: float,
        y: float,
        color: str,
        thickness=None,
        section=Section.WHOLE,
    ) -> Mark:
        """
        Create a mark with a fresh id and append it.

        Args:
            x: X coordinate in image space
            y: Y coordinate in image space
            color: Color key
            thickness: One of the allowed thickness values or None
            section: Section of the mark

        Returns:
            The created mark
        """
        mark = Mark(
            id=next(self._ids),
            x=x,
            y=y,
            color=color,
            thickness=thickness,
            section=section,
        )
        self._marks.append(mark)
        logger.debug(f"Added mark {mark.id} at ({mark.x:.1f}, {mark.y:.1f})")
        return mark

    def remove_by_id(self, mark_id: int) -> bool:
        """Remove a mark. Returns False when there was nothing to remove."""
        index = self._index_of(mark_id)
        if index is None:
            return False
        del self._marks[index]
        logger.debug(f"Removed mark {mark_id}")
        return True

    def update_by_id(self, mark_id: int, **changes) -> Optional[Mark]:
        """
        Patch color, thickness and/or section of a mark.

        Returns:
            The updated mark, or None if no mark has this id
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update mark fields: {sorted(unknown)}")
        index = self._index_of(mark_id)
        if index is None:
            return None
        current = self._marks[index]
        updated = Mark(
            id=current.id,
            x=current.x,
            y=current.y,
            color=changes.get("color", current.color),
            thickness=changes.get("thickness", current.thickness),
            section=changes.get("section", current.section),
        )
        self._marks[index] = updated
        return updated

    def clear(self):
        count = len(self._marks)
        self._marks.clear()
        logger.debug(f"Cleared {count} marks")

    def _index_of(self, mark_id) -> Optional[int]:
        for i, mark in enumerate(self._marks):
            if mark.id == mark_id:
                return i
        return None

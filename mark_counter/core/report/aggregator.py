"""
Report aggregation.

Marks are grouped by (color, thickness) and counted per section. Two half
marks of the same orientation make one whole unit and an odd half left over
still counts as a full one; vertical and horizontal halves never combine.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..marking.state import ColorRegistry, Mark, Section, Thickness

logger = logging.getLogger(__name__)

# unspecified thickness sorts after every real value
_THICKNESS_ORDER = [t for t in Thickness] + [None]

GroupKey = Tuple[str, Optional[Thickness]]


@dataclass
class SectionCounts:
    """Per-section mark counts of one group."""

    whole: int = 0
    half_vertical: int = 0
    half_horizontal: int = 0

    def add(self, section: Section):
        if section is Section.WHOLE:
            self.whole += 1
        elif section is Section.HALF_VERTICAL:
            self.half_vertical += 1
        else:
            self.half_horizontal += 1

    @property
    def total(self) -> int:
        return self.whole + self.half_vertical + self.half_horizontal

    @property
    def sum(self) -> int:
        return rounded_sum(self.whole, self.half_vertical, self.half_horizontal)


@dataclass(frozen=True)
class ReportRow:
    index: int
    color_label: str
    thickness: Optional[Thickness]
    whole: int
    half_vertical: int
    half_horizontal: int
    sum: int

    def to_dict(self):
        return {
            "index": self.index,
            "color_label": self.color_label,
            "thickness": self.thickness.value if self.thickness else None,
            "whole": self.whole,
            "half_vertical": self.half_vertical,
            "half_horizontal": self.half_horizontal,
            "sum": self.sum,
        }


@dataclass(frozen=True)
class CountRow:
    index: int
    label: str
    count: int


def rounded_sum(whole: int, half_vertical: int, half_horizontal: int) -> int:
    """Units represented by a group: ``whole + ceil(hv / 2) + ceil(hh / 2)``."""
    return whole + math.ceil(half_vertical / 2) + math.ceil(half_horizontal / 2)


def group_marks(
    marks: Iterable[Mark], registry: ColorRegistry
) -> Dict[GroupKey, SectionCounts]:
    """
    Count marks per (color, thickness) group.

    Marks whose color is not in the registry are skipped.
    """
    groups: Dict[GroupKey, SectionCounts] = {}
    skipped = 0
    for mark in marks:
        if mark.color not in registry:
            skipped += 1
            continue
        key = (mark.color, mark.thickness)
        groups.setdefault(key, SectionCounts()).add(mark.section)
    if skipped:
        logger.warning(f"Skipped {skipped} marks with unregistered colors")
    return groups


def aggregate(marks: Iterable[Mark], registry: ColorRegistry) -> List[ReportRow]:
    """
    Build the grouped report rows.

    Rows follow the registry order; inside one color they follow the
    thickness order 20, 30, 40, 50, then unspecified. Groups with no marks
    are left out.

    Args:
        marks: Marks to aggregate
        registry: Color definitions giving labels and row order

    Returns:
        Report rows numbered from 1
    """
    groups = group_marks(marks, registry)
    rows = []
    for definition in registry:
        for thickness in _THICKNESS_ORDER:
            counts = groups.get((definition.color, thickness))
            if counts is None or counts.total == 0:
                continue
            rows.append(
                ReportRow(
                    index=len(rows) + 1,
                    color_label=definition.label,
                    thickness=thickness,
                    whole=counts.whole,
                    half_vertical=counts.half_vertical,
                    half_horizontal=counts.half_horizontal,
                    sum=counts.sum,
                )
            )
    logger.debug(f"Aggregated {len(rows)} report rows")
    return rows


def aggregate_by_color(
    marks: Iterable[Mark], registry: ColorRegistry
) -> List[CountRow]:
    """
    Flat per-color mark counts, ignoring thickness and section.

    The row number is the color's 1-based position in the registry, so it
    can skip values when a color has no marks.
    """
    counts: Dict[str, int] = {}
    for (color, _), section_counts in group_marks(marks, registry).items():
        counts[color] = counts.get(color, 0) + section_counts.total
    rows = []
    for position, definition in enumerate(registry, start=1):
        count = counts.get(definition.color, 0)
        if count > 0:
            rows.append(CountRow(index=position, label=definition.label, count=count))
    return rows

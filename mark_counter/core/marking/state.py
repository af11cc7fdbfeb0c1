"""
Data classes for the marking model.

A :class:`Mark` is an immutable record; edits go through the store, which
swaps the record for an updated copy. The :class:`ColorRegistry` keeps the
ordered color definitions whose order drives the report row order.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..errors import UnknownColor


class Thickness(IntEnum):
    """Allowed thickness values, in millimetres."""

    T20 = 20
    T30 = 30
    T40 = 40
    T50 = 50


class Section(Enum):
    """Whether a mark counts as a whole unit or as half of one."""

    WHOLE = "whole"
    HALF_VERTICAL = "half-vertical"
    HALF_HORIZONTAL = "half-horizontal"


ThicknessLike = Union[Thickness, int, str, None]
SectionLike = Union[Section, str]

EDITABLE_FIELDS = ("color", "thickness", "section")


def parse_thickness(value: ThicknessLike) -> Optional[Thickness]:
    """Convert user input to a :class:`Thickness`; ``None``/"" mean unspecified."""
    if value is None or value == "":
        return None
    if isinstance(value, Thickness):
        return value
    try:
        if isinstance(value, bool) or (
            isinstance(value, float) and not value.is_integer()
        ):
            raise ValueError(value)
        return Thickness(int(value))
    except (TypeError, ValueError):
        raise ValueError(
            f"Invalid thickness {value!r}, expected one of "
            f"{[t.value for t in Thickness]} or None"
        ) from None


def parse_section(value: SectionLike) -> Section:
    if isinstance(value, Section):
        return value
    try:
        return Section(value)
    except ValueError:
        raise ValueError(
            f"Invalid section {value!r}, expected one of "
            f"{[s.value for s in Section]}"
        ) from None


@dataclass(frozen=True)
class ToolAttributes:
    """The {color, thickness, section} triple a new or selected mark carries."""

    color: str
    thickness: Optional[Thickness] = None
    section: Section = Section.WHOLE

    def __post_init__(self):
        object.__setattr__(self, "thickness", parse_thickness(self.thickness))
        object.__setattr__(self, "section", parse_section(self.section))

    def updated(self, **changes) -> "ToolAttributes":
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown tool attributes: {sorted(unknown)}")
        return replace(self, **changes)

    def to_dict(self):
        return {
            "color": self.color,
            "thickness": self.thickness.value if self.thickness else None,
            "section": self.section.value,
        }


@dataclass(frozen=True)
class Mark:
    """A single placed marker, positioned in image space."""

    id: int
    x: float
    y: float
    color: str
    thickness: Optional[Thickness] = None
    section: Section = Section.WHOLE

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "thickness", parse_thickness(self.thickness))
        object.__setattr__(self, "section", parse_section(self.section))

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def attributes(self) -> ToolAttributes:
        return ToolAttributes(
            color=self.color, thickness=self.thickness, section=self.section
        )

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            **self.attributes.to_dict(),
        }


@dataclass
class ColorDefinition:
    """A color key and the label shown for it."""

    color: str
    label: str

    def __setattr__(self, name, value):
        if name == "color" and "color" in self.__dict__:
            raise AttributeError("Color keys cannot be changed")
        super().__setattr__(name, value)


@dataclass
class ColorRegistry:
    """
    Ordered set of color definitions.

    Keys are fixed once the registry is built; only labels change.
    """

    definitions: List[ColorDefinition] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for definition in self.definitions:
            if definition.color in seen:
                raise ValueError(f"Duplicate color key {definition.color!r}")
            seen.add(definition.color)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "ColorRegistry":
        return cls([ColorDefinition(color=c, label=label) for c, label in pairs])

    def __iter__(self) -> Iterator[ColorDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, color: object) -> bool:
        return any(d.color == color for d in self.definitions)

    @property
    def colors(self) -> List[str]:
        return [d.color for d in self.definitions]

    def get(self, color: str) -> ColorDefinition:
        for definition in self.definitions:
            if definition.color == color:
                return definition
        raise UnknownColor(color)

    def label_for(self, color: str) -> str:
        return self.get(color).label

    def set_label(self, color: str, label: str):
        self.get(color).label = label

    def labels(self) -> Dict[str, str]:
        return {d.color: d.label for d in self.definitions}

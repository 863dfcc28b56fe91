"""
Track segments and circuits.

A circuit is an ordered, immutable sequence of segments. Segments carry
only what the longitudinal model needs: length, curvature radius and
inclination. The type tag is used for reporting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Sequence, Tuple, Union

import yaml


class SegmentType(Enum):
    """Type of track segment."""
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class TrackSegment:
    """One piece of track."""

    length: float  # m, > 0
    radius: float = 0.0  # m, 0 = straight
    inclination: float = 0.0  # degrees, positive uphill
    type: SegmentType = SegmentType.STRAIGHT

    def __post_init__(self):
        if isinstance(self.type, str):
            try:
                object.__setattr__(self, 'type', SegmentType(self.type.lower()))
            except ValueError:
                raise ValueError(
                    f"Unknown segment type: {self.type}. "
                    f"Available: {[t.value for t in SegmentType]}"
                ) from None

        if not self.length > 0:
            raise ValueError(f"Segment length must be positive, got {self.length}")
        if self.radius < 0:
            raise ValueError(f"Segment radius must be >= 0, got {self.radius}")
        if not -90.0 < self.inclination < 90.0:
            raise ValueError(f"Segment inclination must be within (-90, 90) degrees, got {self.inclination}")

    @property
    def is_corner(self) -> bool:
        return self.radius > 0

    def describe(self) -> str:
        text = f"{self.type.value}: {self.length:g}m"
        if self.is_corner:
            text += f", R={self.radius:g}m"
        if self.inclination:
            text += f", {self.inclination:+g}°"
        return text


class Circuit:
    """
    Ordered, immutable sequence of track segments.

    Built once before a run, either directly from segments or through
    ``CircuitBuilder``.
    """

    def __init__(self, segments: Sequence[TrackSegment] = (), name: str = "Custom Circuit"):
        self.name = name
        self._segments: Tuple[TrackSegment, ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[TrackSegment, ...]:
        return self._segments

    @property
    def length(self) -> float:
        return sum(segment.length for segment in self._segments)

    @property
    def num_corners(self) -> int:
        return sum(1 for segment in self._segments if segment.is_corner)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[TrackSegment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> TrackSegment:
        return self._segments[index]

    def with_segment(self, segment: TrackSegment) -> 'Circuit':
        """Return a new circuit with ``segment`` appended."""
        return Circuit(self._segments + (segment,), name=self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'segments': [
                {
                    'length': s.length,
                    'radius': s.radius,
                    'inclination': s.inclination,
                    'type': s.type.value,
                }
                for s in self._segments
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Circuit':
        segments = [TrackSegment(**segment) for segment in data.get('segments', [])]
        return cls(segments, name=data.get('name', "Custom Circuit"))

    @classmethod
    def from_yaml(cls, filepath: str) -> 'Circuit':
        """Load circuit from YAML file with a ``segments`` list."""
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def to_yaml(self, filepath: str):
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


class CircuitBuilder:
    """Thin builder appending segments in driving order."""

    def __init__(self, name: str = "Custom Circuit"):
        self.name = name
        self._segments: List[TrackSegment] = []

    def add(
        self,
        length: float,
        radius: float = 0.0,
        inclination: float = 0.0,
        type: Union[SegmentType, str] = SegmentType.STRAIGHT
    ) -> 'CircuitBuilder':
        self._segments.append(TrackSegment(length, radius, inclination, type))
        return self

    def straight(self, length: float, inclination: float = 0.0) -> 'CircuitBuilder':
        return self.add(length, 0.0, inclination, SegmentType.STRAIGHT)

    def left(self, length: float, radius: float, inclination: float = 0.0) -> 'CircuitBuilder':
        return self.add(length, radius, inclination, SegmentType.LEFT)

    def right(self, length: float, radius: float, inclination: float = 0.0) -> 'CircuitBuilder':
        return self.add(length, radius, inclination, SegmentType.RIGHT)

    def build(self) -> Circuit:
        return Circuit(self._segments, name=self.name)

# MIT License (see LICENSE)
"""
Field sources and the collection that owns them.

A FieldSource is an immutable value: dragging, rotating or re-scaling a
source replaces it with a copy carrying the same id. The SourceCollection
is the only mutable object. It is edited by UI handlers and read by the
evaluator, which always works on snapshot() so a trace in progress never
sees a half-applied edit.

Positions live in normalized panel coordinates, [0, 1] x [0, 1].
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import StrEnum
import logging
import math
from typing import Iterator

import numpy as np

from ..types import Vector2
from ..util import clamp_unit_square, f64

logger = logging.getLogger(__name__)


class SourceKind(StrEnum):
    """Closed set of source kinds. Each has its own contribution law."""
    POINT_CHARGE = "point-charge"
    DIPOLE = "dipole"
    STRAIGHT_WIRE = "straight-wire"
    LOOP = "loop"
    SOLENOID = "solenoid"


def _frozen_point(position) -> np.ndarray:
    p = f64(position)
    if p.shape != (2,):
        raise ValueError(f"position must be [x, y], got shape {p.shape}")
    p.setflags(write=False)
    return p


@dataclass(frozen=True, eq=False)
class FieldSource:
    """
    An idealized field generator.

    Attributes:
        kind: Which contribution law applies.
        position: Centre [x, y] in normalized coordinates (read-only array).
        orientation: Rotation of the source's local frame in radians,
            counterclockwise. For a dipole or solenoid the local +x axis
            points from the south to the north pole.
        strength: Signed scale factor. For a point charge this is the
            charge; for a wire the current direction.
        id: Identifier assigned by the owning collection.
    """
    kind: SourceKind
    position: Vector2
    orientation: float = 0.0
    strength: float = 1.0
    id: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", SourceKind(self.kind))
        object.__setattr__(self, "position", _frozen_point(self.position))
        object.__setattr__(self, "orientation", float(self.orientation))
        object.__setattr__(self, "strength", float(self.strength))
        if not (math.isfinite(self.orientation) and math.isfinite(self.strength)):
            raise ValueError(f"orientation and strength must be finite, got {self.orientation}, {self.strength}")

    def moved_to(self, position) -> "FieldSource":
        return replace(self, position=clamp_unit_square(position))

    def rotated_by(self, delta: float) -> "FieldSource":
        return replace(self, orientation=self.orientation + delta)

    def with_strength(self, strength: float) -> "FieldSource":
        return replace(self, strength=strength)


class SourceCollection:
    """
    Ordered, editable set of field sources.

    Ids increase monotonically over the lifetime of the collection and are
    never reused, not even after clear(), so a stale id held by a view can
    never address a different source.

    Example:
        sources = SourceCollection()
        q = sources.add(SourceKind.POINT_CHARGE, (0.3, 0.5), strength=2.0)
        sources.move(q.id, (0.35, 0.5))
        field = field_at(sources.snapshot(), (0.5, 0.5))
    """

    def __init__(self) -> None:
        self._sources: list[FieldSource] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[FieldSource]:
        return iter(self.snapshot())

    def __contains__(self, source_id: object) -> bool:
        return any(s.id == source_id for s in self._sources)

    def snapshot(self) -> tuple[FieldSource, ...]:
        """Immutable view of the current sources, safe to hold across edits."""
        return tuple(self._sources)

    def _index(self, source_id: int) -> int:
        for i, s in enumerate(self._sources):
            if s.id == source_id:
                return i
        raise KeyError(f"No field source with id {source_id}")

    def get(self, source_id: int) -> FieldSource:
        return self._sources[self._index(source_id)]

    def add(
        self,
        kind: SourceKind | str,
        position=(0.5, 0.5),
        orientation: float = 0.0,
        strength: float = 1.0,
    ) -> FieldSource:
        """Create a source with a fresh id. The position is clamped to the unit square."""
        source = FieldSource(
            kind=SourceKind(kind),
            position=clamp_unit_square(position),
            orientation=orientation,
            strength=strength,
            id=self._next_id,
        )
        self._next_id += 1
        self._sources.append(source)
        logger.debug("Added %s #%d at (%.3f, %.3f)", source.kind, source.id, *source.position)
        return source

    def add_dipole_pair(
        self,
        positive=(0.4, 0.5),
        negative=(0.6, 0.5),
        charge: float = 1.0,
    ) -> tuple[FieldSource, FieldSource]:
        """Add a +q / -q pair of point charges (electric dipole)."""
        plus = self.add(SourceKind.POINT_CHARGE, positive, strength=abs(charge))
        minus = self.add(SourceKind.POINT_CHARGE, negative, strength=-abs(charge))
        return plus, minus

    def _replace(self, source_id: int, new: FieldSource) -> FieldSource:
        self._sources[self._index(source_id)] = new
        return new

    def move(self, source_id: int, position) -> FieldSource:
        """Drag a source. Pointer coordinates outside [0, 1]² are clamped."""
        return self._replace(source_id, self.get(source_id).moved_to(position))

    def rotate(self, source_id: int, delta: float = math.pi / 4) -> FieldSource:
        """Turn a source by `delta` radians (default one eighth of a turn)."""
        return self._replace(source_id, self.get(source_id).rotated_by(delta))

    def set_strength(self, source_id: int, strength: float) -> FieldSource:
        return self._replace(source_id, self.get(source_id).with_strength(strength))

    def remove(self, source_id: int) -> FieldSource:
        source = self._sources.pop(self._index(source_id))
        logger.debug("Removed %s #%d", source.kind, source.id)
        return source

    def clear(self) -> None:
        """Remove every source. Id numbering continues where it left off."""
        self._sources.clear()
        logger.debug("Cleared all field sources")

# MIT License (see LICENSE)
"""
Field evaluation by superposition.

The field at a point is the vector sum of every source's contribution.
Each public function takes a snapshot of the sources first (a
SourceCollection, or any iterable of FieldSource), so the result is
always consistent with one state of the collection.

Example:
    sources = SourceCollection()
    sources.add_dipole_pair()
    E = field_at(sources, (0.5, 0.5), FieldCalibration.electric())
    arrows = sample_grid(sources, steps=20)
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ..types import FieldSample, Vector2
from ..util import f64, norm
from .calibration import DEFAULT_CALIBRATION, FieldCalibration
from .contributions import contribution
from .sources import FieldSource


def field_at(
    sources: Iterable[FieldSource],
    point,
    calibration: FieldCalibration = DEFAULT_CALIBRATION,
) -> Vector2:
    """
    Superposed field vector at `point`.

    Args:
        sources: Sources to sum (a snapshot is taken).
        point: Query point [x, y] in normalized coordinates.
        calibration: Scale factors and guard radius.

    Returns:
        Field vector [fx, fy]. A point inside every guard radius yields
        the zero vector; evaluation never raises for geometric reasons.
    """
    p = f64(point)
    total = np.zeros(2, dtype=np.float64)
    for source in tuple(sources):
        total += contribution(source, p, calibration)
    return total


def sample_field(
    sources: Iterable[FieldSource],
    point,
    calibration: FieldCalibration = DEFAULT_CALIBRATION,
) -> FieldSample:
    """Field vector and magnitude at one point."""
    p = f64(point)
    v = field_at(sources, p, calibration)
    return FieldSample(position=p, vector=v, magnitude=norm(v))


def sample_grid(
    sources: Iterable[FieldSource],
    steps: int = 20,
    min_magnitude: float | None = None,
    calibration: FieldCalibration = DEFAULT_CALIBRATION,
) -> list[FieldSample]:
    """
    Field arrows on a regular (steps + 1)² grid over the unit square.

    Args:
        sources: Sources to sum.
        steps: Grid divisions per axis; points are at i / steps.
        min_magnitude: Samples not stronger than this are dropped. Defaults
            to calibration.grid_min_magnitude.
        calibration: Scale factors and thresholds.

    Returns:
        Samples in column-major order (x outer, y inner).
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")
    if min_magnitude is None:
        min_magnitude = calibration.grid_min_magnitude
    snapshot = tuple(sources)
    samples = []
    for i in range(steps + 1):
        for j in range(steps + 1):
            s = sample_field(snapshot, (i / steps, j / steps), calibration)
            if s.magnitude > min_magnitude:
                samples.append(s)
    return samples


def field_grid(
    sources: Iterable[FieldSource],
    steps: int = 20,
    calibration: FieldCalibration = DEFAULT_CALIBRATION,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Field components on a regular grid, for quiver or streamline plots.

    Returns:
        (xs, ys, vx, vy), each of shape (steps + 1, steps + 1) with
        xs varying along axis 1 (numpy.meshgrid "xy" indexing).
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")
    snapshot = tuple(sources)
    axis = np.linspace(0.0, 1.0, steps + 1)
    xs, ys = np.meshgrid(axis, axis)
    vx = np.zeros_like(xs)
    vy = np.zeros_like(ys)
    for idx in np.ndindex(xs.shape):
        v = field_at(snapshot, (xs[idx], ys[idx]), calibration)
        vx[idx], vy[idx] = v[0], v[1]
    return xs, ys, vx, vy


# =============================================================================
# Parallel plates
# =============================================================================

@dataclass(frozen=True)
class PlateGeometry:
    """Region between two parallel plates, in normalized coordinates."""
    x_min: float = 0.2
    x_max: float = 0.8
    y_min: float = 0.3
    y_max: float = 0.7
    # Exponential fall-off rate of the fringing field per unit distance.
    fringe_decay: float = 10.0

    def distance_outside(self, point) -> float:
        """Distance from `point` to the region, zero inside."""
        x, y = float(point[0]), float(point[1])
        dx = max(self.x_min - x, 0.0, x - self.x_max)
        dy = max(self.y_min - y, 0.0, y - self.y_max)
        return float(np.hypot(dx, dy))


def parallel_plate_field(
    point,
    voltage: float,
    separation: float,
    plates: PlateGeometry = PlateGeometry(),
) -> float:
    """
    Field strength in V/m near a parallel-plate capacitor.

    Between the plates the field is uniform, E = V / d. Outside it falls
    off as E·exp(-decay · distance), a qualitative picture of the fringing
    field.

    Raises:
        ValueError: If the separation is not positive.
    """
    if separation <= 0.0:
        raise ValueError(f"separation must be positive, got {separation}")
    uniform = voltage / separation
    dist = plates.distance_outside(point)
    if dist == 0.0:
        return uniform
    return uniform * float(np.exp(-plates.fringe_decay * dist))

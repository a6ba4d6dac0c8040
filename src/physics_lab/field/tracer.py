# MIT License (see LICENSE)
"""
Field-line tracing.

A field line is built by repeatedly stepping a fixed arc length along the
normalized local field, starting just outside a positive (or north) pole:

    p_{n+1} = p_n + h · F(p_n) / |F(p_n)|

Tracing stops when
    - the field is weaker than a threshold (the line has left the region
      of interest),
    - the point comes within the capture radius of a pole or source,
    - the point leaves the panel bounds, or
    - the step budget runs out. Magnetic lines are closed loops and would
      otherwise never end.

Each trace runs against a single snapshot of the sources.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import StrEnum
import logging
import math
from typing import Iterable

import numpy as np

from ..util import f64, norm
from .calibration import DEFAULT_CALIBRATION, FieldCalibration
from .contributions import source_poles
from .evaluator import field_at
from .sources import FieldSource

logger = logging.getLogger(__name__)

UNIT_SQUARE = ((0.0, 0.0), (1.0, 1.0))


class StopReason(StrEnum):
    WEAK_FIELD = "weak-field"
    CAPTURED = "captured"
    MAX_STEPS = "max-steps"
    OUT_OF_BOUNDS = "out-of-bounds"


@dataclass(frozen=True, eq=False)
class FieldLine:
    """
    A traced polyline.

    Attributes:
        points: Array of shape (n, 2), starting at the seed.
        stop: Why tracing ended.
        source_id: Id of the source the line was seeded from, if any.
    """
    points: np.ndarray
    stop: StopReason
    source_id: int | None = None

    def __len__(self) -> int:
        return len(self.points)


def _capture_points(snapshot: tuple[FieldSource, ...], cal: FieldCalibration) -> list[np.ndarray]:
    points = []
    for source in snapshot:
        poles = source_poles(source, cal)
        if poles:
            points.extend(p for p, _ in poles)
        else:
            points.append(source.position)
    return points


def trace_field_line(
    sources: Iterable[FieldSource],
    seed,
    step: float = 0.01,
    max_steps: int = 100,
    min_magnitude: float | None = None,
    capture_radius: float | None = None,
    bounds=UNIT_SQUARE,
    calibration: FieldCalibration = DEFAULT_CALIBRATION,
    origin=None,
) -> FieldLine:
    """
    Trace one field line from `seed`.

    Args:
        sources: Sources to trace through (a snapshot is taken).
        seed: Starting point [x, y].
        step: Arc length per step.
        max_steps: Step budget.
        min_magnitude: Stop threshold; defaults to calibration.trace_min_magnitude.
        capture_radius: Distance at which a pole or source captures the
            line; defaults to calibration.eps.
        bounds: ((x_min, y_min), (x_max, y_max)) of the panel.
        calibration: Scale factors and thresholds.
        origin: Pole the line was seeded from. It never captures the line,
            so a seed inside a solenoid can run through its own north end.

    Returns:
        The traced FieldLine, including the seed point.
    """
    if step <= 0.0:
        raise ValueError(f"step must be positive, got {step}")
    if min_magnitude is None:
        min_magnitude = calibration.trace_min_magnitude
    if capture_radius is None:
        capture_radius = calibration.eps
    snapshot = tuple(sources)
    capture = _capture_points(snapshot, calibration)
    if origin is not None:
        capture = [c for c in capture if not np.allclose(c, origin)]
    lo, hi = f64(bounds[0]), f64(bounds[1])

    current = f64(seed)
    points = [current]
    stop = StopReason.MAX_STEPS
    for _ in range(max_steps):
        v = field_at(snapshot, current, calibration)
        mag = norm(v)
        if mag < min_magnitude:
            stop = StopReason.WEAK_FIELD
            break
        current = current + (step / mag) * v
        points.append(current)
        if any(norm(current - c) < capture_radius for c in capture):
            stop = StopReason.CAPTURED
            break
        if np.any(current < lo) or np.any(current > hi):
            stop = StopReason.OUT_OF_BOUNDS
            break

    logger.debug("Field line from (%.3f, %.3f): %d points, %s", seed[0], seed[1], len(points), stop)
    return FieldLine(points=np.array(points, dtype=np.float64), stop=stop)


def trace_field_lines(
    sources: Iterable[FieldSource],
    lines_per_pole: int = 12,
    seed_radius: float | None = None,
    step: float = 0.01,
    max_steps: int = 100,
    calibration: FieldCalibration = DEFAULT_CALIBRATION,
) -> list[FieldLine]:
    """
    Trace evenly spaced lines leaving every positive / north pole.

    Positive point charges, the north pole of each bar magnet and the north
    end of each solenoid are seeded. Negative poles, wires and loops are
    not: lines end on them instead of starting there. A line is never
    captured by the pole it was seeded from.

    Args:
        sources: Sources to trace through (one snapshot for all lines).
        lines_per_pole: Seeds per pole, spaced evenly around a circle.
        seed_radius: Radius of that circle; defaults to 1.25 · calibration.eps
            so seeds start just outside the guard and capture radius.
        step: Arc length per step.
        max_steps: Step budget per line.
        calibration: Scale factors and thresholds.
    """
    if lines_per_pole < 1:
        raise ValueError(f"lines_per_pole must be >= 1, got {lines_per_pole}")
    if seed_radius is None:
        seed_radius = 1.25 * calibration.eps
    snapshot = tuple(sources)
    lines = []
    for source in snapshot:
        for pole, sign in source_poles(source, calibration):
            if sign <= 0.0:
                continue
            for i in range(lines_per_pole):
                angle = 2.0 * math.pi * i / lines_per_pole
                seed = pole + seed_radius * np.array([math.cos(angle), math.sin(angle)])
                line = trace_field_line(
                    snapshot, seed,
                    step=step, max_steps=max_steps, calibration=calibration, origin=pole,
                )
                lines.append(FieldLine(points=line.points, stop=line.stop, source_id=source.id))
    return lines

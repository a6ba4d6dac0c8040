# MIT License (see LICENSE)
"""
Continuous collision detection for blocks on a 1-D track.

At the default panel speeds a block moves a few centimetres per frame, but
with large velocities it can cross the whole contact zone between two
frames. A purely positional check would then never see the overlap and the
blocks would pass through each other (tunnelling). The time of impact tells
the runner where inside the frame the contact happened so it can split the
step there.

Key concepts:
- TOI (time of impact): the earliest time within the frame at which the
  centre distance equals the contact distance.
- Blocks are treated as segments, so contact happens when
  |x1 - x2| = (w1 + w2) / 2.
"""
from __future__ import annotations

import math


def contact_time(
    x1: float,
    v1: float,
    x2: float,
    v2: float,
    contact_distance: float,
    dt: float,
) -> float | None:
    """
    Time of impact between two blocks moving at constant velocity.

    Solves |(x1 - x2) + t (v1 - v2)| = d, written as the quadratic
    a t² + b t + c = 0 with a = dv², b = 2 dx dv, c = dx² - d².

    Args:
        x1, v1: Centre and velocity of block 1.
        x2, v2: Centre and velocity of block 2.
        contact_distance: Centre distance at which the blocks touch.
        dt: Length of the frame to search in seconds.

    Returns:
        Time of first contact in [0, dt], or None if the blocks do not touch
        within the frame. Returns 0.0 if they already overlap.
    """
    dx = x1 - x2
    dv = v1 - v2

    a = dv * dv
    b = 2.0 * dx * dv
    c = dx * dx - contact_distance * contact_distance

    # Already overlapping
    if c <= 0.0:
        return 0.0

    # No relative motion
    if a < 1e-15:
        return None

    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None

    # With c > 0 both roots share a sign, so the smaller one is the entry.
    t0 = (-b - math.sqrt(disc)) / (2.0 * a)
    if 0.0 <= t0 <= dt:
        return t0
    return None

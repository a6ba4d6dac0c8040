# MIT License (see LICENSE)
"""
Closed-form resolution of a 1-D two-body collision.

Solves momentum conservation together with the definition of the
coefficient of restitution,

    m1 v1 + m2 v2 = m1 v1' + m2 v2'
    v2' - v1' = e (v1 - v2)

which gives

    v1' = (m1 v1 + m2 v2 - e m2 (v1 - v2)) / (m1 + m2)
    v2' = (m1 v1 + m2 v2 + e m1 (v1 - v2)) / (m1 + m2)

Momentum is conserved for every e; kinetic energy is conserved only for
e = 1 and lost otherwise. At e = 0 both bodies leave with the
centre-of-mass velocity.

Resolution is separate from detection: the caller decides that the bodies
touch (see detector.CollisionPair) and this function only computes the
outgoing velocities.
"""
from __future__ import annotations
import math

from ..errors import ConfigurationError


def resolve(m1: float, v1: float, m2: float, v2: float, restitution: float) -> tuple[float, float]:
    """
    Outgoing velocities of two collinear bodies.

    Args:
        m1, m2: Masses in kg, both > 0.
        v1, v2: Incoming velocities in m/s.
        restitution: Coefficient of restitution e in [0, 1].

    Returns:
        (v1', v2') after the collision.

    Raises:
        ConfigurationError: If a mass is not positive or e is outside [0, 1].
            Both indicate a caller defect and are never silently clamped.
    """
    if not m1 > 0.0:
        raise ConfigurationError("m1", m1, "must be > 0")
    if not m2 > 0.0:
        raise ConfigurationError("m2", m2, "must be > 0")
    if not (0.0 <= restitution <= 1.0):
        raise ConfigurationError("restitution", restitution, "must be in [0, 1]")
    if not (math.isfinite(v1) and math.isfinite(v2)):
        raise ConfigurationError("velocity", (v1, v2), "must be finite")

    total = m1 + m2
    p = m1 * v1 + m2 * v2
    dv = v1 - v2
    v1_new = (p - restitution * m2 * dv) / total
    v2_new = (p + restitution * m1 * dv) / total
    return v1_new, v2_new

# MIT License (see LICENSE)
"""
Force laws for the motion panels.

A force law is a plain function `(config, state) -> acceleration`. It reads
the panel's config and the current MotionState and returns the net
acceleration, a float for 1-D states or a Vector2 for 2-D states. Laws keep
no state of their own. There is no base class: a new panel adds a new
function with the same signature and hands it to the integrator.

Circular-motion panels integrate an angle rather than a position. Their
laws have the same shape, `(config, AngularState) -> omega`, and are
collected at the bottom of this module.

Key concepts:
- Accelerations, not forces, are returned: a = F_net / m.
- Terms that would turn non-physical are clamped to zero rather than
  propagated (a slack cord does not push, a speed² below zero means the
  body is at rest).
"""
from __future__ import annotations
import math

import numpy as np

from ..config import (
    BungeeConfig,
    ConicalPendulumConfig,
    LinkedMassesConfig,
    OrbitConfig,
    ProjectileConfig,
    PulleyConfig,
    SpringConfig,
    VerticalCircleConfig,
)
from ..constants import CENTRAL_FORCE_EPS
from ..types import AngularState, MotionState, Quantity
from ..util import is_scalar, norm2


def no_force(config, state: MotionState) -> Quantity:
    """
    Zero acceleration of the same shape as the state (Newton's first law).

    Used by the collision panel, where blocks coast between impacts.
    """
    if is_scalar(state.position):
        return 0.0
    return np.zeros(2, dtype=np.float64)


def projectile_gravity(config: ProjectileConfig, state: MotionState) -> np.ndarray:
    """
    Uniform gravity plus optional linear air resistance.

    Implements a = (0, -g) - (c/m)·v. With drag = 0 this is the textbook
    constant-acceleration projectile.
    """
    a = np.array([0.0, -config.g], dtype=np.float64)
    if config.drag != 0.0:
        a = a - (config.drag / config.mass) * state.velocity
    return a


def hookean_spring(config: SpringConfig, state: MotionState) -> float:
    """
    Vertical mass-spring system, positive axis pointing down.

    a = g - k (y - L0) / m

    The spring pushes when compressed (y < L0), so the motion is a full
    simple harmonic oscillation about y_eq = L0 + mg/k.
    """
    extension = state.position - config.natural_length
    return config.g - config.k * extension / config.mass


def bungee_cord(config: BungeeConfig, state: MotionState) -> float:
    """
    Jumper on a bungee cord, positive axis pointing down from the platform.

    a = g - k · max(0, y - L0) / m

    A cord cannot push: while it is shorter than its natural length the
    elastic term is zero and the jumper is in free fall.
    """
    extension = max(0.0, state.position - config.natural_length)
    return config.g - config.k * extension / config.mass


def pulley_system(config: PulleyConfig, state: MotionState) -> float:
    """
    Table mass m1 dragged by hanging mass m2 over an ideal pulley.

    a = m2 g / (m1 + m2), constant while both masses move.
    """
    return config.m2 * config.g / (config.m1 + config.m2)


def linked_masses(config: LinkedMassesConfig, state: MotionState) -> float:
    """Two roped masses pulled by an applied force: a = F / (m1 + m2)."""
    return config.force / (config.m1 + config.m2)


def central_gravity(config: OrbitConfig, state: MotionState) -> np.ndarray:
    """
    Newtonian gravity towards a central mass fixed at the origin.

    a = -G M r / |r|³

    Inside a small guard radius the acceleration is zero instead of
    diverging.
    """
    r = state.position
    r2 = norm2(r)
    if r2 < CENTRAL_FORCE_EPS * CENTRAL_FORCE_EPS:
        return np.zeros(2, dtype=np.float64)
    inv_r3 = 1.0 / (r2 * math.sqrt(r2))
    return -(config.G * config.central_mass) * r * inv_r3


# =============================================================================
# Angular rate laws
# =============================================================================

def vertical_circle_rate(config: VerticalCircleConfig, state: AngularState) -> float:
    """
    Angular velocity on a vertical circle from conservation of energy.

    The speed is not integrated from a driving force. It follows from
        ½ m v² + m g h = E,   h = R + R sin θ
    with E fixed by the speed at the top. The body moves clockwise, so the
    returned ω = -v / R is negative.

    If E - m g h < 0 (the body could not reach this height) the speed is
    clamped to zero.
    """
    h = config.radius + config.radius * math.sin(state.angle)
    v_sq = (2.0 / config.mass) * (config.total_energy - config.mass * config.g * h)
    v = math.sqrt(max(0.0, v_sq))
    return -v / config.radius


def conical_pendulum_rate(config: ConicalPendulumConfig, state: AngularState) -> float:
    """
    Constant angular velocity of a conical pendulum.

    The period is T = 2π √(L cos θ / g), so ω = 2π / T = √(g / (L cos θ)).
    """
    return math.sqrt(config.g / (config.length * math.cos(config.angle_rad)))

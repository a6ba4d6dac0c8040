# MIT License (see LICENSE)
"""
Closed-form reference solutions.

These are the read-outs the panels show next to their animations (peak
height, ideal banking speed, normal force in a loop, ...). The test suite
also uses them as oracles for the stepped integrator, the same way a
free-fall test compares against y0 - ½gt².

Every function is pure and validates its physical inputs: a non-positive
mass or radius raises ConfigurationError rather than returning inf or nan.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import StrEnum
import math
from typing import Sequence

import numpy as np

from ..config import ConicalPendulumConfig, ProjectileConfig, SpringConfig
from ..constants import EARTH_MASS, EARTH_RADIUS, G_NEWTON, K_COULOMB, STANDARD_GRAVITY
from ..errors import ConfigurationError


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if not value > 0.0:
            raise ConfigurationError(name, value, "must be > 0")


# =============================================================================
# Motion
# =============================================================================

@dataclass(frozen=True)
class ProjectileSummary:
    """Drag-free projectile read-outs (seconds and metres)."""
    time_to_peak: float
    peak_height: float
    flight_time: float
    range: float


def projectile_summary(config: ProjectileConfig) -> ProjectileSummary:
    """
    Drag-free flight of a projectile launched from height h0.

    t_peak = vy / g
    y_max  = h0 + vy² / (2g)
    T      = (vy + √(vy² + 2 g h0)) / g   (positive root of y(T) = 0)
    R      = vx · T

    The drag coefficient of the config is ignored.
    """
    vx, vy = config.launch_velocity
    g = config.g
    flight_time = (vy + math.sqrt(vy * vy + 2.0 * g * config.height)) / g
    return ProjectileSummary(
        time_to_peak=vy / g,
        peak_height=config.height + vy * vy / (2.0 * g),
        flight_time=flight_time,
        range=vx * flight_time,
    )


def spring_equilibrium(config: SpringConfig) -> float:
    """Rest position of the hanging mass, y_eq = L0 + m g / k."""
    return config.natural_length + config.mass * config.g / config.k


class ElevatorDirection(StrEnum):
    UP = "up"
    DOWN = "down"


def elevator_normal_force(
    mass: float,
    accel: float,
    direction: ElevatorDirection | str = ElevatorDirection.UP,
    g: float = STANDARD_GRAVITY,
) -> float:
    """
    Apparent weight in an accelerating lift.

    N = m (g + a) accelerating upward, N = m (g - a) accelerating downward.
    """
    _require_positive(mass=mass)
    direction = ElevatorDirection(direction)
    if direction is ElevatorDirection.UP:
        return mass * (g + accel)
    return mass * (g - accel)


def average_impact_force(mass: float, speed: float, duration: float) -> float:
    """
    Average force needed to stop a body, F = Δp / Δt.

    A crumple zone that stretches the stopping time lowers this force for
    the same change in momentum.
    """
    _require_positive(mass=mass, duration=duration)
    return mass * speed / duration


# =============================================================================
# Circular motion
# =============================================================================

@dataclass(frozen=True)
class ConicalPendulumSolution:
    radius: float
    height: float
    speed: float
    period: float
    tension: float
    centripetal_force: float


def conical_pendulum(config: ConicalPendulumConfig) -> ConicalPendulumSolution:
    """
    Steady state of a conical pendulum.

    r = L sin θ,  h = L cos θ,  T = 2π √(h / g)
    Tension F_T = m g / cos θ, net (centripetal) force F_c = m g tan θ.
    """
    theta = config.angle_rad
    radius = config.length * math.sin(theta)
    height = config.length * math.cos(theta)
    period = 2.0 * math.pi * math.sqrt(height / config.g)
    weight = config.mass * config.g
    return ConicalPendulumSolution(
        radius=radius,
        height=height,
        speed=2.0 * math.pi * radius / period,
        period=period,
        tension=weight / math.cos(theta),
        centripetal_force=weight * math.tan(theta),
    )


@dataclass(frozen=True)
class BankedTrackSolution:
    ideal_speed: float
    normal_force: float
    centripetal_force: float


def banked_track(
    mass: float, radius: float, angle_deg: float, g: float = STANDARD_GRAVITY
) -> BankedTrackSolution:
    """
    Car on a frictionless banked curve.

    The design speed is the one where the horizontal component of the
    normal force alone supplies the centripetal force:
        v = √(r g tan θ),  N = m g / cos θ.
    """
    _require_positive(mass=mass, radius=radius)
    if not 0.0 <= angle_deg < 90.0:
        raise ConfigurationError("angle_deg", angle_deg, "must be in [0, 90)")
    theta = math.radians(angle_deg)
    speed = math.sqrt(radius * g * math.tan(theta))
    return BankedTrackSolution(
        ideal_speed=speed,
        normal_force=mass * g / math.cos(theta),
        centripetal_force=mass * speed * speed / radius,
    )


class LoopPosition(StrEnum):
    BOTTOM_INNER = "bottom-inner"   # inside a dip or at the bottom of a loop
    TOP_INNER = "top-inner"         # inside, upside down at the top of a loop
    TOP_OUTER = "top-outer"         # on top of a hump


def loop_normal_force(
    position: LoopPosition | str,
    mass: float,
    radius: float,
    speed: float,
    g: float = STANDARD_GRAVITY,
) -> float:
    """
    Normal force at the key points of vertical circular motion.

    With F_c = m v² / r:
        bottom-inner  N = F_c + m g
        top-inner     N = F_c - m g
        top-outer     N = m g - F_c

    A negative result means the track can no longer hold the body in
    contact at that speed (it falls away or leaves the hump). The sign is
    returned unchanged so callers can show it.

    Raises:
        ValueError: For an unknown position name.
    """
    _require_positive(mass=mass, radius=radius)
    position = LoopPosition(position)
    fc = mass * speed * speed / radius
    weight = mass * g
    if position is LoopPosition.BOTTOM_INNER:
        return fc + weight
    if position is LoopPosition.TOP_INNER:
        return fc - weight
    return weight - fc


# =============================================================================
# Gravitation
# =============================================================================

def orbital_period(radius: float, central_mass: float = EARTH_MASS, G: float = G_NEWTON) -> float:
    """Kepler's third law for a circular orbit, T = 2π √(r³ / GM)."""
    _require_positive(radius=radius, central_mass=central_mass)
    return 2.0 * math.pi * math.sqrt(radius ** 3 / (G * central_mass))


def field_strength(
    central_mass: float = EARTH_MASS,
    r: float = EARTH_RADIUS,
    G: float = G_NEWTON,
) -> float:
    """Gravitational field strength g = G M / r², at the Earth's surface by default."""
    _require_positive(central_mass=central_mass, r=r)
    return G * central_mass / (r * r)


def gravitational_work(
    mass: float,
    r1: float,
    r2: float,
    central_mass: float = EARTH_MASS,
    G: float = G_NEWTON,
) -> float:
    """
    Work needed to move `mass` from radius r1 to r2.

    W = G M m (1/r1 - 1/r2), positive when moving outward. This equals the
    area under the force-distance curve between the two radii.
    """
    _require_positive(mass=mass, r1=r1, r2=r2, central_mass=central_mass)
    return G * central_mass * mass * (1.0 / r1 - 1.0 / r2)


# =============================================================================
# Point charges
# =============================================================================

class ChargeLayout(StrEnum):
    COLLINEAR_2 = "collinear-2"
    COLLINEAR_3 = "collinear-3"
    RIGHT_ANGLE = "right-angle"
    SQUARE = "square"


# Positions in units of the layout distance d
_LAYOUT_POSITIONS: dict[ChargeLayout, tuple[tuple[float, float], ...]] = {
    ChargeLayout.COLLINEAR_2: ((-0.5, 0.0), (0.5, 0.0)),
    ChargeLayout.COLLINEAR_3: ((-1.0, 0.0), (0.0, 0.0), (1.0, 0.0)),
    ChargeLayout.RIGHT_ANGLE: ((0.0, 1.0), (0.0, 0.0), (1.0, 0.0)),
    ChargeLayout.SQUARE: ((-0.5, 0.5), (0.5, 0.5), (0.5, -0.5), (-0.5, -0.5)),
}


@dataclass(frozen=True)
class PointCharge:
    """A fixed charge in coulombs at [x, y] in metres."""
    position: tuple[float, float]
    charge: float


def charge_layout(
    layout: ChargeLayout | str,
    charges_uc: Sequence[float],
    distance: float = 0.5,
) -> list[PointCharge]:
    """
    Place charges given in microcoulombs on one of the calculator layouts.

    collinear-2  q1, q2 at ∓d/2 on the x axis
    collinear-3  q1, q2, q3 at -d, 0, d on the x axis
    right-angle  q1 at (0, d), q2 at the corner, q3 at (d, 0)
    square       q1..q4 clockwise from the top-left corner, side d

    Raises:
        ConfigurationError: If the distance is not positive or the number
            of charges does not match the layout.
        ValueError: For an unknown layout name.
    """
    _require_positive(distance=distance)
    positions = _LAYOUT_POSITIONS[ChargeLayout(layout)]
    if len(charges_uc) != len(positions):
        raise ConfigurationError("charges_uc", tuple(charges_uc), f"{layout} takes {len(positions)} charges")
    return [
        PointCharge(position=(x * distance, y * distance), charge=q * 1e-6)
        for (x, y), q in zip(positions, charges_uc)
    ]


def coulomb_net_force(charges: Sequence[PointCharge], target: int = 1, k: float = K_COULOMB) -> np.ndarray:
    """
    Net electrostatic force on charges[target] from all the others, in newtons.

    Each pair contributes k q_t q_c / r² along the line from the other
    charge to the target: away from it for like charges, towards it for
    unlike ones. The default target is the second charge.

    Raises:
        ConfigurationError: If the target index is out of range or two
            charges share a position.
    """
    if not 0 <= target < len(charges):
        raise ConfigurationError("target", target, f"must index one of {len(charges)} charges")
    t = charges[target]
    pt = np.asarray(t.position, dtype=np.float64)
    total = np.zeros(2)
    for i, c in enumerate(charges):
        if i == target:
            continue
        offset = pt - np.asarray(c.position, dtype=np.float64)
        r = float(np.linalg.norm(offset))
        if r == 0.0:
            raise ConfigurationError("position", c.position, "two charges cannot coincide")
        total += (k * t.charge * c.charge / (r * r * r)) * offset
    return total

# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for the energy charts of the panels and for verifying simulation
correctness. In a closed system with no dissipation (drag, inelastic
collisions) the total energy should remain constant within integration
error, and momentum is conserved through every collision.

Energy read-outs return plain dicts keyed by series name so they can be
pushed straight into a HistorySample.
"""
from __future__ import annotations
import math

import numpy as np

from ..config import BungeeConfig, ProjectileConfig, SpringConfig, VerticalCircleConfig
from ..types import AngularState, MotionState, Quantity
from .forces import vertical_circle_rate


def kinetic_energy(mass: float, velocity: Quantity) -> float:
    """
    Kinetic energy of a point mass.

    T = 0.5 * m * |v|²

    Args:
        mass: Mass in kg.
        velocity: Scalar or vector velocity in m/s.

    Returns:
        Kinetic energy in Joules.
    """
    v_sq = float(np.dot(velocity, velocity))
    return 0.5 * mass * v_sq


def momentum(mass: float, velocity: Quantity) -> Quantity:
    """p = m * v, scalar or vector to match the velocity."""
    return mass * velocity


def pair_momentum(m1: float, v1: float, m2: float, v2: float) -> float:
    """Total momentum of two collinear bodies."""
    return m1 * v1 + m2 * v2


def pair_kinetic_energy(m1: float, v1: float, m2: float, v2: float) -> float:
    """Total kinetic energy of two collinear bodies."""
    return kinetic_energy(m1, v1) + kinetic_energy(m2, v2)


def spring_energies(config: SpringConfig, state: MotionState) -> dict[str, float]:
    """
    Energy split of the vertical spring panel.

    Positions are measured downward from the suspension point, so the height
    above the potential-energy zero is platform_height - y.

    Returns:
        {"ke", "gpe", "epe", "total"} in Joules.
    """
    y = state.position
    extension = y - config.natural_length
    ke = kinetic_energy(config.mass, state.velocity)
    gpe = config.mass * config.g * (config.platform_height - y)
    epe = 0.5 * config.k * extension * extension
    return {"ke": ke, "gpe": gpe, "epe": epe, "total": ke + gpe + epe}


def bungee_energies(config: BungeeConfig, state: MotionState) -> dict[str, float]:
    """
    Energy split of the bungee panel.

    The cord stores energy only while stretched past its natural length.

    Returns:
        {"ke", "gpe", "epe", "total"} in Joules.
    """
    y = state.position
    extension = max(0.0, y - config.natural_length)
    ke = kinetic_energy(config.mass, state.velocity)
    gpe = config.mass * config.g * (config.platform_height - y)
    epe = 0.5 * config.k * extension * extension
    return {"ke": ke, "gpe": gpe, "epe": epe, "total": ke + gpe + epe}


def projectile_energies(config: ProjectileConfig, state: MotionState) -> dict[str, float]:
    """Kinetic, gravitational and total energy of the projectile, plus its coordinates."""
    x, y = float(state.position[0]), float(state.position[1])
    ke = kinetic_energy(config.mass, state.velocity)
    gpe = config.mass * config.g * y
    return {"x": x, "y": y, "ke": ke, "gpe": gpe, "total": ke + gpe}


def circle_energies(config: VerticalCircleConfig, state: AngularState) -> dict[str, float]:
    """
    Energy split on the vertical circle.

    Height is measured from the bottom of the circle, h = R + R sin θ.
    The speed follows from the energy relation at the current angle, so the
    read-out is valid before the first step too.
    """
    h = config.radius + config.radius * math.sin(state.angle)
    speed = abs(vertical_circle_rate(config, state)) * config.radius
    ke = kinetic_energy(config.mass, speed)
    gpe = config.mass * config.g * h
    return {"ke": ke, "gpe": gpe, "total": ke + gpe, "height": h, "speed": speed}

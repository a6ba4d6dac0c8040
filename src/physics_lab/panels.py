# MIT License (see LICENSE)
"""
Ready-made runners for the teaching panels.

Each factory pairs a config type with its force or rate law, its initial
state, its chart sampler and the chart density the panel uses. Every
factory accepts an optional config (defaults otherwise) and passes extra
keyword arguments (host, capacity, ...) through to the runner.

Example:
    sim = panels.bungee_jump(BungeeConfig(mass=80))
    sim.play()
    sim.host.run(duration=5.0)
    chart = sim.history.to_records()
"""
from __future__ import annotations
import math
from typing import Any, Callable

from .config import (
    BungeeConfig,
    CollisionConfig,
    ConicalPendulumConfig,
    LinkedMassesConfig,
    OrbitConfig,
    ProjectileConfig,
    PulleyConfig,
    SpringConfig,
    VerticalCircleConfig,
)
from .core import forces
from .core.invariants import (
    bungee_energies,
    circle_energies,
    kinetic_energy,
    projectile_energies,
    spring_energies,
)
from .simulation import AngularSimulation, CollisionSimulation, MotionSimulation, Simulation
from .types import AngularState, MotionState
from .util import norm


def _defaults(kwargs: dict[str, Any], **panel: Any) -> dict[str, Any]:
    """Panel chart settings, overridable by the caller."""
    return {**panel, **kwargs}


# =============================================================================
# Motion panels
# =============================================================================

def _stop_at_ground(config: ProjectileConfig, prev: MotionState, new: MotionState) -> MotionState:
    """Cut a step that crosses y = 0 at the crossing, found by linear interpolation."""
    y0, y1 = prev.position[1], new.position[1]
    if not (y1 < 0.0 <= y0):
        return new
    f = y0 / (y0 - y1)
    position = prev.position + f * (new.position - prev.position)
    position[1] = 0.0
    return MotionState(
        position=position,
        velocity=prev.velocity + f * (new.velocity - prev.velocity),
        elapsed_time=prev.elapsed_time + f * (new.elapsed_time - prev.elapsed_time),
    )


def projectile(config: ProjectileConfig | None = None, **kwargs: Any) -> MotionSimulation:
    """Projectile from (0, h0); halts exactly on the ground when it comes back down."""
    config = config or ProjectileConfig()
    return MotionSimulation(
        config,
        forces.projectile_gravity,
        initial=lambda c: MotionState.initial((0.0, c.height), c.launch_velocity),
        sampler=projectile_energies,
        constrain=_stop_at_ground,
        **_defaults(kwargs, sample_rate_hz=30.0, capacity=150,
                    halt_when=lambda c, s: s.position[1] <= 0.0 and s.velocity[1] <= 0.0),
    )


def vertical_spring(config: SpringConfig | None = None, **kwargs: Any) -> MotionSimulation:
    """Mass on a vertical spring, released from rest at `start`."""
    config = config or SpringConfig()
    return MotionSimulation(
        config,
        forces.hookean_spring,
        initial=lambda c: MotionState.initial(c.start, 0.0),
        sampler=spring_energies,
        **_defaults(kwargs, sample_rate_hz=30.0, capacity=100),
    )


def bungee_jump(config: BungeeConfig | None = None, **kwargs: Any) -> MotionSimulation:
    """Jumper released from rest at the platform."""
    config = config or BungeeConfig()
    return MotionSimulation(
        config,
        forces.bungee_cord,
        initial=lambda c: MotionState.initial(0.0, 0.0),
        sampler=bungee_energies,
        **_defaults(kwargs, sample_rate_hz=20.0, capacity=150, max_dt=0.032),
    )


def _pulley_sample(config: PulleyConfig, state: MotionState) -> dict[str, float]:
    a = forces.pulley_system(config, state)
    return {"position": state.position, "velocity": state.velocity, "tension": config.m1 * a}


def pulley_system(config: PulleyConfig | None = None, **kwargs: Any) -> MotionSimulation:
    """Table mass pulled by a hanging mass; halts when it reaches the pulley."""
    config = config or PulleyConfig()
    return MotionSimulation(
        config,
        forces.pulley_system,
        initial=lambda c: MotionState.initial(0.0, 0.0),
        sampler=_pulley_sample,
        **_defaults(kwargs, sample_rate_hz=30.0, capacity=100,
                    halt_when=lambda c, s: s.position >= c.travel),
    )


def _linked_sample(config: LinkedMassesConfig, state: MotionState) -> dict[str, float]:
    a = forces.linked_masses(config, state)
    # The rope accelerates the trailing mass m1 on its own.
    return {"position": state.position, "velocity": state.velocity, "tension": config.m1 * a}


def linked_masses(config: LinkedMassesConfig | None = None, **kwargs: Any) -> MotionSimulation:
    config = config or LinkedMassesConfig()
    return MotionSimulation(
        config,
        forces.linked_masses,
        initial=lambda c: MotionState.initial(0.0, 0.0),
        sampler=_linked_sample,
        **_defaults(kwargs, sample_rate_hz=30.0, capacity=100),
    )


def _orbit_sample(config: OrbitConfig, state: MotionState) -> dict[str, float]:
    r = norm(state.position)
    ke = kinetic_energy(config.mass, state.velocity)
    gpe = -config.G * config.central_mass * config.mass / r
    return {"r": r, "speed": state.speed(), "ke": ke, "gpe": gpe, "total": ke + gpe}


def orbit(config: OrbitConfig | None = None, **kwargs: Any) -> MotionSimulation:
    """
    Satellite started on a circular orbit.

    Runs 1000x faster than real time so one orbit takes seconds on screen.
    """
    config = config or OrbitConfig()
    return MotionSimulation(
        config,
        forces.central_gravity,
        initial=lambda c: MotionState.initial((c.radius, 0.0), (0.0, c.circular_speed)),
        sampler=_orbit_sample,
        **_defaults(kwargs, sample_rate_hz=0.1, capacity=500, time_scale=1000.0),
    )


# =============================================================================
# Circular-motion panels
# =============================================================================

def vertical_circle(config: VerticalCircleConfig | None = None, **kwargs: Any) -> AngularSimulation:
    """Mass starting at the top of a vertical circle, moving clockwise."""
    config = config or VerticalCircleConfig()
    return AngularSimulation(
        config,
        forces.vertical_circle_rate,
        initial=lambda c: AngularState(angle=math.pi / 2),
        sampler=circle_energies,
        **_defaults(kwargs, sample_rate_hz=30.0, capacity=100),
    )


def _conical_sample(config: ConicalPendulumConfig, state: AngularState) -> dict[str, float]:
    r = config.length * math.sin(config.angle_rad)
    return {"angle": state.angle, "x": r * math.cos(state.angle), "y": r * math.sin(state.angle)}


def conical_pendulum(config: ConicalPendulumConfig | None = None, **kwargs: Any) -> AngularSimulation:
    config = config or ConicalPendulumConfig()
    return AngularSimulation(
        config,
        forces.conical_pendulum_rate,
        initial=lambda c: AngularState(angle=0.0),
        sampler=_conical_sample,
        **_defaults(kwargs, sample_rate_hz=30.0, capacity=100),
    )


# =============================================================================
# Collision panel
# =============================================================================

def collision(config: CollisionConfig | None = None, **kwargs: Any) -> CollisionSimulation:
    config = config or CollisionConfig()
    return CollisionSimulation(config, **_defaults(kwargs, sample_rate_hz=30.0, capacity=100))


PANELS: dict[str, Callable[..., Simulation]] = {
    ProjectileConfig.KIND: projectile,
    SpringConfig.KIND: vertical_spring,
    BungeeConfig.KIND: bungee_jump,
    PulleyConfig.KIND: pulley_system,
    LinkedMassesConfig.KIND: linked_masses,
    OrbitConfig.KIND: orbit,
    VerticalCircleConfig.KIND: vertical_circle,
    ConicalPendulumConfig.KIND: conical_pendulum,
    CollisionConfig.KIND: collision,
}


def create(config, **kwargs: Any) -> Simulation:
    """Build the runner that matches a config instance."""
    try:
        factory = PANELS[config.KIND]
    except (AttributeError, KeyError):
        raise ValueError(f"No panel for config {config!r}") from None
    return factory(config, **kwargs)

# MIT License (see LICENSE)
"""
Core motion components.

This subpackage provides:
    - Force laws: pure (config, state) -> acceleration functions.
    - Integrators: semi-implicit Euler for point masses, angle stepping
      for circular motion.
    - Invariants: energies and momenta for charts and checks.
    - Analytic: closed-form reference solutions shown by the panels,
      including the point-charge force calculator.

Typical usage:
    from physics_lab.core import projectile_gravity, semi_implicit_euler

    state = semi_implicit_euler(config, projectile_gravity, state, dt=1/60)
"""
from .forces import (
    no_force,
    projectile_gravity,
    hookean_spring,
    bungee_cord,
    pulley_system,
    linked_masses,
    central_gravity,
    vertical_circle_rate,
    conical_pendulum_rate,
)
from .integrators import ForceLaw, RateLaw, semi_implicit_euler, step_angular
from .invariants import (
    kinetic_energy,
    momentum,
    pair_momentum,
    pair_kinetic_energy,
    spring_energies,
    bungee_energies,
    projectile_energies,
    circle_energies,
)

__all__ = [
    # Forces
    "no_force",
    "projectile_gravity",
    "hookean_spring",
    "bungee_cord",
    "pulley_system",
    "linked_masses",
    "central_gravity",
    "vertical_circle_rate",
    "conical_pendulum_rate",
    # Integrators
    "ForceLaw",
    "RateLaw",
    "semi_implicit_euler",
    "step_angular",
    # Invariants
    "kinetic_energy",
    "momentum",
    "pair_momentum",
    "pair_kinetic_energy",
    "spring_energies",
    "bungee_energies",
    "projectile_energies",
    "circle_energies",
]

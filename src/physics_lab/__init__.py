# MIT License (see LICENSE)
"""
physics_lab - Simulation and field-computation core for physics teaching panels.

This package provides the numeric side of interactive panels: stepping
point masses and angles under pluggable force laws, resolving collinear
collisions, evaluating and tracing superposed 2-D fields, and keeping a
bounded chart history, all driven by a host-agnostic frame scheduler.

Main entry points:
    - panels: Ready-made runners (projectile, bungee_jump, collision, ...).
    - MotionSimulation, AngularSimulation, CollisionSimulation: Runners.
    - SimulationConfig subclasses: Validated, immutable parameters.
    - SourceCollection, field_at, trace_field_lines: Field panels.

Submodules:
    - core: Force laws, integrators, invariants, closed-form solutions.
    - collision: Resolver, latched detector, time of impact.
    - field: Sources, superposition, field lines.
    - host: Frame host adapters.
    - io: JSON serialization.

Example:
    from physics_lab import panels, ProjectileConfig

    sim = panels.projectile(ProjectileConfig(speed=20, angle_deg=45))
    sim.play()
    sim.host.run(duration=3.0)
    print(sim.state.position, len(sim.history))
"""
from . import panels
from .config import (
    BungeeConfig,
    CollisionConfig,
    ConicalPendulumConfig,
    LinkedMassesConfig,
    OrbitConfig,
    ProjectileConfig,
    PulleyConfig,
    Range,
    SimulationConfig,
    SpringConfig,
    VerticalCircleConfig,
)
from .errors import ConfigurationError
from .field import FieldCalibration, FieldSource, SourceCollection, SourceKind, field_at, trace_field_lines
from .history import HistoryBuffer, SamplingGate
from .host import FrameHost, ManualFrameHost
from .logging_config import setup_logging
from .scheduler import FrameScheduler, RunState
from .simulation import AngularSimulation, CollisionSimulation, MotionSimulation, Simulation
from .types import AngularState, Block, FieldSample, HistorySample, MotionState

__all__ = [
    "panels",
    # Configs
    "SimulationConfig",
    "Range",
    "ProjectileConfig",
    "SpringConfig",
    "BungeeConfig",
    "PulleyConfig",
    "LinkedMassesConfig",
    "OrbitConfig",
    "VerticalCircleConfig",
    "ConicalPendulumConfig",
    "CollisionConfig",
    "ConfigurationError",
    # State
    "MotionState",
    "AngularState",
    "Block",
    "FieldSample",
    "HistorySample",
    # Runners
    "Simulation",
    "MotionSimulation",
    "AngularSimulation",
    "CollisionSimulation",
    "FrameScheduler",
    "RunState",
    "FrameHost",
    "ManualFrameHost",
    "HistoryBuffer",
    "SamplingGate",
    # Fields
    "SourceKind",
    "FieldSource",
    "SourceCollection",
    "FieldCalibration",
    "field_at",
    "trace_field_lines",
    "setup_logging",
]

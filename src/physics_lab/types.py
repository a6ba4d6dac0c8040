# MIT License (see LICENSE)
"""
Core value types for the simulation core.

Defines the fundamental data structures:
- MotionState: position/velocity of a point mass, 1-D (floats) or 2-D (Vector2).
- AngularState: angle/angular velocity for panels that integrate an angle.
- Block: one collinear body of a collision panel.
- FieldSample, HistorySample: ephemeral read-outs for the view layer.

States are immutable values. The integrator returns a new state each step
instead of editing the old one, so a snapshot handed to a view can never
change underneath it.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Union

import numpy as np

from .util import f64, is_scalar

# A 2D vector is a float64 array of shape (2,).
Vector2 = np.ndarray

# 1-D panels integrate plain floats, 2-D panels integrate Vector2.
Quantity = Union[float, Vector2]


def _as_quantity(x) -> Quantity:
    """Normalize scalars to float and sequences to float64 arrays."""
    if is_scalar(x):
        return float(x)
    return f64(x)


# =============================================================================
# Motion states
# =============================================================================

@dataclass(frozen=True, eq=False)
class MotionState:
    """
    Kinematic state of a single point mass.

    Attributes:
        position: Position in metres (float for 1-D panels, [x, y] for 2-D).
        velocity: Velocity in m/s, same shape as position.
        elapsed_time: Simulated time since the last reset, in seconds.
            Monotonically non-decreasing within a run.
    """
    position: Quantity
    velocity: Quantity
    elapsed_time: float = 0.0

    def __post_init__(self) -> None:
        """Store positions/velocities as float or float64 arrays."""
        position = _as_quantity(self.position)
        velocity = _as_quantity(self.velocity)
        if np.shape(position) != np.shape(velocity):
            raise ValueError(
                f"position and velocity shapes differ: {np.shape(position)} vs {np.shape(velocity)}"
            )
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "velocity", velocity)
        object.__setattr__(self, "elapsed_time", float(self.elapsed_time))

    @classmethod
    def initial(cls, position, velocity) -> "MotionState":
        """State at t = 0."""
        return cls(position=position, velocity=velocity, elapsed_time=0.0)

    @property
    def is_planar(self) -> bool:
        """True for 2-D states."""
        return not is_scalar(self.position)

    def with_velocity(self, velocity) -> "MotionState":
        """Copy with a new velocity (used when a collision is resolved)."""
        return replace(self, velocity=velocity)

    def speed(self) -> float:
        """Magnitude of the velocity."""
        return float(np.linalg.norm(self.velocity))


@dataclass(frozen=True)
class AngularState:
    """
    State of a body constrained to a circle, parameterized by angle.

    Circular-motion panels integrate the angle directly instead of a
    Cartesian position.

    Attributes:
        angle: Angle in radians measured counterclockwise from +x.
        omega: Angular velocity in rad/s used for the last step.
        elapsed_time: Simulated time since the last reset, in seconds.
    """
    angle: float
    omega: float = 0.0
    elapsed_time: float = 0.0


# =============================================================================
# Collision bodies
# =============================================================================

@dataclass
class Block:
    """
    A rigid block sliding on a 1-D track.

    Attributes:
        mass: Mass in kg (> 0).
        width: Width along the track in metres (> 0).
        state: Current 1-D MotionState (scalar position/velocity).
    """
    mass: float
    width: float
    state: MotionState

    @property
    def position(self) -> float:
        return self.state.position

    @property
    def velocity(self) -> float:
        return self.state.velocity


# =============================================================================
# Read-outs
# =============================================================================

@dataclass(frozen=True, eq=False)
class FieldSample:
    """
    Field vector sampled at one point.

    Attributes:
        position: Sample point [x, y] in normalized panel coordinates.
        vector: Field vector [fx, fy].
        magnitude: |vector|.
    """
    position: Vector2
    vector: Vector2
    magnitude: float


@dataclass(frozen=True)
class HistorySample:
    """
    One time-stamped chart point.

    Attributes:
        time: Simulated time in seconds.
        values: Read-only mapping of series name to value
            (e.g. {"ke": 12.0, "gpe": 30.5, "total": 42.5}).
    """
    time: float
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", float(self.time))
        object.__setattr__(
            self, "values", MappingProxyType({k: float(v) for k, v in self.values.items()})
        )

    def to_record(self) -> dict[str, float]:
        """Flat row for chart consumers: {"time": t, **values}."""
        return {"time": self.time, **self.values}

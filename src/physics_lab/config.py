# MIT License (see LICENSE)
"""
Simulation configuration with declared parameter ranges.

Every panel is parameterized by a frozen SimulationConfig subclass. Each
subclass declares the valid interval of its parameters in RANGES; an
out-of-range or non-finite value is rejected in __post_init__, so an
invalid configuration cannot exist and a panel can never start running
with one.

Configs are immutable per run. Changing a parameter means building a new
config (config.replace(...) or Config.from_ui(...)) and handing it to the
simulation, which resets. In-flight state is never edited live.

Example:
    cfg = ProjectileConfig(speed=20, angle_deg=45)
    steeper = cfg.replace(angle_deg=60)
    from_slider = ProjectileConfig.from_ui(speed=250)   # clamped to 100
"""
from __future__ import annotations
from dataclasses import asdict, dataclass, fields, replace
import logging
import math
from typing import Any, ClassVar

from .constants import EARTH_MASS, G_NEWTON, STANDARD_GRAVITY
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# Ranges
# =============================================================================

@dataclass(frozen=True)
class Range:
    """
    A closed, open or half-open interval of valid values.

    Attributes:
        low: Lower bound (may be -inf).
        high: Upper bound (may be +inf).
        low_inclusive: Whether `low` itself is valid.
        high_inclusive: Whether `high` itself is valid.
    """
    low: float = -math.inf
    high: float = math.inf
    low_inclusive: bool = True
    high_inclusive: bool = True

    def contains(self, x: float) -> bool:
        above = x >= self.low if self.low_inclusive else x > self.low
        below = x <= self.high if self.high_inclusive else x < self.high
        return above and below

    def clamp(self, x: float) -> float:
        """
        Nearest valid value to x.

        An open bound has no nearest valid value (a mass of 0 must not turn
        into a subnormal), so a value at or past it is returned unchanged
        and validation rejects it.
        """
        if x < self.low and self.low_inclusive:
            return self.low
        if x > self.high and self.high_inclusive:
            return self.high
        return x

    def describe(self) -> str:
        left = "[" if self.low_inclusive else "("
        right = "]" if self.high_inclusive else ")"
        return f"{left}{self.low:g}, {self.high:g}{right}"


POSITIVE = Range(0.0, math.inf, low_inclusive=False)
NON_NEGATIVE = Range(0.0, math.inf)
UNIT_INTERVAL = Range(0.0, 1.0)


# =============================================================================
# Base class
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Base class for immutable, validated panel parameters.

    Subclasses are frozen dataclasses whose fields are all numeric. They set:
        KIND: Name used by the JSON serializer.
        RANGES: Map of field name to its valid Range. Fields without an
            entry only need to be finite.
    """
    KIND: ClassVar[str] = ""
    RANGES: ClassVar[dict[str, Range]] = {}

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f.name, value, "must be a number")
            value = float(value)
            if not math.isfinite(value):
                raise ConfigurationError(f.name, value, "must be finite")
            rng = self.RANGES.get(f.name)
            if rng is not None and not rng.contains(value):
                raise ConfigurationError(f.name, value, f"must be in {rng.describe()}")
            object.__setattr__(self, f.name, value)
        self.validate()

    def validate(self) -> None:
        """Hook for checks spanning several fields. Raise ConfigurationError on failure."""

    def replace(self, **changes: float) -> "SimulationConfig":
        """Return a new, re-validated config with some parameters changed."""
        return replace(self, **changes)

    @classmethod
    def from_ui(cls, **values: float) -> "SimulationConfig":
        """
        Build a config from raw control values, clamping each into its range.

        Sliders and text inputs may overshoot; clamping here keeps bad values
        from ever reaching a force law. Non-finite values, and values at or
        past an open bound (mass = 0), are still rejected.

        Raises:
            ConfigurationError: If a value cannot be clamped into range.
        """
        clamped: dict[str, float] = {}
        for name, value in values.items():
            rng = cls.RANGES.get(name)
            if rng is not None and isinstance(value, (int, float)) and math.isfinite(value):
                fixed = rng.clamp(float(value))
                if fixed != value:
                    logger.warning("%s.%s=%r clamped to %r", cls.__name__, name, value, fixed)
                value = fixed
            clamped[name] = value
        return cls(**clamped)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


# =============================================================================
# Motion panels
# =============================================================================

@dataclass(frozen=True)
class ProjectileConfig(SimulationConfig):
    """
    Projectile launched from height `height` with speed `speed` at `angle_deg`.

    Attributes:
        speed: Launch speed in m/s.
        angle_deg: Launch angle above horizontal in degrees.
        height: Launch height above the ground in metres.
        mass: Projectile mass in kg (only matters when drag > 0).
        g: Gravitational acceleration in m/s².
        drag: Linear drag coefficient c in kg/s (F = -c·v).
    """
    KIND: ClassVar[str] = "projectile"
    RANGES: ClassVar[dict[str, Range]] = {
        "speed": Range(0.0, 100.0),
        "angle_deg": Range(0.0, 90.0),
        "height": Range(0.0, 100.0),
        "mass": POSITIVE,
        "g": POSITIVE,
        "drag": NON_NEGATIVE,
    }

    speed: float = 20.0
    angle_deg: float = 45.0
    height: float = 0.0
    mass: float = 1.0
    g: float = STANDARD_GRAVITY
    drag: float = 0.0

    @property
    def angle_rad(self) -> float:
        return math.radians(self.angle_deg)

    @property
    def launch_velocity(self) -> tuple[float, float]:
        return (self.speed * math.cos(self.angle_rad), self.speed * math.sin(self.angle_rad))


@dataclass(frozen=True)
class SpringConfig(SimulationConfig):
    """
    Mass hanging from a vertical Hookean spring.

    Positions are measured downward from the suspension point, so the spring
    extension is `y - natural_length`. The spring can push as well as pull.

    Attributes:
        mass: Hanging mass in kg.
        k: Spring constant in N/m.
        natural_length: Unstretched spring length in metres.
        start: Initial displacement below the suspension point in metres.
        platform_height: Height of the suspension point above the zero of
            gravitational potential energy, in metres.
        g: Gravitational acceleration in m/s².
    """
    KIND: ClassVar[str] = "spring"
    RANGES: ClassVar[dict[str, Range]] = {
        "mass": POSITIVE,
        "k": POSITIVE,
        "natural_length": NON_NEGATIVE,
        "start": NON_NEGATIVE,
        "platform_height": POSITIVE,
        "g": POSITIVE,
    }

    mass: float = 2.0
    k: float = 50.0
    natural_length: float = 15.0
    start: float = 20.0
    platform_height: float = 40.0
    g: float = STANDARD_GRAVITY


@dataclass(frozen=True)
class BungeeConfig(SimulationConfig):
    """
    Jumper attached to a bungee cord, released from rest at the platform.

    The cord only pulls: it exerts no force while its length is below
    `natural_length`.

    Attributes:
        mass: Jumper mass in kg.
        k: Cord stiffness in N/m.
        natural_length: Unstretched cord length in metres.
        platform_height: Platform height above the ground in metres.
        g: Gravitational acceleration in m/s².
    """
    KIND: ClassVar[str] = "bungee"
    RANGES: ClassVar[dict[str, Range]] = {
        "mass": POSITIVE,
        "k": POSITIVE,
        "natural_length": POSITIVE,
        "platform_height": POSITIVE,
        "g": POSITIVE,
    }

    mass: float = 70.0
    k: float = 50.0
    natural_length: float = 20.0
    platform_height: float = 50.0
    g: float = STANDARD_GRAVITY


@dataclass(frozen=True)
class PulleyConfig(SimulationConfig):
    """Mass m1 on a frictionless table pulled by hanging mass m2 over a pulley."""
    KIND: ClassVar[str] = "pulley"
    RANGES: ClassVar[dict[str, Range]] = {
        "m1": POSITIVE,
        "m2": POSITIVE,
        "g": POSITIVE,
        "travel": POSITIVE,
    }

    m1: float = 10.0
    m2: float = 5.0
    g: float = STANDARD_GRAVITY
    # Distance m1 can move before it reaches the pulley, in metres.
    travel: float = 4.0


@dataclass(frozen=True)
class LinkedMassesConfig(SimulationConfig):
    """Two masses joined by a light rope, pulled along a frictionless surface by `force`."""
    KIND: ClassVar[str] = "linked-masses"
    RANGES: ClassVar[dict[str, Range]] = {
        "m1": POSITIVE,
        "m2": POSITIVE,
        "force": NON_NEGATIVE,
    }

    m1: float = 10.0
    m2: float = 5.0
    force: float = 30.0


@dataclass(frozen=True)
class OrbitConfig(SimulationConfig):
    """
    Satellite on a circular orbit of `radius` around `central_mass`.

    Attributes:
        central_mass: Mass of the central body in kg.
        radius: Orbital radius measured from the centre, in metres.
        mass: Satellite mass in kg.
        G: Gravitational constant.
    """
    KIND: ClassVar[str] = "orbit"
    RANGES: ClassVar[dict[str, Range]] = {
        "central_mass": POSITIVE,
        "radius": POSITIVE,
        "mass": POSITIVE,
        "G": POSITIVE,
    }

    central_mass: float = EARTH_MASS
    radius: float = 1e7
    mass: float = 1000.0
    G: float = G_NEWTON

    @property
    def circular_speed(self) -> float:
        return math.sqrt(self.G * self.central_mass / self.radius)


# =============================================================================
# Circular-motion panels
# =============================================================================

@dataclass(frozen=True)
class VerticalCircleConfig(SimulationConfig):
    """
    Mass on a vertical circle whose speed follows from energy conservation.

    Attributes:
        radius: Circle radius in metres.
        mass: Mass in kg.
        v_top: Speed at the top of the circle in m/s.
        g: Gravitational acceleration in m/s².
    """
    KIND: ClassVar[str] = "vertical-circle"
    RANGES: ClassVar[dict[str, Range]] = {
        "radius": POSITIVE,
        "mass": POSITIVE,
        "v_top": NON_NEGATIVE,
        "g": POSITIVE,
    }

    radius: float = 5.0
    mass: float = 2.0
    v_top: float = 8.0
    g: float = STANDARD_GRAVITY

    @property
    def total_energy(self) -> float:
        """KE + GPE, fixed by the speed at the top (height 2R above the bottom)."""
        return 0.5 * self.mass * self.v_top ** 2 + self.mass * self.g * 2.0 * self.radius


@dataclass(frozen=True)
class ConicalPendulumConfig(SimulationConfig):
    """Bob on a string of `length` sweeping a horizontal circle at `angle_deg` from vertical."""
    KIND: ClassVar[str] = "conical-pendulum"
    RANGES: ClassVar[dict[str, Range]] = {
        "length": POSITIVE,
        "mass": POSITIVE,
        "angle_deg": Range(0.0, 90.0, low_inclusive=False, high_inclusive=False),
        "g": POSITIVE,
    }

    length: float = 2.0
    mass: float = 0.5
    angle_deg: float = 30.0
    g: float = STANDARD_GRAVITY

    @property
    def angle_rad(self) -> float:
        return math.radians(self.angle_deg)


# =============================================================================
# Collision panel
# =============================================================================

@dataclass(frozen=True)
class CollisionConfig(SimulationConfig):
    """
    Two blocks approaching each other on a frictionless track.

    Attributes:
        m1, m2: Block masses in kg.
        v1, v2: Initial velocities in m/s (positive to the right).
        restitution: Coefficient of restitution e, 0 = perfectly inelastic,
            1 = perfectly elastic.
        x1, x2: Initial block centres in metres.
        width: Block width in metres.
    """
    KIND: ClassVar[str] = "collision"
    RANGES: ClassVar[dict[str, Range]] = {
        "m1": POSITIVE,
        "m2": POSITIVE,
        "restitution": UNIT_INTERVAL,
        "width": POSITIVE,
    }

    m1: float = 2.0
    v1: float = 4.0
    m2: float = 4.0
    v2: float = -2.0
    restitution: float = 1.0
    x1: float = -3.0
    x2: float = 3.0
    width: float = 1.2

    def validate(self) -> None:
        if self.x1 >= self.x2:
            raise ConfigurationError("x1", self.x1, f"block 1 must start left of block 2 (x2={self.x2})")


CONFIG_TYPES: dict[str, type[SimulationConfig]] = {
    cls.KIND: cls
    for cls in (
        ProjectileConfig,
        SpringConfig,
        BungeeConfig,
        PulleyConfig,
        LinkedMassesConfig,
        OrbitConfig,
        VerticalCircleConfig,
        ConicalPendulumConfig,
        CollisionConfig,
    )
}


def config_type(kind: str) -> type[SimulationConfig]:
    """Look up a config class by its KIND name."""
    try:
        return CONFIG_TYPES[kind]
    except KeyError:
        raise ValueError(f"Unknown config type: '{kind}'") from None


def describe_ranges(cls: type[SimulationConfig]) -> dict[str, Any]:
    """Human-readable valid ranges of a config class, for control labels."""
    return {name: rng.describe() for name, rng in cls.RANGES.items()}

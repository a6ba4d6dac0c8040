# MIT License (see LICENSE)
"""
Rendering calibration of the field panels.

The per-kind scale factors were tuned so that arrows and lines look right
on a unit-square panel. They are not physical constants and are not
dimensionally consistent with one another; a point charge of strength 1
and a bar magnet of strength 1 are not comparable quantities. Keep them
together here so a panel can be re-tuned without touching any field law.
"""
from __future__ import annotations
from dataclasses import dataclass, replace

from ..constants import FIELD_EPS


@dataclass(frozen=True)
class FieldCalibration:
    """
    Scale factors, geometry and thresholds for field evaluation.

    Attributes:
        eps: Guard radius. Any contribution evaluated closer than this to a
            source centre or pole is zero.
        point_charge_scale: k in E = k q / r².
        dipole_scale: Pole strength of a bar magnet.
        dipole_half_length: Distance from magnet centre to each pole.
        wire_scale: k in B = k I / r.
        loop_scale, loop_radius: Axial field k R² / (r² + R²)^(3/2).
        solenoid_scale: Uniform interior field.
        solenoid_length, solenoid_radius: Extent of the interior region.
        solenoid_exterior: Moment of the exterior dipole, relative to
            solenoid_scale.
        grid_min_magnitude: Arrows weaker than this are not drawn.
        trace_min_magnitude: A field line stops where the field is weaker.
    """
    eps: float = FIELD_EPS
    point_charge_scale: float = 1000.0
    dipole_scale: float = 0.005
    dipole_half_length: float = 0.05
    wire_scale: float = 0.0005
    loop_scale: float = 0.001
    loop_radius: float = 0.05
    solenoid_scale: float = 0.002
    solenoid_length: float = 0.15
    solenoid_radius: float = 0.04
    solenoid_exterior: float = 0.1
    grid_min_magnitude: float = 1e-4
    trace_min_magnitude: float = 1e-4

    def __post_init__(self) -> None:
        for name in ("eps", "dipole_half_length", "loop_radius", "solenoid_length", "solenoid_radius"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def magnetic(cls) -> "FieldCalibration":
        """Settings of the magnetic field explorer."""
        return cls()

    @classmethod
    def electric(cls) -> "FieldCalibration":
        """Settings of the electric field explorer (wider guard, stronger thresholds)."""
        return replace(cls(), eps=0.02, grid_min_magnitude=0.01, trace_min_magnitude=0.1)


DEFAULT_CALIBRATION = FieldCalibration()

# MIT License (see LICENSE)
"""
Per-kind field laws.

Each law computes the field of one source of unit orientation, in the
source's local frame (source at the origin, its axis along +x):

    point-charge   E = k q r / |r|³                     (inverse square, radial)
    dipole         two opposite poles at ±d on the axis (bar magnet)
    straight-wire  B = k I / r, tangential (-y, x) / r   (2-D view of a circulating field)
    loop           B = k R² / (r² + R²)^(3/2), along the axis
    solenoid       uniform k inside |x| < L/2, |y| < R; point dipole outside

Every law returns zero when the query point is within `eps` of the source
centre or one of its poles.

LAWS and POLES are keyed by SourceKind and must cover every member; the
check at the bottom of the module fails the import otherwise, so a new
kind cannot be added without its law.
"""
from __future__ import annotations
import math
from typing import Callable

import numpy as np

from ..types import Vector2
from ..util import f64, norm2, rotate
from .calibration import FieldCalibration
from .sources import FieldSource, SourceKind

# (local point, strength, calibration) -> local field vector
FieldLaw = Callable[[np.ndarray, float, FieldCalibration], np.ndarray]

# (strength, calibration) -> [(local pole position, sign)]
PoleLayout = Callable[[float, FieldCalibration], list[tuple[np.ndarray, float]]]


def _zero() -> np.ndarray:
    return np.zeros(2, dtype=np.float64)


def _inverse_square(rel: np.ndarray, eps: float) -> np.ndarray | None:
    """rel / |rel|³, or None inside the guard radius."""
    r2 = norm2(rel)
    if r2 < eps * eps:
        return None
    return rel / (r2 * math.sqrt(r2))


def point_charge_field(local: np.ndarray, strength: float, cal: FieldCalibration) -> np.ndarray:
    term = _inverse_square(local, cal.eps)
    if term is None:
        return _zero()
    return (cal.point_charge_scale * strength) * term


def dipole_field(local: np.ndarray, strength: float, cal: FieldCalibration) -> np.ndarray:
    d = cal.dipole_half_length
    north = _inverse_square(local - np.array([d, 0.0]), cal.eps)
    south = _inverse_square(local + np.array([d, 0.0]), cal.eps)
    if north is None or south is None:
        return _zero()
    return (cal.dipole_scale * strength) * (north - south)


def straight_wire_field(local: np.ndarray, strength: float, cal: FieldCalibration) -> np.ndarray:
    r2 = norm2(local)
    if r2 < cal.eps * cal.eps:
        return _zero()
    # |B| = k/r along the tangent (-y, x)/r
    return (cal.wire_scale * strength / r2) * np.array([-local[1], local[0]], dtype=np.float64)


def loop_field(local: np.ndarray, strength: float, cal: FieldCalibration) -> np.ndarray:
    r2 = norm2(local)
    if r2 < cal.eps * cal.eps:
        return _zero()
    R2 = cal.loop_radius * cal.loop_radius
    mag = cal.loop_scale * strength * R2 / (r2 + R2) ** 1.5
    return np.array([mag, 0.0], dtype=np.float64)


def solenoid_field(local: np.ndarray, strength: float, cal: FieldCalibration) -> np.ndarray:
    k = cal.solenoid_scale * strength
    if abs(local[0]) < 0.5 * cal.solenoid_length and abs(local[1]) < cal.solenoid_radius:
        return np.array([k, 0.0], dtype=np.float64)
    r2 = norm2(local)
    if r2 < cal.eps * cal.eps:
        return _zero()
    r = math.sqrt(r2)
    # Point dipole with moment m along +x: (3 (m·r̂) r̂ - m) / r³
    rhat = local / r
    m = k * cal.solenoid_exterior
    return (m / (r2 * r)) * (3.0 * rhat[0] * rhat - np.array([1.0, 0.0]))


def _monopole_pole(strength: float, cal: FieldCalibration) -> list[tuple[np.ndarray, float]]:
    return [(_zero(), math.copysign(1.0, strength) if strength else 0.0)]


def _axial_poles(half_length: float, strength: float) -> list[tuple[np.ndarray, float]]:
    if strength == 0.0:
        return []
    sign = math.copysign(1.0, strength)
    return [
        (np.array([half_length, 0.0]), sign),
        (np.array([-half_length, 0.0]), -sign),
    ]


def _no_poles(strength: float, cal: FieldCalibration) -> list[tuple[np.ndarray, float]]:
    return []


LAWS: dict[SourceKind, FieldLaw] = {
    SourceKind.POINT_CHARGE: point_charge_field,
    SourceKind.DIPOLE: dipole_field,
    SourceKind.STRAIGHT_WIRE: straight_wire_field,
    SourceKind.LOOP: loop_field,
    SourceKind.SOLENOID: solenoid_field,
}

POLES: dict[SourceKind, PoleLayout] = {
    SourceKind.POINT_CHARGE: _monopole_pole,
    SourceKind.DIPOLE: lambda s, cal: _axial_poles(cal.dipole_half_length, s),
    SourceKind.STRAIGHT_WIRE: _no_poles,
    SourceKind.LOOP: _no_poles,
    SourceKind.SOLENOID: lambda s, cal: _axial_poles(0.5 * cal.solenoid_length, s),
}


def _check_exhaustive() -> None:
    for table_name, table in (("LAWS", LAWS), ("POLES", POLES)):
        missing = set(SourceKind) - set(table)
        if missing:
            raise RuntimeError(f"{table_name} has no entry for {sorted(missing)}")


_check_exhaustive()


def contribution(source: FieldSource, point, cal: FieldCalibration) -> Vector2:
    """
    Field of one source at a global point.

    The offset is rotated into the source frame, the kind's law is applied
    and the result is rotated back.
    """
    local = rotate(f64(point) - source.position, -source.orientation)
    field = LAWS[source.kind](local, source.strength, cal)
    return rotate(field, source.orientation)


def source_poles(source: FieldSource, cal: FieldCalibration) -> list[tuple[Vector2, float]]:
    """
    Global pole positions of a source with their sign (+1 north/positive).

    Point charges have one pole at their centre; dipoles and solenoids
    have a north and a south pole on their axis; wires and loops have none.
    """
    return [
        (source.position + rotate(local, source.orientation), sign)
        for local, sign in POLES[source.kind](source.strength, cal)
    ]

# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Provides low-level 2D vector operations used by the integrator, the force
laws and the field evaluator. All vector functions operate on 2D vectors
represented as numpy arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.

    Returns zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64)
    return v / n


def rotate(v: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate a 2D vector counterclockwise by `angle` radians.

    rotate(v, -θ) maps a global vector into a frame rotated by θ, and
    rotate(v_local, θ) maps it back.
    """
    c, s = np.cos(angle), np.sin(angle)
    return np.array([v[0] * c - v[1] * s, v[0] * s + v[1] * c], dtype=np.float64)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp a scalar into [lo, hi]."""
    return lo if x < lo else hi if x > hi else x


def clamp_unit_square(point) -> np.ndarray:
    """Clamp a pointer position into the normalized [0, 1] × [0, 1] panel square."""
    return np.array([clamp(float(point[0]), 0.0, 1.0), clamp(float(point[1]), 0.0, 1.0)], dtype=np.float64)


def is_scalar(x) -> bool:
    """True for plain numbers (1-D states), False for vectors."""
    return np.ndim(x) == 0

#!/usr/bin/env python3
"""
Vector helper functions for 3D operations.

Vectors are numpy float64 arrays of shape (3,). These are small helpers used
throughout the core; arithmetic itself is plain numpy.
"""
import math
from typing import Sequence

import numpy as np

Vector3 = np.ndarray


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vector3:
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: Sequence[float]) -> Vector3:
    """
    Coerce a 2- or 3-component sequence into a fresh float64 Vector3.

    2D inputs are placed in the xy-plane (z = 0).
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape == (2,):
        arr = np.append(arr, 0.0)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 2D or 3D vector, got shape {arr.shape}")
    return arr


def from_angle(angle: float, length: float = 1.0) -> Vector3:
    """Vector of the given length pointing at `angle` radians in the xy-plane."""
    return vec3(math.cos(angle) * length, math.sin(angle) * length, 0.0)


def vec_len(a: Vector3) -> float:
    return float(np.linalg.norm(a))


def vec_norm(a: Vector3, epsilon: float = 1e-12) -> Vector3:
    """Unit vector along `a`; the zero vector when |a| is below epsilon."""
    length = vec_len(a)
    if length < epsilon:
        return np.zeros(3, dtype=np.float64)
    return a / length


def vec_dist(a: Vector3, b: Vector3) -> float:
    return vec_len(b - a)

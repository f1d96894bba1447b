#!/usr/bin/env python3
"""
Data models for the N-body core.

This module defines the Body dataclass shared between the force field, the
integrators, the collision resolver and any external renderer, plus the
fixed-capacity ring buffer used for motion trails.

Units and usage
- position, velocity and acceleration are 3D numpy float64 vectors in scene units.
- mass must be positive; radius is the collision/rendering extent and may be zero.
- trail stores recent positions for rendering; it is written only by the integrator
  (sampling) and the collision resolver (merge).
"""
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np

from .config import ConfigurationError
from .constants import TRAIL_CAPACITY
from .vector_utils import Vector3, as_vec3


class TrailBuffer:
    """
    Fixed-capacity ring buffer of 3D positions.

    Storage is preallocated once; `head` is the slot the next point is written to
    and `size` is the number of valid points. Once full, each append overwrites
    the oldest point.
    """

    def __init__(self, capacity: int = TRAIL_CAPACITY):
        capacity = int(capacity)
        if capacity <= 0:
            raise ConfigurationError(f"Trail capacity must be positive, got {capacity}.")
        self._points = np.zeros((capacity, 3), dtype=np.float64)
        self._head = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._points.shape[0]

    def __len__(self) -> int:
        return self._size

    def append(self, point: Sequence[float]) -> None:
        self._points[self._head] = point
        self._head = (self._head + 1) % self.capacity
        if self._size < self.capacity:
            self._size += 1

    def clear(self) -> None:
        self._head = 0
        self._size = 0

    def _oldest_index(self) -> int:
        return (self._head - self._size) % self.capacity

    def to_array(self) -> np.ndarray:
        """Copy of the stored points, oldest first, shape (len, 3)."""
        start = self._oldest_index()
        idx = (start + np.arange(self._size)) % self.capacity
        return self._points[idx].copy()

    def __iter__(self) -> Iterator[Vector3]:
        return iter(self.to_array())

    def latest(self) -> Vector3:
        if self._size == 0:
            raise IndexError("latest() on an empty trail")
        return self._points[(self._head - 1) % self.capacity].copy()


@dataclass(eq=False)
class Body:
    """
    Represents a celestial body in the simulation.

    Fields:
    - mass: Mass (> 0)
    - position: 3D position
    - velocity: 3D velocity
    - radius: Collision/rendering radius (>= 0)
    - is_primary: Marks luminous/central bodies (stars); primaries record no trail
    - name: Identifier used in merge events and logs
    - acceleration: Accumulated acceleration, written by the force field
    - previous_acceleration: a(t) held between the two velocity Verlet phases
    - trail: Ring buffer of recent positions for drawing motion trails

    Bodies compare by identity: two distinct bodies in the same state are still
    different physical objects.
    """
    mass: float
    position: Vector3
    velocity: Vector3
    radius: float = 0.0
    is_primary: bool = False
    name: str = "Body"
    acceleration: Vector3 = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    previous_acceleration: Vector3 = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    trail: TrailBuffer = field(default_factory=TrailBuffer, repr=False)

    def __post_init__(self):
        self.mass = float(self.mass)
        self.radius = float(self.radius)
        if not self.mass > 0:
            raise ConfigurationError(f"Body '{self.name}' must have positive mass, got {self.mass}.")
        if self.radius < 0:
            raise ConfigurationError(f"Body '{self.name}' must have a non-negative radius, got {self.radius}.")
        self.position = as_vec3(self.position)
        self.velocity = as_vec3(self.velocity)
        self.acceleration = as_vec3(self.acceleration)
        self.previous_acceleration = as_vec3(self.previous_acceleration)

    @property
    def momentum(self) -> Vector3:
        return self.mass * self.velocity

    def add_trail_point(self) -> None:
        """Append the current position to the trail."""
        self.trail.append(self.position)

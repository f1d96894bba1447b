#!/usr/bin/env python3
"""
Diagnostics for validating a simulation: energy, momentum and center of mass.

These are read-only and meant for tests and periodic logging, not the tick loop.
Total energy should stay approximately constant between collisions; merges
legitimately dissipate kinetic energy.
"""
from typing import Sequence

import numpy as np

from .config import PhysicsError
from .data_models import Body
from .vector_utils import Vector3, vec_dist


class EmptyCollectionError(PhysicsError):
    """Raised when a quantity that needs at least one body is requested on none."""
    pass


class CoincidentBodiesError(PhysicsError):
    """Raised when the potential is requested for two bodies at the same position.

    Only zero-radius bodies can reach this state, since overlapping bodies with any
    extent are merged by the collision resolver.
    """
    pass


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return float(sum(0.5 * b.mass * np.dot(b.velocity, b.velocity) for b in bodies))


def potential_energy(bodies: Sequence[Body], G: float) -> float:
    """
    Pairwise Newtonian potential, -Σ_{i<j} G m_i m_j / r_ij (unclamped).

    Raises:
        CoincidentBodiesError: If two bodies share a position (r_ij == 0).
    """
    u = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            r = vec_dist(bodies[i].position, bodies[j].position)
            if r == 0.0:
                raise CoincidentBodiesError(
                    f"Bodies '{bodies[i].name}' and '{bodies[j].name}' coincide; potential energy is undefined."
                )
            u -= G * bodies[i].mass * bodies[j].mass / r
    return u


def total_energy(bodies: Sequence[Body], G: float) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies, G)


def total_momentum(bodies: Sequence[Body]) -> Vector3:
    p = np.zeros(3, dtype=np.float64)
    for b in bodies:
        p += b.mass * b.velocity
    return p


def center_of_mass(bodies: Sequence[Body]) -> Vector3:
    """
    Mass-weighted mean position of the collection.

    Raises:
        EmptyCollectionError: If `bodies` is empty. A zero vector would hide the
            upstream bug that emptied the collection.
    """
    if len(bodies) == 0:
        raise EmptyCollectionError("center_of_mass() requires at least one body.")
    total_mass = 0.0
    weighted = np.zeros(3, dtype=np.float64)
    for b in bodies:
        total_mass += b.mass
        weighted += b.mass * b.position
    return weighted / total_mass


def relative_energy_drift(initial: float, current: float) -> float:
    """|current - initial| / |initial|, or the absolute change when initial is 0."""
    if initial == 0:
        return abs(current)
    return abs(current - initial) / abs(initial)

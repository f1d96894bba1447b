#!/usr/bin/env python3
"""
Gravitational force field for the N-body core.

Responsibilities
- Compute pairwise gravitational accelerations by direct summation, writing each
  body's `acceleration` in place.
- Provide small helpers for common orbital computations (circular and escape velocity).

Numerical notes
- Distance clamp: the separation used in the force law is never smaller than the sum of
  the two radii. Bodies whose centers nearly coincide before the collision resolver
  merges them therefore receive a bounded, deterministic acceleration instead of a
  near-singular one. The clamp is a defined numerical policy, not an error.
- Complexity: O(N^2) per evaluation. For large N a Barnes–Hut octree would reduce cost;
  any replacement keeps the `compute_accelerations(bodies, G)` signature so integrators
  and hosts do not change.
- Each body's sum only reads positions/masses and writes its own acceleration, so the
  outer loop is safe to parallelize per body.
"""
import math
from typing import Sequence

import numpy as np

from .config import ConfigurationError
from .data_models import Body
from .vector_utils import vec_len, vec_norm


class ForceField:
    """
    Newtonian gravity by direct summation with radius-sum distance clamping.

    For each body i:

        a_i = Σ_j G * m_j / r_ij^2 * d_ij / |d_ij|,   r_ij = max(|d_ij|, R_i + R_j)

    where d_ij = x_j - x_i. Self-interaction is skipped.
    """

    def compute_accelerations(self, bodies: Sequence[Body], G: float) -> None:
        """
        Reset and accumulate the gravitational acceleration of every body.

        Args:
            bodies: Bodies to update (only .acceleration is written).
            G: Gravitational constant (> 0) in the bodies' units.

        Raises:
            ConfigurationError: If G is not positive.
        """
        if not G > 0:
            raise ConfigurationError(f"Gravitational constant G must be positive, got {G}.")

        for bi in bodies:
            acc = np.zeros(3, dtype=np.float64)
            for bj in bodies:
                if bj is bi:
                    continue
                d = bj.position - bi.position
                dist = vec_len(d)
                if dist == 0.0:
                    # Coincident centers have no direction; radii clamp covers the rest
                    continue
                r = max(dist, bi.radius + bj.radius)
                acc += (G * bj.mass / (r * r)) * vec_norm(d)
            bi.acceleration = acc


_default_field = ForceField()


def compute_accelerations(bodies: Sequence[Body], G: float) -> None:
    """Compute accelerations with the default direct-summation ForceField."""
    _default_field.compute_accelerations(bodies, G)


def circular_orbit_velocity(G: float, central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    For a circular orbit gravity provides exactly the centripetal force:
    G * M / r^2 = v^2 / r, therefore v = sqrt(G * M / r).

    Args:
        G: Gravitational constant
        central_mass: Mass of the central body
        orbital_radius: Orbital radius

    Returns:
        Orbital speed for a circular orbit (0.0 for non-positive radius or mass)
    """
    if orbital_radius <= 0 or central_mass <= 0:
        return 0.0

    return math.sqrt(G * central_mass / orbital_radius)


def escape_velocity(G: float, total_mass: float, separation: float) -> float:
    """
    Calculate the escape velocity at a given separation: v = sqrt(2 * G * M / r).

    Returns 0.0 for non-positive separation or mass.
    """
    if separation <= 0 or total_mass <= 0:
        return 0.0

    return math.sqrt(2.0 * G * total_mass / separation)

#!/usr/bin/env python3
"""
Orbit factory: constructors that place new bodies on stable orbits.

All orbits lie in the xy-plane. Velocity is perpendicular to the radius vector
(rotated +90 degrees, i.e. counter-clockwise motion). Every function returns new
Body objects and never mutates existing ones; the reference/parent body is only read.

Speeds follow the vis-viva relation in its simplified forms:
- circular:   v = sqrt(G * M / r)
- eccentric:  v = sqrt(G * M / r) * sqrt((1 - e) / (1 + e))   (apoapsis speed at distance r)

Missing angles, masses and radii are drawn from a numpy Generator so callers can
pass a seeded `rng` for reproducible scenes.
"""
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import ConfigurationError
from .constants import (
    MOON_EXTRA_DISTANCE_RANGE,
    MOON_MASS_RANGE,
    MOON_RADIUS_RANGE,
    PLANET_MASS_RANGE,
    PLANET_RADIUS_RANGE,
    RESONANT_MASS_RANGE,
    RESONANT_RADIUS_RANGE,
    STAR_RADIUS,
)
from .data_models import Body
from .physics import circular_orbit_velocity
from .vector_utils import from_angle


def _pick(value: Optional[float], rng: np.random.Generator, bounds: Tuple[float, float]) -> float:
    if value is not None:
        return float(value)
    return float(rng.uniform(*bounds))


def _random_angle(angle: Optional[float], rng: np.random.Generator) -> float:
    if angle is not None:
        return float(angle)
    return float(rng.uniform(0.0, 2.0 * math.pi))


def orbital_speed(G: float, central_mass: float, orbit_radius: float, eccentricity: float = 0.0) -> float:
    """
    Speed at distance `orbit_radius` for an orbit of the given eccentricity.

    Raises:
        ConfigurationError: If the radius is not positive or e is outside [0, 1).
    """
    if orbit_radius <= 0:
        raise ConfigurationError(f"Orbit radius must be positive, got {orbit_radius}.")
    if not (0.0 <= eccentricity < 1.0):
        raise ConfigurationError(f"Eccentricity must be in [0, 1), got {eccentricity}.")
    v = circular_orbit_velocity(G, central_mass, orbit_radius)
    return v * math.sqrt((1.0 - eccentricity) / (1.0 + eccentricity))


def _orbit_state(reference: Body, G: float, orbit_radius: float, eccentricity: float, angle: float):
    """Absolute position and velocity of an orbit around `reference`."""
    speed = orbital_speed(G, reference.mass, orbit_radius, eccentricity)
    rel_pos = from_angle(angle, orbit_radius)
    rel_vel = from_angle(angle + math.pi / 2.0, speed)
    return reference.position + rel_pos, reference.velocity + rel_vel


def create_planet_in_orbit(
    central: Body,
    G: float,
    orbit_radius: float,
    eccentricity: float = 0.0,
    angle: Optional[float] = None,
    mass: Optional[float] = None,
    radius: Optional[float] = None,
    name: str = "Planet",
    rng: Optional[np.random.Generator] = None,
) -> Body:
    """
    Create a planet on a circular (e = 0) or elliptical orbit around `central`.

    The orbit is placed relative to the central body's current position and velocity.

    Args:
        central: Reference body of mass M (read only)
        G: Gravitational constant
        orbit_radius: Distance from the central body (> 0)
        eccentricity: Orbital eccentricity in [0, 1)
        angle: Initial angle in radians; random when omitted
        mass: Planet mass; random in the planet range when omitted
        radius: Planet radius; random in the planet range when omitted
        name: Name of the new body
        rng: numpy Generator used for any random choice

    Returns:
        The new Body
    """
    rng = rng if rng is not None else np.random.default_rng()
    angle = _random_angle(angle, rng)
    pos, vel = _orbit_state(central, G, orbit_radius, eccentricity, angle)
    return Body(
        mass=_pick(mass, rng, PLANET_MASS_RANGE),
        position=pos,
        velocity=vel,
        radius=_pick(radius, rng, PLANET_RADIUS_RANGE),
        is_primary=False,
        name=name,
    )


def create_moon_in_orbit(
    parent: Body,
    G: float,
    distance: Optional[float] = None,
    eccentricity: float = 0.0,
    angle: Optional[float] = None,
    mass: Optional[float] = None,
    radius: Optional[float] = None,
    name: str = "Moon",
    rng: Optional[np.random.Generator] = None,
) -> Body:
    """
    Create a satellite orbiting `parent`, moving along with it.

    Position and velocity are computed relative to the parent with M = parent.mass
    and then translated by the parent's own position and velocity. Without an
    explicit distance the moon sits just outside the parent: 2 * parent.radius
    plus a random margin.
    """
    rng = rng if rng is not None else np.random.default_rng()
    if distance is None:
        distance = parent.radius * 2.0 + rng.uniform(*MOON_EXTRA_DISTANCE_RANGE)
    angle = _random_angle(angle, rng)
    pos, vel = _orbit_state(parent, G, float(distance), eccentricity, angle)
    return Body(
        mass=_pick(mass, rng, MOON_MASS_RANGE),
        position=pos,
        velocity=vel,
        radius=_pick(radius, rng, MOON_RADIUS_RANGE),
        is_primary=False,
        name=name,
    )


def create_binary_star_system(
    G: float,
    separation: float = 100.0,
    total_mass: float = 10000.0,
    mass_fraction: float = 0.5,
    angle: float = 0.0,
    radius: float = STAR_RADIUS,
    names: Tuple[str, str] = ("Star A", "Star B"),
) -> List[Body]:
    """
    Create two stars orbiting their common center of mass at the origin.

    The relative orbital speed is v = sqrt(G * M_tot / d). Each star sits at its
    mass-weighted distance from the origin (±d/2 for equal masses) and moves with
    v * m_other / M_tot in opposite directions, so the pair has zero net momentum.

    Args:
        G: Gravitational constant
        separation: Distance d between the stars (> 0)
        total_mass: Combined mass M_tot (> 0)
        mass_fraction: Share of total_mass in the first star, in (0, 1)
        angle: Direction (radians) from the first star to the second
        radius: Radius of each star
        names: Names of the two stars

    Returns:
        [star1, star2], both primary
    """
    if separation <= 0:
        raise ConfigurationError(f"Binary separation must be positive, got {separation}.")
    if total_mass <= 0:
        raise ConfigurationError(f"Binary total mass must be positive, got {total_mass}.")
    if not (0.0 < mass_fraction < 1.0):
        raise ConfigurationError(f"mass_fraction must be in (0, 1), got {mass_fraction}.")

    mass1 = total_mass * mass_fraction
    mass2 = total_mass - mass1
    speed = circular_orbit_velocity(G, total_mass, separation)

    pos1 = from_angle(angle, -separation * mass2 / total_mass)
    pos2 = from_angle(angle, separation * mass1 / total_mass)
    vel1 = from_angle(angle + math.pi / 2.0, -speed * mass2 / total_mass)
    vel2 = from_angle(angle + math.pi / 2.0, speed * mass1 / total_mass)

    star1 = Body(mass1, pos1, vel1, radius=radius, is_primary=True, name=names[0])
    star2 = Body(mass2, pos2, vel2, radius=radius, is_primary=True, name=names[1])
    return [star1, star2]


def resonant_radius(base_radius: float, ratio: float) -> float:
    # Kepler's third law: T^2 ∝ r^3, so r ∝ T^(2/3)
    return base_radius * ratio ** (2.0 / 3.0)


def create_resonant_system(
    central: Body,
    G: float,
    ratios: Sequence[float],
    base_radius: float,
    angles: Optional[Sequence[float]] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Body]:
    """
    Create circular orbits whose periods follow `ratios` (e.g. 1:2:4, like Io, Europa
    and Ganymede). Orbit k has radius base_radius * ratio_k^(2/3).
    """
    if base_radius <= 0:
        raise ConfigurationError(f"base_radius must be positive, got {base_radius}.")
    if any(r <= 0 for r in ratios):
        raise ConfigurationError("Resonance ratios must all be positive.")
    if angles is not None and len(angles) != len(ratios):
        raise ConfigurationError("angles must have one entry per resonance ratio.")

    rng = rng if rng is not None else np.random.default_rng()
    planets = []
    for k, ratio in enumerate(ratios):
        angle = angles[k] if angles is not None else None
        planets.append(create_planet_in_orbit(
            central,
            G,
            resonant_radius(base_radius, ratio),
            angle=angle,
            mass=rng.uniform(*RESONANT_MASS_RANGE),
            radius=rng.uniform(*RESONANT_RADIUS_RANGE),
            name=f"Resonant {k + 1}",
            rng=rng,
        ))
    return planets

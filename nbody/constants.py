#!/usr/bin/env python3
"""
Shared constants for the N-body core (simulation units unless stated otherwise).

Keeping defaults in one place helps ensure values are consistent across the
codebase and makes tuning easier. The core is unit-agnostic: G, masses, lengths
and time steps only need to be mutually consistent.
"""

# Physical constants
DEFAULT_G = 1.0  # scene units used by the presets

# Physics controls
DEFAULT_DT = 0.01  # simulation time per tick
LARGE_DT_WARNING = 1.0  # warn above this; still accepted

# Trails
TRAIL_CAPACITY = 200  # positions kept per body
TRAIL_SAMPLE_INTERVAL = 3  # sample every Nth completed step

# Orbit factory random ranges (min, max)
PLANET_MASS_RANGE = (5.0, 50.0)
PLANET_RADIUS_RANGE = (10.0, 25.0)
MOON_MASS_RANGE = (0.5, 3.0)
MOON_RADIUS_RANGE = (2.0, 6.0)
MOON_EXTRA_DISTANCE_RANGE = (10.0, 30.0)
RESONANT_MASS_RANGE = (10.0, 30.0)
RESONANT_RADIUS_RANGE = (10.0, 20.0)
STAR_RADIUS = 30.0  # binary stars at the default 100 separation must not overlap

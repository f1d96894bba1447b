#!/usr/bin/env python3
"""
Simulation configuration for the N-body core.

The gravitational constant, time step and integrator choice are not ambient
globals: the host builds one SimulationConfig, validates it, and passes the
values explicitly into every core operation.
"""
import logging
from dataclasses import dataclass

from .constants import (
    DEFAULT_DT,
    DEFAULT_G,
    LARGE_DT_WARNING,
    TRAIL_CAPACITY,
    TRAIL_SAMPLE_INTERVAL,
)

logger = logging.getLogger(__name__)


class PhysicsError(Exception):
    """Base exception for errors raised by the N-body core."""
    pass


class ConfigurationError(PhysicsError):
    """Raised when a mass, time step, orbit parameter or setting is invalid.

    Invalid values are rejected eagerly, never silently clamped.
    """
    pass


INTEGRATOR_NAMES = ("euler", "verlet")


@dataclass
class SimulationConfig:
    """
    Parameters the host threads through every tick.

    Fields:
    - G: Gravitational constant in scene units (> 0)
    - dt: Time advanced per tick (> 0)
    - integrator: "euler" (semi-implicit) or "verlet" (velocity Verlet)
    - enable_collisions: Merge overlapping bodies after each step
    - trail_capacity: Positions kept in each body's trail
    - trail_interval: Sample trails every Nth completed step
    """
    G: float = DEFAULT_G
    dt: float = DEFAULT_DT
    integrator: str = "verlet"
    enable_collisions: bool = True
    trail_capacity: int = TRAIL_CAPACITY
    trail_interval: int = TRAIL_SAMPLE_INTERVAL

    def __post_init__(self):
        self.G = float(self.G)
        self.dt = float(self.dt)
        self.integrator = str(self.integrator).lower()
        self.validate()

    def validate(self) -> None:
        """
        Check every setting and raise ConfigurationError on the first bad one.

        Raises:
            ConfigurationError: If any setting is out of range.
        """
        if not self.G > 0:
            raise ConfigurationError(f"Gravitational constant G must be positive, got {self.G}.")
        if not self.dt > 0:
            raise ConfigurationError(f"Time step dt must be positive, got {self.dt}.")
        if self.integrator not in INTEGRATOR_NAMES:
            raise ConfigurationError(
                f"Unknown integrator '{self.integrator}'. Expected one of {', '.join(INTEGRATOR_NAMES)}."
            )
        if self.trail_capacity <= 0:
            raise ConfigurationError("trail_capacity must be positive.")
        if self.trail_interval <= 0:
            raise ConfigurationError("trail_interval must be positive.")

        if self.dt > LARGE_DT_WARNING:
            logger.warning(
                "Time step dt=%s is large; close encounters may be integrated poorly.", self.dt
            )

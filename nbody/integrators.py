#!/usr/bin/env python3
"""
Time integrators for the N-body core.

Two interchangeable strategies advance bodies by one time step using the
accelerations already accumulated by a ForceField:

- Semi-implicit Euler: velocity is updated before position, then the acceleration
  is zeroed. First order, cheap, noticeably worse energy behaviour.
- Velocity Verlet: second order and symplectic. It straddles a second force
  evaluation, so it is a two-phase protocol:

      1) verlet_update_position(body, dt) for every body   x += v*dt + a_t*dt^2/2
      2) force_field.compute_accelerations(bodies, G)      a_{t+dt}
      3) verlet_complete_velocity(body, dt) for every body v += (a_t + a_{t+dt})*dt/2

  Skipping step 2 between 1 and 3 silently destroys energy conservation, so
  VerletIntegrator.step runs all three in order.

Both strategies sample trails: every Nth completed step, non-primary bodies
append their position to their trail buffer.
"""
import enum
from typing import Optional, Sequence

from .config import ConfigurationError
from .constants import TRAIL_SAMPLE_INTERVAL
from .data_models import Body
from .physics import ForceField


def step_euler(body: Body, dt: float) -> None:
    body.velocity = body.velocity + body.acceleration * dt
    body.position = body.position + body.velocity * dt
    body.acceleration = body.acceleration * 0.0


def verlet_update_position(body: Body, dt: float) -> None:
    """Phase 1: drift with a(t) and remember a(t) for the velocity phase."""
    body.position = body.position + body.velocity * dt + 0.5 * body.acceleration * dt * dt
    body.previous_acceleration = body.acceleration.copy()


def verlet_complete_velocity(body: Body, dt: float) -> None:
    """Phase 3: requires body.acceleration to already hold a(t + dt)."""
    body.velocity = body.velocity + 0.5 * (body.previous_acceleration + body.acceleration) * dt


def _check_dt(dt: float) -> None:
    if not dt > 0:
        raise ConfigurationError(f"Time step dt must be positive, got {dt}.")


class IntegratorKind(enum.Enum):
    EULER = "euler"
    VERLET = "verlet"


class Integrator:
    """
    Base strategy: advances a body collection and samples trails.

    Callers must compute a(t) with the force field before calling step().
    """
    kind: IntegratorKind

    def __init__(self, trail_interval: int = TRAIL_SAMPLE_INTERVAL):
        if trail_interval <= 0:
            raise ConfigurationError("trail_interval must be positive.")
        self.trail_interval = int(trail_interval)
        self.steps_completed = 0

    def step(self, bodies: Sequence[Body], dt: float, G: float, force_field: ForceField) -> None:
        _check_dt(dt)
        self._advance(bodies, dt, G, force_field)
        self.steps_completed += 1
        if self.steps_completed % self.trail_interval == 0:
            for b in bodies:
                if not b.is_primary:
                    b.add_trail_point()

    def _advance(self, bodies: Sequence[Body], dt: float, G: float, force_field: ForceField) -> None:
        raise NotImplementedError


class EulerIntegrator(Integrator):
    kind = IntegratorKind.EULER

    def _advance(self, bodies, dt, G, force_field):
        for b in bodies:
            step_euler(b, dt)


class VerletIntegrator(Integrator):
    kind = IntegratorKind.VERLET

    def _advance(self, bodies, dt, G, force_field):
        for b in bodies:
            verlet_update_position(b, dt)
        force_field.compute_accelerations(bodies, G)
        for b in bodies:
            verlet_complete_velocity(b, dt)


_INTEGRATORS = {
    IntegratorKind.EULER: EulerIntegrator,
    IntegratorKind.VERLET: VerletIntegrator,
}


def make_integrator(kind, trail_interval: Optional[int] = None) -> Integrator:
    """
    Build the integrator strategy for a kind or its name ("euler" / "verlet").

    Raises:
        ConfigurationError: If the name is not a known integrator.
    """
    if not isinstance(kind, IntegratorKind):
        try:
            kind = IntegratorKind(str(kind).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown integrator '{kind}'.") from None
    cls = _INTEGRATORS[kind]
    if trail_interval is None:
        return cls()
    return cls(trail_interval=trail_interval)

#!/usr/bin/env python3
"""
Headless host for the N-body core: simulation controller, scene presets and a
command-line driver.

What this module does
- Maintains a SimulationController that owns the bodies and the SimulationConfig and
  runs one tick in the required order: force field -> integrator -> collision resolver.
  All access is guarded by a re-entrant lock so a rendering thread can read body state
  (position, radius, is_primary, trail) between ticks.
- Provides built-in presets built with the orbit factory.
- Runs a preset for a number of ticks and logs energy, momentum and center of mass.

Running
    python nbody_sim.py --preset solar --steps 5000 --integrator verlet

Rendering, input and the real-time animation loop live outside this project; they call
SimulationController.tick() once per frame and read the bodies it exposes.
"""

import argparse
import logging
import threading
from typing import Callable, Dict, List, Optional

import numpy as np

from nbody.collisions import MergeEvent, resolve_collisions
from nbody.config import ConfigurationError, SimulationConfig
from nbody.data_models import Body, TrailBuffer
from nbody.diagnostics import (
    CoincidentBodiesError,
    EmptyCollectionError,
    center_of_mass,
    relative_energy_drift,
    total_energy,
    total_momentum,
)
from nbody.integrators import make_integrator
from nbody.orbits import (
    create_binary_star_system,
    create_moon_in_orbit,
    create_planet_in_orbit,
    create_resonant_system,
)
from nbody.physics import ForceField

logger = logging.getLogger(__name__)


# ============================================================
# Simulation Controller (Shared State)
# ============================================================

class SimulationController:
    """
    Owns the body collection and runs ticks against an explicit SimulationConfig.
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, config: Optional[SimulationConfig] = None,
                 force_field: Optional[ForceField] = None):
        self.lock = threading.RLock()
        self.config = config if config is not None else SimulationConfig()
        self.force_field = force_field if force_field is not None else ForceField()
        self.integrator = make_integrator(self.config.integrator, self.config.trail_interval)
        self.bodies: List[Body] = []
        self.ticks = 0
        self.sim_time = 0.0
        self.merge_count = 0
        self.last_merge_events: List[MergeEvent] = []

    def add_body(self, body: Body) -> None:
        """
        Inject a body; it may be added before or between ticks.

        A trail already recorded by the body is kept. Only a trail whose capacity
        differs from the configured one is replaced (its points are carried over, the
        oldest dropped if they no longer fit).
        """
        with self.lock:
            if body.trail.capacity != self.config.trail_capacity:
                trail = TrailBuffer(self.config.trail_capacity)
                for point in body.trail:
                    trail.append(point)
                body.trail = trail
            self.bodies.append(body)

    def replace_bodies(self, new_bodies: List[Body]) -> None:
        with self.lock:
            self.bodies = []
            for b in new_bodies:
                self.add_body(b)
            self.integrator = make_integrator(self.config.integrator, self.config.trail_interval)
            self.ticks = 0
            self.sim_time = 0.0
            self.merge_count = 0
            self.last_merge_events = []

    def clear_trails(self) -> None:
        with self.lock:
            for b in self.bodies:
                b.trail.clear()

    def tick(self) -> List[MergeEvent]:
        """
        Advance the simulation by one time step.

        Order: accelerations at t, integrator step (Verlet recomputes forces at t+dt
        internally), then collision merging. Returns the merges of this tick.
        """
        with self.lock:
            cfg = self.config
            self.force_field.compute_accelerations(self.bodies, cfg.G)
            self.integrator.step(self.bodies, cfg.dt, cfg.G, self.force_field)

            events: List[MergeEvent] = []
            if cfg.enable_collisions:
                events = resolve_collisions(self.bodies)
                for ev in events:
                    logger.info("Collision: %s absorbed %s", ev.survivor.name, ev.absorbed_name)
                self.merge_count += len(events)

            self.last_merge_events = events
            self.ticks += 1
            self.sim_time += cfg.dt
            return events

    def run(self, steps: int) -> None:
        for _ in range(steps):
            self.tick()

    def energy(self) -> float:
        with self.lock:
            return total_energy(self.bodies, self.config.G)

    def snapshot(self) -> Dict[str, object]:
        """
        Diagnostics summary for logging.

        Quantities that are undefined for the current state (center of mass of an
        empty scene, potential of coincident point masses) are reported as None.
        """
        with self.lock:
            try:
                com = center_of_mass(self.bodies)
            except EmptyCollectionError:
                com = None
            try:
                energy = total_energy(self.bodies, self.config.G)
            except CoincidentBodiesError as e:
                logger.warning("Energy unavailable: %s", e)
                energy = None
            return {
                "ticks": self.ticks,
                "time": self.sim_time,
                "bodies": len(self.bodies),
                "energy": energy,
                "momentum": total_momentum(self.bodies),
                "center_of_mass": com,
                "merges": self.merge_count,
            }


# ============================================================
# Presets and Templates
# ============================================================

def template_solar_system(G: float, rng: Optional[np.random.Generator] = None) -> List[Body]:
    """
    Sun + five planets on mildly eccentric orbits, with a moon around the third planet.
    Distances and masses are scene units, not SI.
    """
    rng = rng if rng is not None else np.random.default_rng()
    sun = Body(5000.0, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0), radius=60.0, is_primary=True, name="Sun")
    bodies = [sun]
    for k in range(5):
        bodies.append(create_planet_in_orbit(
            sun, G, 100.0 + (k + 1) * 80.0, eccentricity=0.2, name=f"Planet {k + 1}", rng=rng
        ))
    bodies.append(create_moon_in_orbit(bodies[3], G, name="Moon", rng=rng))
    return bodies


def template_binary_star(G: float, rng: Optional[np.random.Generator] = None) -> List[Body]:
    """Equal-mass binary with a circumbinary planet far outside the pair."""
    stars = create_binary_star_system(G, separation=100.0, total_mass=10000.0)
    barycenter = Body(10000.0, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0), name="Barycenter")
    planet = create_planet_in_orbit(barycenter, G, 600.0, angle=0.0, mass=10.0, radius=12.0,
                                    name="Circumbinary", rng=rng)
    return stars + [planet]


def template_resonant_chain(G: float, rng: Optional[np.random.Generator] = None) -> List[Body]:
    """1:2:4 Laplace-like resonance around a single star."""
    star = Body(5000.0, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0), radius=40.0, is_primary=True, name="Star")
    return [star] + create_resonant_system(star, G, [1, 2, 4], base_radius=150.0, rng=rng)


def template_empty(G: float, rng: Optional[np.random.Generator] = None) -> List[Body]:
    return []


PRESETS: Dict[str, Callable[..., List[Body]]] = {
    "solar": template_solar_system,
    "binary": template_binary_star,
    "resonant": template_resonant_chain,
    "empty": template_empty,
}


def load_preset(name: str, G: float, seed: Optional[int] = None) -> List[Body]:
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown preset '{name}'. Expected one of {', '.join(PRESETS)}.") from None
    return factory(G, np.random.default_rng(seed))


# ============================================================
# Command-line driver
# ============================================================

def _log_snapshot(snap: Dict[str, object], initial_energy: Optional[float]) -> None:
    com = snap["center_of_mass"]
    com_text = "n/a" if com is None else np.array2string(com, precision=4)
    energy = snap["energy"]
    energy_text = "n/a" if energy is None else f"{energy:.6g}"
    if energy is None or initial_energy is None:
        drift_text = "n/a"
    else:
        drift_text = f"{relative_energy_drift(initial_energy, energy):.3e}"
    logger.info(
        "tick=%d t=%.3f bodies=%d E=%s drift=%s |p|=%.3e com=%s merges=%d",
        snap["ticks"], snap["time"], snap["bodies"], energy_text, drift_text,
        float(np.linalg.norm(snap["momentum"])), com_text, snap["merges"],
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run an N-body preset headlessly and log diagnostics.")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="solar")
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--dt", type=float, default=0.01)
    parser.add_argument("--G", type=float, default=1.0)
    parser.add_argument("--integrator", choices=["euler", "verlet"], default="verlet")
    parser.add_argument("--no-collisions", action="store_true")
    parser.add_argument("--log-every", type=int, default=100, help="Log diagnostics every N ticks")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log individual merges")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(module)s - %(message)s',
    )

    try:
        config = SimulationConfig(
            G=args.G,
            dt=args.dt,
            integrator=args.integrator,
            enable_collisions=not args.no_collisions,
        )
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    sim = SimulationController(config)
    sim.replace_bodies(load_preset(args.preset, config.G, args.seed))
    logger.info("Loaded preset '%s' with %d bodies (%s integrator)", args.preset, len(sim.bodies), config.integrator)

    snap = sim.snapshot()
    initial_energy = snap["energy"]
    _log_snapshot(snap, initial_energy)
    log_every = max(1, args.log_every)
    for _ in range(args.steps):
        sim.tick()
        if sim.ticks % log_every == 0:
            _log_snapshot(sim.snapshot(), initial_energy)

    logger.info("Finished %d ticks", sim.ticks)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Collision handling for the N-body core.

Overlapping bodies merge in a perfectly inelastic collision:
- mass and momentum are conserved; position becomes the mass-weighted centroid
- radii combine volumetrically (r^3 adds)
- the primary flag is the logical OR of both participants

The heavier body survives and absorbs the merged state in place; the lighter one is
removed from the collection. On an exact mass tie the body with the lower collection
index survives.
"""
import logging
from dataclasses import dataclass
from typing import List, MutableSequence

from .data_models import Body
from .vector_utils import vec_dist

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeEvent:
    """Record of one merge: the surviving body and the name of the body it absorbed."""
    survivor: Body
    absorbed_name: str
    mass: float


def bodies_overlap(a: Body, b: Body) -> bool:
    return vec_dist(a.position, b.position) < a.radius + b.radius


def merge_into(survivor: Body, absorbed: Body) -> None:
    """
    Fold `absorbed` into `survivor`, computing everything from the pre-merge state.

    The survivor keeps its own trail; the absorbed body's trail is dropped with it.
    """
    m_total = survivor.mass + absorbed.mass
    new_vel = (survivor.mass * survivor.velocity + absorbed.mass * absorbed.velocity) / m_total
    new_pos = (survivor.mass * survivor.position + absorbed.mass * absorbed.position) / m_total
    new_radius = (survivor.radius ** 3 + absorbed.radius ** 3) ** (1.0 / 3.0)

    survivor.mass = m_total
    survivor.velocity = new_vel
    survivor.position = new_pos
    survivor.radius = new_radius
    survivor.is_primary = survivor.is_primary or absorbed.is_primary
    survivor.name = f"{survivor.name}+{absorbed.name}"


def _merge_pass(bodies: MutableSequence[Body], events: List[MergeEvent]) -> bool:
    """
    One sweep over all pairs: outer index i high to low, inner index j low to high
    over j < i, with indices re-validated after each removal. Returns True if any
    merge fired.
    """
    merged = False
    i = len(bodies) - 1
    while i > 0:
        j = 0
        while j < i:
            bj, bi = bodies[j], bodies[i]
            if not bodies_overlap(bj, bi):
                j += 1
                continue

            # Lower index wins ties
            if bi.mass > bj.mass:
                absorbed_name = bj.name
                merge_into(bi, bj)
                del bodies[j]
                i -= 1  # bi shifted down one slot; j now names the next body
                survivor = bi
            else:
                absorbed_name = bi.name
                merge_into(bj, bi)
                del bodies[i]
                survivor = bj

            merged = True
            logger.debug("Merged %s into %s (mass %.6g)", absorbed_name, survivor.name, survivor.mass)
            events.append(MergeEvent(survivor=survivor, absorbed_name=absorbed_name, mass=survivor.mass))

            if survivor is bj:
                break
        i -= 1
    return merged


def resolve_collisions(bodies: MutableSequence[Body]) -> List[MergeEvent]:
    """
    Detect and merge every overlapping pair, mutating `bodies` in place.

    Sweeps repeat until one completes without a merge. A survivor that grew after
    bodies above it were already scanned is therefore re-checked against them, and
    chains (A absorbs B, then absorbs C) complete within one call. Each sweep removes
    at least one body, so at most len(bodies) sweeps run.

    Returns the merge events in the order they happened.
    """
    events: List[MergeEvent] = []
    while _merge_pass(bodies, events):
        pass
    return events

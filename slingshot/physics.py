#!/usr/bin/env python3
"""
Core Physics Engine for Gravity Slingshot

Responsibilities
- Compute the net softened-gravity acceleration that fixed planets exert on the craft.
- Advance a kinematic state with a semi-implicit (symplectic) Euler step.
- Combine both into `advance`, the one stepping routine used by live flight and by the
  trajectory preview.

Units and conventions
- Positions are in screen pixels, velocities in pixels per step, time in steps.
- The craft has unit mass, so force and acceleration are the same vector.
- Planets never move and do not attract each other.

Numerical notes
- Force law: a = g / (d + eps) along the unit vector towards the planet. This is not
  inverse-square; it is a gentle game-friendly pull. eps keeps it finite as d -> 0.
- Influence radius is a hard cutoff: at d >= influence_radius the planet contributes
  exactly zero, with no blending at the boundary.
- Integration: v' = v + a*dt, then x' = x + v'*dt. Using the updated velocity for the
  position makes the scheme symplectic, so energy stays bounded over long flights where
  explicit Euler would spiral outwards.

Threading
- This module is pure compute and stateless. Results depend only on the arguments, so
  repeated calls with equal inputs return bit-identical states.
"""

from typing import Iterable

from .constants import SOFTENING_EPSILON
from .data_models import KinematicState, Planet
from .vector_utils import ZERO, Vector2, vec_add, vec_len, vec_norm, vec_scale, vec_sub


def field_acceleration(point: Vector2, planets: Iterable[Planet],
                       softening: float = SOFTENING_EPSILON) -> Vector2:
    """
    Net acceleration at `point` due to all planets in range.

    For each planet, with dir = planet.position - point and d = |dir|:

        a += normalize(dir) * gravity_strength / (d + softening)   if d < influence_radius

    Args:
        point: Position of the attracted point.
        planets: Planets in scene order.
        softening: Constant added to the distance. Live and predicted runs must share it.

    Returns:
        Summed acceleration vector; the zero vector when no planet is in range.
    """
    acc = ZERO
    for planet in planets:
        direction = vec_sub(planet.position, point)
        d = vec_len(direction)
        if d < planet.influence_radius:
            strength = planet.gravity_strength / (d + softening)
            acc = vec_add(acc, vec_scale(vec_norm(direction), strength))
    return acc


def symplectic_euler_step(state: KinematicState, acceleration: Vector2, dt: float) -> KinematicState:
    """Advance one step; position uses the velocity already updated by this step."""
    velocity = vec_add(state.velocity, vec_scale(acceleration, dt))
    position = vec_add(state.position, vec_scale(velocity, dt))
    return KinematicState(position, velocity)


def advance(state: KinematicState, planets: Iterable[Planet], dt: float) -> KinematicState:
    """
    Advance `state` by `dt` under the planets' pull.

    This is the single stepping path shared by live flight and trajectory prediction;
    any other route to a new state would let the preview disagree with the real flight.
    """
    return symplectic_euler_step(state, field_acceleration(state.position, planets), dt)

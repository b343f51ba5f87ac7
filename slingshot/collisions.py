#!/usr/bin/env python3
"""
Termination checks for Gravity Slingshot.

Evaluated in a fixed priority order once per live tick:
- Goal: craft circle overlaps the goal circle
- Collision: craft circle overlaps any planet
- Out of bounds: craft centre leaves the play area

Overlap tests are strict (`<`), so touching circles do not count, and a craft sitting
exactly on the play-area edge is still in bounds. There is no collision response: the
first matching condition simply ends the mission.
"""
from typing import Iterable, Optional, Sequence

from .data_models import Goal, Outcome, Planet, PlayArea
from .vector_utils import Vector2, vec_dist


def reached_goal(pos: Vector2, craft_radius: float, goal: Goal) -> bool:
    return vec_dist(pos, goal.position) < goal.radius + craft_radius


def hit_planet(pos: Vector2, craft_radius: float, planets: Iterable[Planet]) -> Optional[Planet]:
    """Return the first planet (in scene order) the craft overlaps, if any."""
    for planet in planets:
        if vec_dist(pos, planet.position) < planet.radius + craft_radius:
            return planet
    return None


def evaluate_termination(pos: Vector2, craft_radius: float, goal: Goal,
                         planets: Iterable[Planet], area: PlayArea) -> Outcome:
    """
    Decide whether the flight ends at `pos`.

    Goal beats collision beats out-of-bounds when several hold at once.
    """
    if reached_goal(pos, craft_radius, goal):
        return Outcome.GOAL_REACHED
    if hit_planet(pos, craft_radius, planets) is not None:
        return Outcome.COLLISION
    if not area.contains(pos):
        return Outcome.OUT_OF_BOUNDS
    return Outcome.CONTINUE


def first_impact_index(points: Sequence[Vector2], planets: Sequence[Planet]) -> Optional[int]:
    """
    Index of the first predicted point strictly inside a planet's solid radius.

    Advisory only, used to cut the preview line short; it ignores the craft radius.
    """
    for i, p in enumerate(points):
        if hit_planet(p, 0.0, planets) is not None:
            return i
    return None

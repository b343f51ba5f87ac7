#!/usr/bin/env python3
"""
Data models for Gravity Slingshot.

This module defines the entities shared between physics, the mission state machine,
rendering, and UI.

Units and usage
- positions and radii are in screen pixels; velocities in pixels per simulation step.
- Planet, Goal, KinematicState and PlayArea are immutable values. The mission replaces
  a craft's state with a freshly computed one each tick instead of mutating vectors.
- Craft.trail stores past positions to render a short motion path; it is presentation
  data and never feeds back into physics.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Tuple

from .constants import CRAFT_RADIUS, OUT_OF_BOUNDS_MARGIN, TRAIL_LENGTH
from .vector_utils import ZERO, Vector2


class MissionState(Enum):
    IDLE = "IDLE"  # composing a launch
    FLYING = "FLYING"  # physics active
    ENDED = "ENDED"  # goal reached or failed


class Outcome(Enum):
    CONTINUE = "CONTINUE"
    GOAL_REACHED = "GOAL_REACHED"
    COLLISION = "COLLISION"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"

    @property
    def terminal(self) -> bool:
        return self is not Outcome.CONTINUE


@dataclass(frozen=True)
class Planet:
    """
    Fixed attracting body.

    Fields:
    - position: centre of the planet
    - radius: solid radius used for crash detection
    - gravity_strength: numerator of the softened pull, gravity / (d + eps)
    - influence_radius: beyond this distance the planet contributes nothing
    """
    position: Vector2
    radius: float
    gravity_strength: float
    influence_radius: float


@dataclass(frozen=True)
class Goal:
    position: Vector2
    radius: float


@dataclass(frozen=True)
class KinematicState:
    position: Vector2
    velocity: Vector2 = ZERO


@dataclass(frozen=True)
class PlayArea:
    """Rectangle [0, width] x [0, height], widened on every side by margin."""
    width: float
    height: float
    margin: float = OUT_OF_BOUNDS_MARGIN

    def contains(self, pos: Vector2) -> bool:
        m = self.margin
        return not (pos[0] < -m or pos[0] > self.width + m or
                    pos[1] < -m or pos[1] > self.height + m)


@dataclass
class Craft:
    """The launched body: physics state plus a cosmetic trail."""
    state: KinematicState
    radius: float = CRAFT_RADIUS
    trail: Deque[Vector2] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))

    @property
    def position(self) -> Vector2:
        return self.state.position

    @property
    def velocity(self) -> Vector2:
        return self.state.velocity

    def add_trail_point(self) -> None:
        """Append the current position to the trail."""
        self.trail.append(self.state.position)


@dataclass
class Scene:
    craft: Craft
    planets: Tuple[Planet, ...]
    goal: Goal

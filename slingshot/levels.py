#!/usr/bin/env python3
"""
Level definitions for Gravity Slingshot.

A level places every entity with an anchor, a fraction of the play-area width/height,
plus a pixel offset, so one definition fits any window size:

    position = (anchor_x * width + offset_x, anchor_y * height + offset_y)

`LevelConfig.resolve` turns a definition into concrete, validated geometry. Invalid
geometry (non-positive radii, negative gravity, non-finite numbers) is rejected there
with LevelConfigError, before any physics runs.
"""
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .data_models import Goal, PlayArea, Planet
from .vector_utils import Vector2


class LevelConfigError(ValueError):
    """Level geometry that cannot produce a sane simulation."""

    def __init__(self, field_name: str, message: str):
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


def _require_finite(name: str, *values: float) -> None:
    for v in values:
        if not math.isfinite(v):
            raise LevelConfigError(name, f"expected a finite number, got {v!r}")


def _require_positive(name: str, value: float) -> None:
    _require_finite(name, value)
    if value <= 0:
        raise LevelConfigError(name, f"must be positive, got {value!r}")


@dataclass(frozen=True)
class Placement:
    anchor: Tuple[float, float] = (0.0, 0.0)
    offset: Tuple[float, float] = (0.0, 0.0)

    def resolve(self, area: PlayArea, name: str) -> Vector2:
        _require_finite(f"{name}.anchor", *self.anchor)
        _require_finite(f"{name}.offset", *self.offset)
        return Vector2(self.anchor[0] * area.width + self.offset[0],
                       self.anchor[1] * area.height + self.offset[1])


@dataclass(frozen=True)
class PlanetSpec:
    placement: Placement
    radius: float
    gravity: float
    influence: float


@dataclass(frozen=True)
class GoalSpec:
    placement: Placement
    radius: float


@dataclass(frozen=True)
class LevelConfig:
    name: str
    craft: Placement
    goal: GoalSpec
    planets: Tuple[PlanetSpec, ...] = field(default_factory=tuple)

    def resolve(self, area: PlayArea) -> Tuple[Vector2, Goal, Tuple[Planet, ...]]:
        """Concrete (craft start, goal, planets) for `area`; raises LevelConfigError."""
        _require_positive("play_area.width", area.width)
        _require_positive("play_area.height", area.height)
        _require_finite("play_area.margin", area.margin)

        craft_pos = self.craft.resolve(area, "craft")
        _require_positive("goal.radius", self.goal.radius)
        goal = Goal(self.goal.placement.resolve(area, "goal"), float(self.goal.radius))

        planets: List[Planet] = []
        for i, spec in enumerate(self.planets):
            name = f"planets[{i}]"
            _require_positive(f"{name}.radius", spec.radius)
            _require_positive(f"{name}.influence", spec.influence)
            _require_finite(f"{name}.gravity", spec.gravity)
            if spec.gravity < 0:
                raise LevelConfigError(f"{name}.gravity", f"must not be negative, got {spec.gravity!r}")
            planets.append(Planet(
                position=spec.placement.resolve(area, name),
                radius=float(spec.radius),
                gravity_strength=float(spec.gravity),
                influence_radius=float(spec.influence),
            ))
        return craft_pos, goal, tuple(planets)


# ============================================================
# Built-in levels
# ============================================================

def _at(ax, ay, dx=0.0, dy=0.0) -> Placement:
    return Placement((ax, ay), (dx, dy))


BUILTIN_LEVELS: Tuple[LevelConfig, ...] = (
    LevelConfig(
        name="First Orbit",
        craft=_at(0.0, 1.0, 100, -100),
        goal=GoalSpec(_at(1.0, 0.0, -100, 100), 30),
        planets=(
            PlanetSpec(_at(0.5, 0.5), radius=40, gravity=5000, influence=300),
        ),
    ),
    LevelConfig(
        name="Twin Wells",
        craft=_at(0.0, 0.5, 100, 0),
        goal=GoalSpec(_at(1.0, 0.5, -100, 0), 30),
        planets=(
            PlanetSpec(_at(1 / 3, 0.5, 0, -150), radius=35, gravity=4000, influence=250),
            PlanetSpec(_at(2 / 3, 0.5, 0, 150), radius=35, gravity=4000, influence=250),
        ),
    ),
    LevelConfig(
        name="The Trap",
        craft=_at(0.0, 0.5, 100, 0),
        goal=GoalSpec(_at(1.0, 0.5, -100, 0), 25),
        planets=(
            PlanetSpec(_at(0.5, 0.5), radius=60, gravity=8000, influence=400),
            PlanetSpec(_at(1.0, 0.5, -200, -150), radius=20, gravity=2000, influence=150),
            PlanetSpec(_at(1.0, 0.5, -200, 150), radius=20, gravity=2000, influence=150),
        ),
    ),
)

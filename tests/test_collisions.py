#!/usr/bin/env python3
"""
Test Suite for termination checks

Tests cover:
1. Goal detection threshold (goal radius + craft radius, strict)
2. Planet collision threshold and scene-order search
3. Play-area bounds, inclusive edges, optional margin
4. Priority when several conditions hold at once
5. Advisory impact index used by the trajectory preview
"""

import pytest

from slingshot.collisions import evaluate_termination, first_impact_index, hit_planet, reached_goal
from slingshot.data_models import Goal, Outcome, PlayArea, Planet
from slingshot.vector_utils import Vector2

CRAFT_R = 8.0


@pytest.fixture
def goal():
    return Goal(Vector2(500.0, 100.0), 30.0)


@pytest.fixture
def area():
    return PlayArea(1000.0, 800.0)


@pytest.fixture
def planet():
    return Planet(Vector2(300.0, 400.0), radius=40.0, gravity_strength=5000.0, influence_radius=300.0)


class TestGoal:
    """Goal threshold is goal.radius + craft.radius, exclusive."""

    def test_at_summed_radii_continues(self, goal, area):
        """Distance 38 (30 + 8) only touches the goal."""
        pos = Vector2(500.0 + 38.0, 100.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [], area) is Outcome.CONTINUE

    @pytest.mark.parametrize("distance", [37.0, 36.0, 0.0])
    def test_inside_summed_radii_reaches_goal(self, goal, area, distance):
        """Any distance below 38 reaches the goal."""
        pos = Vector2(500.0 + distance, 100.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [], area) is Outcome.GOAL_REACHED

    @pytest.mark.parametrize("craft_radius,distance,expected", [
        (7.0, 37.0, False),
        (7.0, 36.0, True),
        (8.0, 37.9, True),
        (8.0, 38.0, False),
    ])
    def test_reached_goal_threshold(self, goal, craft_radius, distance, expected):
        """Strict comparison against the summed radii."""
        pos = Vector2(500.0, 100.0 + distance)
        assert reached_goal(pos, craft_radius, goal) is expected


class TestPlanetCollision:
    """Crash when the craft overlaps any planet."""

    def test_overlap_is_collision(self, planet, goal, area):
        """Distance below planet.radius + craft.radius crashes."""
        pos = Vector2(300.0 + 47.0, 400.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [planet], area) is Outcome.COLLISION

    def test_touching_is_not_collision(self, planet, goal, area):
        """Exactly at the summed radii is still a miss."""
        pos = Vector2(300.0 + 48.0, 400.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [planet], area) is Outcome.CONTINUE

    def test_any_planet_in_list_matches(self, planet, goal, area):
        """The second planet is checked too."""
        other = Planet(Vector2(700.0, 600.0), 20.0, 1000.0, 100.0)
        pos = Vector2(700.0, 610.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [planet, other], area) is Outcome.COLLISION

    def test_hit_planet_returns_first_in_order(self):
        """With overlapping planets the first in scene order is reported."""
        a = Planet(Vector2(0.0, 0.0), 50.0, 1.0, 100.0)
        b = Planet(Vector2(10.0, 0.0), 50.0, 1.0, 100.0)
        assert hit_planet(Vector2(5.0, 0.0), CRAFT_R, [a, b]) is a
        assert hit_planet(Vector2(500.0, 0.0), CRAFT_R, [a, b]) is None


class TestBounds:
    """Out of bounds means strictly outside [0, width] x [0, height]."""

    @pytest.mark.parametrize("pos,expected", [
        ((1000.0, 400.0), Outcome.CONTINUE),
        ((1000.001, 400.0), Outcome.OUT_OF_BOUNDS),
        ((0.0, 0.0), Outcome.CONTINUE),
        ((-0.001, 400.0), Outcome.OUT_OF_BOUNDS),
        ((400.0, 800.0), Outcome.CONTINUE),
        ((400.0, 800.5), Outcome.OUT_OF_BOUNDS),
        ((400.0, -3.0), Outcome.OUT_OF_BOUNDS),
    ])
    def test_edges(self, goal, area, pos, expected):
        """Edges are inside, anything past them is out."""
        assert evaluate_termination(Vector2(*pos), CRAFT_R, goal, [], area) is expected

    def test_margin_widens_area(self, goal):
        """A positive margin lets the craft stray past the edge."""
        area = PlayArea(1000.0, 800.0, margin=50.0)
        assert evaluate_termination(Vector2(1040.0, 400.0), CRAFT_R, goal, [], area) is Outcome.CONTINUE
        assert evaluate_termination(Vector2(1051.0, 400.0), CRAFT_R, goal, [], area) is Outcome.OUT_OF_BOUNDS


class TestPriority:
    """Goal, then collision, then bounds."""

    def test_goal_beats_collision(self, area):
        """A craft touching both the goal and a planet has reached the goal."""
        goal = Goal(Vector2(500.0, 100.0), 30.0)
        planet = Planet(Vector2(540.0, 100.0), 20.0, 1000.0, 200.0)
        pos = Vector2(515.0, 100.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [planet], area) is Outcome.GOAL_REACHED

    def test_collision_beats_out_of_bounds(self, goal, area):
        """A planet straddling the edge reports a crash, not a loss in space."""
        planet = Planet(Vector2(1000.0, 400.0), 30.0, 1000.0, 200.0)
        pos = Vector2(1010.0, 400.0)
        assert evaluate_termination(pos, CRAFT_R, goal, [planet], area) is Outcome.COLLISION

    def test_goal_beats_out_of_bounds(self, area):
        """A goal overlapping the edge still counts."""
        goal = Goal(Vector2(1000.0, 100.0), 30.0)
        assert evaluate_termination(Vector2(1005.0, 100.0), CRAFT_R, goal, [], area) is Outcome.GOAL_REACHED


class TestImpactIndex:
    """Advisory impact index ignores the craft radius."""

    def test_first_point_inside_planet(self, planet):
        """Index of the first point strictly inside the planet's radius."""
        points = [Vector2(200.0, 400.0), Vector2(255.0, 400.0), Vector2(270.0, 400.0), Vector2(300.0, 400.0)]
        assert first_impact_index(points, [planet]) == 2

    def test_no_impact(self, planet):
        """A path that stays clear yields None."""
        points = [Vector2(0.0, 0.0), Vector2(100.0, 100.0)]
        assert first_impact_index(points, [planet]) is None

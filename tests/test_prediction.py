#!/usr/bin/env python3
"""
Test Suite for the trajectory preview

Tests cover:
1. Horizon length and ordering of predicted points
2. Agreement between prediction and repeated live `advance` calls
3. Prediction never touches the state it starts from
4. Truncation at the first advisory impact
"""

import pytest

from slingshot.constants import PREDICTION_STEPS
from slingshot.data_models import KinematicState, Planet
from slingshot.physics import advance
from slingshot.prediction import predict_positions, truncate_at_impact
from slingshot.vector_utils import Vector2


@pytest.fixture
def planets():
    return (
        Planet(Vector2(550.0, 400.0), radius=40.0, gravity_strength=5000.0, influence_radius=300.0),
        Planet(Vector2(800.0, 250.0), radius=20.0, gravity_strength=2000.0, influence_radius=150.0),
    )


@pytest.fixture
def launch_state():
    return KinematicState(Vector2(100.0, 700.0), Vector2(6.0, -4.5))


class TestPredictPositions:
    """Tests for predict_positions."""

    def test_default_horizon(self, launch_state, planets):
        """One point per step, default 100 steps."""
        assert len(predict_positions(launch_state, planets)) == PREDICTION_STEPS

    @pytest.mark.parametrize("steps", [0, 1, 7, 250])
    def test_custom_horizon(self, launch_state, planets, steps):
        """Horizon is honoured exactly."""
        assert len(predict_positions(launch_state, planets, steps=steps)) == steps

    def test_starting_point_excluded(self, launch_state):
        """First point is the position after one step."""
        points = predict_positions(launch_state, [], steps=3)
        assert points == [Vector2(106.0, 695.5), Vector2(112.0, 691.0), Vector2(118.0, 686.5)]

    @pytest.mark.parametrize("dt", [1.0, 0.5, 0.05])
    def test_matches_live_advance(self, launch_state, planets, dt):
        """N predicted points equal N live steps with the same dt, exactly."""
        points = predict_positions(launch_state, planets, steps=120, dt=dt)
        state = launch_state
        live = []
        for _ in range(120):
            state = advance(state, planets, dt)
            live.append(state.position)
        assert points == live

    def test_fresh_result_each_call(self, launch_state, planets):
        """Repeated calls return equal but distinct lists."""
        a = predict_positions(launch_state, planets)
        b = predict_positions(launch_state, planets)
        assert a == b
        assert a is not b

    def test_launch_state_untouched(self, launch_state, planets):
        """Prediction does not alter its starting state."""
        before = KinematicState(launch_state.position, launch_state.velocity)
        predict_positions(launch_state, planets)
        assert launch_state == before


class TestTruncateAtImpact:
    """Tests for cutting the preview at a predicted crash."""

    def test_clear_path_untouched(self):
        """No impact: the full list comes back."""
        points = [Vector2(0.0, 0.0), Vector2(10.0, 0.0)]
        assert truncate_at_impact(points, []) == points

    def test_cut_after_impact_point(self, planets):
        """Points after the first one inside a planet are dropped."""
        points = [Vector2(400.0, 400.0), Vector2(520.0, 400.0), Vector2(550.0, 400.0), Vector2(580.0, 400.0)]
        assert truncate_at_impact(points, planets) == points[:2]

    def test_predicted_fall_into_planet_is_truncated(self, planets):
        """A craft dropped above a planet has a preview ending at the surface."""
        start = KinematicState(Vector2(550.0, 200.0), Vector2(0.0, 0.0))
        points = truncate_at_impact(predict_positions(start, planets), planets)
        assert len(points) < PREDICTION_STEPS
        last = points[-1]
        assert abs(last.y - 400.0) < 40.0

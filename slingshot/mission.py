#!/usr/bin/env python3
"""
Mission state machine.

    IDLE --launch(v)--> FLYING --tick (terminal outcome)--> ENDED --reset--> IDLE

A Mission owns the live Scene. Every tick while FLYING it replaces the craft's state
with `physics.advance(...)` and then runs the termination checks. Prediction is only
offered while IDLE and reuses the same `advance`, so the preview matches what the
craft will actually do when launched with the same step size.

Inputs that make no sense in the current state (launching twice, predicting while
flying) are rejected by returning a falsy value rather than raising; the host just
ignores them.
"""
import logging
from typing import List, Optional

from .collisions import evaluate_termination
from .constants import LIVE_TIME_SCALE, MAX_FRAME_DT, PREDICTION_DT, PREDICTION_STEPS, TRAIL_SAMPLE_EVERY
from .data_models import Craft, KinematicState, MissionState, Outcome, PlayArea, Scene
from .levels import LevelConfig
from .physics import advance
from .prediction import predict_positions
from .vector_utils import Vector2, clamp

logger = logging.getLogger(__name__)


def create_scene(level: LevelConfig, area: PlayArea) -> Scene:
    """Build a fresh Scene for `level`; raises LevelConfigError on bad geometry."""
    craft_pos, goal, planets = level.resolve(area)
    return Scene(craft=Craft(KinematicState(craft_pos)), planets=planets, goal=goal)


class Mission:
    """
    One attempt at one level.

    Attributes:
        scene: live entities, replaced wholesale by `reset`.
        area: play-area bounds used by the out-of-bounds check.
        state: current MissionState.
        result: terminal Outcome once ENDED, otherwise None.
        time_scale: multiplier applied to host deltas while flying.
    """

    def __init__(self, level: LevelConfig, area: PlayArea, time_scale: float = LIVE_TIME_SCALE):
        self.level = level
        self.area = area
        self.time_scale = time_scale
        self.scene = create_scene(level, area)
        self.state = MissionState.IDLE
        self.result: Optional[Outcome] = None
        logger.info("Scene built for level '%s' (%d planets)", level.name, len(self.scene.planets))

    @property
    def succeeded(self) -> bool:
        return self.result is Outcome.GOAL_REACHED

    def reset(self, level: Optional[LevelConfig] = None) -> Scene:
        """Start over on `level` (or the current one) with a brand new Scene."""
        if level is not None:
            self.level = level
        self.scene = create_scene(self.level, self.area)
        self.state = MissionState.IDLE
        self.result = None
        logger.info("Mission reset to level '%s'", self.level.name)
        return self.scene

    def launch(self, velocity: Vector2) -> bool:
        """IDLE -> FLYING with the craft moving at `velocity`. False if not IDLE."""
        if self.state is not MissionState.IDLE:
            logger.debug("Launch ignored in state %s", self.state.value)
            return False
        craft = self.scene.craft
        craft.state = KinematicState(craft.position, Vector2(float(velocity[0]), float(velocity[1])))
        self.state = MissionState.FLYING
        logger.info("Launched from (%.1f, %.1f) with velocity (%.2f, %.2f)",
                    craft.position[0], craft.position[1], velocity[0], velocity[1])
        return True

    def tick(self, dt: float, frame: int = 0) -> Outcome:
        """
        Advance one host frame.

        Args:
            dt: host frame delta in seconds; clamped to [0, MAX_FRAME_DT].
            frame: host frame counter, used only to throttle trail sampling.

        Returns:
            CONTINUE while flying on (and while IDLE, where nothing moves);
            the stored terminal outcome once ENDED.
        """
        if self.state is MissionState.ENDED:
            return self.result
        if self.state is not MissionState.FLYING:
            return Outcome.CONTINUE

        craft = self.scene.craft
        sim_dt = clamp(dt, 0.0, MAX_FRAME_DT) * self.time_scale
        craft.state = advance(craft.state, self.scene.planets, sim_dt)
        if frame % TRAIL_SAMPLE_EVERY == 0:
            craft.add_trail_point()

        outcome = evaluate_termination(craft.position, craft.radius, self.scene.goal,
                                       self.scene.planets, self.area)
        if outcome.terminal:
            self.state = MissionState.ENDED
            self.result = outcome
            logger.info("Mission ended: %s at (%.1f, %.1f)",
                        outcome.value, craft.position[0], craft.position[1])
        return outcome

    def predict_trajectory(self, launch_velocity: Vector2, steps: int = PREDICTION_STEPS,
                           dt: float = PREDICTION_DT) -> List[Vector2]:
        """Preview positions for a hypothetical launch; empty unless IDLE."""
        if self.state is not MissionState.IDLE:
            return []
        start = KinematicState(self.scene.craft.position,
                               Vector2(float(launch_velocity[0]), float(launch_velocity[1])))
        return predict_positions(start, self.scene.planets, steps, dt)

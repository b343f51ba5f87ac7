#!/usr/bin/env python3
"""
Game controller shared between the pygame renderer thread and the Dear PyGui UI.

It owns the Mission, the level list and the aiming state, and turns pointer drags
into launch vectors. Every public method takes the re-entrant lock, so at any moment
only one thread is touching the Scene.
"""
import logging
import threading
from typing import List, Optional, Sequence

from .constants import DEFAULT_LAUNCH_POWER, DRAG_SCALE, PREDICTION_STEPS, VIEW_HEIGHT, VIEW_WIDTH
from .data_models import MissionState, Outcome, PlayArea
from .levels import LevelConfig
from .mission import Mission
from .prediction import truncate_at_impact
from .vector_utils import Vector2, vec_scale, vec_sub

logger = logging.getLogger(__name__)

OUTCOME_MESSAGES = {
    Outcome.GOAL_REACHED: "COURSE CLEAR!",
    Outcome.COLLISION: "CRASHED!",
    Outcome.OUT_OF_BOUNDS: "LOST IN SPACE",
}


def launch_vector_from_drag(start: Vector2, current: Vector2, power: float = DEFAULT_LAUNCH_POWER) -> Vector2:
    """Slingshot mapping: pull back from `start` to `current` to fire the other way."""
    return vec_scale(vec_sub(start, current), DRAG_SCALE * power)


class GameController:
    """
    Shared state between UI thread (Dear PyGui) and rendering thread (pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, levels: Sequence[LevelConfig], width: float = VIEW_WIDTH,
                 height: float = VIEW_HEIGHT, start_level: int = 1):
        if not levels:
            raise ValueError("GameController needs at least one level")
        self.lock = threading.RLock()
        self.levels: List[LevelConfig] = list(levels)
        self.running = True  # app running

        self.launch_power = DEFAULT_LAUNCH_POWER
        self.show_preview = True
        self.preview_steps = PREDICTION_STEPS
        self.status_msg: Optional[str] = None

        self.drag_start: Optional[Vector2] = None
        self.drag_current: Optional[Vector2] = None

        self.frame = 0
        self.current_level = self._wrap(start_level)
        self.mission = Mission(self.levels[self.current_level - 1], PlayArea(width, height))

    def _wrap(self, n: int) -> int:
        """Level numbers are 1-based; anything out of range loops back to 1."""
        return n if 1 <= n <= len(self.levels) else 1

    # -----------------------
    # Level management
    # -----------------------

    @property
    def level_name(self) -> str:
        with self.lock:
            return self.mission.level.name

    def load_level(self, n: int) -> None:
        with self.lock:
            self.current_level = self._wrap(n)
            self._cancel_drag()
            self.mission.reset(self.levels[self.current_level - 1])
            self.status_msg = None
            logger.info("Level %d: %s", self.current_level, self.mission.level.name)

    def retry(self) -> None:
        with self.lock:
            self.load_level(self.current_level)

    def next_level(self) -> bool:
        """Advance after a win; refused unless the last attempt reached the goal."""
        with self.lock:
            if not (self.mission.state is MissionState.ENDED and self.mission.succeeded):
                return False
            self.load_level(self.current_level + 1)
            return True

    def set_play_area(self, width: float, height: float) -> None:
        """Window resized: bounds follow immediately; a craft still waiting is re-placed."""
        with self.lock:
            area = PlayArea(width, height, self.mission.area.margin)
            if area == self.mission.area:
                return
            self.mission.area = area
            if self.mission.state is MissionState.IDLE:
                self._cancel_drag()
                self.mission.reset()

    def set_time_scale(self, s: float) -> None:
        with self.lock:
            self.mission.time_scale = float(s)

    def set_launch_power(self, p: float) -> None:
        with self.lock:
            self.launch_power = float(p)

    def set_preview_steps(self, n: int) -> None:
        with self.lock:
            self.preview_steps = max(1, int(n))

    # -----------------------
    # Aiming and launching
    # -----------------------

    def start_drag(self, pos: Vector2) -> bool:
        with self.lock:
            if self.mission.state is not MissionState.IDLE:
                return False
            self.drag_start = Vector2(*pos)
            self.drag_current = Vector2(*pos)
            return True

    def update_drag(self, pos: Vector2) -> None:
        with self.lock:
            if self.drag_start is not None:
                self.drag_current = Vector2(*pos)

    def _cancel_drag(self) -> None:
        self.drag_start = None
        self.drag_current = None

    @property
    def dragging(self) -> bool:
        with self.lock:
            return self.drag_start is not None

    def current_launch_vector(self) -> Optional[Vector2]:
        with self.lock:
            if self.drag_start is None or self.drag_current is None:
                return None
            return launch_vector_from_drag(self.drag_start, self.drag_current, self.launch_power)

    def release_drag(self) -> bool:
        """Pointer released: launch with the composed vector."""
        with self.lock:
            vector = self.current_launch_vector()
            self._cancel_drag()
            if vector is None:
                return False
            return self.mission.launch(vector)

    def launch_manual(self, vx: float, vy: float) -> bool:
        with self.lock:
            self._cancel_drag()
            return self.mission.launch(Vector2(vx, vy))

    def preview(self) -> List[Vector2]:
        """Predicted path for the drag in progress, cut at the first planet impact."""
        with self.lock:
            if not self.show_preview:
                return []
            vector = self.current_launch_vector()
            if vector is None:
                return []
            points = self.mission.predict_trajectory(vector, self.preview_steps)
            return truncate_at_impact(points, self.mission.scene.planets)

    # -----------------------
    # Frame update
    # -----------------------

    def step(self, dt_real_seconds: float) -> Outcome:
        with self.lock:
            self.frame += 1
            was_flying = self.mission.state is MissionState.FLYING
            outcome = self.mission.tick(dt_real_seconds, self.frame)
            if was_flying and outcome.terminal:
                self.status_msg = OUTCOME_MESSAGES[outcome]
            return outcome

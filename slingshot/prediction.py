#!/usr/bin/env python3
"""
Trajectory preview.

Runs the same `advance` used by live flight for a fixed number of steps from a
hypothetical launch state and collects the positions. Nothing here touches the live
scene: KinematicState is immutable, so the loop only ever rebinds a local name.
"""
from typing import List, Optional, Sequence

from .collisions import first_impact_index
from .constants import PREDICTION_DT, PREDICTION_STEPS
from .data_models import KinematicState, Planet
from .physics import advance
from .vector_utils import Vector2


def predict_positions(launch_state: KinematicState, planets: Sequence[Planet],
                      steps: int = PREDICTION_STEPS, dt: float = PREDICTION_DT) -> List[Vector2]:
    """Positions after each of `steps` steps, starting point excluded."""
    state = launch_state
    points: List[Vector2] = []
    for _ in range(max(0, int(steps))):
        state = advance(state, planets, dt)
        points.append(state.position)
    return points


def truncate_at_impact(points: List[Vector2], planets: Sequence[Planet]) -> List[Vector2]:
    """Drop predicted points past the first advisory planet impact (impact point kept)."""
    idx: Optional[int] = first_impact_index(points, planets)
    if idx is None:
        return points
    return points[:idx + 1]

#!/usr/bin/env python3
"""
Shared constants for Gravity Slingshot (screen pixels and frame-relative time).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. The physics constants in particular must be
shared by live stepping and trajectory prediction, otherwise the preview drifts
away from the real flight.
"""

# Physics controls
SOFTENING_EPSILON = 5.0  # px; added to distance so the pull stays finite near a planet centre
LIVE_TIME_SCALE = 20.0  # host seconds -> simulation steps while flying
MAX_FRAME_DT = 0.25  # seconds; longer frames (window drag, debugger) are clamped

# Trajectory preview
PREDICTION_STEPS = 100
PREDICTION_DT = 1.0  # one simulation step per predicted point

# Craft
CRAFT_RADIUS = 8.0
TRAIL_LENGTH = 20
TRAIL_SAMPLE_EVERY = 5  # frames between trail samples

# Launch input translation (host side)
DRAG_SCALE = 0.1
DEFAULT_LAUNCH_POWER = 3.0

# Play area
OUT_OF_BOUNDS_MARGIN = 0.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (10, 12, 18)
PLANET_COLOR = (76, 201, 240)
INFLUENCE_COLOR = (30, 70, 90)
GOAL_COLOR = (252, 163, 17)
GOAL_GLOW_COLOR = (120, 80, 20)
CRAFT_COLOR = (255, 255, 255)
TRAIL_COLOR = (110, 110, 120)
PREVIEW_COLOR = (170, 170, 170)
DRAG_LINE_COLOR = (252, 163, 17)
SUCCESS_COLOR = (76, 201, 240)
FAILURE_COLOR = (239, 35, 60)
HUD_COLOR = (200, 200, 200)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

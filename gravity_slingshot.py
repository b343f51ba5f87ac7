#!/usr/bin/env python3
"""
Gravity Slingshot application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a pygame rendering thread (the play field) and the Dear PyGui
  control panel (running on the main thread).
- Shares one GameController between them; it owns the mission and guards every access
  with a re-entrant lock.
- Translates pointer drags into launch vectors, draws the trajectory preview while aiming,
  and shows the outcome of each flight.

Threading model
- PygameRenderer runs in a background thread and performs: input handling, ticking the
  mission, and drawing. It takes snapshots of shared state under the controller lock.
- The UI class runs in the main thread via Dear PyGui. It refreshes its readouts on a
  periodic frame callback and calls controller methods, which are lock-protected.

Units and conventions
- World coordinates are window pixels; the play area is the window.
- Colors are RGB tuples in 0..255.

Running
1) Install: `pip install -e .`
2) Run: `gravity-slingshot` (or `python gravity_slingshot.py --level 2`)

Controls
- Drag anywhere with the left mouse button and release to launch (pull back to aim).
- R: retry the level. N: next level after a successful flight. Esc: quit.
"""

import argparse
import logging
import math
import time
import threading
from typing import List, Optional, Sequence

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from slingshot.constants import (
    BACKGROUND_COLOR,
    CRAFT_COLOR,
    DEFAULT_LAUNCH_POWER,
    DRAG_LINE_COLOR,
    FAILURE_COLOR,
    GOAL_COLOR,
    GOAL_GLOW_COLOR,
    HUD_COLOR,
    INFLUENCE_COLOR,
    LIVE_TIME_SCALE,
    PLANET_COLOR,
    PREDICTION_STEPS,
    PREVIEW_COLOR,
    SAFE_COORD_LIMIT,
    SUCCESS_COLOR,
    TRAIL_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from slingshot.controller import GameController
from slingshot.data_models import MissionState
from slingshot.levels_loader import load_all_levels
from slingshot.vector_utils import Vector2, vec_len, vec_sub

logger = logging.getLogger("gravity_slingshot")


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None

# ============================================================
# Drawing helpers
# ============================================================

_cached_font = None


def draw_text(surface, text, x, y, color, center=False):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 18)
        except (pygame.error, OSError):
            _cached_font = pygame.font.Font(None, 18)
    img = _cached_font.render(text, True, color)
    if center:
        x -= img.get_width() // 2
        y -= img.get_height() // 2
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def draw_dashed_polyline(surface, color, points: Sequence[Vector2], dash=5.0):
    """Dashed line through points, dash and gap of equal length (pixels)."""
    drawing = True
    carry = 0.0
    for a, b in zip(points, points[1:]):
        seg = vec_sub(b, a)
        length = vec_len(seg)
        if length == 0:
            continue
        t = 0.0
        while t < length:
            run = min(dash - carry, length - t)
            if drawing:
                p0 = _safe_point((a[0] + seg[0] * t / length, a[1] + seg[1] * t / length))
                p1 = _safe_point((a[0] + seg[0] * (t + run) / length, a[1] + seg[1] * (t + run) / length))
                if p0 and p1:
                    pygame.draw.aaline(surface, color, p0, p1)
            t += run
            carry += run
            if carry >= dash:
                carry = 0.0
                drawing = not drawing


def draw_craft(surface, pos, vel, radius, color):
    """Arrow-head ship pointing along its velocity (to the right when at rest)."""
    angle = math.atan2(vel[1], vel[0]) if vec_len(vel) > 0.1 else 0.0
    r = radius
    local = [(r + 2, 0), (-r, r - 2), (-r + 3, 0), (-r, -r + 2)]
    c, s = math.cos(angle), math.sin(angle)
    pts = []
    for lx, ly in local:
        p = _safe_point((pos[0] + lx * c - ly * s, pos[1] + lx * s + ly * c))
        if p is None:
            return
        pts.append(p)
    gfxdraw.filled_polygon(surface, pts, color)
    gfxdraw.aapolygon(surface, pts, color)

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the mission, draws planets, goal, craft, trail and the
    trajectory preview, and turns mouse drags into launches.
    """
    def __init__(self, game: GameController):
        super().__init__(daemon=True)
        self.game = game
        self.surface = None
        self.clock = None
        self.goal_pulse = 0.0
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Slingshot")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.game.set_play_area(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running and self.game.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.game.step(real_dt)
            self.draw()

            # Limit FPS
            self.clock.tick(60)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.game.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.game.set_play_area(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.game.running = False
                    self.running = False
                elif event.key == pygame.K_r:
                    self.game.retry()
                elif event.key == pygame.K_n:
                    self.game.next_level()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.game.start_drag(Vector2(*event.pos))

            elif event.type == pygame.MOUSEMOTION:
                self.game.update_drag(Vector2(*event.pos))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.game.release_drag()

    def draw_planets(self, surf, planets):
        for p in planets:
            c = _safe_point(p.position)
            if c is None:
                continue
            gfxdraw.aacircle(surf, c[0], c[1], int(p.influence_radius), INFLUENCE_COLOR)
            gfxdraw.filled_circle(surf, c[0], c[1], int(p.radius), PLANET_COLOR)
            gfxdraw.aacircle(surf, c[0], c[1], int(p.radius), PLANET_COLOR)

    def draw_goal(self, surf, goal):
        self.goal_pulse += 0.05
        c = _safe_point(goal.position)
        if c is None:
            return
        glow = max(1, int(goal.radius + math.sin(self.goal_pulse) * 5))
        gfxdraw.aacircle(surf, c[0], c[1], int(goal.radius), GOAL_COLOR)
        gfxdraw.aacircle(surf, c[0], c[1], glow, GOAL_GLOW_COLOR)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Snapshot shared state for consistency during draw
        with self.game.lock:
            mission = self.game.mission
            scene = mission.scene
            state = mission.state
            craft_pos = scene.craft.position
            craft_vel = scene.craft.velocity
            craft_radius = scene.craft.radius
            trail = list(scene.craft.trail)
            preview = self.game.preview() if state is MissionState.IDLE else []
            drag_start, drag_current = self.game.drag_start, self.game.drag_current
            level_no = self.game.current_level
            level_name = mission.level.name
            status = self.game.status_msg
            succeeded = mission.succeeded

        if state is MissionState.IDLE and drag_start is not None:
            if preview:
                draw_dashed_polyline(surf, PREVIEW_COLOR, [craft_pos] + preview)
            # Drag line mirrors the pull, pointing away from the launch direction
            pull = vec_sub(drag_start, drag_current)
            tail = _safe_point(vec_sub(craft_pos, pull))
            head = _safe_point(craft_pos)
            if tail and head:
                pygame.draw.line(surf, DRAG_LINE_COLOR, head, tail, 1)

        self.draw_goal(surf, scene.goal)
        self.draw_planets(surf, scene.planets)

        pts = [p for p in (_safe_point(t) for t in trail) if p]
        if len(pts) > 1:
            pygame.draw.aalines(surf, TRAIL_COLOR, False, pts)
        draw_craft(surf, craft_pos, craft_vel, craft_radius, CRAFT_COLOR)

        # HUD text
        draw_text(surf, f"Stage {level_no}: {level_name}", 10, 10, HUD_COLOR)
        draw_text(surf, "Drag to aim, release to launch | R: retry | N: next level | Esc: quit", 10, 32, HUD_COLOR)
        if state is MissionState.ENDED and status:
            w, h = surf.get_size()
            draw_text(surf, status, w // 2, h // 2, SUCCESS_COLOR if succeeded else FAILURE_COLOR, center=True)
            hint = "Press N for the next level" if succeeded else "Press R to retry"
            draw_text(surf, hint, w // 2, h // 2 + 26, HUD_COLOR, center=True)

        pygame.display.flip()

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui control panel: level selection, retry/next, launch tuning, manual launch.
    """
    def __init__(self, game: GameController):
        self.game = game

        self.level_combo_id = None
        self.state_text_id = None
        self.next_button_id = None
        self.vel_x_id = None
        self.vel_y_id = None
        self.status_msg_id = None
        self._last_status = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_game)

    def _level_items(self) -> List[str]:
        return [f"{i}. {lvl.name}" for i, lvl in enumerate(self.game.levels, start=1)]

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Gravity Slingshot - Controls', width=440, height=420)

        items = self._level_items()
        with dpg.window(label="Controls", width=420, height=400, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Level:")
                self.level_combo_id = dpg.add_combo(items, default_value=items[self.game.current_level - 1],
                                                    width=240, callback=self._on_level_selected)
            with dpg.group(horizontal=True):
                dpg.add_button(label="Retry", callback=self._on_retry)
                self.next_button_id = dpg.add_button(label="Next Level", callback=self._on_next_level)
            self.state_text_id = dpg.add_text("")

            dpg.add_separator()

            dpg.add_text("Launch")
            dpg.add_slider_float(label="Power", min_value=0.5, max_value=10.0, default_value=DEFAULT_LAUNCH_POWER,
                                 width=220, callback=lambda s, a, u: self.game.set_launch_power(a))
            dpg.add_checkbox(label="Show trajectory preview", default_value=True,
                             callback=lambda s, a, u: self._toggle_preview(a))
            dpg.add_input_int(label="Preview steps", default_value=PREDICTION_STEPS, min_value=1, max_value=2000,
                              min_clamped=True, max_clamped=True, width=120,
                              callback=lambda s, a, u: self.game.set_preview_steps(a))
            dpg.add_slider_float(label="Time scale", min_value=1.0, max_value=60.0, default_value=LIVE_TIME_SCALE,
                                 width=220, callback=lambda s, a, u: self.game.set_time_scale(a))

            dpg.add_separator()

            dpg.add_text("Manual launch vector")
            with dpg.group(horizontal=True):
                self.vel_x_id = dpg.add_input_text(label="Vx", default_value="0.0", width=100)
                self.vel_y_id = dpg.add_input_text(label="Vy", default_value="0.0", width=100)
                dpg.add_button(label="Launch", callback=self._on_manual_launch)
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _on_level_selected(self, sender, app_data, user_data=None):
        items = self._level_items()
        if app_data in items:
            self.game.load_level(items.index(app_data) + 1)
            self._set_status(f"Loaded {app_data}")

    def _on_retry(self):
        self.game.retry()
        self._set_status("Level restarted.")

    def _on_next_level(self):
        if self.game.next_level():
            self._set_status(f"Stage {self.game.current_level}: {self.game.level_name}")
        else:
            self._set_error("Reach the goal first.")

    def _toggle_preview(self, value):
        with self.game.lock:
            self.game.show_preview = bool(value)

    def _on_manual_launch(self):
        vx = try_float(dpg.get_value(self.vel_x_id))
        vy = try_float(dpg.get_value(self.vel_y_id))
        if None in (vx, vy) or not (math.isfinite(vx) and math.isfinite(vy)):
            self._set_error("Invalid launch vector.")
            return
        if self.game.launch_manual(vx, vy):
            self._set_status(f"Launched with ({vx:.2f}, {vy:.2f}).")
        else:
            self._set_error("Craft is not waiting for launch. Retry first.")

    def _sync_ui_with_game(self):
        """Periodic UI update mirroring mission state, current level and outcome."""
        with self.game.lock:
            state = self.game.mission.state
            level_no = self.game.current_level
            status = self.game.status_msg
            succeeded = self.game.mission.succeeded
        items = self._level_items()
        if dpg.get_value(self.level_combo_id) != items[level_no - 1]:
            dpg.set_value(self.level_combo_id, items[level_no - 1])
        dpg.set_value(self.state_text_id, f"State: {state.value}")
        dpg.configure_item(self.next_button_id, enabled=(state is MissionState.ENDED and succeeded))
        if status and status != self._last_status:
            if succeeded:
                self._set_status(status, color=SUCCESS_COLOR)
            else:
                self._set_error(status)
        self._last_status = status
        # Reschedule next sync
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Gravity Slingshot: steer a craft to the goal using planetary gravity.")
    parser.add_argument("--level", type=int, default=1, help="Level number to start on (default: 1)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: INFO)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    levels = load_all_levels()
    game = GameController(levels, VIEW_WIDTH, VIEW_HEIGHT, start_level=args.level)
    logger.info("Starting at level %d of %d", game.current_level, len(levels))

    renderer = PygameRenderer(game)

    # Start pygame renderer thread
    renderer.start()

    ui = UI(game)

    # Keyboard shortcut in UI window to retry (R)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_R:
                ui._on_retry()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        game.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()

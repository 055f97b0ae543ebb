#!/usr/bin/env python3
"""
Double Pendulum Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that owns the PendulumSimulation and the
  play/pause flag; all access is guarded by a re-entrant lock for thread-safety.
- Provides scene selection from templates/*.json, profile switching, reset and
  single-frame stepping, and live readouts of angles and energy.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  stepping physics, and drawing. It locks the SimulationController only to advance the
  simulation and to take a FrameSnapshot; drawing works on the snapshot.
- The UI class runs in the main thread via Dear PyGui. It refreshes its readouts on a periodic
  frame callback and invokes SimulationController methods as needed; these are lock-protected.

Units and conventions
- Angles are shown in degrees; lengths are screen pixels; the pivot is the profile origin.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python double_pendulum.py --accurate --theta1=120 --theta2=-10`

Keys (viewport): R reload, Space pause/resume, Esc close.
"""

import logging
import sys
import threading
from typing import Optional

import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from pendulum_core.arguments import LaunchConfig, parse_launch_config, parse_logging_options
from pendulum_core.constants import (
    BACKGROUND_COLOR,
    BOB1_COLOR,
    BOB1_RADIUS,
    BOB2_COLOR,
    BOB2_RADIUS,
    HINT_COLOR,
    PIVOT_COLOR,
    PIVOT_RADIUS,
    PROFILE_PRESETS,
    ROD_COLOR,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    TEXT_COLOR,
    TRAIL_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from pendulum_core.data_models import ConfigurationError, PendulumState, PhysicalParameters, SimulationProfile
from pendulum_core.logging_config import setup_logging
from pendulum_core.presets_loader import list_templates, load_template
from pendulum_core.simulation import FrameSnapshot, PendulumSimulation

logger = logging.getLogger("pendulum_core.app")

# ============================================================
# Simulation Controller (Shared State)
# ============================================================

class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, parameters: PhysicalParameters, profile: SimulationProfile,
                 initial_state: PendulumState):
        self.lock = threading.RLock()
        self.running = True  # app running
        self.playing = True  # simulation running
        self.status_msg: Optional[str] = None
        self.simulation = PendulumSimulation(parameters, profile, initial_state)

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def reset(self):
        with self.lock:
            self.simulation.reset()

    def step_frame(self):
        """Advance one rendered frame. Pauses the run if the state stops being finite."""
        with self.lock:
            self.simulation.advance_frame()
            if not self.simulation.is_finite():
                self.playing = False
                self.status_msg = "Simulation diverged (non-finite state). Press R to reload."
                logger.error("Non-finite state after %d steps: %s",
                             self.simulation.steps, self.simulation.state)

    def snapshot(self) -> FrameSnapshot:
        with self.lock:
            return self.simulation.snapshot()

    def replace_simulation(self, parameters: PhysicalParameters, profile: SimulationProfile,
                           initial_state: PendulumState):
        with self.lock:
            self.simulation = PendulumSimulation(parameters, profile, initial_state)

    def set_profile(self, name: str):
        with self.lock:
            sim = self.simulation
            profile = SimulationProfile.preset(name, (sim.profile.origin_x, sim.profile.origin_y))
            self.simulation = PendulumSimulation(sim.parameters, profile, sim.initial_state)

    def pop_status(self) -> Optional[str]:
        with self.lock:
            msg, self.status_msg = self.status_msg, None
            return msg

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: draws the trail, rods, bobs and HUD text.
    Handles the viewport keys (reload, pause, close).
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.surface = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Double Pendulum - Lagrangian Simulation")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT))
        self.clock = pygame.time.Clock()

        while self.running and self.sim.running:
            self.handle_events()

            with self.sim.lock:
                playing = self.sim.playing
            if playing:
                self.sim.step_frame()

            self.draw(self.sim.snapshot())

            # Limit FPS
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_r:
                    self.sim.reset()
                elif event.key == pygame.K_SPACE:
                    self.sim.toggle_play()
                elif event.key == pygame.K_ESCAPE:
                    self.sim.running = False
                    self.running = False

    def draw_trajectory(self, surf, points):
        # Older segments fade towards the background
        n = len(points)
        for i in range(1, n):
            p1 = _safe_point(points[i - 1])
            p2 = _safe_point(points[i])
            if p1 is None or p2 is None:
                continue
            alpha = (i / n) * 0.8
            color = _blend(BACKGROUND_COLOR, TRAIL_COLOR, alpha)
            pygame.draw.line(surf, color, p1, p2, 2)

    def draw_pendulum(self, surf, snap: FrameSnapshot):
        origin = _safe_point(snap.origin)
        bob1 = _safe_point(snap.bob1)
        bob2 = _safe_point(snap.bob2)
        if origin is None or bob1 is None or bob2 is None:
            return
        pygame.draw.line(surf, ROD_COLOR, origin, bob1, 3)
        pygame.draw.line(surf, ROD_COLOR, bob1, bob2, 3)
        gfxdraw.filled_circle(surf, origin[0], origin[1], PIVOT_RADIUS, PIVOT_COLOR)
        for (x, y), r, color in ((bob1, BOB1_RADIUS, BOB1_COLOR), (bob2, BOB2_RADIUS, BOB2_COLOR)):
            gfxdraw.filled_circle(surf, x, y, r, color)
            gfxdraw.aacircle(surf, x, y, r, color)

    def draw(self, snap: FrameSnapshot):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        self.draw_trajectory(surf, snap.trajectory)
        self.draw_pendulum(surf, snap)

        with self.sim.lock:
            playing = self.sim.playing
        draw_text(surf, f"Angle 1: {snap.theta1_degrees:.2f}°", 10, 10, TEXT_COLOR)
        draw_text(surf, f"Angle 2: {snap.theta2_degrees:.2f}°", 10, 30, TEXT_COLOR)
        draw_text(surf, f"Total Energy: {snap.energy:.2f} J", 10, 50, TEXT_COLOR)
        draw_text(surf, "Lagrange Equations (Euler-Lagrange)", 10, 70, HINT_COLOR)
        draw_text(surf, f"[{'Playing' if playing else 'Paused'}]", 10, 90, TEXT_COLOR)
        h = surf.get_height()
        draw_text(surf, "R: Reload | Space: Pause/Resume | Esc: Close", 10, h - 26, TEXT_COLOR)

        pygame.display.flip()

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("arial", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _blend(bg, fg, alpha):
    return tuple(int(b + (f - b) * alpha) for b, f in zip(bg, fg))

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: scene and profile selection, simulation controls, live readouts.
    """
    def __init__(self, sim: SimulationController, scene_name: Optional[str] = None):
        self.sim = sim
        self._template_map = {}

        self.status_msg_id = None
        self.theta1_id = None
        self.theta2_id = None
        self.omega_id = None
        self.energy_id = None
        self.steps_id = None
        self.params_id = None
        self.profile_id = None

        self._build_ui(scene_name)
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self, scene_name: Optional[str]):
        dpg.create_context()
        dpg.create_viewport(title='Double Pendulum - Controls', width=420, height=420)

        with dpg.window(label="Controls", width=400, height=400, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scene:")
                for fn, display in list_templates():
                    self._template_map[display] = fn
                items = list(self._template_map.keys())
                dpg.add_combo(items, default_value=scene_name or (items[0] if items else ""),
                              width=200, tag="scene_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_template(dpg.get_value("scene_combo")))

            with dpg.group(horizontal=True):
                dpg.add_text("Profile:")
                with self.sim.lock:
                    current = self.sim.simulation.profile
                preset_items = sorted(PROFILE_PRESETS)
                default_item = next(
                    (n for n in preset_items
                     if PROFILE_PRESETS[n] == (current.time_step, current.sub_steps_per_frame,
                                               current.trajectory_capacity)),
                    "",
                )
                dpg.add_combo(preset_items, default_value=default_item, width=200,
                              callback=lambda s, a, u: self._set_profile(a))

            dpg.add_separator()

            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reload", callback=self._reload)
            self.status_msg_id = dpg.add_text("")

            dpg.add_separator()

            self.params_id = dpg.add_text("")
            self.profile_id = dpg.add_text("")
            self.theta1_id = dpg.add_text("")
            self.theta2_id = dpg.add_text("")
            self.omega_id = dpg.add_text("")
            self.energy_id = dpg.add_text("")
            self.steps_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _toggle_play(self):
        playing = self.sim.toggle_play()
        self._set_status(f"Simulation {'Playing' if playing else 'Paused'}.")

    def _step_once(self):
        # Advance a single frame while paused
        with self.sim.lock:
            was_playing = self.sim.playing
            self.sim.playing = False
        self.sim.step_frame()
        with self.sim.lock:
            self.sim.playing = was_playing
        self._set_status("Stepped one frame.")

    def _reload(self):
        self.sim.reset()
        self._set_status("Reloaded initial state.")

    def _set_profile(self, name: str):
        try:
            self.sim.set_profile(name)
        except ConfigurationError as e:
            self._set_error(str(e))
            return
        self._set_status(f"Profile: {name}")

    def load_template(self, name: str):
        fn = self._template_map.get(name)
        if fn is None:
            self._set_error(f"Unknown scene: {name}")
            return
        try:
            scene = load_template(fn)
        except ConfigurationError as e:
            logger.error("Failed to load scene %s: %s", fn, e)
            self._set_error(str(e))
            return
        with self.sim.lock:
            profile = scene.profile or self.sim.simulation.profile
            self.sim.replace_simulation(scene.parameters, profile, scene.initial_state)
        self._set_status(f"Loaded scene: {scene.name}")

    def _sync_ui_with_sim(self):
        """Periodic UI update of the readouts."""
        snap = self.sim.snapshot()
        with self.sim.lock:
            params = self.sim.simulation.parameters
            profile = self.sim.simulation.profile
        dpg.set_value(self.params_id, f"Parameters: {params}")
        dpg.set_value(self.profile_id, f"Profile: {profile}")
        dpg.set_value(self.theta1_id, f"Angle 1: {snap.theta1_degrees:.2f} deg  ({snap.theta1:.4f} rad)")
        dpg.set_value(self.theta2_id, f"Angle 2: {snap.theta2_degrees:.2f} deg  ({snap.theta2:.4f} rad)")
        dpg.set_value(self.omega_id, f"Omega: {snap.omega1:.4f}, {snap.omega2:.4f} rad/s")
        dpg.set_value(self.energy_id, f"Total Energy: {snap.energy:.2f} J")
        dpg.set_value(self.steps_id, f"Steps: {snap.steps}  Trail points: {len(snap.trajectory)}")

        msg = self.sim.pop_status()
        if msg:
            self._set_error(msg)
        # Reschedule next sync
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def main(argv=None) -> int:
    log_level, log_file = parse_logging_options(argv)
    setup_logging(log_level, log_file)

    try:
        config: LaunchConfig = parse_launch_config(argv)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    logger.info("Starting with %s | %s", config.parameters, config.profile)

    sim = SimulationController(config.parameters, config.profile, config.initial_state)
    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    UI(sim, config.scene_name)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                sim.toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        while dpg.is_dearpygui_running() and sim.running:
            dpg.render_dearpygui_frame()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0

if __name__ == "__main__":
    sys.exit(main())

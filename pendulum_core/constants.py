#!/usr/bin/env python3
"""
Shared constants for the Double Pendulum Simulator.

Lengths are expressed in screen pixels and gravity in pixels per second squared
scaled so that the classic value of 9.81 gives a slow, readable swing. Keeping
defaults in one place ensures the command line, parameter files and scene
templates agree on what "default" means.
"""
import math

# Physical defaults
DEFAULT_GRAVITY = 9.81
DEFAULT_MASS1 = 10.0
DEFAULT_LENGTH1 = 150.0
DEFAULT_MASS2 = 10.0
DEFAULT_LENGTH2 = 150.0

# Initial condition: both rods horizontal, at rest
DEFAULT_THETA1 = math.pi / 2
DEFAULT_THETA2 = math.pi / 2

# Drawing origin (pivot) in pixels
DEFAULT_ORIGIN_X = 400
DEFAULT_ORIGIN_Y = 200

# Simulation profiles: (time_step, sub_steps_per_frame, trajectory_capacity)
PROFILE_PRESETS = {
    "accurate": (0.01, 50, 1000),
    "default": (0.05, 20, 500),
    "faster": (0.1, 2, 1000),
}
FALLBACK_PROFILE = "faster"

# Rendering (viewport)
VIEW_WIDTH = 800
VIEW_HEIGHT = 600
TARGET_FPS = 60
BACKGROUND_COLOR = (255, 255, 255)
TEXT_COLOR = (0, 0, 0)
HINT_COLOR = (255, 165, 0)
ROD_COLOR = (255, 0, 0)
PIVOT_COLOR = (128, 128, 128)
BOB1_COLOR = (255, 0, 0)
BOB2_COLOR = (0, 255, 0)
TRAIL_COLOR = (0, 255, 255)
PIVOT_RADIUS = 8
BOB1_RADIUS = 15
BOB2_RADIUS = 12

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

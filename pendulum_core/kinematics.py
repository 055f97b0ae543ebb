#!/usr/bin/env python3
"""
Forward kinematics helpers: map rod angles to screen positions.

Screen y grows downward, so a rod at angle 0 hangs straight below the pivot.
"""
from typing import Tuple

from .data_models import PendulumState, PhysicalParameters
from .utils import safe_cos, safe_sin

Point = Tuple[float, float]


def rod_end(start: Point, length: float, theta: float) -> Point:
    return (start[0] + length * safe_sin(theta), start[1] + length * safe_cos(theta))


def bob_positions(params: PhysicalParameters, state: PendulumState,
                  origin: Point) -> Tuple[Point, Point]:
    """Return ((x1, y1), (x2, y2)) for both bobs."""
    first = rod_end(origin, params.length1, state.theta1)
    second = rod_end(first, params.length2, state.theta2)
    return first, second


def second_bob_position(params: PhysicalParameters, state: PendulumState,
                        origin: Point) -> Point:
    return bob_positions(params, state, origin)[1]

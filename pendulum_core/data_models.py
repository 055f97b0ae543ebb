#!/usr/bin/env python3
"""
Data models for the Double Pendulum Simulator.

This module defines the configuration records and the dynamic state shared between
physics, driver and rendering.

Units and usage
- Angles are in radians measured from the downward vertical; angular velocities in rad/s.
- PhysicalParameters and SimulationProfile are frozen and validated on construction.
- PendulumState is the only mutable record. It is owned by the simulation driver;
  anything that needs to keep a state around must take a copy().
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    DEFAULT_GRAVITY,
    DEFAULT_MASS1,
    DEFAULT_LENGTH1,
    DEFAULT_MASS2,
    DEFAULT_LENGTH2,
    DEFAULT_THETA1,
    DEFAULT_THETA2,
    DEFAULT_ORIGIN_X,
    DEFAULT_ORIGIN_Y,
    PROFILE_PRESETS,
)


class ConfigurationError(ValueError):
    """Raised when physical parameters, a profile or a scene are invalid."""


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class PhysicalParameters:
    """
    Immutable description of the pendulum system.

    Fields:
    - gravity: Gravitational acceleration
    - mass1, length1: Mass of the first bob and length of the rod holding it
    - mass2, length2: Mass of the second bob and length of its rod
    """
    gravity: float = DEFAULT_GRAVITY
    mass1: float = DEFAULT_MASS1
    length1: float = DEFAULT_LENGTH1
    mass2: float = DEFAULT_MASS2
    length2: float = DEFAULT_LENGTH2

    def __post_init__(self):
        if not self.gravity > 0:
            raise ConfigurationError(f"Gravity must be positive, got {self.gravity}.")
        if not (self.mass1 > 0 and self.mass2 > 0):
            raise ConfigurationError(f"Masses must be positive, got m1={self.mass1}, m2={self.mass2}.")
        if not (self.length1 > 0 and self.length2 > 0):
            raise ConfigurationError(f"Lengths must be positive, got L1={self.length1}, L2={self.length2}.")

    def __str__(self) -> str:
        return (f"g={self.gravity:.2f}, m1={self.mass1:.2f}, L1={self.length1:.2f}, "
                f"m2={self.mass2:.2f}, L2={self.length2:.2f}")


@dataclass(frozen=True)
class SimulationProfile:
    """
    Immutable timing and drawing configuration.

    Fields:
    - time_step: Integration step in seconds of simulated time
    - sub_steps_per_frame: Integration steps performed per rendered frame
    - trajectory_capacity: Maximum number of trail points kept
    - origin_x, origin_y: Pivot position in screen pixels
    """
    time_step: float
    sub_steps_per_frame: int
    trajectory_capacity: int
    origin_x: int = DEFAULT_ORIGIN_X
    origin_y: int = DEFAULT_ORIGIN_Y

    def __post_init__(self):
        if not self.time_step > 0:
            raise ConfigurationError(f"Time step must be positive, got {self.time_step}.")
        if not _is_count(self.sub_steps_per_frame) or self.sub_steps_per_frame <= 0:
            raise ConfigurationError(f"Sub-steps per frame must be a positive integer, got {self.sub_steps_per_frame}.")
        if not _is_count(self.trajectory_capacity) or self.trajectory_capacity <= 0:
            raise ConfigurationError(f"Trajectory capacity must be a positive integer, got {self.trajectory_capacity}.")

    @classmethod
    def preset(cls, name: str, origin: Tuple[int, int] = (DEFAULT_ORIGIN_X, DEFAULT_ORIGIN_Y)) -> "SimulationProfile":
        """Build one of the named profiles ("accurate", "default", "faster")."""
        try:
            time_step, sub_steps, capacity = PROFILE_PRESETS[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown simulation profile '{name}'; expected one of {', '.join(sorted(PROFILE_PRESETS))}."
            ) from None
        return cls(time_step, sub_steps, capacity, int(origin[0]), int(origin[1]))

    def __str__(self) -> str:
        return (f"dt={self.time_step:.3f}, sub_steps={self.sub_steps_per_frame}, "
                f"max_points={self.trajectory_capacity}, origin=({self.origin_x},{self.origin_y})")


@dataclass
class PendulumState:
    """Dynamic state: rod angles (rad) and angular velocities (rad/s)."""
    theta1: float
    theta2: float
    omega1: float = 0.0
    omega2: float = 0.0

    @classmethod
    def default(cls) -> "PendulumState":
        """Both rods horizontal and at rest."""
        return cls(DEFAULT_THETA1, DEFAULT_THETA2, 0.0, 0.0)

    @classmethod
    def from_degrees(cls, theta1_deg: float, theta2_deg: float) -> "PendulumState":
        """Build a resting state from angles given in degrees."""
        return cls(math.radians(theta1_deg), math.radians(theta2_deg), 0.0, 0.0)

    def update(self, theta1: float, theta2: float, omega1: float, omega2: float) -> None:
        """Replace all four fields at once."""
        self.theta1 = theta1
        self.theta2 = theta2
        self.omega1 = omega1
        self.omega2 = omega2

    def copy(self) -> "PendulumState":
        return PendulumState(self.theta1, self.theta2, self.omega1, self.omega2)

    @property
    def theta1_degrees(self) -> float:
        return math.degrees(self.theta1)

    @property
    def theta2_degrees(self) -> float:
        return math.degrees(self.theta2)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.theta1, self.theta2, self.omega1, self.omega2)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.as_tuple())

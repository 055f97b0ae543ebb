#!/usr/bin/env python3
"""
Simulation driver for the double pendulum.

PendulumSimulation ties the pieces together: it owns the live PendulumState and
the TrajectoryBuffer, advances the state with the integrator and publishes
immutable FrameSnapshot objects for rendering.

Threading
- Nothing here locks. The object is meant to be owned by a single loop; callers
  that share it between threads must guard it themselves and hand other threads
  snapshots rather than the live state.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .data_models import ConfigurationError, PendulumState, PhysicalParameters, SimulationProfile
from .integrator import SemiImplicitEulerIntegrator
from .kinematics import Point, bob_positions
from .physics import LagrangianModel
from .trajectory import TrajectoryBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of one frame for the renderer."""
    theta1: float
    theta2: float
    omega1: float
    omega2: float
    theta1_degrees: float
    theta2_degrees: float
    energy: float
    origin: Point
    bob1: Point
    bob2: Point
    trajectory: Tuple[Point, ...]
    steps: int


class PendulumSimulation:
    """
    Owns the dynamic state of one double pendulum run.

    Args:
        parameters: Physical description of the system.
        profile: Timing and drawing configuration.
        initial_state: Starting state; defaults to both rods horizontal at rest.
            A private copy is kept so that reset() is exact.
    """

    def __init__(self, parameters: PhysicalParameters, profile: SimulationProfile,
                 initial_state: Optional[PendulumState] = None):
        self.parameters = parameters
        self.profile = profile
        self.model = LagrangianModel(parameters)
        self.integrator = SemiImplicitEulerIntegrator(self.model)
        self._initial_state = (initial_state or PendulumState.default()).copy()
        self.state = self._initial_state.copy()
        self.trajectory = TrajectoryBuffer(profile.trajectory_capacity)
        self.steps = 0
        logger.info("Simulation created: %s | %s", parameters, profile)

    @property
    def initial_state(self) -> PendulumState:
        return self._initial_state.copy()

    @property
    def origin(self) -> Point:
        return (float(self.profile.origin_x), float(self.profile.origin_y))

    def step(self) -> None:
        """Advance the physics by a single time step."""
        self.integrator.step(self.state, self.profile.time_step)
        self.steps += 1

    def step_n(self, count: int) -> None:
        """Advance the physics by `count` time steps."""
        if count < 0:
            raise ConfigurationError(f"Step count must not be negative, got {count}.")
        integrate = self.integrator.step
        state, dt = self.state, self.profile.time_step
        for _ in range(count):
            integrate(state, dt)
        self.steps += count

    def advance_frame(self) -> None:
        """Run one rendered frame worth of steps and record the trail point."""
        self.step_n(self.profile.sub_steps_per_frame)
        self.record_trajectory_point()

    def record_trajectory_point(self) -> None:
        _, (x2, y2) = bob_positions(self.parameters, self.state, self.origin)
        self.trajectory.append(x2, y2)

    def reset(self) -> None:
        """Restore the initial state and clear the trail."""
        self.state = self._initial_state.copy()
        self.trajectory.clear()
        self.steps = 0
        logger.info("Simulation reset.")

    def energy(self) -> float:
        return self.model.calculate_energy(self.state)

    def is_finite(self) -> bool:
        return self.state.is_finite()

    def snapshot(self) -> FrameSnapshot:
        state = self.state
        bob1, bob2 = bob_positions(self.parameters, state, self.origin)
        return FrameSnapshot(
            theta1=state.theta1,
            theta2=state.theta2,
            omega1=state.omega1,
            omega2=state.omega2,
            theta1_degrees=state.theta1_degrees,
            theta2_degrees=state.theta2_degrees,
            energy=self.model.calculate_energy(state),
            origin=self.origin,
            bob1=bob1,
            bob2=bob2,
            trajectory=self.trajectory.points(),
            steps=self.steps,
        )

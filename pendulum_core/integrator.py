#!/usr/bin/env python3
"""
Fixed-step time integration for the double pendulum.

The scheme is semi-implicit (symplectic) Euler: angular velocities are advanced
first and the new velocities are used to advance the angles. Swapping the order
turns it into explicit Euler, which pumps energy into the system.
"""
from .data_models import PendulumState
from .physics import LagrangianModel


class SemiImplicitEulerIntegrator:
    """Advance a PendulumState in place by fixed time steps."""

    def __init__(self, model: LagrangianModel):
        self.model = model

    def step(self, state: PendulumState, time_step: float) -> None:
        """
        Perform one integration step.

        Args:
            state: State to advance (modified in place).
            time_step: Step size in seconds (> 0).
        """
        alpha1, alpha2 = self.model.calculate_accelerations(state)

        new_omega1 = state.omega1 + alpha1 * time_step
        new_omega2 = state.omega2 + alpha2 * time_step

        new_theta1 = state.theta1 + new_omega1 * time_step
        new_theta2 = state.theta2 + new_omega2 * time_step

        state.update(new_theta1, new_theta2, new_omega1, new_omega2)

import math

import pytest

from pendulum_core.data_models import ConfigurationError, PendulumState
from pendulum_core.kinematics import bob_positions, second_bob_position
from pendulum_core.simulation import PendulumSimulation


@pytest.fixture
def sim(params, profile) -> PendulumSimulation:
    return PendulumSimulation(params, profile, PendulumState.from_degrees(120.0, -10.0))


def test_default_initial_state(params, profile):
    sim = PendulumSimulation(params, profile)
    assert sim.state.as_tuple() == (math.pi / 2, math.pi / 2, 0.0, 0.0)


def test_initial_state_is_copied(params, profile):
    initial = PendulumState(0.3, 0.4)
    sim = PendulumSimulation(params, profile, initial)
    sim.step_n(10)
    assert initial.as_tuple() == (0.3, 0.4, 0.0, 0.0)


def test_advance_frame_runs_sub_steps_and_records_point(sim, profile):
    sim.advance_frame()
    assert sim.steps == profile.sub_steps_per_frame
    assert len(sim.trajectory) == 1
    assert sim.trajectory.last_point() == pytest.approx(
        second_bob_position(sim.parameters, sim.state, sim.origin))


def test_step_n_matches_repeated_step(params, profile):
    a = PendulumSimulation(params, profile)
    b = PendulumSimulation(params, profile)
    a.step_n(7)
    for _ in range(7):
        b.step()
    assert a.state.as_tuple() == b.state.as_tuple()
    assert a.steps == b.steps == 7


def test_step_n_rejects_negative(sim):
    with pytest.raises(ConfigurationError):
        sim.step_n(-1)


def test_trajectory_is_bounded_by_profile_capacity(sim, profile):
    for _ in range(profile.trajectory_capacity + 3):
        sim.advance_frame()
    assert len(sim.trajectory) == profile.trajectory_capacity


def test_reset_restores_exact_initial_state(sim):
    initial = sim.state.as_tuple()
    for _ in range(25):
        sim.advance_frame()
    assert sim.state.as_tuple() != initial

    sim.reset()

    assert sim.state.as_tuple() == initial
    assert sim.trajectory.is_empty()
    assert sim.steps == 0


def test_reset_twice_is_idempotent(sim):
    sim.step_n(30)
    sim.reset()
    first = sim.state.as_tuple()
    sim.reset()
    assert sim.state.as_tuple() == first


def test_snapshot_is_detached_from_live_state(sim):
    sim.advance_frame()
    snap = sim.snapshot()
    sim.advance_frame()
    assert snap.theta1 != sim.state.theta1
    assert len(snap.trajectory) == 1
    assert snap.energy == pytest.approx(sim.model.calculate_energy(
        PendulumState(snap.theta1, snap.theta2, snap.omega1, snap.omega2)))
    assert snap.theta1_degrees == pytest.approx(math.degrees(snap.theta1))


def test_forward_kinematics(params):
    state = PendulumState(math.pi / 2, 0.0)
    (x1, y1), (x2, y2) = bob_positions(params, state, (400.0, 200.0))
    assert (x1, y1) == pytest.approx((550.0, 200.0))
    assert (x2, y2) == pytest.approx((550.0, 350.0))


def test_non_finite_state_is_reported_not_raised(params, profile):
    sim = PendulumSimulation(params, profile, PendulumState(math.nan, 0.0))
    sim.advance_frame()
    assert not sim.is_finite()
    assert math.isnan(sim.energy())

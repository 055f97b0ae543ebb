import math

import pytest

from pendulum_core.constants import PROFILE_PRESETS
from pendulum_core.data_models import ConfigurationError, PendulumState, PhysicalParameters, SimulationProfile


def test_default_parameters():
    p = PhysicalParameters()
    assert (p.gravity, p.mass1, p.length1, p.mass2, p.length2) == (9.81, 10.0, 150.0, 10.0, 150.0)


@pytest.mark.parametrize("field", ["gravity", "mass1", "length1", "mass2", "length2"])
@pytest.mark.parametrize("value", [0.0, -1.0, math.nan])
def test_non_positive_parameter_rejected(field, value):
    with pytest.raises(ConfigurationError):
        PhysicalParameters(**{field: value})


def test_parameters_are_immutable():
    p = PhysicalParameters()
    with pytest.raises(AttributeError):
        p.gravity = 1.0


@pytest.mark.parametrize("kwargs", [
    dict(time_step=0.0, sub_steps_per_frame=1, trajectory_capacity=1),
    dict(time_step=-0.01, sub_steps_per_frame=1, trajectory_capacity=1),
    dict(time_step=0.01, sub_steps_per_frame=0, trajectory_capacity=1),
    dict(time_step=0.01, sub_steps_per_frame=1, trajectory_capacity=0),
    dict(time_step=0.01, sub_steps_per_frame=1.5, trajectory_capacity=10),
    dict(time_step=0.01, sub_steps_per_frame=math.nan, trajectory_capacity=10),
    dict(time_step=0.01, sub_steps_per_frame=True, trajectory_capacity=10),
    dict(time_step=0.01, sub_steps_per_frame=1, trajectory_capacity=2.5),
    dict(time_step=0.01, sub_steps_per_frame=1, trajectory_capacity=math.nan),
    dict(time_step=0.01, sub_steps_per_frame=1, trajectory_capacity="10"),
    dict(time_step=math.nan, sub_steps_per_frame=1, trajectory_capacity=10),
])
def test_invalid_profile_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        SimulationProfile(**kwargs)


@pytest.mark.parametrize("name", sorted(PROFILE_PRESETS))
def test_presets_are_valid(name):
    profile = SimulationProfile.preset(name)
    assert (profile.time_step, profile.sub_steps_per_frame, profile.trajectory_capacity) == PROFILE_PRESETS[name]
    assert (profile.origin_x, profile.origin_y) == (400, 200)


def test_preset_ordering():
    accurate = SimulationProfile.preset("accurate")
    default = SimulationProfile.preset("default")
    faster = SimulationProfile.preset("faster")
    assert accurate.time_step < default.time_step < faster.time_step
    assert faster.sub_steps_per_frame < default.sub_steps_per_frame < accurate.sub_steps_per_frame


def test_unknown_preset_rejected():
    with pytest.raises(ConfigurationError, match="Unknown simulation profile"):
        SimulationProfile.preset("turbo")


def test_default_state():
    s = PendulumState.default()
    assert s.as_tuple() == (math.pi / 2, math.pi / 2, 0.0, 0.0)


def test_from_degrees_converts_and_zeroes_velocity():
    s = PendulumState.from_degrees(45.0, 90.0)
    assert s.theta1 == pytest.approx(math.pi / 4)
    assert s.theta2 == pytest.approx(math.pi / 2)
    assert s.omega1 == 0.0 and s.omega2 == 0.0
    assert s.theta1_degrees == pytest.approx(45.0)
    assert s.theta2_degrees == pytest.approx(90.0)


def test_copy_is_independent():
    s = PendulumState(0.1, 0.2, 0.3, 0.4)
    c = s.copy()
    c.update(1.0, 2.0, 3.0, 4.0)
    assert s.as_tuple() == (0.1, 0.2, 0.3, 0.4)
    assert c.as_tuple() == (1.0, 2.0, 3.0, 4.0)


def test_is_finite():
    assert PendulumState(0.0, 0.0).is_finite()
    assert not PendulumState(0.0, 0.0, math.inf, 0.0).is_finite()

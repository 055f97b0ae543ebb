import pytest

from pendulum_core.data_models import PhysicalParameters, SimulationProfile
from pendulum_core.physics import LagrangianModel


@pytest.fixture
def params() -> PhysicalParameters:
    return PhysicalParameters()


@pytest.fixture
def model(params) -> LagrangianModel:
    return LagrangianModel(params)


@pytest.fixture
def profile() -> SimulationProfile:
    return SimulationProfile(time_step=0.01, sub_steps_per_frame=5, trajectory_capacity=10)

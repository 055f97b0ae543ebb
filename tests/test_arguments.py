import logging
import math

import pytest

from pendulum_core.arguments import parse_launch_config, parse_logging_options
from pendulum_core.data_models import ConfigurationError


def test_no_arguments_gives_defaults():
    cfg = parse_launch_config([])
    p = cfg.parameters
    assert (p.gravity, p.mass1, p.length1, p.mass2, p.length2) == (9.81, 10.0, 150.0, 10.0, 150.0)
    assert cfg.profile.time_step == 0.1  # falls back to "faster"
    assert cfg.initial_state.as_tuple() == (math.pi / 2, math.pi / 2, 0.0, 0.0)
    assert cfg.scene_name is None


def test_physics_flags():
    cfg = parse_launch_config(["--g=5.0", "--m1=2", "--L2=80"])
    p = cfg.parameters
    assert (p.gravity, p.mass1, p.length1, p.mass2, p.length2) == (5.0, 2.0, 150.0, 10.0, 80.0)


def test_non_positive_physics_flag_rejected():
    with pytest.raises(ConfigurationError):
        parse_launch_config(["--m1=0"])


def test_non_numeric_flag_exits():
    with pytest.raises(SystemExit):
        parse_launch_config(["--g=abc"])


@pytest.mark.parametrize("argv,time_step", [
    (["--sim=accurate"], 0.01),
    (["--accurate"], 0.01),
    (["--sim=default"], 0.05),
    (["--faster"], 0.1),
])
def test_profile_selection(argv, time_step):
    assert parse_launch_config(argv).profile.time_step == time_step


def test_angles_in_degrees():
    cfg = parse_launch_config(["--theta1=45", "--theta2=90"])
    assert cfg.initial_state.theta1 == pytest.approx(math.pi / 4)
    assert cfg.initial_state.theta2 == pytest.approx(math.pi / 2)
    assert cfg.initial_state.omega1 == 0.0 and cfg.initial_state.omega2 == 0.0


def test_single_angle_is_ignored():
    cfg = parse_launch_config(["--theta1=45"])
    assert cfg.initial_state.theta1 == pytest.approx(math.pi / 2)


def test_config_file_takes_precedence(tmp_path):
    path = tmp_path / "physics.txt"
    path.write_text("g=3.0\nm1=1.0\n", encoding="utf-8")
    cfg = parse_launch_config([f"--config={path}", "--g=7.0"])
    assert cfg.parameters.gravity == 3.0
    assert cfg.parameters.mass1 == 1.0


def test_unreadable_config_falls_back(tmp_path):
    cfg = parse_launch_config([f"--config={tmp_path / 'missing.txt'}", "--g=7.0"])
    assert cfg.parameters.gravity == 7.0


def test_scene_supplies_defaults_and_flags_override():
    cfg = parse_launch_config(["--scene=heavy_lower_bob.json", "--sim=accurate", "--theta1=10", "--theta2=20"])
    assert cfg.scene_name == "Heavy lower bob"
    assert cfg.parameters.mass2 == 20.0
    assert cfg.profile.time_step == 0.01
    assert cfg.initial_state.theta1_degrees == pytest.approx(10.0)


def test_scene_profile_used_when_no_flag():
    cfg = parse_launch_config(["--scene=heavy_lower_bob.json"])
    assert cfg.profile.time_step == 0.02
    assert cfg.initial_state.theta1_degrees == pytest.approx(60.0)


def test_missing_scene_rejected():
    with pytest.raises(ConfigurationError):
        parse_launch_config(["--scene=does_not_exist.json"])


def test_logging_options():
    cfg = parse_launch_config(["--log-level=DEBUG", "--log-file=run.log"])
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == "run.log"


def test_undecodable_config_falls_back(tmp_path, caplog):
    path = tmp_path / "physics.txt"
    path.write_bytes(b"g=3.0\n\xff\xfe m1=1\n")
    with caplog.at_level(logging.ERROR, logger="pendulum_core"):
        cfg = parse_launch_config([f"--config={path}", "--g=7.0"])
    assert cfg.parameters.gravity == 7.0
    assert "Error reading configuration file" in caplog.text


def test_logging_options_are_read_before_the_full_parse():
    argv = ["--scene=does_not_exist.json", "--log-level=WARNING", "--log-file=run.log", "--g=abc"]
    assert parse_logging_options(argv) == ("WARNING", "run.log")
    assert parse_logging_options([]) == ("INFO", None)

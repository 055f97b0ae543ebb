#!/usr/bin/env python3
"""
Command line parsing: turn argv into the configuration the simulator starts with.

Physics come from, in order of preference: a --config parameter file, explicit
--g/--m1/--L1/--m2/--L2 flags, a --scene template, then the built-in defaults.
The profile comes from --sim/--accurate/--faster, then the scene, then "faster".
Initial angles are taken from --theta1/--theta2 (degrees) only when both are given.
"""
import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import FALLBACK_PROFILE, PROFILE_PRESETS
from .data_models import PendulumState, PhysicalParameters, SimulationProfile
from .presets_loader import PARAMETER_DEFAULTS, Scene, load_parameter_file, load_template, parameters_from_mapping

logger = logging.getLogger(__name__)

PHYSICS_FLAGS = ("g", "m1", "L1", "m2", "L2")


@dataclass(frozen=True)
class LaunchConfig:
    parameters: PhysicalParameters
    profile: SimulationProfile
    initial_state: PendulumState
    scene_name: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _logging_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-file", default=None)
    return parser


def parse_logging_options(argv: Optional[List[str]] = None) -> Tuple[str, Optional[str]]:
    """
    Pick out --log-level and --log-file ahead of the full parse.

    Logging has to be configured before parameter files and scenes are read.
    Unknown arguments are left for parse_launch_config to handle.
    """
    args, _ = _logging_parser().parse_known_args(argv)
    return args.log_level, args.log_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="double_pendulum",
        parents=[_logging_parser()],
        description="Double pendulum simulation driven by the Euler-Lagrange equations.",
    )
    parser.add_argument("--config", metavar="PATH", help="parameter file with g/m1/L1/m2/L2 lines")
    parser.add_argument("--scene", metavar="FILE", help="scene template from the templates folder")

    physics = parser.add_argument_group("physics")
    for key in PHYSICS_FLAGS:
        physics.add_argument(f"--{key}", dest=key, type=float, default=None,
                             help=f"default: {PARAMETER_DEFAULTS[key]}")

    profile = parser.add_argument_group("profile")
    profile.add_argument("--sim", choices=sorted(PROFILE_PRESETS), default=None)
    profile.add_argument("--accurate", dest="sim", action="store_const", const="accurate")
    profile.add_argument("--faster", dest="sim", action="store_const", const="faster")

    initial = parser.add_argument_group("initial condition")
    initial.add_argument("--theta1", type=float, default=None, help="first rod angle in degrees")
    initial.add_argument("--theta2", type=float, default=None, help="second rod angle in degrees")

    return parser


def _resolve_parameters(args: argparse.Namespace, scene: Optional[Scene]) -> PhysicalParameters:
    if args.config:
        try:
            return load_parameter_file(args.config)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading configuration file: %s. Using default configuration.", e)

    explicit = {key: getattr(args, key) for key in PHYSICS_FLAGS if getattr(args, key) is not None}
    if explicit:
        return parameters_from_mapping(explicit)
    if scene is not None:
        return scene.parameters
    return PhysicalParameters()


def _resolve_initial_state(args: argparse.Namespace, scene: Optional[Scene]) -> PendulumState:
    if args.theta1 is not None and args.theta2 is not None:
        return PendulumState.from_degrees(args.theta1, args.theta2)
    if args.theta1 is not None or args.theta2 is not None:
        logger.warning("Both --theta1 and --theta2 are needed; ignoring the one given.")
    if scene is not None:
        return scene.initial_state.copy()
    return PendulumState.default()


def parse_launch_config(argv: Optional[List[str]] = None) -> LaunchConfig:
    """
    Parse command line arguments.

    Raises:
        SystemExit: On malformed arguments (argparse).
        ConfigurationError: If the resulting parameters or scene are invalid.
    """
    args = build_parser().parse_args(argv)

    scene = load_template(args.scene) if args.scene else None

    if args.sim:
        profile = SimulationProfile.preset(args.sim)
    elif scene is not None and scene.profile is not None:
        profile = scene.profile
    else:
        profile = SimulationProfile.preset(FALLBACK_PROFILE)

    return LaunchConfig(
        parameters=_resolve_parameters(args, scene),
        profile=profile,
        initial_state=_resolve_initial_state(args, scene),
        scene_name=scene.name if scene else None,
        log_level=args.log_level,
        log_file=args.log_file,
    )

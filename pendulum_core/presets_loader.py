#!/usr/bin/env python3
"""
Parameter file and scene template loading utilities.

This module defines the two on-disk formats accepted by the simulator:
- Parameter files: plain `key=value` text describing the physical system
- Scene templates: JSON files bundling parameters, initial angles and a profile (templates/*.json)

Formats
=======
Parameter file:
    # comment lines and blank lines are ignored
    g=9.81
    m1=10.0
    L1=150.0
    m2=10.0
    L2=150.0

Missing keys fall back to the defaults; lines that are not a single `key=value`
pair are skipped and values that are not numbers are logged and skipped.

Template JSON (templates/*.json):
{
  "name": "Human-friendly scene name",
  "description": "Optional description",
  "parameters": {"g": 9.81, "m1": 10, "L1": 150, "m2": 10, "L2": 150},   # optional
  "initial_angles_deg": [120.0, -10.0],                                   # optional
  "profile": "accurate"                                                   # optional, name or object
}

An explicit profile object uses the keys time_step, sub_steps_per_frame,
trajectory_capacity and optionally origin_x, origin_y.

Users can add their own JSON files into the templates folder and they'll be picked up by the loader.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from .constants import (
    DEFAULT_GRAVITY,
    DEFAULT_MASS1,
    DEFAULT_LENGTH1,
    DEFAULT_MASS2,
    DEFAULT_LENGTH2,
    DEFAULT_ORIGIN_X,
    DEFAULT_ORIGIN_Y,
)
from .data_models import ConfigurationError, PendulumState, PhysicalParameters, SimulationProfile

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

PARAMETER_DEFAULTS = {
    "g": DEFAULT_GRAVITY,
    "m1": DEFAULT_MASS1,
    "L1": DEFAULT_LENGTH1,
    "m2": DEFAULT_MASS2,
    "L2": DEFAULT_LENGTH2,
}


@dataclass(frozen=True)
class Scene:
    """A ready-to-run combination of parameters, initial state and profile."""
    name: str
    description: str
    parameters: PhysicalParameters
    initial_state: PendulumState
    profile: Optional[SimulationProfile]


def parse_parameter_lines(lines) -> Dict[str, float]:
    """
    Parse `key=value` lines into a dict of floats.

    Values are not range-checked here; PhysicalParameters does that.
    """
    params: Dict[str, float] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split("=")
        if len(parts) != 2:
            continue
        key = parts[0].strip()
        try:
            params[key] = float(parts[1].strip())
        except ValueError:
            logger.warning("Invalid value on line: %s", line)
    return params


def read_parameter_file(path: str) -> Dict[str, float]:
    """
    Read a parameter file and return all five values, defaults filled in.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(path, "r", encoding="utf-8") as f:
        parsed = parse_parameter_lines(f)
    values = dict(PARAMETER_DEFAULTS)
    for key in PARAMETER_DEFAULTS:
        if key in parsed:
            values[key] = parsed[key]
    return values


def parameters_from_mapping(values: Mapping[str, float]) -> PhysicalParameters:
    """Build PhysicalParameters from g/m1/L1/m2/L2 keys, defaulting missing ones."""
    merged = dict(PARAMETER_DEFAULTS)
    merged.update({k: float(v) for k, v in values.items() if k in PARAMETER_DEFAULTS})
    return PhysicalParameters(
        gravity=merged["g"],
        mass1=merged["m1"],
        length1=merged["L1"],
        mass2=merged["m2"],
        length2=merged["L2"],
    )


def load_parameter_file(path: str) -> PhysicalParameters:
    """Read and validate a parameter file."""
    params = parameters_from_mapping(read_parameter_file(path))
    logger.info("Loaded parameters from %s: %s", path, params)
    return params


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read JSON file '%s': %s", path, e)
        return None


def _profile_from_json(spec) -> Optional[SimulationProfile]:
    if spec is None:
        return None
    if isinstance(spec, str):
        return SimulationProfile.preset(spec)
    if isinstance(spec, dict):
        try:
            return SimulationProfile(
                time_step=float(spec["time_step"]),
                sub_steps_per_frame=int(spec["sub_steps_per_frame"]),
                trajectory_capacity=int(spec["trajectory_capacity"]),
                origin_x=int(spec.get("origin_x", DEFAULT_ORIGIN_X)),
                origin_y=int(spec.get("origin_y", DEFAULT_ORIGIN_Y)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid profile definition: {e}") from e
    raise ConfigurationError(f"Profile must be a preset name or an object, got {type(spec).__name__}.")


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(templates_dir):
        return items
    for fn in sorted(os.listdir(templates_dir)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(templates_dir, fn))
        if not isinstance(data, dict):
            continue
        display = data.get("name") or os.path.splitext(fn)[0]
        items.append((fn, display))
    return items


def load_template(file_name: str, templates_dir: str = TEMPLATES_DIR) -> Scene:
    """
    Load a scene template by file name.

    Raises:
        ConfigurationError: If the file is missing, unreadable or describes an invalid scene.
    """
    path = os.path.join(templates_dir, file_name)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Scene template '{file_name}' could not be read.")

    try:
        parameters = parameters_from_mapping(data.get("parameters", {}))
        angles = data.get("initial_angles_deg")
        if angles is None:
            initial_state = PendulumState.default()
        else:
            initial_state = PendulumState.from_degrees(float(angles[0]), float(angles[1]))
    except (TypeError, ValueError, IndexError, AttributeError) as e:
        raise ConfigurationError(f"Scene template '{file_name}' is invalid: {e}") from e

    return Scene(
        name=data.get("name") or os.path.splitext(file_name)[0],
        description=data.get("description", ""),
        parameters=parameters,
        initial_state=initial_state,
        profile=_profile_from_json(data.get("profile")),
    )

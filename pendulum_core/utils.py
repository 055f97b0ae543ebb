#!/usr/bin/env python3
"""
General utilities for the Double Pendulum Simulator.
"""
import math


def safe_sin(x: float) -> float:
    """math.sin that yields NaN for infinite input instead of raising."""
    return math.sin(x) if math.isfinite(x) else math.nan


def safe_cos(x: float) -> float:
    """math.cos that yields NaN for infinite input instead of raising."""
    return math.cos(x) if math.isfinite(x) else math.nan

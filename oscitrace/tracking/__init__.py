# oscitrace/tracking/__init__.py
"""
Oscillator state, run driver and trajectory analysis.

- particles: ParticleState, StepRecord, Trajectory
- tracker: run() record producer, OscillatorTracker, TrackerOptions
- analysis: period / stability helpers and trajectory statistics
"""

from .particles import PARAMETER_NAMES, ParticleState, StepRecord, Trajectory
from .tracker import OscillatorTracker, TrackerOptions, create_tracker, run
from .analysis import (
    analyze_trajectory_results,
    compute_trajectory_statistics,
    estimate_period,
    natural_period,
    stability_limit,
    validate_trajectory_data,
)

__all__ = [
    "PARAMETER_NAMES",
    "ParticleState",
    "StepRecord",
    "Trajectory",
    "OscillatorTracker",
    "TrackerOptions",
    "create_tracker",
    "run",
    "analyze_trajectory_results",
    "compute_trajectory_statistics",
    "estimate_period",
    "natural_period",
    "stability_limit",
    "validate_trajectory_data",
]

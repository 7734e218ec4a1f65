"""
OsciTrace: a one-dimensional harmonic oscillator integrated with coupled Euler steps.

A small package for simulating a particle on a linear spring with:
- A validated, explicitly owned particle state
- A deterministic fixed-step integrator (force, velocity, then position)
- Lazy per-step records that any sink can consume
- Text, XYZ, VTK and HDF5 trajectory output
- Static matplotlib plots of the run

Core workflow:
1. Build parameters → ParticleState
2. Run the integrator → run() records or OscillatorTracker.track() → Trajectory
3. Write results → write_outputs / streaming writers
4. Inspect → analyze_trajectory_results, plot_time_series
"""

from __future__ import annotations

# Version info
__version__ = "0.1.0"
__author__ = "OsciTrace Contributors"

__all__ = [
    # Version
    "__version__",
    # Errors
    "OscillatorError",
    "InvalidTimeStep",
    "InvalidInterval",
    "InvalidMass",
    "InvalidParameter",
    "NonFiniteResult",
    # Utilities
    "JAX_AVAILABLE",
    "configure",
    "get_config",
    "reset_config",
    "check_system_requirements",
    "generate_summary_report",
    # Integrators
    "compute_force",
    "reset_to_initial",
    "euler_step",
    "euler_scan",
    "step",
    # Tracking
    "ParticleState",
    "StepRecord",
    "Trajectory",
    "OscillatorTracker",
    "TrackerOptions",
    "create_tracker",
    "run",
    # Analysis
    "analyze_trajectory_results",
    "natural_period",
    "stability_limit",
    # I/O
    "TextTableWriter",
    "XYZTrajectoryWriter",
    "write_outputs",
    # Visualization
    "plot_time_series",
    "plot_phase_portrait",
]

from .errors import (  # noqa: F401
    OscillatorError,
    InvalidTimeStep,
    InvalidInterval,
    InvalidMass,
    InvalidParameter,
    NonFiniteResult,
)

from .utils import (  # noqa: F401
    JAX_AVAILABLE,
    configure,
    get_config,
    reset_config,
    check_system_requirements,
    generate_summary_report,
)

from .tracking import (  # noqa: F401
    ParticleState,
    StepRecord,
    Trajectory,
    OscillatorTracker,
    TrackerOptions,
    create_tracker,
    run,
    analyze_trajectory_results,
    natural_period,
    stability_limit,
)

from .integrators import (  # noqa: F401
    compute_force,
    reset_to_initial,
    euler_step,
    euler_scan,
    step,
)

from .io import TextTableWriter, XYZTrajectoryWriter, write_outputs  # noqa: F401

from .visualization import plot_time_series, plot_phase_portrait  # noqa: F401

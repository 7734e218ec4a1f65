"""
Trajectory analysis utilities for OsciTrace.

Provides functions to characterise an oscillator run, compute column
statistics, and validate trajectory data integrity.
"""

import math
import numpy as np
from typing import Dict, Any, Tuple


def natural_period(mass: float, spring_constant: float) -> float:
    """
    Period 2*pi*sqrt(m/k) of the undamped oscillator.

    Returns inf when k == 0 and NaN when m/k < 0 (no oscillation).
    """
    if spring_constant == 0.0:
        return math.inf
    ratio = mass / spring_constant
    if ratio < 0.0:
        return math.nan
    return 2.0 * math.pi * math.sqrt(ratio)


def stability_limit(mass: float, spring_constant: float) -> float:
    """
    Largest time step for which the coupled Euler recurrence stays bounded.

    The update matrix has unit determinant, so orbits stay bounded while
    its trace lies in (-2, 2), i.e. for h < 2*sqrt(m/k).
    """
    if spring_constant == 0.0:
        return math.inf
    ratio = mass / spring_constant
    if ratio < 0.0:
        return math.nan
    return 2.0 * math.sqrt(ratio)


def validate_trajectory_data(trajectory) -> Dict[str, Any]:
    """
    Validate trajectory data integrity.

    Parameters
    ----------
    trajectory : Trajectory
        OsciTrace trajectory object

    Returns
    -------
    Dict[str, Any]
        Validation results with 'valid' boolean and list of 'issues'
    """
    issues = []

    if trajectory.T == 0:
        issues.append("empty trajectory")

    for name in ("times", "forces", "positions", "velocities"):
        column = getattr(trajectory, name)
        if column.shape != (trajectory.T,):
            issues.append(f"{name} has shape {column.shape}")
        elif not np.all(np.isfinite(column)):
            issues.append(f"{name} contains non-finite values")

    if trajectory.T > 1 and not np.all(np.diff(trajectory.times) > 0):
        issues.append("times are not strictly increasing")

    if trajectory.T > 1 and not np.all(np.diff(trajectory.steps) > 0):
        issues.append("step indices are not strictly increasing")

    return {"valid": not issues, "issues": issues}


def _column_stats(values: np.ndarray) -> Dict[str, float]:
    if values.size == 0:
        return {"mean": math.nan, "std": math.nan, "min": math.nan, "max": math.nan}
    return {
        "mean": float(np.mean(values)),
        "std": float(np.std(values)),
        "min": float(np.min(values)),
        "max": float(np.max(values)),
    }


def estimate_period(times: np.ndarray, positions: np.ndarray) -> float:
    """
    Period estimated from the spacing of upward zero crossings of the position.

    Crossing times are linearly interpolated between samples. Returns NaN
    when fewer than two upward crossings are recorded.
    """
    if positions.size < 2:
        return math.nan
    x0, x1 = positions[:-1], positions[1:]
    idx = np.nonzero((x0 < 0.0) & (x1 >= 0.0))[0]
    if idx.size < 2:
        return math.nan
    t0, t1 = times[idx], times[idx + 1]
    crossings = t0 - x0[idx] * (t1 - t0) / (x1[idx] - x0[idx])
    return float(np.mean(np.diff(crossings)))


def compute_trajectory_statistics(trajectory) -> Dict[str, Any]:
    """
    Compute summary statistics for a trajectory.

    Returns
    -------
    Dict[str, Any]
        'position', 'velocity', 'force' (mean/std/min/max each),
        'amplitude', 'estimated_period', and, when the run parameters are
        in the metadata, 'natural_period' and 'stability_limit'.
    """
    stats: Dict[str, Any] = {
        "n_records": trajectory.T,
        "duration": trajectory.duration,
        "position": _column_stats(trajectory.positions),
        "velocity": _column_stats(trajectory.velocities),
        "force": _column_stats(trajectory.forces),
        "amplitude": float(np.max(np.abs(trajectory.positions))) if trajectory.T else math.nan,
        "estimated_period": estimate_period(trajectory.times, trajectory.positions),
    }

    meta = trajectory.metadata
    if "mass" in meta and "spring_constant" in meta:
        stats["natural_period"] = natural_period(meta["mass"], meta["spring_constant"])
        stats["stability_limit"] = stability_limit(meta["mass"], meta["spring_constant"])

    return stats


def analyze_trajectory_results(trajectory, verbose: bool = True) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Analyze an oscillator run.

    Parameters
    ----------
    trajectory : Trajectory
        OsciTrace trajectory object
    verbose : bool, default True
        Whether to print analysis results

    Returns
    -------
    Tuple[Dict[str, Any], Dict[str, Any]]
        (statistics, validation_results)
    """
    if verbose:
        print(f"\n📊 Analyzing trajectory results...")
        print(f"   🕒 Steps recorded: {trajectory.T}")
        print(f"   ⏱️  Duration: {trajectory.duration:.4g}")
        print(f"   💾 Memory: {trajectory.memory_usage_mb():.3f} MB")

    validation = validate_trajectory_data(trajectory)
    if verbose:
        print(f"   ✅ Data validation: {'PASSED' if validation['valid'] else 'FAILED'}")
        if not validation["valid"]:
            print(f"      ⚠️  Issues found: {', '.join(validation['issues'])}")

    stats = compute_trajectory_statistics(trajectory)

    if verbose:
        print(f"\n   📈 Trajectory Statistics:")
        print(f"      Position range: [{stats['position']['min']:.6g}, {stats['position']['max']:.6g}]")
        print(f"      Velocity range: [{stats['velocity']['min']:.6g}, {stats['velocity']['max']:.6g}]")
        print(f"      Amplitude: {stats['amplitude']:.6g}")
        if "natural_period" in stats:
            print(f"      Natural period: {stats['natural_period']:.6g} "
                  f"(estimated {stats['estimated_period']:.6g})")

    return stats, validation

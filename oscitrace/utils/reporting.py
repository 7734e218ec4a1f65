"""
Reporting utilities for OsciTrace runs.

Writes a plain-text summary of the run parameters, trajectory
statistics and the output files that were produced.
"""

import time
from pathlib import Path
from typing import Dict, Any, Iterable, Optional, Union

from ..tracking.particles import PARAMETER_NAMES
from .logging import memory_info


def generate_summary_report(trajectory, stats: Optional[Dict[str, Any]] = None,
                            written: Optional[Iterable[Union[str, Path]]] = None,
                            output_dir: Union[str, Path] = "output",
                            filename: str = "run_summary.txt",
                            verbose: bool = True) -> Path:
    """
    Generate a summary report for an oscillator run.

    Parameters
    ----------
    trajectory : Trajectory
        Collected run
    stats : Dict[str, Any], optional
        Statistics from analyze_trajectory_results
    written : iterable of paths, optional
        Output files produced for this run
    output_dir : str or Path, default "output"
        Output directory for the report
    filename : str, default "run_summary.txt"
        Report filename

    Returns
    -------
    Path
        Path to the generated report file
    """
    if verbose:
        print(f"\n📋 Generating summary report...")

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    report_file = output_path / filename
    meta = trajectory.metadata

    with open(report_file, 'w') as f:
        f.write("="*80 + "\n")
        f.write("OsciTrace Harmonic Oscillator Run Summary\n")
        f.write("="*80 + "\n\n")
        f.write(f"Generated: {time.strftime('%Y-%m-%d %H:%M:%S')}\n\n")

        f.write("PARAMETERS\n")
        f.write("-"*40 + "\n")
        for name in PARAMETER_NAMES:
            if name in meta:
                f.write(f"{name}: {meta[name]!r}\n")
        f.write("\n")

        f.write("TRAJECTORY\n")
        f.write("-"*40 + "\n")
        f.write(f"Records: {trajectory.T}\n")
        f.write(f"Steps integrated: {meta.get('n_steps', trajectory.T)}\n")
        f.write(f"Integration path: {meta.get('path', 'unknown')}\n")
        if "wall_time_s" in meta:
            f.write(f"Wall time: {meta['wall_time_s']:.6f} s\n")
        f.write(f"Process memory (RSS): {memory_info()['rss_mb']:.1f} MB\n")
        f.write("\n")

        if stats:
            f.write("STATISTICS\n")
            f.write("-"*40 + "\n")
            for key in ("position", "velocity", "force"):
                s = stats[key]
                f.write(f"{key}: mean={s['mean']:.6g} std={s['std']:.6g} "
                        f"min={s['min']:.6g} max={s['max']:.6g}\n")
            f.write(f"amplitude: {stats['amplitude']:.6g}\n")
            f.write(f"estimated period: {stats['estimated_period']:.6g}\n")
            if "natural_period" in stats:
                f.write(f"natural period: {stats['natural_period']:.6g}\n")
                f.write(f"stability limit (h): {stats['stability_limit']:.6g}\n")
            f.write("\n")

        if written:
            f.write("OUTPUT FILES\n")
            f.write("-"*40 + "\n")
            for path in written:
                f.write(f"{path}\n")

    if verbose:
        print(f"   ✅ Report written to: {report_file}")

    return report_file

#!/usr/bin/env python3
"""
Minimal OsciTrace Example

This example demonstrates the core OsciTrace workflow:
1. Build a particle on a spring
2. Stream the run straight into the text and XYZ writers
3. Collect the same run into a Trajectory
4. Compare step sizes against the natural period
5. Save basic visualization

The command-line equivalent of step 2 is:
python -m oscitrace --x0 1 --v0 0 --dt 0.01 --interval 20 --mass 1 --k 1
"""

import math
from pathlib import Path

import matplotlib.pyplot as plt

import oscitrace as ot
from oscitrace.io import TextTableWriter, XYZTrajectoryWriter


def main():
    print("OsciTrace Minimal Example")
    print("=" * 30)

    # Configuration
    mass = 1.0
    k = 4.0
    dt = 0.01
    t_final = 20.0
    output_dir = Path("output_minimal")

    period = ot.natural_period(mass, k)
    print(f"Natural period: {period:.4f}, stability limit: {ot.stability_limit(mass, k):.4f}")

    # 1. Particle released from rest at x = 1
    state = ot.ParticleState(1.0, 0.0, dt, t_final, mass, k)

    # 2. Stream every record into two sinks without keeping the run in memory
    tracker = ot.create_tracker(progress_style="simple", progress_update_every=500)
    with TextTableWriter(output_dir / "output.txt") as table, \
            XYZTrajectoryWriter(output_dir / "trajectory.xyz") as xyz:
        def both(record):
            table(record)
            xyz(record)
        n = tracker.stream(state, both)
    print(f"Streamed {n} steps to {output_dir}")

    # 3. Same run, collected
    trajectory = ot.create_tracker(progress_style="none").track(state)
    stats, _ = ot.analyze_trajectory_results(trajectory)

    # 4. Energy drift for a few step sizes
    print("\nEnergy drift over the run:")
    for steps_per_period in (20, 100, 1000):
        h = period / steps_per_period
        probe = ot.ParticleState(1.0, 0.0, h, t_final, mass, k)
        e0 = 0.5 * k
        drift = max(abs(0.5 * mass * r.velocity ** 2 + 0.5 * k * r.position ** 2 - e0)
                    for r in ot.run(probe)) / e0
        print(f"   {steps_per_period:5d} steps/period: {100 * drift:.3f}%")

    # 5. Visualization
    ot.plot_time_series(trajectory, title="Coupled Euler, F = -kx", show=False,
                        save_path=output_dir / "time_series.png")
    ot.plot_phase_portrait(trajectory, show=False, save_path=output_dir / "phase_portrait.png")
    plt.close("all")

    period_error = abs(stats["estimated_period"] - period) / period
    print(f"\nEstimated period error: {period_error:.2e}")
    print(f"Done! Check {output_dir}/ for outputs.")
    return 0 if math.isfinite(period_error) else 1


if __name__ == "__main__":
    raise SystemExit(main())

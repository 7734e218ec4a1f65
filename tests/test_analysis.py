"""Period and stability helpers, trajectory statistics and the run report."""

import math

import numpy as np
import pytest

import oscitrace as ot
from oscitrace.tracking import (
    compute_trajectory_statistics,
    estimate_period,
    validate_trajectory_data,
)


def test_natural_period_and_stability_limit():
    assert ot.natural_period(1.0, 1.0) == pytest.approx(2 * math.pi)
    assert ot.stability_limit(1.0, 4.0) == pytest.approx(1.0)
    assert ot.natural_period(1.0, 0.0) == math.inf
    assert math.isnan(ot.natural_period(-1.0, 1.0))


def test_bounded_below_stability_limit_and_divergent_above():
    limit = ot.stability_limit(1.0, 1.0)

    # both steps are far coarser than period / 20
    with pytest.warns(UserWarning):
        stable = ot.ParticleState(1.0, 0.0, 0.95 * limit, 200.0, 1.0, 1.0)
    with pytest.warns(UserWarning):
        unstable = ot.ParticleState(1.0, 0.0, 1.05 * limit, 200.0, 1.0, 1.0)

    assert max(abs(r.position) for r in ot.run(stable)) < 10.0
    assert max(abs(r.position) for r in ot.run(unstable)) > 1e3


def test_estimated_period_close_to_natural(short_trajectory):
    state = ot.ParticleState(1.0, 0.0, 0.001, 20.0, 1.0, 1.0)
    trajectory = ot.create_tracker(progress_style="none").track(state)
    assert estimate_period(trajectory.times, trajectory.positions) == pytest.approx(
        2 * math.pi, rel=1e-3)

    # a single second of motion never crosses zero upward
    assert math.isnan(estimate_period(short_trajectory.times, short_trajectory.positions))


def test_statistics_include_physics_from_metadata(short_trajectory):
    stats = compute_trajectory_statistics(short_trajectory)

    assert stats["n_records"] == 100
    assert stats["amplitude"] == pytest.approx(1.0, abs=1e-3)
    assert stats["natural_period"] == pytest.approx(2 * math.pi)
    assert stats["stability_limit"] == pytest.approx(2.0)
    assert stats["position"]["max"] <= 1.0


def test_validation_flags_problems():
    empty = ot.Trajectory([], [], [], [])
    assert not validate_trajectory_data(empty)["valid"]

    bad = ot.Trajectory([0.1, 0.2], [0.0, np.nan], [1.0, 1.0], [0.0, 0.0])
    result = validate_trajectory_data(bad)
    assert not result["valid"]
    assert "forces contains non-finite values" in result["issues"]


def test_analyze_prints_summary(capsys, short_trajectory):
    stats, validation = ot.analyze_trajectory_results(short_trajectory, verbose=True)
    out = capsys.readouterr().out
    assert validation["valid"]
    assert "Steps recorded: 100" in out
    assert "Natural period" in out
    assert stats["duration"] == pytest.approx(0.99)


def test_summary_report(tmp_path, short_trajectory):
    stats, _ = ot.analyze_trajectory_results(short_trajectory, verbose=False)
    report = ot.generate_summary_report(short_trajectory, stats, written=["output/output.txt"],
                                        output_dir=tmp_path, verbose=False)
    text = report.read_text()

    assert report == tmp_path / "run_summary.txt"
    assert "time_step: 0.01" in text
    assert "Records: 100" in text
    assert "Process memory (RSS):" in text
    assert "natural period: 6.28319" in text
    assert "output/output.txt" in text


def test_trajectory_indexing(short_trajectory):
    one = short_trajectory[-1]
    assert one.T == 1 and one.steps[0] == 100
    assert short_trajectory[10:20].T == 10
    with pytest.raises(IndexError):
        short_trajectory[100]
    with pytest.raises(TypeError):
        short_trajectory["a"]
    assert short_trajectory.points_3d().shape == (100, 1, 3)

"""Static matplotlib plots of a run."""

import matplotlib.pyplot as plt
import pytest

from oscitrace.visualization import plot_phase_portrait, plot_time_series


def test_time_series_axes(tmp_path, short_trajectory):
    fig, axes = plot_time_series(short_trajectory, show=False, save_path=tmp_path / "ts.png")
    assert len(axes) == 3
    assert axes[0].get_ylabel() == "position (x)"
    assert (tmp_path / "ts.png").exists()
    plt.close(fig)


def test_time_series_subset(short_trajectory):
    fig, axes = plot_time_series(short_trajectory, quantities=("velocity",), show=False)
    assert len(axes) == 1
    plt.close(fig)

    with pytest.raises(ValueError):
        plot_time_series(short_trajectory, quantities=("energy",), show=False)


def test_phase_portrait(tmp_path, short_trajectory):
    fig, ax = plot_phase_portrait(short_trajectory, show=False, save_path=tmp_path / "phase.png")
    assert ax.get_xlabel().startswith("position")
    assert (tmp_path / "phase.png").exists()
    plt.close(fig)

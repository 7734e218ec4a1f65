# oscitrace/visualization/static.py
from __future__ import annotations
import os
from typing import Optional, Sequence, Union
import numpy as np

try:
    import matplotlib.pyplot as plt
    MPL_AVAILABLE = True
except Exception:
    MPL_AVAILABLE = False

PathLike = Union[str, os.PathLike]

_SERIES = {
    "position": ("positions", "x"),
    "velocity": ("velocities", "v"),
    "force": ("forces", "F"),
}

def _ensure_mpl():
    if not MPL_AVAILABLE:
        raise RuntimeError("Matplotlib is required (pip install matplotlib)")

def plot_time_series(
    trajectory,
    quantities: Sequence[str] = ("position", "velocity", "force"),
    title: Optional[str] = None,
    linewidth: float = 1.0,
    show: bool = True,
    save_path: Optional[PathLike] = None,
):
    """
    Plot the selected quantities against time, one stacked axis each.

    quantities: any of 'position', 'velocity', 'force'
    """
    _ensure_mpl()
    unknown = [q for q in quantities if q not in _SERIES]
    if unknown:
        raise ValueError(f"Unknown quantities {unknown}; choose from {list(_SERIES)}")

    fig, axes = plt.subplots(len(quantities), 1, figsize=(7, 2.2 * len(quantities)),
                             dpi=120, sharex=True, squeeze=False)
    for ax, name in zip(axes[:, 0], quantities):
        attr, symbol = _SERIES[name]
        ax.plot(trajectory.times, getattr(trajectory, attr), lw=linewidth)
        ax.set_ylabel(f"{name} ({symbol})")
        ax.grid(True, alpha=0.3)
    axes[-1, 0].set_xlabel("time")
    if title:
        axes[0, 0].set_title(title)
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight")
    if show:
        plt.show()
    return fig, axes[:, 0]

def plot_phase_portrait(
    trajectory,
    title: Optional[str] = None,
    s: float = 2.0,
    color_by_time: bool = True,
    ax: Optional["plt.Axes"] = None,
    show: bool = True,
    save_path: Optional[PathLike] = None,
):
    """
    Scatter velocity against position; a bounded orbit shows as a closed loop.
    """
    _ensure_mpl()
    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 5), dpi=120)
    else:
        fig = ax.figure

    c = np.asarray(trajectory.times) if color_by_time else None
    sc = ax.scatter(trajectory.positions, trajectory.velocities, c=c, s=s, edgecolors="none")
    if color_by_time and trajectory.T:
        fig.colorbar(sc, ax=ax, label="time")
    ax.set_xlabel("position (x)")
    ax.set_ylabel("velocity (v)")
    ax.grid(True, alpha=0.3)
    if title:
        ax.set_title(title)
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight")
    if show:
        plt.show()
    return fig, ax

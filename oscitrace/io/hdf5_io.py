# oscitrace/io/hdf5_io.py
"""
HDF5 storage for oscillator runs.

Columns are written as chunked, compressed float64 datasets in one
group; the six run parameters travel as group attributes so a file
is self-describing.
"""

from __future__ import annotations
import warnings
from pathlib import Path
from typing import Optional, Union
import numpy as np

try:
    import h5py
    HDF5_AVAILABLE = True
except Exception:
    HDF5_AVAILABLE = False
    warnings.warn("h5py not available. HDF5 I/O will be disabled", stacklevel=2)

from ..tracking.particles import PARAMETER_NAMES, Trajectory

_COLUMNS = (("times", "time"), ("forces", "force"), ("positions", "position"),
            ("velocities", "velocity"))


def write_trajectory_hdf5(
    trajectory: Trajectory,
    path: Union[str, Path],
    group: str = "oscillator",
    chunk_size: Optional[int] = None,
    compression: Optional[str] = "gzip",
    compression_opts: int = 4,
) -> Path:
    """
    Write a trajectory to an HDF5 file.

    Parameters
    ----------
    trajectory : Trajectory
        Collected run
    path : str or Path
        Output filename
    group : str
        HDF5 group name for the run
    chunk_size : int, optional
        Rows per chunk. If None, min(T, 65536).
    compression : str, optional
        Compression algorithm ('gzip', 'lzf') or None
    compression_opts : int
        Compression level (0-9 for gzip)

    Returns
    -------
    Path
        Path to written file
    """
    if not HDF5_AVAILABLE:
        raise RuntimeError("h5py not available; cannot write HDF5 files")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    T = trajectory.T
    chunks = None
    if T > 0:
        chunks = (max(1, min(T, chunk_size or 65536)),)
    opts = compression_opts if compression == "gzip" else None

    with h5py.File(path, "w") as f:
        grp = f.require_group(group)
        for attr, name in _COLUMNS:
            ds = grp.create_dataset(
                name,
                data=getattr(trajectory, attr),
                maxshape=(None,),
                dtype="f8",
                chunks=chunks or True,
                compression=compression,
                compression_opts=opts,
            )
            ds.attrs["description"] = name
        grp.create_dataset("step", data=trajectory.steps, maxshape=(None,),
                           dtype="i8", chunks=chunks or True)

        grp.attrs["num_records"] = T
        grp.attrs["format_version"] = "1.0"
        for name in PARAMETER_NAMES:
            if name in trajectory.metadata:
                grp.attrs[name] = float(trajectory.metadata[name])
        for key in ("n_steps", "recording_interval", "integrator", "path"):
            if key in trajectory.metadata:
                grp.attrs[key] = trajectory.metadata[key]

    return path


def read_trajectory_hdf5(path: Union[str, Path], group: str = "oscillator") -> Trajectory:
    """Read a trajectory written by `write_trajectory_hdf5`."""
    if not HDF5_AVAILABLE:
        raise RuntimeError("h5py not available; cannot open HDF5 datasets")

    with h5py.File(path, "r") as f:
        if group not in f:
            raise ValueError(f"Group '{group}' not found in {path}")
        grp = f[group]
        columns = {attr: np.asarray(grp[name][...], dtype=np.float64) for attr, name in _COLUMNS}
        steps = np.asarray(grp["step"][...], dtype=np.int64)
        metadata = {}
        for key, value in grp.attrs.items():
            if isinstance(value, bytes):
                value = value.decode()
            elif isinstance(value, np.generic):
                value = value.item()
            metadata[key] = value

    return Trajectory(steps=steps, metadata=metadata, **columns)

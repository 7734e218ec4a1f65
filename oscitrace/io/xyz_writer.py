# oscitrace/io/xyz_writer.py
"""
XYZ trajectory writer.

One frame per integration step, each holding a single labelled point on
the x axis, so VMD, OVITO or ASE can animate the oscillator:

    1
    step=1 time=0.1 force=-0.99 velocity=-0.1
    P 0.9900000000 0.0000000000 0.0000000000
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

import numpy as np

from ..tracking.particles import StepRecord
from ..utils.config import get_config


class XYZTrajectoryWriter:
    """
    Streaming XYZ sink; one call per record appends one frame.
    """

    def __init__(self, path: Union[str, Path], label: Optional[str] = None, precision: int = 10):
        self.path = Path(path)
        self.label = label or get_config().xyz_label
        if not self.label or any(ch.isspace() for ch in self.label):
            raise ValueError("label must be a non-empty token without whitespace")
        self.precision = int(precision)
        self._fh: Optional[TextIO] = None
        self.frames_written = 0

    def open(self) -> "XYZTrajectoryWriter":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self.path, "w")
        return self

    def write_record(self, record: StepRecord) -> None:
        if self._fh is None:
            raise RuntimeError(f"{self.path} is not open")
        p = self.precision
        self._fh.write("1\n")
        self._fh.write(f"step={record.index} time={record.time!r} "
                       f"force={record.force!r} velocity={record.velocity!r}\n")
        self._fh.write(f"{self.label} {record.position:.{p}f} {0.0:.{p}f} {0.0:.{p}f}\n")
        self.frames_written += 1

    __call__ = write_record

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "XYZTrajectoryWriter":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def write_xyz_trajectory(records: Iterable[StepRecord], path: Union[str, Path],
                         label: Optional[str] = None, precision: int = 10) -> Path:
    """Write every record as one XYZ frame; returns the written path."""
    with XYZTrajectoryWriter(path, label=label, precision=precision) as writer:
        for record in records:
            writer.write_record(record)
    return writer.path


def read_xyz_positions(path: Union[str, Path]) -> np.ndarray:
    """
    Read an XYZ file back as an (n_frames, n_points, 3) float64 array.
    """
    frames: List[List[List[float]]] = []
    with open(path) as f:
        lines = f.read().splitlines()

    i = 0
    while i < len(lines):
        if not lines[i].strip():
            i += 1
            continue
        n = int(lines[i].strip())
        body = lines[i + 2:i + 2 + n]
        if len(body) != n:
            raise ValueError(f"Truncated frame at line {i + 1} of {path}")
        frames.append([[float(v) for v in row.split()[1:4]] for row in body])
        i += 2 + n

    if not frames:
        return np.empty((0, 1, 3), dtype=np.float64)
    return np.asarray(frames, dtype=np.float64)

# oscitrace/io/text_writer.py
"""
Plain-text writers for oscillator runs.

`TextTableWriter` reproduces the classic four-column table
(force, position, velocity, time); `write_component_files` splits the
run into one two-column file per quantity.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, Optional, TextIO, Union

import numpy as np

from ..tracking.particles import StepRecord, Trajectory
from ..utils.config import get_config

TABLE_HEADER = "%s %18s %16s %11s" % ("Force", "Position", "Velocity", "Time\n")
COMPONENT_COLUMNS = (("position", "positions"), ("velocity", "velocities"), ("force", "forces"))


class TextTableWriter:
    """
    Tab-separated table sink.

    Usable as a context manager and as a record sink:

    >>> with TextTableWriter("output/output.txt") as sink:
    ...     tracker.stream(state, sink)
    """

    def __init__(self, path: Union[str, Path], float_format: Optional[str] = None):
        self.path = Path(path)
        self.float_format = float_format or get_config().float_format
        self._row_format = "\t".join([self.float_format] * 4) + "\n"
        self._fh: Optional[TextIO] = None
        self.records_written = 0

    def open(self) -> "TextTableWriter":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self.path, "w")
        self._fh.write(TABLE_HEADER)
        return self

    def write_record(self, record: StepRecord) -> None:
        if self._fh is None:
            raise RuntimeError(f"{self.path} is not open")
        self._fh.write(self._row_format % (record.force, record.position, record.velocity, record.time))
        self.records_written += 1

    __call__ = write_record

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "TextTableWriter":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def write_text_table(records: Iterable[StepRecord], path: Union[str, Path],
                     float_format: Optional[str] = None) -> Path:
    """
    Write records (a `Trajectory` or any iterable of `StepRecord`) as a table.

    Returns
    -------
    Path
        The written file.
    """
    with TextTableWriter(path, float_format=float_format) as writer:
        for record in records:
            writer.write_record(record)
    return writer.path


def write_component_files(trajectory, output_dir: Union[str, Path],
                          float_format: Optional[str] = None) -> Dict[str, Path]:
    """
    Write position.txt, velocity.txt and force.txt, each "time<TAB>value".

    Returns
    -------
    Dict[str, Path]
        Quantity name -> written file.
    """
    fmt = float_format or get_config().float_format
    row = f"{fmt}\t{fmt}\n"
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = {}
    for name, attr in COMPONENT_COLUMNS:
        path = out_dir / f"{name}.txt"
        values = getattr(trajectory, attr)
        with open(path, "w") as f:
            f.write(f"# time\t{name}\n")
            for t, value in zip(trajectory.times, values):
                f.write(row % (t, value))
        written[name] = path
    return written


def read_text_table(path: Union[str, Path]):
    """
    Read a table written by `TextTableWriter` back into a `Trajectory`.

    Values are only as precise as the float format used to write them.
    """
    data = np.loadtxt(path, skiprows=1, ndmin=2, dtype=np.float64)
    if data.size == 0:
        data = np.empty((0, 4), dtype=np.float64)
    return Trajectory(
        forces=data[:, 0],
        positions=data[:, 1],
        velocities=data[:, 2],
        times=data[:, 3],
    )

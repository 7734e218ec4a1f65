"""
OsciTrace I/O module.

Record sinks and file writers for oscillator runs. Nothing here is
imported by the integrator; writers consume `StepRecord`s or a
collected `Trajectory`.

Main entry points:
- write_outputs() - write a trajectory in several formats at once
- TextTableWriter / XYZTrajectoryWriter - streaming sinks for `OscillatorTracker.stream`
- VTK / HDF5 writers - optional, depending on installed libraries
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..utils.config import SUPPORTED_FORMATS, get_config
from .text_writer import (
    TABLE_HEADER,
    TextTableWriter,
    read_text_table,
    write_component_files,
    write_text_table,
)
from .xyz_writer import XYZTrajectoryWriter, read_xyz_positions, write_xyz_trajectory

# Optional backends: modules import without their library and raise on use.
from .vtk_writer import VTK_AVAILABLE as VTK_IO_AVAILABLE, VTKTrajectoryWriter
from .hdf5_io import HDF5_AVAILABLE as HDF5_IO_AVAILABLE, read_trajectory_hdf5, write_trajectory_hdf5


def list_supported_formats() -> Dict[str, bool]:
    """Output format name -> whether it can be written in this environment."""
    return {
        "text": True,
        "components": True,
        "xyz": True,
        "vtk": VTK_IO_AVAILABLE,
        "hdf5": HDF5_IO_AVAILABLE,
    }


def write_outputs(
    trajectory,
    output_dir: Optional[Union[str, Path]] = None,
    formats: Optional[Iterable[str]] = None,
    verbose: bool = False,
) -> List[Path]:
    """
    Write `trajectory` in each requested format.

    Parameters
    ----------
    trajectory : Trajectory
        Collected run
    output_dir : str or Path, optional
        Target directory (default: configured `output_dir`)
    formats : iterable of str, optional
        Any of 'text', 'components', 'xyz', 'vtk', 'hdf5'
        (default: configured `output_formats`)

    Returns
    -------
    List[Path]
        Files written, in request order.
    """
    config = get_config()
    out_dir = Path(output_dir if output_dir is not None else config.output_dir)
    formats = list(formats if formats is not None else config.output_formats)

    unknown = [f for f in formats if f not in SUPPORTED_FORMATS]
    if unknown:
        raise ValueError(f"Unknown output format(s) {unknown}; expected any of {SUPPORTED_FORMATS}")

    # Check every backend up front so a missing one leaves no partial output
    available = list_supported_formats()
    if "vtk" in formats and not available["vtk"]:
        raise ImportError("VTK not available - install with: pip install vtk")
    if "hdf5" in formats and not available["hdf5"]:
        raise RuntimeError("h5py not available - install with: pip install h5py")

    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for fmt in formats:
        if fmt == "text":
            written.append(write_text_table(trajectory, out_dir / "output.txt"))
        elif fmt == "components":
            written.extend(write_component_files(trajectory, out_dir).values())
        elif fmt == "xyz":
            written.append(write_xyz_trajectory(trajectory, out_dir / "trajectory.xyz"))
        elif fmt == "vtk":
            writer = VTKTrajectoryWriter(out_dir, verbose=verbose)
            written.append(writer.write_trajectory_points(trajectory))
        elif fmt == "hdf5":
            written.append(write_trajectory_hdf5(trajectory, out_dir / "trajectory.h5"))

    if verbose:
        for path in written:
            print(f"   💾 {path}")
    return written


__all__ = [
    "TABLE_HEADER",
    "TextTableWriter",
    "VTKTrajectoryWriter",
    "XYZTrajectoryWriter",
    "VTK_IO_AVAILABLE",
    "HDF5_IO_AVAILABLE",
    "list_supported_formats",
    "read_text_table",
    "read_trajectory_hdf5",
    "read_xyz_positions",
    "write_component_files",
    "write_outputs",
    "write_text_table",
    "write_trajectory_hdf5",
    "write_xyz_trajectory",
]

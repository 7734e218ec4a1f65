# oscitrace/io/vtk_writer.py
"""
VTK writer module for exporting OsciTrace runs.

Writes the oscillator path as VTK PolyData for ParaView, either as a
single point cloud with per-point time/force/velocity arrays or as a
per-step file series tied together by a .pvd collection.
"""

from __future__ import annotations
import warnings
from pathlib import Path
from typing import List, Union
import numpy as np

try:
    import vtk
    from vtk.util.numpy_support import numpy_to_vtk
    VTK_AVAILABLE = True
except ImportError:
    VTK_AVAILABLE = False
    warnings.warn("VTK not available - VTK file writing will be disabled")


def _ensure_float64(data: np.ndarray) -> np.ndarray:
    """Contiguous float64 copy for numpy_to_vtk."""
    return np.ascontiguousarray(data, dtype=np.float64)


def _named_array(values: np.ndarray, name: str):
    arr = numpy_to_vtk(_ensure_float64(values), deep=True)
    arr.SetName(name)
    return arr


class VTKTrajectoryWriter:
    """
    Write oscillator trajectories to VTK format.

    Positions are embedded in 3-D on the x axis (y = z = 0).
    """

    def __init__(self, output_dir: Union[str, Path], verbose: bool = True):
        """
        Initialize trajectory writer.

        Parameters
        ----------
        output_dir : str or Path
            Directory to save VTK files
        """
        if not VTK_AVAILABLE:
            raise ImportError("VTK not available - cannot write VTK files")

        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.verbose = verbose

    def _poly_data(self, points: np.ndarray, times: np.ndarray, forces: np.ndarray,
                   velocities: np.ndarray, steps: np.ndarray):
        n = points.shape[0]
        poly_data = vtk.vtkPolyData()

        vtk_points = vtk.vtkPoints()
        vtk_points.SetData(numpy_to_vtk(_ensure_float64(points), deep=True))
        poly_data.SetPoints(vtk_points)

        vertices = vtk.vtkCellArray()
        for i in range(n):
            vertices.InsertNextCell(1, [i])
        poly_data.SetVerts(vertices)

        point_data = poly_data.GetPointData()
        point_data.AddArray(_named_array(times, "Time"))
        point_data.SetActiveScalars("Time")
        point_data.AddArray(_named_array(forces, "Force"))
        point_data.AddArray(_named_array(steps, "TimeStep"))

        vel = np.zeros((n, 3), dtype=np.float64)
        vel[:, 0] = velocities
        point_data.AddArray(_named_array(vel, "Velocity"))
        return poly_data

    def _write(self, poly_data, output_path: Path) -> None:
        writer = vtk.vtkXMLPolyDataWriter()
        writer.SetFileName(str(output_path))
        writer.SetInputData(poly_data)
        writer.SetCompressorTypeToZLib()
        writer.Write()

    def write_trajectory_points(self, trajectory, filename: str = "oscillator_trajectory.vtp") -> Path:
        """
        Write the whole run as one point cloud, one point per step.

        Returns
        -------
        Path
            Written .vtp file
        """
        points = trajectory.points_3d().reshape(-1, 3)
        poly_data = self._poly_data(points, trajectory.times, trajectory.forces,
                                    trajectory.velocities, trajectory.steps)
        output_path = self.output_dir / filename
        self._write(poly_data, output_path)

        if self.verbose and trajectory.T:
            print(f"✅ Trajectory points written to: {output_path}")
            print(f"   📊 Points: {trajectory.T}")
            print(f"   🕒 Time range: {trajectory.times[0]:.3f} to {trajectory.times[-1]:.3f}")
        return output_path

    def write_time_series_collection(self, trajectory, collection_name: str = "oscillator") -> Path:
        """
        Write one .vtp per step plus a .pvd collection (one frame per step).

        Returns
        -------
        Path
            The .pvd collection file
        """
        points = trajectory.points_3d()
        vtp_files = []
        for i in range(trajectory.T):
            vtp_filename = f"{collection_name}_{i:06d}.vtp"
            poly_data = self._poly_data(points[i], trajectory.times[i:i + 1],
                                        trajectory.forces[i:i + 1],
                                        trajectory.velocities[i:i + 1],
                                        trajectory.steps[i:i + 1])
            self._write(poly_data, self.output_dir / vtp_filename)
            vtp_files.append(vtp_filename)

        pvd_path = self._write_pvd_collection(collection_name, vtp_files, trajectory.times)
        if self.verbose:
            print(f"✅ Time series collection written: {len(vtp_files)} VTP files + {pvd_path.name}")
        return pvd_path

    def _write_pvd_collection(self, collection_name: str, vtp_files: List[str], times: np.ndarray) -> Path:
        """Write PVD collection file for time series visualization."""
        pvd_path = self.output_dir / f"{collection_name}.pvd"

        with open(pvd_path, 'w') as f:
            f.write('<?xml version="1.0"?>\n')
            f.write('<VTKFile type="Collection" version="0.1">\n')
            f.write('  <Collection>\n')

            for vtp_file, time_val in zip(vtp_files, times):
                f.write(f'    <DataSet timestep="{float(time_val)!r}" file="{vtp_file}"/>\n')

            f.write('  </Collection>\n')
            f.write('</VTKFile>\n')

        return pvd_path

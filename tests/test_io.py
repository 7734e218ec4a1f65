"""Text, XYZ, VTK and HDF5 writers and the write_outputs dispatcher."""

import numpy as np
import pytest

import oscitrace as ot
from oscitrace.io import (
    TABLE_HEADER,
    list_supported_formats,
    read_text_table,
    read_xyz_positions,
    write_component_files,
    write_outputs,
    write_text_table,
    write_xyz_trajectory,
)


def test_text_table_layout(tmp_path, single_step_state):
    path = write_text_table(ot.run(single_step_state), tmp_path / "output.txt")
    lines = path.read_text().splitlines(keepends=True)

    assert lines[0] == TABLE_HEADER
    assert lines[0].split() == ["Force", "Position", "Velocity", "Time"]
    assert lines[1] == "-0.990000\t0.990000\t-0.100000\t0.100000\n"


def test_text_table_reads_back(tmp_path, short_trajectory):
    path = write_text_table(short_trajectory, tmp_path / "output.txt", float_format="%.17g")
    loaded = read_text_table(path)

    np.testing.assert_array_equal(loaded.positions, short_trajectory.positions)
    np.testing.assert_array_equal(loaded.times, short_trajectory.times)


def test_empty_table_reads_back(tmp_path):
    path = write_text_table([], tmp_path / "empty.txt")
    assert path.read_text() == TABLE_HEADER
    assert read_text_table(path).T == 0


def test_configured_float_format(tmp_path, single_step_state):
    ot.configure(float_format="%.3f")
    path = write_text_table(ot.run(single_step_state), tmp_path / "output.txt")
    assert path.read_text().splitlines()[1] == "-0.990\t0.990\t-0.100\t0.100"


def test_component_files(tmp_path, short_trajectory):
    written = write_component_files(short_trajectory, tmp_path)

    assert set(written) == {"position", "velocity", "force"}
    lines = written["velocity"].read_text().splitlines()
    assert lines[0] == "# time\tvelocity"
    assert len(lines) == short_trajectory.T + 1
    t, v = (float(s) for s in lines[1].split("\t"))
    assert t == pytest.approx(short_trajectory.times[0], abs=1e-6)
    assert v == pytest.approx(short_trajectory.velocities[0], abs=1e-6)


def test_xyz_frames(tmp_path, short_trajectory):
    path = write_xyz_trajectory(short_trajectory, tmp_path / "trajectory.xyz")
    lines = path.read_text().splitlines()

    assert len(lines) == 3 * short_trajectory.T
    assert lines[0] == "1"
    assert lines[1].startswith("step=1 time=0.01 ")
    assert lines[2].split()[0] == "P"

    points = read_xyz_positions(path)
    assert points.shape == (short_trajectory.T, 1, 3)
    np.testing.assert_allclose(points[:, 0, 0], short_trajectory.positions, atol=1e-10)
    assert not points[:, 0, 1:].any()


def test_xyz_label_validation(tmp_path):
    with pytest.raises(ValueError):
        ot.XYZTrajectoryWriter(tmp_path / "bad.xyz", label="two words")


def test_write_outputs_dispatch(tmp_path, short_trajectory):
    written = write_outputs(short_trajectory, tmp_path, formats=["text", "components", "xyz"])
    names = [p.name for p in written]
    assert names == ["output.txt", "position.txt", "velocity.txt", "force.txt", "trajectory.xyz"]
    assert all(p.exists() for p in written)


def test_write_outputs_uses_configured_defaults(tmp_path, short_trajectory):
    ot.configure(output_dir=str(tmp_path / "out"))
    written = write_outputs(short_trajectory)
    assert [p.name for p in written] == ["output.txt", "trajectory.xyz"]
    assert written[0].parent == tmp_path / "out"


def test_write_outputs_rejects_unknown_format(tmp_path, short_trajectory):
    with pytest.raises(ValueError, match="csv"):
        write_outputs(short_trajectory, tmp_path, formats=["csv"])
    assert not (tmp_path / "output.txt").exists()


def test_supported_formats_listing():
    formats = list_supported_formats()
    assert formats["text"] and formats["xyz"] and formats["components"]
    assert set(formats) == {"text", "components", "xyz", "vtk", "hdf5"}


def test_hdf5_round_trip(tmp_path, short_trajectory):
    pytest.importorskip("h5py")
    from oscitrace.io import read_trajectory_hdf5, write_trajectory_hdf5

    path = write_trajectory_hdf5(short_trajectory, tmp_path / "trajectory.h5")
    loaded = read_trajectory_hdf5(path)

    np.testing.assert_array_equal(loaded.positions, short_trajectory.positions)
    np.testing.assert_array_equal(loaded.steps, short_trajectory.steps)
    assert loaded.metadata["num_records"] == short_trajectory.T
    assert loaded.metadata["spring_constant"] == 1.0
    assert loaded.metadata["path"] == "python"


def test_hdf5_missing_group(tmp_path, short_trajectory):
    pytest.importorskip("h5py")
    from oscitrace.io import read_trajectory_hdf5, write_trajectory_hdf5

    path = write_trajectory_hdf5(short_trajectory, tmp_path / "trajectory.h5")
    with pytest.raises(ValueError):
        read_trajectory_hdf5(path, group="missing")


def test_vtk_outputs(tmp_path, short_trajectory):
    pytest.importorskip("vtk")
    from oscitrace.io import VTKTrajectoryWriter

    writer = VTKTrajectoryWriter(tmp_path, verbose=False)
    vtp = writer.write_trajectory_points(short_trajectory)
    assert vtp.exists() and vtp.suffix == ".vtp"

    pvd = writer.write_time_series_collection(short_trajectory[:5])
    assert pvd.suffix == ".pvd"
    assert pvd.read_text().count("<DataSet") == 5
    assert len(list(tmp_path.glob("oscillator_0*.vtp"))) == 5


@pytest.mark.parametrize("flag, fmt, error", [
    ("HDF5_IO_AVAILABLE", "hdf5", RuntimeError),
    ("VTK_IO_AVAILABLE", "vtk", ImportError),
])
def test_missing_backend_writes_nothing(tmp_path, monkeypatch, short_trajectory, flag, fmt, error):
    monkeypatch.setattr(f"oscitrace.io.{flag}", False)
    out = tmp_path / "out"
    with pytest.raises(error):
        write_outputs(short_trajectory, out, formats=["text", "xyz", fmt])
    assert not out.exists()

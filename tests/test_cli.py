"""Command-line entry point: parameter sources, outputs and exit codes."""

import pytest

from oscitrace.__main__ import EXIT_INVALID, EXIT_NON_FINITE, EXIT_OK, main

FLAGS = ["--x0", "1", "--v0", "0", "--dt", "0.1", "--interval", "1", "--mass", "1", "--k", "1"]


def test_flags_write_default_outputs(tmp_path):
    status = main(FLAGS + ["--output-dir", str(tmp_path), "--quiet"])

    assert status == EXIT_OK
    lines = (tmp_path / "output.txt").read_text().splitlines()
    assert len(lines) == 11
    assert lines[1] == "-0.990000\t0.990000\t-0.100000\t0.100000"
    assert (tmp_path / "trajectory.xyz").exists()


def test_interactive_prompts(tmp_path, capsys):
    answers = iter(["1", "0", "0.1", "0.1", "1", "1"])
    status = main(["--output-dir", str(tmp_path), "--no-progress"],
                  prompt=lambda _: next(answers))

    assert status == EXIT_OK
    out = capsys.readouterr().out
    assert "Please enter the initial position of the particle." in out
    assert out.index("initial velocity") < out.index("time step") < out.index("spring constant")
    assert len((tmp_path / "output.txt").read_text().splitlines()) == 2


def test_non_numeric_answer_is_rejected(tmp_path, capsys):
    status = main(["--output-dir", str(tmp_path), "--quiet"], prompt=lambda _: "abc")
    assert status == EXIT_INVALID
    assert "must be a number" in capsys.readouterr().err


def test_config_file_with_flag_override(tmp_path):
    config_file = tmp_path / "run_config.py"
    config_file.write_text(
        "config = {\n"
        "    'initial_position': 1.0, 'initial_velocity': 0.0,\n"
        "    'time_step': 0.1, 'time_interval': 1.0,\n"
        "    'mass': 1.0, 'spring_constant': 1.0,\n"
        f"    'output_dir': {str(tmp_path / 'from_config')!r},\n"
        "    'formats': ['components'],\n"
        "}\n"
    )
    status = main(["--config", str(config_file), "--interval", "0.5", "--quiet"])

    assert status == EXIT_OK
    lines = (tmp_path / "from_config" / "position.txt").read_text().splitlines()
    assert len(lines) == 6


def test_missing_config_file(tmp_path):
    assert main(["--config", str(tmp_path / "nope.py"), "--quiet"]) == EXIT_INVALID


@pytest.mark.parametrize("override", [
    ["--mass", "0"],
    ["--dt", "0"],
    ["--interval", "0.01"],
])
def test_invalid_parameters_exit_2(tmp_path, capsys, override):
    status = main(FLAGS + override + ["--output-dir", str(tmp_path), "--quiet"])
    assert status == EXIT_INVALID
    assert capsys.readouterr().err.startswith("Error: ")
    assert not (tmp_path / "output.txt").exists()


def test_non_finite_run_exits_1(tmp_path, capsys):
    status = main(FLAGS + ["--mass", "-1", "--dt", "1", "--interval", "10000",
                           "--output-dir", str(tmp_path), "--quiet"])
    assert status == EXIT_NON_FINITE
    assert "last valid step was" in capsys.readouterr().err
    assert not (tmp_path / "output.txt").exists()


def test_plot_and_report(tmp_path):
    status = main(FLAGS + ["--output-dir", str(tmp_path), "--plot", "--report", "--quiet"])
    assert status == EXIT_OK
    assert (tmp_path / "time_series.png").exists()
    assert (tmp_path / "phase_portrait.png").exists()
    assert "OUTPUT FILES" in (tmp_path / "run_summary.txt").read_text()


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "OsciTrace" in capsys.readouterr().out


def test_unavailable_format_leaves_no_files(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("oscitrace.io.HDF5_IO_AVAILABLE", False)
    out = tmp_path / "out"
    status = main(FLAGS + ["--formats", "text", "hdf5", "--output-dir", str(out), "--quiet"])

    assert status == EXIT_INVALID
    assert "h5py not available" in capsys.readouterr().err
    assert not out.exists()

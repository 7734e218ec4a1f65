"""Global configuration, timers and dependency diagnostics."""

import time

import pytest

import oscitrace as ot
from oscitrace.utils import Timer, memory_info, suggest_installation_commands, timeit


def test_defaults():
    config = ot.get_config()
    assert config.output_dir == "output"
    assert config.output_formats == ("text", "xyz")
    assert config.float_format == "%lf"
    assert config.use_jax is False


def test_configure_updates_and_resets():
    ot.configure(output_dir="results", output_formats=["xyz"])
    assert ot.get_config().output_dir == "results"
    assert ot.get_config().output_formats == ("xyz",)

    ot.reset_config()
    assert ot.get_config().output_dir == "output"


def test_configure_unknown_key_warns():
    with pytest.warns(UserWarning, match="nonsense"):
        ot.configure(nonsense=1)


@pytest.mark.parametrize("kwargs", [
    {"output_formats": ("text", "pdf")},
    {"float_format": "%d %d"},
    {"xyz_label": ""},
])
def test_configure_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        ot.configure(**kwargs)


def test_system_info():
    info = ot.get_config().get_system_info()
    assert info["system_memory_gb"] > 0
    assert info["jax_available"] == ot.JAX_AVAILABLE
    assert info["current_config"]["output_dir"] == "output"


def test_timer_measures_elapsed():
    with Timer("sleep", verbose=False) as timer:
        time.sleep(0.01)
    frozen = timer.elapsed
    assert frozen >= 0.01
    time.sleep(0.005)
    assert timer.elapsed == frozen

    with pytest.raises(RuntimeError):
        Timer().stop()


def test_timeit_reports(capsys):
    with timeit("Block"):
        pass
    assert "Block: " in capsys.readouterr().out


def test_memory_info_keys():
    assert set(memory_info()) == {"rss_mb", "vms_mb", "available_mb", "percent_used"}


def test_system_requirements():
    requirements = ot.check_system_requirements(verbose=False)
    assert requirements["oscitrace"]
    assert requirements["numpy"]
    assert requirements["psutil"]
    assert "h5py" in requirements and "vtk" in requirements


def test_installation_suggestions():
    commands = suggest_installation_commands(["numpy", "numpy"])
    assert len(commands) == 1 and "numpy" in commands[0]

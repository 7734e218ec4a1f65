"""OscillatorTracker: collection, streaming, non-finite detection and progress."""

import math

import numpy as np
import pytest

import oscitrace as ot
from oscitrace.errors import NonFiniteResult
from oscitrace.io import TextTableWriter


def _runaway_state():
    # negative mass turns the spring into an exponential amplifier
    return ot.ParticleState(1.0, 0.0, 1.0, 10000.0, -1.0, 1.0)


def test_track_collects_every_step():
    state = ot.ParticleState(1.0, 0.0, 0.01, 2.0, 1.0, 1.0)
    trajectory = ot.create_tracker(progress_style="none").track(state)

    assert trajectory.T == state.n_steps == 200
    np.testing.assert_array_equal(trajectory.steps, np.arange(1, 201))
    np.testing.assert_array_equal(trajectory.times, np.arange(1, 201) * 0.01)
    assert trajectory.metadata["path"] == "python"
    assert trajectory.metadata["integrator"] == "euler_step"
    assert trajectory.metadata["mass"] == 1.0
    assert trajectory.metadata["wall_time_s"] >= 0.0


def test_track_matches_run():
    state = ot.ParticleState(0.5, 1.0, 0.02, 1.0, 2.0, 3.0)
    records = list(ot.run(state))
    trajectory = ot.create_tracker(progress_style="none").track(state)
    assert list(trajectory) == records


def test_recording_interval_keeps_every_nth_step():
    state = ot.ParticleState(1.0, 0.0, 0.01, 1.0, 1.0, 1.0)
    full = ot.create_tracker(progress_style="none").track(state)
    thinned = ot.create_tracker(progress_style="none", recording_interval=3).track(state)

    np.testing.assert_array_equal(thinned.steps, np.arange(3, 101, 3))
    np.testing.assert_array_equal(thinned.positions, full.positions[2::3])


def test_stream_to_text_sink(tmp_path, single_step_state):
    path = tmp_path / "output.txt"
    tracker = ot.create_tracker(progress_style="none")
    with TextTableWriter(path) as sink:
        count = tracker.stream(single_step_state, sink)

    assert count == 1
    assert sink.records_written == 1
    assert len(path.read_text().splitlines()) == 2


def test_non_finite_reports_last_valid_step():
    state = _runaway_state()
    seen = []
    with pytest.raises(NonFiniteResult) as excinfo:
        for record in ot.run(state):
            seen.append(record)

    err = excinfo.value
    assert err.last_valid_step == len(seen) > 0
    assert err.quantity in ("force", "velocity", "position")
    assert err.time == pytest.approx((err.last_valid_step + 1) * 1.0)
    assert all(math.isfinite(r.position) and math.isfinite(r.velocity) for r in seen)
    assert f"last valid step was {len(seen)}" in str(err)


def test_non_finite_on_first_step():
    with pytest.warns(UserWarning):
        state = ot.ParticleState(1e300, 0.0, 1e-3, 1.0, 1.0, 1e300)
    with pytest.raises(NonFiniteResult) as excinfo:
        list(ot.run(state))
    assert excinfo.value.last_valid_step == 0
    assert excinfo.value.quantity == "force"


def test_track_propagates_non_finite():
    tracker = ot.create_tracker(progress_style="none")
    with pytest.raises(NonFiniteResult):
        tracker.track(_runaway_state())


def test_check_finite_can_be_disabled():
    state = _runaway_state()
    records = list(ot.run(state, check_finite=False))
    assert len(records) == state.n_steps
    assert not math.isfinite(records[-1].position)


@pytest.mark.parametrize("kwargs", [
    {"recording_interval": 0},
    {"progress_style": "fancy"},
])
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        ot.TrackerOptions(**kwargs)


def test_custom_stepper_is_used():
    calls = []

    def counting_step(state):
        calls.append(state.position)
        return ot.euler_step(state)

    state = ot.ParticleState(1.0, 0.0, 0.1, 1.0, 1.0, 1.0)
    trajectory = ot.OscillatorTracker(stepper=counting_step,
                                      options=ot.TrackerOptions(progress_style="none")).track(state)
    assert len(calls) == trajectory.T == 10
    assert trajectory.metadata["integrator"] == "counting_step"


def test_simple_progress_prints(capsys):
    state = ot.ParticleState(1.0, 0.0, 0.01, 1.0, 1.0, 1.0)
    tracker = ot.create_tracker(progress_style="simple", progress_update_every=50)
    tracker.track(state)
    out = capsys.readouterr().out
    assert "Integrating: 100/100" in out


def test_scan_path_agrees_with_python_path():
    pytest.importorskip("jax")
    # the scan path switches JAX to float64 on its own
    ot.utils.enable_x64(False)

    state = ot.ParticleState(1.0, 0.0, 0.01, 5.0, 1.0, 4.0)
    ref = ot.create_tracker(progress_style="none").track(state)
    fast = ot.create_tracker(progress_style="none", use_scan_jit=True,
                             recording_interval=2).track(state)

    assert fast.metadata["path"] == "jax_scan"
    np.testing.assert_array_equal(fast.steps, ref.steps[1::2])
    np.testing.assert_allclose(fast.positions, ref.positions[1::2], rtol=1e-12, atol=1e-14)
    assert ot.utils.x64_enabled()


def test_scan_path_reports_non_finite():
    pytest.importorskip("jax")
    ot.configure(use_jax=True)

    tracker = ot.create_tracker(progress_style="none", use_scan_jit=True)
    with pytest.raises(NonFiniteResult) as excinfo:
        tracker.track(_runaway_state())
    assert excinfo.value.last_valid_step > 0

# oscitrace/tracking/tracker.py
"""
Drives the integrator over a full run.

- `run` is the lazy record producer: one `StepRecord` per step
- `OscillatorTracker` collects a run into a `Trajectory` or streams it to a sink
- Optional single-graph JAX lax.scan for the whole recurrence
- Clean, single-line progress updates or tqdm progress bar
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional
import math
import warnings

import numpy as np

from ..errors import NonFiniteResult
from ..integrators.base import RecordSink, StepperFn
from ..integrators.euler import euler_scan, euler_step, reset_to_initial
from ..utils.config import get_config
from ..utils.jax_utils import JAX_AVAILABLE, enable_x64
from ..utils.logging import Timer, create_progress_callback
from .particles import ParticleState, StepRecord, Trajectory

# ---------------------------------------------------------------------------
# Record producer
# ---------------------------------------------------------------------------

def _first_non_finite(state: ParticleState) -> Optional[str]:
    for name in ("force", "velocity", "position"):
        if not math.isfinite(getattr(state, name)):
            return name
    return None


def _iterate(state: ParticleState, stepper: StepperFn, check_finite: bool) -> Iterator[StepRecord]:
    h = state.time_step
    for i in range(1, state.n_steps + 1):
        stepper(state)
        t = i * h
        if check_finite:
            bad = _first_non_finite(state)
            if bad is not None:
                raise NonFiniteResult(i - 1, quantity=bad, time=t)
        yield state.snapshot(i, t)


def run(
    state: ParticleState,
    stepper: StepperFn = euler_step,
    check_finite: bool = True,
) -> Iterator[StepRecord]:
    """
    Integrate `state` from its initial conditions and yield one record per step.

    The state is validated and reset before this function returns, so
    parameter errors surface immediately rather than on the first
    `next()`. Records come out in chronological order; the first one is
    at ``time = time_step`` and the last at ``n_steps * time_step``.

    Parameters
    ----------
    state : ParticleState
        Particle to integrate; mutated in place.
    stepper : StepperFn
        Single-step update (default: coupled Euler).
    check_finite : bool
        Raise `NonFiniteResult` as soon as a step produces NaN/inf.

    Returns
    -------
    Iterator[StepRecord]
        Lazy, finite and not restartable; call `run` again for a new pass.
    """
    state.validate()
    reset_to_initial(state)
    return _iterate(state, stepper, check_finite)

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass
class TrackerOptions:
    """
    Configuration options for an oscillator run.
    """
    # Numerical safety
    check_finite: bool = True

    # Performance settings
    use_scan_jit: bool = False            # Integrate with a single lax.scan graph

    # Recording options
    recording_interval: int = 1           # Keep every n-th step in `track`

    # Progress monitoring
    progress_style: str = "auto"          # "auto" | "tqdm" | "simple" | "none"
    progress_desc: str = "Integrating"
    progress_update_every: int = 1000     # For "simple": print every N steps

    def __post_init__(self):
        if self.recording_interval < 1:
            raise ValueError(f"recording_interval must be >= 1, got {self.recording_interval}")
        if self.progress_style not in ("auto", "tqdm", "simple", "none"):
            raise ValueError(f"Unknown progress_style '{self.progress_style}'")
        if self.use_scan_jit and not JAX_AVAILABLE:
            warnings.warn("use_scan_jit requested but JAX is not available; using the Python stepper")
            self.use_scan_jit = False

# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------

@dataclass
class OscillatorTracker:
    """
    Runs the oscillator recurrence and hands the records to consumers.

    - `track` collects a whole run into a `Trajectory`
    - `stream` pushes each record to a sink without storing the run
    - optional JAX lax.scan path for long runs
    """
    stepper: StepperFn = euler_step
    options: TrackerOptions = field(default_factory=TrackerOptions)

    def __post_init__(self):
        if not callable(self.stepper):
            raise ValueError("stepper must be callable")

    # ------------------------ Progress ------------------------

    def _make_progress(self, total: int, desc: str):
        """
        Create a progress reporter.

        Returns a tuple (update_fn(n_done), close_fn()).
        """
        style = self.options.progress_style

        if style in ("auto", "tqdm"):
            try:
                from tqdm import tqdm  # type: ignore
            except ImportError:
                if style == "tqdm":
                    warnings.warn("tqdm not installed; falling back to simple progress")
                style = "simple"
            else:
                bar = tqdm(total=total, desc=desc, leave=True)
                return (lambda n_done: bar.update(n_done - bar.n)), bar.close

        if style == "none":
            return (lambda n_done: None), (lambda: None)

        callback = create_progress_callback(desc, update_every=max(1, self.options.progress_update_every))
        return (lambda n_done: callback(n_done, total)), (lambda: None)

    # ------------------------ Public API ------------------------

    def stream(self, state: ParticleState, sink: RecordSink) -> int:
        """
        Integrate and pass every record to `sink`.

        Returns
        -------
        int
            Number of records delivered.
        """
        records = run(state, self.stepper, self.options.check_finite)
        update, close = self._make_progress(state.n_steps, self.options.progress_desc)
        count = 0
        try:
            for record in records:
                sink(record)
                count += 1
                update(count)
        finally:
            close()
        return count

    def track(self, state: ParticleState) -> Trajectory:
        """
        Integrate and collect the run.

        Returns
        -------
        Trajectory
        """
        timer = Timer("track", verbose=False)
        timer.start()
        if self.options.use_scan_jit and self.stepper is euler_step:
            trajectory = self._track_scan(state)
        else:
            trajectory = self._track_steps(state)
        trajectory.metadata["wall_time_s"] = timer.stop()
        return trajectory

    # ------------------------ Integration paths ------------------------

    def _metadata(self, state: ParticleState, path: str) -> dict:
        meta = dict(state.parameters())
        meta.update({
            "integrator": getattr(self.stepper, "__name__", str(self.stepper)),
            "n_steps": state.n_steps,
            "recording_interval": self.options.recording_interval,
            "path": path,
        })
        return meta

    def _track_steps(self, state: ParticleState) -> Trajectory:
        interval = self.options.recording_interval
        kept = []

        def collect(record: StepRecord) -> None:
            if record.index % interval == 0:
                kept.append(record)

        self.stream(state, collect)
        return Trajectory.from_records(kept, metadata=self._metadata(state, "python"))

    def _track_scan(self, state: ParticleState) -> Trajectory:
        state.validate()
        enable_x64(get_config().jax_enable_x64)
        n = state.n_steps
        update, close = self._make_progress(2, self.options.progress_desc)
        try:
            forces, positions, velocities = euler_scan(state, n, use_jax=True)
            update(1)
            if self.options.check_finite:
                finite = np.isfinite(forces) & np.isfinite(positions) & np.isfinite(velocities)
                if not finite.all():
                    bad = int(np.argmin(finite))
                    quantity = next(
                        name for name, col in (("force", forces), ("velocity", velocities),
                                               ("position", positions))
                        if not np.isfinite(col[bad])
                    )
                    raise NonFiniteResult(bad, quantity=quantity, time=(bad + 1) * state.time_step)
            update(2)
        finally:
            close()

        steps = np.arange(1, n + 1, dtype=np.int64)
        keep = steps % self.options.recording_interval == 0
        return Trajectory(
            times=steps[keep] * state.time_step,
            forces=forces[keep],
            positions=positions[keep],
            velocities=velocities[keep],
            steps=steps[keep],
            metadata=self._metadata(state, "jax_scan"),
        )


def create_tracker(check_finite: bool = True, progress_style: str = "auto", **kwargs) -> OscillatorTracker:
    """
    Factory for an `OscillatorTracker` with the coupled Euler stepper.

    Extra keyword arguments are forwarded to `TrackerOptions`.
    """
    options = TrackerOptions(check_finite=check_finite, progress_style=progress_style, **kwargs)
    return OscillatorTracker(stepper=euler_step, options=options)

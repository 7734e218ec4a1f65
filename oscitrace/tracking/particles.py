# oscitrace/tracking/particles.py
"""
Particle state and trajectory storage.

`ParticleState` is the single mutable object the integrator advances.
`Trajectory` is the column store a finished run is collected into;
it keeps everything in float64 so the recorded numbers are exactly the
ones the integrator produced.
"""

from __future__ import annotations
from dataclasses import dataclass, field, FrozenInstanceError
from typing import Any, Dict, Iterable, Iterator, NamedTuple, Optional, Sequence, Union
import math
import sys
import warnings

import numpy as np

from ..errors import (
    InvalidInterval,
    InvalidMass,
    InvalidParameter,
    InvalidTimeStep,
)

# Names of the six scalar inputs, in the order they are read.
PARAMETER_NAMES = (
    "initial_position",
    "initial_velocity",
    "time_step",
    "time_interval",
    "mass",
    "spring_constant",
)

# Rounding slack, in units of machine epsilon, when deciding whether
# time_interval is a whole number of steps.
STEP_COUNT_ULPS = 4

# Warn when fewer than this many steps resolve one natural period.
MIN_STEPS_PER_PERIOD = 20


class StepRecord(NamedTuple):
    """One integration step as seen by a record sink."""
    index: int          # 1-based step number
    time: float
    force: float
    position: float
    velocity: float


@dataclass
class ParticleState:
    """
    A single 1-D particle attached to a linear spring.

    The six parameters are fixed once the object is built; only
    `position`, `velocity` and `force` change while integrating.
    Construction validates the parameters, so an invalid state never
    reaches the integrator.
    """
    initial_position: float
    initial_velocity: float
    time_step: float
    time_interval: float
    mass: float
    spring_constant: float

    position: float = 0.0
    velocity: float = 0.0
    force: float = 0.0

    _sealed: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        for name in PARAMETER_NAMES:
            object.__setattr__(self, name, float(getattr(self, name)))
        self.position = float(self.position)
        self.velocity = float(self.velocity)
        self.force = float(self.force)
        self.validate()
        self._warn_if_coarse()
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in PARAMETER_NAMES and getattr(self, "_sealed", False):
            raise FrozenInstanceError(f"cannot assign to parameter '{name}' after construction")
        object.__setattr__(self, name, value)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "ParticleState":
        """
        Build a state from the six ordered inputs:
        initial_position, initial_velocity, time_step, time_interval,
        mass, spring_constant.
        """
        values = list(values)
        if len(values) != len(PARAMETER_NAMES):
            raise ValueError(f"Expected {len(PARAMETER_NAMES)} parameters, got {len(values)}")
        return cls(*values)

    @classmethod
    def from_mapping(cls, params: Dict[str, Any]) -> "ParticleState":
        """Build a state from a dict keyed by parameter name; extra keys are ignored."""
        missing = [name for name in PARAMETER_NAMES if name not in params]
        if missing:
            raise ValueError(f"Missing parameter(s): {', '.join(missing)}")
        return cls(**{name: params[name] for name in PARAMETER_NAMES})

    def validate(self) -> None:
        """Raise the matching `OscillatorError` subclass for bad parameters."""
        h = self.time_step
        if not math.isfinite(h) or h <= 0.0:
            raise InvalidTimeStep(f"time_step must be a positive finite number, got {h}")
        if not math.isfinite(self.time_interval) or self.time_interval < h:
            raise InvalidInterval(
                f"time_interval must be finite and >= time_step ({h}), got {self.time_interval}"
            )
        if not math.isfinite(self.mass) or self.mass == 0.0:
            raise InvalidMass(f"mass must be non-zero and finite, got {self.mass}")
        for name in ("initial_position", "initial_velocity", "spring_constant"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidParameter(f"{name} must be finite, got {value}")

    def _warn_if_coarse(self) -> None:
        omega_sq = self.spring_constant / self.mass
        if omega_sq <= 0.0:
            return
        period = 2.0 * math.pi / math.sqrt(omega_sq)
        if self.time_step > period / MIN_STEPS_PER_PERIOD:
            warnings.warn(
                f"time_step {self.time_step:g} resolves the natural period {period:g} "
                f"with fewer than {MIN_STEPS_PER_PERIOD} steps; Euler results will be inaccurate",
                stacklevel=4,
            )

    @property
    def n_steps(self) -> int:
        """Number of steps in a run: floor(time_interval / time_step)."""
        q = self.time_interval / self.time_step
        n = math.floor(q)
        nearest = round(q)
        slack = STEP_COUNT_ULPS * sys.float_info.epsilon
        # only a quotient that misses an integer by rounding is rounded up
        if nearest > n and abs(q - nearest) <= slack * abs(q) \
                and nearest * self.time_step <= self.time_interval * (1.0 + slack):
            n = nearest
        return int(n)

    def parameters(self) -> Dict[str, float]:
        """The six immutable inputs as a dict."""
        return {name: getattr(self, name) for name in PARAMETER_NAMES}

    def snapshot(self, index: int, time: float) -> StepRecord:
        """Current (force, position, velocity) tagged with step index and time."""
        return StepRecord(index, time, self.force, self.position, self.velocity)

    def copy(self) -> "ParticleState":
        """Fresh state with the same parameters, reset to construction defaults."""
        return ParticleState(**self.parameters())


def _as_float64(data: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """1-D float64 copy of `data`."""
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"Trajectory columns must be 1-D, got shape {arr.shape}")
    return arr


@dataclass
class Trajectory:
    """
    Column container for one oscillator run.

    Attributes
    ----------
    times, forces, positions, velocities : np.ndarray
        float64 arrays of length T, one entry per recorded step.
    steps : np.ndarray
        int64 1-based step index of each entry.
    metadata : dict
        Run parameters and tracker information.
    """
    times: np.ndarray
    forces: np.ndarray
    positions: np.ndarray
    velocities: np.ndarray
    steps: Optional[np.ndarray] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.times = _as_float64(self.times)
        self.forces = _as_float64(self.forces)
        self.positions = _as_float64(self.positions)
        self.velocities = _as_float64(self.velocities)
        if self.steps is None:
            self.steps = np.arange(1, self.times.shape[0] + 1, dtype=np.int64)
        else:
            self.steps = np.asarray(self.steps, dtype=np.int64)

        T = self.times.shape[0]
        for name in ("forces", "positions", "velocities", "steps"):
            if getattr(self, name).shape != (T,):
                raise ValueError(
                    f"{name} shape {getattr(self, name).shape} doesn't match trajectory length {T}"
                )

        self.metadata.setdefault("format_version", "1.0")
        self.metadata.setdefault("dtype", "float64")

    @classmethod
    def from_records(cls, records: Iterable[StepRecord],
                     metadata: Optional[Dict[str, Any]] = None) -> "Trajectory":
        """Collect an iterable of `StepRecord` into columns."""
        rows = list(records)
        if rows:
            steps, times, forces, positions, velocities = zip(*rows)
        else:
            steps = times = forces = positions = velocities = ()
        return cls(
            times=np.asarray(times, dtype=np.float64),
            forces=np.asarray(forces, dtype=np.float64),
            positions=np.asarray(positions, dtype=np.float64),
            velocities=np.asarray(velocities, dtype=np.float64),
            steps=np.asarray(steps, dtype=np.int64),
            metadata=dict(metadata or {}),
        )

    # ---------- Core accessors ----------

    @property
    def T(self) -> int:
        """Number of recorded steps."""
        return int(self.times.shape[0])

    def __len__(self) -> int:
        return self.T

    def __iter__(self) -> Iterator[StepRecord]:
        for i in range(self.T):
            yield self.record(i)

    def record(self, i: int) -> StepRecord:
        """Row `i` as a `StepRecord`."""
        return StepRecord(
            int(self.steps[i]),
            float(self.times[i]),
            float(self.forces[i]),
            float(self.positions[i]),
            float(self.velocities[i]),
        )

    def __getitem__(self, key: Union[int, slice]) -> 'Trajectory':
        """Slice trajectory in time; an integer keeps a length-1 trajectory."""
        if isinstance(key, (int, np.integer)):
            idx = int(key)
            if idx < 0:
                idx += self.T
            if not 0 <= idx < self.T:
                raise IndexError(f"Trajectory index {key} out of range for length {self.T}")
            key = slice(idx, idx + 1)
        elif not isinstance(key, slice):
            raise TypeError(f"Trajectory indices must be int or slice, not {type(key).__name__}")
        return Trajectory(
            times=self.times[key],
            forces=self.forces[key],
            positions=self.positions[key],
            velocities=self.velocities[key],
            steps=self.steps[key],
            metadata=self.metadata.copy(),
        )

    @property
    def duration(self) -> float:
        """Time spanned by the recorded steps."""
        if self.T == 0:
            return 0.0
        return float(self.times[-1] - self.times[0])

    def points_3d(self) -> np.ndarray:
        """Positions embedded in 3-D as (T, 1, 3) with y = z = 0."""
        pts = np.zeros((self.T, 1, 3), dtype=np.float64)
        pts[:, 0, 0] = self.positions
        return pts

    def memory_usage_mb(self) -> float:
        """Memory held by the column arrays in megabytes."""
        total = sum(arr.nbytes for arr in (self.times, self.forces, self.positions,
                                           self.velocities, self.steps))
        return total / (1024 ** 2)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view (lists) suitable for JSON."""
        return {
            "steps": self.steps.tolist(),
            "time": self.times.tolist(),
            "force": self.forces.tolist(),
            "position": self.positions.tolist(),
            "velocity": self.velocities.tolist(),
            "metadata": dict(self.metadata),
        }

    def __repr__(self) -> str:
        return (f"Trajectory(T={self.T}, t=[{self.times[0] if self.T else 0.0:g}, "
                f"{self.times[-1] if self.T else 0.0:g}])")


__all__ = [
    "PARAMETER_NAMES",
    "StepRecord",
    "ParticleState",
    "Trajectory",
]

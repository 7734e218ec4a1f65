# oscitrace/integrators/base.py

from __future__ import annotations
from typing import Callable, Protocol

from ..tracking.particles import ParticleState, StepRecord


class StepperFn(Protocol):
    """
    Protocol for in-place integrator step functions.

    A stepper advances a `ParticleState` by exactly one `time_step`,
    leaving `position`, `velocity` and `force` mutually consistent.
    """

    def __call__(self, state: ParticleState) -> ParticleState:
        ...


RecordSink = Callable[[StepRecord], None]
"""Consumer of per-step records (writer, collector, plot feeder)."""

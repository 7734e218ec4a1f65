# oscitrace/errors.py
"""
Exception types raised by OsciTrace.

Parameter errors are detected once, before the first integration step,
and are never retried: the physical parameters are wrong, not transient.
`NonFiniteResult` is the only error that can surface mid-run.
"""

from __future__ import annotations
from typing import Optional


class OscillatorError(ValueError):
    """Base class for all OsciTrace parameter and run errors."""


class InvalidTimeStep(OscillatorError):
    """time_step is not a strictly positive finite number."""


class InvalidInterval(OscillatorError):
    """time_interval is non-finite or shorter than one time step."""


class InvalidMass(OscillatorError):
    """mass is zero or non-finite (the velocity update divides by it)."""


class InvalidParameter(OscillatorError):
    """An initial condition or the spring constant is non-finite."""


class NonFiniteResult(OscillatorError):
    """
    A force, velocity or position became NaN or infinite during a run.

    Attributes
    ----------
    last_valid_step : int
        1-based index of the last step whose values were all finite
        (0 when the very first step already failed).
    quantity : str, optional
        Name of the first non-finite quantity found.
    time : float, optional
        Simulation time of the failing step.
    """

    def __init__(self, last_valid_step: int, quantity: Optional[str] = None,
                 time: Optional[float] = None):
        self.last_valid_step = int(last_valid_step)
        self.quantity = quantity
        self.time = time
        msg = f"Non-finite {quantity or 'value'} after step {self.last_valid_step + 1}"
        if time is not None:
            msg += f" (t={time:g})"
        msg += f"; last valid step was {self.last_valid_step}"
        super().__init__(msg)

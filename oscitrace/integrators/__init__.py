"""
OsciTrace Integrators

Fixed-step coupled Euler integration for a particle on a linear spring.
Steppers follow the signature:

    state = step(state)

where `state` is a `ParticleState` advanced in place by one `time_step`.
`euler_scan` runs a full simulation and returns (forces, positions,
velocities) columns, optionally as a single JAX `lax.scan`.
"""

from .base import RecordSink, StepperFn
from .euler import compute_force, euler_scan, euler_step, reset_to_initial

# short alias
step = euler_step

__all__ = [
    "RecordSink",
    "StepperFn",
    "compute_force",
    "euler_scan",
    "euler_step",
    "reset_to_initial",
    "step",
]

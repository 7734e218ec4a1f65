# oscitrace/integrators/euler.py
"""
Coupled (semi-implicit) Euler integration of F = -k x.

Each step computes the force at the current position, updates the
velocity with it, then moves the particle with the *new* velocity and
finally refreshes the force at the new position for reporting. The
pure-Python stepper is the reference; `euler_scan` runs the same
recurrence as a single `lax.scan` graph when JAX is available.
"""

from __future__ import annotations
from functools import partial
from typing import Optional, Tuple
import warnings

import numpy as np

from ..tracking.particles import ParticleState
from ..utils.jax_utils import JAX_AVAILABLE, x64_enabled

if JAX_AVAILABLE:
    try:
        import jax
        import jax.numpy as jnp
        from jax import lax
    except Exception:
        JAX_AVAILABLE = False


def reset_to_initial(state: ParticleState) -> ParticleState:
    """Put the particle back at its initial position and velocity."""
    state.position = state.initial_position
    state.velocity = state.initial_velocity
    compute_force(state)
    return state


def compute_force(state: ParticleState) -> float:
    """Hooke's law at the current position; caches the value on `state`."""
    state.force = -(state.spring_constant * state.position)
    return state.force


def euler_step(state: ParticleState) -> ParticleState:
    """
    Advance `state` by one time step in place.

    Order matters and must not change:

    1. F_i     = -k x_i
    2. v_{i+1} = v_i + (F_i / m) h
    3. x_{i+1} = x_i + v_{i+1} h
    4. F_{i+1} = -k x_{i+1}

    Step 3 uses the velocity from step 2, and the force left on the
    state afterwards belongs to the new position, not the one that
    drove the velocity update.
    """
    compute_force(state)
    state.velocity = state.velocity + (state.force / state.mass) * state.time_step
    state.position = state.position + state.velocity * state.time_step
    compute_force(state)
    return state


if JAX_AVAILABLE:
    @partial(jax.jit, static_argnums=(5,))
    def _euler_scan_jit(x0, v0, h, m, k, n_steps: int):
        """
        JIT-compiled scan over `n_steps` coupled Euler steps.

        Returns
        -------
        (forces, positions, velocities), each shape (n_steps,)
        """
        def body(carry, _):
            x, v = carry
            f = -(k * x)
            v = v + (f / m) * h
            x = x + v * h
            return (x, v), (-(k * x), x, v)

        _, (forces, positions, velocities) = lax.scan(body, (x0, v0), None, length=n_steps)
        return forces, positions, velocities


def _euler_scan_python(state: ParticleState, n_steps: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    forces = np.empty(n_steps, dtype=np.float64)
    positions = np.empty(n_steps, dtype=np.float64)
    velocities = np.empty(n_steps, dtype=np.float64)
    for i in range(n_steps):
        euler_step(state)
        forces[i] = state.force
        positions[i] = state.position
        velocities[i] = state.velocity
    return forces, positions, velocities


def euler_scan(
    state: ParticleState,
    n_steps: Optional[int] = None,
    use_jax: bool = True,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Run a whole simulation from the initial conditions and return columns.

    Parameters
    ----------
    state : ParticleState
        Validated state; it is reset first and left at the final step.
    n_steps : int, optional
        Number of steps (default `state.n_steps`).
    use_jax : bool
        Use the compiled `lax.scan` path when JAX is installed.

    Returns
    -------
    (forces, positions, velocities) : tuple of np.ndarray
        float64 arrays of shape (n_steps,).

    Notes
    -----
    The compiled path evaluates the same expressions in the same order,
    but XLA is free to contract multiply-adds, so agreement with the
    Python stepper is to rounding, not bit-for-bit.
    """
    n = state.n_steps if n_steps is None else int(n_steps)
    if n < 0:
        raise ValueError(f"n_steps must be non-negative, got {n}")
    reset_to_initial(state)

    if not (JAX_AVAILABLE and use_jax) or n == 0:
        return _euler_scan_python(state, n)

    if not x64_enabled():
        warnings.warn("JAX x64 mode is off; the scan path will integrate in float32")

    dtype = jnp.float64 if x64_enabled() else jnp.float32
    forces, positions, velocities = _euler_scan_jit(
        jnp.asarray(state.initial_position, dtype=dtype),
        jnp.asarray(state.initial_velocity, dtype=dtype),
        jnp.asarray(state.time_step, dtype=dtype),
        jnp.asarray(state.mass, dtype=dtype),
        jnp.asarray(state.spring_constant, dtype=dtype),
        n,
    )
    forces = np.asarray(forces, dtype=np.float64)
    positions = np.asarray(positions, dtype=np.float64)
    velocities = np.asarray(velocities, dtype=np.float64)

    state.force = float(forces[-1])
    state.position = float(positions[-1])
    state.velocity = float(velocities[-1])
    return forces, positions, velocities

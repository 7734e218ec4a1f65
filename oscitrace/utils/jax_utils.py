# oscitrace/utils/jax_utils.py
from __future__ import annotations
import os
import sys
from typing import Optional

try:
    import jax
    import jax.numpy as jnp
    JAX_AVAILABLE = True
except Exception:
    JAX_AVAILABLE = False
    jax = None  # type: ignore
    jnp = None  # type: ignore

import warnings

def get_jax_version() -> Optional[str]:
    """Return the JAX version string if available, else None."""
    return getattr(jax, "__version__", None) if JAX_AVAILABLE else None

def get_devices(kind: Optional[str] = None):
    """
    Return the list of JAX devices, or [] if JAX is unavailable.

    kind: 'cpu'|'gpu'|'tpu' or None for all.
    """
    if not JAX_AVAILABLE:
        return []
    try:
        return jax.devices(kind) if kind else jax.devices()
    except RuntimeError:
        return []

def enable_x64(enable: bool = True) -> bool:
    """
    Switch JAX to 64-bit floats.

    The oscillator recurrence runs in double precision; JAX
    defaults to float32. Returns True when the flag was applied.
    """
    if not JAX_AVAILABLE:
        return False
    jax.config.update("jax_enable_x64", bool(enable))
    return True

def x64_enabled() -> bool:
    """True when JAX is importable and running with 64-bit floats."""
    if not JAX_AVAILABLE:
        return False
    return bool(jax.config.jax_enable_x64)

def configure_xla_env(
    *,
    preallocate: Optional[bool] = None,
    platform: Optional[str] = None,
    quiet: bool = False,
) -> dict:
    """
    Configure XLA/JAX environment variables in-process.

    Variables:
    - XLA_PYTHON_CLIENT_PREALLOCATE: 'true'|'false'
    - JAX_PLATFORM_NAME: 'cpu'|'gpu'|'tpu'

    Note: If JAX has already been imported, some values may not take effect until a restart.
    """
    already_imported = ("jax" in sys.modules)
    if already_imported and not quiet:
        warnings.warn("JAX already imported; some environment changes may not take effect until restart", RuntimeWarning)

    new_env = {}
    if preallocate is not None:
        new_env["XLA_PYTHON_CLIENT_PREALLOCATE"] = "true" if preallocate else "false"
        os.environ["XLA_PYTHON_CLIENT_PREALLOCATE"] = new_env["XLA_PYTHON_CLIENT_PREALLOCATE"]
    if platform is not None:
        new_env["JAX_PLATFORM_NAME"] = str(platform)
        os.environ["JAX_PLATFORM_NAME"] = new_env["JAX_PLATFORM_NAME"]
    return new_env

# oscitrace/utils/__init__.py
"""
Utilities for OsciTrace.

Contains:
- jax_utils: JAX guards, x64 switch, XLA environment
- config: global package configuration
- logging: timers, memory monitoring, progress tracking
- diagnostics: dependency checks
- reporting: plain-text run summaries
"""

from .jax_utils import (
    JAX_AVAILABLE,
    get_jax_version,
    get_devices,
    enable_x64,
    x64_enabled,
    configure_xla_env,
)

from .config import (
    PackageConfig,
    SUPPORTED_FORMATS,
    configure,
    get_config,
    reset_config,
)

from .logging import (
    Timer,
    timeit,
    memory_info,
    create_progress_callback,
    StepCallback,
)

from .diagnostics import (
    check_system_requirements,
    suggest_installation_commands,
)

from .reporting import generate_summary_report

__all__ = [
    # jax_utils
    "JAX_AVAILABLE",
    "get_jax_version",
    "get_devices",
    "enable_x64",
    "x64_enabled",
    "configure_xla_env",
    # config
    "PackageConfig",
    "SUPPORTED_FORMATS",
    "configure",
    "get_config",
    "reset_config",
    # logging
    "Timer",
    "timeit",
    "memory_info",
    "create_progress_callback",
    "StepCallback",
    # diagnostics
    "check_system_requirements",
    "suggest_installation_commands",
    # reporting
    "generate_summary_report",
]

# oscitrace/utils/config.py
"""
Global package configuration.

Provides centralized settings for progress reporting, JAX usage and
output defaults shared by the tracker, the writers and the CLI.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Tuple
import warnings
import psutil

from .jax_utils import JAX_AVAILABLE, enable_x64, get_devices, get_jax_version

SUPPORTED_FORMATS = ("text", "components", "xyz", "vtk", "hdf5")


@dataclass
class PackageConfig:
    """
    Global configuration for the OsciTrace package.

    Controls progress output, the optional JAX scan path and the
    default output location/formats used by `oscitrace.io.write_outputs`.
    """
    # Progress and monitoring
    show_progress: bool = True          # Show progress bars
    verbose: bool = False               # Verbose output

    # JAX settings
    use_jax: bool = False               # Allow the lax.scan integration path
    jax_enable_x64: bool = True         # Double precision inside JAX

    # Output defaults
    output_dir: str = "output"
    output_formats: Tuple[str, ...] = ("text", "xyz")
    float_format: str = "%lf"           # printf-style, as in output.txt
    xyz_label: str = "P"                # atom label for trajectory frames

    # Environment settings
    _system_memory_gb: float = field(init=False, default=0.0)

    def __post_init__(self):
        self._detect_system_resources()
        self._validate_config()
        self._apply_jax_config()

    def _detect_system_resources(self):
        """Detect available system resources."""
        try:
            self._system_memory_gb = psutil.virtual_memory().total / (1024**3)
        except (OSError, RuntimeError):
            self._system_memory_gb = 0.0

    def _validate_config(self):
        """Validate configuration settings."""
        self.output_formats = tuple(self.output_formats)
        unknown = [f for f in self.output_formats if f not in SUPPORTED_FORMATS]
        if unknown:
            raise ValueError(
                f"Unknown output format(s) {unknown}; expected any of {SUPPORTED_FORMATS}"
            )

        try:
            self.float_format % 1.0
        except (TypeError, ValueError):
            raise ValueError(f"float_format must be a printf-style float format, got '{self.float_format}'")

        if not self.xyz_label or any(ch.isspace() for ch in self.xyz_label):
            raise ValueError("xyz_label must be a non-empty token without whitespace")

        if self.use_jax and not JAX_AVAILABLE:
            warnings.warn("use_jax requested but JAX is not installed; using the Python integrator")
            self.use_jax = False

    def _apply_jax_config(self):
        """Apply JAX-specific configuration."""
        if not (JAX_AVAILABLE and self.use_jax):
            return
        enable_x64(self.jax_enable_x64)

    # ---------- Utility methods ----------

    def get_system_info(self) -> Dict[str, Any]:
        """Get system resource information."""
        return {
            "system_memory_gb": self._system_memory_gb,
            "jax_available": JAX_AVAILABLE,
            "jax_version": get_jax_version(),
            "jax_devices": [str(d) for d in get_devices()],
            "current_config": {
                "show_progress": self.show_progress,
                "use_jax": self.use_jax,
                "output_dir": self.output_dir,
                "output_formats": list(self.output_formats),
            }
        }


# Global configuration instance
_global_config = PackageConfig()


def get_config() -> PackageConfig:
    """Get global package configuration."""
    return _global_config


def configure(**kwargs) -> None:
    """
    Configure package settings.

    Parameters
    ----------
    **kwargs : dict
        Configuration parameters to update
    """
    global _global_config

    for key, value in kwargs.items():
        if hasattr(_global_config, key) and not key.startswith("_"):
            setattr(_global_config, key, value)
        else:
            warnings.warn(f"Unknown configuration parameter: {key}")

    # Re-validate and apply
    _global_config._validate_config()
    _global_config._apply_jax_config()


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = PackageConfig()

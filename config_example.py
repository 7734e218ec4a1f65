#!/usr/bin/env python3
"""
Example Configuration File for OsciTrace

Copy this file and modify the parameters for your specific use case.

Usage:
    python -m oscitrace --config config_example.py
"""

# =============================================================================
# CONFIGURATION
# =============================================================================

config = {
    # -------------------------------------------------------------------------
    # Initial conditions
    # -------------------------------------------------------------------------
    'initial_position': 1.0,
    'initial_velocity': 0.0,

    # -------------------------------------------------------------------------
    # Integration
    # -------------------------------------------------------------------------
    'time_step': 0.001,       # Keep well below period/20 = 2*pi*sqrt(m/k)/20
    'time_interval': 20.0,    # Number of steps = floor(time_interval / time_step)

    # -------------------------------------------------------------------------
    # Physics (F = -k x)
    # -------------------------------------------------------------------------
    'mass': 1.0,
    'spring_constant': 1.0,

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    'output_dir': 'output',
    'formats': ['text', 'xyz', 'components'],   # Add 'vtk' / 'hdf5' if installed
}

"""Shared fixtures for the OsciTrace test suite."""

import matplotlib
matplotlib.use("Agg")

import pytest

import oscitrace as ot


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts from the default package configuration."""
    ot.reset_config()
    yield
    ot.reset_config()


@pytest.fixture
def single_step_state():
    # x0=1, v0=0, h=0.1, T=0.1, m=1, k=1 -> exactly one step
    return ot.ParticleState(1.0, 0.0, 0.1, 0.1, 1.0, 1.0)


@pytest.fixture
def short_trajectory():
    state = ot.ParticleState(1.0, 0.0, 0.01, 1.0, 1.0, 1.0)
    return ot.create_tracker(progress_style="none").track(state)

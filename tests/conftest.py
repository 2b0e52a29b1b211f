"""
Pytest configuration and shared fixtures for easing tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from easing.dynamics.curve import CurveParameters, Custom, SmoothDamped
from easing.dynamics.tracker import SecondOrderTracker


def run_step(params: CurveParameters, dt: float, steps: int, goal: float = 1.0) -> np.ndarray:
    """Unit-step response on the x axis, starting at rest at the origin."""
    tracker = SecondOrderTracker(params)
    ys = np.empty(steps, dtype=np.float64)
    for i in range(steps):
        ys[i] = tracker.update(dt, lambda t: goal).position[0]
    return ys


@pytest.fixture
def smooth_params() -> CurveParameters:
    return CurveParameters.from_style(SmoothDamped())


@pytest.fixture
def underdamped_params() -> CurveParameters:
    return CurveParameters.from_style(Custom(f=1.0, z=0.2, r=0.0))


@pytest.fixture
def tick() -> float:
    """One 60 Hz frame."""
    return 1.0 / 60.0


@pytest.fixture
def step_response():
    return run_step

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from easing.config import (
    DEFAULT_SINE_HZ,
    LOG_EVERY_S,
    MAX_STEPS,
    SETTLE_TOLERANCE,
)
from easing.dynamics.curve import CurveParameters, CurveStyle
from easing.dynamics.tracker import SecondOrderTracker
from easing.util.math import DERIVATIVE_DELTA

logger = logging.getLogger(__name__)


def make_target(kind: str, amplitude: float, *, sine_hz: float = DEFAULT_SINE_HZ) -> Callable[[float], float]:
    """Named target functions x(t) for the headless driver."""
    a = float(amplitude)
    if kind == "step":
        return lambda t: a
    if kind == "ramp":
        return lambda t: a * t
    if kind == "sine":
        w = 2.0 * float(np.pi) * float(sine_hz)
        return lambda t: a * float(np.sin(w * t))
    raise ValueError(f"unknown target {kind!r}")


TARGETS = ("step", "ramp", "sine")


@dataclass
class ResponseStats:
    final: float
    peak: float
    overshoot: float  # (peak - goal) / |goal|, 0 when the goal is 0
    settle_time: Optional[float]  # None if it never settles within tolerance
    final_error: float


@dataclass
class RunResult:
    times: np.ndarray  # (N,)
    positions: np.ndarray  # (N, 3)
    velocities: np.ndarray  # (N, 3)
    targets: np.ndarray  # (N,)
    stats: ResponseStats


def response_stats(times: np.ndarray, y: np.ndarray, goal: np.ndarray, *, tolerance: float = SETTLE_TOLERANCE) -> ResponseStats:
    """Summarize a single-axis response y against the target samples goal."""
    y = np.asarray(y, dtype=np.float64)
    goal = np.asarray(goal, dtype=np.float64)
    final_goal = float(goal[-1])
    scale = abs(final_goal) if final_goal != 0.0 else 1.0

    peak = float(np.max(y))
    overshoot = (peak - final_goal) / abs(final_goal) if final_goal != 0.0 else 0.0

    outside = np.abs(y - goal) > tolerance * scale
    if not outside.any():
        settle_time: Optional[float] = float(times[0])
    elif outside[-1]:
        settle_time = None
    else:
        last = int(np.nonzero(outside)[0][-1])
        settle_time = float(times[last + 1])

    return ResponseStats(
        final=float(y[-1]),
        peak=peak,
        overshoot=float(overshoot),
        settle_time=settle_time,
        final_error=float(final_goal - y[-1]),
    )


def simulate(
    tracker: SecondOrderTracker,
    target_fn: Callable[[float], float],
    *,
    dt: float,
    duration: float,
    log_every_s: float = LOG_EVERY_S,
) -> RunResult:
    """Drive tracker with fixed ticks of dt for duration simulated seconds."""
    dt = float(dt)
    if dt <= 0.0:
        raise ValueError(f"dt must be positive (got {dt})")
    steps = int(round(float(duration) / dt))
    if steps <= 0:
        raise ValueError(f"duration {duration} is shorter than one tick of {dt}")
    if steps > MAX_STEPS:
        raise ValueError(f"{steps} ticks exceed MAX_STEPS={MAX_STEPS}")

    times = np.empty(steps, dtype=np.float64)
    positions = np.empty((steps, 3), dtype=np.float64)
    velocities = np.empty((steps, 3), dtype=np.float64)
    targets = np.empty(steps, dtype=np.float64)

    last_log = 0.0
    for i in range(steps):
        state = tracker.update(dt, target_fn)
        times[i] = state.time
        positions[i] = state.position
        velocities[i] = state.velocity
        targets[i] = float(np.ravel(target_fn(state.time))[0])

        if state.time - last_log >= log_every_s:
            last_log = state.time
            logger.debug(
                "t=%.2f x=%.4f y=%.4f v=%.4f",
                state.time, targets[i], positions[i, 0], velocities[i, 0],
            )

    stats = response_stats(times, positions[:, 0], targets)
    return RunResult(times=times, positions=positions, velocities=velocities, targets=targets, stats=stats)


def run_app(
    *,
    style: CurveStyle,
    target: str,
    amplitude: float,
    dt: float,
    duration: float,
    derivative_step: float = DERIVATIVE_DELTA,
) -> RunResult:
    params = CurveParameters.from_style(style)
    tracker = SecondOrderTracker(params, derivative_step=derivative_step)
    p = params.params
    logger.debug(
        "style=%s f=%g z=%g r=%g omega=%.4f damped=%.4f Hz dt=%g",
        style.name, p.f, p.z, p.r, params.omega, params.damped_hz, dt,
    )

    result = simulate(tracker, make_target(target, amplitude), dt=dt, duration=duration)
    s = result.stats
    logger.debug(
        "final=%.4f peak=%.4f overshoot=%.1f%% settle=%s",
        s.final, s.peak, s.overshoot * 100.0,
        "never" if s.settle_time is None else f"{s.settle_time:.3f}s",
    )
    return result

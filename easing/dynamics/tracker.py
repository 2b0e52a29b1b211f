from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Tuple

import numpy as np

from easing.dynamics.curve import ConfigurationError, CurveParameters, CurveStyle
from easing.util.math import DERIVATIVE_DELTA, derivative


def _vec3(v) -> np.ndarray:
    if v is None:
        return np.zeros(3, dtype=np.float64)
    a = np.array(v, dtype=np.float64)
    if a.ndim == 0:
        a = np.full(3, float(a), dtype=np.float64)
    if a.shape != (3,):
        raise ValueError(f"expected a scalar or a 3-vector, got shape {a.shape}")
    return a


@dataclass
class TrackerState:
    """Per-instance position/velocity, updated in place every tick.

    time is the simulated time the target function is evaluated at; it grows
    by dt on each update.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    time: float = 0.0

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.velocity = _vec3(self.velocity)
        self.time = float(self.time)


def stable_gains(params: CurveParameters, dt: float) -> Tuple[float, float]:
    """Return (k1, k2) adjusted so a step of dt stays stable.

    Small steps (omega*dt < zeta) clamp k2. Larger steps use pole matching:
    the gains are chosen so the discrete update has the same poles as the
    continuous system sampled every dt.

    The two branches do not meet exactly at omega*dt == zeta: k2 jumps by a
    relative ~zeta**2 there (about 30% at zeta=0.5), k1 by much less.

    An undamped curve (zeta == 0) whose step is a whole number of oscillation
    periods has no pole-matched solution (the denominator is 0); it falls back
    to the clamped gains.
    """
    dt = float(dt)
    k1 = params.k1
    k2 = params.k2
    w = params.omega
    zeta = params.zeta

    if w * dt < zeta:
        return _clamped(k1, k2, dt)

    t1 = float(np.exp(-zeta * w * dt))
    if zeta <= 1.0:
        trig = float(np.cos(dt * params.damped_freq))
    else:
        trig = float(np.cosh(dt * params.damped_freq))
    alpha = 2.0 * t1 * trig
    beta = t1 * t1
    denom = 1.0 + beta - alpha
    if denom <= 0.0:
        return _clamped(k1, k2, dt)
    t2 = dt / denom
    return (1.0 - beta) * t2, dt * t2


def _clamped(k1: float, k2: float, dt: float) -> Tuple[float, float]:
    return k1, max(k2, dt * dt * 0.5 + dt * k1 * 0.5, dt * k1)


def advance(
    params: CurveParameters,
    state: TrackerState,
    dt: float,
    target_fn: Callable[[float], float],
    *,
    derivative_step: float = DERIVATIVE_DELTA,
) -> TrackerState:
    """Advance state by one step of dt toward target_fn, in place.

    dt is both the Euler step and the elapsed time of the stabilization.
    target_fn is called with the simulated time after the step and may return
    a scalar (applied to every axis) or a 3-vector. A zero dt leaves the state
    untouched.
    """
    dt = float(dt)
    if dt == 0.0:
        return state

    state.time += dt
    t = state.time
    x = np.asarray(target_fn(t), dtype=np.float64)
    xd = derivative(target_fn, t, derivative_step)

    k1s, k2s = stable_gains(params, dt)

    state.position += dt * state.velocity
    state.velocity += dt * (x + params.k3 * xd - state.position - k1s * state.velocity) / k2s
    return state


def _check_step(step) -> float:
    try:
        s = float(step)
    except (TypeError, ValueError):
        raise ConfigurationError(f"derivative step must be a number (got {step!r})") from None
    if not math.isfinite(s) or s <= 0.0:
        raise ConfigurationError(f"derivative step must be positive and finite (got {s})")
    return s


class SecondOrderTracker:
    """Smoothly follows a moving target with a second-order response.

    One tracker per owning entity; update() is not safe to call concurrently.
    """

    def __init__(
        self,
        curve,
        *,
        position=None,
        velocity=None,
        derivative_step: float = DERIVATIVE_DELTA,
    ) -> None:
        if isinstance(curve, CurveStyle):
            curve = CurveParameters.from_style(curve)
        self.params: CurveParameters = curve
        self.derivative_step = _check_step(derivative_step)
        self.state = TrackerState(position=position, velocity=velocity)

    @property
    def position(self) -> np.ndarray:
        return self.state.position

    @property
    def velocity(self) -> np.ndarray:
        return self.state.velocity

    def reset(self, position=None, velocity=None, time: float = 0.0) -> None:
        self.state = TrackerState(position=position, velocity=velocity, time=time)

    def update(self, dt: float, target_fn: Callable[[float], float]) -> TrackerState:
        return advance(self.params, self.state, dt, target_fn, derivative_step=self.derivative_step)

    def __repr__(self) -> str:
        p = self.params.params
        return (
            f"SecondOrderTracker({self.params.style.name}, f={p.f:g}, z={p.z:g}, r={p.r:g}, "
            f"pos={np.round(self.state.position, 4).tolist()})"
        )

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a curve style cannot produce usable filter coefficients."""


@dataclass(frozen=True)
class StyleParams:
    """Raw, user-facing parameters of a second-order response.

    f: natural frequency in Hz; lower is slower. Keep it within (0.01, 10).
    z: damping ratio. 0 never settles, (0, 1) overshoots and rings,
       1 is critical damping, > 1 approaches the target slowly.
    r: initial response. 0 eases in, 1 follows the input immediately,
       > 1 overshoots it, < 0 anticipates (moves away first).
    """

    f: float
    z: float
    r: float


def _num(style: CurveStyle, field: str) -> float:
    value = getattr(style, field)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{style.name}: {field} must be a number (got {value!r})") from None


class CurveStyle:
    """Base class of the curve style variants."""

    name = "curve"

    def params(self) -> StyleParams:
        raise NotImplementedError


@dataclass(frozen=True)
class Linear(CurveStyle):
    """Fast, undamped 1:1 response."""

    name = "linear"

    def params(self) -> StyleParams:
        return StyleParams(f=10.0, z=0.0, r=1.0)


@dataclass(frozen=True)
class Bezier(CurveStyle):
    """Quadratic Bezier response. Not implemented."""

    name = "bezier"

    def params(self) -> StyleParams:
        raise ConfigurationError("Bezier curve style is not implemented")


@dataclass(frozen=True)
class SmoothDamped(CurveStyle):
    """Critically damped response (Unity's SmoothDamp)."""

    name = "smooth"

    def params(self) -> StyleParams:
        return StyleParams(f=1.0, z=1.0, r=0.0)


@dataclass(frozen=True)
class Mechanical(CurveStyle):
    """Mechanical motion: overshooting initial response (r=2)."""

    f: float
    z: float

    name = "mechanical"

    def params(self) -> StyleParams:
        return StyleParams(f=_num(self, "f"), z=_num(self, "z"), r=2.0)


@dataclass(frozen=True)
class Custom(CurveStyle):
    f: float
    z: float
    r: float

    name = "custom"

    def params(self) -> StyleParams:
        return StyleParams(f=_num(self, "f"), z=_num(self, "z"), r=_num(self, "r"))


def _check(p: StyleParams, style: CurveStyle) -> None:
    if not math.isfinite(p.f) or p.f <= 0.0:
        raise ConfigurationError(f"{style.name}: frequency f must be positive and finite (got f={p.f})")
    if not math.isfinite(p.z) or p.z < 0.0:
        raise ConfigurationError(f"{style.name}: damping z must be non-negative and finite (got z={p.z})")
    if not math.isfinite(p.r):
        raise ConfigurationError(f"{style.name}: response r must be finite (got r={p.r})")


@dataclass(frozen=True)
class CurveParameters:
    """Filter coefficients derived once from a CurveStyle.

    k1, k2, k3 are the coefficients of
        y + k1*y' + k2*y'' = x + k3*x'
    omega is the natural angular frequency, damped_freq the oscillation
    frequency of the homogeneous response (angular, rad/s) and zeta the
    damping threshold used to pick the stabilization branch.
    """

    style: CurveStyle
    params: StyleParams
    omega: float
    zeta: float
    damped_freq: float
    k1: float
    k2: float
    k3: float

    @classmethod
    def from_style(cls, style: CurveStyle) -> "CurveParameters":
        try:
            p = style.params()
            _check(p, style)
        except ConfigurationError as e:
            logger.debug("rejected curve style %r: %s", style, e)
            raise

        f, z, r = p.f, p.z, p.r
        omega = 2.0 * math.pi * f
        damped_freq = omega * math.sqrt(abs(z * z - 1.0))
        cp = cls(
            style=style,
            params=p,
            omega=omega,
            zeta=z,
            damped_freq=damped_freq,
            k1=z / (math.pi * f),
            k2=1.0 / (omega * omega),
            k3=(r * z) / omega,
        )
        logger.debug(
            "curve %s f=%.4g z=%.4g r=%.4g -> k1=%.6g k2=%.6g k3=%.6g",
            style.name, f, z, r, cp.k1, cp.k2, cp.k3,
        )
        return cp

    @property
    def damped_hz(self) -> float:
        """Oscillation frequency of the homogeneous response in Hz."""
        return self.damped_freq / (2.0 * math.pi)


STYLE_NAMES = ("linear", "bezier", "smooth", "mechanical", "custom")


def curve_from_name(
    name: str,
    *,
    f: Optional[float] = None,
    z: Optional[float] = None,
    r: Optional[float] = None,
) -> CurveStyle:
    """Build a style from its CLI name; f, z and r are required where the style takes them."""
    key = str(name).lower()
    if key == "linear":
        return Linear()
    if key == "bezier":
        return Bezier()
    if key == "smooth":
        return SmoothDamped()
    if key == "mechanical":
        if f is None or z is None:
            raise ConfigurationError("mechanical style needs f and z")
        return Mechanical(f=f, z=z)
    if key == "custom":
        if f is None or z is None or r is None:
            raise ConfigurationError("custom style needs f, z and r")
        return Custom(f=f, z=z, r=r)
    raise ConfigurationError(f"unknown curve style {name!r} (expected one of {', '.join(STYLE_NAMES)})")

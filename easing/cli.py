from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from easing.app import TARGETS, run_app
from easing.config import (
    APP_VERSION,
    DEFAULT_AMPLITUDE,
    DEFAULT_DT,
    DEFAULT_DURATION,
    DEFAULT_F,
    DEFAULT_R,
    DEFAULT_STYLE,
    DEFAULT_TARGET,
    DEFAULT_Z,
    LOG_FORMAT,
)
from easing.dynamics.curve import STYLE_NAMES, curve_from_name
from easing.util.math import DERIVATIVE_DELTA


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="easing", description=f"Second-order motion smoothing, headless response run v{APP_VERSION}")
    p.add_argument("--style", choices=STYLE_NAMES, default=DEFAULT_STYLE, help="curve style (default: smooth)")
    p.add_argument("--f", type=float, default=None, help=f"frequency in Hz for mechanical/custom (default: {DEFAULT_F})")
    p.add_argument("--z", type=float, default=None, help=f"damping ratio for mechanical/custom (default: {DEFAULT_Z})")
    p.add_argument("--r", type=float, default=None, help=f"initial response for custom (default: {DEFAULT_R})")
    p.add_argument("--target", choices=TARGETS, default=DEFAULT_TARGET, help="target function x(t) (default: step)")
    p.add_argument("--amplitude", type=float, default=DEFAULT_AMPLITUDE, help="target amplitude")
    p.add_argument("--dt", type=float, default=DEFAULT_DT, help="tick length in seconds (default: 1/60)")
    p.add_argument("--duration", type=float, default=DEFAULT_DURATION, help="simulated seconds to run")
    p.add_argument(
        "--derivative-step",
        type=float,
        default=DERIVATIVE_DELTA,
        help="central-difference step for the target slope (default: smallest normal float)",
    )
    p.add_argument("--debug", action="store_true", help="log parameters and periodic state")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format=LOG_FORMAT)

    f = DEFAULT_F if args.f is None else float(args.f)
    z = DEFAULT_Z if args.z is None else float(args.z)
    r = DEFAULT_R if args.r is None else float(args.r)
    try:
        style = curve_from_name(args.style, f=f, z=z, r=r)
        result = run_app(
            style=style,
            target=str(args.target),
            amplitude=float(args.amplitude),
            dt=float(args.dt),
            duration=float(args.duration),
            derivative_step=float(args.derivative_step),
        )
    except ValueError as e:  # ConfigurationError included
        parser.error(str(e))

    s = result.stats
    settle = "never" if s.settle_time is None else f"{s.settle_time:.3f}s"
    print(f"style={style.name} target={args.target} ticks={len(result.times)} dt={args.dt:g}")
    print(f"final={s.final:.6f} peak={s.peak:.6f} overshoot={s.overshoot * 100.0:.2f}% settle={settle} error={s.final_error:.3g}")
    return 0

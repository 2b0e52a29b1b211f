from __future__ import annotations

# App
APP_VERSION = "0.2.0"

# Simulation
DEFAULT_DT = 1.0 / 60.0  # one tick at 60 Hz
DEFAULT_DURATION = 3.0  # simulated seconds
MAX_STEPS = 1_000_000  # refuse runs longer than this many ticks

# Curve (custom/mechanical fall back to these when flags are omitted)
DEFAULT_STYLE = "smooth"
DEFAULT_F = 1.0
DEFAULT_Z = 0.5
DEFAULT_R = 0.0

# Target
DEFAULT_TARGET = "step"
DEFAULT_AMPLITUDE = 1.0
DEFAULT_SINE_HZ = 0.5

# Response summary
SETTLE_TOLERANCE = 0.02  # fraction of |amplitude|

# Debug logging
LOG_EVERY_S = 0.5  # simulated seconds between status lines
LOG_FORMAT = "[easing] %(message)s"

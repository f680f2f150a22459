"""Default configuration values for lockstep float boundary adapters."""

from __future__ import annotations

from pathlib import Path

DEFAULT_ROUNDING = "truncate"
DEFAULT_WARN_ON_PRECISION_LOSS = False
DEFAULT_PRECISION_LOSS_THRESHOLD = 1e-6

DEFAULT_SETTINGS_PATH = Path.home() / ".lockstep_settings.json"

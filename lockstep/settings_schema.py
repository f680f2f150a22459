"""Schema and helpers for float boundary adapter settings."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import config
from .math.fixed import ROUNDING_MODES

logger = logging.getLogger(__name__)


@dataclass
class AdapterSettings:
    rounding: str = config.DEFAULT_ROUNDING
    warn_on_precision_loss: bool = config.DEFAULT_WARN_ON_PRECISION_LOSS
    precision_loss_threshold: float = config.DEFAULT_PRECISION_LOSS_THRESHOLD

    def __post_init__(self) -> None:
        if self.rounding not in ROUNDING_MODES:
            logger.warning("Unknown rounding mode %r, using %r.", self.rounding, config.DEFAULT_ROUNDING)
            self.rounding = config.DEFAULT_ROUNDING
        if self.precision_loss_threshold < 0.0:
            logger.warning(
                "Negative precision loss threshold %r, using %r.",
                self.precision_loss_threshold,
                config.DEFAULT_PRECISION_LOSS_THRESHOLD,
            )
            self.precision_loss_threshold = config.DEFAULT_PRECISION_LOSS_THRESHOLD

    def to_json(self) -> dict[str, Any]:
        return {
            "rounding": self.rounding,
            "warn_on_precision_loss": self.warn_on_precision_loss,
            "precision_loss_threshold": self.precision_loss_threshold,
        }

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "AdapterSettings":
        return cls(
            rounding=str(payload.get("rounding", config.DEFAULT_ROUNDING)),
            warn_on_precision_loss=bool(
                payload.get("warn_on_precision_loss", config.DEFAULT_WARN_ON_PRECISION_LOSS)
            ),
            precision_loss_threshold=float(
                payload.get("precision_loss_threshold", config.DEFAULT_PRECISION_LOSS_THRESHOLD)
            ),
        )


def load_last_used(path: Path | None = None) -> AdapterSettings:
    settings_path = path or config.DEFAULT_SETTINGS_PATH
    try:
        data = json.loads(settings_path.read_text())
    except FileNotFoundError:
        return AdapterSettings()
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable settings file %s.", settings_path)
        return AdapterSettings()
    return AdapterSettings.from_json(data if isinstance(data, dict) else {})


def save_last_used(settings: AdapterSettings, path: Path | None = None) -> Path:
    settings_path = path or config.DEFAULT_SETTINGS_PATH
    settings_path.write_text(json.dumps(settings.to_json(), indent=2, sort_keys=True))
    return settings_path

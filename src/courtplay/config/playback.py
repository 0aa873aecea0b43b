"""Playback timing settings with environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Tuple


logger = logging.getLogger(__name__)

_DEFAULT_ACTION_ENV = "COURTPLAY_DEFAULT_ACTION_MS"
_MIN_ACTION_ENV = "COURTPLAY_MIN_ACTION_MS"
_MAX_ACTION_ENV = "COURTPLAY_MAX_ACTION_MS"

DEFAULT_ACTION_DURATION_MS = 900.0
MIN_ACTION_DURATION_MS = 120.0
MAX_ACTION_DURATION_MS = 12_000.0

# Playback speeds offered to viewers; adapters reject anything else.
SPEED_CHOICES: Tuple[float, ...] = (0.5, 1.0, 1.5, 2.0)


@dataclass(frozen=True)
class PlaybackSettings:
    default_action_duration_ms: float = DEFAULT_ACTION_DURATION_MS
    min_action_duration_ms: float = MIN_ACTION_DURATION_MS
    max_action_duration_ms: float = MAX_ACTION_DURATION_MS

    def normalize_duration(self, duration_ms: float | None) -> float:
        """Clamp an authored duration into the playable range."""

        if duration_ms is None:
            duration_ms = self.default_action_duration_ms
        return max(self.min_action_duration_ms, min(self.max_action_duration_ms, float(duration_ms)))


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.1f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def get_playback_settings() -> PlaybackSettings:
    """Build settings from the environment, falling back to the stock timings."""

    minimum = _env_float(_MIN_ACTION_ENV, MIN_ACTION_DURATION_MS, clamp_min=1.0)
    maximum = _env_float(_MAX_ACTION_ENV, MAX_ACTION_DURATION_MS, clamp_min=minimum)
    default = _env_float(_DEFAULT_ACTION_ENV, DEFAULT_ACTION_DURATION_MS, clamp_min=minimum)
    return PlaybackSettings(
        default_action_duration_ms=min(default, maximum),
        min_action_duration_ms=minimum,
        max_action_duration_ms=maximum,
    )


def is_supported_speed(speed_multiplier: float) -> bool:
    return speed_multiplier in SPEED_CHOICES

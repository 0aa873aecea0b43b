"""Configuration helpers for playback timing and template catalogues."""

from .playback import SPEED_CHOICES, PlaybackSettings, get_playback_settings, is_supported_speed
from .templates import PlayTemplate, get_template, get_template_or_default, iter_templates

__all__ = [
    "SPEED_CHOICES",
    "PlaybackSettings",
    "PlayTemplate",
    "get_playback_settings",
    "get_template",
    "get_template_or_default",
    "is_supported_speed",
    "iter_templates",
]

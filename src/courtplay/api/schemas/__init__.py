"""Pydantic models for API I/O."""

from .playback import (
    FrameRequest,
    FrameResponse,
    OwnershipFlipResponse,
    PlaybackRequest,
    PlaybackResponse,
    PointResponse,
    ScheduledActionResponse,
    TransitionResponse,
    ValidationResponse,
    frame_to_response,
    playback_to_response,
    transition_to_response,
)
from .templates import TemplateResponse, TemplateSummaryResponse

__all__ = [
    "FrameRequest",
    "FrameResponse",
    "OwnershipFlipResponse",
    "PlaybackRequest",
    "PlaybackResponse",
    "PointResponse",
    "ScheduledActionResponse",
    "TemplateResponse",
    "TemplateSummaryResponse",
    "TransitionResponse",
    "ValidationResponse",
    "frame_to_response",
    "playback_to_response",
    "transition_to_response",
]

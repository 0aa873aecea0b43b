from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, Field, field_validator

from courtplay.config import SPEED_CHOICES, is_supported_speed
from courtplay.playback import CompiledPlayback, Transition, TransitionFrame


class ValidationResponse(BaseModel):
    valid: bool
    error: str | None = None


class PlaybackRequest(BaseModel):
    document: Dict[str, Any]
    speed_multiplier: float = 1.0

    @field_validator("speed_multiplier")
    @classmethod
    def _supported_speed(cls, value: float) -> float:
        if not is_supported_speed(value):
            raise ValueError(f"speed_multiplier must be one of {list(SPEED_CHOICES)}")
        return value


class FrameRequest(PlaybackRequest):
    phase_index: int = Field(default=0, ge=0)
    elapsed_ms: float = Field(default=0.0, ge=0.0)


class PointResponse(BaseModel):
    x: float
    y: float


class ScheduledActionResponse(BaseModel):
    action_id: str
    type: str
    trigger: str
    start_ms: float
    end_ms: float
    from_object_id: str | None = None
    to_object_id: str | None = None


class OwnershipFlipResponse(BaseModel):
    action_id: str
    from_object_id: str
    to_object_id: str
    at_ms: float


class TransitionResponse(BaseModel):
    phase_index: int
    from_phase_id: str
    to_phase_id: str
    total_duration_ms: float
    start_owner: str | None
    end_owner: str | None
    actions: List[ScheduledActionResponse]
    ownership_flips: List[OwnershipFlipResponse]


class PlaybackResponse(BaseModel):
    speed_multiplier: float
    total_duration_ms: float
    phase_start_owners: List[str | None]
    transitions: List[TransitionResponse]
    warnings: Dict[str, List[str]] = Field(default_factory=dict)


class FrameResponse(BaseModel):
    phase_index: int
    elapsed_ms: float
    progress: float
    ball_owner_object_id: str | None
    positions: Dict[str, PointResponse]


def transition_to_response(transition: Transition) -> TransitionResponse:
    return TransitionResponse(
        phase_index=transition.phase_index,
        from_phase_id=transition.from_phase_id,
        to_phase_id=transition.to_phase_id,
        total_duration_ms=transition.total_duration_ms,
        start_owner=transition.start_owner,
        end_owner=transition.end_owner,
        actions=[
            ScheduledActionResponse(
                action_id=scheduled.action.id,
                type=scheduled.action.type,
                trigger=scheduled.trigger,
                start_ms=scheduled.start_ms,
                end_ms=scheduled.end_ms,
                from_object_id=scheduled.action.from_object_id,
                to_object_id=scheduled.action.to_object_id,
            )
            for scheduled in transition.scheduled_actions
        ],
        ownership_flips=[
            OwnershipFlipResponse(
                action_id=flip.action_id,
                from_object_id=flip.from_object_id,
                to_object_id=flip.to_object_id,
                at_ms=flip.at_ms,
            )
            for flip in transition.ownership_flips
        ],
    )


def playback_to_response(
    playback: CompiledPlayback,
    warnings: Mapping[str, List[str]] | None = None,
) -> PlaybackResponse:
    return PlaybackResponse(
        speed_multiplier=playback.speed_multiplier,
        total_duration_ms=playback.total_duration_ms,
        phase_start_owners=list(playback.phase_start_owners),
        transitions=[transition_to_response(transition) for transition in playback.transitions],
        warnings=dict(warnings or {}),
    )


def frame_to_response(phase_index: int, frame: TransitionFrame) -> FrameResponse:
    return FrameResponse(
        phase_index=phase_index,
        elapsed_ms=frame.elapsed_ms,
        progress=frame.progress,
        ball_owner_object_id=frame.ball_owner_object_id,
        positions={
            object_id: PointResponse(x=point.x, y=point.y)
            for object_id, point in frame.positions.items()
        },
    )

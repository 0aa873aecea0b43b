"""Timeline compilation and per-frame playback evaluation."""

from .compiler import (
    CompiledPlayback,
    OwnershipFlip,
    PhaseTimeline,
    ScheduledAction,
    Transition,
    compile_phase_timeline,
    compile_play_playback,
    owner_at,
    resolve_initial_ball_owner,
)
from .evaluator import TransitionFrame, get_phase_frame, get_play_frame, get_transition_frame

__all__ = [
    "CompiledPlayback",
    "OwnershipFlip",
    "PhaseTimeline",
    "ScheduledAction",
    "Transition",
    "TransitionFrame",
    "compile_phase_timeline",
    "compile_play_playback",
    "get_phase_frame",
    "get_play_frame",
    "get_transition_frame",
    "owner_at",
    "resolve_initial_ball_owner",
]

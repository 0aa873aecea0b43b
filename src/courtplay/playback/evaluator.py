"""Evaluate compiled transitions at an instant in time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from courtplay.models import BasketballPlayDocument, Point

from .compiler import CompiledPlayback, ScheduledAction, Transition, owner_at


@dataclass(frozen=True)
class TransitionFrame:
    positions: Dict[str, Point]
    ball_owner_object_id: Optional[str]
    elapsed_ms: float
    progress: float


def _interpolate(start: Point, end: Point, progress: float) -> Point:
    # Computed points skip validation; rounding may nudge them past the court edge.
    return Point.model_construct(
        x=start.x + (end.x - start.x) * progress,
        y=start.y + (end.y - start.y) * progress,
    )


def get_transition_frame(transition: Transition, elapsed_ms: float) -> TransitionFrame:
    """Positions and ball owner at ``elapsed_ms`` into ``transition``.

    Only dribbles and cuts move their source object. When movement windows for
    one object overlap, the action later in the phase's list wins. Windows are
    inclusive, so an action starting at 0 places its object at the action's
    own ``from`` point from the first frame, even when that differs from the
    recorded phase position.
    """

    total = transition.total_duration_ms
    elapsed = max(0.0, min(total, elapsed_ms))
    finished = total > 0 and elapsed >= total

    covering: Dict[str, ScheduledAction] = {}
    last_ended: Dict[str, ScheduledAction] = {}
    first_start: Dict[str, float] = {}
    last_end: Dict[str, float] = {}
    for scheduled in transition.movement_actions():
        object_id = scheduled.action.from_object_id
        first_start[object_id] = min(first_start.get(object_id, scheduled.start_ms), scheduled.start_ms)
        last_end[object_id] = max(last_end.get(object_id, scheduled.end_ms), scheduled.end_ms)
        if scheduled.covers(elapsed):
            covering[object_id] = scheduled
        elif elapsed > scheduled.end_ms:
            previous = last_ended.get(object_id)
            if previous is None or scheduled.end_ms >= previous.end_ms:
                last_ended[object_id] = scheduled

    positions: Dict[str, Point] = {}
    for object_id in transition.object_ids:
        start = transition.start_positions.get(object_id)
        end = transition.end_positions.get(object_id)
        if start is None:
            positions[object_id] = end
            continue
        resting = end if end is not None else start

        if finished:
            positions[object_id] = resting
        elif object_id in covering:
            scheduled = covering[object_id]
            action = scheduled.action
            positions[object_id] = _interpolate(action.from_, action.to, scheduled.progress(elapsed))
        elif object_id in last_end and elapsed > last_end[object_id]:
            positions[object_id] = resting
        elif object_id not in first_start or elapsed < first_start[object_id]:
            positions[object_id] = start
        else:
            positions[object_id] = last_ended[object_id].action.to

    return TransitionFrame(
        positions=positions,
        ball_owner_object_id=owner_at(transition.start_owner, transition.ownership_flips, elapsed),
        elapsed_ms=elapsed,
        progress=elapsed / total if total > 0 else 1.0,
    )


def get_phase_frame(
    document: BasketballPlayDocument,
    playback: CompiledPlayback,
    phase_index: int,
    elapsed_ms: float = 0.0,
) -> TransitionFrame:
    """Frame for a phase, including the final phase that has no outgoing transition."""

    if not 0 <= phase_index < len(document.phases):
        raise IndexError(f"phase index {phase_index} out of range for {len(document.phases)} phases")
    if phase_index < len(playback.transitions):
        return get_transition_frame(playback.transitions[phase_index], elapsed_ms)
    phase = document.phases[phase_index]
    return TransitionFrame(
        positions=phase.positions(),
        ball_owner_object_id=playback.phase_start_owners[phase_index],
        elapsed_ms=0.0,
        progress=1.0,
    )


def get_play_frame(playback: CompiledPlayback, elapsed_ms: float) -> Tuple[int, TransitionFrame]:
    """Address the whole play as one timeline of back-to-back transitions.

    Returns the index of the active transition and its frame. Past the end the
    last transition's final frame is returned. The playback must contain at
    least one transition.
    """

    if not playback.transitions:
        raise ValueError("playback has no transitions; a play needs two phases to animate")
    remaining = max(0.0, elapsed_ms)
    last_index = len(playback.transitions) - 1
    for index, transition in enumerate(playback.transitions[:-1]):
        if remaining < transition.total_duration_ms:
            return index, get_transition_frame(transition, remaining)
        remaining -= transition.total_duration_ms
    return last_index, get_transition_frame(playback.transitions[last_index], remaining)

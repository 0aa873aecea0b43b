"""Compile multi-phase play diagrams into time-addressable transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from courtplay.config.playback import PlaybackSettings
from courtplay.models import (
    AnimationTrigger,
    BallOwnerKind,
    BasketballPlayDocument,
    Phase,
    PlayAction,
    Point,
)


logger = logging.getLogger(__name__)

_DEFAULT_SETTINGS = PlaybackSettings()


@dataclass(frozen=True)
class ScheduledAction:
    index: int
    action: PlayAction
    trigger: AnimationTrigger
    duration_ms: float
    start_ms: float
    end_ms: float

    def covers(self, elapsed_ms: float) -> bool:
        return self.start_ms <= elapsed_ms <= self.end_ms

    def progress(self, elapsed_ms: float) -> float:
        span = self.end_ms - self.start_ms
        if span <= 0:
            return 1.0
        return max(0.0, min(1.0, (elapsed_ms - self.start_ms) / span))


@dataclass(frozen=True)
class PhaseTimeline:
    scheduled_actions: Tuple[ScheduledAction, ...]
    total_duration_ms: float


@dataclass(frozen=True)
class OwnershipFlip:
    action_id: str
    from_object_id: str
    to_object_id: str
    at_ms: float


@dataclass(frozen=True)
class Transition:
    """Compiled animation from phase ``phase_index`` to the phase after it."""

    phase_index: int
    from_phase_id: str
    to_phase_id: str
    scheduled_actions: Tuple[ScheduledAction, ...]
    total_duration_ms: float
    object_ids: Tuple[str, ...]
    start_positions: Mapping[str, Point]
    end_positions: Mapping[str, Point]
    start_owner: Optional[str]
    end_owner: Optional[str]
    ownership_flips: Tuple[OwnershipFlip, ...]

    def movement_actions(self) -> List[ScheduledAction]:
        return [
            scheduled
            for scheduled in self.scheduled_actions
            if scheduled.action.moves_source and scheduled.action.from_object_id in self.start_positions
        ]


@dataclass(frozen=True)
class CompiledPlayback:
    transitions: Tuple[Transition, ...]
    phase_start_owners: Tuple[Optional[str], ...]
    speed_multiplier: float

    @property
    def total_duration_ms(self) -> float:
        return sum(transition.total_duration_ms for transition in self.transitions)


def _check_speed(speed_multiplier: float) -> None:
    if not speed_multiplier > 0:
        raise ValueError(f"speed_multiplier must be positive, got {speed_multiplier!r}")


def _action_timing(action: PlayAction, settings: PlaybackSettings) -> Tuple[AnimationTrigger, float]:
    if action.animation is None:
        return "after_previous", settings.normalize_duration(None)
    return action.animation.trigger, settings.normalize_duration(action.animation.duration_ms)


def compile_phase_timeline(
    phase: Phase,
    speed_multiplier: float = 1.0,
    settings: Optional[PlaybackSettings] = None,
) -> PhaseTimeline:
    """Schedule a phase's actions on a single running cursor.

    ``after_previous`` actions start at the cursor. ``with_previous`` actions
    share the start of the most recent ``after_previous`` action, so a run of
    them plays concurrently with that anchor; the cursor then waits for the
    slowest member of the group.
    """

    _check_speed(speed_multiplier)
    settings = settings or _DEFAULT_SETTINGS

    scheduled: List[ScheduledAction] = []
    cursor = 0.0
    anchor_start: Optional[float] = None
    for index, action in enumerate(phase.actions):
        trigger, duration_ms = _action_timing(action, settings)
        duration_ms /= speed_multiplier
        if trigger == "with_previous" and anchor_start is not None:
            start_ms = anchor_start
        else:
            trigger = "after_previous"
            start_ms = cursor
            anchor_start = start_ms
        end_ms = start_ms + duration_ms
        cursor = max(cursor, end_ms)
        scheduled.append(
            ScheduledAction(
                index=index,
                action=action,
                trigger=trigger,
                duration_ms=duration_ms,
                start_ms=start_ms,
                end_ms=end_ms,
            )
        )

    return PhaseTimeline(scheduled_actions=tuple(scheduled), total_duration_ms=cursor)


def resolve_initial_ball_owner(phase: Phase) -> Optional[str]:
    """Owner at the start of the first phase.

    An explicit owner (or explicit nobody) wins; otherwise the first player
    placed in the phase holds the ball.
    """

    owner = phase.ball_owner
    if owner.kind is BallOwnerKind.OWNER:
        return owner.object_id
    if owner.kind is BallOwnerKind.NONE:
        return None
    first_player = next(phase.iter_players(), None)
    return first_player.id if first_player is not None else None


def _ownership_flips(scheduled_actions: Sequence[ScheduledAction]) -> Tuple[OwnershipFlip, ...]:
    flips: List[OwnershipFlip] = []
    for scheduled in scheduled_actions:
        action = scheduled.action
        if not action.transfers_possession:
            continue
        if action.from_object_id is None or action.to_object_id is None:
            continue
        flips.append(
            OwnershipFlip(
                action_id=action.id,
                from_object_id=action.from_object_id,
                to_object_id=action.to_object_id,
                at_ms=scheduled.end_ms,
            )
        )
    return tuple(flips)


def owner_at(start_owner: Optional[str], flips: Sequence[OwnershipFlip], elapsed_ms: float) -> Optional[str]:
    """Apply every flip completed by ``elapsed_ms``, in action-list order."""

    owner = start_owner
    for flip in flips:
        if flip.at_ms <= elapsed_ms:
            owner = flip.to_object_id
    return owner


def _ordered_object_ids(departing: Phase, arriving: Phase) -> Tuple[str, ...]:
    ids: Dict[str, None] = dict.fromkeys(departing.object_ids())
    for object_id in arriving.object_ids():
        ids.setdefault(object_id, None)
    return tuple(ids)


def _compile_transition(
    index: int,
    departing: Phase,
    arriving: Phase,
    start_owner: Optional[str],
    speed_multiplier: float,
    settings: PlaybackSettings,
) -> Transition:
    timeline = compile_phase_timeline(departing, speed_multiplier, settings)
    flips = _ownership_flips(timeline.scheduled_actions)
    return Transition(
        phase_index=index,
        from_phase_id=departing.id,
        to_phase_id=arriving.id,
        scheduled_actions=timeline.scheduled_actions,
        total_duration_ms=timeline.total_duration_ms,
        object_ids=_ordered_object_ids(departing, arriving),
        start_positions=MappingProxyType(departing.positions()),
        end_positions=MappingProxyType(arriving.positions()),
        start_owner=start_owner,
        end_owner=owner_at(start_owner, flips, timeline.total_duration_ms),
        ownership_flips=flips,
    )


def compile_play_playback(
    document: BasketballPlayDocument,
    speed_multiplier: float = 1.0,
    settings: Optional[PlaybackSettings] = None,
) -> CompiledPlayback:
    """Compile one transition per adjacent phase pair.

    ``document`` must already have passed validation. The result is immutable
    and can be shared between consumers; any edit requires recompiling.
    """

    _check_speed(speed_multiplier)
    settings = settings or _DEFAULT_SETTINGS
    phases = document.phases

    owners: List[Optional[str]] = [resolve_initial_ball_owner(phases[0])]
    transitions: List[Transition] = []
    for index in range(len(phases) - 1):
        transition = _compile_transition(
            index,
            phases[index],
            phases[index + 1],
            owners[index],
            speed_multiplier,
            settings,
        )
        transitions.append(transition)

        next_owner = phases[index + 1].ball_owner
        if next_owner.kind is BallOwnerKind.OWNER:
            owners.append(next_owner.object_id)
        elif next_owner.kind is BallOwnerKind.NONE:
            owners.append(None)
        else:
            owners.append(transition.end_owner)

    logger.debug(
        "Compiled %s transitions for %s phases at %.2fx (%.0f ms)",
        len(transitions),
        len(phases),
        speed_multiplier,
        sum(transition.total_duration_ms for transition in transitions),
    )
    return CompiledPlayback(
        transitions=tuple(transitions),
        phase_start_owners=tuple(owners),
        speed_multiplier=speed_multiplier,
    )

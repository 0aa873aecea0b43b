"""Copy-on-write edits for phases and documents.

Every helper returns a new value; the inputs are frozen models and are never
mutated. Edits keep the document free of dangling object references.
"""

from __future__ import annotations

from typing import Dict, Optional
from uuid import uuid4

from courtplay.models import (
    PLAYER_OBJECT_TYPES,
    ActionAnimation,
    BallOwner,
    BallOwnerKind,
    BasketballPlayDocument,
    Phase,
    PlayAction,
    PlayObject,
    PlayObjectType,
    Point,
)


DEFAULT_OBJECT_SIZE = 20
DEFAULT_RECT_WIDTH = 100
DEFAULT_RECT_HEIGHT = 60
DEFAULT_CIRCLE_SIZE = 40
DEFAULT_TEXT_LABEL = "TEXT"


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:9]}"


def create_object(
    object_type: PlayObjectType,
    position: Point,
    label: Optional[str] = None,
    *,
    object_id: Optional[str] = None,
) -> PlayObject:
    """Build a new object with the editor's default sizing for its type."""

    fields: dict = {"size": DEFAULT_OBJECT_SIZE}
    if object_type == "text":
        label = label or DEFAULT_TEXT_LABEL
    elif object_type == "shape_rect":
        fields.update(width=DEFAULT_RECT_WIDTH, height=DEFAULT_RECT_HEIGHT)
    elif object_type == "shape_circle":
        fields["size"] = DEFAULT_CIRCLE_SIZE
    return PlayObject(
        id=object_id or new_id("obj"),
        type=object_type,
        label=label,
        position=position,
        **fields,
    )


def _require_object(phase: Phase, object_id: str) -> PlayObject:
    obj = phase.find_object(object_id)
    if obj is None:
        raise KeyError(f"Phase {phase.name} has no object {object_id!r}")
    return obj


def _require_action_index(phase: Phase, action_id: str) -> int:
    for index, action in enumerate(phase.actions):
        if action.id == action_id:
            return index
    raise KeyError(f"Phase {phase.name} has no action {action_id!r}")


def add_object(phase: Phase, obj: PlayObject) -> Phase:
    """Append ``obj``; the first player placed on an owner-less phase gets the ball."""

    if phase.find_object(obj.id) is not None:
        raise ValueError(f"Phase {phase.name} already has object {obj.id!r}")

    ball_owner = phase.ball_owner
    if (
        obj.type in PLAYER_OBJECT_TYPES
        and ball_owner.is_inherit
        and next(phase.iter_players(), None) is None
    ):
        ball_owner = BallOwner.owner(obj.id)

    return phase.model_copy(update={"objects": phase.objects + (obj,), "ball_owner": ball_owner})


def remove_object(phase: Phase, object_id: str) -> Phase:
    """Drop an object together with every action that references it."""

    _require_object(phase, object_id)
    ball_owner = phase.ball_owner
    if ball_owner.kind is BallOwnerKind.OWNER and ball_owner.object_id == object_id:
        ball_owner = BallOwner.inherit()
    return phase.model_copy(
        update={
            "objects": tuple(obj for obj in phase.objects if obj.id != object_id),
            "actions": tuple(
                action for action in phase.actions if object_id not in action.referenced_object_ids()
            ),
            "ball_owner": ball_owner,
        }
    )


def move_object(phase: Phase, object_id: str, position: Point) -> Phase:
    _require_object(phase, object_id)
    return phase.model_copy(
        update={
            "objects": tuple(
                obj.model_copy(update={"position": position}) if obj.id == object_id else obj
                for obj in phase.objects
            )
        }
    )


def add_action(phase: Phase, action: PlayAction) -> Phase:
    if phase.find_action(action.id) is not None:
        raise ValueError(f"Phase {phase.name} already has action {action.id!r}")
    known = set(phase.object_ids())
    for ref in action.referenced_object_ids():
        if ref not in known:
            raise ValueError(f"Action {action.id!r} references unknown object {ref!r}")
    return phase.model_copy(update={"actions": phase.actions + (action,)})


def remove_action(phase: Phase, action_id: str) -> Phase:
    _require_action_index(phase, action_id)
    return phase.model_copy(
        update={"actions": tuple(action for action in phase.actions if action.id != action_id)}
    )


def move_action(phase: Phase, action_id: str, new_index: int) -> Phase:
    """Reorder an action; list order drives scheduling and overlap priority."""

    index = _require_action_index(phase, action_id)
    actions = list(phase.actions)
    action = actions.pop(index)
    new_index = max(0, min(len(actions), new_index))
    actions.insert(new_index, action)
    return phase.model_copy(update={"actions": tuple(actions)})


def set_action_animation(phase: Phase, action_id: str, animation: ActionAnimation) -> Phase:
    index = _require_action_index(phase, action_id)
    actions = list(phase.actions)
    actions[index] = actions[index].model_copy(update={"animation": animation})
    return phase.model_copy(update={"actions": tuple(actions)})


def set_ball_owner(phase: Phase, owner: BallOwner) -> Phase:
    if owner.kind is BallOwnerKind.OWNER:
        _require_object(phase, owner.object_id or "")
    return phase.model_copy(update={"ball_owner": owner})


def _check_phase_index(document: BasketballPlayDocument, index: int) -> None:
    if not 0 <= index < len(document.phases):
        raise IndexError(f"phase index {index} out of range for {len(document.phases)} phases")


def replace_phase(document: BasketballPlayDocument, index: int, phase: Phase) -> BasketballPlayDocument:
    _check_phase_index(document, index)
    phases = list(document.phases)
    phases[index] = phase
    return document.model_copy(update={"phases": tuple(phases)})


def add_empty_phase(document: BasketballPlayDocument, name: Optional[str] = None) -> BasketballPlayDocument:
    phase = Phase(
        id=new_id("phase"),
        name=name or f"Phase {len(document.phases) + 1}",
        objects=(),
        actions=(),
    )
    return document.model_copy(update={"phases": document.phases + (phase,)})


def duplicate_phase(
    document: BasketballPlayDocument,
    index: int,
    *,
    clear_actions: bool = False,
) -> BasketballPlayDocument:
    """Append a copy of phase ``index`` with fresh ids and remapped references."""

    _check_phase_index(document, index)
    source = document.phases[index]

    id_map: Dict[str, str] = {}
    objects = []
    for obj in source.objects:
        id_map[obj.id] = new_id("obj")
        objects.append(obj.model_copy(update={"id": id_map[obj.id]}, deep=True))

    actions = []
    if not clear_actions:
        for action in source.actions:
            actions.append(
                action.model_copy(
                    update={
                        "id": new_id("act"),
                        "from_object_id": id_map.get(action.from_object_id) if action.from_object_id else None,
                        "to_object_id": id_map.get(action.to_object_id) if action.to_object_id else None,
                    },
                    deep=True,
                )
            )

    ball_owner = source.ball_owner
    if ball_owner.kind is BallOwnerKind.OWNER:
        mapped = id_map.get(ball_owner.object_id or "")
        ball_owner = BallOwner.owner(mapped) if mapped else BallOwner.inherit()

    phase = Phase(
        id=new_id("phase"),
        name=f"Phase {len(document.phases) + 1}",
        objects=tuple(objects),
        actions=tuple(actions),
        ball_owner=ball_owner,
    )
    return document.model_copy(update={"phases": document.phases + (phase,)})


def remove_phase(document: BasketballPlayDocument, index: int) -> BasketballPlayDocument:
    _check_phase_index(document, index)
    if len(document.phases) <= 1:
        raise ValueError("A play must keep at least one phase")
    return document.model_copy(
        update={"phases": tuple(phase for i, phase in enumerate(document.phases) if i != index)}
    )

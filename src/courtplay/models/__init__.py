"""Document model for basketball play diagrams."""

from .diagram import (
    COURT_TEMPLATES,
    MAX_COORD,
    MIN_COORD,
    MOVEMENT_ACTION_TYPES,
    PLAYER_OBJECT_TYPES,
    POSSESSION_TRANSFER_TYPES,
    SCHEMA_VERSION,
    ActionAnimation,
    ActionType,
    AnimationTrigger,
    BallOwner,
    BallOwnerKind,
    BasketballPlayDocument,
    CourtTemplate,
    Phase,
    PlayAction,
    PlayObject,
    PlayObjectType,
    PlayType,
    Point,
)

__all__ = [
    "COURT_TEMPLATES",
    "MAX_COORD",
    "MIN_COORD",
    "MOVEMENT_ACTION_TYPES",
    "PLAYER_OBJECT_TYPES",
    "POSSESSION_TRANSFER_TYPES",
    "SCHEMA_VERSION",
    "ActionAnimation",
    "ActionType",
    "AnimationTrigger",
    "BallOwner",
    "BallOwnerKind",
    "BasketballPlayDocument",
    "CourtTemplate",
    "Phase",
    "PlayAction",
    "PlayObject",
    "PlayObjectType",
    "PlayType",
    "Point",
]

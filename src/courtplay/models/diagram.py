"""Play diagram document model shared by validation, compilation and playback."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


MIN_COORD = 0.0
MAX_COORD = 1000.0
SCHEMA_VERSION = 1

CourtTemplate = Literal["half_court", "full_court_vertical", "full_court_horizontal"]
PlayObjectType = Literal[
    "offense_player",
    "defense_player",
    "ball",
    "cone",
    "text",
    "shape_rect",
    "shape_circle",
]
ActionType = Literal["dribble", "pass", "cut", "screen", "shot", "handoff"]
AnimationTrigger = Literal["after_previous", "with_previous"]
PlayType = Literal["offense", "defense", "ato", "baseline", "sideline", "special"]

COURT_TEMPLATES: Tuple[str, ...] = ("half_court", "full_court_vertical", "full_court_horizontal")
PLAYER_OBJECT_TYPES = frozenset({"offense_player", "defense_player"})
POSSESSION_TRANSFER_TYPES = frozenset({"pass", "handoff"})
MOVEMENT_ACTION_TYPES = frozenset({"dribble", "cut"})

Coordinate = Annotated[float, Field(strict=True, ge=MIN_COORD, le=MAX_COORD, allow_inf_nan=False)]
Number = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class DiagramModel(BaseModel):
    """Base for every document type: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Point(DiagramModel):
    x: Coordinate
    y: Coordinate


class ActionAnimation(DiagramModel):
    trigger: AnimationTrigger = "after_previous"
    duration_ms: Number = Field(..., gt=0)


class PlayObject(DiagramModel):
    id: str
    type: PlayObjectType
    label: Optional[str] = None
    position: Point
    size: Optional[Number] = None
    width: Optional[Number] = None
    height: Optional[Number] = None
    rotation: Optional[Number] = None
    color: Optional[str] = None

    @property
    def is_player(self) -> bool:
        return self.type in PLAYER_OBJECT_TYPES


class PlayAction(DiagramModel):
    id: str
    type: ActionType
    from_: Point = Field(..., alias="from")
    to: Point
    from_object_id: Optional[str] = None
    to_object_id: Optional[str] = None
    animation: Optional[ActionAnimation] = None

    @property
    def transfers_possession(self) -> bool:
        return self.type in POSSESSION_TRANSFER_TYPES

    @property
    def moves_source(self) -> bool:
        return self.type in MOVEMENT_ACTION_TYPES and self.from_object_id is not None

    def referenced_object_ids(self) -> List[str]:
        return [ref for ref in (self.from_object_id, self.to_object_id) if ref is not None]


class BallOwnerKind(str, Enum):
    INHERIT = "inherit"
    NONE = "none"
    OWNER = "owner"


class BallOwner(DiagramModel):
    """Phase-level ball ownership: inherit, explicitly nobody, or a specific object."""

    kind: BallOwnerKind = BallOwnerKind.INHERIT
    object_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_object_id(self) -> "BallOwner":
        if (self.kind is BallOwnerKind.OWNER) != (self.object_id is not None):
            raise ValueError("object_id is required for, and only for, an explicit owner")
        return self

    @classmethod
    def inherit(cls) -> "BallOwner":
        return cls(kind=BallOwnerKind.INHERIT)

    @classmethod
    def none(cls) -> "BallOwner":
        return cls(kind=BallOwnerKind.NONE)

    @classmethod
    def owner(cls, object_id: str) -> "BallOwner":
        return cls(kind=BallOwnerKind.OWNER, object_id=object_id)

    @property
    def is_inherit(self) -> bool:
        return self.kind is BallOwnerKind.INHERIT


class Phase(DiagramModel):
    """Named snapshot of object positions plus the actions that lead out of it."""

    id: str
    name: str
    objects: Tuple[PlayObject, ...]
    actions: Tuple[PlayAction, ...]
    ball_owner: BallOwner = Field(default_factory=BallOwner.inherit, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _unpack_ball_owner(cls, data: Any) -> Any:
        # Wire format: absent key inherits, null means nobody, a string names the owner.
        if isinstance(data, Mapping) and "ballOwnerObjectId" in data:
            data = dict(data)
            raw = data.pop("ballOwnerObjectId")
            if raw is None:
                data["ball_owner"] = BallOwner.none()
            elif isinstance(raw, str):
                data["ball_owner"] = BallOwner.owner(raw)
            else:
                data["ball_owner"] = raw
        return data

    def object_ids(self) -> List[str]:
        return [obj.id for obj in self.objects]

    def find_object(self, object_id: str) -> Optional[PlayObject]:
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None

    def find_action(self, action_id: str) -> Optional[PlayAction]:
        for action in self.actions:
            if action.id == action_id:
                return action
        return None

    def iter_players(self) -> Iterator[PlayObject]:
        return (obj for obj in self.objects if obj.is_player)

    def positions(self) -> Dict[str, Point]:
        return {obj.id: obj.position for obj in self.objects}

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if not self.ball_owner.is_inherit:
            payload["ballOwnerObjectId"] = self.ball_owner.object_id
        return payload


class BasketballPlayDocument(DiagramModel):
    schema_version: Literal[1]
    court_template: CourtTemplate
    phases: Tuple[Phase, ...] = Field(..., min_length=1)

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-compatible document, the inverse of ``model_validate``."""

        return {
            "schemaVersion": self.schema_version,
            "courtTemplate": self.court_template,
            "phases": [phase.to_payload() for phase in self.phases],
        }

"""Canned starting diagrams for new plays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from courtplay.models import (
    SCHEMA_VERSION,
    BasketballPlayDocument,
    CourtTemplate,
    Phase,
    PlayObject,
    PlayType,
    Point,
)


DEFAULT_TEMPLATE_ID = "empty"
PLAYER_SIZE = 18


@dataclass(frozen=True)
class PlayTemplate:
    template_id: str
    name: str
    description: str
    play_type: PlayType
    court_template: CourtTemplate
    tags: Tuple[str, ...]
    document: BasketballPlayDocument


Spot = Tuple[str, float, float]


def _players(kind: str, prefix: str, spots: Sequence[Spot]) -> Tuple[PlayObject, ...]:
    return tuple(
        PlayObject(
            id=f"{prefix}{index}",
            type=kind,
            label=label,
            position=Point(x=x, y=y),
            size=PLAYER_SIZE,
        )
        for index, (label, x, y) in enumerate(spots, start=1)
    )


def _offense(*spots: Spot) -> Tuple[PlayObject, ...]:
    return _players("offense_player", "o", spots)


def _defense(*spots: Spot) -> Tuple[PlayObject, ...]:
    return _players("defense_player", "x", spots)


def _template(
    template_id: str,
    name: str,
    description: str,
    play_type: PlayType,
    court_template: CourtTemplate,
    tags: Iterable[str],
    objects: Tuple[PlayObject, ...] = (),
) -> PlayTemplate:
    document = BasketballPlayDocument(
        schema_version=SCHEMA_VERSION,
        court_template=court_template,
        phases=(Phase(id="phase-1", name="Phase 1", objects=objects, actions=()),),
    )
    return PlayTemplate(
        template_id=template_id,
        name=name,
        description=description,
        play_type=play_type,
        court_template=court_template,
        tags=tuple(tags),
        document=document,
    )


_HALF_COURT_SPACING = _offense(
    ("1", 780, 720), ("2", 830, 180), ("3", 170, 180), ("4", 350, 530), ("5", 650, 530)
)
_HALF_COURT_DEFENSE = _defense(
    ("X1", 740, 680), ("X2", 800, 230), ("X3", 220, 230), ("X4", 390, 490), ("X5", 610, 490)
)
_FULL_COURT_SPACING = _offense(
    ("1", 500, 850), ("2", 840, 740), ("3", 160, 740), ("4", 330, 530), ("5", 670, 530)
)

_TEMPLATES: Dict[str, PlayTemplate] = {
    template.template_id: template
    for template in (
        _template("empty", "Empty", "Blank court to draw from scratch.", "offense", "half_court", ["empty"]),
        _template(
            "traditional",
            "Traditional",
            "Classic balanced half-court alignment.",
            "offense",
            "half_court",
            ["traditional"],
            _HALF_COURT_SPACING,
        ),
        _template(
            "five_out",
            "5 Out",
            "Perimeter spacing with no low-post anchor.",
            "offense",
            "half_court",
            ["5-out", "spacing"],
            _offense(("1", 500, 770), ("2", 850, 220), ("3", 150, 220), ("4", 260, 520), ("5", 740, 520)),
        ),
        _template(
            "princeton",
            "Princeton Offense",
            "High-post and split-action start.",
            "offense",
            "half_court",
            ["princeton"],
            _offense(("1", 500, 760), ("2", 820, 220), ("3", 180, 220), ("4", 420, 430), ("5", 580, 430)),
        ),
        _template(
            "box",
            "Box",
            "Box alignment for baseline/sideline entries.",
            "ato",
            "half_court",
            ["box", "ato"],
            _offense(("1", 500, 760), ("2", 360, 380), ("3", 640, 380), ("4", 360, 560), ("5", 640, 560)),
        ),
        _template(
            "one_four_low",
            "1-4 Low",
            "One guard high, four players low.",
            "offense",
            "half_court",
            ["1-4-low"],
            _offense(("1", 500, 760), ("2", 270, 600), ("3", 730, 600), ("4", 380, 520), ("5", 620, 520)),
        ),
        _template(
            "horns",
            "Horns",
            "Two elbows with strong-side/weak-side options.",
            "offense",
            "half_court",
            ["horns"],
            _offense(("1", 500, 760), ("2", 840, 220), ("3", 160, 220), ("4", 400, 460), ("5", 600, 460)),
        ),
        _template(
            "one_four_high",
            "1-4 High",
            "One guard and four across the free throw line extended.",
            "offense",
            "half_court",
            ["1-4-high"],
            _offense(("1", 500, 760), ("2", 220, 430), ("3", 780, 430), ("4", 380, 460), ("5", 620, 460)),
        ),
        _template(
            "flex",
            "Flex",
            "Flex continuity spacing as starting shell.",
            "offense",
            "half_court",
            ["flex"],
            _HALF_COURT_SPACING,
        ),
        _template(
            "zone_2_3",
            "2-3 Zone",
            "Two top defenders, three along baseline line.",
            "defense",
            "half_court",
            ["2-3-zone", "zone"],
            _defense(("X1", 420, 400), ("X2", 580, 400), ("X3", 220, 540), ("X4", 500, 560), ("X5", 780, 540)),
        ),
        _template(
            "zone_3_2",
            "3-2 Zone",
            "Three up top, two low defenders.",
            "defense",
            "half_court",
            ["3-2-zone", "zone"],
            _defense(("X1", 300, 430), ("X2", 500, 390), ("X3", 700, 430), ("X4", 380, 570), ("X5", 620, 570)),
        ),
        _template(
            "zone_1_3_1",
            "1-3-1 Zone",
            "Point defender with middle three and baseline rover.",
            "defense",
            "half_court",
            ["1-3-1-zone", "zone"],
            _defense(("X1", 500, 380), ("X2", 280, 470), ("X3", 500, 490), ("X4", 720, 470), ("X5", 500, 620)),
        ),
        _template(
            "full_court_vertical",
            "Full Court Vertical",
            "Full-court vertical setup.",
            "offense",
            "full_court_vertical",
            ["full-court"],
            _FULL_COURT_SPACING,
        ),
        _template(
            "full_court_horizontal",
            "Full Court Horizontal",
            "Full-court horizontal setup.",
            "offense",
            "full_court_horizontal",
            ["full-court"],
            _offense(("1", 500, 500), ("2", 740, 300), ("3", 740, 700), ("4", 300, 320), ("5", 300, 680)),
        ),
        _template(
            "traditional_defended",
            "Traditional vs Man",
            "Traditional offense with matching defenders.",
            "offense",
            "half_court",
            ["man", "traditional"],
            _HALF_COURT_SPACING + _HALF_COURT_DEFENSE,
        ),
    )
}


def iter_templates() -> Iterable[PlayTemplate]:
    """Return an iterator over every template in catalogue order."""

    return _TEMPLATES.values()


def get_template(template_id: str) -> PlayTemplate:
    """Fetch a template by id, raising KeyError if missing."""

    if template_id not in _TEMPLATES:
        raise KeyError(f"No play template configured for id={template_id!r}")
    return _TEMPLATES[template_id]


def get_template_or_default(template_id: Optional[str] = None) -> PlayTemplate:
    """Resolve a template, falling back to the blank court for unknown ids."""

    if not template_id:
        return _TEMPLATES[DEFAULT_TEMPLATE_ID]
    return _TEMPLATES.get(template_id, _TEMPLATES[DEFAULT_TEMPLATE_ID])

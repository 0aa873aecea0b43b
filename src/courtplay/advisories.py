"""Non-fatal advisories about a phase's actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List

from courtplay.models import BasketballPlayDocument, Phase


@dataclass(frozen=True)
class ActionWarning:
    action_id: str
    message: str


def iter_action_warnings(phase: Phase) -> Iterator[ActionWarning]:
    for action in phase.actions:
        if (
            action.transfers_possession
            and action.from_object_id is not None
            and action.to_object_id is None
        ):
            yield ActionWarning(
                action_id=action.id,
                message=(
                    f"{action.type.capitalize()} {action.id} has no target player, "
                    "so possession stays with the current owner."
                ),
            )


def get_phase_action_warnings(phase: Phase) -> List[str]:
    """One message per pass/handoff that names a passer but no receiver."""

    return [warning.message for warning in iter_action_warnings(phase)]


def get_document_warnings(document: BasketballPlayDocument) -> Dict[str, List[str]]:
    warnings: Dict[str, List[str]] = {}
    for phase in document.phases:
        messages = get_phase_action_warnings(phase)
        if messages:
            warnings[phase.id] = messages
    return warnings

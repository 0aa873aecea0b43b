"""Structural validation for candidate play diagrams."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError

from courtplay.editing.phases import new_id
from courtplay.models import (
    SCHEMA_VERSION,
    BallOwnerKind,
    BasketballPlayDocument,
    CourtTemplate,
    Phase,
)


logger = logging.getLogger(__name__)

INVALID_PAYLOAD = "Invalid diagram payload"


class InvalidPlayDocument(ValueError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate`; ``document`` is set only when ``valid``."""

    valid: bool
    error: Optional[str] = None
    document: Optional[BasketballPlayDocument] = None

    @classmethod
    def ok(cls, document: BasketballPlayDocument) -> "ValidationResult":
        return cls(valid=True, document=document)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


def _raw_phase_name(candidate: Any, index: Any) -> str:
    if isinstance(candidate, Mapping):
        phases = candidate.get("phases")
        if isinstance(phases, Sequence) and isinstance(index, int) and 0 <= index < len(phases):
            phase = phases[index]
            if isinstance(phase, Mapping) and isinstance(phase.get("name"), str):
                return phase["name"]
    return f"#{index + 1}" if isinstance(index, int) else "?"


def _describe_phase_error(candidate: Any, loc: Sequence[Any], error_type: str) -> str:
    if len(loc) < 3:
        return "Invalid phase object"
    name = _raw_phase_name(candidate, loc[1])
    field = loc[2]
    if field in ("id", "name"):
        return "Phase id and name are required"
    if field == "objects":
        return f"Phase {name} has invalid objects"
    if field == "actions":
        return f"Phase {name} has invalid actions"
    if field in ("ball_owner", "ballOwner", "ballOwnerObjectId"):
        return f"Phase {name} has invalid ball owner"
    if error_type == "extra_forbidden":
        return f"Phase {name} has unexpected field {field!r}"
    return "Invalid phase object"


def _describe(candidate: Any, exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = first.get("loc", ())
    error_type = first.get("type", "")
    if not loc:
        return INVALID_PAYLOAD
    head = loc[0]
    if head in ("schemaVersion", "schema_version"):
        return "Unsupported play diagram schema version"
    if head in ("courtTemplate", "court_template"):
        return "Unsupported court template"
    if head == "phases":
        if len(loc) == 1:
            return "Play must include at least one phase"
        return _describe_phase_error(candidate, loc, error_type)
    if error_type == "extra_forbidden":
        return f"Unexpected field {head!r}"
    return INVALID_PAYLOAD


def _parse(candidate: Any) -> BasketballPlayDocument | str:
    """Deserialize ``candidate``; the only place parse exceptions are handled."""

    if isinstance(candidate, BasketballPlayDocument):
        return candidate
    try:
        if isinstance(candidate, (str, bytes, bytearray)):
            return BasketballPlayDocument.model_validate_json(candidate)
        if not isinstance(candidate, Mapping):
            return INVALID_PAYLOAD
        return BasketballPlayDocument.model_validate(candidate)
    except ValidationError as exc:
        return _describe(candidate, exc)


def _duplicate(ids: Sequence[str]) -> Optional[str]:
    seen: set[str] = set()
    for item in ids:
        if item in seen:
            return item
        seen.add(item)
    return None


def _check_phase(phase: Phase) -> Optional[str]:
    object_ids = phase.object_ids()
    duplicate = _duplicate(object_ids)
    if duplicate is not None:
        return f"Phase {phase.name} has duplicate object id {duplicate!r}"

    duplicate = _duplicate([action.id for action in phase.actions])
    if duplicate is not None:
        return f"Phase {phase.name} has duplicate action id {duplicate!r}"

    known = set(object_ids)
    for action in phase.actions:
        for ref in action.referenced_object_ids():
            if ref not in known:
                return f"Phase {phase.name} action {action.id!r} references unknown object {ref!r}"

    owner = phase.ball_owner
    if owner.kind is BallOwnerKind.OWNER and owner.object_id not in known:
        return f"Phase {phase.name} ball owner references unknown object {owner.object_id!r}"
    return None


def check_references(document: BasketballPlayDocument) -> Optional[str]:
    """Return the first id/reference problem in a parsed document, if any."""

    duplicate = _duplicate([phase.id for phase in document.phases])
    if duplicate is not None:
        return f"Duplicate phase id {duplicate!r}"
    for phase in document.phases:
        problem = _check_phase(phase)
        if problem is not None:
            return problem
    return None


def validate(candidate: Any) -> ValidationResult:
    """Check that ``candidate`` is a well-formed play diagram.

    Accepts a JSON-compatible mapping, a JSON string, or an already-built
    :class:`BasketballPlayDocument`. Checks run in a fixed order and stop at
    the first failure. The candidate itself is never modified.
    """

    parsed = _parse(candidate)
    if isinstance(parsed, str):
        return ValidationResult.failure(parsed)
    problem = check_references(parsed)
    if problem is not None:
        return ValidationResult.failure(problem)
    return ValidationResult.ok(parsed)


def require_valid(candidate: Any) -> BasketballPlayDocument:
    result = validate(candidate)
    if not result.valid or result.document is None:
        raise InvalidPlayDocument(result.error or INVALID_PAYLOAD)
    return result.document


def empty_document(court_template: CourtTemplate = "half_court") -> BasketballPlayDocument:
    """Minimal always-valid document: one empty phase."""

    return BasketballPlayDocument(
        schema_version=SCHEMA_VERSION,
        court_template=court_template,
        phases=(Phase(id=new_id("phase"), name="Phase 1", objects=(), actions=()),),
    )


def load_document_or_default(
    candidate: Any,
    fallback_court_template: CourtTemplate = "half_court",
) -> BasketballPlayDocument:
    """Return a validated copy of ``candidate`` or an empty document if it is invalid."""

    result = validate(candidate)
    if result.valid and result.document is not None:
        return clone_document(result.document)
    logger.warning("Discarding invalid play diagram (%s); starting from an empty court", result.error)
    return empty_document(fallback_court_template)


def clone_document(document: BasketballPlayDocument) -> BasketballPlayDocument:
    return document.model_copy(deep=True)

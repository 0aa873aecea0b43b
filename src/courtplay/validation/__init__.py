"""Well-formedness gate for play diagrams."""

from .validator import (
    InvalidPlayDocument,
    ValidationResult,
    check_references,
    clone_document,
    empty_document,
    load_document_or_default,
    require_valid,
    validate,
)

__all__ = [
    "InvalidPlayDocument",
    "ValidationResult",
    "check_references",
    "clone_document",
    "empty_document",
    "load_document_or_default",
    "require_valid",
    "validate",
]

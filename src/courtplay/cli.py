"""Command-line interface for checking and previewing play diagrams."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from courtplay.advisories import get_document_warnings
from courtplay.api.schemas import frame_to_response, playback_to_response
from courtplay.config import SPEED_CHOICES, get_playback_settings, get_template, iter_templates
from courtplay.models import BasketballPlayDocument
from courtplay.playback import compile_play_playback, get_phase_frame
from courtplay.validation import InvalidPlayDocument, require_valid, validate


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate and preview basketball play diagrams")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Check a diagram JSON file")
    validate_parser.add_argument("path", type=Path, help="Path to diagram JSON")

    compile_parser = subparsers.add_parser("compile", help="Print the compiled playback timeline")
    compile_parser.add_argument("path", type=Path, help="Path to diagram JSON")
    compile_parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        choices=SPEED_CHOICES,
        help="Playback speed multiplier",
    )

    frame_parser = subparsers.add_parser("frame", help="Print object positions at an instant")
    frame_parser.add_argument("path", type=Path, help="Path to diagram JSON")
    frame_parser.add_argument("--phase", type=int, default=0, help="Phase index (0-based)")
    frame_parser.add_argument("--elapsed", type=float, default=0.0, help="Milliseconds into the phase")
    frame_parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        choices=SPEED_CHOICES,
        help="Playback speed multiplier",
    )

    warnings_parser = subparsers.add_parser("warnings", help="List action warnings per phase")
    warnings_parser.add_argument("path", type=Path, help="Path to diagram JSON")

    templates_parser = subparsers.add_parser("templates", help="List or export starter templates")
    templates_parser.add_argument("--show", metavar="TEMPLATE_ID", help="Print a template document")
    templates_parser.add_argument("--output", type=Path, default=None, help="Write the template document to a file")

    return parser.parse_args(argv)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _load(path: Path) -> BasketballPlayDocument:
    try:
        return require_valid(path.read_bytes())
    except InvalidPlayDocument as exc:
        raise SystemExit(f"{path}: {exc.message}") from exc


def _run_templates(args: argparse.Namespace) -> None:
    if not args.show:
        for template in iter_templates():
            print(f"{template.template_id:<20} {template.play_type:<10} {template.name}")
        return
    try:
        template = get_template(args.show)
    except KeyError as exc:
        raise SystemExit(f"Unknown template: {args.show}") from exc
    payload = template.document.to_payload()
    if args.output:
        args.output.write_text(json.dumps(payload, indent=2))
        print(f"Wrote template {template.template_id} to {args.output}")
    else:
        _print_json(payload)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "templates":
        _run_templates(args)
        return

    if args.command == "validate":
        result = validate(args.path.read_bytes())
        if not result.valid:
            print(f"invalid: {result.error}")
            raise SystemExit(1)
        document = result.document
        print(
            f"valid: {len(document.phases)} phases, "
            f"{sum(len(phase.actions) for phase in document.phases)} actions"
        )
        return

    document = _load(args.path)

    if args.command == "warnings":
        warnings = get_document_warnings(document)
        if not warnings:
            print("No warnings")
            return
        for phase in document.phases:
            for message in warnings.get(phase.id, []):
                print(f"[{phase.name}] {message}")
        return

    playback = compile_play_playback(document, args.speed, get_playback_settings())
    if args.command == "compile":
        _print_json(playback_to_response(playback, get_document_warnings(document)).model_dump(mode="json"))
        return

    try:
        frame = get_phase_frame(document, playback, args.phase, args.elapsed)
    except IndexError as exc:
        raise SystemExit(str(exc)) from exc
    _print_json(frame_to_response(args.phase, frame).model_dump(mode="json"))


if __name__ == "__main__":
    main()

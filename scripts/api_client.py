"""Lightweight REST client for the courtplay API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_document(path: Path) -> dict:
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid diagram JSON in {path}: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the courtplay REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("diagram", type=Path, nargs="?", help="Play diagram JSON")
    parser.add_argument("--speed", type=float, default=1.0, help="Playback speed multiplier")
    parser.add_argument("--phase", type=int, default=None, help="Fetch a single frame for this phase index")
    parser.add_argument("--elapsed", type=float, default=0.0, help="Milliseconds into the phase for --phase")
    parser.add_argument("--validate-only", action="store_true", help="Only report whether the diagram is valid")
    parser.add_argument("--list-templates", action="store_true", help="List starter templates and exit")
    parser.add_argument("--get-template", metavar="TEMPLATE_ID", help="Fetch a template document and exit")
    parser.add_argument("--export-path", type=Path, help="Destination path for a fetched template")
    args = parser.parse_args()

    if args.list_templates or args.get_template:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list_templates:
                resp = client.get("/templates")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get_template:
                resp = client.get(f"/templates/{args.get_template}")
                if resp.status_code == 404:
                    raise SystemExit(f"template {args.get_template} not found")
                resp.raise_for_status()
                document = resp.json()["document"]
                if args.export_path:
                    args.export_path.write_text(json.dumps(document, indent=2))
                    print(f"Template saved to {args.export_path}")
                else:
                    print(json.dumps(document, indent=2))
        return

    if args.diagram is None:
        raise SystemExit("a diagram file is required unless using --list-templates/--get-template")

    document = load_document(args.diagram)

    with httpx.Client(base_url=args.base_url) as client:
        resp = client.post("/validate", json=document)
        resp.raise_for_status()
        report = resp.json()
        print("Validation:", json.dumps(report, indent=2))

        if args.validate_only or not report["valid"]:
            return

        if args.phase is not None:
            resp = client.post(
                "/playback/frame",
                json={
                    "document": document,
                    "speed_multiplier": args.speed,
                    "phase_index": args.phase,
                    "elapsed_ms": args.elapsed,
                },
            )
            if resp.status_code == 400:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        resp = client.post("/playback", json={"document": document, "speed_multiplier": args.speed})
        resp.raise_for_status()
        payload = resp.json()
        for phase_id, messages in payload["warnings"].items():
            for message in messages:
                print(f"Warning [{phase_id}]: {message}")
        print(f"Received {len(payload['transitions'])} transitions, {payload['total_duration_ms']:.0f} ms total")
        if payload["transitions"]:
            print(json.dumps(payload["transitions"][0], indent=2))


if __name__ == "__main__":
    main()

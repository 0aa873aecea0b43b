import json
from pathlib import Path

import pytest

from courtplay.cli import main


def _write_play(tmp_path: Path, **phase_overrides) -> Path:
    first = {
        "id": "p1",
        "name": "Entry",
        "objects": [
            {"id": "o1", "type": "offense_player", "position": {"x": 500, "y": 700}},
            {"id": "o2", "type": "offense_player", "position": {"x": 800, "y": 200}},
        ],
        "actions": [
            {
                "id": "a1",
                "type": "pass",
                "from": {"x": 500, "y": 700},
                "to": {"x": 800, "y": 200},
                "fromObjectId": "o1",
                "toObjectId": "o2",
                "animation": {"trigger": "after_previous", "durationMs": 500},
            }
        ],
        "ballOwnerObjectId": "o1",
    }
    first.update(phase_overrides)
    second = {"id": "p2", "name": "Wing", "objects": first["objects"], "actions": []}
    path = tmp_path / "play.json"
    path.write_text(json.dumps({"schemaVersion": 1, "courtTemplate": "half_court", "phases": [first, second]}))
    return path


def test_validate_reports_valid_document(tmp_path, capsys):
    main(["validate", str(_write_play(tmp_path))])

    assert capsys.readouterr().out.startswith("valid: 2 phases, 1 actions")


def test_validate_exits_non_zero_for_invalid_document(tmp_path, capsys):
    path = _write_play(tmp_path, ballOwnerObjectId="ghost")

    with pytest.raises(SystemExit) as excinfo:
        main(["validate", str(path)])

    assert excinfo.value.code == 1
    assert "ghost" in capsys.readouterr().out


def test_compile_prints_timeline(tmp_path, capsys):
    main(["compile", str(_write_play(tmp_path)), "--speed", "2"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["speed_multiplier"] == 2.0
    assert payload["total_duration_ms"] == 250
    assert payload["phase_start_owners"] == ["o1", "o2"]


def test_compile_rejects_unsupported_speed(tmp_path):
    with pytest.raises(SystemExit):
        main(["compile", str(_write_play(tmp_path)), "--speed", "3"])


def test_frame_prints_positions(tmp_path, capsys):
    main(["frame", str(_write_play(tmp_path)), "--phase", "0", "--elapsed", "600"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["ball_owner_object_id"] == "o2"
    assert payload["positions"]["o1"] == {"x": 500.0, "y": 700.0}


def test_frame_out_of_range_phase_exits(tmp_path):
    with pytest.raises(SystemExit):
        main(["frame", str(_write_play(tmp_path)), "--phase", "4"])


def test_warnings_lists_pass_without_receiver(tmp_path, capsys):
    path = _write_play(
        tmp_path,
        actions=[
            {
                "id": "a1",
                "type": "pass",
                "from": {"x": 500, "y": 700},
                "to": {"x": 800, "y": 200},
                "fromObjectId": "o1",
            }
        ],
    )

    main(["warnings", str(path)])

    out = capsys.readouterr().out
    assert out.startswith("[Entry] Pass a1")


def test_warnings_on_clean_document(tmp_path, capsys):
    main(["warnings", str(_write_play(tmp_path))])

    assert capsys.readouterr().out.strip() == "No warnings"


def test_templates_list_and_export(tmp_path, capsys):
    main(["templates"])
    listing = capsys.readouterr().out
    assert "horns" in listing

    output = tmp_path / "horns.json"
    main(["templates", "--show", "horns", "--output", str(output)])

    assert json.loads(output.read_text())["phases"][0]["objects"][0]["id"] == "o1"


def test_templates_unknown_id_exits():
    with pytest.raises(SystemExit):
        main(["templates", "--show", "triangle"])

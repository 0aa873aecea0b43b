import pytest
from httpx import ASGITransport, AsyncClient

from courtplay.api import create_app


@pytest.fixture(scope="module")
async def client():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


def _sample_document() -> dict:
    objects = [
        {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
        {"id": "o2", "type": "offense_player", "label": "2", "position": {"x": 840, "y": 220}},
    ]
    return {
        "schemaVersion": 1,
        "courtTemplate": "half_court",
        "phases": [
            {
                "id": "p1",
                "name": "Entry",
                "objects": objects,
                "actions": [
                    {
                        "id": "pass-1",
                        "type": "pass",
                        "from": {"x": 500, "y": 760},
                        "to": {"x": 840, "y": 220},
                        "fromObjectId": "o1",
                        "toObjectId": "o2",
                        "animation": {"trigger": "after_previous", "durationMs": 500},
                    },
                    {
                        "id": "cut-1",
                        "type": "cut",
                        "from": {"x": 500, "y": 760},
                        "to": {"x": 500, "y": 400},
                        "fromObjectId": "o1",
                        "animation": {"trigger": "with_previous", "durationMs": 800},
                    },
                ],
                "ballOwnerObjectId": "o1",
            },
            {
                "id": "p2",
                "name": "Wing",
                "objects": [
                    {**objects[0], "position": {"x": 500, "y": 400}},
                    objects[1],
                ],
                "actions": [
                    {
                        "id": "pass-2",
                        "type": "pass",
                        "from": {"x": 840, "y": 220},
                        "to": {"x": 500, "y": 400},
                        "fromObjectId": "o2",
                    }
                ],
            },
        ],
    }


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_list_templates(client: AsyncClient):
    resp = await client.get("/templates")
    assert resp.status_code == 200
    templates = resp.json()
    assert templates[0]["template_id"] == "empty"
    assert {"horns", "zone_2_3"} <= {item["template_id"] for item in templates}


@pytest.mark.anyio
async def test_get_template(client: AsyncClient):
    resp = await client.get("/templates/zone_2_3")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["play_type"] == "defense"
    assert payload["document"]["schemaVersion"] == 1
    assert len(payload["document"]["phases"][0]["objects"]) == 5

    missing = await client.get("/templates/triangle")
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_validate_endpoint(client: AsyncClient):
    resp = await client.post("/validate", json=_sample_document())
    assert resp.json() == {"valid": True, "error": None}

    broken = _sample_document()
    broken["phases"][0]["actions"][0]["toObjectId"] = "ghost"
    resp = await client.post("/validate", json=broken)
    payload = resp.json()
    assert resp.status_code == 200
    assert payload["valid"] is False
    assert "ghost" in payload["error"]


@pytest.mark.anyio
async def test_playback_endpoint(client: AsyncClient):
    resp = await client.post("/playback", json={"document": _sample_document(), "speed_multiplier": 1.0})
    assert resp.status_code == 200
    payload = resp.json()

    assert payload["total_duration_ms"] == 800
    assert payload["phase_start_owners"] == ["o1", "o2"]
    transition = payload["transitions"][0]
    assert [(a["action_id"], a["start_ms"], a["end_ms"]) for a in transition["actions"]] == [
        ("pass-1", 0, 500),
        ("cut-1", 0, 800),
    ]
    assert transition["ownership_flips"][0]["to_object_id"] == "o2"
    assert list(payload["warnings"]) == ["p2"]


@pytest.mark.anyio
async def test_playback_rejects_invalid_document(client: AsyncClient):
    document = _sample_document()
    document["schemaVersion"] = 2
    resp = await client.post("/playback", json={"document": document})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unsupported play diagram schema version"


@pytest.mark.anyio
async def test_playback_rejects_unsupported_speed(client: AsyncClient):
    resp = await client.post("/playback", json={"document": _sample_document(), "speed_multiplier": 3})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_frame_endpoint(client: AsyncClient):
    request = {"document": _sample_document(), "phase_index": 0, "elapsed_ms": 400, "speed_multiplier": 2.0}
    resp = await client.post("/playback/frame", json=request)
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["ball_owner_object_id"] == "o2"
    assert payload["positions"]["o1"]["y"] == pytest.approx(400)
    assert payload["progress"] == 1

    request.update(elapsed_ms=100)
    payload = (await client.post("/playback/frame", json=request)).json()
    assert payload["positions"]["o1"]["y"] == pytest.approx(670)
    assert payload["ball_owner_object_id"] == "o1"


@pytest.mark.anyio
async def test_frame_endpoint_rejects_phase_out_of_range(client: AsyncClient):
    resp = await client.post("/playback/frame", json={"document": _sample_document(), "phase_index": 5})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_warnings_endpoint(client: AsyncClient):
    resp = await client.post("/warnings", json=_sample_document())
    assert resp.status_code == 200
    warnings = resp.json()
    assert list(warnings) == ["p2"]
    assert "pass-2" in warnings["p2"][0]

"""
Tests for the HTTP service.
"""

import json

import pytest
from fastapi.testclient import TestClient

from booster_components import server

from conftest import build_catalog, make_card


@pytest.fixture
def client():
    server.catalogs.add(build_catalog("API", 1))
    yield TestClient(server.app)
    server.catalogs.remove("API")
    server.session_house.sessions.clear()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_available_sets(client):
    assert "API" in client.get("/available_sets").json()["sets"]


def test_generate_pack(client):
    response = client.post("/generate_pack", json={"set_code": "API"})
    assert response.status_code == 200
    cards = response.json()["pack"]["cards"]
    assert len(cards) == 16
    assert cards[0]["isLeader"] is True
    assert cards[1]["isBase"] is True
    assert cards[15]["isFoil"] is True
    assert "X-Request-ID" in response.headers


def test_generate_pack_unknown_set(client):
    response = client.post("/generate_pack", json={"set_code": "NOPE"})
    assert response.status_code == 404
    assert "error" in response.json()


def test_generate_pack_missing_body(client):
    assert client.post("/generate_pack", json={}).status_code == 422


def test_generate_pod(client):
    response = client.post("/generate_pod", json={"set_code": "API", "pack_count": 3})
    assert response.status_code == 200
    assert len(response.json()["pod"]["packs"]) == 3


def test_generate_pod_default_size(client):
    response = client.post("/generate_pod", json={"set_code": "API"})
    assert len(response.json()["pod"]["packs"]) == 6


@pytest.mark.parametrize("pack_count", [0, 25])
def test_generate_pod_rejects_bad_sizes(client, pack_count):
    response = client.post("/generate_pod", json={"set_code": "API", "pack_count": pack_count})
    assert response.status_code == 422


class TestSessionEndpoints:
    """Create, use, inspect, reset and delete a session."""

    def test_session_lifecycle(self, client):
        session_id = client.post("/sessions").json()["session_id"]

        pack = client.post("/generate_pack", json={"set_code": "API", "session_id": session_id})
        assert pack.json()["session_id"] == session_id

        belts = client.get(f"/sessions/{session_id}/belts").json()
        assert belts["packs_generated"] == 1
        assert any(b["belt"] == "leader" for b in belts["belts"])

        reset = client.post("/sessions/reset", json={"session_id": session_id})
        assert reset.status_code == 200
        assert client.get(f"/sessions/{session_id}/belts").json()["belts"] == []

        assert client.delete(f"/sessions/{session_id}").status_code == 200
        assert client.get(f"/sessions/{session_id}/belts").status_code == 404

    def test_unknown_session(self, client):
        response = client.post("/generate_pack", json={"set_code": "API", "session_id": "missing"})
        assert response.status_code == 404
        assert client.delete("/sessions/missing").status_code == 404
        assert client.post("/sessions/reset", json={"session_id": "missing"}).status_code == 404

    def test_list_sessions(self, client):
        client.post("/sessions")
        assert len(client.get("/sessions").json()["sessions"]) == 1

    def test_least_recently_used_session_is_evicted(self, client, monkeypatch):
        monkeypatch.setattr(server.session_house, "max_sessions", 2)
        first = client.post("/sessions").json()["session_id"]
        second = client.post("/sessions").json()["session_id"]

        # using the first session makes the second one the oldest
        client.post("/generate_pack", json={"set_code": "API", "session_id": first})
        third = client.post("/sessions").json()["session_id"]

        assert len(client.get("/sessions").json()["sessions"]) == 2
        assert client.get(f"/sessions/{first}/belts").status_code == 200
        assert client.get(f"/sessions/{second}/belts").status_code == 404
        assert client.get(f"/sessions/{third}/belts").status_code == 200


class TestAdminEndpoints:
    """Catalog registration and log access."""

    def test_register_catalogs(self, client, tmp_path, monkeypatch):
        card = make_card("SHD", 1, "Han", "Common", "Leader")
        (tmp_path / "shd.json").write_text(json.dumps({
            "set_code": "SHD",
            "cards": [card.model_dump(mode="json", by_alias=True)]
        }))
        monkeypatch.setattr(server, "CATALOG_DIR", tmp_path)

        try:
            response = client.post("/admin/register_catalogs")
            assert response.status_code == 200
            assert response.json()["added"] == ["SHD"]
            assert "SHD" in client.get("/available_sets").json()["sets"]
        finally:
            server.catalogs.remove("SHD")

    def test_register_catalogs_missing_dir(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr(server, "CATALOG_DIR", tmp_path / "missing")
        assert client.post("/admin/register_catalogs").status_code == 500

    def test_log_tail_and_search(self, client, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_DIR", str(tmp_path))
        (tmp_path / "packs.log").write_text(
            json.dumps({"level": "INFO", "event": "pod_generated", "set_code": "API"}) + "\n"
            + json.dumps({"level": "DEBUG", "event": "pack_slot_upgraded", "set_code": "API"}) + "\n"
        )

        tail = client.get("/admin/logs/tail", params={"log_type": "packs", "lines": 1}).json()
        assert len(tail["lines"]) == 1

        found = client.get("/admin/logs/search", params={"log_type": "packs", "event": "pod_generated"}).json()
        assert found["count"] == 1

        available = client.get("/admin/logs/available").json()
        assert [log["name"] for log in available["logs"]] == ["packs"]

    def test_raw_log_rejects_unknown_type(self, client):
        assert client.get("/admin/logs/raw/secrets").status_code == 400

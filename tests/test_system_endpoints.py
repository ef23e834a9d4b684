import time

import pytest
from fastapi.testclient import TestClient

import main


def _auth():
    return {"Authorization": "Bearer test-api-key"}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("API_KEY", "test-api-key")
    monkeypatch.setenv("CACHE_CAPACITY", "3")
    with TestClient(main.app) as c:
        yield c


def test_cache_stats(client):
    cache = client.app.state.cache
    cache.set("a", 1)
    cache.set("b", 2)

    resp = client.get("/v1/system/cache/stats")

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["data"]["size"] == 2
    assert body["data"]["capacity"] == 3


def test_invalidate_requires_api_key(client):
    resp = client.post("/v1/system/cache/invalidate", json={"pattern": "user:42"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "KLIQ-401"

    resp = client.post(
        "/v1/system/cache/invalidate",
        json={"pattern": "user:42"},
        headers={"Authorization": "Bearer wrong"},
    )
    assert resp.status_code == 401


def test_invalidate_removes_matching_keys(client):
    cache = client.app.state.cache
    cache.set("user:42:posts", 1)
    cache.set("user:42:profile", 2)
    cache.set("user:7:posts", 3)

    resp = client.post("/v1/system/cache/invalidate", json={"pattern": "user:42"}, headers=_auth())

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "removed": 2}
    assert cache.keys() == ["user:7:posts"]


def test_invalidate_rejects_empty_pattern(client):
    resp = client.post("/v1/system/cache/invalidate", json={"pattern": ""}, headers=_auth())
    assert resp.status_code == 422


def test_sweep_endpoint(client):
    cache = client.app.state.cache
    cache.set("gone", 1, ttl_seconds=0.001)
    cache.set("kept", 2, ttl_seconds=60)
    time.sleep(0.01)

    resp = client.post("/v1/system/cache/sweep", headers=_auth())

    assert resp.status_code == 200
    assert resp.json()["removed"] == 1
    assert cache.keys() == ["kept"]


def test_missing_server_key(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    with TestClient(main.app) as c:
        resp = c.post("/v1/system/cache/sweep", headers=_auth())
    assert resp.status_code == 500
    assert "API_KEY" in resp.json()["detail"]

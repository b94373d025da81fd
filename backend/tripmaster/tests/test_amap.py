"""
Tests for the AMAP place-search proxy.
"""
import httpx
import pytest

from tripmaster.api.dependencies import get_http_client
from tripmaster.core.config import settings


@pytest.fixture
def upstream(app):
    """Route outbound calls to a MockTransport and record the requests."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"status": "1", "count": "1", "pois": [{"name": "Tower"}]})

    async def override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            yield client

    app.dependency_overrides[get_http_client] = override
    yield calls
    app.dependency_overrides.clear()


def test_place_search_forwards_query(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "AMAP_API_KEY", "test-key")
    monkeypatch.setattr(settings, "AMAP_API_URL", "https://amap.example.com/v3")

    response = client.get("/api/amap/place/text", params={"keywords": "tower", "city": "tokyo"})
    assert response.status_code == 200
    assert response.json()["pois"] == [{"name": "Tower"}]

    request = upstream[0]
    assert request.url.path == "/v3/place/text"
    assert request.url.params["key"] == "test-key"
    assert request.url.params["keywords"] == "tower"
    assert request.url.params["city"] == "tokyo"
    assert request.url.params["offset"] == "20"
    assert request.url.params["page"] == "1"
    assert request.url.params["extensions"] == "all"


def test_place_search_needs_no_token(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "AMAP_API_KEY", "test-key")
    response = client.get("/api/amap/place/text", params={"keywords": "park"})
    assert response.status_code == 200
    assert upstream[0].url.params["city"] == ""


def test_place_search_without_key(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "AMAP_API_KEY", "")
    response = client.get("/api/amap/place/text", params={"keywords": "tower"})
    assert response.status_code == 500
    assert response.json() == {"error": "AMAP API key not configured"}
    assert upstream == []


def test_place_search_upstream_failure(app, client, monkeypatch):
    monkeypatch.setattr(settings, "AMAP_API_KEY", "test-key")

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            yield client

    app.dependency_overrides[get_http_client] = override
    try:
        response = client.get("/api/amap/place/text", params={"keywords": "tower"})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch from AMAP API"}

def test_no_cache_headers_present(client):
    response = client.get("/api/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Cache-Control"] == "no-store"


def test_request_id_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_id_generated(client):
    response = client.get("/api/health")
    assert response.headers["X-Request-ID"]


def test_oversized_body_rejected(client, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "MAX_REQUEST_SIZE", 10)

    response = client.post(
        "/api/agent/data",
        content=b'{"agent_id": "h1", "hostname": "h1"}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 413


def test_cors_preflight_allowed(client):
    response = client.options(
        "/api/agent/data",
        headers={
            "Origin": "http://dashboard.local",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"

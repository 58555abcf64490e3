# tests/test_app.py
from notetodo import create_app
from notetodo.config import TestConfig
from notetodo.extensions import db, limiter

def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.get_json()["db"] == "up"

def test_readyz_without_redis(client):
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.get_json() == {"db": "up", "redis": "n/a", "status": "ok"}

def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/v1/nope")
    assert r.status_code == 404
    body = r.get_json()
    assert body["success"] is False
    assert body["error"]

def test_security_headers_and_request_id(client):
    r = client.get("/healthz", headers={"X-Request-Id": "req-123"})
    assert r.headers["X-Request-Id"] == "req-123"
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"

def test_trailing_slash_is_optional(client, register):
    headers, _ = register("alice")
    assert client.get("/api/v1/notes", headers=headers).status_code == 200
    assert client.get("/api/v1/notes/", headers=headers).status_code == 200

def test_openapi_document(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    doc = r.get_json()
    assert doc["openapi"] == "3.0.3"
    paths = doc["paths"]
    for path in ("/api/v1/auth/register", "/api/v1/notes/{id}",
                 "/api/v1/notebooks/{id}/notes/{note_id}", "/api/v1/weights/record/{id}",
                 "/api/v1/users/{id}"):
        assert path in paths
    assert "bearerAuth" in doc["components"]["securitySchemes"]
    assert "password" not in doc["components"]["schemas"]["Identity"]["properties"]

def test_unexpected_errors_do_not_leak_internals():
    app = create_app()

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internal detail")

    r = app.test_client().get("/boom")
    assert r.status_code == 500
    body = r.get_json()
    assert body == {"success": False, "error": "Internal server error.", "code": "internal_error"}

def test_rate_limit_uses_error_envelope(monkeypatch):
    monkeypatch.setattr(TestConfig, "RATELIMIT_ENABLED", True)
    monkeypatch.setattr(TestConfig, "RATELIMIT_AUTH_LOGIN", "2/minute")
    app = create_app()
    try:
        with app.app_context():
            db.create_all()
        client = app.test_client()
        creds = {"username": "nobody", "password": "whatever"}

        for _ in range(2):
            assert client.post("/api/v1/auth/login", json=creds).status_code == 401
        r = client.post("/api/v1/auth/login", json=creds)
        assert r.status_code == 429
        body = r.get_json()
        assert body["success"] is False
        assert body["code"] == "rate_limited"
    finally:
        # le limiter est partagé entre applications
        limiter.enabled = False

def test_root_liveness_text(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Zap is shifting !"


def test_security_headers(client):
    r = client.get("/health")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"


def test_health(client):
    body = client.get("/health").json()
    assert body["ok"] is True
    assert body["rate_limit"]["enabled"] is False


def test_health_store_ok(client):
    r = client.get("/health/store")
    assert r.status_code == 200
    assert r.json()["connect_ok"] is True
    assert set(r.json()["tables"]) == {"parcels", "payments", "users", "riders"}


def test_health_store_reports_failure(client, store):
    store.failures[("payments", "select")] = RuntimeError("relation does not exist")
    r = client.get("/health/store")
    assert r.status_code == 503
    assert r.json()["tables"]["payments"]["ok"] is False


def test_store_is_closed_and_released_on_shutdown(app):
    from fastapi.testclient import TestClient
    with TestClient(app):
        assert app.state.store is not None
    assert app.state.store is None

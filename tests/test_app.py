"""
Health, index, unknown routes and error envelope details.
"""


def test_health_reports_database_and_environment(client):
    r = client.get("/api/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    assert body["database"] == "up"
    assert body["environment"] == "test"
    assert "timestamp" in body


def test_liveness(client):
    r = client.get("/api/healthz")

    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_api_index_lists_endpoints(client):
    body = client.get("/api").json()

    assert body["status"] == "success"
    assert body["endpoints"]["reports"] == "/api/v1/reports"
    assert body["endpoints"]["reportStats"] == "/api/v1/reports/stats"


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/v1/nope")

    assert r.status_code == 404
    body = r.json()
    assert body["status"] == "error"
    assert body["message"] == "Route /api/v1/nope not found"
    assert r.headers["X-Request-ID"] == body["traceId"]


def test_request_id_is_propagated(client):
    r = client.get("/api/v1/reports", headers={"X-Request-ID": "abc123"})

    assert r.headers["X-Request-ID"] == "abc123"


def test_client_errors_carry_no_stack(client):
    r = client.get("/api/v1/reports/999")

    assert "stack" not in r.json()


def test_malformed_json_is_400(client):
    r = client.post(
        "/api/v1/reports",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 400
    assert r.json()["status"] == "error"

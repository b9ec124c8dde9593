def test_health(client):
    assert client.get("/health/").json()["status"] == "healthy"


def test_detailed_health_checks_database(client):
    body = client.get("/health/detailed").json()
    assert body["database"] == "healthy"
    assert body["overall"] == "healthy"


def test_correlation_id_is_echoed(client):
    response = client.get("/health/", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"

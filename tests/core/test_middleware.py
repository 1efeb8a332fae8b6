import logging



def test_request_id_is_always_generated(client):
    response = client.get("/api/health", headers={"X-Request-Id": "x" * 5000})
    request_id = response.headers["X-Request-Id"]
    assert request_id != "x" * 5000
    assert len(request_id) == 32


def test_request_ids_differ_per_request(client):
    first = client.get("/api/health").headers["X-Request-Id"]
    second = client.get("/api/health").headers["X-Request-Id"]
    assert first != second


def test_access_log_names_the_actor(client, admin_login, admin_headers, caplog):
    admin_id = admin_login["user"]["id"]
    with caplog.at_level(logging.INFO, logger="rbac_admin.requests"):
        response = client.get("/api/roles", headers=admin_headers)

    request_id = response.headers["X-Request-Id"]
    messages = [r.getMessage() for r in caplog.records if r.name == "rbac_admin.requests"]
    assert any(
        m.startswith(f"[{request_id}] actor={admin_id} GET /api/roles 200") for m in messages
    )


def test_denied_request_logged_as_warning(client, seeded_db, caplog):
    with caplog.at_level(logging.INFO, logger="rbac_admin.requests"):
        response = client.get("/api/roles")

    assert response.status_code == 401
    records = [r for r in caplog.records if r.name == "rbac_admin.requests"]
    assert records[-1].levelno == logging.WARNING
    assert "actor=- GET /api/roles 401" in records[-1].getMessage()

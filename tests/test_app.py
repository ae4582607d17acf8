# File: tests/test_app.py

from fastapi.testclient import TestClient

from auth_api.main import create_application


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_unknown_route_is_uniform_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": 404, "route": "/nope", "message": "Not Found"}


def test_unhandled_error_hides_internals(app):
    def boom():
        raise RuntimeError("database password is hunter2")

    app.add_api_route("/boom", boom)

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/boom")

    assert resp.status_code == 500
    assert resp.json() == {"error": 500, "message": "Server Error"}
    assert "hunter2" not in resp.text


def test_api_prefix(settings):
    app = create_application(settings.model_copy(update={"api_prefix": "/api/v1"}))
    with TestClient(app) as c:
        assert c.get("/api/v1/healthz").status_code == 200
        assert c.get("/healthz").status_code == 404


def test_cors_headers(client):
    resp = client.get("/healthz", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_request_log(client, caplog):
    with caplog.at_level("INFO", logger="auth_api.requests"):
        client.get("/secret")
    assert "GET /secret 403" in caplog.text


def test_logging_config_filters_health_checks():
    import logging

    from auth_api.core.logging_config import HealthCheckFilter, get_logging_config

    config = get_logging_config("DEBUG")
    assert config["loggers"]["auth_api"]["level"] == "DEBUG"

    def record(msg):
        return logging.LogRecord("auth_api.requests", logging.INFO, __file__, 1, msg, None, None)

    f = HealthCheckFilter()
    assert f.filter(record("GET /healthz 200 0.3ms")) is False
    assert f.filter(record("GET /users 200 1.2ms")) is True


def test_factory_configures_logging(settings):
    import logging

    for name in ("auth_api", "auth_api.requests"):
        logging.getLogger(name).setLevel(logging.NOTSET)
    logging.getLogger("auth_api").handlers.clear()

    create_application(settings.model_copy(update={"log_level": "DEBUG"}))

    assert logging.getLogger("auth_api").handlers
    assert logging.getLogger("auth_api").level == logging.DEBUG
    assert logging.getLogger("auth_api.requests").isEnabledFor(logging.INFO)

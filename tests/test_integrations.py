"""
Tests — integrations
--------------------
Covers: FastAPI request logging middleware (via TestClient) and the
`sblogger` command line (via Typer's CliRunner).
"""

import io
import json

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from sblogger.api.middleware import TRACE_HEADER, install_request_logging
from sblogger.core.config import Settings, get_settings
from sblogger.core.logging import build_logger
from sblogger.main import app as cli_app


def records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


# ── Middleware ────────────────────────────────────────────────────────────────

@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def client(stream):
    settings = Settings(_env_file=None, service_name="api", log_level="info", environment="production")
    logger = build_logger(settings, stream=stream, hostname="test-host")

    app = FastAPI()
    install_request_logging(app, logger)

    @app.get("/ping")
    async def ping(request: Request):
        request.state.logger.info("handling ping", {"user": "u1"})
        return {"trace_id": request.state.trace_id}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return TestClient(app)


class TestRequestLogging:
    def test_incoming_trace_id_propagated(self, client, stream):
        response = client.get("/ping", headers={TRACE_HEADER: "abc"})

        assert response.status_code == 200
        assert response.headers[TRACE_HEADER] == "abc"

        received, handled, completed = records(stream)
        assert [r["msg"] for r in (received, handled, completed)] == [
            "request_received", "handling ping", "request_completed",
        ]
        for record in (received, handled, completed):
            assert record["meta_data"]["trace_id"] == "abc"
            assert record["meta_data"]["stack"] == "NODE"
        assert handled["meta_data"]["user"] == "u1"
        assert completed["meta_data"]["status_code"] == 200
        assert completed["meta_data"]["path"] == "/ping"
        assert completed["meta_data"]["latency_ms"] >= 0

    def test_trace_id_generated_when_absent(self, client, stream):
        response = client.get("/ping")

        trace_id = response.json()["trace_id"]
        assert response.headers[TRACE_HEADER] == trace_id
        assert {r["meta_data"]["trace_id"] for r in records(stream)} == {trace_id}

    def test_handler_exception_logged_and_reraised(self, client, stream):
        with pytest.raises(RuntimeError):
            client.get("/boom")

        failed = records(stream)[-1]
        assert failed["msg"] == "request_failed"
        assert failed["level"] == 50
        assert failed["meta_data"]["error"]["name"] == "RuntimeError"
        assert failed["meta_data"]["error"]["message"] == "kaboom"


# ── CLI ───────────────────────────────────────────────────────────────────────

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch):
    for name in ("CI_PROJECT_NAME", "NODE_ENV", "LOG_INCLUDE_LEVEL_NAME", "TRACE_ID"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SERVICE_NAME", "cli-svc")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestCli:
    def test_emit_writes_one_record(self, cli_env):
        result = runner.invoke(cli_app, [
            "emit", "--trace-id", "123", "--stack", "NODE",
            "Hello info", "wret=wert", "count=3",
        ])

        assert result.exit_code == 0, result.output
        record = json.loads(result.stdout.strip())
        assert record["name"] == "cli-svc"
        assert record["level"] == 30
        assert record["msg"] == "Hello info"
        assert record["meta_data"] == {
            "trace_id": "123", "stack": "NODE", "wret": "wert", "count": 3,
        }

    def test_emit_level_option(self, cli_env):
        result = runner.invoke(cli_app, [
            "emit", "--level", "error", "--trace-id", "123", "Hello error",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout.strip())["level"] == 50

    def test_below_threshold_emits_nothing(self, cli_env):
        cli_env.setenv("LOG_LEVEL", "error")
        get_settings.cache_clear()

        result = runner.invoke(cli_app, [
            "emit", "--level", "debug", "--trace-id", "123", "quiet",
        ])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_invalid_stack_exits_with_contract_code(self, cli_env):
        result = runner.invoke(cli_app, [
            "emit", "--trace-id", "123", "--stack", "PYTHON", "Hello",
        ])
        assert result.exit_code == 2
        assert "contract_violation" in result.output

    def test_malformed_field_rejected(self, cli_env):
        result = runner.invoke(cli_app, [
            "emit", "--trace-id", "123", "Hello", "novalue",
        ])
        assert result.exit_code == 2

    def test_levels_table(self, cli_env):
        result = runner.invoke(cli_app, ["levels"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["error\t50", "warn\t40", "info\t30", "debug\t20"]

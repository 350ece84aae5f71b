"""Tests for app configuration and structured logging."""

from __future__ import annotations

import json
import logging

import pytest

from app.config import Settings
from app.core.logging import JSONFormatter, request_id_var, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.app_name == "WattPlan"
        assert settings.default_co2_preset == "default"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.setenv("DEFAULT_CO2_PRESET", "behg")
        settings = Settings()
        assert settings.log_json is True
        assert settings.default_co2_preset == "behg"


class TestJSONFormatter:
    def test_calculation_extras(self):
        record = logging.makeLogRecord(
            {
                "name": "app.api.v1.subsidy",
                "levelno": logging.INFO,
                "levelname": "INFO",
                "msg": "Rejected funding request: %s",
                "args": ("invalid_total_costs",),
                "calculation": "subsidy",
                "reason": "invalid_total_costs",
            }
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "app.api.v1.subsidy"
        assert entry["message"] == "Rejected funding request: invalid_total_costs"
        assert entry["calculation"] == "subsidy"
        assert entry["reason"] == "invalid_total_costs"
        assert "status_code" not in entry

    def test_request_id_injected(self):
        token = request_id_var.set("abc12345")
        try:
            record = logging.makeLogRecord({"msg": "hello", "levelname": "INFO"})
            entry = json.loads(JSONFormatter().format(record))
        finally:
            request_id_var.reset(token)
        assert entry["request_id"] == "abc12345"


class TestSetupLogging:
    def test_json_handler_installed(self, restore_root_logger):
        setup_logging(json_format=True, debug=True)
        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("engine").level == logging.DEBUG

    def test_plain_handler(self, restore_root_logger):
        setup_logging(json_format=False, debug=False)
        assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("engine").level == logging.INFO

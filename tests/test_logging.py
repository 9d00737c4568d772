"""
Tests for the JSON log formatter and root logger setup.
"""

import json
import logging

import pytest

from jobly.core.logging_config import CustomJsonFormatter, setup_logging


def make_record(level=logging.INFO, msg="Created company c1"):
    return logging.LogRecord(
        name="jobly.crud.company", level=level, pathname=__file__, lineno=42,
        msg=msg, args=(), exc_info=None, func="create",
    )


class TestCustomJsonFormatter:

    def test_info_record(self):
        formatter = CustomJsonFormatter('%(message)s', service_name="Jobly API")

        data = json.loads(formatter.format(make_record()))

        assert data["message"] == "Created company c1"
        assert data["service"] == "Jobly API"
        assert data["level"] == "INFO"
        assert data["logger"] == "jobly.crud.company"
        assert data["timestamp"].endswith("Z")
        assert "location" not in data

    def test_warning_has_location(self):
        formatter = CustomJsonFormatter('%(message)s')

        data = json.loads(formatter.format(make_record(logging.WARNING, "Failed login attempt for u1")))

        assert data["service"] == "jobly"
        assert data["location"].endswith("create:42")


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_handler(self):
        setup_logging("DEBUG", json_logs=True, service_name="Jobly API")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert root.handlers[0].formatter.service_name == "Jobly API"

    def test_plain_handler_and_quiet_loggers(self):
        setup_logging("INFO", json_logs=False)

        assert not isinstance(logging.getLogger().handlers[0].formatter, CustomJsonFormatter)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("passlib").level == logging.ERROR

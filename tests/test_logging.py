"""
Tests for structured logging.
"""

import json
import logging

from job_tracker.core.logging_config import CustomJsonFormatter, request_log_extra


class TestJsonFormatter:
    """Tests for the JSON log format"""

    def test_request_fields_become_top_level_keys(self):
        formatter = CustomJsonFormatter('%(message)s', service_name="job-tracker")
        record = logging.makeLogRecord({
            "name": "main",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "GET /applicants - 200",
            **request_log_extra("GET", "/applicants", 200, 3.14159, "10.0.0.7"),
        })

        line = json.loads(formatter.format(record))

        assert line["service"] == "job-tracker"
        assert line["path"] == "/applicants"
        assert line["http_method"] == "GET"
        assert line["status_code"] == 200
        assert line["duration_ms"] == 3.1
        assert line["client_ip"] == "10.0.0.7"
        assert line["level"] == "INFO"
        assert "pathname" not in line

    def test_warnings_carry_source_location(self):
        formatter = CustomJsonFormatter('%(message)s')
        record = logging.makeLogRecord({
            "levelno": logging.WARNING,
            "levelname": "WARNING",
            "msg": "Redis connection failed",
            "lineno": 42,
        })

        line = json.loads(formatter.format(record))

        assert line["line"] == 42
        assert "service" not in line


class TestRequestLogging:
    """Tests for the access log middleware"""

    def test_request_logged_with_path_and_status(self, client, caplog):
        caplog.set_level(logging.INFO, logger="main")

        client.get("/applicants/99999")

        access = [r for r in caplog.records if getattr(r, "path", None) == "/applicants/99999"]
        assert len(access) == 1
        assert access[0].status_code == 404
        assert access[0].http_method == "GET"

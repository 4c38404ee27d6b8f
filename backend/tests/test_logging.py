"""
Tests for structured logging helpers and the correlation filter.
"""

import json
import logging

from shared.config.logging import ConsoleFormatter, JsonFormatter, audit_auth_event, get_logger, mask_email
from shared.infrastructure.correlation import CorrelationIdFilter, resolve_request_id


def _record(logger_name: str = "store_api.test", **data) -> logging.LogRecord:
    record = logging.LogRecord(logger_name, logging.INFO, __file__, 1, "Product created", (), None)
    record.extra_data = data or None
    CorrelationIdFilter().filter(record)
    return record


class TestMaskEmail:

    def test_keeps_two_characters(self):
        assert mask_email("marie@example.com") == "ma***@example.com"

    def test_short_local_part(self):
        assert mask_email("jo@example.com") == "j***@example.com"

    def test_missing_or_invalid(self):
        assert mask_email(None) == "<no-email>"
        assert mask_email("not-an-email") == "***@invalid"


class TestStructuredLogger:

    def test_keyword_arguments_become_record_data(self, caplog):
        logger = get_logger("store_api.test")

        with caplog.at_level(logging.INFO, logger="store_api.test"):
            logger.info("Product created", product_id="p1")

        assert caplog.records[-1].extra_data == {"product_id": "p1"}

    def test_audit_events_mask_email_and_warn_on_failure(self, caplog):
        with caplog.at_level(logging.INFO, logger="security.audit"):
            audit_auth_event("LOGIN", email="marie@example.com", success=False, reason="bad password")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.extra_data["email"] == "ma***@example.com"
        assert record.extra_data["reason"] == "bad password"


class TestFormatters:

    def test_json_line_has_data_and_no_request_id_outside_requests(self):
        entry = json.loads(JsonFormatter().format(_record(product_id="p1")))

        assert entry["message"] == "Product created"
        assert entry["data"] == {"product_id": "p1"}
        assert "request_id" not in entry

    def test_console_line_lists_data(self):
        line = ConsoleFormatter().format(_record(product_id="p1"))

        assert "Product created" in line
        assert "product_id=p1" in line


class TestRequestId:

    def test_well_formed_client_id_is_kept(self):
        assert resolve_request_id("req-123") == "req-123"

    def test_oversized_or_unprintable_ids_are_replaced(self):
        assert resolve_request_id("x" * 65) != "x" * 65
        assert resolve_request_id("a\nb") != "a\nb"
        assert len(resolve_request_id(None)) == 32

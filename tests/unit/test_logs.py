"""Tests for log helper functions."""

import logging
import sys

import pytest

from countryinfo.core.logs import (
    entry_from_record,
    level_for_status,
    log_exception,
    record_extras,
    record_labels,
)

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


def _record(msg: str = "hello", level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="countryinfo.test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLevelForStatus:
    @pytest.mark.parametrize(
        ("status", "level"),
        [
            (200, logging.INFO),
            (299, logging.INFO),
            (404, logging.WARNING),
            (500, logging.ERROR),
            (504, logging.ERROR),
            (302, logging.INFO),
        ],
    )
    def test_maps_status_to_level(self, status: int, level: int) -> None:
        assert level_for_status(status) == level


class TestRecordHelpers:
    def test_extras_exclude_standard_attributes_and_labels(self) -> None:
        record = _record(country="japan", labels={"route": "/x"})
        assert record_extras(record) == {"country": "japan"}

    def test_labels_are_stringified(self) -> None:
        record = _record(labels={"status_code": 404})
        assert record_labels(record) == {"status_code": "404"}

    def test_missing_labels(self) -> None:
        assert record_labels(_record()) == {}


class TestEntryFromRecord:
    def test_copies_message_level_and_extras(self) -> None:
        entry = entry_from_record(_record("done", logging.WARNING, country="japan"))
        assert entry.message == "done"
        assert entry.level == "warning"
        assert entry.attributes == {"country": "japan"}

    def test_flattens_exception_info(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        entry = entry_from_record(record)
        assert entry.attributes["error"] == "boom"
        assert "ValueError: boom" in str(entry.attributes["stack"])


class TestLogException:
    def test_logs_traceback_with_attributes(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("countryinfo.test.exceptions")
        try:
            raise RuntimeError("kaput")
        except RuntimeError:
            with caplog.at_level(logging.ERROR, logger="countryinfo.test.exceptions"):
                log_exception(logger, "Something failed", route="/api/currency")

        [record] = caplog.records
        assert record.message == "Something failed"
        assert record.route == "/api/currency"
        assert record.exc_info is not None
        assert record.exc_info[0] is RuntimeError

# tests/utils/test_logging.py
import logging

import pytest

from app.config import settings
from app.utils.logging import BlueprintLogger, RESERVED_ATTRS, api_logger, get_logger


def test_sanitize_extra_prefixes_reserved_keys():
    sanitized = api_logger.sanitize_extra({"name": "Acme", "module": "x", "project_id": 1})

    assert sanitized == {"extra_name": "Acme", "extra_module": "x", "project_id": 1}
    assert api_logger.sanitize_extra(None) is None


def test_reserved_attrs_cover_log_record_fields():
    assert {"name", "msg", "args", "module", "lineno", "message", "asctime"} <= RESERVED_ATTRS
    assert "project_id" not in RESERVED_ATTRS


def test_reserved_extra_does_not_break_logging(caplog):
    logger = BlueprintLogger("test-component")

    with caplog.at_level(logging.INFO, logger="blueprint.test-component"):
        logger.info("Creating project", extra={"name": "Acme", "message": "clash"})

    record = caplog.records[-1]
    assert record.getMessage() == "Creating project"
    assert record.extra_name == "Acme"
    assert record.extra_message == "clash"


def test_records_point_at_the_calling_module(caplog):
    logger = get_logger("test-caller")

    with caplog.at_level(logging.INFO, logger="blueprint.test-caller"):
        logger.warning("Project not found", extra={"project_id": 3})

    assert caplog.records[-1].module == "test_logging"


def test_timed_adds_execution_time(caplog):
    logger = get_logger("test-timed")

    with caplog.at_level(logging.INFO, logger="blueprint.test-timed"):
        with logger.timed("Document generated", extra={"project_id": 1}) as fields:
            fields["document_id"] = 7

    record = caplog.records[-1]
    assert record.getMessage() == "Document generated"
    assert record.project_id == 1
    assert record.document_id == 7
    assert record.execution_time_ms >= 0


def test_timed_logs_nothing_when_block_raises(caplog):
    logger = get_logger("test-timed-error")

    with caplog.at_level(logging.INFO, logger="blueprint.test-timed-error"):
        with pytest.raises(RuntimeError):
            with logger.timed("Document generated"):
                raise RuntimeError("storage down")

    assert not [r for r in caplog.records if r.getMessage() == "Document generated"]


def test_get_logger_reuses_instances_and_handlers():
    first = get_logger("test-handlers")
    second = get_logger("test-handlers")
    fresh = BlueprintLogger("test-handlers")

    assert first is second
    assert fresh.logger is first.logger
    assert len(fresh.logger.handlers) == 2


def test_component_log_file_lives_under_logs_path():
    logger = BlueprintLogger("test-file")

    assert logger.log_file == settings.LOGS_PATH / "test-file.log"


def test_level_follows_argument():
    logger = BlueprintLogger("test-level", level="warning")

    assert logger.logger.level == logging.WARNING

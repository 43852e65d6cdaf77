import json
import logging

import pytest

from suhbat.utils.logging_config import JSONFormatter, log_interview_event, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_single_console_handler(restore_root_logger):
    setup_logging(level="debug", json_format=True)

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    handler = restore_root_logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert not isinstance(handler, logging.FileHandler)
    assert isinstance(handler.formatter, JSONFormatter)


def test_json_formatter_carries_extra_fields(caplog):
    logger = logging.getLogger("suhbat.tests")
    with caplog.at_level(logging.INFO, logger="suhbat.tests"):
        log_interview_event(logger, profession="frontend", event_type="started")

    payload = json.loads(JSONFormatter().format(caplog.records[-1]))
    assert payload["message"] == "Interview event: started"
    assert payload["profession"] == "frontend"
    assert payload["event"] == "interview_event"

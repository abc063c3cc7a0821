import logging

import pytest
import structlog

from utils.logging_utils import build_renderer, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_resolve_level_accepts_names_and_numbers():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.WARNING) == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_plain_renderer_has_no_colour_codes():
    renderer = build_renderer("plain")
    line = renderer(None, "info", {"event": "Data provider saved", "files": 3})
    assert "Data provider saved" in line
    assert "\x1b[" not in line


def test_json_renderer_emits_json():
    renderer = build_renderer("JSON")
    assert renderer(None, "info", {"event": "saved", "files": 3}) == '{"event": "saved", "files": 3}'


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        build_renderer("xml")
    with pytest.raises(ValueError):
        setup_logging("info", log_format="xml")


def test_setup_logging_configures_processor_chain():
    setup_logging("debug", log_format="json")
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert structlog.processors.format_exc_info in processors

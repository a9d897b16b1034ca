"""
Tests for bundlepack logging setup.
"""

import json
import logging
from io import StringIO

from bundlepack.logger import configure_logging


def test_text_format():
    output = StringIO()
    configure_logging(level="info", fmt="text", stream=output)

    logging.getLogger("bundlepack.assembler").warning("Sources not included in upload bundle.")
    logging.getLogger("bundlepack.resolver").debug("hidden")

    assert output.getvalue() == "[WARNING] Sources not included in upload bundle.\n"


def test_json_format_includes_extra_fields():
    output = StringIO()
    configure_logging(level="debug", fmt="json", stream=output)

    logging.getLogger("bundlepack.pipeline").info("Resolved %s", "com.x:foo:1.0", extra={"stage": "locate"})

    entry = json.loads(output.getvalue().strip())
    assert entry["level"] == "info"
    assert entry["logger"] == "bundlepack.pipeline"
    assert entry["message"] == "Resolved com.x:foo:1.0"
    assert entry["stage"] == "locate"
    assert "timestamp" in entry


def test_reconfiguring_replaces_handler():
    first = StringIO()
    second = StringIO()
    configure_logging(stream=first)
    logger = configure_logging(level="debug", stream=second)

    logging.getLogger("bundlepack.editor").info("once")

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert first.getvalue() == ""
    assert second.getvalue() == "[INFO] once\n"

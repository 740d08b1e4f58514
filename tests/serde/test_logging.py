from __future__ import annotations

import io
import json
import logging

import pytest

from alge.serde.logging import ALGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    alge = logging.getLogger(ALGE_LOGGER)
    root_handlers, root_level = list(root.handlers), root.level
    alge_handlers, alge_level, propagate = list(alge.handlers), alge.level, alge.propagate
    yield
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    alge.handlers[:] = alge_handlers
    alge.setLevel(alge_level)
    alge.propagate = propagate


def test_silent_until_configured(capsys) -> None:
    alge = logging.getLogger(ALGE_LOGGER)
    assert any(isinstance(h, logging.NullHandler) for h in alge.handlers)

    logging.getLogger("alge.serde.engine").warning("nobody is listening")
    assert capsys.readouterr().err == ""


def test_verbose_enables_debug_for_alge_only() -> None:
    root_level = logging.getLogger().level
    configure_logging(verbose=True)
    assert logging.getLogger(ALGE_LOGGER).level == logging.DEBUG
    assert logging.getLogger().level == root_level


def test_root_handlers_are_left_alone() -> None:
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    before = list(root.handlers)

    configure_logging()

    assert root.handlers == before
    assert logging.getLogger(ALGE_LOGGER).level == logging.WARNING
    assert logging.getLogger(ALGE_LOGGER).propagate is False


def test_reconfigure_replaces_handler() -> None:
    first = configure_logging()
    second = configure_logging(verbose=True)

    handlers = logging.getLogger(ALGE_LOGGER).handlers
    assert second in handlers
    assert first not in handlers
    assert sum(isinstance(h, logging.StreamHandler) for h in handlers) == 1


def test_console_output_to_given_stream() -> None:
    buf = io.StringIO()
    configure_logging(stream=buf)
    logging.getLogger("alge.test").warning("union member rejected")
    logging.getLogger("alge.test").debug("hidden")

    text = buf.getvalue()
    assert "union member rejected" in text
    assert "alge.test" in text
    assert "hidden" not in text
    assert "\x1b[" not in text


def test_json_lines_on_stderr(capsys) -> None:
    configure_logging(log_json=True)
    logging.getLogger("alge.test").warning("union member rejected")

    err = capsys.readouterr().err.strip().splitlines()
    record = json.loads(err[-1])
    assert record["event"] == "union member rejected"
    assert record["level"] == "warning"
    assert record["logger"] == "alge.test"
    assert "timestamp" in record

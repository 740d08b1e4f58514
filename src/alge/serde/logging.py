"""structlog rendering for the ``alge`` logger hierarchy.

alge is a library first: importing alge.serde only attaches a NullHandler to the
``alge`` logger, so nothing is printed unless the embedding application routes
those records itself. ``configure_logging`` is the opt-in used by the CLI.

Two output modes:
- Human (default): console renderer, colored when the stream is a TTY
- JSON (--log-json): one JSON object per line

Modules log through ``logging.getLogger(__name__)``. The handler installed here
renders those stdlib records through structlog's ProcessorFormatter; the global
structlog configuration and the root logger are never touched.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

__all__ = ["ALGE_LOGGER", "configure_logging"]

ALGE_LOGGER = "alge"

_HANDLER_NAME = "alge.structlog"

# Applied to every stdlib record before rendering.
_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _renderer_chain(log_json: bool, stream: IO[str]) -> list[structlog.types.Processor]:
    if log_json:
        return [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    isatty = getattr(stream, "isatty", None)
    colors = bool(isatty and isatty())
    return [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(colors=colors),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Send ``alge`` log records to one structlog-rendered stream handler.

    Only the ``alge`` logger changes: its level, its handler and ``propagate``
    (set to False so records are not printed twice by an application's root
    handlers). Calling again replaces the handler from the previous call.

    Args:
        verbose: DEBUG for the ``alge`` hierarchy (union/enum member rejections,
            failed conversions). When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
        stream: Output stream; resolved to ``sys.stderr`` at call time when None.

    Returns:
        logging.Handler: The installed handler.
    """
    out = stream if stream is not None else sys.stderr

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=_renderer_chain(log_json, out),
    )
    handler = logging.StreamHandler(out)
    handler.setFormatter(formatter)
    handler.set_name(_HANDLER_NAME)

    logger = logging.getLogger(ALGE_LOGGER)
    for previous in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(previous)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return handler

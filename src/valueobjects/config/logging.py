"""structlog output for the ``valueobjects`` logger.

Library modules log through stdlib ``logging.getLogger(__name__)`` and stay
silent until a host opts in. :func:`configure_logging` attaches one
structlog :class:`~structlog.stdlib.ProcessorFormatter` handler to the
``valueobjects`` logger only; the root logger and any global structlog
configuration belong to the host and are left alone.

Unset arguments fall back to the ``[logging]`` settings section, so
``VALUEOBJECTS_LOGGING__VERBOSE=true`` or a TOML ``[logging]`` table turns
debug output on without code changes.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from valueobjects.config.settings import get_settings

LOGGER_NAME = "valueobjects"
HANDLER_NAME = "valueobjects.structlog"


def _build_formatter(log_json: bool, stream: TextIO) -> logging.Formatter:
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route ``valueobjects`` log records through structlog.

    Calling it again replaces the handler installed by the previous call.

    Args:
        verbose: DEBUG when True, WARNING+ when False. None reads
            ``settings.logging.verbose``.
        log_json: JSON lines instead of console output. None reads
            ``settings.logging.log_json``.
        stream: Destination; defaults to ``sys.stderr`` at call time.

    Returns:
        The installed handler.
    """
    section = get_settings().logging
    if verbose is None:
        verbose = section.verbose
    if log_json is None:
        log_json = section.log_json
    stream = stream or sys.stderr

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(_build_formatter(log_json, stream))

    lib_logger = logging.getLogger(LOGGER_NAME)
    _remove_handler(lib_logger)
    lib_logger.addHandler(handler)
    lib_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    lib_logger.propagate = False
    return handler


def reset_logging() -> None:
    """Undo :func:`configure_logging`; records propagate to the host again."""
    lib_logger = logging.getLogger(LOGGER_NAME)
    _remove_handler(lib_logger)
    lib_logger.setLevel(logging.NOTSET)
    lib_logger.propagate = True


def _remove_handler(lib_logger: logging.Logger) -> None:
    for existing in list(lib_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            lib_logger.removeHandler(existing)

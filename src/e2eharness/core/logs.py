from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from e2eharness.core import config as config_core


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Looked up per logger so a swapped sys.stderr (pytest capture) is honoured.
    return structlog.PrintLogger(sys.stderr)


def configure_logging(*, verbose: bool | None = None, json_output: bool = False) -> None:
    """Route structlog output to stderr. Debug events only show when verbose.

    stdout stays free for the CLI's JSON envelopes.
    """
    if verbose is None:
        verbose = config_core.is_verbose()
    level = logging.DEBUG if verbose else logging.INFO
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str, **context: Any) -> Any:
    # Lazy proxy: resolves against whatever configuration is active at call time.
    # The name goes to the logger factory positionally; `logger` is taken by wrap_logger.
    return structlog.get_logger(name, logger_name=name, **context)

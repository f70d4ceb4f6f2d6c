"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import os
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "cli"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED_PROFILE: LogProfile | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _build_cli_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def _filter_entry(entry: str) -> tuple[str, str | bool]:
    module, _, level = entry.partition("=")
    level = level.strip()
    return module.strip(), False if level == "false" else level.upper()


def parse_log_filter(value: str | None = None) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse IMPEVAL_LOG_FILTER into a global level and per-module loguru filter.

    A bare entry sets the global level, ``module=level`` sets one module and
    ``module=false`` silences it: ``"debug,impeval.semantics=false"``.
    """
    raw = value if value is not None else os.getenv("IMPEVAL_LOG_FILTER", "info")
    global_level = "info"
    modules: dict[str | None, str | int | bool] = {}
    for entry in filter(None, (part.strip() for part in raw.lower().split(","))):
        if "=" not in entry:
            global_level = entry
            continue
        module, level = _filter_entry(entry)
        modules[module] = level
    return global_level, modules


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(handler, InterceptHandler) for handler in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Install the sink for a profile and switch on impeval's own loggers.

    The package disables its loggers on import so library callers see no
    output; only this entrypoint turns them back on. Levels come from
    IMPEVAL_LOG_FILTER, see parse_log_filter().
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter()
    sink, fmt = (_build_cli_handler(), "{message}") if profile == "cli" else (sys.stderr, _DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sink,
        level=global_level.upper(),
        format=fmt,
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )
    logger.enable("impeval")
    _setup_stdlib_intercept()

    _CONFIGURED_PROFILE = profile

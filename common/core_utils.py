#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides the logging setup shared by the init steps:
- A symbol-decorated text formatter for interactive/`docker logs` output.
- A JSON formatter for log collectors.
- Routing of errors to stderr and everything else to stdout.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from stirling_init.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = (
    "{log_prefix}[%(asctime)s] %(levelname)s %(symbol)s %(message)s"
)
SIMPLE_LOG_FORMAT_NO_PREFIX = "[%(asctime)s] %(levelname)s %(symbol)s %(message)s"

# LogRecord attributes that are not user-supplied "extra" fields.
_RESERVED_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "symbol",
        "message",
        "asctime",
    }
)


class SymbolFormatter(logging.Formatter):
    """
    A custom formatter that adds symbols to log messages based on the log level.
    """

    def __init__(
        self, fmt=None, datefmt=None, style="%", validate=True, symbols=None
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record):
        if record.levelno == logging.DEBUG:
            record.symbol = self.symbols.get("debug", "🐛")
        elif record.levelno == logging.INFO:
            record.symbol = self.symbols.get("info", "ℹ️")
        elif record.levelno == logging.WARNING:
            record.symbol = self.symbols.get("warning", "⚠️")
        elif record.levelno == logging.ERROR:
            record.symbol = self.symbols.get("error", "❌")
        elif record.levelno == logging.CRITICAL:
            record.symbol = self.symbols.get("critical", "🔥")
        else:
            record.symbol = ""

        return super().format(record)


class JSONFormatter(logging.Formatter):
    """
    Formats log records as one JSON object per line: timestamp (ISO, UTC),
    level, service, logger, message, plus exception text and any extra
    fields attached to the record.
    """

    def __init__(self, service_name: str = "stirling-init"):
        super().__init__()
        self.service_name = service_name
        self.hostname = os.environ.get("HOSTNAME", "unknown")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "hostname": self.hostname,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class MaxLevelFilter(logging.Filter):
    """Lets through only records strictly below ``max_level``."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def resolve_log_level(log_level: Union[int, str, None]) -> int:
    """Turns a level name or number into a logging level, defaulting to INFO."""
    if isinstance(log_level, int):
        return log_level
    if not log_level:
        return logging.INFO
    numeric_level = getattr(logging, str(log_level).strip().upper(), None)
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    json_output: Optional[bool] = None,
    symbols: Optional[Dict[str, str]] = None,
    service_name: str = "stirling-init",
) -> None:
    """
    Configures the root logger.

    Console output is split: records below ERROR go to stdout, ERROR and
    above go to stderr. A log file, when given, receives every record in
    JSON.

    Parameters:
    log_level: Union[int, str]
        Level number or name. Unknown names fall back to INFO.
    log_file: Optional[str]
        Append-mode log file. A file that cannot be opened is reported on
        stderr and otherwise ignored.
    log_to_console: bool
        Attach the stdout/stderr handlers.
    log_format_str: Optional[str]
        Custom text format. May contain a ``{log_prefix}`` placeholder;
        otherwise the prefix is prepended.
    log_prefix: Optional[str]
        Prefix for every text line.
    json_output: Optional[bool]
        Force JSON (True) or text (False) on the console. When None, JSON is
        used if running under Kubernetes.
    symbols: Optional[Dict[str, str]]
        Level symbols for the text formatter.
    service_name: str
        Service name written into JSON records.
    """
    numeric_level = resolve_log_level(log_level)
    if json_output is None:
        json_output = bool(os.environ.get("KUBERNETES_SERVICE_HOST"))

    actual_prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )
    final_format_str: str
    if log_format_str:
        if "{log_prefix}" in log_format_str:
            final_format_str = log_format_str.format(log_prefix=actual_prefix)
        else:
            final_format_str = actual_prefix + log_format_str
    elif actual_prefix:
        final_format_str = SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(
            log_prefix=actual_prefix
        )
    else:
        final_format_str = SIMPLE_LOG_FORMAT_NO_PREFIX

    console_formatter: logging.Formatter
    if json_output:
        console_formatter = JSONFormatter(service_name)
    else:
        console_formatter = SymbolFormatter(
            fmt=final_format_str, datefmt=LOG_DATE_FORMAT, symbols=symbols
        )

    handlers: List[logging.Handler] = []
    if log_to_console:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.addFilter(MaxLevelFilter(logging.ERROR))
        stdout_handler.setFormatter(console_formatter)
        handlers.append(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.ERROR)
        stderr_handler.setFormatter(console_formatter)
        handlers.append(stderr_handler)

    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path, mode="a")
            file_handler.setFormatter(JSONFormatter(service_name))
            handlers.append(file_handler)
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if not handlers:
        fallback_handler = logging.StreamHandler(sys.stderr)
        fallback_handler.setLevel(logging.ERROR)
        fallback_handler.setFormatter(console_formatter)
        handlers.append(fallback_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(numeric_level)}. "
        f"Format: {'json' if json_output else repr(final_format_str)}"
    )


def flush_logging() -> None:
    """Flushes every root handler; used right before the process is replaced."""
    for handler in logging.getLogger().handlers:
        handler.flush()

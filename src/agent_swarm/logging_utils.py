# logging_utils.py
"""Logging setup for the agent swarm.

Two output styles are supported: one JSON object per line for deployed
environments, and a compact coloured line for local development. Run-scoped
fields (pipeline, task, step) are set with :class:`LogContext` and picked up
by loggers from :func:`get_context_logger`.
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import config

ROOT_LOGGER_NAME = "agent_swarm"

# Extra fields grouped under "run" in structured output
RUN_FIELDS = ("pipeline", "task", "step_id")

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "taskName"}

_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "agent_swarm_log_context", default={}
)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in vars(record).items():
        if key in _RESERVED or key.startswith("_"):
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        fields[key] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats each record as a single-line JSON object.

    Run fields are nested under ``"run"``; any other ``extra`` values go
    under ``"extra"``. Warnings and errors also carry their source location.
    """

    def __init__(self, service_name: str = "agent-swarm"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = _extra_fields(record)
        run = {key: fields.pop(key) for key in RUN_FIELDS if key in fields}
        if run:
            payload["run"] = run
        if fields:
            payload["extra"] = fields

        if record.levelno >= logging.WARNING:
            payload["source"] = f"{record.module}:{record.lineno}"
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Compact single-line formatter for terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, show_extra: bool = False):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()
        self.show_extra = show_extra

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = f"{record.levelname:<8}"
        if self.use_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelno, '')}{level}{self.RESET}"

        name = record.name
        if name.startswith(ROOT_LOGGER_NAME + "."):
            name = name[len(ROOT_LOGGER_NAME) + 1:]

        line = f"{when} {level} {name}: {record.getMessage()}"

        if self.show_extra:
            fields = _extra_fields(record)
            if fields:
                line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: Optional[str] = None,
    structured: Optional[bool] = None,
    service_name: str = "agent-swarm",
) -> logging.Logger:
    """Install a single stderr handler on the root logger.

    stdout is left for command output, so pipeline results can be piped
    while progress logs still reach the terminal.

    Args:
        level: Log level name. Defaults to ``LOG_LEVEL``.
        structured: JSON output if true. Defaults to ``SWARM_STRUCTURED_LOGS``,
            which is on everywhere except ``APP_ENV=dev``.
        service_name: Value of the ``service`` key in JSON output.

    Returns:
        The ``agent_swarm`` package logger.
    """
    level_name = (level or config.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if structured is None:
        structured = config.SWARM_STRUCTURED_LOGS

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    if structured:
        handler.setFormatter(StructuredFormatter(service_name=service_name))
    else:
        handler.setFormatter(
            HumanReadableFormatter(show_extra=log_level <= logging.DEBUG)
        )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    # HTTP libraries only log at DEBUG when we do
    third_party_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    for noisy in ("urllib3", "requests"):
        logging.getLogger(noisy).setLevel(third_party_level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.debug(
        "Logging configured",
        extra={"log_level": level_name, "structured": structured},
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``agent_swarm`` namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class LogContext:
    """Attach fields to every record logged through a context logger.

    Nested contexts merge, and the previous fields are restored on exit.

    Example:
        >>> with LogContext(pipeline="Quick Build", task="Add login"):
        ...     logger.info("Step started")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None

    @staticmethod
    def get_context() -> Dict[str, Any]:
        return dict(_log_context.get())


class ContextAdapter(logging.LoggerAdapter):
    """Merges the active :class:`LogContext` into each call's ``extra``."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**LogContext.get_context(), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_context_logger(name: str) -> ContextAdapter:
    return ContextAdapter(get_logger(name), {})

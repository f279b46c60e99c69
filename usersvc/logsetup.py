"""JSON logging configured by deployment environment."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any

ENV_LOCAL = "local"
ENV_DEV = "dev"
ENV_PROD = "prod"

LOGGER_NAME = "usersvc"

_ENV_SETTINGS = {
    ENV_LOCAL: (logging.DEBUG, True),
    ENV_DEV: (logging.DEBUG, False),
    ENV_PROD: (logging.INFO, False),
}

_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_LEVEL_NAMES = {"WARNING": "WARN"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def __init__(self, add_source: bool = False) -> None:
        super().__init__()
        self.add_source = add_source

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": _LEVEL_NAMES.get(record.levelname, record.levelname),
        }
        if self.add_source:
            entry["source"] = {
                "function": record.funcName,
                "file": record.pathname,
                "line": record.lineno,
            }
        entry["msg"] = record.getMessage()
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logger(env: str) -> logging.Logger:
    """Configure the service logger for ``local``, ``dev`` or ``prod``."""
    try:
        level, add_source = _ENV_SETTINGS[env]
    except KeyError:
        raise ValueError(f"unknown environment: {env!r}") from None

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(add_source=add_source))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
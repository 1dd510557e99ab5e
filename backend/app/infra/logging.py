"""Structured logging helpers shared by the API and the manager client."""

from __future__ import annotations

import logging
from typing import Any, Mapping

__all__ = ["StructuredFormatter", "configure_logging", "get_logger"]

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``extra={...}`` context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        rendered = super().format(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not context:
            return rendered
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{rendered} {pairs}"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; structured fields travel via ``extra``."""

    return logging.getLogger(name)


def configure_logging(config: Mapping[str, Any] | None = None) -> None:
    """Apply the ``logging`` section of the settings profile to the root logger."""

    config = config or {}
    level_name = str(config.get("level", DEFAULT_LEVEL)).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    root = logging.getLogger()
    root.setLevel(level)
    handler = next(
        (
            existing
            for existing in root.handlers
            if isinstance(existing.formatter, StructuredFormatter)
        ),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        root.addHandler(handler)
    handler.setFormatter(StructuredFormatter(str(config.get("format", DEFAULT_FORMAT))))

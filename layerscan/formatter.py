"""JSON log formatter carrying time, level and optional source location."""

from __future__ import annotations

import json
import logging
from datetime import datetime

_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


def _escape(serialized: str) -> str:
    for char, escaped in _JSON_ESCAPES.items():
        serialized = serialized.replace(char, escaped)
    return serialized


class JSONExtendedFormatter(logging.Formatter):
    """Formats records as one JSON object with their extra fields."""

    def __init__(self, show_ln: bool = False) -> None:
        super().__init__()
        self.show_ln = show_ln

    def format(self, record: logging.LogRecord) -> str:
        data = {}
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRIBUTES:
                continue
            data[key] = str(value) if isinstance(value, BaseException) else value

        if self.show_ln:
            filename = record.filename if record.pathname else "???"
            data["Location"] = f"{filename}:{max(record.lineno, 0)}"

        stamp = datetime.fromtimestamp(record.created)
        data["Time"] = f"{stamp:%Y-%m-%d %H:%M:%S}.{stamp.microsecond:06d}"
        data["Event"] = record.getMessage()
        data["Level"] = _level_name(record)

        try:
            serialized = json.dumps(
                data, sort_keys=True, separators=(",", ":"), ensure_ascii=False
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Failed to marshal fields to JSON, {exc}") from exc
        return _escape(serialized)
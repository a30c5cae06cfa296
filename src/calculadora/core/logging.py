"""
Logging setup.

Modules log through `logging.getLogger(__name__)` and attach structured
fields with `extra=`. `setup_logging()` renders each record as one JSON line
(default) or as plain text for local development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from calculadora.core.config import get_settings

# Attributes every LogRecord has; anything else came from `extra=`.
_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class _JSONEncoder(json.JSONEncoder):
    """Handle UUID and datetime in log payloads."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


class JSONFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            if hasattr(exc, "code"):
                payload["exc_code"] = exc.code
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_JSONEncoder)


_configured = False


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    Configure the root logger (idempotent).

    Args:
        level: Log level name, defaults to LOG_LEVEL
        fmt: "json" or "text", defaults to LOG_FORMAT
    """
    global _configured
    if _configured:
        return
    _configured = True

    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    fmt = (fmt or settings.LOG_FORMAT).lower()

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # SQL echo is controlled by the engine, not by the app level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

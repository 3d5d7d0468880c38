# logging_utils.py
# JSON-per-line logging shared by the parser, form adapter and API

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# Set by the request middleware in api.py
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

SERVICE_NAME = os.getenv("SERVICE_NAME", "runintel")
ENV = os.getenv("APP_ENV", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")

# Attributes every LogRecord already owns; extras may not reuse them
_RESERVED_LOG_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class RunIntelJSONFormatter(logging.Formatter):
    """One JSON object per record: fixed envelope first, then any structured extras."""

    def __init__(self, service: str = SERVICE_NAME, env: str = ENV) -> None:
        super().__init__()
        self.service = service
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "env": self.env,
            "message": record.getMessage(),
        }

        rid = _request_id.get()
        if rid:
            payload["request_id"] = rid

        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if not key.startswith("_") and key not in _RESERVED_LOG_FIELDS and key not in payload
        )

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _build_handlers() -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if not LOG_FILE:
        return handlers

    try:
        os.makedirs(os.path.dirname(LOG_FILE) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(LOG_FILE))
    except OSError as e:
        print(f"runintel: file logging disabled ({LOG_FILE}): {e}", file=sys.stderr)
    return handlers


def configure_logging() -> None:
    """Attach the JSON handlers to the root logger. Safe to call from every entry point."""
    root = logging.getLogger()
    if getattr(root, "_runintel_configured", False):
        return

    root.setLevel(LOG_LEVEL)
    formatter = RunIntelJSONFormatter()
    for handler in _build_handlers():
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root._runintel_configured = True  # type: ignore[attr-defined]


def new_request_id() -> str:
    rid = uuid.uuid4().hex
    _request_id.set(rid)
    return rid


def set_request_id(rid: Optional[str]) -> None:
    _request_id.set(rid)


def log_event(
    logger: logging.Logger,
    event: str,
    level: int = logging.INFO,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    """
    Log `event` with structured fields.

    A field that would shadow a LogRecord attribute is renamed with a
    "field_" prefix (filename -> field_filename) instead of raising.
    """
    extra = {
        (f"field_{key}" if key in _RESERVED_LOG_FIELDS else key): value
        for key, value in fields.items()
    }
    logger.log(level, event, exc_info=exc_info, extra={"event": event, **extra})

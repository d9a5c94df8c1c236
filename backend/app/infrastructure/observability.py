"""Structured Logging — JSON log lines carrying card/profile/user ids.

Invariants:
    - Every line has timestamp, level, logger and message
    - EXTRA_FIELDS passed via `extra=` appear as top-level keys when not None
    - setup_logging is idempotent: re-running it replaces its own handler

Design Decisions:
    - Plain stdlib logging plus a formatter; modules only ever call
      logging.getLogger(__name__)
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "user_id", "card_id", "profile_id", "error_code", "path", "operation",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class _CardServiceHandler(logging.StreamHandler):
    pass


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the root handler ("json" or human-readable "text")."""
    handler = _CardServiceHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _CardServiceHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

"""Logging setup: text for development, JSON lines for production."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """One JSON object per record; request-scoped extras surfaced when present."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("verb", "controller", "method", "error_code"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """
    Configure the root logger. Called by Application when config.log_level is set.
    Repeated calls reuse the handler installed by the first one; level and format are updated in place.
    """
    handler = next((h for h in logging.root.handlers if getattr(h, "_facet_handler", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._facet_handler = True  # type: ignore[attr-defined]
        logging.root.addHandler(handler)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler

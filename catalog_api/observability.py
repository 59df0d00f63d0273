"""Logging setup for the catalog service.

Plain text lines by default, one JSON object per line when log_format is "json".
"""

import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("method", "path", "error_kind"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


HANDLER_NAME = "catalog_api"


def setup_logging(level: str = "INFO", fmt: str = "text"):
    """Attach a stream handler to the root logger, once per process."""
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if any(h.get_name() == HANDLER_NAME for h in logging.root.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)

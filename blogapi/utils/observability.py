import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("blog_id", "action", "path"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text"):
    """Install a single stream handler on the root logger.

    Safe to call more than once: a handler installed by an earlier call is
    replaced, not duplicated.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_blogapi", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._blogapi = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

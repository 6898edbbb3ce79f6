import json
import logging
import sys

from app.utils.time_utils import utc_now_iso

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JsonLineFormatter(logging.Formatter):
    """Renders each record as a single JSON line for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": utc_now_iso(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", format_type: str = "standard") -> logging.Handler:
    """Route all logging to stdout at the given level.

    format_type "json" switches to JSON lines, anything else uses the plain
    text format. Returns the installed handler.
    """
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "json":
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    # basicConfig is a no-op while the root logger still has handlers
    for existing in list(root.handlers):
        root.removeHandler(existing)

    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        handlers=[handler],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler

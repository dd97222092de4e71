import logging
import sys
import threading
from collections import deque

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class MemoryLogHandler(logging.Handler):
    """In-memory ring buffer of recent log lines, served by GET /api/logs."""
    def __init__(self, capacity: int = 200, fmt: str = LOG_FORMAT):
        super().__init__()
        self._buf = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self.setFormatter(logging.Formatter(fmt))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            item = {
                "ts": record.created,          # epoch seconds
                "level": record.levelname,
                "logger": record.name,
                "message": self.format(record),
            }
            with self._lock:
                self._buf.append(item)
        except Exception:
            self.handleError(record)

    def get(self, limit: int | None = None):
        with self._lock:
            data = list(self._buf)
        return data[-limit:] if limit else data

    def clear(self) -> None:
        with self._lock:
            self._buf.clear()


memory_handler = MemoryLogHandler()


def configure_logging(level_name: str = "INFO") -> None:
    """Send logs to stdout AND to the in-memory buffer."""
    level = getattr(logging, level_name.upper(), logging.INFO)

    stream = logging.StreamHandler(stream=sys.stdout)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stream)
    root.addHandler(memory_handler)
    root.setLevel(level)

    logging.getLogger("uvicorn.error").setLevel(level)
    # one access line per poll per client is noise at 1 req/s
    logging.getLogger("uvicorn.access").setLevel(max(level, logging.WARNING))

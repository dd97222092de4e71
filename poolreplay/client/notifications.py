import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

NOTIFICATION_TTL = 5.0   # seconds


@dataclass(frozen=True)
class Notification:
    message: str
    shown_at: float
    ttl: float = NOTIFICATION_TTL

    def visible(self, now: float) -> bool:
        return now - self.shown_at < self.ttl


class NotificationSlot:
    """Holds at most one transient message; a newer one replaces the older."""

    def __init__(self, ttl: float = NOTIFICATION_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._lock = threading.Lock()
        self._current: Optional[Notification] = None

    def show(self, message: str) -> Notification:
        n = Notification(message=message, shown_at=self.clock(), ttl=self.ttl)
        with self._lock:
            self._current = n
        return n

    def dismiss(self):
        with self._lock:
            self._current = None

    def current(self, now: float | None = None) -> Optional[Notification]:
        now = self.clock() if now is None else now
        with self._lock:
            n = self._current
            if n is not None and not n.visible(now):
                self._current = None
                return None
            return n

    @property
    def message(self) -> Optional[str]:
        n = self.current()
        return n.message if n else None

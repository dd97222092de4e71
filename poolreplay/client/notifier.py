import logging
import threading
from typing import Callable, List, Optional

from poolreplay.client.api import TableView, TablesClient
from poolreplay.client.notifications import NotificationSlot, NOTIFICATION_TTL
from poolreplay.client.poller import Poller
from poolreplay.replay.contracts import now_ms

logger = logging.getLogger(__name__)


class GlobalNotificationPoller:
    """App-wide "replay ready" toast, independent of the mounted view.

    Keeps a high-water mark starting at mount time. Only the first table (id
    order) past the mark is reported per poll; the mark jumps to its
    timestamp, so other crossings in the same poll at or below it are lost.
    """

    def __init__(self, client: TablesClient, interval: float = 1.0,
                 toast_ttl: float = NOTIFICATION_TTL, clock: Callable[[], int] = now_ms,
                 on_toast: Callable[[TableView], None] | None = None):
        self.client = client
        self.interval = interval
        self.clock = clock
        self.on_toast = on_toast
        self.toast = NotificationSlot(ttl=toast_ttl)
        self.last_seen_replay_timestamp: int = clock()
        self.updated = threading.Event()
        self._lock = threading.Lock()
        self._poller: Optional[Poller] = None

    def mount(self):
        self.last_seen_replay_timestamp = self.clock()
        self._poller = Poller(self.client.list_tables, self.check, self.interval,
                              name="replay-notifier")
        self._poller.start()

    def unmount(self):
        if self._poller is not None:
            self._poller.stop()
            self._poller = None

    def check(self, tables: List[TableView]) -> Optional[TableView]:
        with self._lock:
            mark = self.last_seen_replay_timestamp
            hit = next(
                (t for t in tables
                 if t.last_replay_timestamp is not None and t.last_replay_timestamp > mark),
                None,
            )
            if hit is not None:
                self.last_seen_replay_timestamp = hit.last_replay_timestamp
        if hit is not None:
            logger.info("replay ready on %s", hit.name)
            self.toast.show(f"Replay pronto na {hit.name}!")
            if self.on_toast is not None:
                self.on_toast(hit)
        self.updated.set()
        return hit

    def click(self):
        self.toast.dismiss()

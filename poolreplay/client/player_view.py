import logging
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from poolreplay.client.api import ApiError, TableView, TablesClient
from poolreplay.client.notifications import NotificationSlot, NOTIFICATION_TTL
from poolreplay.client.poller import Poller

logger = logging.getLogger(__name__)

Mode = Literal["live", "replay"]

NEW_REPLAY_MESSAGE = "Novo replay disponível!"
REQUESTING_MESSAGE = "Solicitando replay à mesa..."


@dataclass(frozen=True)
class VideoSource:
    url: Optional[str]
    muted: bool          # live starts muted so autoplay is allowed
    autoplay: bool = True

    @property
    def key(self) -> str:
        # a new key means a fresh load, playback position is not carried over
        return self.url or ""


class TablePlayerView:
    """One table's player: live/replay switch, replay request, transient notices."""

    def __init__(self, client: TablesClient, table_id: int,
                 on_back: Callable[[], None] | None = None, interval: float = 1.0,
                 notification_ttl: float = NOTIFICATION_TTL):
        self.client = client
        self.table_id = table_id
        self.on_back = on_back
        self.interval = interval
        self.mode: Mode = "live"
        self.table: Optional[TableView] = None
        self.notification = NotificationSlot(ttl=notification_ttl)
        self.updated = threading.Event()
        self._lock = threading.Lock()
        self._poller: Optional[Poller] = None
        self._left = False

    def mount(self):
        self._poller = Poller(lambda: self.client.get_table(self.table_id), self._apply,
                              self.interval, on_error=self._failed,
                              name=f"table-player-{self.table_id}")
        self._poller.start()

    def unmount(self):
        if self._poller is not None:
            self._poller.stop()
            self._poller = None

    @property
    def mounted(self) -> bool:
        return self._poller is not None and self._poller.alive

    def _apply(self, table: TableView):
        with self._lock:
            prev = self.table
            self.table = table
        if prev is not None and not prev.has_replay and table.has_replay:
            self.notification.show(NEW_REPLAY_MESSAGE)
        self.updated.set()

    def _failed(self, err: Exception):
        logger.error("table %s: %s", self.table_id, err)
        with self._lock:
            if self._left or self._poller is None:
                return
            self._left = True
        self.unmount()
        if self.on_back is not None:
            self.on_back()

    @property
    def can_show_replay(self) -> bool:
        t = self.table
        return t is not None and t.has_replay

    def switch_mode(self, mode: Mode):
        if mode == "replay" and not self.can_show_replay:
            raise ValueError("no replay available for this table yet")
        if mode not in ("live", "replay"):
            raise ValueError(f"unknown mode {mode!r}")
        self.mode = mode

    def request_replay(self) -> bool:
        self.notification.show(REQUESTING_MESSAGE)
        try:
            self.client.trigger(self.table_id)
            return True
        except ApiError as e:
            # no user-facing error, the next poll is the only feedback
            logger.error("replay request failed for table %s: %s", self.table_id, e)
            return False

    def video(self) -> Optional[VideoSource]:
        t = self.table
        if t is None:
            return None
        if self.mode == "live":
            return VideoSource(url=t.stream_url, muted=True)
        return VideoSource(url=t.replay_url, muted=False)

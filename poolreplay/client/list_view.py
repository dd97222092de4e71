import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from poolreplay.client.api import ApiError, TableView, TablesClient
from poolreplay.client.poller import Poller
from poolreplay.replay.contracts import now_ms

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW_MS = 120_000   # 2 min


def is_replay_fresh(table: TableView, now: int, window_ms: int = FRESHNESS_WINDOW_MS) -> bool:
    return (
        table.has_replay
        and table.last_replay_timestamp is not None
        and now - table.last_replay_timestamp < window_ms
    )


@dataclass(frozen=True)
class TableCard:
    id: int
    name: str
    live_badge: bool
    replay_badge: bool


class TableListView:
    def __init__(self, client: TablesClient, on_select: Callable[[int], None] | None = None,
                 freshness_window_ms: int = FRESHNESS_WINDOW_MS, interval: float = 1.0):
        self.client = client
        self.on_select = on_select
        self.freshness_window_ms = freshness_window_ms
        self.interval = interval
        self.loading = True
        self._tables: List[TableView] = []
        self._lock = threading.Lock()
        self._poller: Optional[Poller] = None
        self.updated = threading.Event()   # set after every applied refresh

    def mount(self):
        self._poller = Poller(self.client.list_tables, self._apply, self.interval,
                              on_error=self._failed, name="table-list")
        self._poller.start()

    def unmount(self):
        if self._poller is not None:
            self._poller.stop()
            self._poller = None

    @property
    def mounted(self) -> bool:
        return self._poller is not None and self._poller.alive

    def _apply(self, tables: List[TableView]):
        with self._lock:
            self._tables = list(tables)
            self.loading = False
        self.updated.set()

    def _failed(self, err: Exception):
        logger.error("Failed to fetch tables: %s", err)
        with self._lock:
            self.loading = False
        self.updated.set()

    @property
    def tables(self) -> List[TableView]:
        with self._lock:
            return list(self._tables)

    def cards(self, now: int | None = None) -> List[TableCard]:
        now = now_ms() if now is None else now
        return [
            TableCard(
                id=t.id,
                name=t.name,
                live_badge=t.is_live,
                replay_badge=is_replay_fresh(t, now, self.freshness_window_ms),
            )
            for t in self.tables
        ]

    def select(self, table_id: int):
        if self.on_select is not None:
            self.on_select(table_id)

    def simulate_hardware_press(self, table_id: int) -> bool:
        """Debug panel button: same call the physical table button makes."""
        try:
            self.client.trigger(table_id)
            return True
        except ApiError as e:
            logger.error("trigger failed for table %s: %s", table_id, e)
            return False

import threading
from typing import Optional

from poolreplay.client.api import TablesClient
from poolreplay.client.list_view import TableListView, FRESHNESS_WINDOW_MS
from poolreplay.client.notifier import GlobalNotificationPoller
from poolreplay.client.player_view import TablePlayerView


class ReplayApp:
    """Root of the client: global notifier always mounted, plus either the list or one player."""

    def __init__(self, client: TablesClient, interval: float = 1.0,
                 freshness_window_ms: int = FRESHNESS_WINDOW_MS):
        self.client = client
        self.interval = interval
        self.freshness_window_ms = freshness_window_ms
        self.notifier = GlobalNotificationPoller(client, interval=interval)
        self.current_table_id: Optional[int] = None
        self.view: TableListView | TablePlayerView | None = None
        self._lock = threading.RLock()
        self._closed = False

    def start(self):
        self.notifier.mount()
        self._show_list()

    def _swap(self, view):
        old, self.view = self.view, view
        if old is not None:
            old.unmount()
        view.mount()

    def _show_list(self):
        with self._lock:
            if self._closed:
                return
            self.current_table_id = None
            self._swap(TableListView(self.client, on_select=self.select,
                                     freshness_window_ms=self.freshness_window_ms,
                                     interval=self.interval))

    def select(self, table_id: int):
        with self._lock:
            self.current_table_id = table_id
            view = TablePlayerView(self.client, table_id, interval=self.interval)
            view.on_back = lambda: self._leave(view)
            self._swap(view)

    def _leave(self, view: TablePlayerView):
        # a player that was already replaced must not navigate
        with self._lock:
            if self.view is view:
                self._show_list()

    def back(self):
        self._show_list()

    def close(self):
        with self._lock:
            self._closed = True
            if self.view is not None:
                self.view.unmount()
                self.view = None
            self.notifier.unmount()

import logging
import threading
from typing import Callable, Dict, List, Optional

from poolreplay.adapters.replay.base import ReplayGenerator
from poolreplay.replay.contracts import ReplayTicket, now_ms
from poolreplay.services.table_store import TableStore, TableNotFound

logger = logging.getLogger(__name__)


class ReplayScheduler:
    """Turns a trigger into a delayed mark_replay_ready() without blocking the caller.

    Every accepted trigger gets its own one-shot timer: no dedup, no
    cancellation on re-trigger, last completion wins.
    """

    def __init__(self, store: TableStore, generator: ReplayGenerator,
                 delay_ms: int = 3000, clock: Callable[[], int] = now_ms):
        self.store = store
        self.generator = generator
        self.delay_ms = delay_ms
        self.clock = clock
        self._lock = threading.Lock()
        self._pending: Dict[int, List[threading.Timer]] = {}
        self._closed = False

    def schedule_replay(self, table_id: int, delay_ms: Optional[int] = None) -> ReplayTicket:
        if not self.store.has_table(table_id):
            raise TableNotFound(table_id)
        delay = self.delay_ms if delay_ms is None else delay_ms
        requested = self.clock()

        timer = threading.Timer(delay / 1000.0, lambda: self._complete(table_id, timer))
        timer.daemon = True
        with self._lock:
            if self._closed:
                raise RuntimeError("scheduler is shut down")
            self._pending.setdefault(table_id, []).append(timer)
        timer.start()
        logger.info("Trigger received for Table %s (ready in %dms)", table_id, delay)
        return ReplayTicket(table_id=table_id, requested_at_ms=requested, ready_at_ms=requested + delay)

    def _complete(self, table_id: int, timer: threading.Timer):
        try:
            table = self.store.get_table(table_id)
            url = self.generator.produce(table)
            self.store.mark_replay_ready(table_id, self.clock(), url)
            logger.info("Replay ready for Table %s", table_id)
        except Exception:
            logger.exception("Replay generation failed for Table %s", table_id)
        finally:
            self._forget(table_id, timer)

    def _forget(self, table_id: int, timer: threading.Timer):
        with self._lock:
            timers = self._pending.get(table_id)
            if timers and timer in timers:
                timers.remove(timer)
                if not timers:
                    del self._pending[table_id]

    def pending(self, table_id: Optional[int] = None) -> int:
        with self._lock:
            if table_id is not None:
                return len(self._pending.get(table_id, []))
            return sum(len(v) for v in self._pending.values())

    def shutdown(self):
        with self._lock:
            self._closed = True
            timers = [t for ts in self._pending.values() for t in ts]
            self._pending.clear()
        for t in timers:
            t.cancel()
        if timers:
            logger.info("scheduler: cancelled %d pending replay(s)", len(timers))

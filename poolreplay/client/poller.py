import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Poller:
    """Fixed-cadence polling loop owned by one mounted view.

    One tick fires immediately on start(), then one every `interval` seconds.
    A tick does not wait for the previous fetch, so responses may overlap and
    land out of order; the latest one applied wins. Results (and errors) that
    arrive after stop() are dropped.
    """

    def __init__(self, fetch: Callable[[], T], apply: Callable[[T], None],
                 interval: float = 1.0, on_error: Optional[Callable[[Exception], None]] = None,
                 name: str = "poller"):
        self.fetch = fetch
        self.apply = apply
        self.interval = interval
        self.on_error = on_error
        self.name = name
        self._stop = threading.Event()
        self._apply_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._pool: Optional[ThreadPoolExecutor] = None
        self._started = False

    @property
    def alive(self) -> bool:
        return self._started and not self._stop.is_set()

    def start(self):
        if self._started:
            raise RuntimeError(f"{self.name} already started")
        self._started = True
        self._pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix=self.name)
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stop.is_set():
            try:
                fut = self._pool.submit(self.fetch)
            except RuntimeError:
                break   # pool shut down by stop()
            fut.add_done_callback(self._deliver)
            if self._stop.wait(self.interval):
                break

    def _deliver(self, fut: Future):
        with self._apply_lock:
            if not self.alive or fut.cancelled():
                return
            err = fut.exception()
            if err is None:
                self.apply(fut.result())
            elif self.on_error is not None:
                self.on_error(err)
            else:
                logger.warning("%s: fetch failed: %s", self.name, err)

    def stop(self):
        if not self._started or self._stop.is_set():
            return
        self._stop.set()
        if self._pool is not None:
            # may run on a pool thread (apply -> unmount), so never wait here
            self._pool.shutdown(wait=False, cancel_futures=True)

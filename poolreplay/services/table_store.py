import threading
from dataclasses import dataclass, replace
from typing import Optional, List

from poolreplay.services.config import DEFAULT_STREAM_URL


class TableNotFound(LookupError):
    def __init__(self, table_id):
        super().__init__(f"table {table_id!r} not found")
        self.table_id = table_id


@dataclass
class Table:
    id: int
    name: str
    is_live: bool = True
    has_replay: bool = False
    last_replay_timestamp: Optional[int] = None   # ms since epoch
    stream_url: str = DEFAULT_STREAM_URL
    replay_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "isLive": self.is_live,
            "hasReplay": self.has_replay,
            "lastReplayTimestamp": self.last_replay_timestamp,
            "streamUrl": self.stream_url,
            "replayUrl": self.replay_url,
        }


class TableStore:
    """Authoritative in-memory table list, seeded once with ids 1..N.

    Readers always get copies; the replay fields are only ever written
    together in mark_replay_ready().
    """

    def __init__(self, table_count: int = 10, stream_url: str = DEFAULT_STREAM_URL,
                 name_format: str = "Mesa {id}"):
        self._lock = threading.Lock()
        self._tables: List[Table] = [
            Table(id=i, name=name_format.format(id=i), stream_url=stream_url)
            for i in range(1, table_count + 1)
        ]

    def __len__(self) -> int:
        return len(self._tables)

    def _find(self, table_id: int) -> Table:
        # ids are exactly 1..N, so the index is the id
        if isinstance(table_id, int) and 1 <= table_id <= len(self._tables):
            return self._tables[table_id - 1]
        raise TableNotFound(table_id)

    def has_table(self, table_id: int) -> bool:
        return isinstance(table_id, int) and 1 <= table_id <= len(self._tables)

    def list_tables(self) -> List[Table]:
        with self._lock:
            return [replace(t) for t in self._tables]

    def get_table(self, table_id: int) -> Table:
        with self._lock:
            return replace(self._find(table_id))

    def mark_replay_ready(self, table_id: int, timestamp: int, url: str) -> Table:
        with self._lock:
            t = self._find(table_id)
            t.has_replay = True
            t.last_replay_timestamp = timestamp
            t.replay_url = url
            return replace(t)

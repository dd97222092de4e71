import time
from dataclasses import dataclass


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ReplayTicket:
    table_id: int
    requested_at_ms: int
    ready_at_ms: int          # earliest completion time, not a promise

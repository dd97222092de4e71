import threading

import httpx
import pytest

from poolreplay.client.api import TablesClient


class FakeHall:
    """Stand-in for the server behind httpx.MockTransport."""

    def __init__(self, table_count=3):
        self.lock = threading.Lock()
        self.tables = {
            i: {
                "id": i,
                "name": f"Mesa {i}",
                "isLive": True,
                "hasReplay": False,
                "lastReplayTimestamp": None,
                "streamUrl": "http://live",
                "replayUrl": None,
            }
            for i in range(1, table_count + 1)
        }
        self.requests = []
        self.triggers = []
        self.fail_all = False

    def replay_ready(self, table_id, ts, url="http://replay"):
        with self.lock:
            self.tables[table_id].update(hasReplay=True, lastReplayTimestamp=ts, replayUrl=url)

    def remove(self, table_id):
        with self.lock:
            del self.tables[table_id]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        with self.lock:
            self.requests.append((request.method, path))
            if self.fail_all:
                return httpx.Response(500, json={"error": "boom"})
            parts = path.strip("/").split("/")
            if parts == ["api", "tables"]:
                return httpx.Response(200, json=[dict(t) for _, t in sorted(self.tables.items())])
            try:
                table = self.tables[int(parts[2])]
            except (IndexError, ValueError, KeyError):
                return httpx.Response(404, json={"error": "Table not found"})
            if request.method == "POST":
                self.triggers.append(table["id"])
                return httpx.Response(200, json={"status": "processing",
                                                 "message": "Replay generation started"})
            return httpx.Response(200, json=dict(table))

    def count(self, method, path):
        with self.lock:
            return sum(1 for r in self.requests if r == (method, path))


@pytest.fixture
def hall():
    return FakeHall()


@pytest.fixture
def api(hall):
    client = TablesClient("http://hall.test", transport=httpx.MockTransport(hall.handler))
    yield client
    client.close()

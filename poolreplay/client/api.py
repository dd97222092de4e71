"""
HTTP client for the table API.

Wraps the three endpoints the views poll:
  GET  /api/tables
  GET  /api/tables/<id>
  POST /api/tables/<id>/trigger
Any network failure or non-2xx response is raised as ApiError.
"""

from dataclasses import dataclass
from typing import Optional

import httpx


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class TableView:
    id: int
    name: str
    is_live: bool
    has_replay: bool
    last_replay_timestamp: Optional[int]
    stream_url: str
    replay_url: Optional[str]

    @classmethod
    def from_json(cls, data: dict) -> "TableView":
        return cls(
            id=data["id"],
            name=data["name"],
            is_live=data["isLive"],
            has_replay=data["hasReplay"],
            last_replay_timestamp=data.get("lastReplayTimestamp"),
            stream_url=data["streamUrl"],
            replay_url=data.get("replayUrl"),
        )


class TablesClient:
    def __init__(self, base_url: str = "http://127.0.0.1:3000", timeout: float = 5.0,
                 transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def _request(self, method: str, path: str) -> dict | list:
        try:
            resp = self._http.request(method, path)
        except httpx.HTTPError as e:
            raise ApiError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("error", resp.text)
            except ValueError:
                detail = resp.text
            raise ApiError(f"{method} {path}: HTTP {resp.status_code} {detail}", resp.status_code)
        return resp.json()

    def list_tables(self) -> list[TableView]:
        return [TableView.from_json(t) for t in self._request("GET", "/api/tables")]

    def get_table(self, table_id: int) -> TableView:
        return TableView.from_json(self._request("GET", f"/api/tables/{table_id}"))

    def trigger(self, table_id: int) -> dict:
        return self._request("POST", f"/api/tables/{table_id}/trigger")

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

import logging
import re
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from poolreplay.adapters.replay.mock_replay import SimulatedReplay
from poolreplay.replay.scheduler import ReplayScheduler
from poolreplay.services.config import Settings
from poolreplay.services.logging_setup import memory_handler
from poolreplay.services.models import (
    TableOut, TriggerResponse, ErrorResponse, HealthResponse, LogLine,
    NOT_FOUND_MESSAGE,
)
from poolreplay.services.table_store import TableStore, TableNotFound

logger = logging.getLogger(__name__)

# ASCII digits only; a run longer than any real id is an unknown table
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_MAX_ID_DIGITS = 16


def parse_table_id(raw: str) -> int:
    """Lenient path-id parsing: "7", " 7", "7abc" -> 7; anything else is an unknown table."""
    m = _LEADING_INT.match(raw)
    if not m or len(m.group(1).lstrip("+-").lstrip("0")) > _MAX_ID_DIGITS:
        raise TableNotFound(raw)
    return int(m.group(1))


def create_app(settings: Optional[Settings] = None,
               store: Optional[TableStore] = None,
               scheduler: Optional[ReplayScheduler] = None) -> FastAPI:
    settings = settings or Settings()
    store = store or TableStore(settings.table_count, stream_url=settings.stream_url)
    scheduler = scheduler or ReplayScheduler(
        store, SimulatedReplay(settings.replay_url), delay_ms=settings.replay_delay_ms,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("table store ready: %d tables, replay delay %dms",
                    len(store), scheduler.delay_ms)
        yield
        scheduler.shutdown()

    app = FastAPI(title="poolreplay api", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.scheduler = scheduler

    @app.exception_handler(TableNotFound)
    async def table_not_found(request: Request, exc: TableNotFound):
        return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})

    @app.get("/api/tables", response_model=list[TableOut])
    def list_tables():
        return [t.to_dict() for t in store.list_tables()]

    @app.get("/api/tables/{table_id}", response_model=TableOut,
             responses={404: {"model": ErrorResponse}})
    def get_table(table_id: str):
        return store.get_table(parse_table_id(table_id)).to_dict()

    @app.post("/api/tables/{table_id}/trigger", response_model=TriggerResponse,
              responses={404: {"model": ErrorResponse}})
    def trigger_replay(table_id: str):
        """Simulates the physical button press on the table.
        Returns immediately; the replay shows up on a later poll once the delay elapses.
        """
        scheduler.schedule_replay(parse_table_id(table_id))
        return TriggerResponse()

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        return HealthResponse(ok=True, tables=len(store), pending_replays=scheduler.pending())

    @app.get("/api/logs", response_model=list[LogLine])
    def logs(limit: int = 100):
        return memory_handler.get(limit if limit > 0 else None)

    return app

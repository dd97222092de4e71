from pydantic import BaseModel
from typing import Literal, Optional

NOT_FOUND_MESSAGE = "Table not found"

class TableOut(BaseModel):
    id: int
    name: str
    isLive: bool
    hasReplay: bool
    lastReplayTimestamp: Optional[int] = None   # ms since epoch
    streamUrl: str
    replayUrl: Optional[str] = None

class TriggerResponse(BaseModel):
    status: Literal["processing"] = "processing"
    message: str = "Replay generation started"

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    ok: bool
    tables: int
    pending_replays: int

class LogLine(BaseModel):
    ts: float
    level: str
    logger: str
    message: str

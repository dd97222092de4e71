import os
from dataclasses import dataclass
from dotenv import load_dotenv

DEFAULT_STREAM_URL = "https://storage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4"
DEFAULT_REPLAY_URL = "https://storage.googleapis.com/gtv-videos-bucket/sample/ElephantsDream.mp4"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    host: str = "0.0.0.0"
    table_count: int = 10
    replay_delay_ms: int = 3000
    freshness_window_ms: int = 120_000   # list view "REPLAY" badge
    stream_url: str = DEFAULT_STREAM_URL
    replay_url: str = DEFAULT_REPLAY_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = "poolreplay/.env") -> "Settings":
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)
        settings = cls(
            port=_int_env("PORT", cls.port),
            host=os.getenv("HOST", cls.host),
            table_count=_int_env("TABLE_COUNT", cls.table_count),
            replay_delay_ms=_int_env("REPLAY_DELAY_MS", cls.replay_delay_ms),
            freshness_window_ms=_int_env("FRESHNESS_WINDOW_MS", cls.freshness_window_ms),
            stream_url=os.getenv("STREAM_URL", cls.stream_url),
            replay_url=os.getenv("REPLAY_URL", cls.replay_url),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
        if settings.table_count < 1:
            raise ValueError("TABLE_COUNT must be >= 1")
        if settings.replay_delay_ms < 0:
            raise ValueError("REPLAY_DELAY_MS must be >= 0")
        return settings

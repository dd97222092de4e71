from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path

from poolreplay.services.api import create_app
from poolreplay.services.config import Settings
from poolreplay.services.logging_setup import configure_logging

root = Path(__file__).resolve().parent


def build_app(settings: Settings) -> FastAPI:
    api_app = create_app(settings)
    app = FastAPI(title="poolreplay web", lifespan=api_app.router.lifespan_context)

    # "/" must be registered BEFORE the catch-all mount("") or it gets intercepted
    @app.get("/", response_class=HTMLResponse)
    def index():
        html = (root / "templates" / "index.html").read_text(encoding="utf-8")
        return html.replace("__FRESHNESS_WINDOW_MS__", str(settings.freshness_window_ms))

    app.mount("/static", StaticFiles(directory=str(root / "static")), name="static")

    # mount API sub-app last — catch-all prefix "" would shadow routes above it
    app.mount("", api_app)
    return app


settings = Settings.from_env()
configure_logging(settings.log_level)
app = build_app(settings)


if __name__ == "__main__":
    import uvicorn
    print(f"Server running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)

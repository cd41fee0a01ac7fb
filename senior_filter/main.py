"""
Senior Filter — FastAPI app factory.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from senior_filter import __version__
from senior_filter.data.store import SessionStore
from senior_filter.api.dependencies import set_store
from senior_filter.api.router_meta import router as meta_router
from senior_filter.api.router_session import router as session_router
from senior_filter.api.router_upload import router as upload_router
from senior_filter.api.router_filter import router as filter_router
from senior_filter.api.router_export import router as export_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the in-memory session registry."""
    from senior_filter.config import MAX_UPLOAD_MB, SESSION_TTL_MINUTES

    set_store(SessionStore())
    print(f"\nSenior Filter ready (uploads up to {MAX_UPLOAD_MB} MB, "
          f"sessions expire after {SESSION_TTL_MINUTES} min idle)\n")
    yield
    set_store(None)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Senior Filter API",
        description="Upload people records, filter by minimum age, export to Excel",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(session_router)
    app.include_router(upload_router)
    app.include_router(filter_router)
    app.include_router(export_router)

    # Serve the page with no-cache headers so browsers always get fresh JS
    static_dir = Path(__file__).parent / "static"
    if static_dir.is_dir():
        index_html = static_dir / "index.html"

        @app.get("/", response_class=HTMLResponse)
        async def serve_index():
            return HTMLResponse(
                content=index_html.read_text(),
                headers={"Cache-Control": "no-cache, no-store, must-revalidate", "Pragma": "no-cache"},
            )

        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")

    return app


app = create_app()

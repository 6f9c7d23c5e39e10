from __future__ import annotations

import logging
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .api import bus_routes_router, report_router, seats_router, students_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.store import InMemoryStore, build_store


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Set specific log levels for third-party libraries
    logging.getLogger("uvicorn").setLevel(logging.INFO)


logger = logging.getLogger(__name__)
configure_logging(default_settings.LOG_LEVEL)


def create_app(settings: Settings | None = None, store: InMemoryStore | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Bus Seat Manager", version="1.0.0")

    app.state.store = store or build_store(
        settings.SEAT_ROWS,
        settings.SEATS_PER_ROW,
        sample_data=settings.LOAD_SAMPLE_DATA,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_list(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # Add request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log incoming requests."""
        logger.info(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Response: {request.method} {request.url.path} - Status: {response.status_code}")
        return response

    register_exception_handlers(app)

    app.include_router(seats_router)
    app.include_router(students_router)
    app.include_router(bus_routes_router)
    app.include_router(report_router)

    static_dir = Path(settings.STATIC_DIR)
    index_file = static_dir / "index.html"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.get("/", include_in_schema=False)
    def root():
        if index_file.is_file():
            return FileResponse(index_file)
        return {"ok": True, "service": "bus-seat-manager", "docs": "/docs"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.on_event("startup")
    def startup():
        s = app.state.store
        logger.info(
            f"Store ready: {len(s.seats)} seats, {len(s.students)} students, {len(s.routes)} routes"
        )
        if not static_dir.is_dir():
            logger.info(f"Static directory '{static_dir}' not found, UI is not served")
        logger.info("Application startup complete")

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()

"""Users API application.

``create_app`` builds a FastAPI instance around its own ``InMemoryUserStore``;
the module-level ``app`` is what ``uvicorn app.main:app`` serves.
"""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from app import middleware
from app.deps import get_settings_dep, get_user_store
from app.logging_config import configure_logging
from app.routers.users import router as users_router
from app.settings import Settings, get_settings
from app.user_store import InMemoryUserStore

logger = logging.getLogger("users_api")

APP_VERSION = "1.0.0"


def create_app(store: Optional[InMemoryUserStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=APP_VERSION)
    app.state.user_store = store if store is not None else InMemoryUserStore()
    app.state.settings = settings

    middleware.install(app)
    app.include_router(users_router)

    @app.get("/healthz")
    def healthz(
        store: InMemoryUserStore = Depends(get_user_store),
        s: Settings = Depends(get_settings_dep),
    ):
        return JSONResponse(
            {
                "ok": True,
                "service": s.app_name,
                "version": APP_VERSION,
                "users": len(store),
            }
        )

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using HOST/PORT and the timeout settings."""
    s = get_settings()
    logger.info("Starting %s on %s:%s", s.app_name, s.host, s.port)
    uvicorn.run(
        app,
        host=s.host,
        port=s.port,
        log_level=s.log_level.lower(),
        timeout_keep_alive=s.idle_timeout_seconds,
        timeout_graceful_shutdown=s.shutdown_timeout_seconds,
    )


if __name__ == "__main__":
    run()

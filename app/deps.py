from __future__ import annotations

from fastapi import Request

from app.settings import Settings
from app.user_store import InMemoryUserStore


def get_settings_dep(request: Request) -> Settings:
    """FastAPI dependency for settings.

    Returns the Settings create_app() was built with, so an app constructed with
    explicit settings (tests) never falls back to the environment.
    """
    return request.app.state.settings


def get_user_store(request: Request) -> InMemoryUserStore:
    # The store belongs to the app instance that create_app() built; tests get a
    # fresh one per app.
    return request.app.state.user_store

"""FastAPI entrypoint for the password manager backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from .api.routers import frontend, health, passwords
from .config import Settings, load_settings
from .domain.passwords import PasswordStore, SqlPasswordStore
from .infra.db import build_engine
from .infra.logging import configure_logging, get_logger

logger = get_logger(__name__)


def open_password_store(application: FastAPI, settings: Settings) -> Optional[Engine]:
    """Connect once, record the handle on ``app.state`` and return the engine.

    A failed connection leaves ``password_store`` unset and records the reason
    in ``storage_error`` so requests answer 503 instead of hanging on a dead pool.
    """

    target = "<invalid url>"
    engine: Optional[Engine] = None
    try:
        target = make_url(settings.effective_database_url).render_as_string(
            hide_password=True
        )
        engine = build_engine(settings)
        store = SqlPasswordStore(engine)
        store.ensure_ready()
    except (SQLAlchemyError, ImportError) as exc:
        # ImportError: the URL names a DB-API driver that is not installed.
        application.state.password_store = None
        application.state.storage_error = exc.__class__.__name__
        logger.error(
            "password_store_unavailable",
            exc_info=True,
            extra={"database": target},
        )
        return engine

    application.state.password_store = store
    application.state.storage_error = None
    logger.info("password_store_ready", extra={"database": target})
    return engine


def create_app(
    settings: Settings | None = None,
    *,
    password_store: PasswordStore | None = None,
) -> FastAPI:
    """Instantiate the FastAPI app and register routers.

    Passing ``password_store`` skips the database connection at startup.
    """

    settings = settings or load_settings()
    configure_logging(settings.logging)

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncIterator[None]:
        engine = None
        if application.state.password_store is None:
            engine = open_password_store(application, settings)
        try:
            yield
        finally:
            if engine is not None:
                engine.dispose()

    application = FastAPI(
        title="Password Manager API", version="0.1.0", lifespan=lifespan
    )
    application.state.settings = settings
    application.state.password_store = password_store
    application.state.storage_error = None
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (
        health.router,
        passwords.router,
        frontend.router,
    ):
        application.include_router(router)
    return application


app = create_app()

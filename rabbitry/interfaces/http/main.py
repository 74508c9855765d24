from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rabbitry.application.interfaces.notifier import ReminderNotifier
from rabbitry.config.settings import Settings, get_settings
from rabbitry.infrastructure.db.session import create_engine, create_session_factory
from rabbitry.infrastructure.email.providers.factory import build_email_service
from rabbitry.infrastructure.email.reminder_notifier import EmailReminderNotifier
from rabbitry.infrastructure.email.renderer.engine import EmailTemplateRenderer
from rabbitry.infrastructure.scheduler.reminder_tasks import run_reminder_scan_loop
from rabbitry.interfaces.http.deps import get_app_settings
from rabbitry.interfaces.http.routers import (
    breeding_events,
    farm_settings,
    notifications,
    rabbits,
    reminders,
)
from rabbitry.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    scan_task = None
    if settings.reminder_scan_enabled:
        scan_task = asyncio.create_task(
            run_reminder_scan_loop(
                app.state.session_factory, app.state.reminder_notifier, settings
            )
        )
    try:
        yield
    finally:
        if scan_task is not None:
            scan_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await scan_task
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    reminder_notifier: ReminderNotifier | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Rabbitry Backend",
        version="0.1.0",
        description="Breeding lifecycle and reminder API for rabbit farms",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.email_service = build_email_service(settings)
    app.state.email_renderer = EmailTemplateRenderer.create_default(settings)
    app.state.reminder_notifier = reminder_notifier or EmailReminderNotifier(
        app.state.email_service, app.state.email_renderer, settings
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(rabbits.router)
    api.include_router(breeding_events.router)
    api.include_router(reminders.router)
    api.include_router(farm_settings.router)
    api.include_router(notifications.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("Application configured (environment=%s)", settings.environment)
    return app


app = create_app()

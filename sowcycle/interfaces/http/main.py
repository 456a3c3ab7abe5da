from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sowcycle.application.services.breeding_manager import BreedingRecordManager
from sowcycle.config.settings import Settings, get_settings
from sowcycle.domain.services.gestation import GestationCalculator
from sowcycle.domain.value_objects.breeding_profile import get_profile
from sowcycle.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from sowcycle.interfaces.http.routers import alerts, breeding_records, piglets
from sowcycle.interfaces.middleware.audit_middleware import AuditContextMiddleware
from sowcycle.interfaces.middleware.error_handler import register_error_handlers
from sowcycle.utils.datetime_tz import FarmCalendar

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
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
    calendar: FarmCalendar | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Sowcycle Backend",
        version="0.1.0",
        description="Pig breeding lifecycle and alert scheduling API",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)

    calendar = calendar or FarmCalendar(settings.display_timezone)
    app.state.calendar = calendar
    app.state.calculator = GestationCalculator(get_profile(settings.breeding_profile), calendar)
    session_factory = app.state.session_factory
    app.state.breeding_manager = BreedingRecordManager(
        lambda: SQLAlchemyUnitOfWork(session_factory), app.state.calculator
    )
    logger.info(
        "Breeding profile '%s' loaded; display timezone %s",
        settings.breeding_profile,
        settings.display_timezone,
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(breeding_records.router)
    api.include_router(breeding_records.pigs_router)
    api.include_router(piglets.router)
    api.include_router(alerts.router)

    @api.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    # Audit context first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuditContextMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()

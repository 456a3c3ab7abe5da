from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from sowcycle.application.errors import AuthError
from sowcycle.application.services.breeding_manager import BreedingRecordManager
from sowcycle.config.settings import Settings, get_settings
from sowcycle.infrastructure.auth.context import AuditContext
from sowcycle.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_audit_context(request: Request) -> AuditContext:
    context = getattr(request.state, "audit_context", None)
    if context is None:
        raise AuthError("Farm and user headers required")
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_breeding_manager(request: Request) -> BreedingRecordManager:
    manager = getattr(request.app.state, "breeding_manager", None)
    if manager is None:
        raise RuntimeError("Breeding record manager not configured")
    return manager

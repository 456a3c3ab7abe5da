from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping
from uuid import UUID

from sowcycle.application.errors import AuthError


@dataclass(slots=True)
class AuditContext:
    """Who is acting, and on which farm. Recorded on every write."""

    user_id: UUID
    farm_id: UUID


def _parse_uuid(value: str | None, label: str) -> UUID:
    if not value:
        raise AuthError(f"Missing {label} header")
    try:
        return UUID(value)
    except ValueError as exc:
        raise AuthError(f"Invalid {label} identifier") from exc


def context_from_headers(
    headers: Mapping[str, str], *, farm_header: str, user_header: str
) -> AuditContext:
    farm_id = _parse_uuid(headers.get(farm_header), "farm")
    user_id = _parse_uuid(headers.get(user_header), "user")
    return AuditContext(user_id=user_id, farm_id=farm_id)

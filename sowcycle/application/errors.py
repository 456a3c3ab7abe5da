from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    code = "auth_error"
    status_code = 401


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class InvalidDateError(ValidationError):
    code = "invalid_date"


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class IntegrityFailure(ConflictError):
    """The store rejected a write because of a concurrent uniqueness conflict."""

    code = "integrity_failure"


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500

"""Custom exceptions and RFC 7807 Problem Detail error handlers."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

BASE_ERROR_URI = "https://staffsphere.app/errors"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions → RFC 7807 JSON."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class NotFoundException(AppException):
    """404: record not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=f"{entity_type} with id '{entity_id}' does not exist.",
        )


class ValidationException(AppException):
    """422: form / business-logic validation failures."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type="validation-error",
            title="Validation Error",
            detail="One or more fields failed validation.",
            errors=errors,
        )


class RecordStoreError(AppException):
    """502: the record store rejected a call or could not be reached."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=502,
            error_type="record-store-error",
            title="Record Store Error",
            detail=detail,
        )


class AuthenticationRequired(AppException):
    """401: no authenticated session."""

    def __init__(self, detail: str = "Sign in to continue.") -> None:
        super().__init__(
            status_code=401,
            error_type="unauthenticated",
            title="Authentication Required",
            detail=detail,
        )


class ShellLoadingException(AppException):
    """503: the session shell has not finished initializing."""

    def __init__(self) -> None:
        super().__init__(
            status_code=503,
            error_type="loading",
            title="Loading",
            detail="The application is still initializing.",
        )


# ── RFC 7807 builder ────────────────────────────────────────────────

def _build_problem_detail(exc: AppException, request: Request) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{exc.error_type}",
        "title": exc.title,
        "status": exc.status_code,
        "detail": exc.detail,
        "instance": str(request.url.path),
    }
    if exc.errors:
        body["errors"] = exc.errors
    return body


# ── FastAPI handlers ────────────────────────────────────────────────

async def _handle_app_exception(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_problem_detail(exc, request),
        media_type="application/problem+json",
    )


async def _handle_shell_loading(
    request: Request,
    exc: ShellLoadingException,
) -> JSONResponse:
    # Neutral loading state: nothing but the status marker
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "loading"},
        headers={"Retry-After": "1"},
    )


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    field_errors: dict[str, list[str]] = {}
    for err in exc.errors():
        # Drop the leading "body" / "query" segment
        loc = [str(part) for part in err.get("loc", ())]
        name = ".".join(loc[1:] or loc) or "unknown"
        field_errors.setdefault(name, []).append(err.get("msg", "Invalid value"))

    problem = ValidationException(field_errors)
    problem.detail = "Request validation failed."
    return await _handle_app_exception(request, problem)


# ── Registration helper (called from main.py) ──────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""
    app.add_exception_handler(ShellLoadingException, _handle_shell_loading)  # type: ignore[arg-type]
    app.add_exception_handler(AppException, _handle_app_exception)          # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]

"""
===============================================================================
TARJETA CRC - sweetshop/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de dominio a respuestas HTTP RFC7807.
  - Traducir errores de schema (RequestValidationError) a 400 con detalle por campo.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - domain.errors: SweetShopError y derivadas
  - infrastructure.db.errors.DatabaseError
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.logger import logger
from ..domain.errors import (
    DuplicateIdentityError,
    ForbiddenError,
    InsufficientStockError,
    InvalidCredentialsError,
    NotFoundError,
    SweetShopError,
    UnauthenticatedError,
    ValidationError,
)
from ..infrastructure.db.errors import DatabaseError

# R: orden importa: gana la primera clase que matchee con isinstance.
_ERROR_MAP: tuple[tuple[type[SweetShopError], int, ErrorCode], ...] = (
    (ValidationError, 400, ErrorCode.VALIDATION_ERROR),
    (DuplicateIdentityError, 409, ErrorCode.CONFLICT),
    (InvalidCredentialsError, 401, ErrorCode.INVALID_CREDENTIALS),
    (NotFoundError, 404, ErrorCode.NOT_FOUND),
    (InsufficientStockError, 400, ErrorCode.INSUFFICIENT_STOCK),
    (UnauthenticatedError, 401, ErrorCode.UNAUTHORIZED),
    (ForbiddenError, 403, ErrorCode.FORBIDDEN),
    (DatabaseError, 503, ErrorCode.DATABASE_ERROR),
)

_GENERIC_INTERNAL_DETAIL = "An unexpected error occurred"


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _classify(exc: SweetShopError) -> tuple[int, ErrorCode]:
    for error_type, status_code, code in _ERROR_MAP:
        if isinstance(exc, error_type):
            return status_code, code
    return 500, ErrorCode.INTERNAL_ERROR


async def sweetshop_error_handler(
    request: Request, exc: SweetShopError
) -> JSONResponse:
    """Handler común para errores tipados de dominio/infra."""
    status_code, code = _classify(exc)
    request_id = _request_id_from(request)

    log_extra = {
        "code": code.value,
        "error_id": exc.error_id,
        "request_id": request_id,
    }
    if status_code >= 500:
        logger.error(
            "Error de servicio",
            extra={**log_extra, "error_message": exc.message},
        )
        detail = (
            _GENERIC_INTERNAL_DETAIL
            if code == ErrorCode.INTERNAL_ERROR
            else "Database operation failed"
        )
    else:
        logger.info("Error de negocio", extra={**log_extra, "error_message": exc.message})
        detail = exc.message

    errors: list[dict[str, Any]] = []
    if isinstance(exc, ValidationError):
        errors.extend(exc.errors)
    errors.append({"error_id": exc.error_id})

    headers = (
        {"WWW-Authenticate": "Bearer"}
        if isinstance(exc, UnauthenticatedError)
        else None
    )
    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=detail,
        errors=errors,
        headers=headers,
    )
    return await app_exception_handler(request, app_exc)


def _format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Aplana errores de pydantic a [{"field", "msg"}]."""
    formatted: list[dict[str, Any]] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        formatted.append(
            {"field": ".".join(loc) or "body", "msg": str(err.get("msg", ""))}
        )
    return formatted


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Validation failed",
        errors=_format_validation_errors(exc),
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (evita filtrar internos).
    """
    request_id = _request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=exc,
        extra={"request_id": request_id, "error": str(exc)},
    )

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=_GENERIC_INTERNAL_DETAIL,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException debe registrarse para respetar RFC7807.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(SweetShopError, sweetshop_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]

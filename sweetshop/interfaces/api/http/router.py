"""
===============================================================================
TARJETA CRC - router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por bounded context (sweets).

Patrones aplicados:
  - Factory: build_router() para testear composición y evitar side-effects al importar.

Notas:
  - Este router se incluye desde sweetshop/api/main.py con prefix=API_PREFIX.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.sweets import router as sweets_router


def build_router() -> APIRouter:
    """Construye el router raíz del catálogo."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(sweets_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]

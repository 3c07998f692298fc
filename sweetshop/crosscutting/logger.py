# sweetshop/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado con contexto de request
===============================================================================

Objetivo
--------
Cada línea de log del API lleva el request_id (y el username cuando hay
sesión), sale como JSON en despliegues y como texto legible en local, y
nunca imprime passwords, hashes ni tokens.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  RequestContextFilter + JSONFormatter + setup_logger()

Responsabilidades:
  - Inyectar el contexto de request en cada LogRecord (filter)
  - Serializar a JSON con los "extra" del llamador, ya redactados
  - Formato texto alternativo (LOG_JSON=false)

Colaboradores:
  - sweetshop/context.py (ContextVars)
  - crosscutting/config.py (LOG_LEVEL / LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

LOGGER_NAME = "sweetshop"
REDACTED = "***"
_MAX_VALUE_LENGTH = 2_000

# Claves que nunca se imprimen tal cual (match por substring, case-insensitive).
_SENSITIVE_FRAGMENTS = ("password", "secret", "token", "authorization")

# Atributos estándar de LogRecord; todo lo demás vino por `extra=`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName", "ctx"}


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(fragment in lowered for fragment in _SENSITIVE_FRAGMENTS)


def _clean(key: str, value: Any) -> Any:
    if _is_sensitive(key):
        return REDACTED
    if isinstance(value, str) and len(value) > _MAX_VALUE_LENGTH:
        return value[:_MAX_VALUE_LENGTH] + "...(truncated)"
    return value


class RequestContextFilter(logging.Filter):
    """Copia request_id / method / path / username al record como `ctx`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.ctx = get_context_dict()
        return True


class JSONFormatter(logging.Formatter):
    """
    LogRecord -> una línea JSON.

    Orden de claves: metadatos fijos, contexto de request, extras del llamador.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        payload.update(getattr(record, "ctx", {}))

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = _clean(key, value)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Formato humano para desarrollo: `LEVEL [request_id] message key=value`."""

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "ctx", {}).get("request_id", "-")
        extras = " ".join(
            f"{key}={_clean(key, value)}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        )
        line = f"{record.levelname} [{request_id}] {record.getMessage()}"
        if extras:
            line = f"{line} {extras}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Configura el logger del API (idempotente ante reimports).

    Si los Settings son inválidos se loguea igual con los defaults; el error
    real lo reporta el startup.
    """
    level, use_json = "INFO", True
    try:
        from .config import get_settings

        settings = get_settings()
        level = (settings.log_level or "INFO").upper()
        use_json = settings.log_json
    except ValueError:
        pass

    log = logging.getLogger(name)
    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.addFilter(RequestContextFilter())
        handler.setFormatter(JSONFormatter() if use_json else TextFormatter())
        log.addHandler(handler)

    return log


logger = setup_logger()

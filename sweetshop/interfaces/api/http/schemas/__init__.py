"""
===============================================================================
TARJETA CRC - schemas/__init__.py
===============================================================================

Módulo:
    Paquete de Schemas HTTP (DTOs Pydantic)

Reglas:
    - Schemas NO deben importar infraestructura.
    - Schemas NO deben ejecutar servicios.
    - Solo tipos y validación de input/output.
===============================================================================
"""

__all__ = []

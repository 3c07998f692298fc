"""
Name: Backend ASGI Entrypoint (sweetshop.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing sweetshop.api.main

Notes/Constraints:
  - ASGI servers are configured to import sweetshop.main:app
  - No configuration or IO should live here
"""

from sweetshop.api.main import app

__all__ = ["app"]

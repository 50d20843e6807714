# mytube/core/errors.py
"""
Errores de dominio que lanzan las acciones.

Cada uno lleva un mensaje legible y el status HTTP con el que lo expone
la API (ver `install_error_handlers`). Nada aquí reintenta ni recupera.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

log = logging.getLogger("uvicorn")


class MyTubeError(Exception):
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(MyTubeError):
    """Usuario, contenido o comentario referenciado que no existe."""

    status_code = 404


class Conflict(MyTubeError):
    """Nombre de usuario duplicado."""

    status_code = 409


class Unauthorized(MyTubeError):
    """El actor no es autor del comentario ni del contenido."""

    status_code = 403


class InvalidAction(MyTubeError):
    status_code = 400


class IOFailure(MyTubeError):
    """Fallo leyendo/escribiendo el almacén."""

    status_code = 500


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(MyTubeError)
    async def _mytube_error(request: Request, exc: MyTubeError):
        if isinstance(exc, IOFailure):
            log.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

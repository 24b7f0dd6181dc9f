from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from po_agent.middleware.cors import cors_headers
from po_agent.services.agent.errors import RelayError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Erreur inconnue"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=500, content={"error": f"Invalid request: {detail}"})

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        # Runs outside the middleware stack, so CORS headers are added here
        logger.exception("po-agent error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or UNKNOWN_ERROR},
            headers=cors_headers(),
        )

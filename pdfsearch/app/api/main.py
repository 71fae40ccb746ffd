"""
Main entry point for the document search API.

This module initializes and configures the FastAPI application that serves the viewer:
CORS, response compression, path validation and the status and PDF proxy routers.
"""

import json

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from pdfsearch.app.api.routes import status_router, pdf_router
from pdfsearch.app.utils.constant.constant import ALLOWED_ORIGINS, JSON_MEDIA_TYPE
from pdfsearch.app.utils.logging.logger import log_info
from pdfsearch.app.utils.system_utils.error_handling import SecurityAwareErrorHandler


class ValidationMiddleware(BaseHTTPMiddleware):
    """
    Rejects request paths containing traversal or shell metacharacter patterns.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Validate the incoming request path for suspicious patterns.

        Args:
            request (Request): The incoming HTTP request.
            call_next (Callable): Function to execute the next middleware/route handler.

        Returns:
            Response: The original response if the path is valid, otherwise a 400 error response.
        """
        path = request.url.path
        suspicious_patterns = ["../", "..\\", ";", "&&", "|", "eval("]
        if any(pattern in path for pattern in suspicious_patterns):
            return Response(
                status_code=400,
                content=json.dumps({"detail": "Invalid request path"}),
                media_type=JSON_MEDIA_TYPE
            )
        return await call_next(request)


def _init_middlewares(app: FastAPI) -> None:
    """
    Add middleware components to the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.add_middleware(ValidationMiddleware)
    # Compress responses larger than 1KB.
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=600,
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured application instance.
    """
    app = FastAPI(
        title="PDF Viewer Search API",
        version="1.0",
        description="Serves documents to the PDF viewer whose text search runs in-process.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    _init_middlewares(app)

    app.include_router(status_router, tags=["Status"])
    app.include_router(pdf_router, prefix="/api", tags=["PDF"])

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        error_info = SecurityAwareErrorHandler.handle_safe_error(
            exc, "api_unhandled", endpoint=str(request.url.path)
        )
        return Response(
            content=json.dumps(error_info),
            status_code=500,
            media_type=JSON_MEDIA_TYPE
        )

    log_info("[OK] API application created")
    return app

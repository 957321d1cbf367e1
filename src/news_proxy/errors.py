"""Exception types and the FastAPI handlers that render them as JSON."""

from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class NewsProxyError(Exception):
    """Base exception carrying the HTTP status it should be reported with."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(NewsProxyError):
    pass


class GNewsAPIError(NewsProxyError):
    """Raised when GNews answers with a non-success status."""

    def __init__(self, reasons: List[str]):
        super().__init__(f"GNews API error: {', '.join(reasons)}")
        self.reasons = reasons


class QueryValidationError(NewsProxyError):
    def __init__(self, details: Dict[str, List[str]]):
        super().__init__("Invalid query parameters.", status_code=400)
        self.details = details


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers that render errors as ``{"error": ...}``."""

    @app.exception_handler(QueryValidationError)
    async def handle_validation_error(_request: Request, exc: QueryValidationError):
        return JSONResponse(
            {"error": str(exc), "details": exc.details},
            status_code=exc.status_code,
        )

    @app.exception_handler(NewsProxyError)
    async def handle_news_proxy_error(_request: Request, exc: NewsProxyError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import Settings, settings as default_settings
from ..core.articles import ArticleService
from ..errors import ConfigurationError, NewsProxyError, QueryValidationError, register_error_handlers
from ..logging_config import configure_logging, get_logger
from ..models.query import QueryRejected, validate_query
from ..tools.cache import TTLCache


logger = get_logger("api.server")
router = APIRouter()

_UNKNOWN_ERROR = "An unknown internal error occurred"


def get_article_service(request: Request) -> ArticleService:
    state = request.app.state
    return ArticleService(cache=state.cache, http_client=state.http_client, settings=state.settings)


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/api/articles")
async def get_articles(
    request: Request,
    service: ArticleService = Depends(get_article_service),
) -> JSONResponse:
    """Search GNews, serving repeated searches from the in-memory cache.

    ``author`` narrows the results to sources whose name contains it; it does
    not take part in the cache key, so searches differing only in ``author``
    share one upstream response.
    """
    api_key = service.settings.gnews_api_key
    if not api_key:
        logger.error("missing_gnews_api_key")
        raise ConfigurationError("GNews API key is not configured.")

    result = validate_query(request.query_params)
    if isinstance(result, QueryRejected):
        logger.info("articles_validation_failed", details=result.details)
        raise QueryValidationError(result.details)

    query = result.query
    logger.info(
        "articles_request",
        q=query.q,
        max=query.max,
        category=query.category,
        author=query.author,
    )

    try:
        response = await service.search(query, api_key)
    except Exception as exc:
        message = str(exc) or _UNKNOWN_ERROR
        logger.error("articles_request_error", error=message, error_type=type(exc).__name__)
        raise NewsProxyError(message) from exc

    logger.info(
        "articles_response",
        q=query.q,
        cache_status=response.meta.cache_status,
        total_results=response.total_results,
    )
    return JSONResponse(response.to_json())


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[TTLCache] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the API with one cache and one HTTP client shared by all requests.

    Passing ``http_client`` hands its lifetime to the caller; otherwise a
    client is opened on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.http_client is None
        if owned:
            app.state.http_client = httpx.AsyncClient()
        try:
            yield
        finally:
            if owned:
                await app.state.http_client.aclose()
                app.state.http_client = None

    app = FastAPI(
        title="News Proxy API",
        description="Cached, filterable proxy over the GNews search API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or default_settings
    configure_logging(app.state.settings.log_level, app.state.settings.log_json)
    app.state.cache = cache if cache is not None else TTLCache()
    app.state.http_client = http_client

    register_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()

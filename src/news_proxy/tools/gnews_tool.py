from typing import Any, Dict, List
from urllib.parse import urlencode

import httpx

from ..errors import GNewsAPIError
from ..logging_config import get_logger
from ..models.news import GNewsResponse
from ..models.query import ArticleQuery


logger = get_logger("tools.gnews")


def build_search_params(query: ArticleQuery, api_key: str, lang: str = "en") -> Dict[str, str]:
    """Query-string parameters for the GNews ``/search`` call.

    ``author`` is left out on purpose: GNews cannot filter by it, so it is
    applied to the results locally.
    """

    params = {
        "q": query.q,
        "max": str(query.max),
        "lang": lang,
        "apikey": api_key,
    }
    if query.category:
        params["category"] = query.category
    if query.from_:
        params["from"] = query.from_
    if query.to:
        params["to"] = query.to
    return params


def cache_key(params: Dict[str, str], prefix: str = "gnews_func") -> str:
    return f"{prefix}:{urlencode(params)}"


def _error_reasons(response: httpx.Response) -> List[str]:
    try:
        body: Any = response.json()
    except ValueError:
        return ["Unknown error"]

    errors = body.get("errors") if isinstance(body, dict) else None
    if isinstance(errors, dict):
        errors = list(errors.values())
    if not isinstance(errors, list) or not errors:
        return ["Unknown error"]
    return [str(error) for error in errors]


async def search_gnews(client: httpx.AsyncClient, base_url: str, params: Dict[str, str]) -> GNewsResponse:
    """Call GNews ``/search`` and parse the success body.

    Raises ``GNewsAPIError`` for non-success statuses. Transport failures and
    malformed bodies propagate to the caller unchanged.
    """

    response = await client.get(f"{base_url.rstrip('/')}/search", params=params)
    if not response.is_success:
        reasons = _error_reasons(response)
        logger.warning(
            "gnews_api_error",
            status_code=response.status_code,
            reasons=reasons,
        )
        raise GNewsAPIError(reasons)

    return GNewsResponse.model_validate(response.json())

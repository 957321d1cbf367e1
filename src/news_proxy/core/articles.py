from typing import List, Optional, Tuple

import httpx

from ..config import Settings
from ..logging_config import get_logger
from ..models.news import Article, ArticlesMeta, ArticlesResponse, CacheStatus, GNewsResponse
from ..models.query import ArticleQuery
from ..tools.cache import TTLCache
from ..tools.gnews_tool import build_search_params, cache_key, search_gnews


logger = get_logger("core.articles")


def filter_by_author(articles: List[Article], author: Optional[str]) -> List[Article]:
    """Keep articles whose source name contains ``author``, ignoring case."""
    if not author:
        return articles
    needle = author.lower()
    return [article for article in articles if article.source_name and needle in article.source_name.lower()]


class ArticleService:
    """Resolves article searches through the cache and GNews."""

    def __init__(self, cache: TTLCache, http_client: httpx.AsyncClient, settings: Settings):
        self.cache = cache
        self.http_client = http_client
        self.settings = settings

    async def resolve(self, query: ArticleQuery, api_key: str) -> Tuple[GNewsResponse, CacheStatus]:
        params = build_search_params(query, api_key, lang=self.settings.gnews_lang)
        key = cache_key(params, prefix=self.settings.cache_key_prefix)

        cached = self.cache.get(key)
        if cached is not None:
            logger.info("articles_cache_hit", q=query.q, results=len(cached.articles))
            return cached, "HIT"

        data = await search_gnews(self.http_client, self.settings.gnews_base_url, params)
        self.cache.set(key, data, self.settings.articles_cache_ttl_seconds)
        logger.info(
            "articles_fetched",
            q=query.q,
            total_articles=data.total_articles,
            results=len(data.articles),
        )
        return data, "MISS"

    async def search(self, query: ArticleQuery, api_key: str) -> ArticlesResponse:
        data, cache_status = await self.resolve(query, api_key)
        articles = filter_by_author(data.articles, query.author)
        return ArticlesResponse(
            meta=ArticlesMeta(cache_status=cache_status, request_params=query.request_params()),
            total_results=len(articles),
            articles=articles,
        )

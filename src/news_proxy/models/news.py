from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Article(BaseModel):
    """A GNews article, passed through to clients as received.

    Fields are left untyped so that whatever GNews sends is relayed instead
    of failing the request.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Any = None
    description: Any = None
    content: Any = None
    url: Any = None
    image: Any = None
    published_at: Any = Field(default=None, alias="publishedAt")
    source: Any = None

    @property
    def source_name(self) -> Optional[str]:
        if isinstance(self.source, dict):
            name = self.source.get("name")
            if isinstance(name, str):
                return name
        return None


class GNewsResponse(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_articles: Any = Field(default=0, alias="totalArticles")
    articles: List[Article] = []

    @field_validator("articles", mode="before")
    @classmethod
    def _null_articles(cls, value: Any) -> Any:
        return [] if value is None else value


CacheStatus = Literal["HIT", "MISS"]


class ArticlesMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cache_status: CacheStatus = Field(alias="cacheStatus")
    request_params: Dict[str, Any] = Field(alias="requestParams")


class ArticlesResponse(BaseModel):
    """Payload returned by ``GET /api/articles``."""

    model_config = ConfigDict(populate_by_name=True)

    meta: ArticlesMeta
    total_results: int = Field(alias="totalResults")
    articles: List[Article]

    def to_json(self) -> Dict[str, Any]:
        # exclude_unset drops fields GNews did not send; explicit nulls are kept
        return {
            "meta": self.meta.model_dump(by_alias=True, mode="json"),
            "totalResults": self.total_results,
            "articles": [
                article.model_dump(by_alias=True, exclude_unset=True, mode="json")
                for article in self.articles
            ],
        }

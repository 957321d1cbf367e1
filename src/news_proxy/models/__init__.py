from .news import (  # noqa: F401
    Article,
    ArticlesMeta,
    ArticlesResponse,
    CacheStatus,
    GNewsResponse,
)
from .query import (  # noqa: F401
    ArticleQuery,
    QueryAccepted,
    QueryRejected,
    QueryValidation,
    validate_query,
)

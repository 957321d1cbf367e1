"""Validation of the ``/api/articles`` query string.

``validate_query`` never raises: it returns either a ``QueryAccepted`` holding
the parsed ``ArticleQuery`` or a ``QueryRejected`` holding per-field messages,
so callers branch on the result type instead of catching exceptions.
"""

import math
import re
from typing import Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


Category = Literal[
    "general",
    "world",
    "nation",
    "business",
    "technology",
    "entertainment",
    "sports",
    "science",
    "health",
]

# UTC timestamps only, e.g. 2024-01-01T00:00:00Z or 2024-01-01T00:00:00.123Z
_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")


class ArticleQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    q: str = "technology"
    max: int = Field(default=10, ge=1, le=100)
    category: Optional[Category] = None
    author: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None

    @field_validator("max", mode="before")
    @classmethod
    def _coerce_max(cls, value):
        # "1e1", " 5 " and "5.0" are whole numbers too
        if isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                return value
            if math.isfinite(number) and number.is_integer():
                return int(number)
        return value

    @field_validator("q")
    @classmethod
    def _q_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Query parameter 'q' cannot be empty.")
        return value

    @field_validator("from_", "to")
    @classmethod
    def _iso_datetime(cls, value: Optional[str], info) -> Optional[str]:
        if value is not None and not _ISO_DATETIME.match(value):
            name = "from" if info.field_name == "from_" else info.field_name
            raise ValueError(f"Invalid '{name}' date format. Use ISO 8601.")
        return value

    def request_params(self) -> Dict[str, object]:
        """Validated parameters as echoed back to clients."""
        return self.model_dump(by_alias=True, exclude_none=True)


class QueryAccepted(BaseModel):
    ok: Literal[True] = True
    query: ArticleQuery


class QueryRejected(BaseModel):
    ok: Literal[False] = False
    details: Dict[str, List[str]]


QueryValidation = Union[QueryAccepted, QueryRejected]


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    details: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "_root"
        if error["type"] == "value_error":
            message = str(error["ctx"]["error"])
        else:
            message = error["msg"]
        details.setdefault(field, []).append(message)
    return details


def validate_query(raw: Mapping[str, str]) -> QueryValidation:
    try:
        query = ArticleQuery.model_validate(dict(raw))
    except ValidationError as exc:
        return QueryRejected(details=_field_errors(exc))
    return QueryAccepted(query=query)

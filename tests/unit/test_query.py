import pytest

from src.news_proxy.models.query import QueryAccepted, QueryRejected, validate_query


def test_defaults_applied_for_empty_query() -> None:
    result = validate_query({})
    assert isinstance(result, QueryAccepted)
    assert result.query.request_params() == {"q": "technology", "max": 10}


def test_max_is_coerced_from_string() -> None:
    result = validate_query({"q": "climate", "max": "25"})
    assert isinstance(result, QueryAccepted)
    assert result.query.max == 25


@pytest.mark.parametrize("value", ["0", "101", "abc", ""])
def test_invalid_max_is_rejected(value: str) -> None:
    result = validate_query({"max": value})
    assert isinstance(result, QueryRejected)
    assert list(result.details) == ["max"]
    assert result.details["max"]


def test_empty_q_is_rejected_with_message() -> None:
    result = validate_query({"q": ""})
    assert isinstance(result, QueryRejected)
    assert result.details == {"q": ["Query parameter 'q' cannot be empty."]}


def test_unknown_category_is_rejected() -> None:
    result = validate_query({"category": "gossip"})
    assert isinstance(result, QueryRejected)
    assert "category" in result.details


def test_dates_must_be_iso_8601_utc() -> None:
    result = validate_query({"from": "yesterday", "to": "2024-01-01"})
    assert isinstance(result, QueryRejected)
    assert result.details["from"] == ["Invalid 'from' date format. Use ISO 8601."]
    assert result.details["to"] == ["Invalid 'to' date format. Use ISO 8601."]


def test_request_params_use_wire_names_and_skip_missing() -> None:
    result = validate_query(
        {
            "q": "ai",
            "max": "5",
            "category": "science",
            "author": "bbc",
            "from": "2024-01-01T00:00:00Z",
            "to": "2024-01-31T23:59:59.999Z",
            "unexpected": "ignored",
        }
    )
    assert isinstance(result, QueryAccepted)
    assert result.query.request_params() == {
        "q": "ai",
        "max": 5,
        "category": "science",
        "author": "bbc",
        "from": "2024-01-01T00:00:00Z",
        "to": "2024-01-31T23:59:59.999Z",
    }


def test_several_violations_are_reported_together() -> None:
    result = validate_query({"q": "", "max": "500"})
    assert isinstance(result, QueryRejected)
    assert set(result.details) == {"q", "max"}


def test_python_field_name_is_not_a_query_parameter() -> None:
    result = validate_query({"from_": "2024-01-01T00:00:00Z"})
    assert isinstance(result, QueryAccepted)
    assert result.query.request_params() == {"q": "technology", "max": 10}

    assert isinstance(validate_query({"from_": "garbage"}), QueryAccepted)


@pytest.mark.parametrize("value, expected", [("1e1", 10), (" 5 ", 5), ("5.0", 5), ("100", 100)])
def test_max_accepts_whole_numbers_in_any_notation(value: str, expected: int) -> None:
    result = validate_query({"max": value})
    assert isinstance(result, QueryAccepted)
    assert result.query.max == expected


@pytest.mark.parametrize("value", ["5.5", "1e3", "nan", "inf"])
def test_max_rejects_fractional_and_non_finite_numbers(value: str) -> None:
    result = validate_query({"max": value})
    assert isinstance(result, QueryRejected)
    assert "max" in result.details

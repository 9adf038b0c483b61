import pytest

from core.models import SearchRequest
from core.validation import InvalidArguments, validate_search_arguments


@pytest.mark.parametrize(
    "arguments",
    [
        None,
        "what is the capital of France",
        ["query"],
        42,
        {},
        {"query": None},
        {"query": 7},
        {"query": ["a", "b"]},
        {"model": "sonar", "temperature": 0.5},
    ],
)
def test_rejects_values_without_text_query(arguments):
    result = validate_search_arguments(arguments)
    assert isinstance(result, InvalidArguments)


def test_accepts_query_only():
    result = validate_search_arguments({"query": "capital of France"})
    assert result == SearchRequest(query="capital of France")


def test_accepts_all_fields():
    arguments = {
        "query": "q",
        "model": "sonar-pro",
        "max_tokens": 256,
        "temperature": 0.7,
        "search_recency_filter": "week",
    }
    result = validate_search_arguments(arguments)
    assert result == SearchRequest(
        query="q",
        model="sonar-pro",
        max_tokens=256,
        temperature=0.7,
        search_recency_filter="week",
    )


def test_query_content_is_not_inspected():
    assert isinstance(validate_search_arguments({"query": ""}), SearchRequest)
    assert isinstance(validate_search_arguments({"query": "日本の首都は？" * 500}), SearchRequest)


@pytest.mark.parametrize("recency", ["day", "week", "month", "year"])
def test_accepts_each_recency_filter(recency):
    assert isinstance(validate_search_arguments({"query": "q", "search_recency_filter": recency}), SearchRequest)


@pytest.mark.parametrize("recency", ["decade", "Month", "", 30])
def test_rejects_unknown_recency_filter(recency):
    result = validate_search_arguments({"query": "q", "search_recency_filter": recency})
    assert isinstance(result, InvalidArguments)
    assert "search_recency_filter" in result.reason


@pytest.mark.parametrize(
    "field, value",
    [
        ("model", 3),
        ("max_tokens", "100"),
        ("max_tokens", 10.5),
        ("max_tokens", True),
        ("temperature", "0.2"),
        ("temperature", False),
    ],
)
def test_rejects_wrongly_typed_optional_fields(field, value):
    result = validate_search_arguments({"query": "q", field: value})
    assert isinstance(result, InvalidArguments)
    assert field in result.reason


def test_integer_temperature_is_a_number():
    assert validate_search_arguments({"query": "q", "temperature": 1}).temperature == 1


def test_null_optional_fields_count_as_absent():
    result = validate_search_arguments(
        {"query": "q", "model": None, "max_tokens": None, "search_recency_filter": None}
    )
    assert result == SearchRequest(query="q")


def test_unknown_keys_are_ignored():
    assert validate_search_arguments({"query": "q", "extra": object()}) == SearchRequest(query="q")


def test_integral_float_max_tokens_is_rejected_like_the_advertised_integer_type():
    result = validate_search_arguments({"query": "q", "max_tokens": 100.0})
    assert isinstance(result, InvalidArguments)

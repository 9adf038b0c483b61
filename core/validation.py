# =============================================================================
# core/validation.py - Shape check for `search` arguments
# =============================================================================
#
# The host sends arbitrary JSON as tool arguments.  validate_search_arguments()
# decides whether that value looks like a SearchRequest and returns EITHER:
#   - a SearchRequest (the arguments are usable), or
#   - an InvalidArguments carrying the first reason it failed.
#
# The check is structural only.  It never looks at what the query says,
# how long it is, or whether max_tokens is sensible; the upstream judges that.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Union

from core.models import SearchRequest

RECENCY_FILTERS = ("day", "week", "month", "year")


@dataclass(frozen=True)
class InvalidArguments:
    reason: str


ValidationResult = Union[SearchRequest, InvalidArguments]


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but True is not a temperature.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_search_arguments(arguments: Any) -> ValidationResult:
    """Check tool arguments against the SearchRequest shape.

    Optional fields that are missing or explicitly null count as absent.
    Unknown keys are ignored.
    """
    if not isinstance(arguments, dict):
        return InvalidArguments(f"arguments must be an object, got {type(arguments).__name__}")

    query = arguments.get("query")
    if not isinstance(query, str):
        return InvalidArguments("query must be a string")

    model = arguments.get("model")
    if model is not None and not isinstance(model, str):
        return InvalidArguments("model must be a string")

    max_tokens = arguments.get("max_tokens")
    if max_tokens is not None and not _is_integer(max_tokens):
        return InvalidArguments("max_tokens must be an integer")

    temperature = arguments.get("temperature")
    if temperature is not None and not _is_number(temperature):
        return InvalidArguments("temperature must be a number")

    recency = arguments.get("search_recency_filter")
    if recency is not None and recency not in RECENCY_FILTERS:
        return InvalidArguments(
            f"search_recency_filter must be one of {', '.join(RECENCY_FILTERS)}"
        )

    return SearchRequest(
        query=query,
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        search_recency_filter=recency,
    )

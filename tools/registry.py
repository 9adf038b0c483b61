# =============================================================================
# tools/registry.py - The one tool this server exposes
# =============================================================================
#
# Capability discovery always answers with the same single descriptor.
# The LLM reads `description` and the property descriptions to decide when
# and how to call `search`, so keep them short and literal.
# =============================================================================

import copy

from core.perplexity import DEFAULT_MODEL, DEFAULT_RECENCY_FILTER, DEFAULT_TEMPERATURE
from core.validation import RECENCY_FILTERS

SEARCH_TOOL_NAME = "search"
SEARCH_TOOL_DESCRIPTION = "Search using Perplexity AI"

SEARCH_INPUT_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "The search query",
        },
        "model": {
            "type": "string",
            "description": "Model to use for the search",
            "default": DEFAULT_MODEL,
        },
        "max_tokens": {
            "type": "integer",
            "description": "Maximum number of tokens to generate",
        },
        "temperature": {
            "type": "number",
            "description": "Sampling temperature",
            "default": DEFAULT_TEMPERATURE,
        },
        "search_recency_filter": {
            "type": "string",
            "description": "Filter for search recency",
            "enum": list(RECENCY_FILTERS),
            "default": DEFAULT_RECENCY_FILTER,
        },
    },
    "required": ["query"],
}


def search_tool_descriptor() -> dict:
    """Descriptor for `search` in the shape tools/list returns."""
    return {
        "name": SEARCH_TOOL_NAME,
        "description": SEARCH_TOOL_DESCRIPTION,
        "inputSchema": copy.deepcopy(SEARCH_INPUT_SCHEMA),
    }


def list_tools() -> list[dict]:
    return [search_tool_descriptor()]

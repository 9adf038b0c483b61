# =============================================================================
# tools/dispatcher.py - Route a tool call to the Perplexity API
# =============================================================================
#
# THE FLOW (one call, no state kept between calls):
#   1. Unknown tool name         → McpError(METHOD_NOT_FOUND), no HTTP
#   2. Arguments fail validation → McpError(INVALID_PARAMS), no HTTP
#   3. POST /chat/completions with defaults filled in
#   4. httpx failure             → ToolResult flagged is_error, NOT raised
#   5. Success                   → ToolResult with {answer, citations, usage}
#                                  as 2-space indented JSON text
#
# Anything else (a malformed 2xx reply, a bug) propagates to the caller.
# =============================================================================

import logging
from typing import Any

import httpx
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData

from core.models import SearchAnswer, ToolResult
from core.perplexity import PerplexityClient, describe_http_error
from core.validation import InvalidArguments, validate_search_arguments
from tools.registry import SEARCH_TOOL_NAME

logger = logging.getLogger(__name__)

INVALID_ARGUMENTS_MESSAGE = "Invalid search arguments. Required: query (string)"
UPSTREAM_ERROR_PREFIX = "Perplexity API error: "


class SearchDispatcher:
    """Handles tools/call requests for the `search` tool."""

    def __init__(self, client: PerplexityClient) -> None:
        self._client = client

    async def dispatch(self, name: str, arguments: Any) -> ToolResult:
        if name != SEARCH_TOOL_NAME:
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        request = validate_search_arguments(arguments)
        if isinstance(request, InvalidArguments):
            logger.info("Rejected search arguments: %s", request.reason)
            raise McpError(ErrorData(code=INVALID_PARAMS, message=INVALID_ARGUMENTS_MESSAGE))

        try:
            reply = await self._client.search(request)
        except httpx.HTTPError as exc:
            message = describe_http_error(exc)
            logger.warning("Perplexity request failed: %s", message)
            return ToolResult.error(UPSTREAM_ERROR_PREFIX + message)

        return ToolResult.text(SearchAnswer.from_reply(reply).to_json())

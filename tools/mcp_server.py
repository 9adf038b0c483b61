# =============================================================================
# tools/mcp_server.py - FastMCP server exposing the `search` tool
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server (handshake, stdio transport) and answers the
#   two tool requests from our own registry and dispatcher.
#
# HOW IT WORKS (the flow):
#   1. tools/list  → the single descriptor from tools/registry.py
#   2. tools/call  → SearchDispatcher.dispatch(name, arguments)
#   3. The dispatcher's ToolResult goes back as a CallToolResult, with
#      `isError: true` when the upstream call failed
#   4. McpError from the dispatcher (unknown tool, bad arguments) reaches
#      the protocol layer untouched and goes out as a JSON-RPC error
#
# Both handlers are installed on FastMCP's low-level server.  FastMCP's own
# tool manager would turn McpError into an error-flagged tool result.
# =============================================================================

import json
import logging
import sys
from typing import Any

from fastmcp import FastMCP
from mcp import types

from core.config import SERVER_NAME, SERVER_VERSION
from tools.dispatcher import SearchDispatcher
from tools.registry import list_tools

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport.  Every log line goes to STDERR, otherwise it
# would corrupt the JSON-RPC stream.
#
#     - CYAN for incoming requests (tool name + arguments)
#     - GREEN for response JSON
#     - YELLOW for status / error lines
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, params: Any) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    if isinstance(params, dict):
        param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    else:
        param_str = repr(params)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(result, separators=(',', ':'), ensure_ascii=False)}{_RESET}"
    )
    return result


# =============================================================================
# Request handlers
# =============================================================================
def _list_tools_handler():
    async def handle(request: types.ListToolsRequest) -> types.ServerResult:
        tools = [types.Tool(**descriptor) for descriptor in list_tools()]
        return types.ServerResult(types.ListToolsResult(tools=tools))

    return handle


def _call_tool_handler(dispatcher: SearchDispatcher):
    async def handle(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        _log_request(name, request.params.arguments)

        result = await dispatcher.dispatch(name, request.params.arguments)
        if result.is_error:
            _log_status(result.first_text)
        else:
            _log_response(name, result.to_dict())
        return types.ServerResult(types.CallToolResult.model_validate(result.to_dict()))

    return handle


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
# "perplexity-server" is the identity the host sees during the handshake.
# =============================================================================
def create_server(dispatcher: SearchDispatcher) -> FastMCP:
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    handlers = mcp._mcp_server.request_handlers
    handlers[types.ListToolsRequest] = _list_tools_handler()
    handlers[types.CallToolRequest] = _call_tool_handler(dispatcher)
    return mcp

# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP-facing layer.
#
#   registry.py    the static `search` tool descriptor
#   dispatcher.py  name check → validation → Perplexity call → ToolResult
#   mcp_server.py  FastMCP wiring and tool-call logging
#
# Business rules (defaults, payload shape, reply parsing) stay in core/.
# =============================================================================

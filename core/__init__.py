# =============================================================================
# core/__init__.py
# =============================================================================
# Domain logic for the Perplexity search adapter: settings, data models,
# argument validation and the upstream HTTP client.
#
# Nothing in this package imports FastMCP or the MCP SDK.  The protocol
# wiring lives in tools/.
# =============================================================================

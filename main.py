# =============================================================================
# main.py - Entry Point for the Perplexity MCP server
# =============================================================================
#
# HOW TO RUN:
#   PERPLEXITY_API_KEY=pplx-... uv run python main.py
#   (or, once installed:  perplexity-search-mcp)
#
# WHAT HAPPENS:
#   1. Settings are read once from the environment (.env honoured).
#      No PERPLEXITY_API_KEY → log the problem and exit with status 1.
#   2. One PerplexityClient is opened for the lifetime of the process.
#   3. The FastMCP server is built around it and served on stdio.
#   4. SIGINT / SIGTERM stop the server task; leaving the `async with`
#      closes the HTTP client, and the process exits 0.
#      EOF on stdin (the host went away) ends the server the same way.
# =============================================================================

import asyncio
import contextlib
import logging
import signal
import sys

from core.config import ConfigurationError, Settings, load_settings
from core.perplexity import PerplexityClient
from tools.dispatcher import SearchDispatcher
from tools.mcp_server import configure_logging, create_server

logger = logging.getLogger("perplexity_server")


def _install_shutdown_hook(stop: asyncio.Event) -> None:
    """Register the one shutdown path: a termination signal sets `stop`."""
    loop = asyncio.get_running_loop()

    def _on_signal(signum: int) -> None:
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        stop.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, _on_signal, signum)
        except (NotImplementedError, RuntimeError):
            # Windows event loops: Ctrl+C still arrives as KeyboardInterrupt.
            pass


async def serve(settings: Settings) -> None:
    stop = asyncio.Event()
    _install_shutdown_hook(stop)

    async with PerplexityClient(settings) as client:
        server = create_server(SearchDispatcher(client))
        server_task = asyncio.create_task(server.run_async(transport="stdio"))
        stop_task = asyncio.create_task(stop.wait())
        logger.info("Perplexity MCP server running on stdio")

        done, _ = await asyncio.wait(
            {server_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
        )
        stop_task.cancel()
        if server_task not in done:
            server_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await server_task
        elif server_task.exception() is not None:
            logger.error("[MCP Error] %s", server_task.exception())
            raise server_task.exception()


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("%s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    sys.exit(0)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()

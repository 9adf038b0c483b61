# =============================================================================
# core/perplexity.py - Perplexity chat-completions client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. build_chat_payload()   SearchRequest → JSON body for POST /chat/completions
#   2. PerplexityClient       one httpx.AsyncClient bound to the base URL and
#                             the bearer credential, held for the process lifetime
#   3. describe_http_error()  turns an httpx failure into the message the host sees
#
# WHAT IT DOES NOT DO:
#   No retries, no caching, no streaming.  One call, one POST.
#   HTTP failures are raised as httpx.HTTPError; deciding that they become an
#   error-flagged tool result is the dispatcher's job.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx

from core.config import Settings
from core.models import SearchRequest, UpstreamReply

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"

DEFAULT_MODEL = "llama-3.1-sonar-small-128k-online"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_RECENCY_FILTER = "month"
SYSTEM_PROMPT = "Be precise and concise."

# Sent on every request; callers cannot change these.
FIXED_PARAMETERS: dict[str, Any] = {
    "top_p": 0.9,
    "search_domain_filter": ["perplexity.ai"],
    "return_images": False,
    "return_related_questions": False,
    "top_k": 0,
    "stream": False,
    "presence_penalty": 0,
    "frequency_penalty": 1,
}


def build_chat_payload(request: SearchRequest) -> dict[str, Any]:
    """Translate a validated SearchRequest into the upstream request body.

    Defaults are filled in here: model, temperature 0.2 and recency "month".
    max_tokens is left out entirely when the caller did not give one, so the
    upstream applies its own limit.
    """
    payload: dict[str, Any] = {
        "model": request.model or DEFAULT_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": request.query},
        ],
    }
    if request.max_tokens is not None:
        payload["max_tokens"] = request.max_tokens
    payload["temperature"] = (
        DEFAULT_TEMPERATURE if request.temperature is None else request.temperature
    )
    payload.update(FIXED_PARAMETERS)
    payload["search_domain_filter"] = list(FIXED_PARAMETERS["search_domain_filter"])
    payload["search_recency_filter"] = request.search_recency_filter or DEFAULT_RECENCY_FILTER
    return payload


def describe_http_error(exc: httpx.HTTPError) -> str:
    """Pick the most useful message out of a failed upstream call.

    A JSON body with an `error` field wins.  Perplexity sends either a plain
    string or an object with a `message`.  Anything else falls back to the
    exception text.
    """
    response: Optional[httpx.Response] = getattr(exc, "response", None)
    if isinstance(exc, httpx.HTTPStatusError) and response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            if isinstance(error, str):
                return error
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                return error["message"]
            return json.dumps(error, ensure_ascii=False)
    return str(exc) or type(exc).__name__


class PerplexityClient:
    """Async client for the Perplexity API.

    Use as an async context manager so the connection pool is closed on
    shutdown:

        async with PerplexityClient(settings) as client:
            reply = await client.search(request)
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={
                "Authorization": f"Bearer {settings.api_key}",
                "Content-Type": "application/json",
            },
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "PerplexityClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def chat_completion(self, payload: dict[str, Any]) -> Any:
        """POST a chat-completion body and return the decoded JSON reply.

        Raises:
            httpx.HTTPStatusError: the upstream answered with a non-2xx status.
            httpx.RequestError: the request never got a response.
        """
        logger.debug(
            "POST %s model=%s recency=%s",
            CHAT_COMPLETIONS_PATH,
            payload.get("model"),
            payload.get("search_recency_filter"),
        )
        response = await self._http.post(CHAT_COMPLETIONS_PATH, json=payload)
        response.raise_for_status()
        return response.json()

    async def search(self, request: SearchRequest) -> UpstreamReply:
        """Run one search and parse the reply.

        Raises:
            httpx.HTTPError: transport failure or non-2xx status.
            UpstreamReplyError: a 2xx reply without a usable answer.
        """
        data = await self.chat_completion(build_chat_payload(request))
        return UpstreamReply.from_payload(data)

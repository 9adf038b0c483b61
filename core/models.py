# =============================================================================
# core/models.py - Data Models (the "nouns" of the system)
# =============================================================================
#
# Every value here lives for exactly one tool call:
#
#   SearchRequest  →  validated tool arguments (defaults NOT yet applied)
#   UpstreamReply  →  the parts of a Perplexity chat completion we keep
#   SearchAnswer   →  {answer, citations, usage}, the payload the host sees
#   ToolResult     →  the protocol-shaped result: content items + error flag
#
# None of these import the MCP framework.  The tools/ layer converts them
# into whatever FastMCP expects.
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Optional


class UpstreamReplyError(Exception):
    """The upstream answered 2xx but the body carries no usable answer."""


@dataclass(frozen=True)
class SearchRequest:
    """Arguments of one `search` call, exactly as the caller supplied them.

    Optional fields stay None when absent.  The dispatcher decides the
    defaults when it builds the upstream request.
    """

    query: str
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    search_recency_filter: Optional[str] = None


@dataclass(frozen=True)
class UpstreamReply:
    """A Perplexity chat completion, reduced to what we pass on."""

    answer: str
    citations: Optional[list] = None
    usage: Optional[dict] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "UpstreamReply":
        """Parse a decoded JSON body.

        Raises:
            UpstreamReplyError: the body is not an object, `choices` is
                missing or empty, or the first choice has no message content.
        """
        if not isinstance(payload, dict):
            raise UpstreamReplyError(
                f"Perplexity reply is not a JSON object: {type(payload).__name__}"
            )

        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise UpstreamReplyError("Perplexity reply contained no choices")

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict) or "content" not in message:
            raise UpstreamReplyError("Perplexity reply choice has no message content")

        return cls(
            answer=message["content"],
            citations=payload.get("citations"),
            usage=payload.get("usage"),
        )


@dataclass(frozen=True)
class SearchAnswer:
    """The structured answer returned to the host."""

    answer: str
    citations: Optional[list] = None
    usage: Optional[dict] = None

    @classmethod
    def from_reply(cls, reply: UpstreamReply) -> "SearchAnswer":
        return cls(answer=reply.answer, citations=reply.citations, usage=reply.usage)

    def to_dict(self) -> dict:
        # Keys the upstream left out stay out.
        result: dict[str, Any] = {"answer": self.answer}
        if self.citations is not None:
            result["citations"] = self.citations
        if self.usage is not None:
            result["usage"] = self.usage
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


@dataclass
class ToolResult:
    """What a tool call hands back: text content items and an error flag."""

    content: list[dict] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}], is_error=True)

    @property
    def first_text(self) -> str:
        return self.content[0]["text"] if self.content else ""

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"content": list(self.content)}
        if self.is_error:
            result["isError"] = True
        return result

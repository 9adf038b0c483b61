# =============================================================================
# core/config.py - Process-wide Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Perplexity credential (and a few optional knobs) from the
#   environment ONCE at startup and freezes them into a Settings value.
#   That value is handed to the HTTP client; nothing reads os.environ later.
#
# ENVIRONMENT VARIABLES:
#   PERPLEXITY_API_KEY   (required)  Bearer token for api.perplexity.ai
#   PERPLEXITY_BASE_URL  (optional)  Defaults to https://api.perplexity.ai
#   PERPLEXITY_TIMEOUT   (optional)  Seconds per upstream call, default 60
#   LOG_LEVEL            (optional)  Defaults to INFO
#
#   A .env file in the working directory is honoured via python-dotenv.
#   Variables already set in the environment take precedence over it.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

SERVER_NAME = "perplexity-server"
SERVER_VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://api.perplexity.ai"
DEFAULT_TIMEOUT_SECONDS = 60.0

API_KEY_ENV = "PERPLEXITY_API_KEY"


class ConfigurationError(Exception):
    """Raised when the process cannot start because configuration is missing or bad."""


@dataclass(frozen=True)
class Settings:
    """Immutable startup configuration."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Never print the credential.
        return (
            f"Settings(api_key='***', base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, log_level={self.log_level!r})"
        )


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"PERPLEXITY_TIMEOUT must be a number of seconds, got {raw!r}"
        ) from exc
    if value <= 0:
        raise ConfigurationError(f"PERPLEXITY_TIMEOUT must be positive, got {raw!r}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  When omitted, a .env file is loaded
                 into os.environ first and os.environ is used.

    Raises:
        ConfigurationError: PERPLEXITY_API_KEY is unset or blank, or an
                            optional variable holds an unusable value.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    api_key = (environ.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} environment variable is required")

    base_url = (environ.get("PERPLEXITY_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")

    return Settings(
        api_key=api_key,
        base_url=base_url,
        timeout_seconds=_parse_timeout(environ.get("PERPLEXITY_TIMEOUT")),
        log_level=(environ.get("LOG_LEVEL") or "INFO").strip().upper(),
    )

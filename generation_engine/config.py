"""Run configuration for the hot-topic idea pipeline.

Settings are read once from the environment at startup and passed explicitly
to the topic seeder and the idea generator.

Environment Variables:
    Required:
        YUNWU_API_KEY / ANTHROPIC_API_KEY: generative-text API key (first non-empty wins)
        TIANAPI_KEY: trending-topic API key

    Optional:
        API_BASE_URL: generative-text API host (default: https://yunwu.ai)
        MODEL_ID: model identifier (default: claude-sonnet-4-5-20250929)
        TOPIC_SOURCE_URL: hot-list endpoint
        REPORTS_DIR: output directory for HTML reports (default: reports)
        MAX_RETRIES: generation attempts before giving up (default: 3)
        MAX_TOKENS: output-token ceiling per generation call (default: 8000)
        HTTP_TIMEOUT: topic fetch timeout in seconds (default: 30)
        REPORT_TIMEZONE: timezone of the timestamp shown in the report
        LOG_LEVEL: logging verbosity (default: INFO)
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://yunwu.ai"
DEFAULT_MODEL_ID = "claude-sonnet-4-5-20250929"
DEFAULT_TOPIC_SOURCE_URL = "https://apis.tianapi.com/weibohot/index"
DEFAULT_TOP_N = 10

_TOP_N_PATTERN = re.compile(r"top(\d+)", re.IGNORECASE)


def _env(environ: Mapping[str, str], key: str, default: str = "") -> str:
    return (environ.get(key) or "").strip() or default


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    """Get integer variable with default.

    Raises:
        ConfigurationError: If value is set but cannot be parsed as a positive integer
    """
    val = _env(environ, key)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        raise ConfigurationError(f"Invalid integer value for {key}: '{val}'")
    if parsed <= 0:
        raise ConfigurationError(f"{key} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True)
class Settings:
    """Immutable settings for one pipeline run."""

    api_key: str
    tianapi_key: str
    api_base_url: str = DEFAULT_API_BASE_URL
    model_id: str = DEFAULT_MODEL_ID
    topic_source_url: str = DEFAULT_TOPIC_SOURCE_URL
    reports_dir: Path = field(default_factory=lambda: Path("reports"))
    max_retries: int = 3
    max_tokens: int = 8000
    http_timeout: int = 30
    report_timezone: str = "Asia/Shanghai"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to ``os.environ``).

        Raises:
            ConfigurationError: when a required credential is missing or a
                numeric setting is malformed.
        """
        environ = os.environ if environ is None else environ

        api_key = _env(environ, "YUNWU_API_KEY") or _env(environ, "ANTHROPIC_API_KEY")
        if not api_key:
            raise ConfigurationError("YUNWU_API_KEY or ANTHROPIC_API_KEY environment variable is required")

        tianapi_key = _env(environ, "TIANAPI_KEY")
        if not tianapi_key:
            raise ConfigurationError("TIANAPI_KEY environment variable is required")

        return cls(
            api_key=api_key,
            tianapi_key=tianapi_key,
            api_base_url=_env(environ, "API_BASE_URL", DEFAULT_API_BASE_URL),
            model_id=_env(environ, "MODEL_ID", DEFAULT_MODEL_ID),
            topic_source_url=_env(environ, "TOPIC_SOURCE_URL", DEFAULT_TOPIC_SOURCE_URL),
            reports_dir=Path(_env(environ, "REPORTS_DIR", "reports")),
            max_retries=_env_int(environ, "MAX_RETRIES", 3),
            max_tokens=_env_int(environ, "MAX_TOKENS", 8000),
            http_timeout=_env_int(environ, "HTTP_TIMEOUT", 30),
            report_timezone=_env(environ, "REPORT_TIMEZONE", "Asia/Shanghai"),
            log_level=_env(environ, "LOG_LEVEL", "INFO").upper(),
        )


def parse_top_n(argv: Sequence[str], default: int = DEFAULT_TOP_N) -> int:
    """Read the analysis count from a ``top<N>`` positional argument.

    Only the first argument is considered; anything that does not match (or
    asks for zero topics) falls back to *default*.
    """
    if not argv:
        return default
    match = _TOP_N_PATTERN.search(argv[0])
    if not match:
        return default
    top_n = int(match.group(1))
    return top_n if top_n > 0 else default

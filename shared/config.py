"""
Environment-based configuration for the reservation-status probe.

This module exposes a small, typed configuration surface shared by the
probe and its callers (the CLI, schedulers). All values are sourced from
environment variables with sensible, non-secret defaults.

No secrets or credentials are hard-coded here; the remote browser token
must be provided via the environment (or python-dotenv in local development).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

Environment = Literal["local", "dev", "staging", "prod"]

# Bounds for a single check's timeout (ms); callers clamp before building a request.
MIN_CHECK_TIMEOUT_MS = 15_000
MAX_CHECK_TIMEOUT_MS = 45_000
DEFAULT_CHECK_TIMEOUT_MS = 30_000

# Path used when the configured endpoint has none (browserless Chromium route).
DEFAULT_BROWSER_WS_PATH = "/chromium"


def clamp_timeout_ms(value: Optional[int], default: int = DEFAULT_CHECK_TIMEOUT_MS) -> int:
    """Clamp a timeout to [MIN_CHECK_TIMEOUT_MS, MAX_CHECK_TIMEOUT_MS]; None uses default."""
    if value is None:
        value = default
    return max(MIN_CHECK_TIMEOUT_MS, min(MAX_CHECK_TIMEOUT_MS, int(value)))


@dataclass(frozen=True)
class AppConfig:
    """
    Top-level application configuration.

    Holds logging settings and the remote browser endpoint. The probe itself
    receives a resolved endpoint string; this config is read by callers.
    """

    environment: Environment
    log_level: str

    # Optional file path for structured JSON logs; when set, logs are written
    # to file (and stdout if log_stdout).
    log_file: Optional[str]
    # When True, logs go to stdout. When False, only file (if LOG_FILE set). Default True.
    log_stdout: bool

    # Remote browser service (websocket URL and optional auth token).
    browserless_ws: Optional[str]
    browserless_token: Optional[str]

    # Default per-check timeout, already clamped.
    check_timeout_ms: int

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Construct configuration from environment variables.

        All fields have sensible defaults suitable for local development,
        except BROWSERLESS_WS which has no default.
        """

        environment = os.getenv("APP_ENV", "local")

        if environment not in {"local", "dev", "staging", "prod"}:
            raise ValueError(f"Unsupported APP_ENV value: {environment!r}")

        log_stdout_raw = (os.getenv("LOG_STDOUT") or "true").strip().lower()
        log_stdout = log_stdout_raw in ("true", "1", "yes")

        def _check_timeout_ms() -> int:
            raw = os.getenv("CHECK_TIMEOUT_MS", str(DEFAULT_CHECK_TIMEOUT_MS)).strip()
            try:
                value = int(raw)
            except ValueError:
                return DEFAULT_CHECK_TIMEOUT_MS
            return clamp_timeout_ms(value)

        return cls(
            environment=environment,  # type: ignore[arg-type]
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            log_stdout=log_stdout,
            browserless_ws=(os.getenv("BROWSERLESS_WS") or "").strip() or None,
            browserless_token=(os.getenv("BROWSERLESS_TOKEN") or "").strip() or None,
            check_timeout_ms=_check_timeout_ms(),
        )


def get_config() -> AppConfig:
    """
    Helper to obtain the current configuration.

    In long-lived processes, construct a single `AppConfig` at startup and
    pass it explicitly instead of calling this repeatedly.
    """

    return AppConfig.from_env()


def resolve_browser_ws_endpoint(raw: Optional[str], token: Optional[str] = None) -> str:
    """
    Turn a configured websocket URL into a ready-to-use endpoint.

    Adds DEFAULT_BROWSER_WS_PATH when the URL has no path, the auth token
    (unless already present), and the stealth / blockAds flags. Existing
    query parameters win over the added ones.
    """
    raw = (raw or "").strip()
    if not raw:
        raise ValueError("BROWSERLESS_WS is not configured")

    parts = urlsplit(raw)
    if parts.scheme not in ("ws", "wss"):
        raise ValueError(f"Unsupported browser endpoint scheme: {parts.scheme!r}")

    path = parts.path if parts.path not in ("", "/") else DEFAULT_BROWSER_WS_PATH
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    if token and "token" not in query:
        query["token"] = token
    query.setdefault("stealth", "true")
    query.setdefault("blockAds", "true")

    return urlunsplit((parts.scheme, parts.netloc, path, urlencode(query), parts.fragment))

"""
Playwright-based browser helpers for the reservation check.

Connection, navigation with retries, best-effort page interaction, and the
pure text/URL heuristics the classifier relies on.

Public API: re-exports the symbols used by the orchestrator and tests so that
`from probe.browser import ...` stays valid.
"""

from __future__ import annotations

from probe.browser.connection import BrowserSession, connect_browser, create_browser_context
from probe.browser.heuristics import (
    has_upsell_url_hint,
    is_detail_page_url,
    match_bot_block_phrase,
    match_cancellation_phrase,
    match_cancelled_url,
)
from probe.browser.interaction import (
    dismiss_cookie_banner,
    dismiss_upsell_modal,
    find_boarding_pass_control,
    read_body_text,
    try_visible,
    wait_for_url_stable,
)
from probe.browser.navigation_retry import (
    MAX_NAV_ATTEMPTS,
    NAVIGATION_PLAN,
    goto_with_retries,
    is_retriable_navigation_error,
)
from probe.browser.profile import LATAM_PROFILE, SiteProfile
from probe.browser.text import (
    fold_text,
    normalize_whitespace,
    redact_url,
    summarize_error,
    truncate_note,
)

__all__ = [
    # connection
    "BrowserSession",
    "connect_browser",
    "create_browser_context",
    # heuristics
    "has_upsell_url_hint",
    "is_detail_page_url",
    "match_bot_block_phrase",
    "match_cancellation_phrase",
    "match_cancelled_url",
    # interaction
    "dismiss_cookie_banner",
    "dismiss_upsell_modal",
    "find_boarding_pass_control",
    "read_body_text",
    "try_visible",
    "wait_for_url_stable",
    # navigation
    "MAX_NAV_ATTEMPTS",
    "NAVIGATION_PLAN",
    "goto_with_retries",
    "is_retriable_navigation_error",
    # profile
    "LATAM_PROFILE",
    "SiteProfile",
    # text
    "fold_text",
    "normalize_whitespace",
    "redact_url",
    "summarize_error",
    "truncate_note",
]

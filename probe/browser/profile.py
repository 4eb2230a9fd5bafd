"""
Site profile: the static pattern data the probe runs against.

Selector and phrase lists are data, not control flow. A markup or locale
change on the target site means a new SiteProfile, not new code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import quote

from probe.browser import constants as c


def _compile_alternation(patterns: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile("|".join(f"(?:{p})" for p in patterns), re.IGNORECASE)


@dataclass(frozen=True)
class SiteProfile:
    """Everything site-specific: URLs, context settings, selectors and phrases."""

    origin: str
    landing_url: str
    detail_url: str
    # Substring of any URL on the reservation-detail page.
    detail_url_marker: str
    locale: str
    accept_language: str
    viewport: dict
    user_agent: str
    cookie_selectors: tuple[str, ...]
    cancelled_url_patterns: tuple[str, ...]
    cancellation_phrases: tuple[str, ...]
    bot_block_phrases: tuple[str, ...]
    upsell_url_hints: tuple[str, ...]
    upsell_text_patterns: tuple[str, ...]
    upsell_dismiss_labels: tuple[str, ...]
    boarding_pass_labels: tuple[str, ...]
    retriable_navigation_errors: tuple[str, ...] = field(
        default=c.RETRIABLE_NAVIGATION_ERRORS
    )

    def build_target_url(self, purchase_code: str, last_name: str) -> str:
        """Detail-page URL with both parameters percent-encoded."""
        return (
            f"{self.detail_url}?orderId={quote(purchase_code, safe='')}"
            f"&lastname={quote(last_name, safe='')}"
        )

    @property
    def upsell_text_regex(self) -> re.Pattern[str]:
        return _compile_alternation(self.upsell_text_patterns)

    @property
    def upsell_dismiss_regex(self) -> re.Pattern[str]:
        return _compile_alternation(self.upsell_dismiss_labels)

    @property
    def boarding_pass_regex(self) -> re.Pattern[str]:
        return _compile_alternation(self.boarding_pass_labels)


LATAM_PROFILE = SiteProfile(
    origin=c.SITE_ORIGIN,
    landing_url=c.LANDING_URL,
    detail_url=f"{c.LANDING_URL}{c.DETAIL_PATH}",
    detail_url_marker=c.DETAIL_PATH,
    locale=c.CONTEXT_LOCALE,
    accept_language=c.ACCEPT_LANGUAGE,
    viewport=dict(c.DESKTOP_VIEWPORT),
    user_agent=c.DESKTOP_USER_AGENT,
    cookie_selectors=c.COOKIE_CONSENT_SELECTORS,
    cancelled_url_patterns=c.CANCELLED_URL_PATTERNS,
    cancellation_phrases=c.CANCELLATION_PHRASES,
    bot_block_phrases=c.BOT_BLOCK_PHRASES,
    upsell_url_hints=c.UPSELL_URL_HINTS,
    upsell_text_patterns=c.UPSELL_TEXT_PATTERNS,
    upsell_dismiss_labels=c.UPSELL_DISMISS_LABELS,
    boarding_pass_labels=c.BOARDING_PASS_LABELS,
)

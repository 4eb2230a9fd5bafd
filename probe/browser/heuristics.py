"""
Pure text/URL matchers for cancellation, bot-block and detail-page signals.

No page access, no I/O. Each matcher returns the first pattern that fired
(or None) so callers can put it in the result note.
"""

from __future__ import annotations

import re
from typing import Optional

from probe.browser.profile import LATAM_PROFILE, SiteProfile
from probe.browser.text import fold_text


def match_cancelled_url(final_url: str | None, profile: SiteProfile = LATAM_PROFILE) -> Optional[str]:
    """Known order-not-found error page pattern contained in the URL, if any."""
    low_url = (final_url or "").lower()
    for pattern in profile.cancelled_url_patterns:
        if pattern.lower() in low_url:
            return pattern
    return None


def match_cancellation_phrase(
    body_text: str | None, profile: SiteProfile = LATAM_PROFILE
) -> Optional[str]:
    """Cancellation phrase contained in the folded body text, if any."""
    folded = fold_text(body_text)
    if not folded:
        return None
    for phrase in profile.cancellation_phrases:
        if fold_text(phrase) in folded:
            return phrase
    return None


def match_bot_block_phrase(
    body_text: str | None, profile: SiteProfile = LATAM_PROFILE
) -> Optional[str]:
    """Bot-block / CAPTCHA phrase found as whole words in the folded body text, if any."""
    folded = fold_text(body_text)
    if not folded:
        return None
    for phrase in profile.bot_block_phrases:
        if re.search(rf"\b{re.escape(fold_text(phrase))}\b", folded):
            return phrase
    return None


def is_detail_page_url(final_url: str | None, profile: SiteProfile = LATAM_PROFILE) -> bool:
    """True when the URL is on the reservation-detail page."""
    return profile.detail_url_marker.lower() in (final_url or "").lower()


def has_upsell_url_hint(url: str | None, profile: SiteProfile = LATAM_PROFILE) -> bool:
    low_url = (url or "").lower()
    return any(hint in low_url for hint in profile.upsell_url_hints)

"""
Reservation status classification from a page snapshot (pure functions).

Order matters: cancellation, then bot-block, then confirmation. A blocked
page is never read as confirmed, and confirmation needs a positive signal
(upsell modal or boarding-pass control), not just the absence of an error.
"""

from __future__ import annotations

from probe.browser.heuristics import (
    is_detail_page_url,
    match_bot_block_phrase,
    match_cancellation_phrase,
    match_cancelled_url,
)
from probe.browser.profile import LATAM_PROFILE, SiteProfile
from probe.browser.text import truncate_note
from probe.models import CANCELLED, CONFIRMED, NEEDS_REVIEW, CheckResult


def needs_detail_signals(
    final_url: str,
    body_text: str,
    *,
    profile: SiteProfile = LATAM_PROFILE,
) -> bool:
    """
    True when classify() will reach the detail-page branch.

    The orchestrator only probes the page for modal / boarding-pass signals
    in that case.
    """
    if match_cancelled_url(final_url, profile) or match_cancellation_phrase(body_text, profile):
        return False
    if match_bot_block_phrase(body_text, profile):
        return False
    return is_detail_page_url(final_url, profile)


def classify(
    final_url: str,
    body_text: str,
    modal_present: bool,
    boarding_pass_present: bool,
    *,
    profile: SiteProfile = LATAM_PROFILE,
) -> CheckResult:
    """
    Classify a check from its final URL, body text and the two confirmation signals.

    Returns:
        CheckResult with status CANCELLED, CONFIRMED or NEEDS_REVIEW and a
        note naming the signal that decided it.
    """
    final_url = final_url or ""

    url_pattern = match_cancelled_url(final_url, profile)
    if url_pattern:
        return _result(CANCELLED, final_url, f"Order-not-found error page reached ({url_pattern}).")

    phrase = match_cancellation_phrase(body_text, profile)
    if phrase:
        return _result(CANCELLED, final_url, f"Cancellation message on page: '{phrase}'.")

    block = match_bot_block_phrase(body_text, profile)
    if block:
        return _result(
            NEEDS_REVIEW,
            final_url,
            f"Possible bot block or CAPTCHA ('{block}'); page content withheld, manual review needed.",
        )

    if is_detail_page_url(final_url, profile):
        if modal_present and boarding_pass_present:
            return _result(
                CONFIRMED,
                final_url,
                "Reservation detail page with upsell modal and boarding pass control.",
            )
        if modal_present:
            return _result(CONFIRMED, final_url, "Reservation detail page with upsell modal.")
        if boarding_pass_present:
            return _result(
                CONFIRMED, final_url, "Reservation detail page with boarding pass control."
            )
        return _result(
            NEEDS_REVIEW,
            final_url,
            "Reached detail page but no corroborating signal (no upsell modal, no boarding pass).",
        )

    return _result(NEEDS_REVIEW, final_url, "Inconclusive final URL.")


def _result(status, final_url: str, note: str) -> CheckResult:
    return CheckResult(status=status, final_url=final_url, note=truncate_note(note))

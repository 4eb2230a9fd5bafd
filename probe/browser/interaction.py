"""
Best-effort page interaction: consent banner, upsell modal, URL settling, text reads.

Nothing here raises. Every failure degrades to "no banner", "not visible",
"no text": the classifier treats a missing signal as absent, never as an error.
"""

from __future__ import annotations

import asyncio
import time

from playwright.async_api import Locator, Page

from probe.browser.constants import (
    BOARDING_PASS_VISIBILITY_TIMEOUT_MS,
    BODY_TEXT_TIMEOUT_MS,
    CLICK_TIMEOUT_MS,
    COOKIE_SETTLE_AFTER_CLICK_MS,
    COOKIE_VISIBILITY_TIMEOUT_MS,
    MODAL_TEXT_TIMEOUT_MS,
    URL_POLL_INTERVAL_MS,
    URL_STABILIZE_WINDOW_MS,
    URL_STABLE_FOR_MS,
)
from probe.browser.heuristics import has_upsell_url_hint
from probe.browser.profile import LATAM_PROFILE, SiteProfile
from shared.logging import get_logger

logger = get_logger(__name__)


async def try_visible(locator: Locator, timeout_ms: int) -> bool:
    """Wait up to timeout_ms for locator to be visible; any error means not visible."""
    try:
        await locator.wait_for(state="visible", timeout=timeout_ms)
        return True
    except Exception:
        return False


def _frames_main_first(page: Page) -> list:
    main = page.main_frame
    return [main] + [frame for frame in page.frames if frame is not main]


async def dismiss_cookie_banner(page: Page, selectors: tuple[str, ...]) -> bool:
    """
    Click the first visible consent button: main frame first, then sub-frames.

    Returns True when a button was clicked.
    """
    try:
        frames = _frames_main_first(page)
    except Exception:
        return False

    for frame in frames:
        for selector in selectors:
            try:
                candidates = frame.locator(selector)
                if await candidates.count() == 0:
                    continue
                button = candidates.first
                if not await try_visible(button, COOKIE_VISIBILITY_TIMEOUT_MS):
                    continue
                await button.click(timeout=CLICK_TIMEOUT_MS)
                await asyncio.sleep(COOKIE_SETTLE_AFTER_CLICK_MS / 1000)
                logger.debug("cookie_banner.dismissed", selector=selector)
                return True
            except Exception:
                logger.debug("cookie_banner.click_failed", selector=selector)
    return False


async def wait_for_url_stable(
    page: Page,
    *,
    window_ms: int = URL_STABILIZE_WINDOW_MS,
    stable_ms: int = URL_STABLE_FOR_MS,
    poll_ms: int = URL_POLL_INTERVAL_MS,
) -> str:
    """
    Poll page.url until it stays unchanged for stable_ms, or window_ms elapses.

    Absorbs client-side redirects that happen after navigation has settled.
    Returns the URL current at exit.
    """
    start = time.monotonic()
    last_url = page.url
    unchanged_since = start

    while (time.monotonic() - start) * 1000 < window_ms:
        await asyncio.sleep(poll_ms / 1000)
        current = page.url
        now = time.monotonic()
        if current != last_url:
            last_url = current
            unchanged_since = now
        elif (now - unchanged_since) * 1000 >= stable_ms:
            return current

    return page.url


async def read_body_text(page: Page, timeout_ms: int = BODY_TEXT_TIMEOUT_MS) -> str:
    """Visible body text, or "" when the page cannot be read (e.g. mid-navigation)."""
    try:
        return await page.inner_text("body", timeout=timeout_ms) or ""
    except Exception as e:
        logger.debug("body_text.unavailable", error_type=type(e).__name__)
        return ""


async def _upsell_modal_detected(page: Page, profile: SiteProfile) -> bool:
    if has_upsell_url_hint(page.url, profile):
        return True
    return await try_visible(page.get_by_text(profile.upsell_text_regex).first, MODAL_TEXT_TIMEOUT_MS)


async def dismiss_upsell_modal(page: Page, profile: SiteProfile = LATAM_PROFILE) -> bool:
    """
    Detect and close the extra-baggage interstitial.

    Tries the "not now" control, then Escape. Returns whether the modal was
    present, whichever dismissal path worked.
    """
    try:
        if not await _upsell_modal_detected(page, profile):
            return False
    except Exception:
        return False

    logger.info("upsell_modal.detected")
    try:
        await page.get_by_role("button", name=profile.upsell_dismiss_regex).first.click(
            timeout=CLICK_TIMEOUT_MS
        )
        logger.debug("upsell_modal.dismissed", method="click")
    except Exception:
        try:
            await page.keyboard.press("Escape")
            logger.debug("upsell_modal.dismissed", method="escape")
        except Exception:
            logger.debug("upsell_modal.dismiss_failed")
    return True


def _boarding_pass_locators(page: Page, profile: SiteProfile) -> list[tuple[str, Locator]]:
    label = profile.boarding_pass_regex
    return [
        ("role_button", page.get_by_role("button", name=label)),
        ("role_link", page.get_by_role("link", name=label)),
        ("element_text", page.locator("button, a, [role='button']", has_text=label)),
        ("text_search", page.get_by_text(label)),
    ]


async def find_boarding_pass_control(page: Page, profile: SiteProfile = LATAM_PROFILE) -> bool:
    """True when any boarding-pass strategy finds a visible control; first hit wins."""
    try:
        strategies = _boarding_pass_locators(page, profile)
    except Exception:
        return False

    for strategy, locator in strategies:
        if await try_visible(locator.first, BOARDING_PASS_VISIBILITY_TIMEOUT_MS):
            logger.info("boarding_pass.found", strategy=strategy)
            return True
    return False

"""
Remote browser connection: CDP first, Playwright wire protocol as fallback.

Creates one isolated browser context per check (locale, viewport, UA,
HTTPS-error tolerance). No retries here; a failed connection fails the check.
"""

from __future__ import annotations

from dataclasses import dataclass

from playwright.async_api import Browser, BrowserContext, Playwright

from probe.browser.constants import CONNECTION_REASON_MAX_CHARS
from probe.browser.profile import LATAM_PROFILE, SiteProfile
from probe.browser.text import summarize_error
from probe.errors import BrowserConnectionError
from shared.logging import get_logger

logger = get_logger(__name__)


@dataclass
class BrowserSession:
    """A connected browser and the context this check runs in."""

    browser: Browser
    context: BrowserContext
    # False when an existing context was reused; the probe must not close it.
    owns_context: bool = True


async def create_browser_context(
    browser: Browser,
    profile: SiteProfile = LATAM_PROFILE,
) -> BrowserContext:
    """
    Create a browser context with the profile's locale, viewport and UA.

    Certificate errors are ignored: the site's intermediary hosts are not vetted.
    """
    return await browser.new_context(
        locale=profile.locale,
        viewport=dict(profile.viewport),
        user_agent=profile.user_agent,
        ignore_https_errors=True,
    )


async def _open_browser(playwright: Playwright, ws_endpoint: str, timeout_ms: int) -> Browser:
    try:
        browser = await playwright.chromium.connect_over_cdp(ws_endpoint, timeout=timeout_ms)
        logger.info("connection.established", protocol="cdp")
        return browser
    except Exception as cdp_exc:
        cdp_reason = summarize_error(cdp_exc, CONNECTION_REASON_MAX_CHARS)
        logger.warning("connection.cdp_failed", error=cdp_reason, error_type=type(cdp_exc).__name__)

    try:
        browser = await playwright.chromium.connect(ws_endpoint, timeout=timeout_ms)
        logger.info("connection.established", protocol="playwright")
        return browser
    except Exception as ws_exc:
        ws_reason = summarize_error(ws_exc, CONNECTION_REASON_MAX_CHARS)
        logger.error("connection.failed", cdp_error=cdp_reason, playwright_error=ws_reason)
        raise BrowserConnectionError(
            f"Browser connection failed. CDP: {cdp_reason} | Playwright: {ws_reason}"
        ) from ws_exc


async def connect_browser(
    playwright: Playwright,
    ws_endpoint: str,
    *,
    profile: SiteProfile = LATAM_PROFILE,
    timeout_ms: int = 30_000,
) -> BrowserSession:
    """
    Connect to the remote browser and prepare one context.

    Raises BrowserConnectionError when both protocols fail, or when context
    creation fails and the browser has no existing context to reuse.
    """
    browser = await _open_browser(playwright, ws_endpoint, timeout_ms)

    try:
        context = await create_browser_context(browser, profile)
        return BrowserSession(browser=browser, context=context, owns_context=True)
    except Exception as exc:
        existing = list(browser.contexts)
        if existing:
            logger.warning(
                "connection.context_reused",
                error=summarize_error(exc),
                error_type=type(exc).__name__,
            )
            return BrowserSession(browser=browser, context=existing[0], owns_context=False)
        try:
            await browser.close()
        except Exception:
            logger.debug("connection.close_failed")
        raise BrowserConnectionError(
            f"Could not create browser context: {summarize_error(exc)}"
        ) from exc

"""
Reservation check orchestrator: connect, navigate, settle, classify, tear down.

ReservationProbe.check() is the probe's only public operation. It always
returns a CheckResult: any exception raised along the way is caught once here
and reported as NEEDS_REVIEW with the error in the note.

Log events carry the purchase code but never the surname; URLs and error
messages are passed through redact_url before logging.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional
from uuid import uuid4

from playwright.async_api import Page, async_playwright

from probe.browser.connection import BrowserSession, connect_browser
from probe.browser.constants import SETTLE_AFTER_NAVIGATION_MS, URL_STABILIZE_WINDOW_MS
from probe.browser.interaction import (
    dismiss_cookie_banner,
    dismiss_upsell_modal,
    find_boarding_pass_control,
    read_body_text,
    wait_for_url_stable,
)
from probe.browser.navigation_retry import goto_with_retries
from probe.browser.profile import LATAM_PROFILE, SiteProfile
from probe.browser.text import redact_url, summarize_error
from probe.classifier import classify, needs_detail_signals
from probe.models import NEEDS_REVIEW, CheckRequest, CheckResult
from shared.logging import bind_check_context, clear_check_context, get_logger

logger = get_logger(__name__)

STATE_CONNECTING = "CONNECTING"
STATE_NAVIGATING = "NAVIGATING"
STATE_SETTLING = "SETTLING"
STATE_CLASSIFYING = "CLASSIFYING"
STATE_DONE = "DONE"

_UNREACHED_URLS = ("", "about:blank")


class ReservationProbe:
    """Checks reservation status on the airline site through a remote browser."""

    def __init__(
        self,
        ws_endpoint: str,
        *,
        profile: SiteProfile = LATAM_PROFILE,
        playwright_factory: Callable = async_playwright,
    ):
        self.ws_endpoint = ws_endpoint
        self.profile = profile
        self._playwright_factory = playwright_factory

    async def check(self, request: CheckRequest) -> CheckResult:
        """Run one check. Never raises; ambiguity is returned as NEEDS_REVIEW."""
        bind_check_context(check_id=str(uuid4()), purchase_code=request.purchase_code)
        try:
            return await self._check(request)
        finally:
            clear_check_context()

    async def _check(self, request: CheckRequest) -> CheckResult:
        target_url = self.profile.build_target_url(request.purchase_code, request.last_name)
        session: Optional[BrowserSession] = None
        page: Optional[Page] = None
        state = STATE_CONNECTING

        try:
            async with self._playwright_factory() as playwright:
                try:
                    self._log_state(state)
                    session = await connect_browser(
                        playwright,
                        self.ws_endpoint,
                        profile=self.profile,
                        timeout_ms=request.timeout_ms,
                    )
                    page = await session.context.new_page()
                    page.set_default_timeout(request.timeout_ms)
                    page.set_default_navigation_timeout(request.timeout_ms)
                    await page.set_extra_http_headers(
                        {"accept-language": self.profile.accept_language}
                    )

                    state = STATE_NAVIGATING
                    self._log_state(state)
                    await goto_with_retries(
                        page, target_url, request.timeout_ms, profile=self.profile
                    )

                    state = STATE_SETTLING
                    self._log_state(state)
                    await asyncio.sleep(SETTLE_AFTER_NAVIGATION_MS / 1000)
                    await dismiss_cookie_banner(page, self.profile.cookie_selectors)
                    final_url = await wait_for_url_stable(page, window_ms=URL_STABILIZE_WINDOW_MS)
                    body_text = await read_body_text(page)

                    state = STATE_CLASSIFYING
                    self._log_state(state, final_url=redact_url(final_url))
                    modal_present = False
                    boarding_pass_present = False
                    if needs_detail_signals(final_url, body_text, profile=self.profile):
                        # Banner can come back after client-side navigation.
                        await dismiss_cookie_banner(page, self.profile.cookie_selectors)
                        modal_present = await dismiss_upsell_modal(page, self.profile)
                        boarding_pass_present = await find_boarding_pass_control(
                            page, self.profile
                        )
                    result = classify(
                        final_url,
                        body_text,
                        modal_present,
                        boarding_pass_present,
                        profile=self.profile,
                    )
                finally:
                    await self._teardown(session, page)
        except Exception as e:
            final_url = self._last_known_url(page, target_url)
            logger.error(
                "check.failed",
                state=state,
                error=redact_url(summarize_error(e)),
                error_type=type(e).__name__,
            )
            return CheckResult(status=NEEDS_REVIEW, final_url=final_url, note=summarize_error(e))

        self._log_state(STATE_DONE, status=result.status)
        logger.info(
            "check.completed", status=result.status, final_url=redact_url(result.final_url)
        )
        return result

    def _log_state(self, state: str, **fields) -> None:
        logger.info("check.state", state=state, **fields)

    @staticmethod
    def _last_known_url(page: Optional[Page], target_url: str) -> str:
        if page is None:
            return target_url
        try:
            url = page.url or ""
        except Exception:
            return target_url
        return target_url if url in _UNREACHED_URLS else url

    @staticmethod
    async def _teardown(session: Optional[BrowserSession], page: Optional[Page]) -> None:
        """Close page, owned context and browser; close errors are logged and dropped."""
        if page is not None:
            try:
                await page.close()
            except Exception as e:
                logger.debug("teardown.page_close_failed", error_type=type(e).__name__)
        if session is None:
            return
        if session.owns_context:
            try:
                await session.context.close()
            except Exception as e:
                logger.debug("teardown.context_close_failed", error_type=type(e).__name__)
        try:
            await session.browser.close()
        except Exception as e:
            logger.debug("teardown.browser_close_failed", error_type=type(e).__name__)

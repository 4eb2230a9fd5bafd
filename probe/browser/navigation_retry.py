"""
Navigation retry helper: fixed three-attempt plan, linear backoff, failure classification.

Attempt 1 navigates directly. Attempts 2 and 3 first warm up on the site's
landing page (cookies, edge session) and then navigate to the target, the last
one waiting for the full load event. Only transient network signatures are
retried; anything else propagates on the first occurrence.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from playwright.async_api import Page

from probe.browser.constants import (
    RETRY_BACKOFF_BASE_MS,
    RETRY_BACKOFF_STEP_MS,
    WARMUP_SETTLE_MS,
    WARMUP_TIMEOUT_CAP_MS,
)
from probe.browser.profile import LATAM_PROFILE, SiteProfile
from probe.browser.text import redact_url
from probe.errors import NavigationError
from probe.models import NavigationAttempt, WaitCondition
from shared.logging import get_logger

logger = get_logger(__name__)

NAVIGATION_PLAN: tuple[NavigationAttempt, ...] = (
    NavigationAttempt(warmup=False, wait_condition=WaitCondition.DOM_READY),
    NavigationAttempt(warmup=True, wait_condition=WaitCondition.DOM_READY),
    NavigationAttempt(warmup=True, wait_condition=WaitCondition.FULL_LOAD),
)
MAX_NAV_ATTEMPTS = len(NAVIGATION_PLAN)


def _backoff_seconds(attempt_index: int) -> float:
    """Linear backoff after the failed attempt at 0-based attempt_index."""
    return (RETRY_BACKOFF_BASE_MS + attempt_index * RETRY_BACKOFF_STEP_MS) / 1000


def _error_message(exc: BaseException) -> str:
    return getattr(exc, "message", None) or str(exc)


def is_retriable_navigation_error(
    exc: BaseException,
    profile: SiteProfile = LATAM_PROFILE,
) -> bool:
    """True iff the error message contains a known transient signature."""
    msg = _error_message(exc).lower()
    return any(signature in msg for signature in profile.retriable_navigation_errors)


async def _warm_up(page: Page, timeout_ms: int, profile: SiteProfile) -> None:
    """Load the landing page first; failures here never fail the attempt."""
    try:
        await page.goto(
            profile.landing_url,
            wait_until=WaitCondition.DOM_READY.value,
            timeout=min(WARMUP_TIMEOUT_CAP_MS, timeout_ms),
        )
        await asyncio.sleep(WARMUP_SETTLE_MS / 1000)
    except Exception as e:
        logger.debug("navigation.warmup_failed", error=redact_url(_error_message(e))[:200])


async def goto_with_retries(
    page: Page,
    url: str,
    timeout_ms: int,
    *,
    profile: SiteProfile = LATAM_PROFILE,
) -> None:
    """
    Navigate to url following NAVIGATION_PLAN.

    Returns on the first successful attempt. Non-retriable errors are re-raised
    immediately; after exhausting the plan the last error is re-raised.
    """
    last_error: Optional[BaseException] = None

    for attempt_index, attempt in enumerate(NAVIGATION_PLAN):
        logger.info(
            "navigation.attempt",
            attempt=attempt_index + 1,
            warmup=attempt.warmup,
            wait_until=attempt.wait_condition.value,
        )
        try:
            if attempt.warmup:
                await _warm_up(page, timeout_ms, profile)
            await page.goto(
                url,
                wait_until=attempt.wait_condition.value,
                timeout=timeout_ms,
            )
            logger.info("navigation.success", attempt=attempt_index + 1)
            return
        except Exception as e:
            if not is_retriable_navigation_error(e, profile):
                logger.error(
                    "navigation.failed",
                    attempt=attempt_index + 1,
                    failure_classification="non_retryable",
                    error=redact_url(_error_message(e))[:300],
                    error_type=type(e).__name__,
                )
                raise
            last_error = e
            if attempt_index + 1 < MAX_NAV_ATTEMPTS:
                backoff = _backoff_seconds(attempt_index)
                logger.info(
                    "navigation.retry",
                    attempt=attempt_index + 1,
                    backoff_s=backoff,
                    failure_classification="transient",
                    error=redact_url(_error_message(e))[:300],
                )
                await asyncio.sleep(backoff)

    logger.error(
        "navigation.failed",
        attempt=MAX_NAV_ATTEMPTS,
        failure_classification="retries_exhausted",
    )
    if last_error is not None:
        raise last_error
    raise NavigationError("Navigation failed after retries")

"""
Unit tests for the navigation retry plan: attempt order, warm-up, backoff, failure classification.

No Playwright browser or network required; page.goto is mocked.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, call, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from probe.browser.navigation_retry import (
    MAX_NAV_ATTEMPTS,
    NAVIGATION_PLAN,
    _backoff_seconds,
    goto_with_retries,
    is_retriable_navigation_error,
)
from probe.browser.profile import LATAM_PROFILE
from probe.models import WaitCondition

TARGET = (
    "https://www.latamairlines.com/br/pt/minhas-viagens/second-detail"
    "?orderId=LA123ABC&lastname=SILVA"
)
LANDING = LATAM_PROFILE.landing_url


def _goto_by_url(target_errors: list, landing_error: Exception | None = None):
    """side_effect for page.goto: landing loads (or raises landing_error); target pops target_errors."""
    remaining = list(target_errors)

    async def _goto(url, **kwargs):
        if url == LANDING:
            if landing_error is not None:
                raise landing_error
            return None
        err = remaining.pop(0) if remaining else None
        if err is not None:
            raise err
        return None

    return _goto


def _target_calls(page) -> list:
    return [c for c in page.goto.await_args_list if c.args[0] == TARGET]


# --- Plan and backoff ---


def test_navigation_plan_is_fixed_three_attempts():
    assert MAX_NAV_ATTEMPTS == 3
    assert [a.warmup for a in NAVIGATION_PLAN] == [False, True, True]
    assert [a.wait_condition for a in NAVIGATION_PLAN] == [
        WaitCondition.DOM_READY,
        WaitCondition.DOM_READY,
        WaitCondition.FULL_LOAD,
    ]


def test_backoff_is_linear():
    assert _backoff_seconds(0) == pytest.approx(0.65)
    assert _backoff_seconds(1) == pytest.approx(1.0)
    assert _backoff_seconds(2) == pytest.approx(1.35)


# --- Failure classification ---


@pytest.mark.parametrize(
    "message",
    [
        "net::ERR_HTTP2_PROTOCOL_ERROR at https://www.latamairlines.com/",
        "net::ERR_CONNECTION_RESET",
        "net::ERR_INCOMPLETE_CHUNKED_ENCODING",
        "Navigation timeout of 30000 ms exceeded",
        "Target closed",
        "page.goto: Target page, context or browser has been closed; Target Closed",
    ],
)
def test_retriable_signatures(message):
    assert is_retriable_navigation_error(Exception(message)) is True


def test_retriable_uses_message_attribute():
    class PlaywrightLikeError(Exception):
        message = "net::ERR_CONNECTION_RESET"

    assert is_retriable_navigation_error(PlaywrightLikeError()) is True


@pytest.mark.parametrize(
    "message",
    [
        "net::ERR_NAME_NOT_RESOLVED",
        "net::ERR_CERT_AUTHORITY_INVALID",
        "Protocol error (Page.navigate): Cannot navigate to invalid URL",
        "",
    ],
)
def test_non_retriable_signatures(message):
    assert is_retriable_navigation_error(Exception(message)) is False


# --- goto_with_retries ---


@pytest.mark.asyncio
async def test_success_first_attempt_no_warmup():
    page = AsyncMock()
    page.goto = AsyncMock(return_value=None)

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        await goto_with_retries(page, TARGET, 30_000)

    page.goto.assert_awaited_once_with(TARGET, wait_until="domcontentloaded", timeout=30_000)
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_two_retriable_failures_then_success():
    """Retriable errors on attempts 1 and 2, success on attempt 3 with full load."""
    page = AsyncMock()
    page.goto = AsyncMock(
        side_effect=_goto_by_url(
            [
                Exception("net::ERR_HTTP2_PROTOCOL_ERROR"),
                Exception("Navigation timeout of 30000 ms exceeded"),
                None,
            ]
        )
    )

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock):
        await goto_with_retries(page, TARGET, 30_000)

    target_calls = _target_calls(page)
    assert len(target_calls) == 3
    assert target_calls[0].kwargs["wait_until"] == "domcontentloaded"
    assert target_calls[1].kwargs["wait_until"] == "domcontentloaded"
    assert target_calls[2].kwargs["wait_until"] == "load"
    # Two warm-ups, capped at 12 s
    landing_calls = [c for c in page.goto.await_args_list if c.args[0] == LANDING]
    assert len(landing_calls) == 2
    assert all(c.kwargs["timeout"] == 12_000 for c in landing_calls)


@pytest.mark.asyncio
async def test_warmup_timeout_capped_by_request_timeout():
    page = AsyncMock()
    page.goto = AsyncMock(side_effect=_goto_by_url([Exception("net::ERR_CONNECTION_RESET"), None]))

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock):
        await goto_with_retries(page, TARGET, 10_000)

    landing_calls = [c for c in page.goto.await_args_list if c.args[0] == LANDING]
    assert landing_calls[0].kwargs["timeout"] == 10_000


@pytest.mark.asyncio
async def test_non_retriable_error_raises_immediately():
    page = AsyncMock()
    error = Exception("net::ERR_NAME_NOT_RESOLVED")
    page.goto = AsyncMock(side_effect=error)

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        with pytest.raises(Exception) as exc_info:
            await goto_with_retries(page, TARGET, 30_000)

    assert exc_info.value is error
    assert page.goto.await_count == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_exhausted_retries_raise_last_error_with_linear_backoff():
    page = AsyncMock()
    errors = [
        Exception("net::ERR_CONNECTION_RESET"),
        Exception("net::ERR_HTTP2_PROTOCOL_ERROR"),
        PlaywrightTimeoutError("Navigation timeout of 30000 ms exceeded"),
    ]
    page.goto = AsyncMock(side_effect=_goto_by_url(errors))

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        with pytest.raises(PlaywrightTimeoutError) as exc_info:
            await goto_with_retries(page, TARGET, 30_000)

    assert exc_info.value is errors[2]
    assert len(_target_calls(page)) == MAX_NAV_ATTEMPTS
    backoffs = [c for c in sleep.await_args_list if c != call(0.45)]
    assert backoffs == [call(0.65), call(1.0)]


@pytest.mark.asyncio
async def test_warmup_failure_is_swallowed():
    """A landing-page error (even a non-retriable one) does not abort the attempt."""
    page = AsyncMock()
    page.goto = AsyncMock(
        side_effect=_goto_by_url(
            [Exception("net::ERR_CONNECTION_RESET"), None],
            landing_error=Exception("net::ERR_NAME_NOT_RESOLVED"),
        )
    )

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock):
        await goto_with_retries(page, TARGET, 30_000)

    assert len(_target_calls(page)) == 2


@pytest.mark.asyncio
async def test_non_retriable_on_second_attempt_stops_plan():
    page = AsyncMock()
    page.goto = AsyncMock(
        side_effect=_goto_by_url(
            [Exception("Target closed"), ValueError("Cannot navigate to invalid URL")]
        )
    )

    with patch("probe.browser.navigation_retry.asyncio.sleep", new_callable=AsyncMock):
        with pytest.raises(ValueError):
            await goto_with_retries(page, TARGET, 30_000)

    assert len(_target_calls(page)) == 2

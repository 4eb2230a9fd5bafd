"""
Tests for the run_check CLI: argument validation, JSON output and exit codes.

ReservationProbe is patched; no browser or network required.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import run_check
from probe.models import CANCELLED, CONFIRMED, NEEDS_REVIEW, CheckResult

WS = "wss://chrome.example.com"


@pytest.fixture(autouse=True)
def env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "local")
    monkeypatch.setenv("BROWSERLESS_WS", WS)
    monkeypatch.setenv("BROWSERLESS_TOKEN", "t")
    monkeypatch.delenv("CHECK_TIMEOUT_MS", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.setattr(run_check, "configure_logging", MagicMock())


def _probe_returning(*results):
    probe = MagicMock()
    probe.check = AsyncMock(side_effect=list(results))
    return MagicMock(return_value=probe)


@pytest.mark.asyncio
async def test_prints_results_and_exits_zero(capsys):
    factory = _probe_returning(
        CheckResult(status=CONFIRMED, final_url="https://a", note="ok"),
        CheckResult(status=CANCELLED, final_url="https://b", note="gone"),
    )
    with patch.object(run_check, "ReservationProbe", factory):
        code = await run_check.main(
            ["--code", "la111", "--last-name", "Silva", "--code", "LA222", "--last-name", "Souza"]
        )

    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output == [
        {"purchaseCode": "LA111", "status": CONFIRMED, "finalUrl": "https://a", "note": "ok"},
        {"purchaseCode": "LA222", "status": CANCELLED, "finalUrl": "https://b", "note": "gone"},
    ]
    endpoint = factory.call_args.args[0]
    assert endpoint.startswith(WS + "/chromium?")
    assert "token=t" in endpoint


@pytest.mark.asyncio
async def test_needs_review_exits_one():
    factory = _probe_returning(CheckResult(status=NEEDS_REVIEW, final_url="", note="blocked"))
    with patch.object(run_check, "ReservationProbe", factory):
        code = await run_check.main(["--code", "LA1", "--last-name", "Silva"])
    assert code == 1


@pytest.mark.asyncio
async def test_timeout_flag_clamped_into_request():
    factory = _probe_returning(CheckResult(status=CONFIRMED, final_url="", note=""))
    with patch.object(run_check, "ReservationProbe", factory):
        await run_check.main(["--code", "LA1", "--last-name", "Silva", "--timeout-ms", "5000"])
    request = factory.return_value.check.await_args.args[0]
    assert request.timeout_ms == 15_000


@pytest.mark.asyncio
async def test_invalid_code_exits_two(capsys):
    factory = _probe_returning()
    with patch.object(run_check, "ReservationProbe", factory):
        code = await run_check.main(["--code", "XX1", "--last-name", "Silva"])
    assert code == 2
    assert "Invalid purchase code" in capsys.readouterr().err
    factory.assert_not_called()


@pytest.mark.asyncio
async def test_missing_endpoint_exits_two(monkeypatch):
    monkeypatch.delenv("BROWSERLESS_WS", raising=False)
    assert await run_check.main(["--code", "LA1", "--last-name", "Silva"]) == 2


def test_mismatched_pairs_rejected():
    with pytest.raises(SystemExit):
        run_check._parse_args(["--code", "LA1", "--code", "LA2", "--last-name", "Silva"])

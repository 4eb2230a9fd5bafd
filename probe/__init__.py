"""
Reservation-status probe for the LATAM "minhas viagens" page.

Usage:
    probe = ReservationProbe(ws_endpoint)
    result = await probe.check(build_check_request("LA123ABC", "Silva"))
"""

from __future__ import annotations

from probe.models import (
    CANCELLED,
    CONFIRMED,
    NEEDS_REVIEW,
    CheckRequest,
    CheckResult,
    Outcome,
)
from probe.orchestrator import ReservationProbe
from probe.request import build_check_request

__all__ = [
    "CANCELLED",
    "CONFIRMED",
    "NEEDS_REVIEW",
    "CheckRequest",
    "CheckResult",
    "Outcome",
    "ReservationProbe",
    "build_check_request",
]

"""
Value types for a reservation check: request, result, navigation attempts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

Outcome = Literal["CONFIRMED", "CANCELLED", "NEEDS_REVIEW"]

CONFIRMED: Outcome = "CONFIRMED"
CANCELLED: Outcome = "CANCELLED"
NEEDS_REVIEW: Outcome = "NEEDS_REVIEW"


@dataclass(frozen=True)
class CheckRequest:
    """One reservation to check. timeout_ms is already clamped by the caller."""

    purchase_code: str
    last_name: str
    timeout_ms: int


@dataclass(frozen=True)
class CheckResult:
    """Classification of one check. Always produced, even on internal failure."""

    status: Outcome
    final_url: str
    note: str

    def to_dict(self) -> dict:
        return {"status": self.status, "finalUrl": self.final_url, "note": self.note}


class WaitCondition(str, Enum):
    """Playwright wait_until values used by the navigation plan."""

    DOM_READY = "domcontentloaded"
    FULL_LOAD = "load"


@dataclass(frozen=True)
class NavigationAttempt:
    warmup: bool
    wait_condition: WaitCondition

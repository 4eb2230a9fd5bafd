"""
Caller-side request building: input validation and timeout clamping.

The probe trusts CheckRequest as given; callers build it through here.
"""

from __future__ import annotations

import re
from typing import Optional

from probe.models import CheckRequest
from shared.config import clamp_timeout_ms

PURCHASE_CODE_RE = re.compile(r"^LA[A-Z0-9]*$")


def build_check_request(
    purchase_code: str,
    last_name: str,
    timeout_ms: Optional[int] = None,
) -> CheckRequest:
    """
    Normalize and validate inputs into a CheckRequest.

    Raises ValueError when the purchase code is not an LA code or the surname is empty.
    """
    code = (purchase_code or "").strip().upper()
    surname = (last_name or "").strip()
    if not code or not PURCHASE_CODE_RE.match(code):
        raise ValueError(f"Invalid purchase code: {purchase_code!r} (expected LA followed by letters/digits)")
    if not surname:
        raise ValueError("Passenger last name is required")
    return CheckRequest(
        purchase_code=code,
        last_name=surname,
        timeout_ms=clamp_timeout_ms(timeout_ms),
    )

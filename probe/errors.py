"""
Probe exceptions. Only the orchestrator turns these into a CheckResult.
"""

from __future__ import annotations


class ProbeError(RuntimeError):
    """Base class for failures raised by the probe's own layers."""


class BrowserConnectionError(ProbeError):
    """Both connection protocols failed, or no browser context is usable."""


class NavigationError(ProbeError):
    """Navigation failed without a captured underlying error."""

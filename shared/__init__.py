"""
Shared utilities for the reservation-status probe.

This package is intentionally small. It provides:

- `shared.config` for environment-based configuration and the remote
  browser endpoint resolver
- `shared.logging` for structlog-based structured logging

The probe package treats `shared/` as read-only infrastructure code.
"""

"""
Pytest configuration and fixtures for probe tests.

Provides a JSON log file fixture so tests can inspect structured log output.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from shared.logging import configure_logging


@pytest.fixture
def read_log_events(tmp_path: Path) -> Generator[Callable[[], list[dict]], None, None]:
    """
    Route logging to a temporary JSON-lines file for the test.

    Yields a callable returning the parsed events written so far. Logging is
    reset to stdout afterwards.
    """
    log_file = tmp_path / "probe.jsonl"
    configure_logging(logging.INFO, str(log_file), log_stdout=False)

    def _read() -> list[dict]:
        for handler in logging.getLogger().handlers:
            handler.flush()
        if not log_file.exists():
            return []
        return [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
            if line.startswith("{")
        ]

    yield _read
    configure_logging()

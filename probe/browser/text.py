"""
Text normalization for page heuristics and result notes.
"""

from __future__ import annotations

import re
import unicodedata

MAX_NOTE_LENGTH = 380

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "´": "'", "`": "'"})


def normalize_whitespace(text: str) -> str:
    """Normalize whitespace: collapse multiples, trim."""
    text = re.sub(r"\s+", " ", text)
    text = text.strip()
    return text


def fold_text(text: str | None) -> str:
    """Accent-strip, lower-case and whitespace-collapse text for phrase matching."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return normalize_whitespace(stripped.translate(_APOSTROPHES).lower())


def truncate_note(text: str | None, limit: int = MAX_NOTE_LENGTH) -> str:
    """Collapse whitespace and cut to at most `limit` characters (ellipsis included)."""
    note = normalize_whitespace(text or "")
    if len(note) <= limit:
        return note
    return note[: limit - 1].rstrip() + "…"


def summarize_error(exc: BaseException, limit: int = MAX_NOTE_LENGTH) -> str:
    """
    Note-safe description of an exception.

    Playwright errors carry a `message` attribute; fall back to str(exc),
    then to the exception type name when both are empty.
    """
    msg = getattr(exc, "message", None) or str(exc)
    if not normalize_whitespace(msg or ""):
        msg = type(exc).__name__
    return truncate_note(msg, limit)


_SURNAME_PARAM_RE = re.compile(r"(lastname=)[^&#\s\"']*", re.IGNORECASE)


def redact_url(text: str | None) -> str:
    """Mask the lastname query value in a URL, or in any text embedding one."""
    return _SURNAME_PARAM_RE.sub(r"\1***", text or "")

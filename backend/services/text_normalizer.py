"""Cleanup of raw extracted text and the case-folded form used for matching."""

import re

# C0 and C1 control characters, keeping \t, \n and \r
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_NEWLINE_RUN_RE = re.compile(r"\s*\n\s*")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_WS_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    """Strip control characters and collapse whitespace.

    Runs of spaces/tabs become one space, any whitespace run containing a
    newline becomes a single newline, and the ends are trimmed. Idempotent.
    """
    if not text:
        return ""
    text = _CONTROL_CHARS_RE.sub("", text)
    text = text.replace("\r", "\n")
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = _NEWLINE_RUN_RE.sub("\n", text)
    return text.strip()


def normalize_for_matching(text: str | None) -> str:
    """Lowercased, punctuation-free, single-spaced version of ``clean_text``."""
    text = clean_text(text).lower()
    text = _NON_WORD_RE.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()

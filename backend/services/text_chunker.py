"""Overlapping, word-boundary-aware text chunking for long documents."""

import logging

from models.schemas.skill_set import TextChunk
from services.errors import ConfigurationError

logger = logging.getLogger(__name__)

# How far past the naive cut we look for whitespace before cutting mid-word
MAX_BOUNDARY_EXTENSION = 100


def _extend_to_boundary(text: str, end: int) -> int:
    """Move ``end`` forward to the next whitespace if it falls inside a word."""
    if end >= len(text) or text[end].isspace():
        return end
    limit = min(len(text), end + MAX_BOUNDARY_EXTENSION)
    for pos in range(end + 1, limit):
        if text[pos].isspace():
            return pos
    return end


def chunk_text(text: str, chunk_size: int = 2000, overlap: int = 200) -> list[TextChunk]:
    """Split ``text`` into windows of ~``chunk_size`` chars sharing ``overlap`` chars.

    Each window after the first starts ``overlap`` characters before the
    previous window's end, so ``chunk.text[prev.end - chunk.start:]`` is the
    non-overlapping part. Raises ConfigurationError if ``chunk_size <= overlap``.
    """
    if chunk_size <= 0 or overlap < 0:
        raise ConfigurationError(
            f"chunk_size must be positive and overlap non-negative (got {chunk_size}, {overlap})"
        )
    if chunk_size <= overlap:
        raise ConfigurationError(
            f"chunk_size ({chunk_size}) must be greater than overlap ({overlap})"
        )

    text = text or ""
    if len(text) <= chunk_size:
        return [TextChunk(text=text, index=0, total=1, is_first=True, is_last=True,
                          start=0, end=len(text))]

    spans: list[tuple[int, int]] = []
    start = 0
    while True:
        end = _extend_to_boundary(text, start + chunk_size)
        end = min(end, len(text))
        spans.append((start, end))
        if end >= len(text):
            break
        start = end - overlap

    total = len(spans)
    logger.info("Chunked text of length %d into %d chunks (size=%d, overlap=%d)",
                len(text), total, chunk_size, overlap)
    return [
        TextChunk(
            text=text[s:e],
            index=i,
            total=total,
            is_first=i == 0,
            is_last=i == total - 1,
            start=s,
            end=e,
        )
        for i, (s, e) in enumerate(spans)
    ]

"""Token estimation utilities for AI operations."""

from __future__ import annotations

# Average bytes per token for English prose and source code
BYTES_PER_TOKEN = 4


def text_length(text: str) -> int:
    """Return the raw length of ``text`` in UTF-8 bytes."""

    return len(text.encode("utf-8", errors="ignore"))


def estimate_tokens(text: str) -> int:
    """Estimate the number of tokens in a text string.

    Uses a fixed byte-based heuristic of ~4 bytes per token, floored. The
    estimate never drops below 1, so an empty selection still reports a cost
    of one token.

    Args:
        text: The text to estimate tokens for.

    Returns:
        Estimated token count, always >= 1.
    """
    return max(1, text_length(text) // BYTES_PER_TOKEN)


__all__ = ["BYTES_PER_TOKEN", "estimate_tokens", "text_length"]

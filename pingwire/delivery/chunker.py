"""Split long text into ordered chunks, preferring whitespace boundaries."""

import re

_WHITESPACE_RUN = re.compile(r"(\s+)")


def split_into_chunks(text: str, max_chunk_size: int) -> list[str]:
    """
    Greedily pack whitespace-separated tokens into chunks of at most
    ``max_chunk_size`` characters.

    Whitespace runs are kept as tokens so the original spacing survives
    inside a chunk; only each chunk's edges are trimmed. A token that is
    longer than ``max_chunk_size`` on its own is cut into fixed-size slices.
    This never looks ahead, so chunk sizes are not balanced.

    Args:
        text: Text to split. Empty or whitespace-only text yields no chunks.
        max_chunk_size: Maximum length of each chunk. Must be positive.

    Returns:
        Non-empty chunks in original text order.
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    chunks: list[str] = []
    current = ""

    for token in _WHITESPACE_RUN.split(text):
        if not token:
            continue
        if len(current) + len(token) <= max_chunk_size:
            current += token
            continue

        if current.strip():
            chunks.append(current.strip())
        current = ""

        if len(token) > max_chunk_size:
            for start in range(0, len(token), max_chunk_size):
                piece = token[start : start + max_chunk_size]
                # Oversized whitespace runs produce blank slices; drop them.
                if piece.strip():
                    chunks.append(piece)
        else:
            current = token

    if current.strip():
        chunks.append(current.strip())

    return chunks

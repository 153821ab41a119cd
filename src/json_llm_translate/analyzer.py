"""Decide whether a document must be split and where to split it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import OversizedEntryError
from .tokens import TokenEstimator, estimate_tokens

MAX_TOKENS = 4000
BUFFER_TOKENS = 1000
DEFAULT_CHUNK_SIZE = 2000
MIN_CHUNK_SIZE = 500

# No single chunk may grow past this, whatever the target size
EFFECTIVE_CEILING = MAX_TOKENS - BUFFER_TOKENS


@dataclass
class ChunkBoundary:
    """Inclusive range of top-level entry positions and its token estimate."""

    start: int
    end: int
    tokens: int


@dataclass
class FileAnalysis:
    total_tokens: int
    exceeded_limit: bool
    recommended_chunks: list[ChunkBoundary] = field(default_factory=list)

    @property
    def chunk_count(self) -> int:
        # An empty plan means "send the whole document as one chunk"
        return len(self.recommended_chunks) or 1


def analyze_content(
    content: dict[str, Any],
    target_chunk_size: int = DEFAULT_CHUNK_SIZE,
    estimator: TokenEstimator = estimate_tokens,
) -> FileAnalysis:
    """
    Compute a chunk plan over the top-level entries of ``content``.

    Each entry is costed on its own, serialized as ``{key: value}``, rather than
    as its marginal contribution to the running chunk. This overestimates a
    little, so chunks only come out smaller than the target, never larger.

    Args:
        content: Document to analyze
        target_chunk_size: Soft token ceiling for one chunk
        estimator: Function returning the token cost of a JSON value

    Returns:
        A FileAnalysis. ``recommended_chunks`` is empty when the document fits
        in a single chunk.

    Raises:
        OversizedEntryError: If a chunk grows beyond EFFECTIVE_CEILING, which
            only happens when one entry alone is that large.
    """
    if not content:
        return FileAnalysis(total_tokens=0, exceeded_limit=False)

    total_tokens = estimator(content)
    exceeded_limit = total_tokens > target_chunk_size
    recommended_chunks: list[ChunkBoundary] = []

    if not exceeded_limit:
        return FileAnalysis(total_tokens, exceeded_limit, recommended_chunks)

    current: ChunkBoundary | None = None
    for index, (key, value) in enumerate(content.items()):
        entry_tokens = estimator({key: value})

        if current is not None and current.tokens + entry_tokens > target_chunk_size:
            recommended_chunks.append(current)
            current = None

        if current is None:
            current = ChunkBoundary(start=index, end=index, tokens=entry_tokens)
        else:
            current.tokens += entry_tokens
            current.end = index

        if current.tokens > EFFECTIVE_CEILING:
            raise OversizedEntryError(key, current.tokens, EFFECTIVE_CEILING)

    if current is not None:
        recommended_chunks.append(current)

    return FileAnalysis(total_tokens, exceeded_limit, recommended_chunks)


def subdivide_chunk(
    content: dict[str, Any],
    current_chunk_size: int,
    estimator: TokenEstimator = estimate_tokens,
) -> tuple[FileAnalysis, int]:
    """
    Re-analyze ``content`` at half the current target size.

    The new size never drops below MIN_CHUNK_SIZE. Returns the analysis and the
    size it was computed with.
    """
    new_chunk_size = max(MIN_CHUNK_SIZE, current_chunk_size // 2)
    return analyze_content(content, new_chunk_size, estimator), new_chunk_size

"""Chunks of a document and the results of translating them."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Any

from .analyzer import FileAnalysis


@dataclass
class Chunk:
    """
    An ordered slice of a document's top-level entries.

    ``path`` locates the chunk in the chunk/sub-chunk tree, e.g. ``(2, 0)`` is
    the first sub-chunk of the third chunk. It is only used for reporting.
    """

    content: dict[str, Any]
    tokens: int
    path: tuple[int, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return ".".join(str(i + 1) for i in self.path) or "whole document"


@dataclass
class TranslationResult:
    path: tuple[int, ...]
    content: dict[str, Any]


def build_chunks(
    analysis: FileAnalysis,
    content: dict[str, Any],
    parent_path: tuple[int, ...] = (),
) -> list[Chunk]:
    """Materialize the chunk boundaries of ``analysis`` over ``content``."""
    entries = list(content.items())
    chunks = []
    for index, boundary in enumerate(analysis.recommended_chunks):
        chunk_content = dict(islice(entries, boundary.start, boundary.end + 1))
        chunks.append(Chunk(chunk_content, boundary.tokens, parent_path + (index,)))
    return chunks

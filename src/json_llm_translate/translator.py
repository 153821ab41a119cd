"""Core translation pipeline for json-llm-translate."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .analyzer import DEFAULT_CHUNK_SIZE, FileAnalysis, analyze_content
from .chunks import Chunk, TranslationResult, build_chunks
from .config import INITIAL_RETRY_DELAY, MAX_FALLBACK_DEPTH, MAX_RETRIES
from .exceptions import MergeError
from .executor import ChunkTranslator, Completer
from .style_guide import StyleGuide
from .tokens import TokenEstimator, estimate_tokens
from .utils import derive_output_path, find_missing_translations, merge_translations

logger = logging.getLogger(__name__)


def reassemble_results(results: list[TranslationResult]) -> dict[str, Any]:
    """Union the contents of all chunk results, in order."""
    assembled: dict[str, Any] = {}
    for result in results:
        overlap = [key for key in result.content if key in assembled]
        if overlap:
            raise MergeError(f"Chunks overlap on keys: {', '.join(overlap)}")
        assembled.update(result.content)
    return assembled


def load_json_document(path: Path) -> dict[str, Any]:
    """Read a JSON object from ``path``."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def load_existing_translation(path: Path) -> dict[str, Any]:
    """
    Load a previous translation, or an empty document if there is none.

    A missing, unreadable or corrupt file only means starting from scratch.
    """
    if not path.exists():
        return {}
    try:
        return load_json_document(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring existing translation {path}: {e}")
        return {}


def write_json_document(path: Path, data: dict[str, Any]) -> None:
    """Write ``data`` to ``path``, replacing the old file only once fully written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise


class JsonTranslator:
    """
    Translate JSON documents into one target locale.

    Only keys without an existing translation are sent to the model. Large
    documents are split into chunks that are translated one after another,
    and the results are merged into the existing translation.
    """

    def __init__(
        self,
        client: Completer,
        target_locale: str,
        style_guide: StyleGuide | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = INITIAL_RETRY_DELAY,
        max_depth: int = MAX_FALLBACK_DEPTH,
        estimator: TokenEstimator = estimate_tokens,
    ):
        self.target_locale = target_locale
        self.chunk_size = chunk_size
        self.estimator = estimator
        self.executor = ChunkTranslator(
            client,
            target_locale,
            style_guide=style_guide,
            max_retries=max_retries,
            retry_delay=retry_delay,
            max_depth=max_depth,
            estimator=estimator,
        )

    def analyze(self, remaining: dict[str, Any]) -> FileAnalysis:
        return analyze_content(remaining, self.chunk_size, self.estimator)

    async def translate_content(
        self,
        source: dict[str, Any],
        existing: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Translate whatever part of ``source`` is not yet in ``existing``.

        Args:
            source: Document in the source language
            existing: Previous translation into the target locale, possibly partial

        Returns:
            The existing translation merged with the new one. ``existing`` itself
            is returned untouched when there is nothing left to translate.

        Raises:
            OversizedEntryError: If a top-level entry can not fit in any chunk
            ChunkTranslationError: If a chunk could not be translated
            MergeError: If the results can not be assembled into valid JSON
        """
        existing = existing or {}

        remaining = find_missing_translations(source, existing)
        if not remaining:
            logger.info(f"Nothing to translate for {self.target_locale}, translation is complete")
            return existing

        analysis = self.analyze(remaining)
        logger.info(
            f"{len(remaining)} top-level keys to translate (~{analysis.total_tokens} tokens) "
            f"in {analysis.chunk_count} chunk(s)"
        )

        results: list[TranslationResult] = []
        if not analysis.exceeded_limit:
            whole = Chunk(remaining, analysis.total_tokens)
            results.append(await self.executor.translate_chunk(whole))
        else:
            chunks = build_chunks(analysis, remaining)
            for number, chunk in enumerate(chunks, start=1):
                logger.info(f"Translating chunk {number} of {len(chunks)} (~{chunk.tokens} tokens)")
                results.extend(await self.executor.translate_chunk_with_fallback(chunk, self.chunk_size))

        merged = merge_translations(existing, reassemble_results(results))

        try:
            json.dumps(merged, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise MergeError(f"Merged translation is not valid JSON: {e}") from e

        return merged

    async def translate_file(self, input_file: Path, output_file: Path | None = None) -> dict:
        """
        Translate a JSON file, resuming from an earlier translation if present.

        The output file is only written after every chunk succeeded.

        Returns:
            Dictionary with translation result info (output_file, translated_keys, skipped)
        """
        input_file = Path(input_file)
        output_file = Path(output_file) if output_file else derive_output_path(input_file, self.target_locale)

        source = load_json_document(input_file)
        existing = load_existing_translation(output_file)
        remaining = find_missing_translations(source, existing)

        result = {
            "output_file": output_file,
            "translated_keys": len(remaining),
            "skipped": not remaining,
        }
        if not remaining:
            # An empty source still gets an (empty) translation file
            if not output_file.exists():
                write_json_document(output_file, existing)
            logger.info(f"{output_file} is already complete")
            return result

        translated = await self.translate_content(source, existing)
        write_json_document(output_file, translated)
        return result

    def plan_file(self, input_file: Path, output_file: Path | None = None) -> dict:
        """Describe what ``translate_file`` would do, without calling the model."""
        input_file = Path(input_file)
        output_file = Path(output_file) if output_file else derive_output_path(input_file, self.target_locale)

        source = load_json_document(input_file)
        existing = load_existing_translation(output_file)
        remaining = find_missing_translations(source, existing)
        analysis = self.analyze(remaining)

        return {
            "output_file": output_file,
            "translated_keys": len(remaining),
            "total_tokens": analysis.total_tokens,
            "chunks": analysis.chunk_count if remaining else 0,
        }

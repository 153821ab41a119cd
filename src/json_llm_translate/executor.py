"""Translation of single chunks: retries, response repair and subdivision."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

from .analyzer import subdivide_chunk
from .chunks import Chunk, TranslationResult, build_chunks
from .config import INITIAL_RETRY_DELAY, MAX_FALLBACK_DEPTH, MAX_RETRIES
from .exceptions import (
    ChunkTranslationError,
    MissingKeysError,
    ResponseParseError,
    ShapeMismatchError,
    TranslationAttemptError,
)
from .prompts import build_translation_prompt
from .style_guide import StyleGuide
from .tokens import TokenEstimator, estimate_tokens

logger = logging.getLogger(__name__)


class Completer(Protocol):
    async def complete(self, prompt: str) -> str: ...


def repair_json_response(text: str) -> str:
    """
    Strip everything before the first ``{`` and after the last ``}``.

    This handles replies wrapped in prose or markdown fences. It does not try to
    fix anything inside the braces.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


def parse_response(text: str) -> dict[str, Any]:
    """Parse a model reply as a JSON object, repairing it once if needed."""
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        try:
            parsed = json.loads(repair_json_response(text))
        except json.JSONDecodeError as e:
            raise ResponseParseError(f"Unable to decode JSON response: {e}") from e

    if not isinstance(parsed, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def check_shape(
    source: dict[str, Any],
    translated: dict[str, Any],
    prefix: str = "",
) -> tuple[list[str], list[str]]:
    """
    Compare the nesting of ``translated`` against ``source``.

    Returns the dotted paths of keys missing from ``translated`` and of keys
    whose value is an object on one side only.
    """
    missing: list[str] = []
    mismatched: list[str] = []
    for key, value in source.items():
        path = f"{prefix}.{key}" if prefix else key
        if key not in translated:
            missing.append(path)
            continue
        new_value = translated[key]
        if isinstance(value, dict) != isinstance(new_value, dict):
            mismatched.append(path)
        elif isinstance(value, dict):
            nested_missing, nested_mismatched = check_shape(value, new_value, path)
            missing.extend(nested_missing)
            mismatched.extend(nested_mismatched)
    return missing, mismatched


def restore_untranslatable(source: dict[str, Any], translated: dict[str, Any]) -> dict[str, Any]:
    """
    Align ``translated`` with the shape of ``source``.

    Keys the model invented are dropped, and numbers, booleans and nulls are
    copied back from the source.

    Raises:
        MissingKeysError: If a key of ``source``, at any depth, is absent
        ShapeMismatchError: If an object was turned into a plain value or the reverse
    """
    missing, mismatched = check_shape(source, translated)
    if missing:
        raise MissingKeysError(missing)
    if mismatched:
        raise ShapeMismatchError(mismatched)

    return _copy_scalars(source, translated)


def _copy_scalars(source: dict[str, Any], translated: dict[str, Any]) -> dict[str, Any]:
    result = {}
    for key, value in source.items():
        new_value = translated[key]
        if isinstance(value, dict):
            result[key] = _copy_scalars(value, new_value)
        elif value is None or isinstance(value, (bool, int, float)):
            result[key] = value
        else:
            result[key] = new_value
    return result


class ChunkTranslator:
    """Translate chunks of one document into one target locale."""

    def __init__(
        self,
        client: Completer,
        target_locale: str,
        style_guide: StyleGuide | None = None,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = INITIAL_RETRY_DELAY,
        max_depth: int = MAX_FALLBACK_DEPTH,
        estimator: TokenEstimator = estimate_tokens,
    ):
        self.client = client
        self.target_locale = target_locale
        self.style_guide = style_guide
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.max_depth = max_depth
        self.estimator = estimator

    async def _attempt(self, chunk: Chunk) -> dict[str, Any]:
        prompt = build_translation_prompt(chunk.content, self.target_locale, self.style_guide)
        reply = await self.client.complete(prompt)
        translated = parse_response(reply)

        extra = [key for key in translated if key not in chunk.content]
        if extra:
            logger.warning(f"Dropping unexpected keys from chunk {chunk.label}: {', '.join(extra)}")

        return restore_untranslatable(chunk.content, translated)

    async def translate_chunk(self, chunk: Chunk) -> TranslationResult:
        """
        Translate one chunk, retrying failed attempts with a growing delay.

        Raises:
            ChunkTranslationError: When every attempt failed. The last attempt's
                error is chained as the cause.
        """
        last_error: TranslationAttemptError | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                content = await self._attempt(chunk)
                return TranslationResult(chunk.path, content)
            except TranslationAttemptError as e:
                last_error = e
                logger.warning(
                    f"Attempt {attempt}/{self.max_retries} for chunk {chunk.label} failed: {e}"
                )
                if attempt < self.max_retries:
                    await asyncio.sleep(attempt * self.retry_delay)

        raise ChunkTranslationError(
            f"Chunk {chunk.label} failed after {self.max_retries} attempts: {last_error}",
            path=chunk.path,
            last_error=last_error,
        ) from last_error

    async def translate_chunk_with_fallback(self, chunk: Chunk, target_size: int) -> list[TranslationResult]:
        """
        Translate a chunk, splitting it into smaller chunks when it keeps failing.

        Work is kept on an explicit stack of ``(chunk, target_size, depth)``.
        A chunk that exhausts its retries is re-analyzed at half the target
        size and its pieces are pushed back, up to ``max_depth`` levels. Results
        are returned in the original key order.

        Raises:
            ChunkTranslationError: When a chunk fails at the depth limit or can
                not be split any further.
        """
        results: list[TranslationResult] = []
        stack: list[tuple[Chunk, int, int]] = [(chunk, target_size, 0)]

        while stack:
            current, size, depth = stack.pop()
            try:
                results.append(await self.translate_chunk(current))
                continue
            except ChunkTranslationError as e:
                if depth >= self.max_depth:
                    logger.error(f"Chunk {current.label} failed at subdivision depth {depth}, giving up")
                    raise
                error = e

            analysis, new_size = subdivide_chunk(current.content, size, self.estimator)
            sub_chunks = build_chunks(analysis, current.content, current.path)
            # A single piece holding every entry is the same chunk again
            if not sub_chunks or (len(sub_chunks) == 1 and sub_chunks[0].content == current.content):
                logger.error(f"Chunk {current.label} can not be split further below {new_size} tokens")
                raise error

            logger.warning(
                f"Splitting chunk {current.label} into {len(sub_chunks)} parts "
                f"of at most {new_size} tokens (depth {depth + 1}/{self.max_depth})"
            )
            # Reversed so the first sub-chunk is popped first
            for sub_chunk in reversed(sub_chunks):
                stack.append((sub_chunk, new_size, depth + 1))

        return results

"""Exceptions raised by json-llm-translate."""

from __future__ import annotations


class JsonTranslateError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(JsonTranslateError):
    """Invalid or missing configuration (e.g. no API key)."""


class OversizedEntryError(JsonTranslateError):
    """A single top-level entry is too large to fit in any chunk."""

    def __init__(self, key: str, tokens: int, limit: int):
        self.key = key
        self.tokens = tokens
        self.limit = limit
        super().__init__(
            f"Entry '{key}' needs ~{tokens} tokens, above the {limit} token limit. "
            "Split this entry manually before translating."
        )


class TranslationAttemptError(JsonTranslateError):
    """A single translation attempt failed. Retried by the executor."""


class CompletionError(TranslationAttemptError):
    """The completion service failed, refused, or truncated its reply."""


class ResponseParseError(TranslationAttemptError):
    """The model reply could not be parsed as a JSON object."""


class MissingKeysError(TranslationAttemptError):
    """The model reply dropped keys that were present in the request."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Translation is missing keys: {', '.join(missing)}")


class ShapeMismatchError(TranslationAttemptError):
    """The model reply replaced a nested object with a plain value, or the reverse."""

    def __init__(self, mismatched: list[str]):
        self.mismatched = mismatched
        super().__init__(f"Translation changed the nesting of keys: {', '.join(mismatched)}")


class ChunkTranslationError(JsonTranslateError):
    """A chunk could not be translated after all retries and subdivisions."""

    def __init__(self, message: str, path: tuple[int, ...] = (), last_error: Exception | None = None):
        self.path = path
        self.last_error = last_error
        super().__init__(message)


class MergeError(JsonTranslateError):
    """Reassembled or merged content is inconsistent or not serializable."""

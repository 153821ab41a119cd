"""Token estimation for JSON fragments."""

from __future__ import annotations

import json
import logging
import math
from functools import lru_cache
from typing import Any, Callable

import tiktoken

from .config import TRANSLATION_MODEL

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = "cl100k_base"

TokenEstimator = Callable[[Any], int]


def serialize(value: Any) -> str:
    """Compact JSON form of ``value``, the text whose size is estimated."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


@lru_cache(maxsize=None)
def _get_encoding(model_name: str):
    """
    Return the tiktoken encoding for ``model_name``.

    Unknown models fall back to ``cl100k_base``. Loading an encoding may need a
    network download of the BPE file; if that fails too, ``None`` is returned
    and callers use a character-based approximation instead.
    """
    try:
        return tiktoken.encoding_for_model(model_name)
    except KeyError:
        pass
    except Exception as e:
        logger.warning(f"Could not load tokenizer for {model_name}: {e}")

    try:
        return tiktoken.get_encoding(FALLBACK_ENCODING)
    except Exception as e:
        logger.warning(f"Could not load {FALLBACK_ENCODING} tokenizer, approximating token counts: {e}")
        return None


def count_tokens(text: str, model_name: str = TRANSLATION_MODEL) -> int:
    """Count the tokens of ``text`` as ``model_name`` would see them."""
    encoding = _get_encoding(model_name)
    if encoding is None:
        return math.ceil(len(text) / 4)
    return len(encoding.encode(text))


def estimate_tokens(value: Any) -> int:
    """Estimate the token cost of a JSON-serializable value."""
    return count_tokens(serialize(value))

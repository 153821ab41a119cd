"""Utility functions for json-llm-translate."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pycountry


def get_language_name(code: str) -> str:
    """
    Get the full language name from a locale code.

    Args:
        code: ISO 639-1/639-3 language code, optionally with a region
            (e.g., 'de', 'fr', 'pt-BR')

    Returns:
        Full language name (e.g., 'German', 'French', 'Portuguese')

    Raises:
        ValueError: If the language code is not recognized
    """
    # Handle some common special cases
    special_cases = {
        "zh": "Chinese",
        "zh-cn": "Chinese (Simplified)",
        "zh-tw": "Chinese (Traditional)",
        "zh-hans": "Chinese (Simplified)",
        "zh-hant": "Chinese (Traditional)",
    }

    code_lower = code.lower().replace("_", "-")
    if code_lower in special_cases:
        return special_cases[code_lower]

    base = code_lower.split("-", 1)[0]

    # Try to find the language using pycountry
    language = pycountry.languages.get(alpha_2=base)
    if language:
        return language.name

    # Try alpha_3 code as fallback
    language = pycountry.languages.get(alpha_3=base)
    if language:
        return language.name

    raise ValueError(f"Unknown language code: {code}")


def describe_locale(code: str) -> str:
    """Human-readable target for prompts, e.g. 'Spanish (es)'."""
    try:
        return f"{get_language_name(code)} ({code})"
    except ValueError:
        return code


def derive_output_path(input_file: Path, target_locale: str) -> Path:
    """
    Path of the translation of ``input_file``: ``dir/name.json`` -> ``dir/name_<locale>.json``.
    """
    return input_file.with_name(f"{input_file.stem}_{target_locale}{input_file.suffix}")


def find_missing_translations(original: dict[str, Any], existing: dict[str, Any]) -> dict[str, Any]:
    """
    Return the part of ``original`` that still has no translation in ``existing``.

    A key is missing when it is absent from ``existing`` or holds an empty value
    (``""``, ``None``, ``0``, ``False``, an empty container). Nested objects are
    compared recursively and only their missing keys are kept, so the result is
    the smallest document that still needs translating.
    """
    missing: dict[str, Any] = {}

    for key, value in original.items():
        existing_value = existing.get(key)
        if not existing_value:
            missing[key] = value
            continue

        if isinstance(value, dict):
            if not isinstance(existing_value, dict):
                missing[key] = value
                continue
            nested_missing = find_missing_translations(value, existing_value)
            if nested_missing:
                missing[key] = nested_missing

    return missing


def merge_translations(existing: dict[str, Any], new_translations: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``new_translations`` into ``existing`` without mutating either.

    Nested objects are merged key by key; any other value in
    ``new_translations`` replaces the existing one. Keys that only exist in
    ``existing`` are kept.
    """
    merged = dict(existing)

    for key, value in new_translations.items():
        if isinstance(value, dict):
            existing_value = existing.get(key)
            if not isinstance(existing_value, dict):
                existing_value = {}
            merged[key] = merge_translations(existing_value, value)
        else:
            merged[key] = value

    return merged

"""Loading of optional style guide files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ProjectContext:
    description: str | None = None
    domain: str | None = None
    audience: str | None = None

    def is_empty(self) -> bool:
        return not (self.description or self.domain or self.audience)


@dataclass(frozen=True)
class StyleGuide:
    """Tone and context instructions injected into every translation prompt."""

    general: str | None = None
    locales: dict[str, str] = field(default_factory=dict)
    project: ProjectContext = field(default_factory=ProjectContext)
    glossary: dict[str, str] = field(default_factory=dict)

    def for_locale(self, locale: str) -> str | None:
        """Return the locale-specific instructions for ``locale``, if any."""
        if locale in self.locales:
            return self.locales[locale]
        lowered = {code.lower(): text for code, text in self.locales.items()}
        return lowered.get(locale.lower())


def _optional_str(data: dict, key: str, source: Path) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Style guide {source}: '{key}' must be a string")
    return value


def _str_mapping(data: dict, key: str, source: Path) -> dict[str, str]:
    value = data.get(key) or {}
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ValueError(f"Style guide {source}: '{key}' must map strings to strings")
    return dict(value)


def load_style_guide(path: Path | None) -> StyleGuide | None:
    """
    Load a style guide from a JSON file.

    The file can have the following structure (every field is optional):
    {
        "general": "Instructions for every locale...",
        "locales": {
            "es": "Use the informal 'tú'...",
            ...
        },
        "project": {
            "description": "What the product is",
            "domain": "e.g. homebrewing",
            "audience": "e.g. hobbyists"
        },
        "glossary": {
            "term": "definition",
            ...
        }
    }

    Args:
        path: Path to the style guide JSON file, or None for no style guide

    Returns:
        The parsed StyleGuide, or None when no path was given

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or a field has the wrong type
    """
    if path is None:
        return None

    if not path.exists():
        raise FileNotFoundError(f"Style guide file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Style guide {path} must contain a JSON object")

    project_data = data.get("project") or {}
    if not isinstance(project_data, dict):
        raise ValueError(f"Style guide {path}: 'project' must be an object")

    return StyleGuide(
        general=_optional_str(data, "general", path),
        locales=_str_mapping(data, "locales", path),
        project=ProjectContext(
            description=_optional_str(project_data, "description", path),
            domain=_optional_str(project_data, "domain", path),
            audience=_optional_str(project_data, "audience", path),
        ),
        glossary=_str_mapping(data, "glossary", path),
    )

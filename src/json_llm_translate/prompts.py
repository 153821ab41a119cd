"""Rendering of translation requests."""

from __future__ import annotations

import json
from typing import Any

from .style_guide import StyleGuide
from .utils import describe_locale


def _project_section(style_guide: StyleGuide) -> str | None:
    project = style_guide.project
    if project.is_empty():
        return None
    lines = ["Project context:"]
    if project.description:
        lines.append(f"Description: {project.description}")
    if project.domain:
        lines.append(f"Domain: {project.domain}")
    if project.audience:
        lines.append(f"Audience: {project.audience}")
    return "\n".join(lines)


def _glossary_section(style_guide: StyleGuide) -> str | None:
    if not style_guide.glossary:
        return None
    lines = ["Glossary:"]
    for term, definition in style_guide.glossary.items():
        lines.append(f'- "{term}" refers to {definition}')
    return "\n".join(lines)


def build_translation_prompt(
    content: dict[str, Any],
    target_locale: str,
    style_guide: StyleGuide | None = None,
) -> str:
    """
    Build the single instruction string sent to the model for one chunk.

    Optional sections (project context, general and locale-specific style
    guide, glossary) are left out entirely when there is nothing to say.
    """
    sections = [
        f"Translate the following JSON content to {describe_locale(target_locale)}.\n"
        "Rules:\n"
        "- Preserve the JSON structure and keys exactly as they are.\n"
        "- Translate only string values.\n"
        '- Return only complete, valid JSON that starts with "{" and ends with "}".\n'
        "- Keep numbers, booleans and null values exactly as they are.\n"
        "- Make sure every bracket and brace is balanced."
    ]

    if style_guide is not None:
        project = _project_section(style_guide)
        if project:
            sections.append(project)

        if style_guide.general:
            sections.append(f"Style guide:\n{style_guide.general}")

        locale_guide = style_guide.for_locale(target_locale)
        if locale_guide:
            sections.append(f"Style guide for {target_locale}:\n{locale_guide}")

        glossary = _glossary_section(style_guide)
        if glossary:
            sections.append(glossary)

    sections.append(
        "Content to translate:\n" + json.dumps(content, ensure_ascii=False, indent=2)
    )
    return "\n\n".join(sections)

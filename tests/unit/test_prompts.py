import json

from json_llm_translate.prompts import build_translation_prompt
from json_llm_translate.style_guide import ProjectContext, StyleGuide


def test_fixed_instructions_in_order():
    prompt = build_translation_prompt({"greeting": "Hello"}, "es")

    markers = [
        "Translate the following JSON content to Spanish (es).",
        "Preserve the JSON structure and keys",
        "Translate only string values",
        'starts with "{" and ends with "}"',
        "Keep numbers, booleans and null values",
        "bracket and brace is balanced",
        "Content to translate:",
    ]
    positions = [prompt.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_no_optional_sections_without_style_guide():
    prompt = build_translation_prompt({"greeting": "Hello"}, "es")

    assert "Project context" not in prompt
    assert "Style guide" not in prompt
    assert "Glossary" not in prompt


def test_empty_style_guide_adds_nothing():
    assert build_translation_prompt({"a": "b"}, "es", StyleGuide()) == build_translation_prompt({"a": "b"}, "es")


def test_content_is_pretty_printed_last():
    content = {"greeting": "Hello", "nested": {"count": 5}}
    prompt = build_translation_prompt(content, "de")

    assert prompt.endswith(json.dumps(content, ensure_ascii=False, indent=2))


def test_style_guide_sections_in_order():
    style_guide = StyleGuide(
        general="Be concise.",
        locales={"es": "Use 'tú'.", "de": "Use 'du'."},
        project=ProjectContext(description="A brewing app", domain="Homebrewing", audience="Hobbyists"),
        glossary={"Gravity": "specific gravity"},
    )

    prompt = build_translation_prompt({"a": "b"}, "es", style_guide)

    markers = [
        "Project context:",
        "Description: A brewing app",
        "Domain: Homebrewing",
        "Audience: Hobbyists",
        "Style guide:\nBe concise.",
        "Style guide for es:\nUse 'tú'.",
        '- "Gravity" refers to specific gravity',
        "Content to translate:",
    ]
    positions = [prompt.index(marker) for marker in markers]
    assert positions == sorted(positions)
    assert "Use 'du'." not in prompt


def test_partial_project_context():
    style_guide = StyleGuide(project=ProjectContext(domain="Finance"))

    prompt = build_translation_prompt({"a": "b"}, "fr", style_guide)

    assert "Project context:\nDomain: Finance" in prompt
    assert "Description:" not in prompt
    assert "Audience:" not in prompt


def test_locale_guide_for_other_locale_is_omitted():
    style_guide = StyleGuide(locales={"de": "Use 'du'."})

    prompt = build_translation_prompt({"a": "b"}, "es", style_guide)

    assert "Style guide" not in prompt

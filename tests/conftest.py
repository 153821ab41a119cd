import json
import os
from unittest.mock import AsyncMock

import pytest

# Set a dummy API key before importing the package so nothing tries to read a real one.
os.environ.setdefault("OPENAI_API_KEY", "DUMMY_KEY_FOR_TESTING")

from json_llm_translate import executor
from json_llm_translate.tokens import serialize

CONTENT_MARKER = "Content to translate:\n"


def char_estimator(value):
    """One token per character of compact JSON, so chunk sizes are easy to reason about."""
    return len(serialize(value))


def prompt_content(prompt: str) -> dict:
    """Extract the JSON document embedded in a translation prompt."""
    return json.loads(prompt.split(CONTENT_MARKER, 1)[1])


def fake_translate(value, prefix="es:"):
    if isinstance(value, dict):
        return {key: fake_translate(item, prefix) for key, item in value.items()}
    if isinstance(value, str):
        return f"{prefix}{value}"
    return value


class FakeCompletionClient:
    """
    Stand-in for CompletionClient.

    ``replies`` is consumed in order; each item is a reply string, an exception
    to raise, or a callable taking the prompt. When ``replies`` runs out,
    ``default`` is used (translate everything by default).
    """

    def __init__(self, replies=None, default=None):
        self.replies = list(replies or [])
        self.default = default or (lambda prompt: json.dumps(fake_translate(prompt_content(prompt))))
        self.prompts = []

    @property
    def calls(self):
        return len(self.prompts)

    async def complete(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


@pytest.fixture
def estimator():
    return char_estimator


@pytest.fixture
def make_client():
    return FakeCompletionClient


@pytest.fixture
def no_sleep(monkeypatch):
    """Skip retry backoff delays and record them."""
    sleep = AsyncMock()
    monkeypatch.setattr(executor.asyncio, "sleep", sleep)
    return sleep

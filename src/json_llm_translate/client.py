"""Thin wrapper around the OpenAI chat completion API."""

from __future__ import annotations

import os

from openai import AsyncOpenAI, OpenAIError

from .config import TRANSLATION_MODEL, TRANSLATION_TEMPERATURE
from .exceptions import CompletionError, ConfigurationError


class CompletionClient:
    """
    Send one prompt, get one reply.

    Everything that can go wrong on the service side surfaces as
    CompletionError so the executor can retry it.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = TRANSLATION_MODEL,
        temperature: float = TRANSLATION_TEMPERATURE,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature

    async def complete(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise CompletionError(f"Completion request failed: {e}") from e

        choice = response.choices[0]
        message = choice.message

        # Handle refusals
        if getattr(message, "refusal", None):
            raise CompletionError(f"Model refused to translate: {message.refusal}")

        # Check for incomplete response
        if choice.finish_reason == "length":
            raise CompletionError("Response was truncated due to length limit")

        return message.content or ""


def create_client(
    api_key: str | None = None,
    model: str = TRANSLATION_MODEL,
    temperature: float = TRANSLATION_TEMPERATURE,
) -> CompletionClient:
    """Build a CompletionClient backed by AsyncOpenAI."""
    api_key = api_key or os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ConfigurationError(
            "OPENAI_API_KEY environment variable not set. "
            "Set it in your environment or in a .env file."
        )
    return CompletionClient(AsyncOpenAI(api_key=api_key), model=model, temperature=temperature)

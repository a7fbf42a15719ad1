"""
OpenAI translation provider with automatic retry of transient API failures.

The engine only sees the Translator protocol; this module is the one place
that talks to the OpenAI API.
"""

from __future__ import annotations

import os
from typing import Protocol

from dotenv import load_dotenv
from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AsyncOpenAI,
    BadRequestError,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from locale_sync.errors import ProviderError
from locale_sync.prompts import SYSTEM_PROMPT, build_user_prompt

load_dotenv()

TRANSIENT_ERRORS = (APIConnectionError, APITimeoutError, RateLimitError, InternalServerError)


class Translator(Protocol):
    model: str | None
    context_window: int
    max_output_tokens: int

    def render_prompt(self, source_locale: str, target_locales: list[str], document: dict) -> str: ...

    async def translate(self, source_locale: str, target_locales: list[str], document: dict) -> str: ...


def _get_client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "OPENAI_API_KEY is not set. "
            "Add it to your .env file (run `locale-sync init` to create one)."
        )
    return AsyncOpenAI(api_key=api_key)


def strip_fences(raw: str) -> str:
    """Remove markdown fences if the model wraps the JSON in ```json … ```."""
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("```")[1]
        if raw.startswith("json"):
            raw = raw[4:]
        raw = raw.strip()
    return raw


class OpenAITranslator:
    """
    Translate a locale document into several locales with one chat completion.

    Args:
        model:             OpenAI model identifier.
        temperature:       Sampling temperature.
        context_window:    Model context window, in tokens.
        max_output_tokens: Model completion ceiling, in tokens.
        max_attempts:      Attempts per request for transient API errors.
        client:            Pre-built AsyncOpenAI client (built lazily otherwise).
    """

    def __init__(
        self,
        model: str,
        temperature: float,
        context_window: int,
        max_output_tokens: int,
        max_attempts: int = 4,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.context_window = context_window
        self.max_output_tokens = max_output_tokens
        self.max_attempts = max_attempts
        self.retry_wait: wait_base = wait_exponential(multiplier=1, min=2, max=30)
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = _get_client()
        return self._client

    def _messages(self, source_locale: str, target_locales: list[str], document: dict) -> list[dict]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user",   "content": build_user_prompt(source_locale, target_locales, document)},
        ]

    def render_prompt(self, source_locale: str, target_locales: list[str], document: dict) -> str:
        return "\n".join(
            message["content"] for message in self._messages(source_locale, target_locales, document)
        )

    async def _complete(self, messages: list[dict]):
        params = {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
        }
        # Some newer models only accept the default temperature; retry
        # without the parameter if the API rejects it.
        try:
            return await self.client.chat.completions.create(temperature=self.temperature, **params)
        except BadRequestError as e:
            if "temperature" in str(e):
                return await self.client.chat.completions.create(**params)
            raise

    async def translate(self, source_locale: str, target_locales: list[str], document: dict) -> str:
        """
        Returns:
            The raw JSON string keyed by target locale.

        Raises:
            ProviderError: if the API call fails once retries are exhausted,
                or if the completion has no content.
        """
        messages = self._messages(source_locale, target_locales, document)

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                wait=self.retry_wait,
                stop=stop_after_attempt(self.max_attempts),
                reraise=True,
            ):
                with attempt:
                    response = await self._complete(messages)
        except APIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ProviderError("The translation failed to generate content.")
        return strip_fences(content)

"""Shared test doubles for the locale_sync tests."""
from __future__ import annotations

import asyncio
import json
from typing import Callable

import pytest

from locale_sync.strategy import InMemoryStrategy


def tag_strings(document, locale: str):
    """Stand-in translation: prefix every string leaf with the locale."""
    if isinstance(document, dict):
        return {key: tag_strings(value, locale) for key, value in document.items()}
    return f"[{locale}] {document}"


class StubTranslator:
    """Translator double returning canned responses and recording every call."""

    model = None

    def __init__(
        self,
        respond: Callable[[str, list[str], dict], str] | None = None,
        context_window: int = 128_000,
        max_output_tokens: int = 16_384,
        delay: float = 0.0,
    ) -> None:
        self._respond = respond
        self.context_window = context_window
        self.max_output_tokens = max_output_tokens
        self.delay = delay
        self.calls: list[tuple[str, list[str], dict]] = []

    def render_prompt(self, source_locale: str, target_locales: list[str], document: dict) -> str:
        return f"{source_locale} -> {', '.join(target_locales)}\n{json.dumps(document)}"

    async def translate(self, source_locale: str, target_locales: list[str], document: dict) -> str:
        self.calls.append((source_locale, list(target_locales), document))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self._respond is not None:
            return self._respond(source_locale, target_locales, document)
        return json.dumps({tag: tag_strings(document, tag) for tag in target_locales})


class RecordingStrategy(InMemoryStrategy):
    """In-memory strategy that remembers removals and writes."""

    def __init__(self, source: str, previous_output: str | None = None) -> None:
        super().__init__(source, previous_output)
        self.removed: list[str] = []
        self.written: list[dict] = []
        self.events: list[str] = []

    def remove_locale(self, tag: str, output: dict) -> None:
        self.removed.append(tag)
        self.events.append(f"remove {tag}")
        super().remove_locale(tag, output)

    def output_locales(self, output: dict) -> str:
        self.written.append(json.loads(json.dumps(output)))
        self.events.append("write")
        return super().output_locales(output)


@pytest.fixture
def translator() -> StubTranslator:
    return StubTranslator()

"""
Token-budget planning for provider calls.

A single completion has to hold the translation of the source document for
every locale in the request. The planner estimates that cost per locale and
splits the locale list into contiguous batches that fit the output budget
left over after the prompt.
"""

from __future__ import annotations

import json
import math
from functools import lru_cache
from typing import Mapping, Sequence, TypeVar

import tiktoken

from locale_sync.errors import PlanningError
from locale_sync.locales import base_language

T = TypeVar("T")

# Output tokens per source token, by base language. Scripts that the
# tokenizer splits finely cost far more than Latin-script translations.
DEFAULT_MULTIPLIER = 1.2

LANGUAGE_MULTIPLIERS: dict[str, float] = {
    "en": 1.0,
    "af": 1.2, "ca": 1.3, "da": 1.2, "de": 1.35, "es": 1.3, "fi": 1.4,
    "fr": 1.3, "id": 1.3, "it": 1.3, "nl": 1.3, "no": 1.2, "nb": 1.2,
    "pl": 1.5, "pt": 1.3, "ro": 1.4, "sv": 1.2, "tr": 1.5, "vi": 1.6,
    "cs": 1.5, "hr": 1.5, "hu": 1.6, "sk": 1.5, "sl": 1.5,
    "bg": 2.0, "el": 2.3, "ru": 1.9, "sr": 1.9, "uk": 2.0,
    "ar": 1.8, "fa": 1.9, "he": 1.8, "ur": 2.0,
    "ja": 1.8, "ko": 1.9, "zh": 1.6,
    "bn": 3.0, "gu": 3.0, "hi": 2.5, "kn": 3.2, "ml": 3.5, "mr": 3.0,
    "ta": 3.2, "te": 3.2, "th": 2.5, "km": 3.5, "lo": 3.5, "my": 4.0,
    "am": 3.0, "hy": 2.8, "ka": 3.0,
}


def estimate_tokens(*texts: str) -> int:
    """
    Estimate the token count of one or more strings.

    One token is roughly four characters of English text.
    """
    total_length = sum(len(text) for text in texts)
    return math.ceil(total_length / 4)


# Encoding used when tiktoken does not know the model name.
FALLBACK_ENCODING = "o200k_base"


@lru_cache(maxsize=None)
def _encoding_for(model: str):
    """
    Load the tokenizer for `model`.

    tiktoken downloads encoding files on first use. Without network access
    neither the model encoding nor the fallback can be loaded; None then
    means the character heuristic is used.
    """
    try:
        return tiktoken.encoding_for_model(model)
    except Exception:
        try:
            return tiktoken.get_encoding(FALLBACK_ENCODING)
        except Exception:
            return None


def count_tokens(text: str, model: str | None = None) -> int:
    """Count the tokens of `text` with the tokenizer of `model`."""
    encoding = _encoding_for(model) if model else None
    if encoding is None:
        return estimate_tokens(text)
    return len(encoding.encode(text, disallowed_special=()))


def multiplier_for(locale: str, multipliers: Mapping[str, float] | None = None) -> float:
    table = LANGUAGE_MULTIPLIERS if multipliers is None else multipliers
    return table.get(base_language(locale), DEFAULT_MULTIPLIER)


def remaining_output_budget(prompt_tokens: int, context_window: int, max_output_tokens: int) -> int:
    """
    Output tokens still available once the prompt is accounted for.

    The first (context_window - max_output_tokens) prompt tokens are free;
    every prompt token past that eats into the output ceiling.

    Raises:
        PlanningError: if the prompt alone fills the context window.
    """
    if prompt_tokens >= context_window:
        raise PlanningError(
            f"prompt exceeds token limit: {prompt_tokens} tokens for a "
            f"{context_window}-token context window"
        )
    free = context_window - max_output_tokens
    overflow = max(0, prompt_tokens - free)
    return max_output_tokens - overflow


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Contiguous slices of `size` items; the last one may be shorter."""
    if size < 1:
        raise PlanningError(f"batch size cannot be less than one (got {size})")
    return [list(items[start: start + size]) for start in range(0, len(items), size)]


def plan_batches(
    target_locales: Sequence[str],
    prompt: str,
    source: Mapping,
    context_window: int,
    max_output_tokens: int,
    multipliers: Mapping[str, float] | None = None,
    model: str | None = None,
) -> list[list[str]]:
    """
    Split `target_locales` into the batches sent to the provider.

    Args:
        target_locales:    Locales to translate into, in request order.
        prompt:            Full prompt text for a request covering every locale.
        source:            The document being translated.
        context_window:    Provider context window, in tokens.
        max_output_tokens: Provider completion ceiling, in tokens.
        multipliers:       Expansion ratios by base language.
        model:             Model whose tokenizer counts the tokens; without
                           one, tokens are estimated from the length.

    Returns:
        Ordered, non-overlapping batches whose concatenation is `target_locales`.

    Raises:
        PlanningError: when no batching can fit the budget.
    """
    if not target_locales:
        return []

    prompt_tokens = count_tokens(prompt, model)
    remaining = remaining_output_budget(prompt_tokens, context_window, max_output_tokens)

    source_tokens = count_tokens(json.dumps(source, ensure_ascii=False), model)
    costs = [source_tokens * multiplier_for(locale, multipliers) for locale in target_locales]

    worst = max(costs)
    if worst > remaining:
        locale = target_locales[costs.index(worst)]
        raise PlanningError(
            f"generating {locale} will exceed token limit: an estimated "
            f"{worst:.0f} tokens against a remaining budget of {remaining}"
        )

    if sum(costs) <= remaining:
        return [list(target_locales)]

    average = sum(multiplier_for(locale, multipliers) for locale in target_locales) / len(target_locales)
    batch_size = math.floor(remaining / (source_tokens * average))
    if batch_size < 1:
        raise PlanningError("batch size cannot be zero")

    return chunk(target_locales, batch_size)

"""
Folding provider output back into the persisted locale documents.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Iterable, Mapping

from locale_sync.differ import Change
from locale_sync.errors import ProviderError
from locale_sync.schema import ObjectSchema, validate_document


def parse_provider_output(raw: str | None) -> dict:
    """Parse a raw completion into a JSON object keyed by locale."""
    if not isinstance(raw, str) or not raw.strip():
        raise ProviderError("The translation failed to generate content.")
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProviderError(f"Model returned non-JSON output:\n{raw}") from exc
    if not isinstance(parsed, dict):
        raise ProviderError(f"Expected a JSON object, got: {type(parsed).__name__}")
    return parsed


def validate_and_shape(raw: str | None, master: Mapping[str, ObjectSchema]) -> dict:
    """
    Parse a provider response and check it against the master schema.

    Every locale in `master` must be present with exactly the shape of the
    translated document; extra locales or keys and non-string leaves fail.
    """
    parsed = parse_provider_output(raw)
    validate_document(parsed, master)
    return parsed


def deep_merge(previous: Any, incoming: Any) -> Any:
    """
    Merge `incoming` over `previous` without mutating either.

    Objects are merged key by key; any other value (lists included) in
    `incoming` replaces what was there. A missing `previous` yields `incoming`.
    """
    if not isinstance(previous, dict) or not isinstance(incoming, dict):
        return copy.deepcopy(incoming)

    merged = copy.deepcopy(previous)
    for key, value in incoming.items():
        merged[key] = deep_merge(merged.get(key), value)
    return merged


def apply_deletions(document: dict, deletions: Iterable[Change]) -> dict:
    """Remove every deleted path from `document` in place; absent paths are skipped."""
    for change in deletions:
        if not change.path:
            continue
        node: Any = document
        for key in change.path[:-1]:
            if not isinstance(node, dict) or key not in node:
                node = None
                break
            node = node[key]
        if isinstance(node, dict):
            node.pop(change.path[-1], None)
    return document

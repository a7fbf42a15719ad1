"""
Locale tags accepted by the engine.

Tags are opaque identifiers compared by exact string equality. The base
language code is only ever used to look up a token expansion ratio.
"""

from __future__ import annotations

import re
from typing import Iterable

from locale_sync.errors import ConfigurationError

_LANGUAGES = [
    "af", "am", "ar", "az", "be", "bg", "bn", "bs", "ca", "cs", "cy", "da",
    "de", "el", "en", "es", "et", "eu", "fa", "fi", "fil", "fr", "ga", "gl",
    "gu", "he", "hi", "hr", "hu", "hy", "id", "is", "it", "ja", "ka", "kk",
    "km", "kn", "ko", "lo", "lt", "lv", "mk", "ml", "mn", "mr", "ms", "my",
    "nb", "ne", "nl", "no", "pa", "pl", "pt", "ro", "ru", "si", "sk", "sl",
    "sq", "sr", "sv", "sw", "ta", "te", "th", "tl", "tr", "uk", "ur", "uz",
    "vi", "zh", "zu",
]

_REGIONAL = [
    "ar-AE", "ar-EG", "ar-SA",
    "de-AT", "de-CH", "de-DE",
    "en-AU", "en-CA", "en-GB", "en-IE", "en-IN", "en-NZ", "en-US", "en-ZA",
    "es-AR", "es-CO", "es-ES", "es-MX", "es-US", "es-419",
    "fr-BE", "fr-CA", "fr-CH", "fr-FR",
    "it-CH", "it-IT",
    "nl-BE", "nl-NL",
    "pt-BR", "pt-PT",
    "sr-Cyrl", "sr-Latn",
    "sv-FI", "sv-SE",
    "zh-CN", "zh-HK", "zh-Hans", "zh-Hant", "zh-SG", "zh-TW",
]

KNOWN_LOCALES: frozenset[str] = frozenset(_LANGUAGES + _REGIONAL)

_SEPARATOR = re.compile(r"[-_]")


def base_language(tag: str) -> str:
    """Return the lower-cased language part of a tag ("fr-CA" -> "fr")."""
    return _SEPARATOR.split(tag, maxsplit=1)[0].lower()


def check_locale(tag: str) -> str:
    if tag not in KNOWN_LOCALES:
        raise ConfigurationError(f"Unknown locale tag: {tag!r}")
    return tag


def reconcile_locales(
    configured: Iterable[str],
    previous: Iterable[str],
    source_locale: str,
) -> tuple[list[str], list[str]]:
    """
    Split the symmetric difference of two locale sets.

    Returns:
        (to_add, to_remove): locales only configured (configured order) and
        locales only present in the previous output (previous order). The
        source locale counts as configured so its baseline entry is kept.
    """
    configured = list(configured)
    previous = list(previous)
    wanted = set(configured) | {source_locale}
    existing = set(previous)

    to_add = [tag for tag in configured if tag not in existing]
    to_remove = [tag for tag in previous if tag not in wanted]
    return to_add, to_remove

"""
Prompt templates for the locale translation task.

The system prompt instructs the model on its role and output contract.
The user prompt injects the source locale, the target locales and the
document to translate.
"""

import json

SYSTEM_PROMPT = """\
You are a language translation assistant that translates application locale files.

You will receive a JSON object representing a locale file in the source language, \
the locale code of that language, and the locale codes of the target languages. \
Translate the content into every target language while preserving the JSON structure.

Translation rules:
- Retain the structure and keys of the source JSON exactly; never add, drop or rename keys.
- Translate only the string values, accurately and naturally for each target locale.
- Respect regional variants (e.g. fr-CA is Canadian French, pt-BR is Brazilian Portuguese).
- Do NOT translate placeholders like `{name}`, `{count}`, `%s`, `{{value}}`, or HTML tags.
- Keep technical terms, product names, URLs and code identifiers exactly as they appear.

Output format rules:
- Return ONLY a JSON object where each target locale code is a key.
- The value for each key is the complete translated JSON object for that locale.
- Do NOT add explanations, notes, or any extra content.
"""


def build_user_prompt(source_locale: str, target_locales: list[str], document: dict) -> str:
    """
    Build the user-turn message that will be sent to the model.

    Args:
        source_locale:  e.g. "en"
        target_locales: e.g. ["fr-CA", "de"]
        document:       the locale document to translate

    Returns:
        A formatted prompt string.
    """
    source_json = json.dumps(document, ensure_ascii=False)
    return (
        f"Translate the following JSON object from {source_locale} into the following "
        f"target locales: {', '.join(target_locales)}.\n"
        f"Please return a JSON object where each target locale is a key. The value each "
        f"key should hold is the translation in that language. Preserve the structure:\n\n"
        f"Source JSON:\n{source_json}"
    )

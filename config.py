"""
Central configuration for the locale synchronization tool.

Per-project settings (locales, source file, locales directory) live in the
project's config.json; this module holds the tool-wide defaults.

config.json fields:
    "target_locales"  – locale tags to keep in sync, e.g. ["en", "fr-CA"]
    "source_locale"   – tag of the source document, e.g. "en"
    "source_path"     – path of the source document, e.g. "en.json"
    "locales_path"    – directory holding one <locale>.json per locale
    "excluded_files"  – optional file names in locales_path to ignore
"""

# ── Model ──────────────────────────────────────────────────────────────────────
MODEL = "gpt-4o-mini"          # change to "gpt-4o", "gpt-4.1-mini", etc.
TEMPERATURE = 0.2              # lower = more consistent/literal translations

# ── Token budget ───────────────────────────────────────────────────────────────
# Context window and completion ceiling of MODEL. Prompt tokens beyond
# (CONTEXT_WINDOW - MAX_OUTPUT_TOKENS) reduce the output budget.
CONTEXT_WINDOW = 128_000
MAX_OUTPUT_TOKENS = 16_384

# ── Provider retries ───────────────────────────────────────────────────────────
# Attempts per request for rate limits, timeouts and 5xx responses.
MAX_ATTEMPTS = 4

# ── Paths ──────────────────────────────────────────────────────────────────────
CONFIG_FILE = "config.json"

# ── `init` scaffolding ─────────────────────────────────────────────────────────
INIT_DIRS = ["locales"]

INIT_FILES = {
    "config.json": """{
  "target_locales": ["en", "fr-CA"],
  "locales_path": "locales",
  "source_path": "en.json",
  "source_locale": "en"
}
""",
    "en.json": """{
  "greeting": "Hello, World!"
}
""",
    ".env": 'OPENAI_API_KEY="your-api-key"\n',
}

"""
Entry point for the locale synchronization tool.

Usage:
    python main.py init
    python main.py sync
    python main.py sync path/to/config.json --model gpt-4o --no-progress
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import config
from locale_sync import log
from locale_sync.client import OpenAITranslator
from locale_sync.errors import LocaleSyncError
from locale_sync.manager import LocaleFileManager, SyncResult
from locale_sync.settings import load_config


# ── init ───────────────────────────────────────────────────────────────────────

def init_project(root: Path) -> list[Path]:
    """Create the starter layout in `root`, never overwriting existing files."""
    log.message(log.INITIALIZING, "Initializing locale file manager setup...")
    created: list[Path] = []

    for name in config.INIT_DIRS:
        path = root / name
        if not path.exists():
            path.mkdir(parents=True)
            log.message(log.INITIALIZING, f"Created directory: {path}")
            created.append(path)

    for name, content in config.INIT_FILES.items():
        path = root / name
        if not path.exists():
            path.write_text(content, encoding="utf-8")
            log.message(log.INITIALIZING, f"Created file: {path}")
            created.append(path)

    log.message(log.INITIALIZING, "Setup complete!")
    return created


# ── sync ───────────────────────────────────────────────────────────────────────

def run_sync(args: argparse.Namespace) -> SyncResult:
    settings = load_config(Path(args.config).resolve())

    print(f"Source locale   : {settings.source_locale}")
    print(f"Target locales  : {', '.join(settings.target_locales)}")
    print(f"Model           : {args.model}\n")

    translator = OpenAITranslator(
        model=args.model,
        temperature=args.temperature,
        context_window=config.CONTEXT_WINDOW,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
        max_attempts=args.max_attempts,
    )
    manager = LocaleFileManager.from_config(
        settings,
        translator,
        show_progress=not args.no_progress,
    )
    return asyncio.run(manager.manage())


# ── CLI ────────────────────────────────────────────────────────────────────────

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep translated locale files in sync with a source locale file."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create config.json, en.json, .env and locales/ here")

    sync = sub.add_parser("sync", help="Generate or update the locale files")
    sync.add_argument(
        "config",
        nargs="?",
        default=config.CONFIG_FILE,
        help=f"Path to the config file (default: {config.CONFIG_FILE})",
    )
    sync.add_argument(
        "--model", "-m",
        default=config.MODEL,
        help=f"OpenAI model to use (default: {config.MODEL})",
    )
    sync.add_argument(
        "--temperature",
        type=float,
        default=config.TEMPERATURE,
        help=f"Sampling temperature (default: {config.TEMPERATURE})",
    )
    sync.add_argument(
        "--max-attempts",
        type=int,
        default=config.MAX_ATTEMPTS,
        dest="max_attempts",
        help=f"Attempts per request on transient API errors (default: {config.MAX_ATTEMPTS})",
    )
    sync.add_argument(
        "--no-progress",
        action="store_true",
        dest="no_progress",
        help="Hide the batch progress bar",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.command == "init":
        init_project(Path.cwd())
        return

    try:
        result = run_sync(args)
    except (LocaleSyncError, EnvironmentError) as exc:
        print(f"[ERROR] {exc}")
        sys.exit(1)

    if result.added:
        print(f"  Locales added   : {', '.join(result.added)}")
    if result.removed:
        print(f"  Locales removed : {', '.join(result.removed)}")
    print(f"  Keys changed    : {result.changed}")
    print(f"  Keys deleted    : {result.deleted}")
    print("Done.")


if __name__ == "__main__":
    main()

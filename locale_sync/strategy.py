"""
Persistence strategies: where the source document comes from and where the
locale documents go.

Both strategies expose the same four operations so the manager never has to
know which one it is talking to.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from locale_sync.errors import ConfigurationError
from locale_sync.settings import FileSystemConfig, InMemoryConfig


class Strategy(Protocol):
    def get_source_document(self) -> dict: ...

    def get_previous_locales(self) -> dict | None: ...

    def remove_locale(self, tag: str, output: dict) -> None: ...

    def output_locales(self, output: dict) -> str | None: ...


def parse_json_object(text: str, origin: str) -> dict:
    """Parse `text` and insist on a JSON object at the root."""
    if not text or not text.strip():
        raise ConfigurationError(f"File should be in JSON format at: {origin}")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {origin}: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ConfigurationError(f"{origin} did not contain a JSON object")
    return parsed


class FileSystemStrategy:
    """
    A source JSON file plus a directory holding one `<locale>.json` per locale.

    Relative paths are resolved against `root` (the working directory by
    default). Files listed in `excluded_files` are ignored when scanning the
    locales directory.
    """

    def __init__(
        self,
        source_path: str | Path,
        locales_path: str | Path,
        excluded_files: list[str] | None = None,
        root: str | Path | None = None,
    ) -> None:
        base = Path(root) if root is not None else Path.cwd()
        self.source_path = base / source_path
        self.locales_path = base / locales_path
        self.excluded_files = set(excluded_files or [])

        if self.locales_path.exists() and not self.locales_path.is_dir():
            raise ConfigurationError(f"Locales path is not a directory: {self.locales_path}")
        self.locales_path.mkdir(parents=True, exist_ok=True)

    def _read(self, path: Path) -> dict:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {path}: {exc}") from exc
        return parse_json_object(text, str(path))

    def locale_files(self) -> list[Path]:
        return sorted(
            path for path in self.locales_path.glob("*.json")
            if path.name not in self.excluded_files
        )

    def get_source_document(self) -> dict:
        if not self.source_path.is_file():
            raise ConfigurationError(f"Source file not found: {self.source_path}")
        return self._read(self.source_path)

    def get_previous_locales(self) -> dict | None:
        files = self.locale_files()
        if not files:
            return None
        return {path.name.split(".")[0]: self._read(path) for path in files}

    def remove_locale(self, tag: str, output: dict) -> None:
        output.pop(tag, None)
        (self.locales_path / f"{tag}.json").unlink(missing_ok=True)

    def output_locales(self, output: dict) -> None:
        self.locales_path.mkdir(parents=True, exist_ok=True)
        for tag, document in output.items():
            _write_json(self.locales_path / f"{tag}.json", document)


def _write_json(path: Path, document: dict) -> None:
    """Write through a temporary file so a locale file is never half written."""
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


class InMemoryStrategy:
    """Source and previous output passed in as JSON strings."""

    def __init__(self, source: str, previous_output: str | None = None) -> None:
        self.source = source
        self.previous_output = previous_output

    def get_source_document(self) -> dict:
        if not self.source:
            raise ConfigurationError("Must supply value for source")
        return parse_json_object(self.source, "source")

    def get_previous_locales(self) -> dict | None:
        if not self.previous_output:
            return None
        return parse_json_object(self.previous_output, "previous_output")

    def remove_locale(self, tag: str, output: dict) -> None:
        output.pop(tag, None)

    def output_locales(self, output: dict) -> str:
        return json.dumps(output, ensure_ascii=False)


def strategy_from_config(
    config: FileSystemConfig | InMemoryConfig,
    root: str | Path | None = None,
) -> FileSystemStrategy | InMemoryStrategy:
    if isinstance(config, FileSystemConfig):
        return FileSystemStrategy(
            source_path=config.source_path,
            locales_path=config.locales_path,
            excluded_files=config.excluded_files,
            root=root,
        )
    if isinstance(config, InMemoryConfig):
        return InMemoryStrategy(source=config.source, previous_output=config.previous_output)
    raise ConfigurationError("Invalid Configuration")

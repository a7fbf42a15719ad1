"""
Keeps a set of locale documents in sync with a single source document.

One call to LocaleFileManager.manage() is one run:

  1. no previous output      → translate the whole source for every locale
  2. locale set changed      → translate the whole source for added locales,
                               drop removed ones
  3. source changed          → translate only the added/edited keys for every
                               locale, merge them in, apply deletions

Nothing is persisted until every translation of the run has succeeded.
"""

from __future__ import annotations

import asyncio
import copy
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from tqdm import tqdm

from locale_sync import log
from locale_sync.client import Translator
from locale_sync.differ import build_delta, deletions, diff
from locale_sync.errors import ConfigurationError
from locale_sync.locales import check_locale, reconcile_locales
from locale_sync.merge import apply_deletions, deep_merge, validate_and_shape
from locale_sync.planner import plan_batches
from locale_sync.schema import derive_schema, master_schema
from locale_sync.settings import FileSystemConfig, InMemoryConfig
from locale_sync.strategy import Strategy, strategy_from_config


@dataclass
class SyncResult:
    """What one run did, plus the strategy's acknowledgement of the write."""

    output: str | None
    generated: bool = False
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: int = 0
    deleted: int = 0


class LocaleFileManager:
    def __init__(
        self,
        strategy: Strategy,
        translator: Translator,
        target_locales: Sequence[str],
        source_locale: str,
        multipliers: Mapping[str, float] | None = None,
        show_progress: bool = True,
    ) -> None:
        self.strategy = strategy
        self.translator = translator
        self.locales = [check_locale(tag) for tag in target_locales]
        self.source_locale = check_locale(source_locale)
        self.multipliers = multipliers
        self.show_progress = show_progress

    @classmethod
    def from_config(
        cls,
        config: FileSystemConfig | InMemoryConfig,
        translator: Translator,
        **kwargs,
    ) -> "LocaleFileManager":
        return cls(
            strategy=strategy_from_config(config),
            translator=translator,
            target_locales=config.target_locales,
            source_locale=config.source_locale,
            **kwargs,
        )

    # ── Translation step ──────────────────────────────────────────────────────

    async def generate(self, locales: Sequence[str], document: dict) -> dict:
        """
        Translate `document` into every locale in `locales`.

        Batches are planned against the provider's token budget and sent
        concurrently. If any batch fails the others are cancelled and the
        error propagates; nothing from the step is kept.
        """
        locales = list(locales)
        if not locales:
            return {}

        master = master_schema(locales, document)
        prompt = self.translator.render_prompt(self.source_locale, locales, document)
        batches = plan_batches(
            locales,
            prompt,
            document,
            context_window=self.translator.context_window,
            max_output_tokens=self.translator.max_output_tokens,
            multipliers=self.multipliers,
            model=self.translator.model,
        )

        responses = await self._dispatch(batches, document)

        translated: dict = {}
        for batch, raw in zip(batches, responses):
            batch_schema = {tag: master[tag] for tag in batch}
            translated.update(validate_and_shape(raw, batch_schema))
        return translated

    async def _dispatch(self, batches: list[list[str]], document: dict) -> list[str]:
        tasks = [
            asyncio.ensure_future(self.translator.translate(self.source_locale, batch, document))
            for batch in batches
        ]
        with tqdm(
            total=len(tasks),
            desc="  Translating batches",
            unit="batch",
            disable=not self.show_progress,
        ) as bar:
            for task in tasks:
                task.add_done_callback(lambda _: bar.update(1))
            try:
                return list(await asyncio.gather(*tasks))
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

    # ── Run ───────────────────────────────────────────────────────────────────

    def _load_source(self) -> dict:
        source = self.strategy.get_source_document()
        if not source:
            raise ConfigurationError("Source document is empty; there is nothing to translate.")
        derive_schema(source)
        return source

    async def manage(self) -> SyncResult:
        source = self._load_source()
        previous = self.strategy.get_previous_locales()

        # 1. no previous generation: translate everything
        if previous is None:
            output = await self.generate(self.locales, source)
            output[self.source_locale] = copy.deepcopy(source)
            log.message(log.GENERATING, f"Generated locale objects: {', '.join(self.locales)}")
            return SyncResult(
                output=self.strategy.output_locales(output),
                generated=True,
                added=list(self.locales),
            )

        # 2. locales added and/or removed
        output = copy.deepcopy(previous)
        to_add, to_remove = reconcile_locales(self.locales, previous, self.source_locale)

        if to_add:
            output.update(await self.generate(to_add, source))
            log.message(log.MANAGING, f"Added the following locale(s): {', '.join(to_add)}")

        for tag in to_remove:
            output.pop(tag, None)
        if to_remove:
            log.message(log.MANAGING, f"Removed the following locale(s): {', '.join(to_remove)}")

        # 3. source changes since the last generation
        changes = diff(previous.get(self.source_locale, {}), source)
        removed_paths = deletions(changes)
        delta = build_delta(changes)

        if not changes:
            log.message(log.MANAGING, "Source document is unchanged since the last generation.")
        if delta:
            translated = await self.generate(self.locales, delta)
            for tag, partial in translated.items():
                output[tag] = deep_merge(output.get(tag), partial)
        if removed_paths:
            for tag in output:
                apply_deletions(output[tag], removed_paths)

        output[self.source_locale] = copy.deepcopy(source)

        # commit: write every kept locale before dropping removed ones
        acknowledgement = self.strategy.output_locales(output)
        for tag in to_remove:
            self.strategy.remove_locale(tag, output)

        if changes:
            log.message(log.GENERATING, "Finished generating!")
        return SyncResult(
            output=acknowledgement,
            added=to_add,
            removed=to_remove,
            changed=len(changes) - len(removed_paths),
            deleted=len(removed_paths),
        )

"""
Structural diff of JSON-like document trees.

diff() compares two trees and returns a flat edit script; build_delta()
replays the additions and edits of that script into the smallest document
that still has to be translated. Nothing here knows about locales.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class ChangeKind(str, Enum):
    ADDED   = "N"
    DELETED = "D"
    EDITED  = "E"
    ARRAY   = "A"


@dataclass(frozen=True)
class Change:
    """
    One record of an edit script.

    `path` leads from the root to the changed node. ADDED and EDITED carry
    the new `value`; DELETED and EDITED carry the `previous` one. ARRAY
    records point at a list and describe the element at `index` via `item`.
    """

    kind: ChangeKind
    path: tuple = ()
    value: Any = None
    previous: Any = None
    index: int | None = None
    item: "Change | None" = None


def diff(baseline: Any, current: Any, path: tuple = ()) -> list[Change]:
    """Return every change needed to turn `baseline` into `current`."""
    if isinstance(baseline, dict) and isinstance(current, dict):
        return _diff_objects(baseline, current, path)
    if isinstance(baseline, list) and isinstance(current, list):
        return _diff_lists(baseline, current, path)
    if type(baseline) is not type(current) or baseline != current:
        return [Change(ChangeKind.EDITED, path, value=current, previous=baseline)]
    return []


def _diff_objects(baseline: dict, current: dict, path: tuple) -> list[Change]:
    changes: list[Change] = []
    for key, old in baseline.items():
        if key not in current:
            changes.append(Change(ChangeKind.DELETED, path + (key,), previous=old))
        else:
            changes.extend(diff(old, current[key], path + (key,)))
    for key, new in current.items():
        if key not in baseline:
            changes.append(Change(ChangeKind.ADDED, path + (key,), value=new))
    return changes


def _diff_lists(baseline: list, current: list, path: tuple) -> list[Change]:
    changes: list[Change] = []
    shared = min(len(baseline), len(current))
    for i in range(shared):
        changes.extend(diff(baseline[i], current[i], path + (i,)))
    for i in range(shared, len(current)):
        item = Change(ChangeKind.ADDED, value=current[i])
        changes.append(Change(ChangeKind.ARRAY, path, index=i, item=item))
    for i in range(shared, len(baseline)):
        item = Change(ChangeKind.DELETED, previous=baseline[i])
        changes.append(Change(ChangeKind.ARRAY, path, index=i, item=item))
    return changes


def nest(path: Iterable, value: Any) -> Any:
    """nest(["a", "b"], "x") -> {"a": {"b": "x"}}"""
    nested = copy.deepcopy(value)
    for key in reversed(list(path)):
        nested = {key: nested}
    return nested


def _merge_into(target: dict, incoming: dict) -> None:
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_into(target[key], value)
        else:
            target[key] = value


def build_delta(changes: Iterable[Change]) -> dict:
    """
    Rebuild the document holding only added and edited values.

    Deletions are left out; they are applied to the merged output directly.
    """
    delta: dict = {}
    for change in changes:
        if change.kind not in (ChangeKind.ADDED, ChangeKind.EDITED):
            continue
        if not change.path:
            if isinstance(change.value, dict):
                _merge_into(delta, copy.deepcopy(change.value))
            continue
        _merge_into(delta, nest(change.path, change.value))
    return delta


def deletions(changes: Iterable[Change]) -> list[Change]:
    return [change for change in changes if change.kind is ChangeKind.DELETED]

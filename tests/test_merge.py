import json

import pytest

from locale_sync.differ import Change, ChangeKind
from locale_sync.errors import ProviderError, SchemaValidationError
from locale_sync.merge import apply_deletions, deep_merge, parse_provider_output, validate_and_shape
from locale_sync.schema import master_schema


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_provider_output_is_a_provider_error(raw):
    with pytest.raises(ProviderError, match="failed to generate content"):
        parse_provider_output(raw)


def test_malformed_provider_output_is_a_provider_error():
    with pytest.raises(ProviderError, match="non-JSON"):
        parse_provider_output("{not json")
    with pytest.raises(ProviderError, match="JSON object"):
        parse_provider_output('["fr"]')


def test_validate_and_shape_returns_parsed_document():
    master = master_schema(["fr"], {"a": "1"})
    assert validate_and_shape('{"fr": {"a": "un"}}', master) == {"fr": {"a": "un"}}


def test_validate_and_shape_rejects_numeric_leaf():
    master = master_schema(["fr"], {"a": "1"})
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_and_shape(json.dumps({"fr": {"a": 1}}), master)
    assert excinfo.value.locale == "fr"


def test_deep_merge_recurses_into_objects():
    previous = {"a": "1", "nav": {"home": "Home", "about": "About"}}
    incoming = {"nav": {"home": "Start"}, "b": "2"}

    merged = deep_merge(previous, incoming)

    assert merged == {"a": "1", "nav": {"home": "Start", "about": "About"}, "b": "2"}
    assert previous == {"a": "1", "nav": {"home": "Home", "about": "About"}}


def test_deep_merge_overwrites_non_objects_and_lists():
    assert deep_merge({"a": "text"}, {"a": {"b": "c"}}) == {"a": {"b": "c"}}
    assert deep_merge({"a": {"b": "c"}}, {"a": "text"}) == {"a": "text"}
    assert deep_merge({"a": ["1", "2"]}, {"a": ["3"]}) == {"a": ["3"]}


def test_deep_merge_without_previous_returns_incoming():
    incoming = {"a": {"b": "c"}}
    merged = deep_merge(None, incoming)

    assert merged == incoming
    assert merged is not incoming


def test_apply_deletions_removes_paths_and_skips_missing():
    document = {"a": "1", "b": "2", "nav": {"home": "Home", "about": "About"}}
    removed = [
        Change(ChangeKind.DELETED, ("b",)),
        Change(ChangeKind.DELETED, ("nav", "about")),
        Change(ChangeKind.DELETED, ("missing", "key")),
        Change(ChangeKind.DELETED, ("a", "not-an-object")),
    ]

    assert apply_deletions(document, removed) == {"a": "1", "nav": {"home": "Home"}}

import pytest

from locale_sync.errors import SchemaError, SchemaValidationError
from locale_sync.schema import (
    ObjectSchema,
    StringSchema,
    derive_schema,
    master_json_schema,
    master_schema,
    validate_document,
)


def test_derive_schema_builds_tagged_tree():
    schema = derive_schema({"greeting": "Hello", "nav": {"home": "Home"}})

    assert schema == ObjectSchema(
        {"greeting": StringSchema(), "nav": ObjectSchema({"home": StringSchema()})}
    )


@pytest.mark.parametrize(
    "document, path",
    [
        ({"a": {}}, ("a",)),
        ({"a": {"b": 1}}, ("a", "b")),
        ({"a": ["x"]}, ("a",)),
        ({"a": None}, ("a",)),
        ({"a": True}, ("a",)),
    ],
)
def test_derive_schema_rejects_invalid_values(document, path):
    with pytest.raises(SchemaError) as excinfo:
        derive_schema(document)
    assert excinfo.value.path == path


def test_master_schema_rejects_empty_document():
    with pytest.raises(SchemaError, match="empty object"):
        master_schema(["fr"], {})


def test_master_schema_broadcasts_one_schema():
    master = master_schema(["fr", "de"], {"a": "1"})

    assert set(master) == {"fr", "de"}
    assert master["fr"] is master["de"]


def test_master_json_schema_is_strict():
    json_schema = master_json_schema(master_schema(["fr"], {"a": "1"}))

    assert json_schema["required"] == ["fr"]
    assert json_schema["additionalProperties"] is False
    assert json_schema["properties"]["fr"] == {
        "type": "object",
        "properties": {"a": {"type": "string"}},
        "required": ["a"],
        "additionalProperties": False,
    }


def test_validate_document_accepts_matching_shape():
    master = master_schema(["fr", "de"], {"a": "1", "n": {"b": "2"}})
    validate_document({"fr": {"a": "un", "n": {"b": "deux"}}, "de": {"a": "eins", "n": {"b": "zwei"}}}, master)


def test_validate_document_reports_locale_of_numeric_leaf():
    master = master_schema(["fr", "de"], {"a": "1"})

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_document({"fr": {"a": "un"}, "de": {"a": 1}}, master)

    assert excinfo.value.locale == "de"
    assert excinfo.value.path == ("de", "a")


def test_validate_document_rejects_missing_and_extra_keys():
    master = master_schema(["fr"], {"a": "1", "b": "2"})

    with pytest.raises(SchemaValidationError, match="'b' is a required property"):
        validate_document({"fr": {"a": "un"}}, master)

    with pytest.raises(SchemaValidationError):
        validate_document({"fr": {"a": "un", "b": "deux", "c": "trois"}}, master)

    with pytest.raises(SchemaValidationError):
        validate_document({"fr": {"a": "un", "b": "deux"}, "de": {"a": "x", "b": "y"}}, master)

"""
Structural schemas derived from an example document.

A locale document is a tree of non-empty objects whose leaves are strings.
derive_schema() turns such a document into a tagged tree of StringSchema /
ObjectSchema nodes, rejecting anything else while it walks. The tree is
rendered as JSON Schema so provider responses can be checked with the
jsonschema validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

from jsonschema import Draft202012Validator

from locale_sync.errors import SchemaError, SchemaValidationError


@dataclass(frozen=True)
class StringSchema:
    def to_json_schema(self) -> dict:
        return {"type": "string"}


@dataclass(frozen=True)
class ObjectSchema:
    fields: Mapping[str, "SchemaNode"] = field(default_factory=dict)

    def to_json_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {key: node.to_json_schema() for key, node in self.fields.items()},
            "required": list(self.fields),
            "additionalProperties": False,
        }


SchemaNode = Union[StringSchema, ObjectSchema]


def _dotted(path: tuple) -> str:
    return ".".join(str(p) for p in path) or "<root>"


def derive_schema(document: Any, path: tuple = ()) -> ObjectSchema:
    """
    Build the schema every translation of `document` must satisfy.

    Raises:
        SchemaError: on an empty object, or on a value that is neither a
            string nor an object (lists, numbers, booleans, null).
    """
    if not isinstance(document, dict):
        raise SchemaError(
            f"value at {_dotted(path)} is {type(document).__name__}; "
            f"all values should be string or object",
            path,
        )
    if not document:
        raise SchemaError(
            f"value at {_dotted(path)} is an object with no keys; objects must not be empty",
            path,
        )

    fields: dict[str, SchemaNode] = {}
    for key, value in document.items():
        if isinstance(value, str):
            fields[key] = StringSchema()
        else:
            fields[key] = derive_schema(value, path + (key,))
    return ObjectSchema(fields)


def master_schema(locales: Iterable[str], document: Mapping) -> dict[str, ObjectSchema]:
    """Map every locale to the schema derived from `document`."""
    if not document:
        raise SchemaError("Cannot create schema from empty object")
    locale_schema = derive_schema(document)
    return {locale: locale_schema for locale in locales}


def master_json_schema(master: Mapping[str, ObjectSchema]) -> dict:
    return ObjectSchema(dict(master)).to_json_schema()


def validate_document(instance: Any, master: Mapping[str, ObjectSchema]) -> None:
    """
    Check a parsed provider response against the master schema.

    The first error (in path order) is raised with the locale it belongs to.
    """
    validator = Draft202012Validator(master_json_schema(master))
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return

    error = errors[0]
    path = tuple(error.absolute_path)
    locale = str(path[0]) if path else None
    raise SchemaValidationError(error.message, locale=locale, path=path)

"""
Schema description for documents guarded by unique indexes.

A schema is a tree of `FieldSpec`s plus a list of compound `IndexSpec`s. A
field's (or index's) `unique` setting is either a boolean or a string; a string
means "unique, and use this text as the error message". `collect_messages()`
splits such a schema into:

  - a normalized schema whose `unique` settings are plain booleans (what the
    storage engine is asked to enforce), and
  - a MessageMap: dotted field path -> message template.

The models are frozen; the collector builds new objects and leaves the caller's
schema untouched.

Example:
    schema = Schema(
        fields={
            "email": FieldSpec(unique="Email {VALUE} is taken"),
            "general": FieldSpec(fields={"name": FieldSpec(unique=True)}),
            "age": FieldSpec(),
        },
    ).index({"general.name": 1, "age": 1}, unique="already registered")
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from .utils.paths import join_path

# dotted field path -> message template
MessageMap = dict[str, str]


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    unique: bool | str = False
    # inline nested object: {"general": FieldSpec(fields={"name": ...})}
    fields: dict[str, FieldSpec] = Field(default_factory=dict)
    # embedded sub-schema, declared separately and reused
    embedded: Schema | None = None

    def children(self) -> dict[str, FieldSpec]:
        if self.embedded is not None:
            return {**self.embedded.fields, **self.fields}
        return self.fields


class IndexSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    # ordered: field path -> direction (1, -1, "text", ...)
    keys: dict[str, int | str]
    unique: bool | str = False
    name: str | None = None

    @property
    def index_name(self) -> str:
        """Explicit name, else the storage engine's default `field_dir` naming."""
        if self.name:
            return self.name
        return "_".join(f"{path}_{direction}" for path, direction in self.keys.items())


class Schema(BaseModel):
    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldSpec] = Field(default_factory=dict)
    indexes: list[IndexSpec] = Field(default_factory=list)

    def index(self, keys: dict[str, int | str], *, unique: bool | str = False, name: str | None = None) -> Schema:
        """Return a copy of this schema with a (compound) index appended."""
        spec = IndexSpec(keys=keys, unique=unique, name=name)
        return self.model_copy(update={"indexes": [*self.indexes, spec]})

    def unique_indexes(self) -> list[IndexSpec]:
        """
        Every unique index this schema implies: one per unique field (nested ones
        included, by dotted path) followed by the unique compound indexes.
        """
        single = [
            IndexSpec(keys={path: 1}, unique=spec.unique)
            for path, spec in _walk(self.fields)
            if spec.unique
        ]
        return single + [idx for idx in self.indexes if idx.unique]


FieldSpec.model_rebuild()


def _walk(fields: dict[str, FieldSpec], prefix: str = "") -> Iterator[tuple[str, FieldSpec]]:
    for key, spec in fields.items():
        path = join_path(prefix, key)
        yield path, spec
        yield from _walk(spec.children(), path)


def _normalize_fields(fields: dict[str, FieldSpec], prefix: str, messages: MessageMap) -> dict[str, FieldSpec]:
    normalized = {}
    for key, spec in fields.items():
        path = join_path(prefix, key)
        update: dict = {}

        if isinstance(spec.unique, str):
            messages[path] = spec.unique
            update["unique"] = True

        if spec.fields:
            update["fields"] = _normalize_fields(spec.fields, path, messages)
        if spec.embedded is not None:
            update["embedded"] = spec.embedded.model_copy(
                update={"fields": _normalize_fields(spec.embedded.fields, path, messages)}
            )

        normalized[key] = spec.model_copy(update=update) if update else spec
    return normalized


def collect_messages(schema: Schema) -> tuple[Schema, MessageMap]:
    """
    Extract custom unique messages from `schema`.

    Returns (normalized_schema, messages). A compound index with a string
    `unique` records that one message under every field path of the index.
    """
    messages: MessageMap = {}
    fields = _normalize_fields(schema.fields, "", messages)

    indexes = []
    for index in schema.indexes:
        if isinstance(index.unique, str):
            for path in index.keys:
                messages[path] = index.unique
            index = index.model_copy(update={"unique": True})
        indexes.append(index)

    normalized = schema.model_copy(update={"fields": fields, "indexes": indexes})
    return normalized, messages


__all__ = ["MessageMap", "FieldSpec", "IndexSpec", "Schema", "collect_messages"]

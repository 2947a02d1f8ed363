"""
What a post hook knows about the operation that failed.

Two variants:
  - DocumentContext: a document was being saved; its own fields are the
    attempted values.
  - QueryContext: an update was being applied; the update payload is the
    source of attempted values, with `$set` assignments lifted to the top level
    so dotted paths resolve the same way they do against a document.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

SET_OPERATOR = "$set"


@dataclass(frozen=True)
class DocumentContext:
    collection: Any
    document: Any

    def attempted_values(self) -> Any:
        return self.document


@dataclass(frozen=True)
class QueryContext:
    collection: Any
    update: Mapping[str, Any]

    def attempted_values(self) -> dict[str, Any]:
        values = dict(self.update)
        assignments = values.pop(SET_OPERATOR, None)
        if isinstance(assignments, Mapping):
            values.update(assignments)
        return values


HookContext = DocumentContext | QueryContext

__all__ = ["DocumentContext", "QueryContext", "HookContext", "SET_OPERATOR"]

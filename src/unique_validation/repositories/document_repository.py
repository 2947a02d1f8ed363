"""
Thin async repository over a MongoDB collection.

It does not model documents; it forwards writes to the collection and runs
every failure through the post hooks registered for that operation, which is
where plugins such as unique validation plug in.

The collection is any object with pymongo's async collection interface
(`pymongo.asynchronous.collection.AsyncCollection` in production).
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pymongo import ReturnDocument

from ..contexts import DocumentContext, QueryContext
from ..schema import Schema
from .hooks import PostHook, PostHookRegistry, post_hook_handler

logger = logging.getLogger(__name__)


def to_document(document: Any) -> dict[str, Any]:
    """Mapping or pydantic model -> plain dict ready for the driver."""
    if isinstance(document, BaseModel):
        return document.model_dump(by_alias=True, exclude_none=True)
    if isinstance(document, Mapping):
        return dict(document)
    raise TypeError(f"Cannot store object of type {type(document).__name__!r} as a document")


def to_update(update: Mapping[str, Any]) -> dict[str, Any]:
    """
    Plain field assignments become a `$set`; payloads that already use update
    operators are passed as they are.
    """
    if any(key.startswith("$") for key in update):
        return dict(update)
    return {"$set": dict(update)}


class DocumentRepository:
    """
    Async repository bound to one collection and one schema.

    Args:
        collection: async collection handle
        schema: the collection's schema description (replaced by its normalized
                form when a plugin is installed)
    """

    def __init__(self, collection: Any, schema: Schema | None = None):
        self.collection = collection
        self.schema = schema if schema is not None else Schema()
        self.hooks = PostHookRegistry()

    def post(self, operation: str, hook: PostHook) -> None:
        self.hooks.register(operation, hook)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def save(self, document: Any):
        """
        Insert `document` (a mapping or pydantic model).

        Returns the driver's InsertOneResult. Failures go through the "save" hooks
        with a DocumentContext wrapping the document as given.
        """
        payload = to_document(document)
        async with post_hook_handler(self.hooks, "save", DocumentContext(self.collection, document)):
            result = await self.collection.insert_one(payload)
            logger.debug(
                "repository.saved",
                extra={"collection": self.collection.name, "inserted_id": str(result.inserted_id)},
            )
            return result

    async def create(self, **fields: Any):
        return await self.save(fields)

    async def update_one(self, filter: Mapping[str, Any], update: Mapping[str, Any], **kwargs: Any):
        payload = to_update(update)
        async with post_hook_handler(self.hooks, "update_one", QueryContext(self.collection, payload)):
            return await self.collection.update_one(filter, payload, **kwargs)

    async def update_many(self, filter: Mapping[str, Any], update: Mapping[str, Any], **kwargs: Any):
        payload = to_update(update)
        async with post_hook_handler(self.hooks, "update_many", QueryContext(self.collection, payload)):
            return await self.collection.update_many(filter, payload, **kwargs)

    async def find_one_and_update(
        self,
        filter: Mapping[str, Any],
        update: Mapping[str, Any],
        *,
        return_document: bool = ReturnDocument.AFTER,
        **kwargs: Any,
    ) -> dict | None:
        payload = to_update(update)
        async with post_hook_handler(self.hooks, "find_one_and_update", QueryContext(self.collection, payload)):
            return await self.collection.find_one_and_update(
                filter, payload, return_document=return_document, **kwargs
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_one(self, filter: Mapping[str, Any] | None = None) -> dict | None:
        return await self.collection.find_one(filter or {})


__all__ = ["DocumentRepository", "to_document", "to_update"]

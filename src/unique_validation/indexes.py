"""
Index metadata lookup with per-collection caching.

IndexMetadata maps an index name to the ordered list of field paths it covers:

    {"_id_": ["_id"], "email_1": ["email"], "name_1_age_1": ["name", "age"]}

It is fetched with `collection.index_information()` the first time a duplicate
key error for that collection needs it and then kept for the lifetime of the
cache (indexes are fixed at deployment; there is no expiry or invalidation).
Concurrent misses for the same collection share a single in-flight query.
"""

import asyncio
import logging
from collections.abc import MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

IndexMetadata = dict[str, list[str]]


def collection_cache_key(collection: Any) -> str:
    return f"{collection.database.name}_{collection.name}"


def to_index_metadata(index_information: dict[str, dict]) -> IndexMetadata:
    """Reduce pymongo's index_information() output to name -> [field, ...]."""
    return {
        name: [field for field, _direction in spec.get("key", [])]
        for name, spec in index_information.items()
    }


class IndexMetadataCache:
    """
    Async cache of IndexMetadata keyed by "<database>_<collection>".

    `store` may be any MutableMapping (defaults to a dict) so callers can share
    or inspect the cached entries.
    """

    def __init__(self, store: MutableMapping[str, IndexMetadata] | None = None):
        self._store: MutableMapping[str, IndexMetadata] = {} if store is None else store
        self._inflight: dict[str, asyncio.Future] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._store

    async def get(self, collection: Any) -> IndexMetadata:
        key = collection_cache_key(collection)

        if key in self._store:
            return self._store[key]

        pending = self._inflight.get(key)
        if pending is None:
            logger.debug("index_cache.miss", extra={"collection_key": key})
            pending = asyncio.ensure_future(self._load(key, collection))
            self._inflight[key] = pending
            pending.add_done_callback(lambda fut: self._forget(key, fut))
        else:
            logger.debug("index_cache.join_inflight", extra={"collection_key": key})

        # shield: a cancelled waiter must not cancel the lookup other waiters share
        return await asyncio.shield(pending)

    def _forget(self, key: str, fut: asyncio.Future) -> None:
        self._inflight.pop(key, None)
        # a failure is re-raised to the waiters; this marks it retrieved when none are left
        if not fut.cancelled():
            fut.exception()

    async def _load(self, key: str, collection: Any) -> IndexMetadata:
        metadata = to_index_metadata(await collection.index_information())
        self._store[key] = metadata
        logger.debug(
            "index_cache.stored",
            extra={"collection_key": key, "indexes": sorted(metadata)},
        )
        return metadata


__all__ = ["IndexMetadata", "IndexMetadataCache", "collection_cache_key", "to_index_metadata"]

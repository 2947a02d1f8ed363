import logging
from typing import Any, Mapping

from ..contexts import HookContext
from ..indexes import IndexMetadataCache
from ..utils.messages import DEFAULT_MESSAGE, format_message
from ..utils.paths import get_value_by_path
from .base import UniqueFieldError, UniqueValidationError
from .duplicate_key_classifier import extract_duplicate_key

logger = logging.getLogger(__name__)


# -----------------------
# Field resolution
# -----------------------

async def resolve_duplicated_fields(
    exc: BaseException, collection: Any, index_cache: IndexMetadataCache
) -> tuple[list[str], str | None]:
    """
    Return (ordered field paths of the violated index, index name).

    Uses the driver-reported key pattern when present, otherwise looks the
    parsed index name up in the collection's index metadata. Returns no fields
    when neither is available or the index is unknown to the metadata.
    """
    details = extract_duplicate_key(exc)
    if details is None:
        return [], None

    if details.fields:
        return details.fields, details.index_name

    if details.index_name is None:
        return [], None

    indexes = await index_cache.get(collection)
    fields = indexes.get(details.index_name)
    if fields is None:
        # Possibly a stale cache after an out-of-band index change.
        logger.warning(
            "beautifier.index_not_in_metadata",
            extra={"index_name": details.index_name, "known_indexes": sorted(indexes)},
        )
        return [], details.index_name

    return list(fields), details.index_name


# -----------------------
# Beautifier
# -----------------------

def build_unique_errors(
    fields: list[str],
    values: Any,
    messages: Mapping[str, str],
    default_message: str = DEFAULT_MESSAGE,
) -> dict[str, UniqueFieldError]:
    errors = {}
    for path in fields:
        value = get_value_by_path(values, path)
        template = messages.get(path)
        if not isinstance(template, str):
            template = default_message
        errors[path] = UniqueFieldError(
            path=path,
            value=value,
            message=format_message(template, path=path, value=value),
        )
    return errors


async def beautify(
    exc: BaseException,
    context: HookContext,
    messages: Mapping[str, str],
    default_message: str = DEFAULT_MESSAGE,
    *,
    index_cache: IndexMetadataCache,
) -> UniqueValidationError:
    """
    Turn a duplicate key failure into a UniqueValidationError with one
    UniqueFieldError per field of the violated index, in index order.

    `context` picks where attempted values come from (the saved document or
    the update payload). Errors from the metadata lookup propagate.
    """
    fields, index_name = await resolve_duplicated_fields(exc, context.collection, index_cache)
    errors = build_unique_errors(fields, context.attempted_values(), messages, default_message)

    # INFO: duplicates are expected client-level outcomes; values stay out of the log
    logger.info(
        "beautifier.duplicate_detected",
        extra={
            "collection": getattr(context.collection, "name", None),
            "index_name": index_name,
            "fields": list(errors),
        },
    )
    return UniqueValidationError(errors, constraint=index_name)


__all__ = ["resolve_duplicated_fields", "build_unique_errors", "beautify"]

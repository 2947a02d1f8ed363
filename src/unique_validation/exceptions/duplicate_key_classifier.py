import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from pymongo.errors import BulkWriteError, DuplicateKeyError, OperationFailure, WriteError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Driver error categories
# =================================================================================================================


class DriverErrorCategory(str, Enum):
    DUPLICATE_KEY = "DuplicateKeyError"
    BULK_WRITE = "BulkWriteError"
    WRITE = "WriteError"
    OPERATION_FAILURE = "OperationFailure"


# pymongo 4.x exception classes, most specific first (DuplicateKeyError < WriteError < OperationFailure).
DRIVER_ERROR_CATEGORIES: tuple[tuple[type[OperationFailure], DriverErrorCategory], ...] = (
    (DuplicateKeyError, DriverErrorCategory.DUPLICATE_KEY),
    (BulkWriteError, DriverErrorCategory.BULK_WRITE),
    (WriteError, DriverErrorCategory.WRITE),
    (OperationFailure, DriverErrorCategory.OPERATION_FAILURE),
)


# https://www.mongodb.com/docs/manual/reference/error-codes/
class MongoErrorCodes(int, Enum):
    DUPLICATE_KEY = 11000
    # servers < 2.6 reported duplicates caused by updates with their own code
    DUPLICATE_KEY_ON_UPDATE = 11001


DUPLICATE_KEY_CODES = frozenset(code.value for code in MongoErrorCodes)

# "E11000 duplicate key error collection: shop.users index: email_1 dup key: { email: "a@b.c" }"
# "E11000 duplicate key error index: shop.users.$email_1 dup key: { : "a@b.c" }"   (legacy)
INDEX_NAME_PATTERN = re.compile(r"index: (.+?) dup key:")


@dataclass(frozen=True)
class DuplicateKeyDetails:
    """
    What could be recovered about a duplicate key failure.

    - index_name: parsed from the message, None when the message has no index clause
    - fields: ordered field paths when the driver reported them (keyPattern), else None
    - message: the raw server message (for logs only)
    """
    index_name: str | None
    fields: list[str] | None
    message: str


# =================================================================================================================
# Classifiers
# =================================================================================================================

def classify_driver_error(exc: BaseException | None) -> DriverErrorCategory | None:
    """Return the driver error category of `exc`, or None for non-driver errors."""
    if exc is None:
        return None
    for exception_class, category in DRIVER_ERROR_CATEGORIES:
        if isinstance(exc, exception_class):
            return category
    return None


def _duplicate_write_error(exc: OperationFailure, category: DriverErrorCategory) -> Mapping[str, Any] | None:
    """
    Return the server document describing the duplicate, or None if `exc` is
    not a duplicate key failure.
    """
    if category is DriverErrorCategory.BULK_WRITE:
        for write_error in (exc.details or {}).get("writeErrors", []):
            if write_error.get("code") in DUPLICATE_KEY_CODES:
                return write_error
        return None

    if exc.code in DUPLICATE_KEY_CODES:
        return exc.details or {}
    return None


def is_unique_error(exc: BaseException | None) -> bool:
    """True iff `exc` is a recognized driver error carrying a duplicate key code."""
    category = classify_driver_error(exc)
    if category is None:
        return False
    return _duplicate_write_error(exc, category) is not None


def parse_index_name(message: str | None) -> str | None:
    """
    Extract the index name from a duplicate key message.

    The qualified name is split on "$" (legacy "db.coll.$name" form) and the
    last segment kept.
    """
    if not message:
        return None
    match = INDEX_NAME_PATTERN.search(message)
    if not match:
        return None
    return match.group(1).split("$")[-1]


def extract_duplicate_key(exc: BaseException) -> DuplicateKeyDetails | None:
    """
    Pull index name and fields out of a duplicate key failure.

    Structured data first: `keyPattern` (MongoDB >= 4.2) lists the index fields in
    order. The index name is always parsed from the message text, which is the
    only place the server puts it.

    Returns None when `exc` is not a duplicate key failure.
    """
    category = classify_driver_error(exc)
    if category is None:
        return None

    write_error = _duplicate_write_error(exc, category)
    if write_error is None:
        return None

    message = write_error.get("errmsg") or str(exc)
    key_pattern = write_error.get("keyPattern")
    fields = list(key_pattern) if isinstance(key_pattern, Mapping) and key_pattern else None
    index_name = parse_index_name(message)

    logger.debug(
        "Duplicate key diagnostic",
        extra={"category": category.value, "index_name": index_name, "key_pattern": fields},
    )

    if index_name is None and fields is None:
        # Keep the raw message at DEBUG only; it contains the duplicated values.
        logger.warning("Duplicate key error without index name or key pattern", extra={"category": category.value})
        logger.debug("Duplicate key raw message", extra={"raw": message})

    return DuplicateKeyDetails(index_name=index_name, fields=fields, message=message)


__all__ = [
    "DriverErrorCategory",
    "DRIVER_ERROR_CATEGORIES",
    "MongoErrorCodes",
    "DUPLICATE_KEY_CODES",
    "DuplicateKeyDetails",
    "classify_driver_error",
    "is_unique_error",
    "parse_index_name",
    "extract_duplicate_key",
]

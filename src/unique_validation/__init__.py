r"""
Field-addressable validation errors for MongoDB unique indexes.

When a write violates a unique index, the server only answers with an
`E11000 duplicate key` error whose text names the index. This package maps
that failure back to the fields of the index, the values that were being
written and a per-field message:

    UniqueValidationError.errors == {
        "email": UniqueFieldError(path="email", value="a@b.c",
                                  message="Path `email` (a@b.c) is not unique."),
    }

Public API:
    Schema, FieldSpec, IndexSpec, collect_messages     schema description
    DocumentRepository                                 repository with post hooks
    UniqueValidationPlugin, install_unique_validation  the post hook
    IndexMetadataCache                                 index metadata cache
    UniqueValidationError, UniqueFieldError, ...       errors
"""

from .schema import Schema, FieldSpec, IndexSpec, MessageMap, collect_messages
from .contexts import DocumentContext, QueryContext
from .indexes import IndexMetadataCache
from .config.options import UniqueValidationOptions
from .exceptions.base import (
    RepositoryError,
    DuplicateError,
    UniqueFieldError,
    UniqueValidationError,
    BeautificationError,
)
from .exceptions.duplicate_key_classifier import is_unique_error
from .plugin import UniqueValidationPlugin, install_unique_validation
from .repositories import DocumentRepository

__all__ = [
    "Schema",
    "FieldSpec",
    "IndexSpec",
    "MessageMap",
    "collect_messages",
    "DocumentContext",
    "QueryContext",
    "IndexMetadataCache",
    "UniqueValidationOptions",
    "RepositoryError",
    "DuplicateError",
    "UniqueFieldError",
    "UniqueValidationError",
    "BeautificationError",
    "is_unique_error",
    "UniqueValidationPlugin",
    "install_unique_validation",
    "DocumentRepository",
]

# exceptions/
# ├── base.py                       # App-level errors (RepositoryError, UniqueValidationError, ...)
# ├── duplicate_key_classifier.py   # Driver-level classification of duplicate key failures
# └── beautifier.py                 # Duplicate key failure -> UniqueValidationError

from .base import (
    RepositoryError,
    DuplicateError,
    UniqueFieldError,
    UniqueValidationError,
    BeautificationError,
)
from .duplicate_key_classifier import is_unique_error, parse_index_name, extract_duplicate_key
from .beautifier import beautify

__all__ = [
    "RepositoryError",
    "DuplicateError",
    "UniqueFieldError",
    "UniqueValidationError",
    "BeautificationError",
    "is_unique_error",
    "parse_index_name",
    "extract_duplicate_key",
    "beautify",
]

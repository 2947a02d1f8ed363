"""
App-level exceptions raised by repositories and the unique validation plugin.

These are the errors application code is expected to catch: they carry a
human-friendly message, the affected fields and a canonical error code that maps
to an HTTP status, and they never embed raw driver messages in their payloads.
"""

from typing import Any, Iterable, Mapping


class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field paths related to the error (e.g., ['email'])
    - constraint: optional index name (for logs only)
    - error_code: canonical short code (e.g., 'duplicate') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "duplicate": 409,
        "internal": 500,
        # fallback: default to 400 for general repository errors
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "duplicate",           # optional canonical code
                "fields": ["email"],           # optional list for client usage
            }
        The `constraint` value is kept out of the payload.
        """
        payload: dict[str, Any] = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """
        HTTP status for this error, looked up from its error_code (400 when unknown).
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        # canonical error_code 'duplicate' so http_status() -> 409
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class UniqueFieldError(Exception):
    """
    One violated field of a unique index.

    `value` is the attempted value as it was found in the document or update
    payload (same object, not a copy); `message` is the rendered template.
    """

    kind = "unique"

    def __init__(self, *, path: str, value: Any, message: str):
        super().__init__(message)
        self.path = path
        self.value = value
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "path": self.path, "value": self.value, "message": self.message}

    def __repr__(self) -> str:
        return f"UniqueFieldError(path={self.path!r}, value={self.value!r}, message={self.message!r})"


class UniqueValidationError(DuplicateError):
    """
    Field-addressable replacement for a driver duplicate key error.

    `errors` maps each field path of the violated index to its UniqueFieldError,
    in the index's declared order.
    """

    kind = "validation"

    def __init__(self, errors: Mapping[str, UniqueFieldError] | None = None, *, constraint: str | None = None):
        self.errors: dict[str, UniqueFieldError] = dict(errors or {})
        if self.errors:
            summary = ", ".join(f"{path}: {err.message}" for path, err in self.errors.items())
            message = f"Validation failed: {summary}"
        else:
            message = "Validation failed"
        super().__init__(message, fields=list(self.errors), constraint=constraint)

    def to_payload(self) -> dict:
        payload = super().to_payload()
        # values stay out of the payload; the rendered message already shows them
        payload["errors"] = {
            path: {"kind": err.kind, "path": err.path, "message": err.message}
            for path, err in self.errors.items()
        }
        return payload


class BeautificationError(RepositoryError):
    """
    Raised when translating a duplicate key error itself fails (e.g. the index
    metadata query errored). `original` holds the driver error being translated.
    """

    def __init__(self, message: str, *, original: BaseException | None = None):
        super().__init__(message, error_code="internal")
        self.original = original


__all__ = [
    "RepositoryError",
    "DuplicateError",
    "UniqueFieldError",
    "UniqueValidationError",
    "BeautificationError",
]

"""
FastAPI exception handlers for repository errors (install with the `api` extra).

    app = FastAPI()
    register_exception_handlers(app)

A UniqueValidationError becomes a 409 with a body such as:

    {
      "detail": "Validation failed: email: Path `email` (a@b.c) is not unique.",
      "code": "duplicate",
      "fields": ["email"],
      "errors": {"email": {"kind": "unique", "path": "email", "message": "..."}}
    }
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from unique_validation.exceptions.base import RepositoryError, UniqueValidationError

logger = logging.getLogger(__name__)


async def unique_validation_error_handler(request: Request, exc: UniqueValidationError) -> JSONResponse:
    logger.info("UniqueValidationError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Fallback for other repository errors (status from exc.http_status()).
    """
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    # most specific first
    app.add_exception_handler(UniqueValidationError, unique_validation_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)

"""
Unique validation plugin: the post-operation hook that replaces duplicate key
failures with field-addressable UniqueValidationErrors.

Usage:
    repo = DocumentRepository(db["users"], schema)
    install_unique_validation(repo, {"defaultMessage": "{PATH} is taken"})

    # or, sharing one index cache between several repositories:
    cache = IndexMetadataCache()
    UniqueValidationPlugin(schema, index_cache=cache).install(repo)
"""

import logging
from typing import Any, Mapping

from .config.options import UniqueValidationOptions
from .contexts import HookContext
from .exceptions.base import BeautificationError
from .exceptions.beautifier import beautify
from .exceptions.duplicate_key_classifier import is_unique_error
from .indexes import IndexMetadataCache
from .schema import MessageMap, Schema, collect_messages

logger = logging.getLogger(__name__)

# Operations whose failures may be duplicate key errors.
HOOKED_OPERATIONS = ("save", "update_one", "update_many", "find_one_and_update")


def _as_options(options: UniqueValidationOptions | Mapping[str, Any] | None) -> UniqueValidationOptions:
    if options is None:
        return UniqueValidationOptions()
    if isinstance(options, UniqueValidationOptions):
        return options
    return UniqueValidationOptions.model_validate(dict(options))


class UniqueValidationPlugin:
    """
    Holds what a schema needs to beautify its duplicate key errors: the
    normalized schema, the custom messages, the options and the index cache.

    The schema's messages are collected once, here.
    """

    def __init__(
        self,
        schema: Schema,
        options: UniqueValidationOptions | Mapping[str, Any] | None = None,
        *,
        index_cache: IndexMetadataCache | None = None,
    ):
        self.options = _as_options(options)
        self.schema, self.messages = collect_messages(schema)
        self.index_cache = index_cache if index_cache is not None else IndexMetadataCache()
        logger.debug(
            "plugin.messages_collected",
            extra={"custom_message_paths": sorted(self.messages)},
        )

    @property
    def custom_messages(self) -> MessageMap:
        return dict(self.messages)

    async def post_hook(self, error: BaseException | None, context: HookContext) -> BaseException | None:
        """
        Post-operation hook.

        Returns None when there is no error, `error` itself when it is not a
        duplicate key failure, and a UniqueValidationError otherwise. A failure
        while building that error is raised as BeautificationError.
        """
        if error is None:
            return None

        if not is_unique_error(error):
            return error

        try:
            return await beautify(
                error,
                context,
                self.messages,
                self.options.default_message,
                index_cache=self.index_cache,
            )
        except Exception as exc:
            logger.exception(
                "plugin.beautify_failed",
                extra={"collection": getattr(context.collection, "name", None)},
            )
            raise BeautificationError(
                f"Failed to beautify duplicate key error: {exc}", original=error
            ) from exc

    def install(self, repository) -> "UniqueValidationPlugin":
        """Register post_hook on every hooked operation of `repository`."""
        for operation in HOOKED_OPERATIONS:
            repository.post(operation, self.post_hook)
        repository.schema = self.schema
        return self


def install_unique_validation(
    repository,
    options: UniqueValidationOptions | Mapping[str, Any] | None = None,
    *,
    index_cache: IndexMetadataCache | None = None,
) -> UniqueValidationPlugin:
    """Build a plugin for `repository.schema` and install it on the repository."""
    plugin = UniqueValidationPlugin(repository.schema, options, index_cache=index_cache)
    return plugin.install(repository)


__all__ = ["HOOKED_OPERATIONS", "UniqueValidationPlugin", "install_unique_validation"]

import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Awaitable, Callable

from ..contexts import HookContext

logger = logging.getLogger(__name__)

# (error, context) -> error to raise, or None to swallow
PostHook = Callable[[BaseException | None, HookContext], Awaitable[BaseException | None]]


class PostHookRegistry:
    """Post hooks per operation name, run in registration order."""

    def __init__(self):
        self._hooks: dict[str, list[PostHook]] = defaultdict(list)

    def register(self, operation: str, hook: PostHook) -> None:
        self._hooks[operation].append(hook)

    def hooks_for(self, operation: str) -> list[PostHook]:
        return list(self._hooks.get(operation, ()))

    async def run(self, operation: str, error: BaseException, context: HookContext) -> BaseException | None:
        """Feed `error` through every hook of `operation`; each sees the previous result."""
        current: BaseException | None = error
        for hook in self.hooks_for(operation):
            current = await hook(current, context)
            if current is None:
                break
        return current


@asynccontextmanager
async def post_hook_handler(registry: PostHookRegistry, operation: str, context: HookContext):
    """
    Usage:
        async with post_hook_handler(self.hooks, "save", DocumentContext(coll, doc)):
            await coll.insert_one(doc)

    An exception raised in the block goes through the operation's post hooks:
      - None: the error is swallowed
      - the same object: re-raised unchanged
      - another exception: raised in its place, chained to the original
    """
    try:
        yield
    except Exception as exc:
        result = await registry.run(operation, exc, context)
        if result is None:
            logger.info("post_hooks.error_swallowed", extra={"operation": operation})
            return
        if result is exc:
            raise
        raise result from exc


__all__ = ["PostHook", "PostHookRegistry", "post_hook_handler"]

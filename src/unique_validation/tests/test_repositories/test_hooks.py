import pytest

from unique_validation.contexts import DocumentContext
from unique_validation.repositories.hooks import PostHookRegistry, post_hook_handler

CTX = DocumentContext(collection=None, document={})


class Replacement(Exception):
    pass


@pytest.mark.asyncio
class TestPostHookRegistry:

    async def test_hooks_run_in_registration_order(self):
        registry = PostHookRegistry()
        seen = []

        async def first(error, context):
            seen.append("first")
            return error

        async def second(error, context):
            seen.append("second")
            return error

        registry.register("save", first)
        registry.register("save", second)

        await registry.run("save", ValueError("x"), CTX)

        assert seen == ["first", "second"]

    async def test_none_stops_the_chain(self):
        registry = PostHookRegistry()
        called = []

        async def swallow(error, context):
            return None

        async def never(error, context):
            called.append(True)
            return error

        registry.register("save", swallow)
        registry.register("save", never)

        assert await registry.run("save", ValueError("x"), CTX) is None
        assert called == []

    async def test_operation_without_hooks_returns_error(self):
        error = ValueError("x")
        assert await PostHookRegistry().run("update_one", error, CTX) is error


@pytest.mark.asyncio
class TestPostHookHandler:

    async def test_same_error_is_reraised(self):
        registry = PostHookRegistry()

        async def passthrough(error, context):
            return error

        registry.register("save", passthrough)
        error = ValueError("boom")

        with pytest.raises(ValueError) as excinfo:
            async with post_hook_handler(registry, "save", CTX):
                raise error

        assert excinfo.value is error

    async def test_replacement_is_raised_from_original(self):
        registry = PostHookRegistry()

        async def replace(error, context):
            return Replacement("nicer")

        registry.register("save", replace)
        error = ValueError("boom")

        with pytest.raises(Replacement) as excinfo:
            async with post_hook_handler(registry, "save", CTX):
                raise error

        assert excinfo.value.__cause__ is error

    async def test_none_swallows_the_error(self):
        registry = PostHookRegistry()

        async def swallow(error, context):
            return None

        registry.register("save", swallow)

        async with post_hook_handler(registry, "save", CTX):
            raise ValueError("ignored")

    async def test_success_does_not_run_hooks(self):
        registry = PostHookRegistry()
        called = []

        async def hook(error, context):
            called.append(error)
            return error

        registry.register("save", hook)

        async with post_hook_handler(registry, "save", CTX):
            pass

        assert called == []

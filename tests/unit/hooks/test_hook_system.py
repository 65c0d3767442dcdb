"""Unit tests for the hook system infrastructure.

Tests cover:
- Hook registration and unregistration
- Priority ordering
- Tag-based filtering
- Error handling
- Decorator registration
"""

import pytest
import structlog

from brewbase.core.hooks import (
    EVENT_CATEGORIES,
    HookCategory,
    HookDecorator,
    HookEvent,
    HookRegistry,
    is_after_event,
)
from brewbase.domain.entities.entity_kind import EntityKind, VARIANT_KINDS
from brewbase.domain.entities.hook_context import HookContext, HookResult


class TestHookRegistry:
    """Tests for the HookRegistry class."""

    def test_register_returns_unique_id(self) -> None:
        """Test that register() returns a unique hook ID."""
        registry = HookRegistry()

        def my_hook(event, data, context):
            return data

        hook_ids = [
            registry.register(HookEvent.ON_DOCUMENT_AFTER_CREATE, my_hook) for _ in range(10)
        ]

        assert all(hook_id.startswith("hook_") for hook_id in hook_ids)
        assert len(set(hook_ids)) == 10

    def test_register_with_filters_and_priority(self) -> None:
        """Test that filters and priority are stored on the registration."""
        registry = HookRegistry()

        def my_hook(event, data, context):
            return data

        hook_id = registry.register(
            event=HookEvent.ON_DOCUMENT_DERIVE_CREATE,
            callback=my_hook,
            filters={"entity": "blogs"},
            priority=10,
        )

        hook = registry.get_hook_by_id(hook_id)
        assert hook is not None
        assert hook.filters == {"entity": "blogs"}
        assert hook.priority == 10

    def test_unregister_removes_hook(self) -> None:
        """Test that unregister() removes a hook."""
        registry = HookRegistry()

        def my_hook(event, data, context):
            return data

        hook_id = registry.register(HookEvent.ON_DOCUMENT_AFTER_CREATE, my_hook)

        assert registry.unregister(hook_id) is True
        assert registry.get_hook_by_id(hook_id) is None
        assert registry.get_hooks_for_event(HookEvent.ON_DOCUMENT_AFTER_CREATE) == []

    def test_unregister_returns_false_for_unknown_id(self) -> None:
        registry = HookRegistry()
        assert registry.unregister("hook_nonexistent") is False

    def test_cannot_unregister_builtin_hook(self) -> None:
        """Test that built-in hooks cannot be unregistered."""
        registry = HookRegistry()

        def builtin_hook(event, data, context):
            return data

        hook_id = registry.register(
            HookEvent.ON_DOCUMENT_DERIVE_CREATE, builtin_hook, is_builtin=True
        )

        assert registry.unregister(hook_id) is False
        assert registry.get_hook_by_id(hook_id) is not None

    def test_clear_keeps_builtin_hooks_by_default(self) -> None:
        registry = HookRegistry()

        def hook(event, data, context):
            return data

        builtin_id = registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, hook, is_builtin=True)
        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, hook)
        registry.register(HookEvent.ON_DOCUMENT_AFTER_DELETE, hook)

        assert registry.clear() == 2
        assert registry.get_hook_by_id(builtin_id) is not None

        assert registry.clear(include_builtin=True) == 1
        assert registry.get_hook_by_id(builtin_id) is None


class TestHookExecution:
    """Tests for trigger() ordering, data flow and errors."""

    def test_priority_order_then_fifo(self) -> None:
        """Higher priority runs first; equal priority runs in registration order."""
        registry = HookRegistry()
        calls: list[str] = []

        def make(name):
            def hook(event, data, context):
                calls.append(name)
                return data

            return hook

        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, make("low"), priority=-5)
        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, make("first"), priority=0)
        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, make("high"), priority=10)
        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, make("second"), priority=0)

        registry.trigger(HookEvent.ON_DOCUMENT_DERIVE_CREATE, data={})

        assert calls == ["high", "first", "second", "low"]

    def test_data_flows_through_chain(self) -> None:
        """Each hook receives the previous hook's returned data."""
        registry = HookRegistry()

        def add_author(event, data, context):
            return {**data, "author": "Staff"}

        def keep_data(event, data, context):
            return None

        def shout_author(event, data, context):
            data["author"] = data["author"].upper()
            return data

        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, add_author, priority=2)
        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, keep_data, priority=1)
        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, shout_author, priority=0)

        result = registry.trigger(HookEvent.ON_DOCUMENT_DERIVE_CREATE, data={"title": "Pour"})

        assert result.success is True
        assert result.data == {"title": "Pour", "author": "STAFF"}

    def test_trigger_without_hooks_returns_input(self) -> None:
        registry = HookRegistry()
        data = {"name": "Kenya AA"}

        result = registry.trigger(HookEvent.ON_DOCUMENT_AFTER_CREATE, data=data)

        assert isinstance(result, HookResult)
        assert result.success is True
        assert result.data is data

    def test_error_is_logged_and_chain_continues(self) -> None:
        """A failing hook without stop_on_error does not stop later hooks."""
        registry = HookRegistry()
        calls: list[str] = []

        def failing(event, data, context):
            raise RuntimeError("boom")

        def later(event, data, context):
            calls.append("later")
            return data

        registry.register(HookEvent.ON_DOCUMENT_AFTER_UPDATE, failing, priority=1)
        registry.register(HookEvent.ON_DOCUMENT_AFTER_UPDATE, later)

        result = registry.trigger(HookEvent.ON_DOCUMENT_AFTER_UPDATE, data={})

        assert result.success is False
        assert len(result.errors) == 1
        assert "boom" in result.errors[0]
        assert calls == ["later"]

    def test_stop_on_error_propagates(self) -> None:
        """A stop_on_error hook re-raises its exception out of trigger()."""
        registry = HookRegistry()

        def failing(event, data, context):
            raise ValueError("bad derivation")

        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, failing, stop_on_error=True)

        with pytest.raises(ValueError, match="bad derivation"):
            registry.trigger(HookEvent.ON_DOCUMENT_DERIVE_CREATE, data={})

    @pytest.mark.parametrize(
        "event",
        [
            HookEvent.ON_DOCUMENT_AFTER_CREATE,
            HookEvent.ON_DOCUMENT_AFTER_UPDATE,
            HookEvent.ON_DOCUMENT_AFTER_DELETE,
        ],
    )
    def test_after_event_errors_never_propagate(self, event) -> None:
        """After-* hooks run once the write is done, so stop_on_error is ignored."""
        registry = HookRegistry()
        calls: list[str] = []

        def failing(event, data, context):
            raise RuntimeError("listener down")

        def later(event, data, context):
            calls.append("later")

        registry.register(event, failing, priority=1, stop_on_error=True)
        registry.register(event, later)

        result = registry.trigger(event, data={})

        assert result.success is False
        assert "listener down" in result.errors[0]
        assert calls == ["later"]

    def test_context_request_id_is_bound_as_correlation_id(self) -> None:
        """Logs emitted while hooks run carry the operation's request ID."""
        registry = HookRegistry()
        seen: list[str] = []

        def capture(event, data, context):
            seen.append(structlog.contextvars.get_contextvars().get("correlation_id"))

        registry.register(HookEvent.ON_DOCUMENT_DERIVE_CREATE, capture)
        context = HookContext(entity=EntityKind.BLOGS)

        registry.trigger(HookEvent.ON_DOCUMENT_DERIVE_CREATE, data={}, context=context)

        assert seen == [context.request_id]
        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_context_is_passed_to_hooks(self) -> None:
        registry = HookRegistry()
        seen: list[HookContext] = []

        def capture(event, data, context):
            seen.append(context)

        registry.register(HookEvent.ON_DOCUMENT_AFTER_DELETE, capture)
        context = HookContext(entity=EntityKind.BEANS)

        registry.trigger(HookEvent.ON_DOCUMENT_AFTER_DELETE, data={}, context=context)

        assert seen == [context]
        assert context.request_id.startswith("hk_")
        assert context.is_update is False


class TestHookFiltering:
    """Tests for tag-based filtering."""

    def test_filtered_hook_only_fires_for_matching_entity(self) -> None:
        registry = HookRegistry()
        calls: list[str] = []

        def blog_hook(event, data, context):
            calls.append("blogs")

        registry.register(
            HookEvent.ON_DOCUMENT_AFTER_CREATE, blog_hook, filters={"entity": "blogs"}
        )

        registry.trigger(HookEvent.ON_DOCUMENT_AFTER_CREATE, data={}, filters={"entity": "beans"})
        assert calls == []

        registry.trigger(
            HookEvent.ON_DOCUMENT_AFTER_CREATE, data={}, filters={"entity": EntityKind.BLOGS}
        )
        assert calls == ["blogs"]

    def test_set_valued_filter_matches_members(self) -> None:
        registry = HookRegistry()
        calls: list[str] = []

        def variant_hook(event, data, context):
            calls.append(context.entity)

        registry.register(
            HookEvent.ON_DOCUMENT_DERIVE_UPDATE, variant_hook, filters={"entity": VARIANT_KINDS}
        )

        for entity in ("beans", EntityKind.SYRUPS, EntityKind.MACHINES, "orders"):
            registry.trigger(
                HookEvent.ON_DOCUMENT_DERIVE_UPDATE,
                data={},
                context=HookContext(entity=EntityKind.parse(entity)),
                filters={"entity": entity},
            )

        assert calls == [EntityKind.BEANS, EntityKind.SYRUPS]

    def test_unfiltered_hook_fires_for_every_entity(self) -> None:
        registry = HookRegistry()
        calls: list[str] = []

        def audit(event, data, context):
            calls.append("audit")

        registry.register(HookEvent.ON_DOCUMENT_AFTER_DELETE, audit)

        registry.trigger(HookEvent.ON_DOCUMENT_AFTER_DELETE, data={}, filters={"entity": "beans"})
        registry.trigger(HookEvent.ON_DOCUMENT_AFTER_DELETE, data={})

        assert calls == ["audit", "audit"]

    def test_filtered_hook_skipped_without_trigger_filters(self) -> None:
        registry = HookRegistry()
        calls: list[str] = []

        def blog_hook(event, data, context):
            calls.append("blogs")

        registry.register(
            HookEvent.ON_DOCUMENT_AFTER_CREATE, blog_hook, filters={"entity": "blogs"}
        )
        registry.trigger(HookEvent.ON_DOCUMENT_AFTER_CREATE, data={})

        assert calls == []


class TestHookDecorator:
    """Tests for the decorator registration API."""

    def test_decorator_registers_with_entity_filter(self) -> None:
        registry = HookRegistry()
        hooks = HookDecorator(registry)

        @hooks.on_document_derive_create("blogs", priority=5)
        def stamp_author(event, data, context):
            data["author"] = "Staff"
            return data

        registered = registry.get_hooks_for_event(HookEvent.ON_DOCUMENT_DERIVE_CREATE)
        assert len(registered) == 1
        assert registered[0].filters == {"entity": "blogs"}
        assert registered[0].priority == 5
        assert registered[0].callback is stamp_author
        assert hooks.registry is registry

        result = registry.trigger(
            HookEvent.ON_DOCUMENT_DERIVE_CREATE, data={}, filters={"entity": EntityKind.BLOGS}
        )
        assert result.data == {"author": "Staff"}

    @pytest.mark.parametrize(
        "method,event",
        [
            ("on_document_derive_create", HookEvent.ON_DOCUMENT_DERIVE_CREATE),
            ("on_document_derive_update", HookEvent.ON_DOCUMENT_DERIVE_UPDATE),
            ("on_document_after_create", HookEvent.ON_DOCUMENT_AFTER_CREATE),
            ("on_document_after_update", HookEvent.ON_DOCUMENT_AFTER_UPDATE),
            ("on_document_after_delete", HookEvent.ON_DOCUMENT_AFTER_DELETE),
        ],
    )
    def test_each_decorator_targets_its_event(self, method, event) -> None:
        registry = HookRegistry()
        hooks = HookDecorator(registry)

        def callback(event, data, context):
            return data

        getattr(hooks, method)()(callback)

        registered = registry.get_hooks_for_event(event)
        assert len(registered) == 1
        assert registered[0].filters == {}


class TestHookEvents:
    def test_every_event_has_a_category(self) -> None:
        assert set(EVENT_CATEGORIES) == {
            HookEvent.ON_DOCUMENT_DERIVE_CREATE,
            HookEvent.ON_DOCUMENT_DERIVE_UPDATE,
            HookEvent.ON_DOCUMENT_AFTER_CREATE,
            HookEvent.ON_DOCUMENT_AFTER_UPDATE,
            HookEvent.ON_DOCUMENT_AFTER_DELETE,
        }
        assert EVENT_CATEGORIES[HookEvent.ON_DOCUMENT_DERIVE_UPDATE] == HookCategory.DERIVATION

    def test_is_after_event(self) -> None:
        assert is_after_event(HookEvent.ON_DOCUMENT_AFTER_DELETE) is True
        assert is_after_event(HookEvent.ON_DOCUMENT_DERIVE_CREATE) is False
        assert is_after_event("on_document_after_nothing") is False

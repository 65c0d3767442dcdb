"""Hook system core module.

Lifecycle hooks compute derived fields for the normalizer and let outer
layers observe persisted changes.

Example usage:
    from brewbase.core.hooks import HookRegistry, HookDecorator

    registry = HookRegistry()
    hooks = HookDecorator(registry)

    @hooks.on_document_derive_create("blogs")
    def default_author(event, data, context):
        data.setdefault("author", "Staff")
        return data
"""

from brewbase.core.hooks.hook_decorator import HookDecorator
from brewbase.core.hooks.hook_events import (
    EVENT_CATEGORIES,
    HookCategory,
    HookEvent,
    is_after_event,
)
from brewbase.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookRegistry",
    "RegisteredHook",
    "HookDecorator",
    "HookCategory",
    "HookEvent",
    "EVENT_CATEGORIES",
    "is_after_event",
]

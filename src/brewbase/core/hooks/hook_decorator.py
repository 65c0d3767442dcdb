"""Hook decorator API for user-friendly hook registration.

Enables the `@hooks.on_document_derive_create("blogs")` syntax.
"""

from typing import Any, Callable, Optional, TypeVar

from brewbase.core.hooks.hook_events import HookEvent
from brewbase.core.hooks.hook_registry import HookRegistry

F = TypeVar("F", bound=Callable[..., Any])


class HookDecorator:
    """Provides decorator syntax for hook registration.

    Example:
        hooks = HookDecorator(registry)

        @hooks.on_document_after_delete("beans")
        def log_removed_bean(event, data, context):
            logger.info("Bean removed", slug=data["slug"])
    """

    def __init__(self, registry: HookRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> HookRegistry:
        """Get the underlying hook registry."""
        return self._registry

    def on_document_derive_create(
        self,
        entity: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook that derives fields on a new document.

        Args:
            entity: Optional entity name filter.
            priority: Execution priority (higher = earlier).
            stop_on_error: Propagate errors instead of logging them.
        """
        return self._create_decorator(
            HookEvent.ON_DOCUMENT_DERIVE_CREATE, entity, priority, stop_on_error
        )

    def on_document_derive_update(
        self,
        entity: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook that derives fields on an update payload."""
        return self._create_decorator(
            HookEvent.ON_DOCUMENT_DERIVE_UPDATE, entity, priority, stop_on_error
        )

    def on_document_after_create(
        self,
        entity: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook for after a document has been persisted."""
        return self._create_decorator(
            HookEvent.ON_DOCUMENT_AFTER_CREATE, entity, priority, stop_on_error
        )

    def on_document_after_update(
        self,
        entity: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook for after an update has been persisted."""
        return self._create_decorator(
            HookEvent.ON_DOCUMENT_AFTER_UPDATE, entity, priority, stop_on_error
        )

    def on_document_after_delete(
        self,
        entity: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook for after a document has been removed.

        The hook receives the removed document, which is where outer
        layers learn which image files to erase.
        """
        return self._create_decorator(
            HookEvent.ON_DOCUMENT_AFTER_DELETE, entity, priority, stop_on_error
        )

    def _create_decorator(
        self,
        event: str,
        entity: Optional[str],
        priority: int,
        stop_on_error: bool,
    ) -> Callable[[F], F]:
        filters = {"entity": entity} if entity else None

        def decorator(func: F) -> F:
            self._registry.register(
                event=event,
                callback=func,
                filters=filters,
                priority=priority,
                stop_on_error=stop_on_error,
            )
            return func

        return decorator

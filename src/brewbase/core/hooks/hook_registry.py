"""Hook registry - Central hook registration and execution engine.

The HookRegistry provides:
- Registration of hooks with filters and priority
- Execution of hooks in priority order
- Tag-based filtering for entity-specific hooks
- Error handling and logging

Store operations run synchronously from start to finish, so hook
callbacks are plain functions.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from brewbase.core.hooks.hook_events import is_after_event
from brewbase.core.logging import LoggingContext, get_logger
from brewbase.domain.entities.hook_context import HookContext, HookResult

logger = get_logger(__name__)

HookCallback = Callable[[str, Optional[dict[str, Any]], Optional[HookContext]], Any]


@dataclass
class RegisteredHook:
    """Internal representation of a registered hook.

    Attributes:
        id: Unique identifier for this hook registration.
        event: The event this hook is registered for.
        callback: The function to call.
        filters: Tag-based filters (e.g., {"entity": "blogs"}). A filter
            value may also be a set of accepted values.
        priority: Execution priority (higher = earlier).
        stop_on_error: Whether errors should propagate to the caller.
        is_builtin: Whether this is a built-in system hook.
        registration_order: Order in which this hook was registered.
    """

    id: str
    event: str
    callback: HookCallback
    filters: dict[str, Any] = field(default_factory=dict)
    priority: int = 0
    stop_on_error: bool = False
    is_builtin: bool = False
    registration_order: int = 0


class HookRegistry:
    """Central hook registration and execution engine.

    Example:
        registry = HookRegistry()

        hook_id = registry.register(
            event=HookEvent.ON_DOCUMENT_DERIVE_CREATE,
            callback=stamp_author,
            filters={"entity": "blogs"},
            priority=10,
        )

        result = registry.trigger(
            event=HookEvent.ON_DOCUMENT_DERIVE_CREATE,
            data=document,
            context=hook_context,
            filters={"entity": "blogs"},
        )
        document = result.data

        registry.unregister(hook_id)
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[RegisteredHook]] = {}
        self._registration_counter: int = 0
        self._hook_map: dict[str, RegisteredHook] = {}

    def register(
        self,
        event: str,
        callback: HookCallback,
        filters: Optional[dict[str, Any]] = None,
        priority: int = 0,
        stop_on_error: bool = False,
        is_builtin: bool = False,
    ) -> str:
        """Register a hook for an event.

        Args:
            event: Hook event name (e.g., "on_document_derive_create").
            callback: Function accepting (event, data, context) and
                returning the modified data, or None to keep it.
            filters: Optional tag-based filters. Hook only fires if
                all filter conditions match (e.g., {"entity": "blogs"}).
            priority: Execution priority. Higher priority hooks run first.
            stop_on_error: If True, an exception raised by this hook
                propagates out of trigger(). Default is False (errors are
                logged and the chain continues). Ignored for after-* events,
                whose failures are always logged.
            is_builtin: If True, this hook cannot be unregistered.

        Returns:
            Unique hook_id string for later removal.
        """
        hook_id = f"hook_{uuid.uuid4().hex[:12]}"

        # FIFO ordering within same priority
        self._registration_counter += 1

        hook = RegisteredHook(
            id=hook_id,
            event=event,
            callback=callback,
            filters=filters or {},
            priority=priority,
            stop_on_error=stop_on_error,
            is_builtin=is_builtin,
            registration_order=self._registration_counter,
        )

        self._hooks.setdefault(event, []).append(hook)
        self._hook_map[hook_id] = hook

        logger.debug(
            "Hook registered",
            hook_id=hook_id,
            hook_event=event,
            priority=priority,
            filters=filters,
            is_builtin=is_builtin,
        )

        return hook_id

    def unregister(self, hook_id: str) -> bool:
        """Remove a registered hook.

        Returns:
            True if hook was removed, False if not found or is built-in.
        """
        hook = self._hook_map.get(hook_id)
        if not hook:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False

        if hook.is_builtin:
            logger.warning(
                "Cannot unregister built-in hook",
                hook_id=hook_id,
                hook_event=hook.event,
            )
            return False

        remaining = [h for h in self._hooks.get(hook.event, []) if h.id != hook_id]
        if remaining:
            self._hooks[hook.event] = remaining
        else:
            self._hooks.pop(hook.event, None)

        del self._hook_map[hook_id]

        logger.debug("Hook unregistered", hook_id=hook_id, hook_event=hook.event)

        return True

    def trigger(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        context: Optional[HookContext] = None,
        filters: Optional[dict[str, Any]] = None,
    ) -> HookResult:
        """Execute all registered hooks for an event.

        Hooks are executed in priority order (higher priority first).
        Hooks with the same priority execute in registration order (FIFO).

        Returns:
            HookResult with success status, any errors, and final data.

        Raises:
            Exception: Whatever a stop_on_error hook raised, except for
                after-* events.
        """
        result = HookResult(success=True, data=data)

        matching_hooks = self._filter_hooks(self._hooks.get(event, []), filters)
        if not matching_hooks:
            return result

        sorted_hooks = sorted(
            matching_hooks,
            key=lambda h: (-h.priority, h.registration_order),
        )

        logger.debug(
            "Triggering hooks",
            hook_event=event,
            hook_count=len(sorted_hooks),
            filters=filters,
        )

        # After events run once the write is durable; nothing can abort it
        can_abort = not is_after_event(event)
        bound = {"correlation_id": context.request_id} if context is not None else {}

        current_data = data
        with LoggingContext(**bound):
            for hook in sorted_hooks:
                try:
                    hook_result = hook.callback(event, current_data, context)
                except Exception as e:
                    logger.error(
                        "Hook execution failed",
                        hook_id=hook.id,
                        hook_event=event,
                        error=str(e),
                        stop_on_error=hook.stop_on_error,
                    )
                    if hook.stop_on_error and can_abort:
                        raise
                    result.success = False
                    result.errors.append(f"Hook {hook.id} failed: {e}")
                    continue

                if isinstance(hook_result, dict):
                    current_data = hook_result
                    result.data = current_data

        return result

    def _filter_hooks(
        self,
        hooks: list[RegisteredHook],
        filters: Optional[dict[str, Any]],
    ) -> list[RegisteredHook]:
        """Filter hooks based on trigger filters.

        A hook matches if it has no filters, or if every one of its
        filter keys is present in the trigger filters with an equal value
        (or, for set-valued hook filters, a member value).
        """
        if not filters:
            return [hook for hook in hooks if not hook.filters]

        return [hook for hook in hooks if self._matches(hook.filters, filters)]

    @staticmethod
    def _matches(hook_filters: dict[str, Any], filters: dict[str, Any]) -> bool:
        for key, value in hook_filters.items():
            trigger_value = filters.get(key)
            if trigger_value is None:
                return False
            if isinstance(value, (set, frozenset, tuple, list)):
                # Compare by equality; str enums do not hash like their values
                if not any(trigger_value == accepted for accepted in value):
                    return False
            elif value != trigger_value:
                return False
        return True

    def get_hooks_for_event(self, event: str) -> list[RegisteredHook]:
        """Get all hooks registered for an event."""
        return self._hooks.get(event, []).copy()

    def get_hook_by_id(self, hook_id: str) -> Optional[RegisteredHook]:
        """Get a hook by its ID."""
        return self._hook_map.get(hook_id)

    def clear(self, include_builtin: bool = False) -> int:
        """Remove all registered hooks.

        Args:
            include_builtin: If True, also remove built-in hooks.

        Returns:
            Number of hooks removed.
        """
        if include_builtin:
            count = len(self._hook_map)
            self._hooks.clear()
            self._hook_map.clear()
        else:
            to_remove = [
                hook_id for hook_id, hook in self._hook_map.items() if not hook.is_builtin
            ]
            for hook_id in to_remove:
                self.unregister(hook_id)
            count = len(to_remove)

        logger.debug("Hooks cleared", count=count, include_builtin=include_builtin)
        return count

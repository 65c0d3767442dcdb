"""Built-in derivation hooks for BrewBase.

These hooks compute the derived fields of each entity and CANNOT be
unregistered. They run with negative priority so that user derive hooks
have already adjusted the document when they fire.

Built-in hooks:
- blog_create_hook: date, readTime, category and excerpt on new posts
- blog_read_time_hook: recomputes readTime when content changes
- variant_price_hook: keeps price equal to the first variant's price
- order_create_hook: createdAt and status on new orders
- coupon_create_hook: currentUses, type and expiryDate on new coupons
"""

import math
from datetime import timezone
from typing import Any, Optional

from brewbase.core.hooks.hook_events import HookEvent
from brewbase.core.hooks.hook_registry import HookRegistry
from brewbase.core.logging import get_logger
from brewbase.domain.entities.entity_kind import VARIANT_KINDS, EntityKind
from brewbase.domain.entities.hook_context import HookContext

logger = get_logger(__name__)

BUILTIN_PRIORITY = -100

DEFAULT_BLOG_CATEGORY = "Uncategorized"
DEFAULT_ORDER_STATUS = "Pending"
DEFAULT_COUPON_TYPE = "percentage"


def calculate_read_time(text: Optional[str], words_per_minute: int = 200) -> str:
    """Estimate reading time for a blog body.

    Examples:
        >>> calculate_read_time("word " * 400)
        '2 min read'
        >>> calculate_read_time("")
        '0 min read'
    """
    words = len(str(text).split()) if text else 0
    minutes = math.ceil(words / words_per_minute)
    return f"{minutes} min read"


def blog_create_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Set the publication date, read time, category and excerpt of a new post."""
    if data is None or context is None:
        return data

    data["date"] = context.now.strftime("%d/%m/%Y")
    data["readTime"] = calculate_read_time(data.get("content"), context.words_per_minute)
    data["category"] = data.get("category") or data.get("keyword") or DEFAULT_BLOG_CATEGORY
    data["excerpt"] = data.get("excerpt") or ""
    return data


def blog_read_time_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Recompute readTime only when the update carries new content."""
    if data is None or context is None or "content" not in data:
        return data

    data["readTime"] = calculate_read_time(data["content"], context.words_per_minute)
    logger.debug("Blog read time recomputed", read_time=data["readTime"])
    return data


def variant_price_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Sync price to the first variant whenever variants are supplied."""
    if data is None:
        return data

    variants = data.get("variants")
    if isinstance(variants, list) and variants and isinstance(variants[0], dict):
        if "price" in variants[0]:
            data["price"] = variants[0]["price"]
    return data


def order_create_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Stamp createdAt and default the status of a new order."""
    if data is None or context is None:
        return data

    created_at = context.now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    data["createdAt"] = created_at.replace("+00:00", "Z")
    data["status"] = data.get("status") or DEFAULT_ORDER_STATUS
    return data


def coupon_create_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Initialize redemption bookkeeping and defaults of a new coupon.

    currentUses always starts at 0, whatever the caller sent.
    """
    if data is None:
        return data

    data["currentUses"] = 0
    data["expiryDate"] = data.get("expiryDate") or ""
    data["type"] = data.get("type") or DEFAULT_COUPON_TYPE
    return data


def register_builtin_hooks(registry: HookRegistry) -> list[str]:
    """Register all built-in hooks.

    Built-in hooks are registered with:
    - is_builtin=True (cannot be unregistered)
    - stop_on_error=True (a failing derivation fails the operation)
    - Negative priority (run after user derive hooks)

    Registering on the same registry again is a no-op, so every holder of
    a registry can call this safely.

    Args:
        registry: The HookRegistry to register hooks with.

    Returns:
        List of the built-in hook IDs on the registry.
    """
    registrations = [
        (HookEvent.ON_DOCUMENT_DERIVE_CREATE, blog_create_hook, EntityKind.BLOGS),
        (HookEvent.ON_DOCUMENT_DERIVE_UPDATE, blog_read_time_hook, EntityKind.BLOGS),
        (HookEvent.ON_DOCUMENT_DERIVE_CREATE, variant_price_hook, VARIANT_KINDS),
        (HookEvent.ON_DOCUMENT_DERIVE_UPDATE, variant_price_hook, VARIANT_KINDS),
        (HookEvent.ON_DOCUMENT_DERIVE_CREATE, order_create_hook, EntityKind.ORDERS),
        (HookEvent.ON_DOCUMENT_DERIVE_CREATE, coupon_create_hook, EntityKind.COUPONS),
    ]

    existing = {
        (hook.event, hook.callback): hook.id
        for event, _, _ in registrations
        for hook in registry.get_hooks_for_event(event)
        if hook.is_builtin
    }
    if len(existing) == len(registrations):
        return [existing[(event, callback)] for event, callback, _ in registrations]

    hook_ids = [
        existing.get((event, callback))
        or registry.register(
            event=event,
            callback=callback,
            filters={"entity": entity},
            priority=BUILTIN_PRIORITY,
            stop_on_error=True,
            is_builtin=True,
        )
        for event, callback, entity in registrations
    ]

    logger.debug("Built-in hooks registered", count=len(hook_ids))
    return hook_ids


# Dictionary of built-in hook functions for reference
BUILTIN_HOOKS = {
    "blog_create_hook": blog_create_hook,
    "blog_read_time_hook": blog_read_time_hook,
    "variant_price_hook": variant_price_hook,
    "order_create_hook": order_create_hook,
    "coupon_create_hook": coupon_create_hook,
}

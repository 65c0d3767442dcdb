"""Infrastructure hooks module.

Contains built-in hooks and hook registration utilities.
"""

from brewbase.infrastructure.hooks.builtin_hooks import (
    BUILTIN_HOOKS,
    blog_create_hook,
    blog_read_time_hook,
    calculate_read_time,
    coupon_create_hook,
    order_create_hook,
    register_builtin_hooks,
    variant_price_hook,
)

__all__ = [
    "BUILTIN_HOOKS",
    "blog_create_hook",
    "blog_read_time_hook",
    "calculate_read_time",
    "coupon_create_hook",
    "order_create_hook",
    "register_builtin_hooks",
    "variant_price_hook",
]

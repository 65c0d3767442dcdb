"""Hook event definitions and categories.

Derive events fire inside the normalizer after field coercion and let
hooks compute derived fields. After events fire in the repository once a
collection has been persisted.
"""


class HookCategory:
    """Categories for organizing hooks."""

    DERIVATION = "derivation"
    DOCUMENT_OPERATIONS = "document_operations"


class HookEvent:
    """Hook event names.

    - derive_* events receive the coerced document and may modify it
    - after_* events are called after the collection has been saved
    """

    ON_DOCUMENT_DERIVE_CREATE = "on_document_derive_create"
    ON_DOCUMENT_DERIVE_UPDATE = "on_document_derive_update"

    ON_DOCUMENT_AFTER_CREATE = "on_document_after_create"
    ON_DOCUMENT_AFTER_UPDATE = "on_document_after_update"
    ON_DOCUMENT_AFTER_DELETE = "on_document_after_delete"


EVENT_CATEGORIES: dict[str, str] = {
    HookEvent.ON_DOCUMENT_DERIVE_CREATE: HookCategory.DERIVATION,
    HookEvent.ON_DOCUMENT_DERIVE_UPDATE: HookCategory.DERIVATION,
    HookEvent.ON_DOCUMENT_AFTER_CREATE: HookCategory.DOCUMENT_OPERATIONS,
    HookEvent.ON_DOCUMENT_AFTER_UPDATE: HookCategory.DOCUMENT_OPERATIONS,
    HookEvent.ON_DOCUMENT_AFTER_DELETE: HookCategory.DOCUMENT_OPERATIONS,
}


def is_after_event(event: str) -> bool:
    """Check if an event fires after the collection has been persisted.

    Failures of such hooks can no longer abort the operation, so they are
    always logged instead of raised.
    """
    return EVENT_CATEGORIES.get(event) == HookCategory.DOCUMENT_OPERATIONS

"""Hook context and result types for the hook system.

Contains the core data structures used by the hook system:
- HookContext: Context passed to all hook callbacks
- HookResult: Result of a hook trigger operation
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from brewbase.domain.entities.entity_kind import EntityKind


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class HookContext:
    """Context passed to all hook callbacks.

    Attributes:
        entity: The collection the document belongs to.
        payload: The raw field bag supplied by the caller.
        previous: The stored document before an update, None on create.
        now: Timezone-aware instant used for every derived timestamp in
            one operation.
        words_per_minute: Reading speed used for blog read times.
        request_id: Correlation ID for logging and tracing.

    Example:
        def my_hook(event: str, data: dict, context: HookContext) -> dict:
            if context.entity is EntityKind.BLOGS:
                data["author"] = data.get("author") or "Staff"
            return data
    """

    entity: EntityKind
    payload: dict[str, Any] = field(default_factory=dict)
    previous: Optional[dict[str, Any]] = None
    now: datetime = field(default_factory=_local_now)
    words_per_minute: int = 200
    request_id: str = ""

    def __post_init__(self) -> None:
        if not self.request_id:
            self.request_id = f"hk_{uuid.uuid4().hex[:12]}"

    @property
    def is_update(self) -> bool:
        return self.previous is not None


@dataclass
class HookResult:
    """Result of a hook trigger operation.

    Attributes:
        success: Whether all hooks executed successfully.
        errors: List of error messages from hooks that failed.
        data: Modified data from the hook chain.
    """

    success: bool = True
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None

"""Document normalization service.

Turns a raw field bag into a well-typed document by walking the entity's
schema table, then hands the result to derive hooks for computed fields
(read time, timestamps, price sync, defaults).
"""

from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from brewbase.core.hooks.hook_events import HookEvent
from brewbase.core.hooks.hook_registry import HookRegistry
from brewbase.core.logging import get_logger
from brewbase.domain.entities.entity_kind import EntityKind
from brewbase.domain.entities.entity_schema import EntitySchema
from brewbase.domain.entities.hook_context import HookContext
from brewbase.domain.services.field_coercion import coerce
from brewbase.infrastructure.hooks.builtin_hooks import register_builtin_hooks

logger = get_logger(__name__)

IDENTITY_FIELDS = ("id", "slug")


class DocumentNormalizer:
    """Apply per-entity coercion rules and derivation hooks.

    Create and update share the same rules. On update only the fields
    present in the payload are coerced, structured-field parse failures
    fall back to empty values instead of raising, and identity fields
    are never touched.
    """

    def __init__(
        self,
        hooks: Optional[HookRegistry] = None,
        words_per_minute: int = 200,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            hooks: Registry for user derive hooks. The built-in derivations
                are registered on it (once per registry); a fresh registry
                is created when omitted.
            words_per_minute: Reading speed for blog read times.
            clock: Optional source of the current timezone-aware instant.
        """
        self.hooks = hooks if hooks is not None else HookRegistry()
        register_builtin_hooks(self.hooks)
        self.words_per_minute = words_per_minute
        self._clock = clock

    def normalize_create(
        self, entity: EntityKind | str, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Normalize a new document.

        Args:
            entity: The collection the document is created in.
            data: Raw field bag, already carrying its minted identity.

        Returns:
            The normalized document.

        Raises:
            StructuredInputError: If a nested field holds malformed JSON.
        """
        kind = EntityKind.parse(entity)
        schema = kind.schema
        document = dict(data)

        for name, rule in schema.fields.items():
            if name in document:
                document[name] = coerce(document[name], name, rule.kind, strict=True)
            elif rule.fill_when_absent:
                document[name] = coerce(None, name, rule.kind, strict=True)

        context = self._context(kind, data)
        result = self.hooks.trigger(
            HookEvent.ON_DOCUMENT_DERIVE_CREATE,
            data=document,
            context=context,
            filters={"entity": kind},
        )
        document = result.data if result.data is not None else document

        return self._strip_suppressed(document, schema)

    def normalize_update(
        self,
        entity: EntityKind | str,
        previous: Mapping[str, Any],
        updates: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Normalize an update payload and merge it over the stored document.

        Args:
            entity: The collection the document lives in.
            previous: The stored document.
            updates: Raw field bag with the changed fields only.

        Returns:
            The merged document. Fields absent from ``updates`` are kept
            as they were; ``id`` and ``slug`` never change.
        """
        kind = EntityKind.parse(entity)
        schema = kind.schema
        changes = {k: v for k, v in updates.items() if k not in IDENTITY_FIELDS}

        for name, value in changes.items():
            rule = schema.rule_for(name)
            if rule is not None:
                changes[name] = coerce(value, name, rule.kind, strict=False)

        context = self._context(kind, updates, previous=dict(previous))
        result = self.hooks.trigger(
            HookEvent.ON_DOCUMENT_DERIVE_UPDATE,
            data=changes,
            context=context,
            filters={"entity": kind},
        )
        changes = result.data if result.data is not None else changes
        changes = self._strip_suppressed(changes, schema)

        return {**previous, **changes}

    def _context(
        self,
        kind: EntityKind,
        payload: Mapping[str, Any],
        previous: Optional[dict[str, Any]] = None,
    ) -> HookContext:
        context = HookContext(
            entity=kind,
            payload=dict(payload),
            previous=previous,
            words_per_minute=self.words_per_minute,
        )
        if self._clock is not None:
            context.now = self._clock()
        return context

    @staticmethod
    def _strip_suppressed(document: dict[str, Any], schema: EntitySchema) -> dict[str, Any]:
        if not schema.suppressed:
            return document
        return {k: v for k, v in document.items() if k not in schema.suppressed}

"""Domain entities for BrewBase.

Entities are pure Python dataclasses and enums that represent core
business concepts. They have no dependencies on infrastructure.
"""

from brewbase.domain.entities.entity_kind import (
    ENTITY_SCHEMAS,
    PRODUCT_KINDS,
    VARIANT_KINDS,
    EntityKind,
)
from brewbase.domain.entities.entity_schema import EntitySchema, FieldKind, FieldRule
from brewbase.domain.entities.hook_context import HookContext, HookResult

__all__ = [
    "ENTITY_SCHEMAS",
    "EntityKind",
    "EntitySchema",
    "FieldKind",
    "FieldRule",
    "HookContext",
    "HookResult",
    "PRODUCT_KINDS",
    "VARIANT_KINDS",
]

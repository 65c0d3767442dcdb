"""Entity schema definitions.

An entity schema is a table mapping field names to coercion rules. The
normalizer walks the table instead of branching on entity names, so each
rule can be exercised on its own.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class FieldKind(str, Enum):
    """Coercion kinds supported by the normalizer."""

    BOOLEAN = "boolean"
    FLOAT = "float"
    INTEGER = "integer"
    LIST = "list"
    STRUCTURED_LIST = "structured_list"
    STRUCTURED_MAPPING = "structured_mapping"
    IMAGES = "images"
    UPPERCASE = "uppercase"

    @property
    def is_structured(self) -> bool:
        return self in (FieldKind.STRUCTURED_LIST, FieldKind.STRUCTURED_MAPPING)


@dataclass(frozen=True)
class FieldRule:
    """Coercion rule for a single field.

    Attributes:
        kind: How raw values are coerced.
        fill_when_absent: Whether a create without this field still stores
            the coerced default (False leaves the field out entirely).
    """

    kind: FieldKind
    fill_when_absent: bool = True


@dataclass(frozen=True)
class EntitySchema:
    """Schema for one collection.

    Attributes:
        fields: Field name to coercion rule. Fields not listed pass through.
        suppressed: Fields stripped after generic processing.
    """

    fields: Mapping[str, FieldRule] = field(default_factory=dict)
    suppressed: frozenset[str] = frozenset()

    @property
    def has_slug(self) -> bool:
        return "slug" not in self.suppressed

    def rule_for(self, name: str) -> FieldRule | None:
        return self.fields.get(name)


BOOLEAN = FieldRule(FieldKind.BOOLEAN)
FLOAT = FieldRule(FieldKind.FLOAT)
INTEGER = FieldRule(FieldKind.INTEGER)
LIST = FieldRule(FieldKind.LIST)
IMAGES = FieldRule(FieldKind.IMAGES)
UPPERCASE = FieldRule(FieldKind.UPPERCASE)
STRUCTURED_LIST = FieldRule(FieldKind.STRUCTURED_LIST)
STRUCTURED_MAPPING = FieldRule(FieldKind.STRUCTURED_MAPPING)
OPTIONAL_STRUCTURED_LIST = FieldRule(FieldKind.STRUCTURED_LIST, fill_when_absent=False)

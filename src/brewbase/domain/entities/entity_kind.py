"""Entity kinds known to the store.

The set of collections is closed. Each kind carries the schema that the
normalizer applies to its documents.
"""

from enum import Enum

from brewbase.domain.entities.entity_schema import (
    BOOLEAN,
    FLOAT,
    IMAGES,
    INTEGER,
    LIST,
    OPTIONAL_STRUCTURED_LIST,
    STRUCTURED_LIST,
    STRUCTURED_MAPPING,
    UPPERCASE,
    EntitySchema,
)
from brewbase.domain.exceptions import UnknownEntityError


class EntityKind(str, Enum):
    """Collections managed by the store."""

    BEANS = "beans"
    MACHINES = "machines"
    SYRUPS = "syrups"
    SAUCES = "sauces"
    BLOGS = "blogs"
    ORDERS = "orders"
    COUPONS = "coupons"

    @classmethod
    def parse(cls, value: "EntityKind | str") -> "EntityKind":
        """Resolve an entity name to its kind.

        Raises:
            UnknownEntityError: If the name is not a known collection.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownEntityError(str(value)) from None

    @property
    def is_product(self) -> bool:
        return self in PRODUCT_KINDS

    @property
    def has_variants(self) -> bool:
        return self in VARIANT_KINDS

    @property
    def schema(self) -> EntitySchema:
        return ENTITY_SCHEMAS[self]


PRODUCT_KINDS = frozenset(
    {EntityKind.BEANS, EntityKind.MACHINES, EntityKind.SYRUPS, EntityKind.SAUCES}
)
VARIANT_KINDS = frozenset({EntityKind.BEANS, EntityKind.SYRUPS, EntityKind.SAUCES})

# Generic fields shared by every catalog entity
_CATALOG_FIELDS = {
    "isFeatured": BOOLEAN,
    "keywords": LIST,
    "images": IMAGES,
}

_PRODUCT_FIELDS = {
    **_CATALOG_FIELDS,
    "inStock": BOOLEAN,
    "discountPercentage": FLOAT,
}

_VARIANT_PRODUCT_FIELDS = {
    **_PRODUCT_FIELDS,
    "cupping_notes": LIST,
    "variants": OPTIONAL_STRUCTURED_LIST,
}

ENTITY_SCHEMAS: dict[EntityKind, EntitySchema] = {
    EntityKind.BEANS: EntitySchema(fields=_VARIANT_PRODUCT_FIELDS),
    EntityKind.SYRUPS: EntitySchema(fields=_VARIANT_PRODUCT_FIELDS),
    EntityKind.SAUCES: EntitySchema(fields=_VARIANT_PRODUCT_FIELDS),
    EntityKind.MACHINES: EntitySchema(
        fields={
            **_PRODUCT_FIELDS,
            "specifications": STRUCTURED_MAPPING,
            "features": STRUCTURED_MAPPING,
        }
    ),
    EntityKind.BLOGS: EntitySchema(
        fields=_CATALOG_FIELDS,
        suppressed=frozenset({"inStock"}),
    ),
    EntityKind.ORDERS: EntitySchema(
        fields={
            "items": STRUCTURED_LIST,
            "totalAmount": FLOAT,
            "isPaid": BOOLEAN,
        },
        suppressed=frozenset({"slug", "keywords", "images", "isFeatured", "inStock"}),
    ),
    EntityKind.COUPONS: EntitySchema(
        fields={
            **_CATALOG_FIELDS,
            "isActive": BOOLEAN,
            "value": FLOAT,
            "maxUses": INTEGER,
            "maxDiscount": FLOAT,
            "code": UPPERCASE,
        },
        suppressed=frozenset({"inStock"}),
    ),
}

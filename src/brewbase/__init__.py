"""BrewBase - Catalog and content store for a small coffee shop.

Schema-aware document collections (beans, machines, syrups, sauces, blogs,
orders, coupons) persisted as one JSON list per collection.
"""

__version__ = "0.1.0"

from brewbase.domain.entities.entity_kind import EntityKind
from brewbase.domain.exceptions import (
    BrewBaseError,
    SlugConflictError,
    StructuredInputError,
    UnknownEntityError,
)
from brewbase.infrastructure.persistence.repositories.document_repository import (
    DocumentRepository,
    create_repository,
)

__all__ = [
    "BrewBaseError",
    "DocumentRepository",
    "EntityKind",
    "SlugConflictError",
    "StructuredInputError",
    "UnknownEntityError",
    "__version__",
    "create_repository",
]

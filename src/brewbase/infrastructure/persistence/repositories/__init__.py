"""Repositories for BrewBase collections."""

from brewbase.infrastructure.persistence.repositories.document_repository import (
    DocumentRepository,
    create_repository,
    find_by_identifier,
    find_index,
)

__all__ = [
    "DocumentRepository",
    "create_repository",
    "find_by_identifier",
    "find_index",
]

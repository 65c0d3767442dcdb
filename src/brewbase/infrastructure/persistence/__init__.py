"""Persistence layer: collection storage backends and repositories."""

from brewbase.infrastructure.persistence.document_storage import (
    Document,
    DocumentStorage,
    InMemoryDocumentStorage,
    JsonFileDocumentStorage,
)

__all__ = [
    "Document",
    "DocumentStorage",
    "InMemoryDocumentStorage",
    "JsonFileDocumentStorage",
]

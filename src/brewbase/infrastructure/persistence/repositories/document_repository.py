"""Repository for catalog documents.

Provides CRUD operations over whole-collection storage. Every operation
reloads the collection, so sequential calls always observe each other's
writes. Concurrent writers to one collection are not coordinated and the
last save wins.
"""

import copy
from typing import Any, Mapping, Optional

from brewbase.core.config import Settings, get_settings
from brewbase.core.hooks.hook_events import HookEvent
from brewbase.core.hooks.hook_registry import HookRegistry
from brewbase.core.logging import get_logger
from brewbase.domain.entities.entity_kind import EntityKind
from brewbase.domain.entities.hook_context import HookContext
from brewbase.domain.exceptions import SlugConflictError
from brewbase.domain.services.document_normalizer import DocumentNormalizer
from brewbase.domain.services.id_generator import IdGenerator
from brewbase.domain.services.slug_generator import SlugGenerator
from brewbase.infrastructure.persistence.document_storage import (
    Document,
    DocumentStorage,
    JsonFileDocumentStorage,
)

logger = get_logger(__name__)


def find_index(documents: list[Document], identifier: str) -> int:
    """Index of the first document whose id or slug equals identifier, or -1."""
    for index, document in enumerate(documents):
        if document.get("id") == identifier or document.get("slug") == identifier:
            return index
    return -1


def find_by_identifier(documents: list[Document], identifier: str) -> Optional[Document]:
    """First document matching identifier by id or slug, in stored order."""
    index = find_index(documents, identifier)
    return documents[index] if index >= 0 else None


class DocumentRepository:
    """Repository for schema-aware document operations.

    Reads return stored documents untouched. Writes normalize input
    through the entity schema before splicing it into the collection and
    saving the whole list.
    """

    def __init__(
        self,
        storage: DocumentStorage,
        normalizer: Optional[DocumentNormalizer] = None,
        hooks: Optional[HookRegistry] = None,
        enforce_unique_slugs: bool = False,
    ) -> None:
        """Initialize the repository.

        Args:
            storage: Backend holding one serialized list per entity.
            normalizer: Normalizer for create/update payloads. Defaults to
                one sharing ``hooks``.
            hooks: Registry for derive and after-* hooks. Defaults to the
                normalizer's registry. The built-in derivations are always
                registered on the normalizer's registry.
            enforce_unique_slugs: Reject creates whose slug is taken.
        """
        if hooks is None and normalizer is not None:
            hooks = normalizer.hooks
        self.normalizer = normalizer or DocumentNormalizer(hooks=hooks)
        self.storage = storage
        self.hooks = self.normalizer.hooks if hooks is None else hooks
        self.enforce_unique_slugs = enforce_unique_slugs

    def get_all(self, entity: EntityKind | str) -> list[Document]:
        """Get every document of a collection in stored order."""
        kind = EntityKind.parse(entity)
        return self.storage.load(kind.value)

    def get_by_id_or_slug(
        self, entity: EntityKind | str, identifier: str
    ) -> Optional[Document]:
        """Get a document by its id or slug.

        Returns:
            The document, or None if not found.
        """
        kind = EntityKind.parse(entity)
        return find_by_identifier(self.storage.load(kind.value), identifier)

    def create(self, entity: EntityKind | str, data: Mapping[str, Any]) -> Document:
        """Create a document.

        Args:
            entity: Collection to create the document in.
            data: Raw field bag; values may all be strings.

        Returns:
            The stored document including its id and slug.

        Raises:
            StructuredInputError: If a nested field holds malformed JSON.
                Nothing is persisted.
            SlugConflictError: If slug enforcement is on and the slug is taken.
        """
        kind = EntityKind.parse(entity)
        documents = self.storage.load(kind.value)

        document = {
            **data,
            "id": IdGenerator.generate(),
            "slug": SlugGenerator.for_document(data),
        }
        document = self.normalizer.normalize_create(kind, document)

        slug = document.get("slug")
        if self.enforce_unique_slugs and slug is not None:
            if any(existing.get("slug") == slug for existing in documents):
                raise SlugConflictError(kind.value, slug)

        documents.append(document)
        self.storage.save(kind.value, documents)

        logger.debug("Document created", entity=kind.value, document_id=document["id"])
        self._after(HookEvent.ON_DOCUMENT_AFTER_CREATE, kind, document, data)
        return document

    def update(
        self, entity: EntityKind | str, identifier: str, data: Mapping[str, Any]
    ) -> Optional[Document]:
        """Update a document in place by id or slug.

        Only the supplied fields change. The collection is not written
        when the document does not exist.

        Returns:
            The updated document, or None if not found.
        """
        kind = EntityKind.parse(entity)
        documents = self.storage.load(kind.value)

        index = find_index(documents, identifier)
        if index < 0:
            logger.debug("Document not found for update", entity=kind.value, identifier=identifier)
            return None

        documents[index] = self.normalizer.normalize_update(kind, documents[index], data)
        self.storage.save(kind.value, documents)

        logger.debug("Document updated", entity=kind.value, document_id=documents[index].get("id"))
        self._after(HookEvent.ON_DOCUMENT_AFTER_UPDATE, kind, documents[index], data)
        return documents[index]

    def delete(self, entity: EntityKind | str, identifier: str) -> Optional[Document]:
        """Delete the first document matching id or slug.

        The removed document is returned so the caller can erase the
        files listed in its ``images`` field; the repository itself never
        touches asset storage.

        Returns:
            The removed document, or None if not found.
        """
        kind = EntityKind.parse(entity)
        documents = self.storage.load(kind.value)

        index = find_index(documents, identifier)
        if index < 0:
            logger.debug("Document not found for delete", entity=kind.value, identifier=identifier)
            return None

        removed = documents.pop(index)
        self.storage.save(kind.value, documents)

        logger.info("Document deleted", entity=kind.value, document_id=removed.get("id"))
        self._after(HookEvent.ON_DOCUMENT_AFTER_DELETE, kind, removed, {})
        return removed

    def _after(
        self,
        event: str,
        kind: EntityKind,
        document: Document,
        payload: Mapping[str, Any],
    ) -> None:
        context = HookContext(entity=kind, payload=dict(payload))
        self.hooks.trigger(
            event, data=copy.deepcopy(document), context=context, filters={"entity": kind}
        )


def create_repository(
    settings: Optional[Settings] = None,
    hooks: Optional[HookRegistry] = None,
) -> DocumentRepository:
    """Build a repository over the configured data directory.

    Args:
        settings: Optional settings; loaded from the environment if omitted.
        hooks: Optional registry; built-in hooks are registered on it.
    """
    if settings is None:
        settings = get_settings()

    registry = hooks if hooks is not None else HookRegistry()

    normalizer = DocumentNormalizer(hooks=registry, words_per_minute=settings.words_per_minute)
    return DocumentRepository(
        storage=JsonFileDocumentStorage(settings.data_path),
        normalizer=normalizer,
        hooks=registry,
        enforce_unique_slugs=settings.enforce_unique_slugs,
    )

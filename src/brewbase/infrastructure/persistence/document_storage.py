"""Durable storage for whole collections.

Each entity's documents are stored together as one JSON array. Loading
returns the full list and saving replaces it, so the repository always
works on a fresh copy and never caches across calls.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from brewbase.core.logging import get_logger

logger = get_logger(__name__)

Document = dict[str, Any]


class DocumentStorage(ABC):
    """Abstract base class for collection storage backends."""

    @abstractmethod
    def read_raw(self, entity: str) -> str | None:
        """Return the serialized collection, or None if never persisted."""
        ...

    @abstractmethod
    def write_raw(self, entity: str, content: str) -> None:
        """Replace the serialized collection in one step."""
        ...

    def load(self, entity: str) -> list[Document]:
        """Load every document of a collection.

        A missing collection is empty. Content that is not a JSON array of
        objects is logged and treated as empty rather than raised.
        """
        content = self.read_raw(entity)
        if content is None or not content.strip():
            return []

        try:
            documents = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse collection", entity=entity, error=str(e))
            return []

        if not isinstance(documents, list):
            logger.error(
                "Collection is not a list",
                entity=entity,
                found_type=type(documents).__name__,
            )
            return []

        if not all(isinstance(document, dict) for document in documents):
            logger.error("Collection holds non-object entries", entity=entity)
            return []

        return documents

    def save(self, entity: str, documents: list[Document]) -> None:
        """Persist the full collection, replacing what was stored."""
        self.write_raw(entity, json.dumps(documents, indent=2, ensure_ascii=False))
        logger.debug("Collection saved", entity=entity, count=len(documents))


class JsonFileDocumentStorage(DocumentStorage):
    """Stores each collection as ``<data_dir>/<entity>.json``."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def get_file_path(self, entity: str) -> Path:
        return self.data_dir / f"{entity}.json"

    def read_raw(self, entity: str) -> str | None:
        path = self.get_file_path(entity)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read collection", entity=entity, path=str(path), error=str(e))
            return None

    def write_raw(self, entity: str, content: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_file_path(entity)

        # Readers see either the old file or the new one, never a partial write
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{entity}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class InMemoryDocumentStorage(DocumentStorage):
    """Dict-backed storage for tests and ephemeral use.

    Collections are kept serialized so loads return independent copies,
    exactly like the file backend.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._collections: dict[str, str] = dict(initial or {})

    def read_raw(self, entity: str) -> str | None:
        return self._collections.get(entity)

    def write_raw(self, entity: str, content: str) -> None:
        self._collections[entity] = content

"""Pytest configuration for all tests."""

from datetime import datetime, timezone

import pytest

from brewbase.core.config import get_settings
from brewbase.core.hooks import HookRegistry
from brewbase.domain.services.document_normalizer import DocumentNormalizer
from brewbase.infrastructure.hooks import register_builtin_hooks
from brewbase.infrastructure.persistence import InMemoryDocumentStorage, JsonFileDocumentStorage
from brewbase.infrastructure.persistence.repositories import DocumentRepository

FIXED_NOW = datetime(2026, 3, 14, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Make every test see a freshly loaded Settings instance."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def hook_registry() -> HookRegistry:
    """A registry holding the built-in derivation hooks."""
    registry = HookRegistry()
    register_builtin_hooks(registry)
    return registry


@pytest.fixture
def normalizer(hook_registry: HookRegistry) -> DocumentNormalizer:
    return DocumentNormalizer(hooks=hook_registry, clock=lambda: FIXED_NOW)


@pytest.fixture
def storage() -> InMemoryDocumentStorage:
    return InMemoryDocumentStorage()


@pytest.fixture
def repository(
    storage: InMemoryDocumentStorage,
    normalizer: DocumentNormalizer,
    hook_registry: HookRegistry,
) -> DocumentRepository:
    """Repository over in-memory storage with a fixed clock."""
    return DocumentRepository(storage=storage, normalizer=normalizer, hooks=hook_registry)


@pytest.fixture
def file_storage(tmp_path) -> JsonFileDocumentStorage:
    return JsonFileDocumentStorage(tmp_path / "data")


@pytest.fixture
def file_repository(
    file_storage: JsonFileDocumentStorage,
    normalizer: DocumentNormalizer,
    hook_registry: HookRegistry,
) -> DocumentRepository:
    """Repository over JSON files in a temporary directory."""
    return DocumentRepository(storage=file_storage, normalizer=normalizer, hooks=hook_registry)

"""Asset storage used by callers of the document store."""

from brewbase.infrastructure.storage.local_asset_store import LocalAssetStore

__all__ = ["LocalAssetStore"]

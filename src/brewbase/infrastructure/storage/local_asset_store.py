"""Local filesystem store for uploaded image assets.

The document store only keeps filenames. Whoever deletes a document is
responsible for erasing the files it listed; this store does that for the
uploads directory.
"""

from pathlib import Path
from typing import Any, Iterable, Mapping

from brewbase.core.logging import get_logger

logger = get_logger(__name__)


class LocalAssetStore:
    """Asset store backed by a single uploads directory."""

    def __init__(self, uploads_dir: str | Path) -> None:
        self.uploads_path = Path(uploads_dir)

    def get_file_path(self, filename: str) -> Path:
        """Resolve a stored filename inside the uploads directory.

        Raises:
            ValueError: If the filename would escape the uploads directory.
        """
        base = self.uploads_path.resolve()
        candidate = (base / filename).resolve()
        if candidate == base or base not in candidate.parents:
            raise ValueError(f"Invalid asset filename: {filename!r}")
        return candidate

    def exists(self, filename: str) -> bool:
        try:
            return self.get_file_path(filename).is_file()
        except ValueError:
            return False

    def delete_assets(self, filenames: Iterable[Any]) -> list[str]:
        """Delete each listed file that exists.

        Missing files are skipped. Invalid names and filesystem errors are
        logged and skipped so one bad entry does not keep the rest around.

        Returns:
            The filenames that were removed.
        """
        deleted: list[str] = []
        for filename in filenames:
            if not isinstance(filename, str) or not filename:
                logger.warning("Skipping non-string asset entry", entry=repr(filename))
                continue
            try:
                path = self.get_file_path(filename)
            except ValueError as e:
                logger.warning("Skipping asset outside uploads directory", filename=filename, error=str(e))
                continue

            if not path.is_file():
                continue

            try:
                path.unlink()
            except OSError as e:
                logger.error("Failed to delete asset", path=str(path), error=str(e))
                continue

            logger.info("Deleted asset", path=str(path))
            deleted.append(filename)
        return deleted

    def reconcile(self, document: Mapping[str, Any] | None) -> list[str]:
        """Erase the assets referenced by a deleted document."""
        if not document:
            return []
        images = document.get("images")
        if not isinstance(images, list):
            return []
        return self.delete_assets(images)

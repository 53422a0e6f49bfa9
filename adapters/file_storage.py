"""Local filesystem blob store for uploaded images.

Blobs are keyed by storage id; metadata lives in the ``stored_file`` table.
"""

import logging
from pathlib import Path
from typing import Optional
from uuid import UUID

from app.config import settings

logger = logging.getLogger("lechef.storage")


class LocalFileStorage:
    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.storage_dir)

    def _path(self, storage_id: UUID) -> Path:
        return self.root / str(storage_id)

    def save(self, storage_id: UUID, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self._path(storage_id).write_bytes(data)
        logger.debug("Stored blob %s (%d bytes)", storage_id, len(data))

    def read(self, storage_id: UUID) -> Optional[bytes]:
        path = self._path(storage_id)
        if not path.exists():
            return None
        return path.read_bytes()

    def delete(self, storage_id: UUID) -> bool:
        """Remove a blob; returns False when it was already gone"""
        path = self._path(storage_id)
        if not path.exists():
            return False
        path.unlink()
        logger.debug("Deleted blob %s", storage_id)
        return True


_storage: Optional[LocalFileStorage] = None


def get_file_storage() -> LocalFileStorage:
    global _storage
    if _storage is None:
        _storage = LocalFileStorage()
    return _storage

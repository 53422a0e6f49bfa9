"""
Storage Repository - Data access layer for uploaded files and upload tickets
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import StoredFile, UploadTicket


class StoredFileRepository(BaseRepository[StoredFile]):
    """Repository for stored file metadata"""

    def __init__(self, db: Session):
        super().__init__(db, StoredFile)

    def get_by_id_and_user(self, storage_id: UUID, user_id: str) -> Optional[StoredFile]:
        return (
            self.db.query(StoredFile)
            .filter(StoredFile.storage_id == storage_id, StoredFile.user_id == user_id)
            .first()
        )


class UploadTicketRepository(BaseRepository[UploadTicket]):
    """Repository for upload URL tokens"""

    def __init__(self, db: Session):
        super().__init__(db, UploadTicket)

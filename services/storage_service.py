"""File storage service: upload URLs, uploads, file URLs and deletion"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from adapters.file_storage import get_file_storage
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import StoredFile, UploadTicket, utcnow
from repositories import StoredFileRepository, UploadTicketRepository
from services.image_service import compress_image

logger = logging.getLogger("lechef.storage")


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class StorageService:
    """Business logic for uploaded recipe images."""

    @staticmethod
    def file_url(storage_id: UUID) -> str:
        return f"{settings.public_base_url.rstrip('/')}/storage/files/{storage_id}"

    @staticmethod
    def generate_upload_url(db: Session, user_id: str) -> Dict[str, object]:
        """Issue a single-use upload URL for the caller.

        Returns:
            {"upload_url": str, "expires_at": datetime}
        """
        token = secrets.token_urlsafe(32)
        expires_at = utcnow() + timedelta(seconds=settings.upload_url_ttl_sec)
        UploadTicketRepository(db).add(
            UploadTicket(token=token, user_id=user_id, expires_at=expires_at)
        )
        db.commit()

        logger.info(f"Issued upload URL for user {user_id}")
        return {
            "upload_url": f"{settings.public_base_url.rstrip('/')}/storage/upload/{token}",
            "expires_at": expires_at,
        }

    @staticmethod
    def complete_upload(
        db: Session,
        token: str,
        data: bytes,
        content_type: Optional[str],
    ) -> StoredFile:
        """Consume an upload token: compress the image, store it, record its metadata.

        Raises:
            NotFoundError: unknown or already used token
            ServiceValidationError: expired token, or an image that fails validation
        """
        ticket = UploadTicketRepository(db).get_by_id(token)
        if ticket is None or ticket.used:
            raise NotFoundError("Upload URL not found")
        if _aware(ticket.expires_at) < utcnow():
            raise ServiceValidationError("Upload URL has expired")

        compressed, stored_type = compress_image(data, content_type)

        ticket.used = True
        stored = StoredFileRepository(db).add(
            StoredFile(
                user_id=ticket.user_id,
                content_type=stored_type,
                size_bytes=len(compressed),
            )
        )
        get_file_storage().save(stored.storage_id, compressed)
        db.commit()
        db.refresh(stored)

        logger.info(f"Stored upload {stored.storage_id} for user {ticket.user_id}")
        return stored

    @staticmethod
    def get_url(db: Session, storage_id: Optional[UUID]) -> Optional[str]:
        """Public URL of a stored file, None when it does not exist"""
        if storage_id is None:
            return None
        if not StoredFileRepository(db).exists(storage_id):
            return None
        return StorageService.file_url(storage_id)

    @staticmethod
    def get_urls(db: Session, storage_ids: Iterable[Optional[UUID]]) -> Dict[UUID, str]:
        """Batch form of get_url; ids without a stored file are left out"""
        ids = {sid for sid in storage_ids if sid is not None}
        if not ids:
            return {}
        found = db.query(StoredFile.storage_id).filter(StoredFile.storage_id.in_(ids)).all()
        return {row.storage_id: StorageService.file_url(row.storage_id) for row in found}

    @staticmethod
    def read_file(db: Session, storage_id: UUID) -> Tuple[bytes, str]:
        stored = StoredFileRepository(db).get_by_id(storage_id)
        if stored is None:
            raise NotFoundError("File not found")
        data = get_file_storage().read(storage_id)
        if data is None:
            raise NotFoundError("File not found")
        return data, stored.content_type

    @staticmethod
    def delete_file(db: Session, user_id: str, storage_id: UUID) -> None:
        """Owner-only delete of a stored file"""
        repo = StoredFileRepository(db)
        stored = repo.get_by_id_and_user(storage_id, user_id)
        if stored is None:
            raise NotFoundError("File not found")
        repo.delete(stored)
        db.commit()
        StorageService.purge(storage_id)
        logger.info(f"Deleted file {storage_id} for user {user_id}")

    @staticmethod
    def owns(db: Session, user_id: str, storage_id: UUID) -> bool:
        return StoredFileRepository(db).get_by_id_and_user(storage_id, user_id) is not None

    @staticmethod
    def discard(db: Session, user_id: str, storage_id: Optional[UUID]) -> Optional[UUID]:
        """Stage the metadata delete of a recipe image in the caller's transaction.

        Only files owned by ``user_id`` are touched. Returns the id whose bytes
        the caller should ``purge`` once its commit succeeds, or None.
        """
        if storage_id is None:
            return None
        stored = StoredFileRepository(db).get_by_id_and_user(storage_id, user_id)
        if stored is None:
            return None
        db.delete(stored)
        return storage_id

    @staticmethod
    def purge(storage_id: Optional[UUID]) -> None:
        """Best-effort removal of stored bytes; failures are logged, not raised"""
        if storage_id is None:
            return
        try:
            get_file_storage().delete(storage_id)
        except OSError as e:
            logger.warning(f"Failed to delete image {storage_id}: {e}")

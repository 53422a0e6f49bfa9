"""
File storage bookkeeping models.
"""

import uuid

from sqlalchemy import Column, Text, Integer, Boolean, DateTime, Uuid

from domain.models.database import Base, utcnow


class StoredFile(Base):
    """Metadata of an uploaded file; the bytes live in the file storage adapter"""

    __tablename__ = "stored_file"

    storage_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    content_type = Column(Text, nullable=False)
    size_bytes = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class UploadTicket(Base):
    """Single-use token behind an issued upload URL"""

    __tablename__ = "upload_ticket"

    token = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

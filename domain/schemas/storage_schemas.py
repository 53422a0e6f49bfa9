"""Pydantic schemas for the two-phase image upload."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UploadUrlResponse(BaseModel):
    upload_url: str
    expires_at: datetime


class UploadResultResponse(BaseModel):
    storage_id: UUID
    content_type: str
    size_bytes: int
    url: str

"""
API dependencies for dependency injection
"""

from typing import Generator, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.exceptions import UnauthorizedError
from domain.models import get_db_session


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_identity(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """
    Caller's subject identifier from ``Authorization: Bearer <subject>``.

    Tokens are verified by the identity provider in front of the API, so the
    bearer value is taken as the subject. Returns None when absent.
    """
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    credentials = credentials.strip()
    return credentials or None


def require_identity(identity: Optional[str] = Depends(get_identity)) -> str:
    """Same as get_identity but rejects anonymous callers with 401"""
    if identity is None:
        raise UnauthorizedError()
    return identity

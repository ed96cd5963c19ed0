"""
API dependencies for dependency injection
"""

from typing import Generator, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.exceptions import UnauthorizedError, ForbiddenError
from domain.enums import UserRole
from domain.models import get_db_session, User
from services.auth_service import AuthService
from services.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


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


class Pagination:
    """``page``/``limit`` query parameters shared by list endpoints"""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        self.page = page
        self.limit = limit


class AdminPagination(Pagination):
    """Admin listings show twenty rows by default"""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
    ):
        super().__init__(page, limit)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token required")

    payload = decode_access_token(credentials.credentials)
    subject = payload.get("sub") if payload else None
    if subject is None or not str(subject).isdigit():
        raise UnauthorizedError("Invalid or expired token")

    return AuthService.get_active_user(db, int(subject))


def require_user(user: User = Depends(get_current_user)) -> User:
    """Any signed-in account, regular or admin"""
    if user.role not in (UserRole.USER, UserRole.ADMIN):
        raise ForbiddenError("Insufficient permissions")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise ForbiddenError("Admin access required")
    return user

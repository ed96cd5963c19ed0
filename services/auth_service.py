from datetime import datetime, timedelta, timezone
from typing import Tuple
import logging

from sqlalchemy.orm import Session

from adapters import mail_adapter
from app.config import settings
from app.exceptions import (
    ConflictError,
    UnauthorizedError,
    ServiceValidationError,
)
from domain.enums import UserRole
from domain.models import User
from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
    UpdateUserInfoRequest,
)
from repositories import UserRepository
from services.security import (
    hash_password,
    verify_password,
    create_access_token,
    generate_reset_token,
)

logger = logging.getLogger("nutriplan.auth")


def _utcnow() -> datetime:
    # reset_token_expires is stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuthService:
    """Registration, login, password reset and account settings"""

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(user.id, user.email, user.role.value)

    @staticmethod
    def register(db: Session, data: RegisterRequest) -> Tuple[User, str]:
        """Create a regular user account and return it with an access token"""
        user_repo = UserRepository(db)
        if user_repo.get_by_email(data.email):
            logger.warning(f"register_conflict email={data.email}")
            raise ConflictError("User with this email already exists")

        user = User(
            email=data.email,
            password=hash_password(data.password),
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            role=UserRole.USER,
        )
        user = user_repo.create(user)
        logger.info(f"user_registered user_id={user.id}")
        return user, AuthService.issue_token(user)

    @staticmethod
    def login(db: Session, data: LoginRequest) -> Tuple[User, str]:
        user = UserRepository(db).get_by_email(data.email)
        if not user or not verify_password(data.password, user.password):
            logger.warning(f"login_failed email={data.email}")
            raise UnauthorizedError("Invalid email or password")
        if not user.is_active:
            logger.warning(f"login_inactive user_id={user.id}")
            raise UnauthorizedError("Account is deactivated")

        logger.info(f"user_logged_in user_id={user.id}")
        return user, AuthService.issue_token(user)

    @staticmethod
    def forgot_password(db: Session, email: str) -> None:
        """Store a reset token and mail it when the account exists.

        Callers always answer with the same message so the endpoint does not
        reveal which emails are registered.
        """
        user_repo = UserRepository(db)
        user = user_repo.get_by_email(email)
        if not user:
            logger.info(f"password_reset_unknown_email email={email}")
            return

        user.reset_token = generate_reset_token()
        user.reset_token_expires = _utcnow() + timedelta(
            minutes=settings.password_reset_expires_minutes
        )
        user_repo.update(user)
        logger.info(f"password_reset_requested user_id={user.id}")
        mail_adapter.send_password_reset(user.email, user.first_name, user.reset_token)

    @staticmethod
    def reset_password(db: Session, data: ResetPasswordRequest) -> None:
        user_repo = UserRepository(db)
        user = user_repo.get_by_reset_token(data.token)
        if (
            not user
            or not user.reset_token_expires
            or user.reset_token_expires < _utcnow()
        ):
            raise ServiceValidationError("Invalid or expired reset token")

        user.password = hash_password(data.password)
        user.reset_token = None
        user.reset_token_expires = None
        user_repo.update(user)
        logger.info(f"password_reset user_id={user.id}")

    @staticmethod
    def change_password(db: Session, user: User, data: ChangePasswordRequest) -> None:
        if not verify_password(data.current_password, user.password):
            raise ServiceValidationError("Current password is incorrect")
        user.password = hash_password(data.new_password)
        UserRepository(db).update(user)
        logger.info(f"password_changed user_id={user.id}")

    @staticmethod
    def update_user_info(db: Session, user: User, data: UpdateUserInfoRequest) -> User:
        user_repo = UserRepository(db)
        if data.email and data.email != user.email:
            existing = user_repo.get_by_email(data.email)
            if existing and existing.id != user.id:
                raise ConflictError("Email is already in use by another account")
            user.email = data.email
        if data.first_name is not None:
            user.first_name = data.first_name.strip()
        if data.last_name is not None:
            user.last_name = data.last_name.strip()
        user = user_repo.update(user)
        logger.info(f"user_info_updated user_id={user.id}")
        return user

    @staticmethod
    def get_active_user(db: Session, user_id: int) -> User:
        """Resolve a token subject to an active account"""
        user = UserRepository(db).get_by_id(user_id)
        if not user or not user.is_active:
            raise UnauthorizedError("User not found or inactive")
        return user

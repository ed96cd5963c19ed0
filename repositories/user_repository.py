"""
User Repository - Data access layer for accounts, profiles and weight logs
"""

from typing import Optional, List, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository, paginate
from domain.models import User, UserProfile, WeightLog
from domain.enums import UserRole


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    conflict_message = "User with this email already exists"

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (stored lower-cased)"""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def get_by_reset_token(self, token: str) -> Optional[User]:
        return self.db.query(User).filter(User.reset_token == token).first()

    def search(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[User], int]:
        """Admin user listing, newest first"""
        query = self.db.query(User)
        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(
                    User.email.ilike(like),
                    User.first_name.ilike(like),
                    User.last_name.ilike(like),
                )
            )
        if role is not None:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        return paginate(query.order_by(User.created_at.desc(), User.id.desc()), page, limit)

    def recent(self, limit: int = 5) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).limit(limit).all()


class ProfileRepository(BaseRepository[UserProfile]):
    """Repository for user profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, UserProfile)

    def get_by_user_id(self, user_id: int) -> Optional[UserProfile]:
        """Get profile for a user"""
        return self.db.query(UserProfile).filter(UserProfile.user_id == user_id).first()

    def upsert(self, user_id: int, **kwargs) -> UserProfile:
        """Create or update profile (flushes, caller commits)"""
        profile = self.get_by_user_id(user_id)
        if profile:
            for key, value in kwargs.items():
                if hasattr(profile, key):
                    setattr(profile, key, value)
        else:
            profile = UserProfile(user_id=user_id, **kwargs)
            self.db.add(profile)
        self.db.flush()
        return profile


class WeightLogRepository(BaseRepository[WeightLog]):
    def __init__(self, db: Session):
        super().__init__(db, WeightLog)

    def history(self, user_id: int) -> List[WeightLog]:
        """All measurements, oldest first"""
        return (
            self.db.query(WeightLog)
            .filter(WeightLog.user_id == user_id)
            .order_by(WeightLog.logged_on.asc(), WeightLog.id.asc())
            .all()
        )

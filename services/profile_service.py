from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import User, UserProfile
from domain.schemas.auth_schemas import ProfileUpdateRequest
from repositories import ProfileRepository
from app.exceptions import ServiceValidationError

logger = logging.getLogger("nutriplan.profile")


class ProfileService:
    """Business logic for body metrics and dietary settings"""

    @staticmethod
    def get_profile(db: Session, user_id: int) -> Optional[UserProfile]:
        """Return the user's profile, or None when never filled in"""
        profile = ProfileRepository(db).get_by_user_id(user_id)
        if profile:
            logger.info(f"profile_fetched user_id={user_id}")
        else:
            logger.info(f"profile_missing user_id={user_id}")
        return profile

    @staticmethod
    def upsert_profile(
        db: Session, user: User, profile_data: ProfileUpdateRequest
    ) -> UserProfile:
        """
        Create or update the profile with the fields present in the request.
        Lists (dietary preferences, allergies) are replaced wholesale.
        """
        try:
            kwargs = profile_data.model_dump(exclude_unset=True)
            profile = ProfileRepository(db).upsert(user.id, **kwargs)
            db.commit()
            db.refresh(profile)

            logger.info(
                f"profile_upserted user_id={user.id} "
                f"fields={','.join(sorted(kwargs)) or '-'}"
            )
            return profile
        except IntegrityError as e:
            db.rollback()
            logger.error(f"profile_upsert_failed user_id={user.id} error={str(e)}")
            raise ServiceValidationError(
                "Database integrity error during profile update"
            )

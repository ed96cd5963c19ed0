"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from typing import Optional
from domain.models import User, UserProfile, WeightLog
from domain.schemas.auth_schemas import UserResponse, ProfileResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: User) -> UserResponse:
        """
        Convert User ORM model to UserResponse DTO.

        Args:
            user: User ORM instance

        Returns:
            UserResponse DTO without the password hash or reset token
        """
        return UserResponse.model_validate(user)

    @staticmethod
    def profile_to_response(profile: Optional[UserProfile]) -> Optional[ProfileResponse]:
        """Profile DTO with JSON list columns decoded; None when no profile exists."""
        if profile is None:
            return None
        return ProfileResponse.model_validate(profile)

    @staticmethod
    def to_auth_payload(user: User, token: str) -> dict:
        return {"user": UserMapper.to_response(user), "token": token}

    @staticmethod
    def to_admin_summary(user: User) -> dict:
        data = UserMapper.to_response(user).model_dump()
        data["full_name"] = user.full_name
        return data

    @staticmethod
    def weight_log_to_dict(log: WeightLog) -> dict:
        return {
            "id": log.id,
            "weight": log.weight,
            "logged_on": log.logged_on,
            "notes": log.notes,
        }

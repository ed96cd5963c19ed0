from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime, date

from domain.enums import UserRole, Gender, GoalType, ActivityLevel


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower().strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower().strip()


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=128)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class UpdateUserInfoRequest(BaseModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower().strip() if v else v


class ProfileUpdateRequest(BaseModel):
    """Partial update of body metrics and dietary settings."""

    age: Optional[int] = Field(None, ge=1, le=120)
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(None, ge=20, le=300)
    height: Optional[float] = Field(None, ge=100, le=250)
    target_weight: Optional[float] = Field(None, ge=20, le=300)
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[GoalType] = None
    dietary_preferences: Optional[List[str]] = None
    allergies: Optional[List[str]] = None
    medical_conditions: Optional[str] = Field(None, max_length=2000)
    phone: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None

    @field_validator("dietary_preferences", "allergies")
    def normalize_tags(cls, v):
        if v is None:
            return v
        return [tag.lower().strip() for tag in v if tag and tag.strip()]


class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    email_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    age: Optional[int] = None
    gender: Optional[Gender] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    target_weight: Optional[float] = None
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[GoalType] = None
    dietary_preferences: List[str] = []
    allergies: List[str] = []
    medical_conditions: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("dietary_preferences", "allergies", mode="before")
    def none_to_list(cls, v):
        return v or []


class AuthResponse(BaseModel):
    user: UserResponse
    token: str

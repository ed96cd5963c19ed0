"""Authentication and account routes"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.mappers import UserMapper
from domain.models import User
from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
    UpdateUserInfoRequest,
    ProfileUpdateRequest,
)
from services.auth_service import AuthService
from services.profile_service import ProfileService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("nutriplan.api.auth")

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent"


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    user, token = AuthService.register(db, body)
    return success_response(
        UserMapper.to_auth_payload(user, token), "User registered successfully"
    )


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user, token = AuthService.login(db, body)
    return success_response(UserMapper.to_auth_payload(user, token), "Login successful")


@router.post("/forgot-password")
def forgot_password(body: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Same answer whether or not the email is registered"""
    AuthService.forgot_password(db, body.email.lower())
    return success_response(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password")
def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    AuthService.reset_password(db, body)
    return success_response(message="Password has been reset successfully")


@router.get("/profile")
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = ProfileService.get_profile(db, user.id)
    return success_response(
        {
            "user": UserMapper.to_response(user),
            "profile": UserMapper.profile_to_response(profile),
        }
    )


@router.put("/profile")
def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    profile = ProfileService.upsert_profile(db, user, body)
    return success_response(
        UserMapper.profile_to_response(profile), "Profile updated successfully"
    )


@router.put("/user-info")
def update_user_info(
    body: UpdateUserInfoRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    updated = AuthService.update_user_info(db, user, body)
    return success_response(
        UserMapper.to_response(updated), "User information updated successfully"
    )


@router.put("/change-password")
def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    AuthService.change_password(db, user, body)
    return success_response(message="Password changed successfully")


@router.post("/logout")
def logout(user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy"""
    logger.info(f"user_logged_out user_id={user.id}")
    return success_response(message="Logged out successfully")

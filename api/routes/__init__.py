"""API routes package"""

from . import (
    health,
    auth,
    recipes,
    meal_plans,
    suggestions,
    user_suggestions,
    progress,
    admin,
    admin_suggestions,
    admin_user_suggestions,
)

__all__ = [
    "health",
    "auth",
    "recipes",
    "meal_plans",
    "suggestions",
    "user_suggestions",
    "progress",
    "admin",
    "admin_suggestions",
    "admin_user_suggestions",
]

"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.recipe_service import RecipeService
from services.meal_plan_service import MealPlanService
from services.ai_service import AIService
from services.suggestion_service import SuggestionService
from services.user_suggestion_service import UserSuggestionService
from services.progress_service import ProgressService
from services.admin_service import AdminService
from services.admin_suggestion_service import (
    AdminSuggestionService,
    AdminUserSuggestionService,
)

# Note: security contains password and token helpers, not a class

__all__ = [
    "AuthService",
    "ProfileService",
    "RecipeService",
    "MealPlanService",
    "AIService",
    "SuggestionService",
    "UserSuggestionService",
    "ProgressService",
    "AdminService",
    "AdminSuggestionService",
    "AdminUserSuggestionService",
]

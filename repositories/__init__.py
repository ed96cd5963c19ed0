"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, paginate
from repositories.user_repository import (
    UserRepository,
    ProfileRepository,
    WeightLogRepository,
)
from repositories.recipe_repository import (
    RecipeRepository,
    ReviewRepository,
    LikeRepository,
)
from repositories.ingredient_repository import IngredientRepository, CategoryRepository
from repositories.meal_plan_repository import MealPlanRepository, GroceryListRepository
from repositories.suggestion_repository import (
    SuggestionRepository,
    MealSuggestionRepository,
    RecipeSuggestionRepository,
    AdminUserSuggestionRepository,
    WeeklySuggestionRepository,
)
from repositories.ai_log_repository import AILogRepository

__all__ = [
    "BaseRepository",
    "paginate",
    "UserRepository",
    "ProfileRepository",
    "WeightLogRepository",
    "RecipeRepository",
    "ReviewRepository",
    "LikeRepository",
    "IngredientRepository",
    "CategoryRepository",
    "MealPlanRepository",
    "GroceryListRepository",
    "SuggestionRepository",
    "MealSuggestionRepository",
    "RecipeSuggestionRepository",
    "AdminUserSuggestionRepository",
    "WeeklySuggestionRepository",
    "AILogRepository",
]

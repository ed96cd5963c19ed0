"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    drop_database,
    get_db_session,
)
from domain.models.user import User, UserProfile, WeightLog
from domain.models.ingredient import FoodCategory, Ingredient
from domain.models.recipe import Recipe, RecipeIngredient, RecipeReview, RecipeLike
from domain.models.meal_plan import (
    MealPlan,
    MealPlanItem,
    GroceryList,
    GroceryListItem,
)
from domain.models.ai_log import AIAnalysisLog
from domain.models.suggestion import (
    Suggestion,
    SuggestionInteraction,
    MealSuggestion,
    RecipeSuggestion,
    MealSuggestionInteraction,
    RecipeSuggestionInteraction,
    AdminUserSuggestion,
    WeeklyMealSuggestion,
    WeeklyMealSuggestionItem,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "drop_database",
    "get_db_session",
    # User models
    "User",
    "UserProfile",
    "WeightLog",
    # Ingredient models
    "FoodCategory",
    "Ingredient",
    # Recipe models
    "Recipe",
    "RecipeIngredient",
    "RecipeReview",
    "RecipeLike",
    # Meal plan models
    "MealPlan",
    "MealPlanItem",
    "GroceryList",
    "GroceryListItem",
    # AI audit
    "AIAnalysisLog",
    # Suggestion models
    "Suggestion",
    "SuggestionInteraction",
    "MealSuggestion",
    "RecipeSuggestion",
    "MealSuggestionInteraction",
    "RecipeSuggestionInteraction",
    "AdminUserSuggestion",
    "WeeklyMealSuggestion",
    "WeeklyMealSuggestionItem",
]

"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.recipe_mapper import RecipeMapper
from domain.mappers.meal_plan_mapper import MealPlanMapper
from domain.mappers.suggestion_mapper import SuggestionMapper
from domain.mappers.admin_mapper import AdminMapper

__all__ = [
    "UserMapper",
    "RecipeMapper",
    "MealPlanMapper",
    "SuggestionMapper",
    "AdminMapper",
]

"""
Admin domain mappers: catalogue rows and AI audit entries.
"""

from typing import Optional

from domain.models import FoodCategory, Ingredient, AIAnalysisLog

_NUTRITION_COLUMNS = (
    "calories_per_100g",
    "protein_per_100g",
    "carbs_per_100g",
    "fat_per_100g",
    "fiber_per_100g",
    "sugar_per_100g",
    "sodium_per_100g",
)


class AdminMapper:
    @staticmethod
    def category_to_dict(category: FoodCategory, ingredient_count: Optional[int] = None) -> dict:
        data = {
            "id": category.id,
            "name": category.name,
            "description": category.description,
            "color": category.color,
            "icon": category.icon,
            "created_at": category.created_at,
            "updated_at": category.updated_at,
        }
        if ingredient_count is not None:
            data["ingredient_count"] = ingredient_count
        return data

    @staticmethod
    def ingredient_to_dict(ingredient: Ingredient) -> dict:
        data = {
            "id": ingredient.id,
            "name": ingredient.name,
            "category_id": ingredient.category_id,
            "category_name": ingredient.category.name if ingredient.category else None,
            "vitamins": ingredient.vitamins or {},
            "allergens": ingredient.allergens or [],
            "image_url": ingredient.image_url,
            "created_at": ingredient.created_at,
            "updated_at": ingredient.updated_at,
        }
        data.update({column: getattr(ingredient, column) for column in _NUTRITION_COLUMNS})
        return data

    @staticmethod
    def ai_log_to_dict(log: AIAnalysisLog) -> dict:
        """Audit entry with the caller's name and email when the user still exists."""
        return {
            "id": log.id,
            "user_id": log.user_id,
            "user_name": log.user.full_name if log.user else None,
            "user_email": log.user.email if log.user else None,
            "analysis_type": log.analysis_type,
            "prompt": log.prompt,
            "response": log.response,
            "tokens_used": log.tokens_used,
            "processing_time_ms": log.processing_time_ms,
            "used_fallback": log.used_fallback,
            "created_at": log.created_at,
        }

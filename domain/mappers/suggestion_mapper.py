"""
Suggestion domain mappers.
"""

from domain.enums import VoteType
from domain.mappers.meal_plan_mapper import ordered_items
from domain.models import (
    Suggestion,
    MealSuggestion,
    RecipeSuggestion,
    AdminUserSuggestion,
    WeeklyMealSuggestion,
    WeeklyMealSuggestionItem,
)

_CURATED_COLUMNS = (
    "id",
    "title",
    "description",
    "cuisine_type",
    "difficulty",
    "prep_time",
    "cook_time",
    "calories_per_serving",
    "protein_per_serving",
    "carbs_per_serving",
    "fat_per_serving",
    "fiber_per_serving",
    "sugar_per_serving",
    "sodium_per_serving",
    "image_url",
    "instructions",
    "tips",
    "is_active",
    "is_featured",
    "view_count",
    "like_count",
    "created_by",
    "created_at",
    "updated_at",
)


class SuggestionMapper:
    """Mapper for every suggestion family."""

    @staticmethod
    def to_dict(suggestion: Suggestion) -> dict:
        """User-authored suggestion with vote tallies."""
        votes = suggestion.interactions
        upvotes = sum(1 for v in votes if v.interaction_type == VoteType.UPVOTE)
        user = suggestion.user
        return {
            "id": suggestion.id,
            "user_id": suggestion.user_id,
            "suggestion_type": suggestion.suggestion_type,
            "title": suggestion.title,
            "description": suggestion.description,
            "content": suggestion.content,
            "status": suggestion.status,
            "admin_response": suggestion.admin_response,
            "created_at": suggestion.created_at,
            "updated_at": suggestion.updated_at,
            "first_name": user.first_name if user else None,
            "last_name": user.last_name if user else None,
            "interaction_count": len(votes),
            "upvotes": upvotes,
            "downvotes": len(votes) - upvotes,
        }

    @staticmethod
    def curated_to_dict(suggestion) -> dict:
        """Meal or recipe suggestion row."""
        data = {column: getattr(suggestion, column) for column in _CURATED_COLUMNS}
        data["dietary_tags"] = suggestion.dietary_tags or []
        data["ingredients"] = suggestion.ingredients or []
        if isinstance(suggestion, MealSuggestion):
            data["meal_type"] = suggestion.meal_type
        elif isinstance(suggestion, RecipeSuggestion):
            data["servings"] = suggestion.servings
            data["video_url"] = suggestion.video_url
            data["nutrition_notes"] = suggestion.nutrition_notes
        return data

    @staticmethod
    def admin_user_suggestion_to_dict(row: AdminUserSuggestion) -> dict:
        linked = row.meal_suggestion or row.recipe_suggestion
        return {
            "id": row.id,
            "user_id": row.user_id,
            "suggestion_type": row.suggestion_type,
            "meal_suggestion_id": row.meal_suggestion_id,
            "recipe_suggestion_id": row.recipe_suggestion_id,
            "message": row.message,
            "admin_notes": row.admin_notes,
            "is_read": row.is_read,
            "is_accepted": row.is_accepted,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
            "user_name": row.user.full_name if row.user else None,
            "user_email": row.user.email if row.user else None,
            "admin_name": row.admin.full_name if row.admin else None,
            "suggestion": SuggestionMapper.curated_to_dict(linked) if linked else None,
        }

    @staticmethod
    def weekly_item_to_dict(item: WeeklyMealSuggestionItem) -> dict:
        linked = item.meal_suggestion or item.recipe_suggestion
        return {
            "id": item.id,
            "meal_type": item.meal_type,
            "day_of_week": item.day_of_week,
            "meal_suggestion_id": item.meal_suggestion_id,
            "recipe_suggestion_id": item.recipe_suggestion_id,
            "custom_meal_name": item.custom_meal_name,
            "custom_ingredients": item.custom_ingredients,
            "custom_nutrition": item.custom_nutrition,
            "notes": item.notes,
            "suggestion_title": linked.title if linked else None,
        }

    @staticmethod
    def weekly_to_dict(weekly: WeeklyMealSuggestion, include_items: bool = True) -> dict:
        data = {
            "id": weekly.id,
            "user_id": weekly.user_id,
            "week_start_date": weekly.week_start_date,
            "week_end_date": weekly.week_end_date,
            "title": weekly.title,
            "description": weekly.description,
            "total_calories": weekly.total_calories,
            "total_protein": weekly.total_protein,
            "total_carbs": weekly.total_carbs,
            "total_fat": weekly.total_fat,
            "message": weekly.message,
            "admin_notes": weekly.admin_notes,
            "is_read": weekly.is_read,
            "is_accepted": weekly.is_accepted,
            "created_by": weekly.created_by,
            "created_at": weekly.created_at,
            "updated_at": weekly.updated_at,
            "user_name": weekly.user.full_name if weekly.user else None,
            "admin_name": weekly.admin.full_name if weekly.admin else None,
            "item_count": len(weekly.items),
        }
        if include_items:
            data["items"] = [
                SuggestionMapper.weekly_item_to_dict(i)
                for i in ordered_items(weekly.items)
            ]
        return data

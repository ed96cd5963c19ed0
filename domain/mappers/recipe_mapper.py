"""
Recipe domain mappers.
"""

from domain.models import Recipe, RecipeReview

_RECIPE_COLUMNS = (
    "id",
    "title",
    "description",
    "instructions",
    "prep_time",
    "cook_time",
    "servings",
    "difficulty",
    "cuisine_type",
    "image_url",
    "video_url",
    "calories_per_serving",
    "protein_per_serving",
    "carbs_per_serving",
    "fat_per_serving",
    "fiber_per_serving",
    "sugar_per_serving",
    "sodium_per_serving",
    "tips",
    "nutrition_notes",
    "created_by",
    "is_approved",
    "is_featured",
    "is_ai_generated",
    "view_count",
    "like_count",
    "avg_rating",
    "created_at",
    "updated_at",
)


class RecipeMapper:
    """Mapper for recipe transformations."""

    @staticmethod
    def to_summary(recipe: Recipe) -> dict:
        """
        Recipe row plus creator name, review count and simplified ingredient lines.

        Args:
            recipe: Recipe ORM instance with creator, ingredients and reviews loaded
        """
        data = {column: getattr(recipe, column) for column in _RECIPE_COLUMNS}
        data["dietary_tags"] = recipe.dietary_tags or []
        data["avg_rating"] = recipe.avg_rating or 0
        data["creator_name"] = recipe.creator.full_name if recipe.creator else None
        data["review_count"] = len(recipe.reviews)
        data["ingredients"] = [
            {"name": line.ingredient_name, "amount": line.amount, "unit": line.unit}
            for line in recipe.ingredients
        ]
        return data

    @staticmethod
    def to_detail(recipe: Recipe) -> dict:
        """Summary plus full ingredient lines and reviews, newest first."""
        data = RecipeMapper.to_summary(recipe)
        data["ingredients"] = [
            {
                "id": line.id,
                "ingredient_id": line.ingredient_id,
                "name": line.ingredient_name,
                "amount": line.amount,
                "unit": line.unit,
                "notes": line.notes,
            }
            for line in recipe.ingredients
        ]
        data["reviews"] = [RecipeMapper.review_to_dict(r) for r in recipe.reviews]
        return data

    @staticmethod
    def review_to_dict(review: RecipeReview) -> dict:
        user = review.user
        return {
            "id": review.id,
            "user_id": review.user_id,
            "first_name": user.first_name if user else None,
            "last_name": user.last_name if user else None,
            "rating": review.rating,
            "comment": review.comment,
            "created_at": review.created_at,
        }

    @staticmethod
    def to_ai_context(recipe: Recipe) -> dict:
        """Compact description offered to the generative model."""
        return {
            "id": recipe.id,
            "title": recipe.title,
            "calories": recipe.calories_per_serving,
            "protein": recipe.protein_per_serving,
            "carbs": recipe.carbs_per_serving,
            "fat": recipe.fat_per_serving,
            "cuisine_type": recipe.cuisine_type,
            "difficulty": recipe.difficulty.value if recipe.difficulty else None,
            "dietary_tags": recipe.dietary_tags or [],
        }

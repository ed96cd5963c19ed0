"""
Meal plan domain mappers.
Items are ordered monday..sunday, then breakfast, lunch, dinner, snack.
"""

from typing import List

from domain.enums import DAY_ORDER, MEAL_TYPE_ORDER
from domain.models import MealPlan, MealPlanItem, GroceryList


def _slot_key(item):
    return (
        DAY_ORDER.get(item.day_of_week.value, 99),
        MEAL_TYPE_ORDER.get(item.meal_type.value, 99),
        item.id or 0,
    )


def ordered_items(items) -> list:
    return sorted(items, key=_slot_key)


class MealPlanMapper:
    """Mapper for meal plan transformations."""

    @staticmethod
    def item_to_dict(item: MealPlanItem) -> dict:
        recipe = item.recipe
        return {
            "id": item.id,
            "recipe_id": item.recipe_id,
            "meal_type": item.meal_type,
            "day_of_week": item.day_of_week,
            "custom_meal_name": item.custom_meal_name,
            "custom_ingredients": item.custom_ingredients,
            "custom_nutrition": item.custom_nutrition,
            "notes": item.notes,
            "recipe_title": recipe.title if recipe else None,
            "recipe_image": recipe.image_url if recipe else None,
            "calories_per_serving": recipe.calories_per_serving if recipe else None,
            "protein_per_serving": recipe.protein_per_serving if recipe else None,
            "carbs_per_serving": recipe.carbs_per_serving if recipe else None,
            "fat_per_serving": recipe.fat_per_serving if recipe else None,
        }

    @staticmethod
    def to_dict(plan: MealPlan, include_owner: bool = False) -> dict:
        """
        Convert a MealPlan with items (and their recipes) loaded.

        Args:
            plan: MealPlan ORM instance
            include_owner: add creator_name and owner email for shared/admin listings
        """
        data = {
            "id": plan.id,
            "user_id": plan.user_id,
            "name": plan.name,
            "description": plan.description,
            "start_date": plan.start_date,
            "end_date": plan.end_date,
            "total_calories": plan.total_calories,
            "total_protein": plan.total_protein,
            "total_carbs": plan.total_carbs,
            "total_fat": plan.total_fat,
            "is_ai_generated": plan.is_ai_generated,
            "is_approved": plan.is_approved,
            "created_at": plan.created_at,
            "updated_at": plan.updated_at,
            "meals": [
                MealPlanMapper.item_to_dict(i) for i in ordered_items(plan.items)
            ],
        }
        if include_owner and plan.user is not None:
            data["creator_name"] = plan.user.full_name
            data["user_email"] = plan.user.email
        return data

    @staticmethod
    def grocery_list_to_dict(grocery_list: GroceryList) -> dict:
        items: List[dict] = [
            {
                "id": item.id,
                "ingredient_id": item.ingredient_id,
                "name": (
                    item.ingredient.name if item.ingredient else item.custom_item_name
                ),
                "quantity": item.quantity,
                "unit": item.unit,
                "category_id": item.category_id,
                "is_checked": item.is_checked,
                "notes": item.notes,
            }
            for item in grocery_list.items
        ]
        return {
            "id": grocery_list.id,
            "name": grocery_list.name,
            "meal_plan_id": grocery_list.meal_plan_id,
            "item_count": len(items),
            "items": items,
        }

"""
Schemas the generative model's JSON output must satisfy.

A response that fails validation is rejected as a whole; nothing is repaired.
Unknown keys are ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, model_validator

from domain.enums import MealType, DayOfWeek, Difficulty

# JSON numbers only (ints accepted); "1/2" or "2 cups" are rejected rather than coerced
Number = StrictFloat


class _Generated(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GeneratedIngredient(_Generated):
    name: str = Field(..., min_length=1, max_length=150)
    amount: Number = Field(..., gt=0)
    unit: str = Field("", max_length=50)
    notes: Optional[str] = None


class GeneratedNutrition(_Generated):
    calories: Number = Field(0, ge=0)
    protein: Number = Field(0, ge=0)
    carbs: Number = Field(0, ge=0)
    fat: Number = Field(0, ge=0)


class GeneratedMeal(_Generated):
    day_of_week: DayOfWeek
    meal_type: MealType
    recipe_id: Optional[StrictInt] = None
    custom_meal_name: Optional[str] = Field(None, max_length=255)
    custom_ingredients: Optional[List[GeneratedIngredient]] = None
    custom_nutrition: Optional[GeneratedNutrition] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_recipe_or_custom_meal(self):
        if self.recipe_id is None and not self.custom_meal_name:
            raise ValueError("meal has neither recipe_id nor custom_meal_name")
        return self


class GeneratedMealPlan(_Generated):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    meals: List[GeneratedMeal] = Field(..., min_length=1)
    total_calories: Optional[Number] = Field(None, ge=0)
    total_protein: Optional[Number] = Field(None, ge=0)
    total_carbs: Optional[Number] = Field(None, ge=0)
    total_fat: Optional[Number] = Field(None, ge=0)


class GeneratedRecipe(_Generated):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    instructions: List[str] = Field(..., min_length=1)
    ingredients: List[GeneratedIngredient] = Field(..., min_length=1)
    prep_time: Optional[StrictInt] = Field(None, ge=0)
    cook_time: Optional[StrictInt] = Field(None, ge=0)
    servings: Optional[StrictInt] = Field(None, ge=1)
    difficulty: Optional[Difficulty] = None
    cuisine_type: Optional[str] = Field(None, max_length=100)
    dietary_tags: List[str] = []
    calories_per_serving: Optional[Number] = Field(None, ge=0)
    protein_per_serving: Optional[Number] = Field(None, ge=0)
    carbs_per_serving: Optional[Number] = Field(None, ge=0)
    fat_per_serving: Optional[Number] = Field(None, ge=0)
    fiber_per_serving: Optional[Number] = Field(None, ge=0)
    sugar_per_serving: Optional[Number] = Field(None, ge=0)
    sodium_per_serving: Optional[Number] = Field(None, ge=0)
    tips: Optional[str] = None
    nutrition_notes: Optional[str] = None


class GeneratedWeeklyMeal(_Generated):
    meal_type: MealType
    recipe_id: Optional[StrictInt] = None
    custom_meal_name: Optional[str] = Field(None, max_length=255)
    calories: Optional[Number] = Field(None, ge=0)
    protein: Optional[Number] = Field(None, ge=0)
    carbs: Optional[Number] = Field(None, ge=0)
    fat: Optional[Number] = Field(None, ge=0)
    ingredients: Optional[List[GeneratedIngredient]] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_recipe_or_custom_meal(self):
        if self.recipe_id is None and not self.custom_meal_name:
            raise ValueError("meal has neither recipe_id nor custom_meal_name")
        return self


class GeneratedWeeklyDay(_Generated):
    day_of_week: DayOfWeek
    meals: List[GeneratedWeeklyMeal] = Field(..., min_length=1)


class GeneratedWeeklyPlan(_Generated):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    days: List[GeneratedWeeklyDay] = Field(..., min_length=1)
    total_calories: Optional[Number] = Field(None, ge=0)
    total_protein: Optional[Number] = Field(None, ge=0)
    total_carbs: Optional[Number] = Field(None, ge=0)
    total_fat: Optional[Number] = Field(None, ge=0)

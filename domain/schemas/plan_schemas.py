from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from domain.enums import MealType, DayOfWeek, CookingSkill, Difficulty
from domain.schemas.recipe_schemas import AIUserProfile


class MealItemIn(BaseModel):
    meal_type: MealType
    day_of_week: DayOfWeek
    recipe_id: Optional[int] = Field(None, ge=1)
    custom_meal_name: Optional[str] = Field(None, min_length=1, max_length=255)
    custom_ingredients: Optional[List[Dict[str, Any]]] = None
    custom_nutrition: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_recipe_or_custom_meal(self):
        if self.recipe_id is None and not self.custom_meal_name:
            raise ValueError("Each meal needs a recipe_id or a custom_meal_name")
        return self


class _PlanTotals(BaseModel):
    total_calories: Optional[float] = Field(None, ge=0)
    total_protein: Optional[float] = Field(None, ge=0)
    total_carbs: Optional[float] = Field(None, ge=0)
    total_fat: Optional[float] = Field(None, ge=0)


class MealPlanCreate(_PlanTotals):
    name: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    start_date: date
    end_date: date
    meals: List[MealItemIn] = Field(..., min_length=1)


class MealPlanUpdate(_PlanTotals):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    meals: Optional[List[MealItemIn]] = None


class MealPlanPreferences(BaseModel):
    duration_days: Optional[int] = Field(None, ge=1, le=30)
    meals_per_day: Optional[int] = Field(None, ge=1, le=6)
    cuisine_preferences: List[str] = []
    meal_preferences: List[str] = []
    budget_constraints: Optional[str] = None
    cooking_skill_level: Optional[CookingSkill] = None
    difficulty_level: Optional[Difficulty] = None
    calorie_target: Optional[int] = Field(None, ge=500, le=5000)


class AIMealPlanRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    user_profile: AIUserProfile = Field(default_factory=AIUserProfile)
    start_date: date
    end_date: date
    preferences: MealPlanPreferences = Field(default_factory=MealPlanPreferences)

    @model_validator(mode="after")
    def check_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must be on or after start date")
        return self


class AIWeeklyMealPlanRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    user_profile: AIUserProfile = Field(default_factory=AIUserProfile)
    week_start_date: date
    preferences: MealPlanPreferences = Field(default_factory=MealPlanPreferences)


class GroceryListRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)


class CopyMealPlanRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be on or after start date")
        return self


class MealPlanApproval(BaseModel):
    is_approved: bool

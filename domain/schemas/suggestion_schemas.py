from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.enums import (
    SuggestionType,
    SuggestionStatus,
    VoteType,
    InteractionType,
    MealType,
    DayOfWeek,
    Difficulty,
)


# ============================================================================
# User-authored suggestions
# ============================================================================


class SuggestionCreate(BaseModel):
    suggestion_type: SuggestionType
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None


class VoteRequest(BaseModel):
    interaction_type: VoteType


class SuggestionStatusUpdate(BaseModel):
    status: SuggestionStatus
    admin_response: Optional[str] = None


# ============================================================================
# Admin-curated meal and recipe suggestions
# ============================================================================


class InteractionRequest(BaseModel):
    interaction_type: InteractionType


class SuggestionIngredient(BaseModel):
    name: str = Field(..., min_length=1)
    amount: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None


class _CuratedFields(BaseModel):
    description: Optional[str] = None
    cuisine_type: Optional[str] = Field(None, max_length=100)
    dietary_tags: Optional[List[str]] = None
    difficulty: Optional[Difficulty] = None
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    calories_per_serving: Optional[float] = Field(None, ge=0)
    protein_per_serving: Optional[float] = Field(None, ge=0)
    carbs_per_serving: Optional[float] = Field(None, ge=0)
    fat_per_serving: Optional[float] = Field(None, ge=0)
    fiber_per_serving: Optional[float] = Field(None, ge=0)
    sugar_per_serving: Optional[float] = Field(None, ge=0)
    sodium_per_serving: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    ingredients: Optional[List[SuggestionIngredient]] = None
    instructions: Optional[str] = None
    tips: Optional[str] = None
    is_featured: Optional[bool] = None


class MealSuggestionCreate(_CuratedFields):
    title: str = Field(..., min_length=3, max_length=255)
    meal_type: MealType


class MealSuggestionUpdate(_CuratedFields):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    meal_type: Optional[MealType] = None
    is_active: Optional[bool] = None


class RecipeSuggestionCreate(_CuratedFields):
    title: str = Field(..., min_length=3, max_length=255)
    servings: Optional[int] = Field(None, ge=1)
    video_url: Optional[str] = Field(None, max_length=500)
    nutrition_notes: Optional[str] = None


class RecipeSuggestionUpdate(_CuratedFields):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    servings: Optional[int] = Field(None, ge=1)
    video_url: Optional[str] = Field(None, max_length=500)
    nutrition_notes: Optional[str] = None
    is_active: Optional[bool] = None


# ============================================================================
# Suggestions sent by an admin to one user
# ============================================================================


class SendMealSuggestion(BaseModel):
    user_id: int = Field(..., ge=1)
    meal_suggestion_id: int = Field(..., ge=1)
    message: Optional[str] = None
    admin_notes: Optional[str] = None


class SendRecipeSuggestion(BaseModel):
    user_id: int = Field(..., ge=1)
    recipe_suggestion_id: int = Field(..., ge=1)
    message: Optional[str] = None
    admin_notes: Optional[str] = None


class WeeklySuggestionItemIn(BaseModel):
    meal_type: MealType
    day_of_week: DayOfWeek
    meal_suggestion_id: Optional[int] = Field(None, ge=1)
    recipe_suggestion_id: Optional[int] = Field(None, ge=1)
    custom_meal_name: Optional[str] = Field(None, max_length=255)
    custom_ingredients: Optional[List[Dict[str, Any]]] = None
    custom_nutrition: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None


class WeeklySuggestionCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    week_start_date: date
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    total_calories: Optional[float] = Field(None, ge=0)
    total_protein: Optional[float] = Field(None, ge=0)
    total_carbs: Optional[float] = Field(None, ge=0)
    total_fat: Optional[float] = Field(None, ge=0)
    message: Optional[str] = None
    admin_notes: Optional[str] = None
    items: List[WeeklySuggestionItemIn] = []


class SuggestionStatusPatch(BaseModel):
    """Admin-side correction of read/accepted flags."""

    is_read: Optional[bool] = None
    is_accepted: Optional[bool] = None
    admin_notes: Optional[str] = None


class RespondRequest(BaseModel):
    is_accepted: bool

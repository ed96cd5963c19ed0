"""Pydantic schemas for recipe requests."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from domain.enums import Difficulty, Gender, GoalType, ActivityLevel


class AIUserProfile(BaseModel):
    """Profile details forwarded to the generative model."""

    age: Optional[int] = Field(None, ge=1, le=120)
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(None, ge=20, le=300)
    height: Optional[float] = Field(None, ge=100, le=250)
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[GoalType] = None
    dietary_preferences: List[str] = []
    allergies: List[str] = []
    medical_conditions: Optional[str] = None


class RecipeIngredientIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    amount: float = Field(..., ge=0.1)
    unit: str = Field(..., min_length=1, max_length=50)
    notes: Optional[str] = None

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class _RecipeNutritionFields(BaseModel):
    calories_per_serving: Optional[float] = Field(None, ge=0)
    protein_per_serving: Optional[float] = Field(None, ge=0)
    carbs_per_serving: Optional[float] = Field(None, ge=0)
    fat_per_serving: Optional[float] = Field(None, ge=0)
    fiber_per_serving: Optional[float] = Field(None, ge=0)
    sugar_per_serving: Optional[float] = Field(None, ge=0)
    sodium_per_serving: Optional[float] = Field(None, ge=0)


class RecipeCreate(_RecipeNutritionFields):
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    instructions: str = Field(..., min_length=10)
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: int = Field(..., ge=1)
    difficulty: Optional[Difficulty] = None
    cuisine_type: Optional[str] = Field(None, max_length=100)
    dietary_tags: List[str] = []
    image_url: Optional[str] = Field(None, max_length=500)
    video_url: Optional[str] = Field(None, max_length=500)
    tips: Optional[str] = None
    nutrition_notes: Optional[str] = None
    ingredients: List[RecipeIngredientIn] = Field(..., min_length=1)


class RecipeUpdate(_RecipeNutritionFields):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    instructions: Optional[str] = Field(None, min_length=10)
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    difficulty: Optional[Difficulty] = None
    cuisine_type: Optional[str] = Field(None, max_length=100)
    dietary_tags: Optional[List[str]] = None
    image_url: Optional[str] = Field(None, max_length=500)
    video_url: Optional[str] = Field(None, max_length=500)
    tips: Optional[str] = None
    nutrition_notes: Optional[str] = None
    ingredients: Optional[List[RecipeIngredientIn]] = None
    # moderation flags, honoured for admins only
    is_approved: Optional[bool] = None
    is_featured: Optional[bool] = None


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class AIRecipeRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    cuisine_type: Optional[str] = Field(None, max_length=100)
    difficulty: Optional[Difficulty] = None
    dietary_preferences: List[str] = []
    ingredients_available: List[str] = []
    cooking_time: Optional[int] = Field(None, ge=5, le=300)
    servings: Optional[int] = Field(None, ge=1, le=20)
    description: Optional[str] = None
    user_profile: Optional[AIUserProfile] = None

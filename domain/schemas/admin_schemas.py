from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class UserStatusUpdate(BaseModel):
    is_active: bool


class RecipeApproval(BaseModel):
    is_approved: bool
    is_featured: Optional[bool] = None


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=50)

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=50)

    @field_validator("name")
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("Name cannot be null")
        return v.strip()


class _IngredientNutrition(BaseModel):
    calories_per_100g: Optional[float] = Field(None, ge=0)
    protein_per_100g: Optional[float] = Field(None, ge=0)
    carbs_per_100g: Optional[float] = Field(None, ge=0)
    fat_per_100g: Optional[float] = Field(None, ge=0)
    fiber_per_100g: Optional[float] = Field(None, ge=0)
    sugar_per_100g: Optional[float] = Field(None, ge=0)
    sodium_per_100g: Optional[float] = Field(None, ge=0)
    vitamins: Optional[Dict[str, float]] = None
    allergens: Optional[List[str]] = None
    image_url: Optional[str] = Field(None, max_length=500)


class IngredientCreate(_IngredientNutrition):
    name: str = Field(..., min_length=2, max_length=150)
    category_id: Optional[int] = Field(None, ge=1)

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class IngredientUpdate(_IngredientNutrition):
    name: Optional[str] = Field(None, min_length=2, max_length=150)
    category_id: Optional[int] = Field(None, ge=1)

    @field_validator("name")
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("Name cannot be null")
        return v.strip()

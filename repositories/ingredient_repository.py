"""
Ingredient Repository - Data access layer for the ingredient catalogue and food categories
"""

from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository, paginate
from domain.models import Ingredient, FoodCategory, RecipeIngredient


class IngredientRepository(BaseRepository[Ingredient]):
    """Repository for ingredient data access"""

    conflict_message = "Ingredient with this name already exists"

    def __init__(self, db: Session):
        super().__init__(db, Ingredient)

    def get_by_name(self, name: str) -> Optional[Ingredient]:
        """Case-insensitive lookup by name"""
        return (
            self.db.query(Ingredient)
            .filter(func.lower(Ingredient.name) == name.strip().lower())
            .first()
        )

    def get_or_create(self, name: str) -> Ingredient:
        """Find an ingredient by name or add one with empty nutrition (flushes only)"""
        ingredient = self.get_by_name(name)
        if ingredient is None:
            ingredient = Ingredient(name=name.strip())
            self.db.add(ingredient)
            self.db.flush()
        return ingredient

    def search(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> Tuple[List[Ingredient], int]:
        query = self.db.query(Ingredient)
        if search:
            query = query.filter(Ingredient.name.ilike(f"%{search}%"))
        if category_id is not None:
            query = query.filter(Ingredient.category_id == category_id)
        return paginate(query.order_by(Ingredient.name.asc()), page, limit)

    def is_used_in_recipes(self, ingredient_id: int) -> bool:
        return (
            self.db.query(RecipeIngredient.id)
            .filter(RecipeIngredient.ingredient_id == ingredient_id)
            .first()
            is not None
        )


class CategoryRepository(BaseRepository[FoodCategory]):
    """Repository for food categories"""

    conflict_message = "Category with this name already exists"

    def __init__(self, db: Session):
        super().__init__(db, FoodCategory)

    def get_by_name(self, name: str) -> Optional[FoodCategory]:
        return (
            self.db.query(FoodCategory)
            .filter(func.lower(FoodCategory.name) == name.strip().lower())
            .first()
        )

    def list_with_counts(self) -> List[Tuple[FoodCategory, int]]:
        """Categories by name, each with its ingredient count"""
        return (
            self.db.query(FoodCategory, func.count(Ingredient.id))
            .outerjoin(Ingredient, Ingredient.category_id == FoodCategory.id)
            .group_by(FoodCategory.id)
            .order_by(FoodCategory.name.asc())
            .all()
        )

    def has_ingredients(self, category_id: int) -> bool:
        return (
            self.db.query(Ingredient.id)
            .filter(Ingredient.category_id == category_id)
            .first()
            is not None
        )

"""
Recipe Repository - Data access layer for recipes, reviews and likes
"""

from typing import List, Optional, Tuple
from sqlalchemy import or_, func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository, paginate
from domain.models import Recipe, RecipeIngredient, RecipeReview, RecipeLike
from domain.enums import Difficulty


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def _with_details(self):
        return self.db.query(Recipe).options(
            selectinload(Recipe.creator),
            selectinload(Recipe.ingredients),
            selectinload(Recipe.reviews),
        )

    def get_with_details(self, recipe_id: int) -> Optional[Recipe]:
        """Recipe with creator, ingredient lines and reviews loaded"""
        return (
            self._with_details()
            .options(selectinload(Recipe.reviews).selectinload(RecipeReview.user))
            .filter(Recipe.id == recipe_id)
            .first()
        )

    def search(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        is_approved: Optional[bool] = None,
        is_featured: Optional[bool] = None,
        difficulty: Optional[Difficulty] = None,
        cuisine_type: Optional[str] = None,
    ) -> Tuple[List[Recipe], int]:
        """Filtered recipe listing, newest first

        Args:
            search: matched against title and description
            is_approved, is_featured, difficulty, cuisine_type: exact filters

        Returns:
            (recipes on the page, total matching)
        """
        query = self._with_details()
        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(Recipe.title.ilike(like), Recipe.description.ilike(like))
            )
        if is_approved is not None:
            query = query.filter(Recipe.is_approved == is_approved)
        if is_featured is not None:
            query = query.filter(Recipe.is_featured == is_featured)
        if difficulty is not None:
            query = query.filter(Recipe.difficulty == difficulty)
        if cuisine_type:
            query = query.filter(Recipe.cuisine_type == cuisine_type)
        query = query.order_by(Recipe.created_at.desc(), Recipe.id.desc())
        return paginate(query, page, limit)

    def featured(self, limit: int = 10) -> List[Recipe]:
        return (
            self._with_details()
            .filter(Recipe.is_featured.is_(True), Recipe.is_approved.is_(True))
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .limit(limit)
            .all()
        )

    def approved(self) -> List[Recipe]:
        """Every approved recipe, most viewed first"""
        return (
            self._with_details()
            .filter(Recipe.is_approved.is_(True))
            .order_by(Recipe.view_count.desc(), Recipe.id.asc())
            .all()
        )

    def popular(self, limit: int) -> List[Recipe]:
        return (
            self._with_details()
            .filter(Recipe.is_approved.is_(True))
            .order_by(Recipe.view_count.desc(), Recipe.id.asc())
            .limit(limit)
            .all()
        )

    def for_ai_context(self, limit: int) -> List[Recipe]:
        """Approved recipes offered to the model, featured first then by views"""
        return (
            self.db.query(Recipe)
            .filter(Recipe.is_approved.is_(True))
            .order_by(
                Recipe.is_featured.desc(), Recipe.view_count.desc(), Recipe.id.asc()
            )
            .limit(limit)
            .all()
        )

    def pending(self, page: int, limit: int) -> Tuple[List[Recipe], int]:
        query = (
            self._with_details()
            .filter(Recipe.is_approved.is_(False))
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        )
        return paginate(query, page, limit)

    def existing_ids(self, ids: List[int]) -> set:
        if not ids:
            return set()
        rows = self.db.query(Recipe.id).filter(Recipe.id.in_(ids)).all()
        return {row[0] for row in rows}

    def count_by_creator(self, user_id: int, ai_only: bool = False) -> int:
        query = self.db.query(Recipe).filter(Recipe.created_by == user_id)
        if ai_only:
            query = query.filter(Recipe.is_ai_generated.is_(True))
        return query.count()

    def replace_ingredients(self, recipe: Recipe, lines: List[RecipeIngredient]) -> None:
        """Swap the ingredient lines (flushes, caller commits)"""
        recipe.ingredients.clear()
        self.db.flush()
        recipe.ingredients.extend(lines)
        self.db.flush()


class ReviewRepository(BaseRepository[RecipeReview]):
    conflict_message = "You have already reviewed this recipe"

    def __init__(self, db: Session):
        super().__init__(db, RecipeReview)

    def get_for_user(self, recipe_id: int, user_id: int) -> Optional[RecipeReview]:
        return (
            self.db.query(RecipeReview)
            .filter(RecipeReview.recipe_id == recipe_id, RecipeReview.user_id == user_id)
            .first()
        )

    def average_rating(self, recipe_id: int) -> float:
        avg = (
            self.db.query(func.avg(RecipeReview.rating))
            .filter(RecipeReview.recipe_id == recipe_id)
            .scalar()
        )
        return round(float(avg), 2) if avg is not None else 0.0

    def count_for_recipe(self, recipe_id: int) -> int:
        return (
            self.db.query(RecipeReview)
            .filter(RecipeReview.recipe_id == recipe_id)
            .count()
        )


class LikeRepository(BaseRepository[RecipeLike]):
    def __init__(self, db: Session):
        super().__init__(db, RecipeLike)

    def get_for_user(self, recipe_id: int, user_id: int) -> Optional[RecipeLike]:
        return (
            self.db.query(RecipeLike)
            .filter(RecipeLike.recipe_id == recipe_id, RecipeLike.user_id == user_id)
            .first()
        )

"""
Meal Plan Repository - Data access layer for meal plans, their items and grocery lists
"""

from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository, paginate
from domain.models import (
    MealPlan,
    MealPlanItem,
    GroceryList,
    User,
    Recipe,
    RecipeIngredient,
)


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def _with_items(self):
        return self.db.query(MealPlan).options(
            selectinload(MealPlan.items).selectinload(MealPlanItem.recipe),
            selectinload(MealPlan.user),
        )

    def get_with_items(self, plan_id: int) -> Optional[MealPlan]:
        return self._with_items().filter(MealPlan.id == plan_id).first()

    def get_for_grocery_list(self, plan_id: int) -> Optional[MealPlan]:
        """Plan with items, recipes and their ingredient rows loaded"""
        return (
            self.db.query(MealPlan)
            .options(
                selectinload(MealPlan.items)
                .selectinload(MealPlanItem.recipe)
                .selectinload(Recipe.ingredients)
                .selectinload(RecipeIngredient.ingredient)
            )
            .filter(MealPlan.id == plan_id)
            .first()
        )

    def list_for_user(
        self, user_id: int, page: int, limit: int
    ) -> Tuple[List[MealPlan], int]:
        query = (
            self._with_items()
            .filter(MealPlan.user_id == user_id)
            .order_by(MealPlan.created_at.desc(), MealPlan.id.desc())
        )
        return paginate(query, page, limit)

    def all_for_user(self, user_id: int) -> List[MealPlan]:
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.user_id == user_id)
            .order_by(MealPlan.created_at.asc(), MealPlan.id.asc())
            .all()
        )

    def list_approved(self, page: int, limit: int) -> Tuple[List[MealPlan], int]:
        query = (
            self._with_items()
            .filter(MealPlan.is_approved.is_(True))
            .order_by(MealPlan.created_at.desc(), MealPlan.id.desc())
        )
        return paginate(query, page, limit)

    def search_all(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        is_ai_generated: Optional[bool] = None,
        user_id: Optional[int] = None,
    ) -> Tuple[List[MealPlan], int]:
        """Admin listing across every user"""
        query = self._with_items().join(User, MealPlan.user_id == User.id)
        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(
                    MealPlan.name.ilike(like),
                    User.email.ilike(like),
                    User.first_name.ilike(like),
                    User.last_name.ilike(like),
                )
            )
        if is_ai_generated is not None:
            query = query.filter(MealPlan.is_ai_generated == is_ai_generated)
        if user_id is not None:
            query = query.filter(MealPlan.user_id == user_id)
        query = query.order_by(MealPlan.created_at.desc(), MealPlan.id.desc())
        return paginate(query, page, limit)

    def exists_starting_on(self, user_id: int, start: date) -> bool:
        return (
            self.db.query(MealPlan.id)
            .filter(MealPlan.user_id == user_id, MealPlan.start_date == start)
            .first()
            is not None
        )


class GroceryListRepository(BaseRepository[GroceryList]):
    def __init__(self, db: Session):
        super().__init__(db, GroceryList)

    def count_for_user(self, user_id: int) -> int:
        return self.db.query(GroceryList).filter(GroceryList.user_id == user_id).count()

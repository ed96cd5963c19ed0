"""
Suggestion Repositories - user-authored suggestions, curated meal/recipe
suggestions and the suggestions admins send to individual users
"""

from typing import List, Optional, Tuple, Type
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository, paginate
from domain.models import (
    Suggestion,
    SuggestionInteraction,
    MealSuggestion,
    RecipeSuggestion,
    MealSuggestionInteraction,
    RecipeSuggestionInteraction,
    AdminUserSuggestion,
    WeeklyMealSuggestion,
    WeeklyMealSuggestionItem,
)
from domain.enums import (
    SuggestionStatus,
    SuggestionType,
    InteractionType,
    AdminSuggestionKind,
)


class SuggestionRepository(BaseRepository[Suggestion]):
    def __init__(self, db: Session):
        super().__init__(db, Suggestion)

    def _base(self):
        return self.db.query(Suggestion).options(
            selectinload(Suggestion.interactions), selectinload(Suggestion.user)
        )

    def search(
        self,
        page: int,
        limit: int,
        user_id: Optional[int] = None,
        status: Optional[List[SuggestionStatus]] = None,
        suggestion_type: Optional[SuggestionType] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Suggestion], int]:
        query = self._base()
        if user_id is not None:
            query = query.filter(Suggestion.user_id == user_id)
        if status:
            query = query.filter(Suggestion.status.in_(status))
        if suggestion_type is not None:
            query = query.filter(Suggestion.suggestion_type == suggestion_type)
        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(Suggestion.title.ilike(like), Suggestion.description.ilike(like))
            )
        query = query.order_by(Suggestion.created_at.desc(), Suggestion.id.desc())
        return paginate(query, page, limit)

    def get_with_interactions(self, suggestion_id: int) -> Optional[Suggestion]:
        return self._base().filter(Suggestion.id == suggestion_id).first()

    def all_with_interactions(self) -> List[Suggestion]:
        return self._base().all()

    def get_vote(self, suggestion_id: int, user_id: int) -> Optional[SuggestionInteraction]:
        return (
            self.db.query(SuggestionInteraction)
            .filter(
                SuggestionInteraction.suggestion_id == suggestion_id,
                SuggestionInteraction.user_id == user_id,
            )
            .first()
        )


class CuratedSuggestionRepository(BaseRepository):
    """Shared access for meal and recipe suggestions.

    ``interaction_model`` and ``fk_name`` tell the toggle helpers which
    interaction table and column belong to ``model``.
    """

    interaction_model: Type = None
    fk_name: str = None

    def search(
        self,
        page: int,
        limit: int,
        active_only: bool = True,
        search: Optional[str] = None,
        cuisine_type: Optional[str] = None,
        **exact_filters,
    ):
        model = self.model
        query = self.db.query(model)
        if active_only:
            query = query.filter(model.is_active.is_(True))
        if search:
            like = f"%{search}%"
            query = query.filter(or_(model.title.ilike(like), model.description.ilike(like)))
        if cuisine_type:
            query = query.filter(model.cuisine_type == cuisine_type)
        for column, value in exact_filters.items():
            if value is not None:
                query = query.filter(getattr(model, column) == value)
        query = query.order_by(
            model.is_featured.desc(), model.created_at.desc(), model.id.desc()
        )
        return paginate(query, page, limit)

    def get_active(self, suggestion_id: int):
        return (
            self.db.query(self.model)
            .filter(self.model.id == suggestion_id, self.model.is_active.is_(True))
            .first()
        )

    def get_interaction(
        self, suggestion_id: int, user_id: int, interaction_type: InteractionType
    ):
        im = self.interaction_model
        return (
            self.db.query(im)
            .filter(
                getattr(im, self.fk_name) == suggestion_id,
                im.user_id == user_id,
                im.interaction_type == interaction_type,
            )
            .first()
        )

    def add_interaction(
        self, suggestion_id: int, user_id: int, interaction_type: InteractionType
    ):
        row = self.interaction_model(
            **{self.fk_name: suggestion_id},
            user_id=user_id,
            interaction_type=interaction_type,
        )
        self.db.add(row)
        self.db.flush()
        return row

    def saved_by(self, user_id: int) -> list:
        im = self.interaction_model
        return (
            self.db.query(self.model)
            .join(im, getattr(im, self.fk_name) == self.model.id)
            .filter(im.user_id == user_id, im.interaction_type == InteractionType.SAVE)
            .order_by(im.created_at.desc(), im.id.desc())
            .all()
        )


class MealSuggestionRepository(CuratedSuggestionRepository):
    interaction_model = MealSuggestionInteraction
    fk_name = "meal_suggestion_id"

    def __init__(self, db: Session):
        super().__init__(db, MealSuggestion)


class RecipeSuggestionRepository(CuratedSuggestionRepository):
    interaction_model = RecipeSuggestionInteraction
    fk_name = "recipe_suggestion_id"

    def __init__(self, db: Session):
        super().__init__(db, RecipeSuggestion)


class AdminUserSuggestionRepository(BaseRepository[AdminUserSuggestion]):
    def __init__(self, db: Session):
        super().__init__(db, AdminUserSuggestion)

    def search(
        self,
        page: int,
        limit: int,
        user_id: Optional[int] = None,
        suggestion_type: Optional[AdminSuggestionKind] = None,
        is_read: Optional[bool] = None,
        is_accepted: Optional[bool] = None,
    ) -> Tuple[List[AdminUserSuggestion], int]:
        query = self.db.query(AdminUserSuggestion).options(
            selectinload(AdminUserSuggestion.meal_suggestion),
            selectinload(AdminUserSuggestion.recipe_suggestion),
            selectinload(AdminUserSuggestion.user),
            selectinload(AdminUserSuggestion.admin),
        )
        if user_id is not None:
            query = query.filter(AdminUserSuggestion.user_id == user_id)
        if suggestion_type is not None:
            query = query.filter(AdminUserSuggestion.suggestion_type == suggestion_type)
        if is_read is not None:
            query = query.filter(AdminUserSuggestion.is_read == is_read)
        if is_accepted is not None:
            query = query.filter(AdminUserSuggestion.is_accepted == is_accepted)
        query = query.order_by(
            AdminUserSuggestion.created_at.desc(), AdminUserSuggestion.id.desc()
        )
        return paginate(query, page, limit)

    def get_owned(self, suggestion_id: int, user_id: int) -> Optional[AdminUserSuggestion]:
        return (
            self.db.query(AdminUserSuggestion)
            .filter(
                AdminUserSuggestion.id == suggestion_id,
                AdminUserSuggestion.user_id == user_id,
            )
            .first()
        )

    def for_user(self, user_id: Optional[int] = None) -> List[AdminUserSuggestion]:
        query = self.db.query(AdminUserSuggestion)
        if user_id is not None:
            query = query.filter(AdminUserSuggestion.user_id == user_id)
        return query.all()


class WeeklySuggestionRepository(BaseRepository[WeeklyMealSuggestion]):
    conflict_message = "Weekly suggestion already exists for this user and week"

    def __init__(self, db: Session):
        super().__init__(db, WeeklyMealSuggestion)

    def _with_items(self):
        return self.db.query(WeeklyMealSuggestion).options(
            selectinload(WeeklyMealSuggestion.items).selectinload(
                WeeklyMealSuggestionItem.meal_suggestion
            ),
            selectinload(WeeklyMealSuggestion.items).selectinload(
                WeeklyMealSuggestionItem.recipe_suggestion
            ),
            selectinload(WeeklyMealSuggestion.user),
            selectinload(WeeklyMealSuggestion.admin),
        )

    def get_with_items(self, weekly_id: int) -> Optional[WeeklyMealSuggestion]:
        return self._with_items().filter(WeeklyMealSuggestion.id == weekly_id).first()

    def get_owned(self, weekly_id: int, user_id: int) -> Optional[WeeklyMealSuggestion]:
        return (
            self._with_items()
            .filter(
                WeeklyMealSuggestion.id == weekly_id,
                WeeklyMealSuggestion.user_id == user_id,
            )
            .first()
        )

    def get_for_week(self, user_id: int, week_start) -> Optional[WeeklyMealSuggestion]:
        return (
            self.db.query(WeeklyMealSuggestion)
            .filter(
                WeeklyMealSuggestion.user_id == user_id,
                WeeklyMealSuggestion.week_start_date == week_start,
            )
            .first()
        )

    def search(
        self, page: int, limit: int, user_id: Optional[int] = None
    ) -> Tuple[List[WeeklyMealSuggestion], int]:
        query = self._with_items()
        if user_id is not None:
            query = query.filter(WeeklyMealSuggestion.user_id == user_id)
        query = query.order_by(
            WeeklyMealSuggestion.week_start_date.desc(), WeeklyMealSuggestion.id.desc()
        )
        return paginate(query, page, limit)

    def for_user(self, user_id: Optional[int] = None) -> List[WeeklyMealSuggestion]:
        query = self.db.query(WeeklyMealSuggestion)
        if user_id is not None:
            query = query.filter(WeeklyMealSuggestion.user_id == user_id)
        return query.all()

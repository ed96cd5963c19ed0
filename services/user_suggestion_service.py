from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFoundError, ConflictError, ServiceValidationError
from domain.enums import AdminSuggestionKind
from domain.models import (
    User,
    AdminUserSuggestion,
    WeeklyMealSuggestion,
    WeeklyMealSuggestionItem,
    MealPlan,
    MealPlanItem,
)
from repositories import (
    AdminUserSuggestionRepository,
    WeeklySuggestionRepository,
    MealPlanRepository,
)

logger = logging.getLogger("nutriplan.user_suggestions")

_MACROS = ("calories", "protein", "carbs", "fat")


def _linked_meal(item: WeeklyMealSuggestionItem) -> Tuple[Optional[str], Any, Optional[Dict]]:
    """Name, ingredients and macros a weekly item contributes to a meal plan"""
    linked = item.meal_suggestion or item.recipe_suggestion
    if linked is None:
        return item.custom_meal_name, item.custom_ingredients, item.custom_nutrition

    ingredients = [
        {"name": i.get("name"), "quantity": i.get("amount"), "unit": i.get("unit")}
        for i in (linked.ingredients or [])
        if isinstance(i, dict)
    ]
    macros = {
        m: getattr(linked, f"{m}_per_serving")
        for m in _MACROS
        if getattr(linked, f"{m}_per_serving") is not None
    }
    return (
        linked.title,
        ingredients or item.custom_ingredients,
        macros or item.custom_nutrition,
    )


class UserSuggestionService:
    """What a user sees of the suggestions admins send them"""

    @staticmethod
    def list_suggestions(
        db: Session,
        user: User,
        page: int,
        limit: int,
        suggestion_type: Optional[AdminSuggestionKind] = None,
        is_read: Optional[bool] = None,
        is_accepted: Optional[bool] = None,
    ) -> Tuple[List[AdminUserSuggestion], int]:
        return AdminUserSuggestionRepository(db).search(
            page,
            limit,
            user_id=user.id,
            suggestion_type=suggestion_type,
            is_read=is_read,
            is_accepted=is_accepted,
        )

    @staticmethod
    def stats(db: Session, user: User) -> Dict[str, Any]:
        singles = AdminUserSuggestionRepository(db).for_user(user.id)
        weekly = WeeklySuggestionRepository(db).for_user(user.id)
        return {
            "totalSuggestions": len(singles),
            "unreadSuggestions": sum(1 for s in singles if not s.is_read),
            "acceptedSuggestions": sum(1 for s in singles if s.is_accepted is True),
            "rejectedSuggestions": sum(1 for s in singles if s.is_accepted is False),
            "mealSuggestions": sum(
                1 for s in singles if s.suggestion_type == AdminSuggestionKind.MEAL
            ),
            "recipeSuggestions": sum(
                1 for s in singles if s.suggestion_type == AdminSuggestionKind.RECIPE
            ),
            "totalWeeklySuggestions": len(weekly),
            "unreadWeeklySuggestions": sum(1 for w in weekly if not w.is_read),
            "acceptedWeeklySuggestions": sum(1 for w in weekly if w.is_accepted is True),
        }

    @staticmethod
    def _owned(db: Session, user: User, suggestion_id: int) -> AdminUserSuggestion:
        row = AdminUserSuggestionRepository(db).get_owned(suggestion_id, user.id)
        if not row:
            raise NotFoundError("Suggestion not found")
        return row

    @staticmethod
    def mark_read(db: Session, user: User, suggestion_id: int) -> AdminUserSuggestion:
        row = UserSuggestionService._owned(db, user, suggestion_id)
        row.is_read = True
        db.commit()
        return row

    @staticmethod
    def respond(
        db: Session, user: User, suggestion_id: int, is_accepted: bool
    ) -> AdminUserSuggestion:
        row = UserSuggestionService._owned(db, user, suggestion_id)
        row.is_accepted = is_accepted
        row.is_read = True
        db.commit()
        logger.info(
            f"user_suggestion_responded user_id={user.id} suggestion_id={suggestion_id} "
            f"accepted={is_accepted}"
        )
        return row

    # ------------------------------------------------------------------
    # Weekly suggestions
    # ------------------------------------------------------------------

    @staticmethod
    def list_weekly(
        db: Session, user: User, page: int, limit: int
    ) -> Tuple[List[WeeklyMealSuggestion], int]:
        return WeeklySuggestionRepository(db).search(page, limit, user_id=user.id)

    @staticmethod
    def _owned_weekly(db: Session, user: User, weekly_id: int) -> WeeklyMealSuggestion:
        weekly = WeeklySuggestionRepository(db).get_owned(weekly_id, user.id)
        if not weekly:
            raise NotFoundError("Weekly suggestion not found")
        return weekly

    @staticmethod
    def get_weekly(db: Session, user: User, weekly_id: int) -> WeeklyMealSuggestion:
        """Opening a weekly suggestion marks it read"""
        weekly = UserSuggestionService._owned_weekly(db, user, weekly_id)
        if not weekly.is_read:
            weekly.is_read = True
            db.commit()
        return weekly

    @staticmethod
    def mark_weekly_read(db: Session, user: User, weekly_id: int) -> WeeklyMealSuggestion:
        weekly = UserSuggestionService._owned_weekly(db, user, weekly_id)
        weekly.is_read = True
        db.commit()
        return weekly

    @staticmethod
    def respond_weekly(
        db: Session, user: User, weekly_id: int, is_accepted: bool
    ) -> WeeklyMealSuggestion:
        weekly = UserSuggestionService._owned_weekly(db, user, weekly_id)
        weekly.is_accepted = is_accepted
        weekly.is_read = True
        db.commit()
        logger.info(
            f"weekly_suggestion_responded user_id={user.id} weekly_id={weekly_id} "
            f"accepted={is_accepted}"
        )
        return weekly

    @staticmethod
    def convert_weekly(db: Session, user: User, weekly_id: int) -> MealPlan:
        """
        Turn a weekly suggestion into a meal plan for the same week.

        Items become custom meals named after their linked meal or recipe
        suggestion. Fails with 409 when the user already has a plan starting
        on the suggestion's first day.
        """
        weekly = UserSuggestionService._owned_weekly(db, user, weekly_id)
        if MealPlanRepository(db).exists_starting_on(user.id, weekly.week_start_date):
            raise ConflictError("Meal plan already exists for this week")

        items = []
        for item in weekly.items:
            name, ingredients, nutrition = _linked_meal(item)
            items.append(
                MealPlanItem(
                    meal_type=item.meal_type,
                    day_of_week=item.day_of_week,
                    custom_meal_name=name or "Suggested meal",
                    custom_ingredients=ingredients,
                    custom_nutrition=nutrition,
                    notes=item.notes,
                )
            )

        plan = MealPlan(
            user_id=user.id,
            name=weekly.title,
            description=weekly.description,
            start_date=weekly.week_start_date,
            end_date=weekly.week_end_date,
            total_calories=weekly.total_calories,
            total_protein=weekly.total_protein,
            total_carbs=weekly.total_carbs,
            total_fat=weekly.total_fat,
            is_ai_generated=False,
            items=items,
        )
        try:
            db.add(plan)
            weekly.is_accepted = True
            weekly.is_read = True
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"weekly_convert_failed user_id={user.id} weekly_id={weekly_id} error={str(e)}")
            raise ServiceValidationError("Could not create meal plan from suggestion")

        logger.info(
            f"weekly_suggestion_converted user_id={user.id} weekly_id={weekly_id} "
            f"plan_id={plan.id} items={len(items)} week_start={weekly.week_start_date}"
        )
        return plan

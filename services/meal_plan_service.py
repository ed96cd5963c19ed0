from datetime import date
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFoundError, ForbiddenError, ServiceValidationError
from domain.models import (
    User,
    MealPlan,
    MealPlanItem,
    GroceryList,
    GroceryListItem,
)
from domain.schemas.plan_schemas import (
    MealItemIn,
    MealPlanCreate,
    MealPlanUpdate,
    CopyMealPlanRequest,
)
from repositories import MealPlanRepository, RecipeRepository, GroceryListRepository

logger = logging.getLogger("nutriplan.meal_plans")

NUTRIENTS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")


def _number(value) -> float:
    """Numeric value of a stored macro; missing or non-numeric counts as zero"""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


class MealPlanService:
    """Business logic for meal plans and everything derived from them"""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_dates(start: date, end: date) -> None:
        if end < start:
            raise ServiceValidationError("End date must be on or after start date")

    @staticmethod
    def _build_items(db: Session, meals: List[MealItemIn]) -> List[MealPlanItem]:
        """Turn request meals into items; every referenced recipe must exist"""
        wanted = {m.recipe_id for m in meals if m.recipe_id is not None}
        missing = wanted - RecipeRepository(db).existing_ids(list(wanted))
        if missing:
            raise ServiceValidationError(
                "Recipe not found",
                details={"recipe_ids": sorted(missing)},
            )
        return [
            MealPlanItem(
                recipe_id=m.recipe_id,
                meal_type=m.meal_type,
                day_of_week=m.day_of_week,
                custom_meal_name=m.custom_meal_name,
                custom_ingredients=m.custom_ingredients,
                custom_nutrition=m.custom_nutrition,
                notes=m.notes,
            )
            for m in meals
        ]

    @staticmethod
    def get_owned_plan(db: Session, user: User, plan_id: int, repo_method: str = "get_with_items") -> MealPlan:
        """Load a plan; 404 when missing, 403 when it belongs to someone else"""
        plan = getattr(MealPlanRepository(db), repo_method)(plan_id)
        if not plan:
            raise NotFoundError("Meal plan not found")
        if plan.user_id != user.id:
            logger.warning(f"meal_plan_forbidden user_id={user.id} plan_id={plan_id}")
            raise ForbiddenError("You do not have access to this meal plan")
        return plan

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def list_plans(db: Session, user: User, page: int, limit: int) -> Tuple[List[MealPlan], int]:
        return MealPlanRepository(db).list_for_user(user.id, page, limit)

    @staticmethod
    def list_approved(db: Session, page: int, limit: int) -> Tuple[List[MealPlan], int]:
        return MealPlanRepository(db).list_approved(page, limit)

    @staticmethod
    def get_plan(db: Session, user: User, plan_id: int) -> MealPlan:
        plan = MealPlanRepository(db).get_with_items(plan_id)
        if not plan or plan.user_id != user.id:
            raise NotFoundError("Meal plan not found")
        return plan

    @staticmethod
    def stats(db: Session, user: User) -> Dict[str, Any]:
        """Dashboard counters for the caller"""
        plans = MealPlanRepository(db).all_for_user(user.id)
        recipe_repo = RecipeRepository(db)
        today = date.today()
        active = [p for p in plans if p.start_date <= today <= p.end_date]
        return {
            "totalMealPlans": len(plans),
            "totalRecipes": recipe_repo.count_by_creator(user.id),
            "totalGroceryLists": GroceryListRepository(db).count_for_user(user.id),
            "activeMealPlans": len(active),
            "totalCalories": round(sum(_number(p.total_calories) for p in active), 2),
            "aiGeneratedPlans": sum(1 for p in plans if p.is_ai_generated),
            "aiGeneratedRecipes": recipe_repo.count_by_creator(user.id, ai_only=True),
        }

    @staticmethod
    def nutrition_summary(db: Session, user: User, plan_id: int) -> Dict[str, Any]:
        """
        Sum recipe per-serving nutrition and custom meal nutrition over the plan.

        ``daily_averages`` divide each total by the number of distinct days
        that have at least one meal.
        """
        plan = MealPlanService.get_plan(db, user, plan_id)
        totals = {n: 0.0 for n in NUTRIENTS}
        days = set()
        for item in plan.items:
            days.add(item.day_of_week)
            if item.recipe is not None:
                for n in NUTRIENTS:
                    totals[n] += _number(getattr(item.recipe, f"{n}_per_serving"))
            if isinstance(item.custom_nutrition, dict):
                for n in NUTRIENTS:
                    totals[n] += _number(item.custom_nutrition.get(n))

        days_count = len(days)
        return {
            "meal_plan_id": plan.id,
            "name": plan.name,
            "totals": {n: round(v, 2) for n, v in totals.items()},
            "days_count": days_count,
            "daily_averages": {
                n: round(v / days_count) if days_count else 0 for n, v in totals.items()
            },
        }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @staticmethod
    def create_plan(db: Session, user: User, data: MealPlanCreate) -> MealPlan:
        """Create a plan and its items in one transaction"""
        MealPlanService._check_dates(data.start_date, data.end_date)
        plan = MealPlan(
            user_id=user.id,
            **data.model_dump(exclude={"meals"}),
        )
        try:
            plan.items = MealPlanService._build_items(db, data.meals)
            db.add(plan)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"meal_plan_create_failed user_id={user.id} error={str(e)}")
            raise ServiceValidationError("Could not save meal plan")
        logger.info(
            f"meal_plan_created user_id={user.id} plan_id={plan.id} items={len(plan.items)}"
        )
        return plan

    @staticmethod
    def save_generated_plan(
        db: Session,
        user: User,
        name: str,
        description: Optional[str],
        start: date,
        end: date,
        items: List[MealPlanItem],
        totals: Dict[str, Optional[float]],
        ai_prompt: str,
    ) -> MealPlan:
        """Persist an AI (or fallback) plan with its items in one transaction"""
        plan = MealPlan(
            user_id=user.id,
            name=name,
            description=description,
            start_date=start,
            end_date=end,
            total_calories=totals.get("total_calories"),
            total_protein=totals.get("total_protein"),
            total_carbs=totals.get("total_carbs"),
            total_fat=totals.get("total_fat"),
            is_ai_generated=True,
            ai_prompt=ai_prompt,
        )
        try:
            plan.items = items
            db.add(plan)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"generated_plan_save_failed user_id={user.id} error={str(e)}")
            raise ServiceValidationError("Could not save generated meal plan")
        logger.info(
            f"generated_plan_saved user_id={user.id} plan_id={plan.id} items={len(items)}"
        )
        return MealPlanRepository(db).get_with_items(plan.id)

    @staticmethod
    def update_plan(db: Session, user: User, plan_id: int, data: MealPlanUpdate) -> MealPlan:
        plan = MealPlanService.get_owned_plan(db, user, plan_id)
        fields = data.model_dump(exclude_unset=True, exclude={"meals"})
        MealPlanService._check_dates(
            fields.get("start_date") or plan.start_date,
            fields.get("end_date") or plan.end_date,
        )
        try:
            for key, value in fields.items():
                if value is not None or key == "description":
                    setattr(plan, key, value)
            if data.meals is not None:
                plan.items = MealPlanService._build_items(db, data.meals)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"meal_plan_update_failed plan_id={plan_id} error={str(e)}")
            raise ServiceValidationError("Could not update meal plan")
        logger.info(f"meal_plan_updated user_id={user.id} plan_id={plan_id}")
        return MealPlanRepository(db).get_with_items(plan.id)

    @staticmethod
    def delete_plan(db: Session, user: User, plan_id: int) -> None:
        plan = MealPlanService.get_owned_plan(db, user, plan_id, repo_method="get_by_id")
        db.delete(plan)
        db.commit()
        logger.info(f"meal_plan_deleted user_id={user.id} plan_id={plan_id}")

    @staticmethod
    def copy_plan(
        db: Session, user: User, plan_id: int, data: CopyMealPlanRequest
    ) -> MealPlan:
        """Duplicate a plan and its items; the copy is never flagged as AI-generated"""
        source = MealPlanService.get_plan(db, user, plan_id)
        start = data.start_date or source.start_date
        end = data.end_date or start + (source.end_date - source.start_date)
        MealPlanService._check_dates(start, end)

        copy = MealPlan(
            user_id=user.id,
            name=data.name or f"{source.name} (Copy)",
            description=source.description,
            start_date=start,
            end_date=end,
            total_calories=source.total_calories,
            total_protein=source.total_protein,
            total_carbs=source.total_carbs,
            total_fat=source.total_fat,
            is_ai_generated=False,
        )
        copy.items = [
            MealPlanItem(
                recipe_id=i.recipe_id,
                meal_type=i.meal_type,
                day_of_week=i.day_of_week,
                custom_meal_name=i.custom_meal_name,
                custom_ingredients=i.custom_ingredients,
                custom_nutrition=i.custom_nutrition,
                notes=i.notes,
            )
            for i in source.items
        ]
        db.add(copy)
        db.commit()
        logger.info(f"meal_plan_copied user_id={user.id} source={plan_id} plan_id={copy.id}")
        return copy

    @staticmethod
    def generate_grocery_list(
        db: Session, user: User, plan_id: int, name: Optional[str] = None
    ) -> GroceryList:
        """
        Build a grocery list from the plan.

        Recipe ingredients are merged by (ingredient, unit) with quantities summed
        and the catalogue category carried over; custom meal ingredients become
        custom items merged by (name, unit).
        """
        plan = MealPlanService.get_owned_plan(
            db, user, plan_id, repo_method="get_for_grocery_list"
        )

        merged: Dict[tuple, GroceryListItem] = {}
        for item in plan.items:
            if item.recipe is not None:
                for line in item.recipe.ingredients:
                    ident = line.ingredient_id or line.ingredient_name.strip().lower()
                    key = ("recipe", ident, line.unit or "")
                    entry = merged.get(key)
                    if entry is None:
                        entry = GroceryListItem(
                            ingredient_id=line.ingredient_id,
                            custom_item_name=None if line.ingredient_id else line.ingredient_name,
                            quantity=0.0,
                            unit=line.unit,
                            category_id=(
                                line.ingredient.category_id if line.ingredient else None
                            ),
                        )
                        merged[key] = entry
                    entry.quantity += _number(line.amount)

            for extra in item.custom_ingredients or []:
                if not isinstance(extra, dict) or not extra.get("name"):
                    continue
                unit = extra.get("unit") or ""
                key = ("custom", str(extra["name"]).strip().lower(), unit)
                entry = merged.get(key)
                if entry is None:
                    entry = GroceryListItem(
                        custom_item_name=str(extra["name"]).strip(),
                        quantity=0.0,
                        unit=unit or None,
                    )
                    merged[key] = entry
                entry.quantity += _number(extra.get("quantity", extra.get("amount")))

        grocery_list = GroceryList(
            user_id=user.id,
            meal_plan_id=plan.id,
            name=name or "Grocery List",
        )
        try:
            grocery_list.items = list(merged.values())
            db.add(grocery_list)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"grocery_list_failed plan_id={plan_id} error={str(e)}")
            raise ServiceValidationError("Could not generate grocery list")
        db.refresh(grocery_list)
        logger.info(
            f"grocery_list_generated user_id={user.id} plan_id={plan_id} "
            f"list_id={grocery_list.id} items={len(merged)}"
        )
        return grocery_list

    @staticmethod
    def set_approval(db: Session, plan_id: int, is_approved: bool) -> MealPlan:
        """Admin toggle for the shared gallery of approved plans"""
        repo = MealPlanRepository(db)
        plan = repo.get_by_id(plan_id)
        if not plan:
            raise NotFoundError("Meal plan not found")
        plan.is_approved = is_approved
        db.commit()
        logger.info(f"meal_plan_approval plan_id={plan_id} approved={is_approved}")
        return repo.get_with_items(plan_id)

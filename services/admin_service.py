"""
Administration: dashboard, user management, recipe moderation, the
ingredient catalogue, AI audit logs and the shared meal-plan gallery.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy import func, case
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError, ConflictError
from domain.enums import UserRole, AnalysisType, SuggestionStatus
from domain.models import (
    User,
    Recipe,
    MealPlan,
    Suggestion,
    RecipeReview,
    FoodCategory,
    Ingredient,
    AIAnalysisLog,
)
from domain.schemas.admin_schemas import (
    RecipeApproval,
    CategoryCreate,
    CategoryUpdate,
    IngredientCreate,
    IngredientUpdate,
)
from repositories import (
    UserRepository,
    ProfileRepository,
    RecipeRepository,
    MealPlanRepository,
    CategoryRepository,
    IngredientRepository,
    AILogRepository,
)

logger = logging.getLogger("nutriplan.admin")

DASHBOARD_WINDOW = timedelta(days=30)


def _count_where(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def _growth_rate(current: int, previous: int) -> float:
    if previous == 0:
        return 100.0 if current else 0.0
    return round((current - previous) / previous * 100, 2)


class AdminService:
    """Admin-only operations"""

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    @staticmethod
    def dashboard(db: Session) -> Dict[str, Any]:
        now = datetime.now()
        window_start = now - DASHBOARD_WINDOW
        previous_start = window_start - DASHBOARD_WINDOW

        total_users = UserRepository(db).count()
        active_users = db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar()
        new_users = (
            db.query(func.count(User.id)).filter(User.created_at >= window_start).scalar()
        )
        previous_users = (
            db.query(func.count(User.id))
            .filter(User.created_at >= previous_start, User.created_at < window_start)
            .scalar()
        )

        recipe_total, recipe_approved, avg_rating, total_likes = db.query(
            func.count(Recipe.id),
            _count_where(Recipe.is_approved.is_(True)),
            func.avg(Recipe.avg_rating),
            func.sum(Recipe.like_count),
        ).one()

        plan_total, plan_ai, plan_avg_calories = db.query(
            func.count(MealPlan.id),
            _count_where(MealPlan.is_ai_generated.is_(True)),
            func.avg(MealPlan.total_calories),
        ).one()

        status_counts = dict(
            db.query(Suggestion.status, func.count(Suggestion.id))
            .group_by(Suggestion.status)
            .all()
        )

        recipe_repo = RecipeRepository(db)
        return {
            "users": {
                "total": total_users,
                "active": active_users,
                "newThisMonth": new_users,
                "growthRate": _growth_rate(new_users, previous_users),
            },
            "recipes": {
                "total": recipe_total,
                "approved": recipe_approved,
                "pending": recipe_total - recipe_approved,
                "avgRating": round(float(avg_rating or 0), 2),
                "totalLikes": int(total_likes or 0),
            },
            "mealPlans": {
                "total": plan_total,
                "aiGenerated": plan_ai,
                "userCreated": plan_total - plan_ai,
                "avgCalories": round(float(plan_avg_calories or 0)),
            },
            "suggestions": {
                status.value: status_counts.get(status, 0) for status in SuggestionStatus
            },
            "recentUsers": UserRepository(db).recent(5),
            "recentRecipes": recipe_repo.search(1, 5)[0],
            "popularRecipes": recipe_repo.popular(5),
        }

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @staticmethod
    def list_users(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[User], int]:
        return UserRepository(db).search(
            page, limit, search=search, role=role, is_active=is_active
        )

    @staticmethod
    def user_profile(db: Session, user_id: int) -> Dict[str, Any]:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        stats = {
            "mealPlans": db.query(func.count(MealPlan.id))
            .filter(MealPlan.user_id == user_id)
            .scalar(),
            "recipes": RecipeRepository(db).count_by_creator(user_id),
            "reviews": db.query(func.count(RecipeReview.id))
            .filter(RecipeReview.user_id == user_id)
            .scalar(),
            "suggestions": db.query(func.count(Suggestion.id))
            .filter(Suggestion.user_id == user_id)
            .scalar(),
        }
        return {
            "user": user,
            "profile": ProfileRepository(db).get_by_user_id(user_id),
            "stats": stats,
        }

    @staticmethod
    def set_user_status(db: Session, admin: User, user_id: int, is_active: bool) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.id == admin.id and not is_active:
            raise ServiceValidationError("You cannot deactivate your own account")
        user.is_active = is_active
        db.commit()
        logger.info(
            f"user_status_changed admin_id={admin.id} user_id={user_id} is_active={is_active}"
        )
        return user

    # ------------------------------------------------------------------
    # Recipe moderation
    # ------------------------------------------------------------------

    @staticmethod
    def pending_recipes(db: Session, page: int, limit: int) -> Tuple[List[Recipe], int]:
        return RecipeRepository(db).pending(page, limit)

    @staticmethod
    def approve_recipe(db: Session, admin: User, recipe_id: int, data: RecipeApproval) -> Recipe:
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        recipe.is_approved = data.is_approved
        if data.is_featured is not None:
            recipe.is_featured = data.is_featured
        db.commit()
        logger.info(
            f"recipe_moderated admin_id={admin.id} recipe_id={recipe_id} "
            f"approved={data.is_approved} featured={recipe.is_featured}"
        )
        return recipe

    # ------------------------------------------------------------------
    # AI audit log
    # ------------------------------------------------------------------

    @staticmethod
    def ai_logs(
        db: Session,
        page: int,
        limit: int,
        analysis_type: Optional[AnalysisType] = None,
        user_id: Optional[int] = None,
    ) -> Tuple[List[AIAnalysisLog], int]:
        return AILogRepository(db).search(
            page, limit, analysis_type=analysis_type, user_id=user_id
        )

    # ------------------------------------------------------------------
    # Food categories
    # ------------------------------------------------------------------

    @staticmethod
    def list_categories(db: Session) -> List[Tuple[FoodCategory, int]]:
        return CategoryRepository(db).list_with_counts()

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> FoodCategory:
        repo = CategoryRepository(db)
        if repo.get_by_name(data.name):
            raise ConflictError(repo.conflict_message)
        category = repo.create(FoodCategory(**data.model_dump()))
        logger.info(f"category_created category_id={category.id} name={category.name}")
        return category

    @staticmethod
    def update_category(db: Session, category_id: int, data: CategoryUpdate) -> FoodCategory:
        repo = CategoryRepository(db)
        category = repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found")
        fields = data.model_dump(exclude_unset=True)
        if "name" in fields and fields["name"]:
            fields["name"] = fields["name"].strip()
            clash = repo.get_by_name(fields["name"])
            if clash and clash.id != category_id:
                raise ConflictError(repo.conflict_message)
        for key, value in fields.items():
            setattr(category, key, value)
        return repo.update(category)

    @staticmethod
    def delete_category(db: Session, category_id: int) -> None:
        repo = CategoryRepository(db)
        if not repo.get_by_id(category_id):
            raise NotFoundError("Category not found")
        if repo.has_ingredients(category_id):
            raise ServiceValidationError("Cannot delete category that has ingredients")
        repo.delete(category_id)
        logger.info(f"category_deleted category_id={category_id}")

    # ------------------------------------------------------------------
    # Ingredients
    # ------------------------------------------------------------------

    @staticmethod
    def _check_category(db: Session, category_id: Optional[int]) -> None:
        if category_id is not None and not CategoryRepository(db).exists(category_id):
            raise ServiceValidationError("Category not found")

    @staticmethod
    def list_ingredients(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> Tuple[List[Ingredient], int]:
        return IngredientRepository(db).search(
            page, limit, search=search, category_id=category_id
        )

    @staticmethod
    def create_ingredient(db: Session, data: IngredientCreate) -> Ingredient:
        repo = IngredientRepository(db)
        if repo.get_by_name(data.name):
            raise ConflictError(repo.conflict_message)
        AdminService._check_category(db, data.category_id)
        ingredient = repo.create(Ingredient(**data.model_dump()))
        logger.info(f"ingredient_created ingredient_id={ingredient.id} name={ingredient.name}")
        return ingredient

    @staticmethod
    def update_ingredient(db: Session, ingredient_id: int, data: IngredientUpdate) -> Ingredient:
        repo = IngredientRepository(db)
        ingredient = repo.get_by_id(ingredient_id)
        if not ingredient:
            raise NotFoundError("Ingredient not found")
        fields = data.model_dump(exclude_unset=True)
        if fields.get("name"):
            fields["name"] = fields["name"].strip()
            clash = repo.get_by_name(fields["name"])
            if clash and clash.id != ingredient_id:
                raise ConflictError(repo.conflict_message)
        if "category_id" in fields:
            AdminService._check_category(db, fields["category_id"])
        for key, value in fields.items():
            setattr(ingredient, key, value)
        return repo.update(ingredient)

    @staticmethod
    def delete_ingredient(db: Session, ingredient_id: int) -> None:
        repo = IngredientRepository(db)
        if not repo.get_by_id(ingredient_id):
            raise NotFoundError("Ingredient not found")
        if repo.is_used_in_recipes(ingredient_id):
            raise ServiceValidationError("Cannot delete ingredient that is used in recipes")
        repo.delete(ingredient_id)
        logger.info(f"ingredient_deleted ingredient_id={ingredient_id}")

    # ------------------------------------------------------------------
    # Meal plans
    # ------------------------------------------------------------------

    @staticmethod
    def list_meal_plans(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        is_ai_generated: Optional[bool] = None,
        user_id: Optional[int] = None,
    ) -> Tuple[List[MealPlan], int]:
        return MealPlanRepository(db).search_all(
            page, limit, search=search, is_ai_generated=is_ai_generated, user_id=user_id
        )

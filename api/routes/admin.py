"""
Admin routes - dashboard, user management, moderation and the ingredient catalogue.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import AdminPagination, get_db, require_admin
from api.responses import paginated_response, success_response
from domain.enums import AnalysisType, UserRole
from domain.mappers import AdminMapper, MealPlanMapper, RecipeMapper, UserMapper
from domain.models import User
from domain.schemas.admin_schemas import (
    UserStatusUpdate,
    RecipeApproval,
    CategoryCreate,
    CategoryUpdate,
    IngredientCreate,
    IngredientUpdate,
)
from domain.schemas.plan_schemas import MealPlanApproval
from services.admin_service import AdminService
from services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger("nutriplan.api.admin")


# ============================================================================
# Dashboard
# ============================================================================


@router.get("/dashboard")
def dashboard(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    stats = AdminService.dashboard(db)
    stats["recentUsers"] = [UserMapper.to_admin_summary(u) for u in stats["recentUsers"]]
    stats["recentRecipes"] = [RecipeMapper.to_summary(r) for r in stats["recentRecipes"]]
    stats["popularRecipes"] = [RecipeMapper.to_summary(r) for r in stats["popularRecipes"]]
    return success_response(stats)


# ============================================================================
# Users
# ============================================================================


@router.get("/users")
def list_users(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    role: Optional[UserRole] = Query(None),
    is_active: Optional[bool] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    users, total = AdminService.list_users(
        db, pagination.page, pagination.limit, search=search, role=role, is_active=is_active
    )
    return paginated_response(
        [UserMapper.to_admin_summary(u) for u in users], total, pagination.page, pagination.limit
    )


@router.get("/users/{user_id}/profile")
def user_profile(user_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    details = AdminService.user_profile(db, user_id)
    return success_response(
        {
            "user": UserMapper.to_admin_summary(details["user"]),
            "profile": UserMapper.profile_to_response(details["profile"]),
            "stats": details["stats"],
        }
    )


@router.put("/users/{user_id}/status")
def set_user_status(
    user_id: int,
    body: UserStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = AdminService.set_user_status(db, admin, user_id, body.is_active)
    return success_response(
        UserMapper.to_admin_summary(user),
        f"User {'activated' if body.is_active else 'deactivated'} successfully",
    )


# ============================================================================
# Recipe moderation
# ============================================================================


@router.get("/recipes/pending")
def pending_recipes(
    pagination: AdminPagination = Depends(),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    recipes, total = AdminService.pending_recipes(db, pagination.page, pagination.limit)
    return paginated_response(
        [RecipeMapper.to_summary(r) for r in recipes], total, pagination.page, pagination.limit
    )


@router.put("/recipes/{recipe_id}/approve")
def approve_recipe(
    recipe_id: int,
    body: RecipeApproval,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    recipe = AdminService.approve_recipe(db, admin, recipe_id, body)
    return success_response(
        RecipeMapper.to_summary(recipe),
        f"Recipe {'approved' if body.is_approved else 'rejected'} successfully",
    )


@router.get("/ai-logs")
def ai_logs(
    pagination: AdminPagination = Depends(),
    analysis_type: Optional[AnalysisType] = Query(None),
    user_id: Optional[int] = Query(None, ge=1),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    logs, total = AdminService.ai_logs(
        db, pagination.page, pagination.limit, analysis_type=analysis_type, user_id=user_id
    )
    return paginated_response(
        [AdminMapper.ai_log_to_dict(log) for log in logs],
        total,
        pagination.page,
        pagination.limit,
    )


# ============================================================================
# Food categories
# ============================================================================


@router.get("/categories")
def list_categories(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return success_response(
        [AdminMapper.category_to_dict(c, count) for c, count in AdminService.list_categories(db)]
    )


@router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    category = AdminService.create_category(db, body)
    return success_response(AdminMapper.category_to_dict(category), "Category created successfully")


@router.put("/categories/{category_id}")
def update_category(
    category_id: int,
    body: CategoryUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = AdminService.update_category(db, category_id, body)
    return success_response(AdminMapper.category_to_dict(category), "Category updated successfully")


@router.delete("/categories/{category_id}")
def delete_category(
    category_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    AdminService.delete_category(db, category_id)
    return success_response(message="Category deleted successfully")


# ============================================================================
# Ingredients
# ============================================================================


@router.get("/ingredients")
def list_ingredients(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None, ge=1),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ingredients, total = AdminService.list_ingredients(
        db, pagination.page, pagination.limit, search=search, category_id=category_id
    )
    return paginated_response(
        [AdminMapper.ingredient_to_dict(i) for i in ingredients],
        total,
        pagination.page,
        pagination.limit,
    )


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
def create_ingredient(
    body: IngredientCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    ingredient = AdminService.create_ingredient(db, body)
    return success_response(
        AdminMapper.ingredient_to_dict(ingredient), "Ingredient created successfully"
    )


@router.put("/ingredients/{ingredient_id}")
def update_ingredient(
    ingredient_id: int,
    body: IngredientUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ingredient = AdminService.update_ingredient(db, ingredient_id, body)
    return success_response(
        AdminMapper.ingredient_to_dict(ingredient), "Ingredient updated successfully"
    )


@router.delete("/ingredients/{ingredient_id}")
def delete_ingredient(
    ingredient_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    AdminService.delete_ingredient(db, ingredient_id)
    return success_response(message="Ingredient deleted successfully")


# ============================================================================
# Meal plans
# ============================================================================


@router.get("/meal-plans")
def list_meal_plans(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    is_ai_generated: Optional[bool] = Query(None),
    user_id: Optional[int] = Query(None, ge=1),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    plans, total = AdminService.list_meal_plans(
        db,
        pagination.page,
        pagination.limit,
        search=search,
        is_ai_generated=is_ai_generated,
        user_id=user_id,
    )
    return paginated_response(
        [MealPlanMapper.to_dict(p, include_owner=True) for p in plans],
        total,
        pagination.page,
        pagination.limit,
    )


@router.put("/meal-plans/{plan_id}/approve")
def approve_meal_plan(
    plan_id: int,
    body: MealPlanApproval,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    plan = MealPlanService.set_approval(db, plan_id, body.is_approved)
    return success_response(
        MealPlanMapper.to_dict(plan, include_owner=True),
        f"Meal plan {'approved' if body.is_approved else 'unapproved'} successfully",
    )

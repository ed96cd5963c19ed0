"""
Meal plan routes - manual and AI-generated plans, grocery lists and nutrition.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import Pagination, get_db, require_user
from api.responses import paginated_response, success_response
from domain.mappers import MealPlanMapper
from domain.models import User
from domain.schemas.plan_schemas import (
    MealPlanCreate,
    MealPlanUpdate,
    AIMealPlanRequest,
    AIWeeklyMealPlanRequest,
    GroceryListRequest,
    CopyMealPlanRequest,
)
from services.ai_service import AIService
from services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/meal-plans", tags=["Meal Plans"])
logger = logging.getLogger("nutriplan.api.meal_plans")


@router.get("")
def list_meal_plans(
    pagination: Pagination = Depends(),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    plans, total = MealPlanService.list_plans(db, user, pagination.page, pagination.limit)
    return paginated_response(
        [MealPlanMapper.to_dict(p) for p in plans], total, pagination.page, pagination.limit
    )


@router.get("/stats")
def meal_plan_stats(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return success_response(MealPlanService.stats(db, user))


@router.get("/approved")
def approved_meal_plans(
    pagination: Pagination = Depends(),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Plans an admin approved for the shared gallery, from every user"""
    plans, total = MealPlanService.list_approved(db, pagination.page, pagination.limit)
    return paginated_response(
        [MealPlanMapper.to_dict(p, include_owner=True) for p in plans],
        total,
        pagination.page,
        pagination.limit,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_meal_plan(
    body: MealPlanCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    plan = MealPlanService.create_plan(db, user, body)
    return success_response({"id": plan.id}, "Meal plan created successfully")


@router.post("/generate", status_code=status.HTTP_201_CREATED)
def generate_meal_plan(
    body: AIMealPlanRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    plan = AIService.generate_meal_plan(db, user, body)
    return success_response(MealPlanMapper.to_dict(plan), "Meal plan generated successfully")


@router.post("/generate-weekly", status_code=status.HTTP_201_CREATED)
def generate_weekly_meal_plan(
    body: AIWeeklyMealPlanRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    plan = AIService.generate_weekly_plan(db, user, body)
    return success_response(
        MealPlanMapper.to_dict(plan), "Weekly meal plan generated successfully"
    )


@router.get("/{plan_id}")
def get_meal_plan(plan_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)):
    plan = MealPlanService.get_plan(db, user, plan_id)
    return success_response(MealPlanMapper.to_dict(plan))


@router.put("/{plan_id}")
def update_meal_plan(
    plan_id: int,
    body: MealPlanUpdate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    plan = MealPlanService.update_plan(db, user, plan_id, body)
    return success_response(MealPlanMapper.to_dict(plan), "Meal plan updated successfully")


@router.delete("/{plan_id}")
def delete_meal_plan(
    plan_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)
):
    MealPlanService.delete_plan(db, user, plan_id)
    return success_response(message="Meal plan deleted successfully")


@router.post("/{plan_id}/grocery-list", status_code=status.HTTP_201_CREATED)
def create_grocery_list(
    plan_id: int,
    body: Optional[GroceryListRequest] = Body(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    grocery_list = MealPlanService.generate_grocery_list(
        db, user, plan_id, name=body.name if body else None
    )
    return success_response(
        MealPlanMapper.grocery_list_to_dict(grocery_list),
        "Grocery list generated successfully",
    )


@router.get("/{plan_id}/nutrition")
def meal_plan_nutrition(
    plan_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)
):
    return success_response(MealPlanService.nutrition_summary(db, user, plan_id))


@router.post("/{plan_id}/copy", status_code=status.HTTP_201_CREATED)
def copy_meal_plan(
    plan_id: int,
    body: Optional[CopyMealPlanRequest] = Body(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    plan = MealPlanService.copy_plan(db, user, plan_id, body or CopyMealPlanRequest())
    return success_response({"id": plan.id}, "Meal plan copied successfully")

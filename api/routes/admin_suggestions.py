"""
Admin moderation of user suggestions and the curated meal/recipe catalogues.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import AdminPagination, get_db, require_admin
from api.responses import paginated_response, success_response
from domain.enums import SuggestionStatus, SuggestionType, MealType, Difficulty
from domain.mappers import SuggestionMapper
from domain.models import User
from domain.schemas.suggestion_schemas import (
    SuggestionStatusUpdate,
    MealSuggestionCreate,
    MealSuggestionUpdate,
    RecipeSuggestionCreate,
    RecipeSuggestionUpdate,
)
from services.admin_suggestion_service import AdminSuggestionService

router = APIRouter(prefix="/admin/suggestions", tags=["Admin Suggestions"])


def _curated_page(rows, total, pagination):
    return paginated_response(
        [SuggestionMapper.curated_to_dict(s) for s in rows],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("")
def list_suggestions(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    suggestion_type: Optional[SuggestionType] = Query(None),
    status_filter: Optional[SuggestionStatus] = Query(None, alias="status"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = AdminSuggestionService.list_suggestions(
        db,
        pagination.page,
        pagination.limit,
        search=search,
        suggestion_type=suggestion_type,
        status=status_filter,
    )
    return paginated_response(
        [SuggestionMapper.to_dict(s) for s in rows], total, pagination.page, pagination.limit
    )


@router.get("/analytics")
def suggestion_analytics(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    stats = AdminSuggestionService.analytics(db)
    stats["recentSuggestions"] = [SuggestionMapper.to_dict(s) for s in stats["recentSuggestions"]]
    stats["topSuggestions"] = [SuggestionMapper.to_dict(s) for s in stats["topSuggestions"]]
    return success_response(stats)


# ============================================================================
# Curated meal suggestions
# ============================================================================


@router.get("/meals")
def list_meal_suggestions(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    meal_type: Optional[MealType] = Query(None),
    cuisine_type: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = AdminSuggestionService.list_meal_suggestions(
        db,
        pagination.page,
        pagination.limit,
        search=search,
        meal_type=meal_type,
        cuisine_type=cuisine_type,
        is_active=is_active,
    )
    return _curated_page(rows, total, pagination)


@router.post("/meals", status_code=status.HTTP_201_CREATED)
def create_meal_suggestion(
    body: MealSuggestionCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    meal = AdminSuggestionService.create_meal_suggestion(db, admin, body)
    return success_response(
        SuggestionMapper.curated_to_dict(meal), "Meal suggestion created successfully"
    )


@router.put("/meals/{suggestion_id}")
def update_meal_suggestion(
    suggestion_id: int,
    body: MealSuggestionUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    meal = AdminSuggestionService.update_meal_suggestion(db, suggestion_id, body)
    return success_response(
        SuggestionMapper.curated_to_dict(meal), "Meal suggestion updated successfully"
    )


@router.delete("/meals/{suggestion_id}")
def delete_meal_suggestion(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    AdminSuggestionService.delete_meal_suggestion(db, suggestion_id)
    return success_response(message="Meal suggestion deleted successfully")


@router.post("/meals/{suggestion_id}/toggle-status")
def toggle_meal_status(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    meal = AdminSuggestionService.toggle_meal_status(db, suggestion_id)
    return success_response(
        {"id": meal.id, "is_active": meal.is_active},
        f"Meal suggestion {'activated' if meal.is_active else 'deactivated'} successfully",
    )


# ============================================================================
# Curated recipe suggestions
# ============================================================================


@router.get("/recipes")
def list_recipe_suggestions(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    cuisine_type: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = AdminSuggestionService.list_recipe_suggestions(
        db,
        pagination.page,
        pagination.limit,
        search=search,
        difficulty=difficulty,
        cuisine_type=cuisine_type,
        is_active=is_active,
    )
    return _curated_page(rows, total, pagination)


@router.post("/recipes", status_code=status.HTTP_201_CREATED)
def create_recipe_suggestion(
    body: RecipeSuggestionCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    recipe = AdminSuggestionService.create_recipe_suggestion(db, admin, body)
    return success_response(
        SuggestionMapper.curated_to_dict(recipe), "Recipe suggestion created successfully"
    )


@router.put("/recipes/{suggestion_id}")
def update_recipe_suggestion(
    suggestion_id: int,
    body: RecipeSuggestionUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    recipe = AdminSuggestionService.update_recipe_suggestion(db, suggestion_id, body)
    return success_response(
        SuggestionMapper.curated_to_dict(recipe), "Recipe suggestion updated successfully"
    )


@router.delete("/recipes/{suggestion_id}")
def delete_recipe_suggestion(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    AdminSuggestionService.delete_recipe_suggestion(db, suggestion_id)
    return success_response(message="Recipe suggestion deleted successfully")


@router.post("/recipes/{suggestion_id}/toggle-status")
def toggle_recipe_status(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    recipe = AdminSuggestionService.toggle_recipe_status(db, suggestion_id)
    return success_response(
        {"id": recipe.id, "is_active": recipe.is_active},
        f"Recipe suggestion {'activated' if recipe.is_active else 'deactivated'} successfully",
    )


@router.post("/recipes/{suggestion_id}/toggle-featured")
def toggle_recipe_featured(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    recipe = AdminSuggestionService.toggle_recipe_featured(db, suggestion_id)
    return success_response(
        {"id": recipe.id, "is_featured": recipe.is_featured},
        f"Recipe suggestion {'featured' if recipe.is_featured else 'unfeatured'} successfully",
    )


# ============================================================================
# User-authored suggestions by id
# ============================================================================


@router.get("/{suggestion_id}")
def get_suggestion(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    suggestion = AdminSuggestionService.get_suggestion(db, suggestion_id)
    return success_response(SuggestionMapper.to_dict(suggestion))


@router.put("/{suggestion_id}/status")
def update_suggestion_status(
    suggestion_id: int,
    body: SuggestionStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    suggestion = AdminSuggestionService.update_status(db, admin, suggestion_id, body)
    return success_response(
        SuggestionMapper.to_dict(suggestion), "Suggestion status updated successfully"
    )


@router.delete("/{suggestion_id}")
def delete_suggestion(
    suggestion_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    AdminSuggestionService.delete_suggestion(db, admin, suggestion_id)
    return success_response(message="Suggestion deleted successfully")

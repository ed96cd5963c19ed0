"""
Admin routes for sending meal, recipe and weekly suggestions to individual users.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import AdminPagination, get_db, require_admin
from api.responses import paginated_response, success_response
from domain.enums import AdminSuggestionKind
from domain.mappers import SuggestionMapper, UserMapper
from domain.models import User
from domain.schemas.suggestion_schemas import (
    SendMealSuggestion,
    SendRecipeSuggestion,
    WeeklySuggestionCreate,
    SuggestionStatusPatch,
)
from services.admin_suggestion_service import AdminUserSuggestionService

router = APIRouter(prefix="/admin/user-suggestions", tags=["Admin User Suggestions"])


@router.get("/users")
def list_recipients(
    pagination: AdminPagination = Depends(),
    search: Optional[str] = Query(None),
    has_profile: Optional[bool] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = AdminUserSuggestionService.list_users(
        db, pagination.page, pagination.limit, search=search, has_profile=has_profile
    )
    items = []
    for row in rows:
        item = UserMapper.to_admin_summary(row.pop("user"))
        item.update(row)
        items.append(item)
    return paginated_response(items, total, pagination.page, pagination.limit)


@router.get("/analytics")
def analytics(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    stats = AdminUserSuggestionService.analytics(db)
    stats["recentSuggestions"] = [
        SuggestionMapper.admin_user_suggestion_to_dict(r) for r in stats["recentSuggestions"]
    ]
    return success_response(stats)


@router.post("/meals", status_code=status.HTTP_201_CREATED)
def send_meal_suggestion(
    body: SendMealSuggestion,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    row = AdminUserSuggestionService.send_meal(db, admin, body)
    return success_response(
        SuggestionMapper.admin_user_suggestion_to_dict(row), "Meal suggestion sent successfully"
    )


@router.post("/recipes", status_code=status.HTTP_201_CREATED)
def send_recipe_suggestion(
    body: SendRecipeSuggestion,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    row = AdminUserSuggestionService.send_recipe(db, admin, body)
    return success_response(
        SuggestionMapper.admin_user_suggestion_to_dict(row), "Recipe suggestion sent successfully"
    )


@router.post("/weekly", status_code=status.HTTP_201_CREATED)
def create_weekly_suggestion(
    body: WeeklySuggestionCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    weekly = AdminUserSuggestionService.create_weekly(db, admin, body)
    return success_response(
        SuggestionMapper.weekly_to_dict(weekly), "Weekly meal suggestion created successfully"
    )


@router.get("")
def list_sent(
    pagination: AdminPagination = Depends(),
    user_id: Optional[int] = Query(None, ge=1),
    suggestion_type: Optional[AdminSuggestionKind] = Query(None),
    is_read: Optional[bool] = Query(None),
    is_accepted: Optional[bool] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = AdminUserSuggestionService.list_sent(
        db,
        pagination.page,
        pagination.limit,
        user_id=user_id,
        suggestion_type=suggestion_type,
        is_read=is_read,
        is_accepted=is_accepted,
    )
    return paginated_response(
        [SuggestionMapper.admin_user_suggestion_to_dict(r) for r in rows],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("/weekly")
def list_weekly(
    pagination: AdminPagination = Depends(),
    user_id: Optional[int] = Query(None, ge=1),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    rows, total = AdminUserSuggestionService.list_weekly(
        db, pagination.page, pagination.limit, user_id=user_id
    )
    return paginated_response(
        [SuggestionMapper.weekly_to_dict(w, include_items=False) for w in rows],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("/weekly/{weekly_id}")
def get_weekly(weekly_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    weekly = AdminUserSuggestionService.get_weekly(db, weekly_id)
    return success_response(SuggestionMapper.weekly_to_dict(weekly))


@router.put("/weekly/{weekly_id}/status")
def update_weekly_status(
    weekly_id: int,
    body: SuggestionStatusPatch,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    weekly = AdminUserSuggestionService.update_weekly_status(db, weekly_id, body)
    return success_response(
        SuggestionMapper.weekly_to_dict(weekly), "Weekly suggestion status updated successfully"
    )


@router.put("/{suggestion_id}/status")
def update_status(
    suggestion_id: int,
    body: SuggestionStatusPatch,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    row = AdminUserSuggestionService.update_status(db, suggestion_id, body)
    return success_response(
        SuggestionMapper.admin_user_suggestion_to_dict(row), "Suggestion status updated successfully"
    )

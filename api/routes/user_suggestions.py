"""
Routes through which a user reads and answers suggestions sent by admins.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import Pagination, get_db, require_user
from api.responses import paginated_response, success_response
from domain.enums import AdminSuggestionKind
from domain.mappers import SuggestionMapper
from domain.models import User
from domain.schemas.suggestion_schemas import RespondRequest
from services.user_suggestion_service import UserSuggestionService

router = APIRouter(prefix="/user-suggestions", tags=["User Suggestions"])


def _response_message(is_accepted: bool) -> str:
    return f"Suggestion {'accepted' if is_accepted else 'rejected'} successfully"


@router.get("")
def list_received(
    pagination: Pagination = Depends(),
    suggestion_type: Optional[AdminSuggestionKind] = Query(None),
    is_read: Optional[bool] = Query(None),
    is_accepted: Optional[bool] = Query(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows, total = UserSuggestionService.list_suggestions(
        db,
        user,
        pagination.page,
        pagination.limit,
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


@router.get("/stats")
def received_stats(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return success_response(UserSuggestionService.stats(db, user))


@router.get("/weekly")
def list_weekly(
    pagination: Pagination = Depends(),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows, total = UserSuggestionService.list_weekly(db, user, pagination.page, pagination.limit)
    return paginated_response(
        [SuggestionMapper.weekly_to_dict(w, include_items=False) for w in rows],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("/weekly/{weekly_id}")
def get_weekly(weekly_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)):
    weekly = UserSuggestionService.get_weekly(db, user, weekly_id)
    return success_response(SuggestionMapper.weekly_to_dict(weekly))


@router.post("/weekly/{weekly_id}/read")
def read_weekly(weekly_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)):
    UserSuggestionService.mark_weekly_read(db, user, weekly_id)
    return success_response(message="Weekly suggestion marked as read")


@router.post("/weekly/{weekly_id}/respond")
def respond_weekly(
    weekly_id: int,
    body: RespondRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    UserSuggestionService.respond_weekly(db, user, weekly_id, body.is_accepted)
    return success_response(message=_response_message(body.is_accepted))


@router.post("/weekly/{weekly_id}/convert", status_code=status.HTTP_201_CREATED)
def convert_weekly(
    weekly_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)
):
    plan = UserSuggestionService.convert_weekly(db, user, weekly_id)
    return success_response(
        {"meal_plan_id": plan.id}, "Weekly suggestion converted to meal plan successfully"
    )


@router.post("/{suggestion_id}/read")
def read_suggestion(
    suggestion_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)
):
    UserSuggestionService.mark_read(db, user, suggestion_id)
    return success_response(message="Suggestion marked as read")


@router.post("/{suggestion_id}/respond")
def respond_suggestion(
    suggestion_id: int,
    body: RespondRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    UserSuggestionService.respond(db, user, suggestion_id, body.is_accepted)
    return success_response(message=_response_message(body.is_accepted))

"""
Suggestion routes for regular users: their own suggestions and votes, plus
browsing and interacting with curated meal and recipe suggestions.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import Pagination, get_db, require_user
from api.responses import paginated_response, success_response
from domain.enums import SuggestionStatus, SuggestionType, MealType, Difficulty
from domain.mappers import SuggestionMapper
from domain.models import User
from domain.schemas.suggestion_schemas import (
    SuggestionCreate,
    VoteRequest,
    InteractionRequest,
)
from services.suggestion_service import SuggestionService

router = APIRouter(prefix="/suggestions", tags=["Suggestions"])


@router.get("")
def my_suggestions(
    pagination: Pagination = Depends(),
    status_filter: Optional[SuggestionStatus] = Query(None, alias="status"),
    suggestion_type: Optional[SuggestionType] = Query(None),
    search: Optional[str] = Query(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows, total = SuggestionService.list_own(
        db,
        user,
        pagination.page,
        pagination.limit,
        status=status_filter,
        suggestion_type=suggestion_type,
        search=search,
    )
    return paginated_response(
        [SuggestionMapper.to_dict(s) for s in rows], total, pagination.page, pagination.limit
    )


@router.get("/approved")
def approved_suggestions(
    pagination: Pagination = Depends(),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows, total = SuggestionService.list_public(db, pagination.page, pagination.limit)
    return paginated_response(
        [SuggestionMapper.to_dict(s) for s in rows], total, pagination.page, pagination.limit
    )


@router.get("/meals")
def meal_suggestions(
    pagination: Pagination = Depends(),
    meal_type: Optional[MealType] = Query(None),
    cuisine_type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows, total = SuggestionService.list_meals(
        db, pagination.page, pagination.limit, meal_type, cuisine_type, search
    )
    return paginated_response(
        [SuggestionMapper.curated_to_dict(s) for s in rows],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("/recipes")
def recipe_suggestions(
    pagination: Pagination = Depends(),
    difficulty: Optional[Difficulty] = Query(None),
    cuisine_type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows, total = SuggestionService.list_recipes(
        db, pagination.page, pagination.limit, difficulty, cuisine_type, search
    )
    return paginated_response(
        [SuggestionMapper.curated_to_dict(s) for s in rows],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("/saved")
def saved_suggestions(user: User = Depends(require_user), db: Session = Depends(get_db)):
    meals, recipes = SuggestionService.saved(db, user)
    return success_response(
        {
            "meals": [SuggestionMapper.curated_to_dict(s) for s in meals],
            "recipes": [SuggestionMapper.curated_to_dict(s) for s in recipes],
            "total": len(meals) + len(recipes),
        }
    )


@router.post("/meals/{suggestion_id}/interact")
def interact_with_meal(
    suggestion_id: int,
    body: InteractionRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    active, message = SuggestionService.interact_meal(
        db, user, suggestion_id, body.interaction_type
    )
    return success_response({"active": active}, message)


@router.post("/recipes/{suggestion_id}/interact")
def interact_with_recipe(
    suggestion_id: int,
    body: InteractionRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    active, message = SuggestionService.interact_recipe(
        db, user, suggestion_id, body.interaction_type
    )
    return success_response({"active": active}, message)


@router.get("/{suggestion_id}")
def get_suggestion(
    suggestion_id: int, user: User = Depends(require_user), db: Session = Depends(get_db)
):
    return success_response(SuggestionMapper.to_dict(SuggestionService.get_suggestion(db, suggestion_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_suggestion(
    body: SuggestionCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    suggestion = SuggestionService.create_suggestion(db, user, body)
    return success_response(SuggestionMapper.to_dict(suggestion), "Suggestion created successfully")


@router.post("/{suggestion_id}/interact")
def vote_on_suggestion(
    suggestion_id: int,
    body: VoteRequest,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    suggestion = SuggestionService.vote(db, user, suggestion_id, body)
    return success_response(SuggestionMapper.to_dict(suggestion), "Vote recorded successfully")

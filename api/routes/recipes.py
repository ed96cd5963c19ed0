"""
Recipe routes - catalogue browsing, authoring, reviews, likes and AI generation.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import Pagination, get_db, get_current_user
from api.responses import paginated_response, success_response
from domain.enums import Difficulty
from domain.mappers import RecipeMapper
from domain.models import User
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    ReviewCreate,
    AIRecipeRequest,
)
from services.ai_service import AIService
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("nutriplan.api.recipes")


@router.get("")
def list_recipes(
    pagination: Pagination = Depends(),
    search: Optional[str] = Query(None, description="Matched against title and description"),
    is_approved: Optional[bool] = Query(None),
    is_featured: Optional[bool] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    cuisine_type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    recipes, total = RecipeService.list_recipes(
        db,
        pagination.page,
        pagination.limit,
        search=search,
        is_approved=is_approved,
        is_featured=is_featured,
        difficulty=difficulty,
        cuisine_type=cuisine_type,
    )
    return paginated_response(
        [RecipeMapper.to_summary(r) for r in recipes],
        total,
        pagination.page,
        pagination.limit,
    )


@router.get("/featured")
def featured_recipes(db: Session = Depends(get_db)):
    recipes = RecipeService.featured_recipes(db)
    return success_response([RecipeMapper.to_summary(r) for r in recipes])


@router.get("/suggestions")
def recipe_suggestions(
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Approved recipes matched to the caller's dietary profile"""
    recipes, message = RecipeService.suggest_for_user(db, user, limit)
    return success_response([RecipeMapper.to_summary(r) for r in recipes], message)


@router.post("/generate", status_code=status.HTTP_201_CREATED)
def generate_recipe(
    body: AIRecipeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    recipe = AIService.generate_recipe(db, user, body)
    return success_response(RecipeMapper.to_detail(recipe), "Recipe generated successfully")


@router.get("/{recipe_id}")
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    recipe = RecipeService.get_recipe(db, recipe_id)
    return success_response(RecipeMapper.to_detail(recipe))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    recipe = RecipeService.create_recipe(db, user, body)
    return success_response({"id": recipe.id}, "Recipe created successfully")


@router.put("/{recipe_id}")
def update_recipe(
    recipe_id: int,
    body: RecipeUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RecipeService.update_recipe(db, user, recipe_id, body)
    recipe = RecipeService.get_recipe(db, recipe_id, count_view=False)
    return success_response(RecipeMapper.to_detail(recipe), "Recipe updated successfully")


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RecipeService.delete_recipe(db, user, recipe_id)
    return success_response(message="Recipe deleted successfully")


@router.post("/{recipe_id}/review", status_code=status.HTTP_201_CREATED)
def review_recipe(
    recipe_id: int,
    body: ReviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    review = RecipeService.add_review(db, user, recipe_id, body)
    return success_response(RecipeMapper.review_to_dict(review), "Review added successfully")


@router.post("/{recipe_id}/like")
def like_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    liked, like_count = RecipeService.toggle_like(db, user, recipe_id)
    return success_response(
        {"liked": liked, "like_count": like_count},
        "Recipe liked" if liked else "Recipe unliked",
    )

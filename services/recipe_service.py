from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFoundError, ForbiddenError, ServiceValidationError
from domain.enums import Difficulty
from domain.models import User, Recipe, RecipeIngredient, RecipeReview, RecipeLike
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    RecipeIngredientIn,
    ReviewCreate,
    AIRecipeRequest,
)
from domain.schemas.ai_schemas import GeneratedRecipe
from repositories import (
    RecipeRepository,
    ReviewRepository,
    LikeRepository,
    IngredientRepository,
    ProfileRepository,
)

logger = logging.getLogger("nutriplan.recipes")

MODERATION_FIELDS = {"is_approved", "is_featured"}


class RecipeService:
    """Business logic for recipes, reviews and likes"""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def list_recipes(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        is_approved: Optional[bool] = None,
        is_featured: Optional[bool] = None,
        difficulty: Optional[Difficulty] = None,
        cuisine_type: Optional[str] = None,
    ) -> Tuple[List[Recipe], int]:
        return RecipeRepository(db).search(
            page,
            limit,
            search=search,
            is_approved=is_approved,
            is_featured=is_featured,
            difficulty=difficulty,
            cuisine_type=cuisine_type,
        )

    @staticmethod
    def featured_recipes(db: Session, limit: int = 10) -> List[Recipe]:
        return RecipeRepository(db).featured(limit)

    @staticmethod
    def suggest_for_user(db: Session, user: User, limit: int = 10) -> Tuple[List[Recipe], str]:
        """
        Approved recipes matching the user's dietary preferences and avoiding
        their allergies; popular recipes when the user has no profile.

        Returns:
            (recipes, message describing which strategy was used)
        """
        recipe_repo = RecipeRepository(db)
        profile = ProfileRepository(db).get_by_user_id(user.id)
        if profile is None:
            return recipe_repo.popular(limit), "Popular recipes"

        preferences = {p.lower() for p in (profile.dietary_preferences or [])}
        allergies = {a.lower() for a in (profile.allergies or [])}

        matches = []
        for recipe in recipe_repo.approved():
            tags = {t.lower() for t in (recipe.dietary_tags or [])}
            if preferences and not (tags & preferences):
                continue
            if allergies & tags:
                continue
            matches.append(recipe)

        matches.sort(key=lambda r: (r.avg_rating or 0, r.view_count or 0), reverse=True)
        logger.info(
            f"recipe_suggestions user_id={user.id} matches={len(matches)} limit={limit}"
        )
        return matches[:limit], "Personalized recipe suggestions"

    @staticmethod
    def get_recipe(db: Session, recipe_id: int, count_view: bool = True) -> Recipe:
        """Fetch a recipe with details; each public read counts as a view"""
        recipe = RecipeRepository(db).get_with_details(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        if count_view:
            recipe.view_count = (recipe.view_count or 0) + 1
            db.commit()
        return recipe

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @staticmethod
    def _ingredient_lines(
        db: Session, ingredients: List[RecipeIngredientIn]
    ) -> List[RecipeIngredient]:
        """Link each line to a catalogue ingredient of the same name when one exists"""
        ingredient_repo = IngredientRepository(db)
        lines = []
        for item in ingredients:
            match = ingredient_repo.get_by_name(item.name)
            lines.append(
                RecipeIngredient(
                    ingredient_id=match.id if match else None,
                    ingredient_name=item.name,
                    amount=item.amount,
                    unit=item.unit,
                    notes=item.notes,
                )
            )
        return lines

    @staticmethod
    def create_recipe(db: Session, user: User, data: RecipeCreate) -> Recipe:
        """Create a recipe and its ingredient lines in one transaction"""
        fields = data.model_dump(exclude={"ingredients"})
        recipe = Recipe(**fields, created_by=user.id)
        try:
            recipe.ingredients = RecipeService._ingredient_lines(db, data.ingredients)
            db.add(recipe)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"recipe_create_failed user_id={user.id} error={str(e)}")
            raise ServiceValidationError("Could not save recipe")
        db.refresh(recipe)
        logger.info(f"recipe_created user_id={user.id} recipe_id={recipe.id}")
        return recipe

    @staticmethod
    def _load_for_change(db: Session, user: User, recipe_id: int) -> Recipe:
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        if recipe.created_by != user.id and not user.is_admin:
            logger.warning(
                f"recipe_change_forbidden user_id={user.id} recipe_id={recipe_id}"
            )
            raise ForbiddenError("You can only modify your own recipes")
        return recipe

    @staticmethod
    def update_recipe(
        db: Session, user: User, recipe_id: int, data: RecipeUpdate
    ) -> Recipe:
        """Partial update; ingredient lines are replaced when provided"""
        recipe = RecipeService._load_for_change(db, user, recipe_id)
        fields = data.model_dump(exclude_unset=True, exclude={"ingredients"})
        if not user.is_admin:
            fields = {k: v for k, v in fields.items() if k not in MODERATION_FIELDS}

        try:
            for key, value in fields.items():
                setattr(recipe, key, value)
            if data.ingredients is not None:
                RecipeRepository(db).replace_ingredients(
                    recipe, RecipeService._ingredient_lines(db, data.ingredients)
                )
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"recipe_update_failed recipe_id={recipe_id} error={str(e)}")
            raise ServiceValidationError("Could not update recipe")
        db.refresh(recipe)
        logger.info(f"recipe_updated user_id={user.id} recipe_id={recipe_id}")
        return recipe

    @staticmethod
    def delete_recipe(db: Session, user: User, recipe_id: int) -> None:
        recipe = RecipeService._load_for_change(db, user, recipe_id)
        db.delete(recipe)
        db.commit()
        logger.info(f"recipe_deleted user_id={user.id} recipe_id={recipe_id}")

    @staticmethod
    def add_review(
        db: Session, user: User, recipe_id: int, data: ReviewCreate
    ) -> RecipeReview:
        """One review per user; the recipe's average rating is recomputed"""
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")

        review_repo = ReviewRepository(db)
        if review_repo.get_for_user(recipe_id, user.id):
            raise ServiceValidationError("You have already reviewed this recipe")

        review = RecipeReview(
            recipe_id=recipe_id, user_id=user.id, rating=data.rating, comment=data.comment
        )
        try:
            db.add(review)
            db.flush()
            recipe.avg_rating = review_repo.average_rating(recipe_id)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ServiceValidationError("You have already reviewed this recipe")
        db.refresh(review)
        logger.info(
            f"recipe_reviewed user_id={user.id} recipe_id={recipe_id} rating={data.rating}"
        )
        return review

    @staticmethod
    def toggle_like(db: Session, user: User, recipe_id: int) -> Tuple[bool, int]:
        """
        Like the recipe, or remove an existing like.

        Returns:
            (liked after the call, new like_count)
        """
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")

        existing = LikeRepository(db).get_for_user(recipe_id, user.id)
        if existing:
            db.delete(existing)
            recipe.like_count = max((recipe.like_count or 0) - 1, 0)
            liked = False
        else:
            db.add(RecipeLike(recipe_id=recipe_id, user_id=user.id))
            recipe.like_count = (recipe.like_count or 0) + 1
            liked = True
        db.commit()
        logger.info(
            f"recipe_like_toggled user_id={user.id} recipe_id={recipe_id} liked={liked}"
        )
        return liked, recipe.like_count

    @staticmethod
    def save_generated_recipe(
        db: Session,
        user: User,
        generated: GeneratedRecipe,
        request: AIRecipeRequest,
        link_catalogue: bool = True,
    ) -> Recipe:
        """
        Persist a generated recipe.

        Instruction steps are joined with blank lines and every ingredient is
        linked to a catalogue row, creating missing rows with empty nutrition.
        The placeholder fallback recipe passes ``link_catalogue=False``.
        Unapproved until an admin reviews it.
        """
        ingredient_repo = IngredientRepository(db)
        try:
            recipe = Recipe(
                title=generated.title,
                description=generated.description,
                instructions="\n\n".join(s.strip() for s in generated.instructions),
                prep_time=generated.prep_time if generated.prep_time is not None else 0,
                cook_time=generated.cook_time if generated.cook_time is not None else 0,
                servings=generated.servings or request.servings or 4,
                difficulty=generated.difficulty or request.difficulty or Difficulty.MEDIUM,
                cuisine_type=generated.cuisine_type or request.cuisine_type or "general",
                dietary_tags=generated.dietary_tags or request.dietary_preferences,
                calories_per_serving=generated.calories_per_serving,
                protein_per_serving=generated.protein_per_serving,
                carbs_per_serving=generated.carbs_per_serving,
                fat_per_serving=generated.fat_per_serving,
                fiber_per_serving=generated.fiber_per_serving,
                sugar_per_serving=generated.sugar_per_serving,
                sodium_per_serving=generated.sodium_per_serving,
                tips=generated.tips,
                nutrition_notes=generated.nutrition_notes,
                created_by=user.id,
                is_ai_generated=True,
            )
            for item in generated.ingredients:
                ingredient = (
                    ingredient_repo.get_or_create(item.name) if link_catalogue else None
                )
                recipe.ingredients.append(
                    RecipeIngredient(
                        ingredient_id=ingredient.id if ingredient else None,
                        ingredient_name=item.name,
                        amount=item.amount,
                        unit=item.unit,
                        notes=item.notes,
                    )
                )
            db.add(recipe)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"generated_recipe_save_failed user_id={user.id} error={str(e)}")
            raise ServiceValidationError("Could not save generated recipe")

        logger.info(f"generated_recipe_saved user_id={user.id} recipe_id={recipe.id}")
        return RecipeRepository(db).get_with_details(recipe.id)

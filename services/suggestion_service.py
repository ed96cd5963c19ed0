from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.enums import (
    SuggestionStatus,
    SuggestionType,
    InteractionType,
    MealType,
    Difficulty,
)
from domain.models import User, Suggestion, SuggestionInteraction
from domain.schemas.suggestion_schemas import SuggestionCreate, VoteRequest
from repositories import (
    SuggestionRepository,
    MealSuggestionRepository,
    RecipeSuggestionRepository,
)
from repositories.suggestion_repository import CuratedSuggestionRepository

logger = logging.getLogger("nutriplan.suggestions")

PUBLIC_STATUSES = [SuggestionStatus.APPROVED, SuggestionStatus.IMPLEMENTED]


class SuggestionService:
    """User-authored suggestions and interactions with curated suggestions"""

    # ------------------------------------------------------------------
    # User-authored suggestions
    # ------------------------------------------------------------------

    @staticmethod
    def list_own(
        db: Session,
        user: User,
        page: int,
        limit: int,
        status: Optional[SuggestionStatus] = None,
        suggestion_type: Optional[SuggestionType] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Suggestion], int]:
        return SuggestionRepository(db).search(
            page,
            limit,
            user_id=user.id,
            status=[status] if status else None,
            suggestion_type=suggestion_type,
            search=search,
        )

    @staticmethod
    def list_public(db: Session, page: int, limit: int) -> Tuple[List[Suggestion], int]:
        """Approved and implemented suggestions from every user"""
        return SuggestionRepository(db).search(page, limit, status=PUBLIC_STATUSES)

    @staticmethod
    def get_suggestion(db: Session, suggestion_id: int) -> Suggestion:
        suggestion = SuggestionRepository(db).get_with_interactions(suggestion_id)
        if not suggestion:
            raise NotFoundError("Suggestion not found")
        return suggestion

    @staticmethod
    def create_suggestion(db: Session, user: User, data: SuggestionCreate) -> Suggestion:
        suggestion = SuggestionRepository(db).create(
            Suggestion(
                user_id=user.id,
                suggestion_type=data.suggestion_type,
                title=data.title,
                description=data.description,
                content=data.content,
                status=SuggestionStatus.PENDING,
            )
        )
        logger.info(
            f"suggestion_created user_id={user.id} suggestion_id={suggestion.id} "
            f"type={data.suggestion_type.value}"
        )
        return SuggestionService.get_suggestion(db, suggestion.id)

    @staticmethod
    def vote(db: Session, user: User, suggestion_id: int, data: VoteRequest) -> Suggestion:
        """One vote per user; voting again replaces the previous vote"""
        repo = SuggestionRepository(db)
        if not repo.get_by_id(suggestion_id):
            raise NotFoundError("Suggestion not found")

        existing = repo.get_vote(suggestion_id, user.id)
        if existing:
            existing.interaction_type = data.interaction_type
        else:
            db.add(
                SuggestionInteraction(
                    suggestion_id=suggestion_id,
                    user_id=user.id,
                    interaction_type=data.interaction_type,
                )
            )
        db.commit()
        logger.info(
            f"suggestion_voted user_id={user.id} suggestion_id={suggestion_id} "
            f"vote={data.interaction_type.value}"
        )
        db.expire_all()
        return SuggestionService.get_suggestion(db, suggestion_id)

    # ------------------------------------------------------------------
    # Curated meal and recipe suggestions
    # ------------------------------------------------------------------

    @staticmethod
    def list_meals(
        db: Session,
        page: int,
        limit: int,
        meal_type: Optional[MealType] = None,
        cuisine_type: Optional[str] = None,
        search: Optional[str] = None,
    ):
        return MealSuggestionRepository(db).search(
            page, limit, search=search, cuisine_type=cuisine_type, meal_type=meal_type
        )

    @staticmethod
    def list_recipes(
        db: Session,
        page: int,
        limit: int,
        difficulty: Optional[Difficulty] = None,
        cuisine_type: Optional[str] = None,
        search: Optional[str] = None,
    ):
        return RecipeSuggestionRepository(db).search(
            page, limit, search=search, cuisine_type=cuisine_type, difficulty=difficulty
        )

    @staticmethod
    def _toggle(
        db: Session,
        repo: CuratedSuggestionRepository,
        label: str,
        user: User,
        suggestion_id: int,
        interaction_type: InteractionType,
    ) -> Tuple[bool, str]:
        """
        Toggle one interaction on an active curated suggestion.

        Adding a view bumps ``view_count``; likes move ``like_count`` both ways.

        Returns:
            (interaction active after the call, user-facing message)
        """
        suggestion = repo.get_active(suggestion_id)
        if not suggestion:
            raise NotFoundError(f"{label} suggestion not found")

        existing = repo.get_interaction(suggestion_id, user.id, interaction_type)
        if existing:
            db.delete(existing)
            if interaction_type == InteractionType.LIKE:
                suggestion.like_count = max((suggestion.like_count or 0) - 1, 0)
            active = False
        else:
            repo.add_interaction(suggestion_id, user.id, interaction_type)
            if interaction_type == InteractionType.VIEW:
                suggestion.view_count = (suggestion.view_count or 0) + 1
            elif interaction_type == InteractionType.LIKE:
                suggestion.like_count = (suggestion.like_count or 0) + 1
            active = True
        db.commit()

        verb = "added" if active else "removed"
        logger.info(
            f"curated_interaction kind={label.lower()} user_id={user.id} "
            f"suggestion_id={suggestion_id} type={interaction_type.value} {verb}"
        )
        return active, f"{label} suggestion {interaction_type.value} {verb} successfully"

    @staticmethod
    def interact_meal(
        db: Session, user: User, suggestion_id: int, interaction_type: InteractionType
    ) -> Tuple[bool, str]:
        return SuggestionService._toggle(
            db, MealSuggestionRepository(db), "Meal", user, suggestion_id, interaction_type
        )

    @staticmethod
    def interact_recipe(
        db: Session, user: User, suggestion_id: int, interaction_type: InteractionType
    ) -> Tuple[bool, str]:
        return SuggestionService._toggle(
            db,
            RecipeSuggestionRepository(db),
            "Recipe",
            user,
            suggestion_id,
            interaction_type,
        )

    @staticmethod
    def saved(db: Session, user: User) -> Tuple[list, list]:
        """Meal and recipe suggestions the user saved, most recent first"""
        meals = MealSuggestionRepository(db).saved_by(user.id)
        recipes = RecipeSuggestionRepository(db).saved_by(user.id)
        return meals, recipes

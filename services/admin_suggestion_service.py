"""
Admin side of the suggestion system.

Covers moderation of user-authored suggestions, the curated meal and recipe
suggestion catalogues, and suggestions sent to individual users.
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from app.exceptions import NotFoundError, ConflictError
from domain.enums import (
    SuggestionStatus,
    SuggestionType,
    AdminSuggestionKind,
    UserRole,
    MealType,
    Difficulty,
)
from domain.models import (
    User,
    Suggestion,
    MealSuggestion,
    RecipeSuggestion,
    AdminUserSuggestion,
    WeeklyMealSuggestion,
    WeeklyMealSuggestionItem,
)
from domain.schemas.suggestion_schemas import (
    SuggestionStatusUpdate,
    MealSuggestionCreate,
    MealSuggestionUpdate,
    RecipeSuggestionCreate,
    RecipeSuggestionUpdate,
    SendMealSuggestion,
    SendRecipeSuggestion,
    WeeklySuggestionCreate,
    SuggestionStatusPatch,
)
from repositories import (
    UserRepository,
    SuggestionRepository,
    MealSuggestionRepository,
    RecipeSuggestionRepository,
    AdminUserSuggestionRepository,
    WeeklySuggestionRepository,
    paginate,
)
from repositories.suggestion_repository import CuratedSuggestionRepository

logger = logging.getLogger("nutriplan.admin_suggestions")


class AdminSuggestionService:
    """Moderation of user suggestions and the curated catalogues"""

    # ------------------------------------------------------------------
    # User-authored suggestions
    # ------------------------------------------------------------------

    @staticmethod
    def list_suggestions(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        suggestion_type: Optional[SuggestionType] = None,
        status: Optional[SuggestionStatus] = None,
    ) -> Tuple[List[Suggestion], int]:
        return SuggestionRepository(db).search(
            page,
            limit,
            status=[status] if status else None,
            suggestion_type=suggestion_type,
            search=search,
        )

    @staticmethod
    def analytics(db: Session) -> Dict[str, Any]:
        """Counts by status and type, five newest and five most interacted"""
        rows = SuggestionRepository(db).all_with_interactions()
        newest = sorted(rows, key=lambda s: (s.created_at, s.id), reverse=True)
        busiest = sorted(rows, key=lambda s: (len(s.interactions), s.id), reverse=True)
        return {
            "statusStats": {
                status.value: sum(1 for s in rows if s.status == status)
                for status in SuggestionStatus
            },
            "typeStats": {
                kind.value: sum(1 for s in rows if s.suggestion_type == kind)
                for kind in SuggestionType
            },
            "total": len(rows),
            "recentSuggestions": newest[:5],
            "topSuggestions": busiest[:5],
        }

    @staticmethod
    def get_suggestion(db: Session, suggestion_id: int) -> Suggestion:
        suggestion = SuggestionRepository(db).get_with_interactions(suggestion_id)
        if not suggestion:
            raise NotFoundError("Suggestion not found")
        return suggestion

    @staticmethod
    def update_status(
        db: Session, admin: User, suggestion_id: int, data: SuggestionStatusUpdate
    ) -> Suggestion:
        suggestion = AdminSuggestionService.get_suggestion(db, suggestion_id)
        suggestion.status = data.status
        if data.admin_response is not None:
            suggestion.admin_response = data.admin_response
        db.commit()
        logger.info(
            f"suggestion_status admin_id={admin.id} suggestion_id={suggestion_id} "
            f"status={data.status.value}"
        )
        return suggestion

    @staticmethod
    def delete_suggestion(db: Session, admin: User, suggestion_id: int) -> None:
        if not SuggestionRepository(db).delete(suggestion_id):
            raise NotFoundError("Suggestion not found")
        logger.info(f"suggestion_deleted admin_id={admin.id} suggestion_id={suggestion_id}")

    # ------------------------------------------------------------------
    # Curated catalogues
    # ------------------------------------------------------------------

    @staticmethod
    def list_meal_suggestions(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        meal_type: Optional[MealType] = None,
        cuisine_type: Optional[str] = None,
        is_active: Optional[bool] = None,
    ):
        return MealSuggestionRepository(db).search(
            page,
            limit,
            active_only=False,
            search=search,
            cuisine_type=cuisine_type,
            meal_type=meal_type,
            is_active=is_active,
        )

    @staticmethod
    def list_recipe_suggestions(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
        cuisine_type: Optional[str] = None,
        is_active: Optional[bool] = None,
    ):
        return RecipeSuggestionRepository(db).search(
            page,
            limit,
            active_only=False,
            search=search,
            cuisine_type=cuisine_type,
            difficulty=difficulty,
            is_active=is_active,
        )

    @staticmethod
    def _curated_fields(data) -> dict:
        """Submitted fields; null flags are dropped since the columns are not nullable"""
        fields = data.model_dump(exclude_unset=True)
        for flag in ("is_active", "is_featured"):
            if fields.get(flag, False) is None:
                del fields[flag]
        return fields

    @staticmethod
    def create_meal_suggestion(db: Session, admin: User, data: MealSuggestionCreate) -> MealSuggestion:
        fields = AdminSuggestionService._curated_fields(data)
        suggestion = MealSuggestionRepository(db).create(
            MealSuggestion(**fields, created_by=admin.id)
        )
        logger.info(f"meal_suggestion_created admin_id={admin.id} id={suggestion.id}")
        return suggestion

    @staticmethod
    def create_recipe_suggestion(
        db: Session, admin: User, data: RecipeSuggestionCreate
    ) -> RecipeSuggestion:
        fields = AdminSuggestionService._curated_fields(data)
        suggestion = RecipeSuggestionRepository(db).create(
            RecipeSuggestion(**fields, created_by=admin.id)
        )
        logger.info(f"recipe_suggestion_created admin_id={admin.id} id={suggestion.id}")
        return suggestion

    @staticmethod
    def _load_curated(repo: CuratedSuggestionRepository, label: str, suggestion_id: int):
        suggestion = repo.get_by_id(suggestion_id)
        if not suggestion:
            raise NotFoundError(f"{label} suggestion not found")
        return suggestion

    @staticmethod
    def _update_curated(repo: CuratedSuggestionRepository, label: str, suggestion_id: int, data):
        suggestion = AdminSuggestionService._load_curated(repo, label, suggestion_id)
        for key, value in AdminSuggestionService._curated_fields(data).items():
            setattr(suggestion, key, value)
        return repo.update(suggestion)

    @staticmethod
    def update_meal_suggestion(db: Session, suggestion_id: int, data: MealSuggestionUpdate):
        return AdminSuggestionService._update_curated(
            MealSuggestionRepository(db), "Meal", suggestion_id, data
        )

    @staticmethod
    def update_recipe_suggestion(db: Session, suggestion_id: int, data: RecipeSuggestionUpdate):
        return AdminSuggestionService._update_curated(
            RecipeSuggestionRepository(db), "Recipe", suggestion_id, data
        )

    @staticmethod
    def delete_meal_suggestion(db: Session, suggestion_id: int) -> None:
        if not MealSuggestionRepository(db).delete(suggestion_id):
            raise NotFoundError("Meal suggestion not found")
        logger.info(f"meal_suggestion_deleted id={suggestion_id}")

    @staticmethod
    def delete_recipe_suggestion(db: Session, suggestion_id: int) -> None:
        if not RecipeSuggestionRepository(db).delete(suggestion_id):
            raise NotFoundError("Recipe suggestion not found")
        logger.info(f"recipe_suggestion_deleted id={suggestion_id}")

    @staticmethod
    def _flip(repo: CuratedSuggestionRepository, label: str, suggestion_id: int, flag: str):
        suggestion = AdminSuggestionService._load_curated(repo, label, suggestion_id)
        setattr(suggestion, flag, not getattr(suggestion, flag))
        repo.update(suggestion)
        logger.info(
            f"curated_flag_toggled kind={label.lower()} id={suggestion_id} "
            f"{flag}={getattr(suggestion, flag)}"
        )
        return suggestion

    @staticmethod
    def toggle_meal_status(db: Session, suggestion_id: int) -> MealSuggestion:
        return AdminSuggestionService._flip(
            MealSuggestionRepository(db), "Meal", suggestion_id, "is_active"
        )

    @staticmethod
    def toggle_recipe_status(db: Session, suggestion_id: int) -> RecipeSuggestion:
        return AdminSuggestionService._flip(
            RecipeSuggestionRepository(db), "Recipe", suggestion_id, "is_active"
        )

    @staticmethod
    def toggle_recipe_featured(db: Session, suggestion_id: int) -> RecipeSuggestion:
        return AdminSuggestionService._flip(
            RecipeSuggestionRepository(db), "Recipe", suggestion_id, "is_featured"
        )


class AdminUserSuggestionService:
    """Suggestions an admin sends to one user"""

    @staticmethod
    def list_users(
        db: Session,
        page: int,
        limit: int,
        search: Optional[str] = None,
        has_profile: Optional[bool] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Regular users with how many suggestions of each kind they have received"""
        query = db.query(User).options(selectinload(User.profile)).filter(
            User.role == UserRole.USER
        )
        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(
                    User.email.ilike(like),
                    User.first_name.ilike(like),
                    User.last_name.ilike(like),
                )
            )
        if has_profile is True:
            query = query.filter(User.profile.has())
        elif has_profile is False:
            query = query.filter(~User.profile.has())
        users, total = paginate(
            query.order_by(User.first_name.asc(), User.last_name.asc(), User.id.asc()),
            page,
            limit,
        )

        singles = AdminUserSuggestionRepository(db)
        weekly = WeeklySuggestionRepository(db)
        rows = []
        for user in users:
            received = singles.for_user(user.id)
            rows.append(
                {
                    "user": user,
                    "has_profile": user.profile is not None,
                    "suggestionCount": len(received),
                    "unreadCount": sum(1 for s in received if not s.is_read),
                    "weeklyCount": len(weekly.for_user(user.id)),
                }
            )
        return rows, total

    @staticmethod
    def _recipient(db: Session, user_id: int) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user or user.role != UserRole.USER:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _send(
        db: Session,
        admin: User,
        user_id: int,
        kind: AdminSuggestionKind,
        suggestion_id: int,
        message: Optional[str],
        admin_notes: Optional[str],
    ) -> AdminUserSuggestion:
        AdminUserSuggestionService._recipient(db, user_id)
        if kind == AdminSuggestionKind.MEAL:
            repo, label, link = MealSuggestionRepository(db), "Meal", "meal_suggestion_id"
        else:
            repo, label, link = RecipeSuggestionRepository(db), "Recipe", "recipe_suggestion_id"
        if not repo.get_active(suggestion_id):
            raise NotFoundError(f"{label} suggestion not found")

        row = AdminUserSuggestionRepository(db).create(
            AdminUserSuggestion(
                user_id=user_id,
                suggestion_type=kind,
                message=message,
                admin_notes=admin_notes,
                created_by=admin.id,
                **{link: suggestion_id},
            )
        )
        logger.info(
            f"suggestion_sent admin_id={admin.id} user_id={user_id} kind={kind.value} "
            f"suggestion_id={suggestion_id}"
        )
        return row

    @staticmethod
    def send_meal(db: Session, admin: User, data: SendMealSuggestion) -> AdminUserSuggestion:
        return AdminUserSuggestionService._send(
            db,
            admin,
            data.user_id,
            AdminSuggestionKind.MEAL,
            data.meal_suggestion_id,
            data.message,
            data.admin_notes,
        )

    @staticmethod
    def send_recipe(db: Session, admin: User, data: SendRecipeSuggestion) -> AdminUserSuggestion:
        return AdminUserSuggestionService._send(
            db,
            admin,
            data.user_id,
            AdminSuggestionKind.RECIPE,
            data.recipe_suggestion_id,
            data.message,
            data.admin_notes,
        )

    @staticmethod
    def create_weekly(db: Session, admin: User, data: WeeklySuggestionCreate) -> WeeklyMealSuggestion:
        """One weekly suggestion per user and week; the week ends six days after it starts"""
        AdminUserSuggestionService._recipient(db, data.user_id)
        repo = WeeklySuggestionRepository(db)
        if repo.get_for_week(data.user_id, data.week_start_date):
            raise ConflictError(repo.conflict_message)

        weekly = WeeklyMealSuggestion(
            **data.model_dump(exclude={"items"}),
            week_end_date=data.week_start_date + timedelta(days=6),
            created_by=admin.id,
            items=[WeeklyMealSuggestionItem(**item.model_dump()) for item in data.items],
        )
        weekly = repo.create(weekly)
        logger.info(
            f"weekly_suggestion_created admin_id={admin.id} user_id={data.user_id} "
            f"weekly_id={weekly.id} items={len(data.items)}"
        )
        return repo.get_with_items(weekly.id)

    @staticmethod
    def list_sent(
        db: Session,
        page: int,
        limit: int,
        user_id: Optional[int] = None,
        suggestion_type: Optional[AdminSuggestionKind] = None,
        is_read: Optional[bool] = None,
        is_accepted: Optional[bool] = None,
    ) -> Tuple[List[AdminUserSuggestion], int]:
        return AdminUserSuggestionRepository(db).search(
            page,
            limit,
            user_id=user_id,
            suggestion_type=suggestion_type,
            is_read=is_read,
            is_accepted=is_accepted,
        )

    @staticmethod
    def list_weekly(
        db: Session, page: int, limit: int, user_id: Optional[int] = None
    ) -> Tuple[List[WeeklyMealSuggestion], int]:
        return WeeklySuggestionRepository(db).search(page, limit, user_id=user_id)

    @staticmethod
    def get_weekly(db: Session, weekly_id: int) -> WeeklyMealSuggestion:
        weekly = WeeklySuggestionRepository(db).get_with_items(weekly_id)
        if not weekly:
            raise NotFoundError("Weekly suggestion not found")
        return weekly

    @staticmethod
    def _patch(row, data: SuggestionStatusPatch) -> None:
        # is_accepted may be reset to null, is_read may not
        fields = data.model_dump(exclude_unset=True)
        if fields.get("is_read", False) is None:
            del fields["is_read"]
        for key, value in fields.items():
            setattr(row, key, value)

    @staticmethod
    def update_status(
        db: Session, suggestion_id: int, data: SuggestionStatusPatch
    ) -> AdminUserSuggestion:
        repo = AdminUserSuggestionRepository(db)
        row = repo.get_by_id(suggestion_id)
        if not row:
            raise NotFoundError("Suggestion not found")
        AdminUserSuggestionService._patch(row, data)
        return repo.update(row)

    @staticmethod
    def update_weekly_status(
        db: Session, weekly_id: int, data: SuggestionStatusPatch
    ) -> WeeklyMealSuggestion:
        weekly = AdminUserSuggestionService.get_weekly(db, weekly_id)
        AdminUserSuggestionService._patch(weekly, data)
        db.commit()
        return weekly

    @staticmethod
    def analytics(db: Session) -> Dict[str, Any]:
        singles = AdminUserSuggestionRepository(db).for_user()
        weekly = WeeklySuggestionRepository(db).for_user()

        per_user: Dict[int, int] = {}
        for row in singles:
            per_user[row.user_id] = per_user.get(row.user_id, 0) + 1
        for row in weekly:
            per_user[row.user_id] = per_user.get(row.user_id, 0) + 1
        top_ids = sorted(per_user, key=lambda uid: (-per_user[uid], uid))[:5]
        user_repo = UserRepository(db)
        top_users = []
        for uid in top_ids:
            user = user_repo.get_by_id(uid)
            top_users.append(
                {
                    "user_id": uid,
                    "name": user.full_name if user else None,
                    "email": user.email if user else None,
                    "suggestionCount": per_user[uid],
                }
            )

        recent, _ = AdminUserSuggestionRepository(db).search(1, 5)
        return {
            "userSuggestionStats": {
                "total": len(singles),
                "read": sum(1 for s in singles if s.is_read),
                "accepted": sum(1 for s in singles if s.is_accepted is True),
                "rejected": sum(1 for s in singles if s.is_accepted is False),
                "meal": sum(1 for s in singles if s.suggestion_type == AdminSuggestionKind.MEAL),
                "recipe": sum(
                    1 for s in singles if s.suggestion_type == AdminSuggestionKind.RECIPE
                ),
            },
            "weeklySuggestionStats": {
                "total": len(weekly),
                "read": sum(1 for w in weekly if w.is_read),
                "accepted": sum(1 for w in weekly if w.is_accepted is True),
                "rejected": sum(1 for w in weekly if w.is_accepted is False),
            },
            "topUsers": top_users,
            "recentSuggestions": recent,
        }

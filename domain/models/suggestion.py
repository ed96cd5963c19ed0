"""
Suggestion models.

Three families live here:
- user-authored suggestions with an approval workflow and up/down votes
- admin-curated meal and recipe suggestions users can view, like, save and try
- suggestions an admin sends to one specific user, including weekly plans
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    Date,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    JSON,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship, declared_attr
from sqlalchemy.sql import func

from domain.models.database import Base, enum_values
from domain.enums import (
    SuggestionType,
    SuggestionStatus,
    VoteType,
    InteractionType,
    AdminSuggestionKind,
    MealType,
    DayOfWeek,
    Difficulty,
)


# =============================================================================
# USER-AUTHORED SUGGESTIONS
# =============================================================================


class Suggestion(Base):
    __tablename__ = "suggestions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    suggestion_type = Column(
        SQLEnum(SuggestionType, name="suggestion_type", values_callable=enum_values),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text)
    content = Column(JSON)
    status = Column(
        SQLEnum(SuggestionStatus, name="suggestion_status", values_callable=enum_values),
        nullable=False,
        default=SuggestionStatus.PENDING,
    )
    admin_response = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="suggestions")
    interactions = relationship(
        "SuggestionInteraction", back_populates="suggestion", cascade="all, delete-orphan"
    )


class SuggestionInteraction(Base):
    """A user's vote on a suggestion; one per user, switching replaces it"""

    __tablename__ = "suggestion_interactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    suggestion_id = Column(
        Integer, ForeignKey("suggestions.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    interaction_type = Column(
        SQLEnum(VoteType, name="vote_type", values_callable=enum_values), nullable=False
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    suggestion = relationship("Suggestion", back_populates="interactions")

    __table_args__ = (
        UniqueConstraint("suggestion_id", "user_id", name="uq_suggestion_vote_user"),
    )


# =============================================================================
# ADMIN-CURATED MEAL / RECIPE SUGGESTIONS
# =============================================================================


class CuratedSuggestionMixin:
    """Columns shared by meal and recipe suggestions"""

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    cuisine_type = Column(String(100))
    dietary_tags = Column(JSON)
    difficulty = Column(
        SQLEnum(Difficulty, name="difficulty", values_callable=enum_values)
    )
    prep_time = Column(Integer)
    cook_time = Column(Integer)
    calories_per_serving = Column(Numeric(8, 2, asdecimal=False))
    protein_per_serving = Column(Numeric(8, 2, asdecimal=False))
    carbs_per_serving = Column(Numeric(8, 2, asdecimal=False))
    fat_per_serving = Column(Numeric(8, 2, asdecimal=False))
    fiber_per_serving = Column(Numeric(8, 2, asdecimal=False))
    sugar_per_serving = Column(Numeric(8, 2, asdecimal=False))
    sodium_per_serving = Column(Numeric(8, 2, asdecimal=False))
    image_url = Column(String(500))
    ingredients = Column(JSON)  # [{"name", "amount", "unit"}]
    instructions = Column(Text)
    tips = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    @declared_attr
    def created_by(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))


class MealSuggestion(CuratedSuggestionMixin, Base):
    __tablename__ = "meal_suggestions"

    meal_type = Column(SQLEnum(MealType, name="meal_type", values_callable=enum_values))

    interactions = relationship(
        "MealSuggestionInteraction", cascade="all, delete-orphan"
    )


class RecipeSuggestion(CuratedSuggestionMixin, Base):
    __tablename__ = "recipe_suggestions"

    servings = Column(Integer)
    video_url = Column(String(500))
    nutrition_notes = Column(Text)

    interactions = relationship(
        "RecipeSuggestionInteraction", cascade="all, delete-orphan"
    )


class MealSuggestionInteraction(Base):
    __tablename__ = "meal_suggestion_interactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_suggestion_id = Column(
        Integer, ForeignKey("meal_suggestions.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    interaction_type = Column(
        SQLEnum(InteractionType, name="interaction_type", values_callable=enum_values),
        nullable=False,
    )
    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "meal_suggestion_id", "user_id", "interaction_type", name="uq_meal_interaction"
        ),
    )


class RecipeSuggestionInteraction(Base):
    __tablename__ = "recipe_suggestion_interactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_suggestion_id = Column(
        Integer, ForeignKey("recipe_suggestions.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    interaction_type = Column(
        SQLEnum(InteractionType, name="interaction_type", values_callable=enum_values),
        nullable=False,
    )
    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "recipe_suggestion_id",
            "user_id",
            "interaction_type",
            name="uq_recipe_interaction",
        ),
    )


# =============================================================================
# SUGGESTIONS SENT BY AN ADMIN TO ONE USER
# =============================================================================


class AdminUserSuggestion(Base):
    __tablename__ = "admin_user_suggestions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    suggestion_type = Column(
        SQLEnum(AdminSuggestionKind, name="admin_suggestion_kind", values_callable=enum_values),
        nullable=False,
    )
    meal_suggestion_id = Column(
        Integer, ForeignKey("meal_suggestions.id", ondelete="CASCADE")
    )
    recipe_suggestion_id = Column(
        Integer, ForeignKey("recipe_suggestions.id", ondelete="CASCADE")
    )
    message = Column(Text)
    admin_notes = Column(Text)
    is_read = Column(Boolean, nullable=False, default=False)
    is_accepted = Column(Boolean)  # None until the user responds
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", foreign_keys=[user_id])
    admin = relationship("User", foreign_keys=[created_by])
    meal_suggestion = relationship("MealSuggestion")
    recipe_suggestion = relationship("RecipeSuggestion")


class WeeklyMealSuggestion(Base):
    __tablename__ = "weekly_meal_suggestions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_start_date = Column(Date, nullable=False)
    week_end_date = Column(Date, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    total_calories = Column(Numeric(10, 2, asdecimal=False))
    total_protein = Column(Numeric(10, 2, asdecimal=False))
    total_carbs = Column(Numeric(10, 2, asdecimal=False))
    total_fat = Column(Numeric(10, 2, asdecimal=False))
    message = Column(Text)
    admin_notes = Column(Text)
    is_read = Column(Boolean, nullable=False, default=False)
    is_accepted = Column(Boolean)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", foreign_keys=[user_id])
    admin = relationship("User", foreign_keys=[created_by])
    items = relationship(
        "WeeklyMealSuggestionItem",
        back_populates="weekly_suggestion",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "week_start_date", name="uq_weekly_suggestion_week"),
    )


class WeeklyMealSuggestionItem(Base):
    __tablename__ = "weekly_meal_suggestion_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    weekly_meal_suggestion_id = Column(
        Integer,
        ForeignKey("weekly_meal_suggestions.id", ondelete="CASCADE"),
        nullable=False,
    )
    meal_suggestion_id = Column(
        Integer, ForeignKey("meal_suggestions.id", ondelete="SET NULL")
    )
    recipe_suggestion_id = Column(
        Integer, ForeignKey("recipe_suggestions.id", ondelete="SET NULL")
    )
    meal_type = Column(
        SQLEnum(MealType, name="meal_type", values_callable=enum_values), nullable=False
    )
    day_of_week = Column(
        SQLEnum(DayOfWeek, name="day_of_week", values_callable=enum_values),
        nullable=False,
    )
    custom_meal_name = Column(String(255))
    custom_ingredients = Column(JSON)
    custom_nutrition = Column(JSON)
    notes = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    weekly_suggestion = relationship("WeeklyMealSuggestion", back_populates="items")
    meal_suggestion = relationship("MealSuggestion")
    recipe_suggestion = relationship("RecipeSuggestion")

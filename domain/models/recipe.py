"""
Recipe models: recipes, their ingredient lines, reviews and likes.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    JSON,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base, enum_values
from domain.enums import Difficulty


class Recipe(Base):
    """Recipe with per-serving nutrition and moderation flags"""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    instructions = Column(Text, nullable=False)
    prep_time = Column(Integer)  # minutes
    cook_time = Column(Integer)  # minutes
    servings = Column(Integer, nullable=False, default=1)
    difficulty = Column(
        SQLEnum(Difficulty, name="difficulty", values_callable=enum_values)
    )
    cuisine_type = Column(String(100))
    dietary_tags = Column(JSON)  # list[str]
    image_url = Column(String(500))
    video_url = Column(String(500))
    calories_per_serving = Column(Numeric(8, 2, asdecimal=False))
    protein_per_serving = Column(Numeric(8, 2, asdecimal=False))
    carbs_per_serving = Column(Numeric(8, 2, asdecimal=False))
    fat_per_serving = Column(Numeric(8, 2, asdecimal=False))
    fiber_per_serving = Column(Numeric(8, 2, asdecimal=False))
    sugar_per_serving = Column(Numeric(8, 2, asdecimal=False))
    sodium_per_serving = Column(Numeric(8, 2, asdecimal=False))
    tips = Column(Text)
    nutrition_notes = Column(Text)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    is_approved = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_ai_generated = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    avg_rating = Column(Numeric(3, 2, asdecimal=False), nullable=False, default=0)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    creator = relationship("User")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    reviews = relationship(
        "RecipeReview",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeReview.created_at.desc()",
    )
    likes = relationship("RecipeLike", cascade="all, delete-orphan")


class RecipeIngredient(Base):
    """One ingredient line of a recipe"""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="SET NULL"))
    ingredient_name = Column(String(150), nullable=False)
    amount = Column(Numeric(10, 2, asdecimal=False))
    unit = Column(String(50))
    notes = Column(Text)

    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient")


class RecipeReview(Base):
    """A user's 1-5 star rating of a recipe; one per user and recipe"""

    __tablename__ = "recipe_reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    recipe = relationship("Recipe", back_populates="reviews")
    user = relationship("User", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("recipe_id", "user_id", name="uq_recipe_review_user"),
    )


class RecipeLike(Base):
    __tablename__ = "recipe_likes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("recipe_id", "user_id", name="uq_recipe_like_user"),
    )

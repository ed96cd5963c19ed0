"""
Meal planning models: plans, their day/slot items, and grocery lists.
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
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base, enum_values
from domain.enums import MealType, DayOfWeek


class MealPlan(Base):
    """A user's plan spanning a date range"""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_calories = Column(Numeric(10, 2, asdecimal=False))
    total_protein = Column(Numeric(10, 2, asdecimal=False))
    total_carbs = Column(Numeric(10, 2, asdecimal=False))
    total_fat = Column(Numeric(10, 2, asdecimal=False))
    is_ai_generated = Column(Boolean, nullable=False, default=False)
    ai_prompt = Column(Text)
    is_approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="meal_plans")
    items = relationship(
        "MealPlanItem", back_populates="plan", cascade="all, delete-orphan"
    )


class MealPlanItem(Base):
    """One recipe or custom meal in a day-of-week / meal-type slot"""

    __tablename__ = "meal_plan_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_plan_id = Column(
        Integer,
        ForeignKey("meal_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="SET NULL"))
    meal_type = Column(
        SQLEnum(MealType, name="meal_type", values_callable=enum_values),
        nullable=False,
    )
    day_of_week = Column(
        SQLEnum(DayOfWeek, name="day_of_week", values_callable=enum_values),
        nullable=False,
    )
    custom_meal_name = Column(String(255))
    custom_ingredients = Column(JSON)  # [{"name", "quantity", "unit"}]
    custom_nutrition = Column(JSON)  # {"calories", "protein", "carbs", "fat"}
    notes = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    plan = relationship("MealPlan", back_populates="items")
    recipe = relationship("Recipe")


class GroceryList(Base):
    """Shopping list generated from a meal plan"""

    __tablename__ = "grocery_lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    meal_plan_id = Column(Integer, ForeignKey("meal_plans.id", ondelete="SET NULL"))
    name = Column(String(255), nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="grocery_lists")
    items = relationship(
        "GroceryListItem", back_populates="grocery_list", cascade="all, delete-orphan"
    )


class GroceryListItem(Base):
    __tablename__ = "grocery_list_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    grocery_list_id = Column(
        Integer,
        ForeignKey("grocery_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="SET NULL"))
    custom_item_name = Column(String(255))
    quantity = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    unit = Column(String(50))
    category_id = Column(Integer, ForeignKey("food_categories.id", ondelete="SET NULL"))
    is_checked = Column(Boolean, nullable=False, default=False)
    notes = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    grocery_list = relationship("GroceryList", back_populates="items")
    ingredient = relationship("Ingredient")

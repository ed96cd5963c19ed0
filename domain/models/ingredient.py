"""
Ingredient catalogue models.
Food categories group ingredients; recipes and grocery lists reference both.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class FoodCategory(Base):
    """Grocery aisle style grouping (Produce, Dairy, ...)"""

    __tablename__ = "food_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    color = Column(String(20))
    icon = Column(String(50))
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    ingredients = relationship("Ingredient", back_populates="category")

    __table_args__ = (UniqueConstraint("name", name="uq_food_category_name"),)

    def __repr__(self):
        return f"<FoodCategory(id={self.id}, name='{self.name}')>"


class Ingredient(Base):
    """
    Master ingredient table with nutrition per 100g.

    Recipe ingredients link here by name when a matching row exists; AI-generated
    recipes create missing rows with zeroed nutrition.
    """

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False, index=True)
    category_id = Column(
        Integer, ForeignKey("food_categories.id", ondelete="SET NULL"), nullable=True
    )
    calories_per_100g = Column(Numeric(8, 2, asdecimal=False))
    protein_per_100g = Column(Numeric(8, 2, asdecimal=False))
    carbs_per_100g = Column(Numeric(8, 2, asdecimal=False))
    fat_per_100g = Column(Numeric(8, 2, asdecimal=False))
    fiber_per_100g = Column(Numeric(8, 2, asdecimal=False))
    sugar_per_100g = Column(Numeric(8, 2, asdecimal=False))
    sodium_per_100g = Column(Numeric(8, 2, asdecimal=False))
    vitamins = Column(JSON)  # {"vitamin_c": 12.5, ...}
    allergens = Column(JSON)  # ["nuts", ...]
    image_url = Column(String(500))

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    category = relationship("FoodCategory", back_populates="ingredients")

    __table_args__ = (UniqueConstraint("name", name="uq_ingredient_name"),)

    def __repr__(self):
        return f"<Ingredient(id={self.id}, name='{self.name}')>"

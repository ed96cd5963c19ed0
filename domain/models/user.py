"""
User-related database models.
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
from domain.enums import UserRole, Gender, GoalType, ActivityLevel


class User(Base):
    """User account model"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.USER,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    reset_token = Column(String(128), index=True)
    reset_token_expires = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Relationships
    profile = relationship(
        "UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    weight_logs = relationship(
        "WeightLog", back_populates="user", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlan", back_populates="user", cascade="all, delete-orphan"
    )
    grocery_lists = relationship(
        "GroceryList", back_populates="user", cascade="all, delete-orphan"
    )
    reviews = relationship(
        "RecipeReview", back_populates="user", cascade="all, delete-orphan"
    )
    recipe_likes = relationship("RecipeLike", cascade="all, delete-orphan")
    suggestions = relationship(
        "Suggestion", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserProfile(Base):
    """Body metrics and dietary settings, one row per user"""

    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    age = Column(Integer)
    gender = Column(SQLEnum(Gender, name="gender", values_callable=enum_values))
    weight = Column(Numeric(5, 2, asdecimal=False))  # kg
    height = Column(Numeric(5, 2, asdecimal=False))  # cm
    target_weight = Column(Numeric(5, 2, asdecimal=False))
    activity_level = Column(
        SQLEnum(ActivityLevel, name="activity_level", values_callable=enum_values)
    )
    fitness_goal = Column(
        SQLEnum(GoalType, name="fitness_goal", values_callable=enum_values)
    )
    dietary_preferences = Column(JSON)  # list[str]
    allergies = Column(JSON)  # list[str]
    medical_conditions = Column(Text)
    phone = Column(String(30))
    date_of_birth = Column(Date)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")


class WeightLog(Base):
    """Body weight measurements used for progress tracking"""

    __tablename__ = "weight_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    weight = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    logged_on = Column(Date, nullable=False)
    notes = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    user = relationship("User", back_populates="weight_logs")

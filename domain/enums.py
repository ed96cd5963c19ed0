"""
Domain enums for NutriPlan application.
Contains all enumeration types used across the domain models.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    USER = "user"
    ADMIN = "admin"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class GoalType(str, enum.Enum):
    """Fitness goal types"""

    WEIGHT_LOSS = "weight_loss"
    MAINTENANCE = "maintenance"
    MUSCLE_GAIN = "muscle_gain"


class ActivityLevel(str, enum.Enum):
    """Physical activity levels"""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class Difficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class CookingSkill(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class MealType(str, enum.Enum):
    """Meal slots within a day, in serving order"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class DayOfWeek(str, enum.Enum):
    """Days of the week, Monday first"""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


MEAL_TYPE_ORDER = {m.value: i for i, m in enumerate(MealType)}
DAY_ORDER = {d.value: i for i, d in enumerate(DayOfWeek)}


class AnalysisType(str, enum.Enum):
    """Kinds of generative-AI calls recorded in the audit log"""

    MEAL_PLAN = "meal_plan"
    RECIPE_SUGGESTION = "recipe_suggestion"
    NUTRITION_ANALYSIS = "nutrition_analysis"
    RECIPE_GENERATION = "recipe_generation"
    WEEKLY_MEAL_PLAN = "weekly_meal_plan"


class SuggestionType(str, enum.Enum):
    RECIPE = "recipe"
    MEAL_PLAN = "meal_plan"


class SuggestionStatus(str, enum.Enum):
    """Approval workflow states for user-authored suggestions"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    IMPLEMENTED = "implemented"


class VoteType(str, enum.Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class InteractionType(str, enum.Enum):
    """Toggleable interactions with curated meal/recipe suggestions"""

    VIEW = "view"
    LIKE = "like"
    SAVE = "save"
    TRY = "try"


class AdminSuggestionKind(str, enum.Enum):
    MEAL = "meal"
    RECIPE = "recipe"


class ProgressPeriod(str, enum.Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

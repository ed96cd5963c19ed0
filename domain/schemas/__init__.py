"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
    UpdateUserInfoRequest,
    ProfileUpdateRequest,
    UserResponse,
    ProfileResponse,
    AuthResponse,
)
from domain.schemas.recipe_schemas import (
    AIUserProfile,
    RecipeIngredientIn,
    RecipeCreate,
    RecipeUpdate,
    ReviewCreate,
    AIRecipeRequest,
)
from domain.schemas.plan_schemas import (
    MealItemIn,
    MealPlanCreate,
    MealPlanUpdate,
    MealPlanPreferences,
    AIMealPlanRequest,
    AIWeeklyMealPlanRequest,
    GroceryListRequest,
    CopyMealPlanRequest,
    MealPlanApproval,
)
from domain.schemas.ai_schemas import (
    GeneratedIngredient,
    GeneratedNutrition,
    GeneratedMeal,
    GeneratedMealPlan,
    GeneratedRecipe,
    GeneratedWeeklyMeal,
    GeneratedWeeklyDay,
    GeneratedWeeklyPlan,
)
from domain.schemas.suggestion_schemas import (
    SuggestionCreate,
    VoteRequest,
    SuggestionStatusUpdate,
    InteractionRequest,
    MealSuggestionCreate,
    MealSuggestionUpdate,
    RecipeSuggestionCreate,
    RecipeSuggestionUpdate,
    SendMealSuggestion,
    SendRecipeSuggestion,
    WeeklySuggestionItemIn,
    WeeklySuggestionCreate,
    SuggestionStatusPatch,
    RespondRequest,
)
from domain.schemas.admin_schemas import (
    UserStatusUpdate,
    RecipeApproval,
    CategoryCreate,
    CategoryUpdate,
    IngredientCreate,
    IngredientUpdate,
)
from domain.schemas.progress_schemas import WeightLogCreate

__all__ = [
    # Auth and profile
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "ChangePasswordRequest",
    "UpdateUserInfoRequest",
    "ProfileUpdateRequest",
    "UserResponse",
    "ProfileResponse",
    "AuthResponse",
    # Recipes
    "AIUserProfile",
    "RecipeIngredientIn",
    "RecipeCreate",
    "RecipeUpdate",
    "ReviewCreate",
    "AIRecipeRequest",
    # Meal plans
    "MealItemIn",
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealPlanPreferences",
    "AIMealPlanRequest",
    "AIWeeklyMealPlanRequest",
    "GroceryListRequest",
    "CopyMealPlanRequest",
    "MealPlanApproval",
    # Generated output
    "GeneratedIngredient",
    "GeneratedNutrition",
    "GeneratedMeal",
    "GeneratedMealPlan",
    "GeneratedRecipe",
    "GeneratedWeeklyMeal",
    "GeneratedWeeklyDay",
    "GeneratedWeeklyPlan",
    # Suggestions
    "SuggestionCreate",
    "VoteRequest",
    "SuggestionStatusUpdate",
    "InteractionRequest",
    "MealSuggestionCreate",
    "MealSuggestionUpdate",
    "RecipeSuggestionCreate",
    "RecipeSuggestionUpdate",
    "SendMealSuggestion",
    "SendRecipeSuggestion",
    "WeeklySuggestionItemIn",
    "WeeklySuggestionCreate",
    "SuggestionStatusPatch",
    "RespondRequest",
    # Admin
    "UserStatusUpdate",
    "RecipeApproval",
    "CategoryCreate",
    "CategoryUpdate",
    "IngredientCreate",
    "IngredientUpdate",
    # Progress
    "WeightLogCreate",
]

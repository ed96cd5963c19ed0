"""
AI generation of recipes and meal plans.

Every generator follows the same contract: build a prompt, ask the model for
JSON, parse it strictly against a schema and either accept the whole document
or reject it. A rejected or failed call produces exactly one deterministic
fallback. Each call is written to the AI audit log.
"""

from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence, Type, TypeVar
import json
import logging
import re
import time

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from adapters import gemini_adapter
from app.config import settings
from domain.enums import AnalysisType, DayOfWeek, MealType, Difficulty
from domain.mappers.recipe_mapper import RecipeMapper
from domain.models import User, Recipe, MealPlan, MealPlanItem, AIAnalysisLog
from domain.schemas.ai_schemas import (
    GeneratedIngredient,
    GeneratedMeal,
    GeneratedMealPlan,
    GeneratedNutrition,
    GeneratedRecipe,
    GeneratedWeeklyDay,
    GeneratedWeeklyMeal,
    GeneratedWeeklyPlan,
)
from domain.schemas.plan_schemas import AIMealPlanRequest, AIWeeklyMealPlanRequest
from domain.schemas.recipe_schemas import AIRecipeRequest, AIUserProfile
from repositories import RecipeRepository
from services.meal_plan_service import MealPlanService
from services.recipe_service import RecipeService

logger = logging.getLogger("nutriplan.ai")

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_FENCED_JSON = re.compile(r"\A```(?:json)?[ \t]*\n(?P<body>.*)\n[ \t]*```\Z", re.DOTALL)

WEEKLY_RECIPE_LIMIT = 20
FALLBACK_RECIPE_POOL = 5

DAYS: List[DayOfWeek] = list(DayOfWeek)
MAIN_MEALS = (MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER)

SNACK_NAMES = (
    "Greek Yogurt with Berries",
    "Almonds and Apple",
    "Hummus with Carrots",
    "Mixed Nuts",
    "Apple with Peanut Butter",
    "Greek Yogurt with Honey",
    "Carrot Sticks with Hummus",
)
CUSTOM_MEAL_NAMES = {
    MealType.BREAKFAST: (
        "Oatmeal with Berries",
        "Scrambled Eggs with Toast",
        "Greek Yogurt Parfait",
        "Smoothie Bowl",
    ),
    MealType.LUNCH: (
        "Grilled Chicken Salad",
        "Quinoa Bowl",
        "Turkey Sandwich",
        "Vegetable Soup",
    ),
    MealType.DINNER: (
        "Salmon with Vegetables",
        "Pasta Primavera",
        "Stir-Fried Tofu",
        "Grilled Steak",
    ),
}
SNACK_NUTRITION = {"calories": 180, "protein": 8, "carbs": 20, "fat": 8}
CUSTOM_MEAL_NUTRITION = {"calories": 300, "protein": 15, "carbs": 30, "fat": 10}
FALLBACK_TOTALS = {
    "total_calories": 1680,
    "total_protein": 120,
    "total_carbs": 180,
    "total_fat": 65,
}


class AIResponseRejected(ValueError):
    """The model's output did not satisfy the expected JSON contract."""


# ============================================================================
# Strict parsing
# ============================================================================


def parse_model_json(text: str, schema: Type[SchemaT]) -> SchemaT:
    """
    Parse model output as one JSON object and validate it against ``schema``.

    Accepted shapes are a bare object or a single ```json fenced block holding
    one. Anything else (prose around the JSON, several blocks, trailing commas,
    fractions such as ``1/2``) is rejected; no repair is attempted.

    Raises:
        AIResponseRejected: describing the first problem found
    """
    if not text or not text.strip():
        raise AIResponseRejected("empty response")

    body = text.strip()
    fenced = _FENCED_JSON.match(body)
    if fenced:
        body = fenced.group("body").strip()
        if "```" in body:
            raise AIResponseRejected("more than one fenced block")

    if not (body.startswith("{") and body.endswith("}")):
        raise AIResponseRejected("response is not a single JSON object")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise AIResponseRejected(f"invalid JSON: {e.msg} at line {e.lineno}") from e

    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise AIResponseRejected(
            f"schema violation at {where}: {first['msg']} ({e.error_count()} errors)"
        ) from e


def check_recipe_ids(recipe_ids: Sequence[Optional[int]], offered: set) -> None:
    """Every referenced recipe must come from the list offered in the prompt."""
    unknown = sorted({rid for rid in recipe_ids if rid is not None} - offered)
    if unknown:
        raise AIResponseRejected(f"unknown recipe ids {unknown}")


# ============================================================================
# Prompts
# ============================================================================


def _listing(values, empty: str) -> str:
    return ", ".join(values) if values else empty


def _profile_block(profile: AIUserProfile) -> str:
    def show(value, suffix=""):
        if value is None:
            return "Not specified"
        value = getattr(value, "value", value)
        return f"{value}{suffix}"

    return (
        "USER PROFILE:\n"
        f"- Age: {show(profile.age)}\n"
        f"- Gender: {show(profile.gender)}\n"
        f"- Weight: {show(profile.weight, ' kg')}\n"
        f"- Height: {show(profile.height, ' cm')}\n"
        f"- Activity Level: {show(profile.activity_level)}\n"
        f"- Fitness Goal: {show(profile.fitness_goal)}\n"
        f"- Dietary Preferences: {_listing(profile.dietary_preferences, 'None')}\n"
        f"- Allergies: {_listing(profile.allergies, 'None')}\n"
        f"- Medical Conditions: {profile.medical_conditions or 'None'}\n"
    )


def _recipe_lines(recipes: List[Recipe]) -> str:
    if not recipes:
        return "(no recipes available, use custom meals only)"
    lines = []
    for recipe in recipes:
        ctx = RecipeMapper.to_ai_context(recipe)
        lines.append(
            f"- id {ctx['id']}: {ctx['title']} ({ctx['calories']} cal, "
            f"{ctx['protein']}g protein, {ctx['carbs']}g carbs, {ctx['fat']}g fat) - "
            f"{_listing(ctx['dietary_tags'], 'No dietary tags')}"
        )
    return "\n".join(lines)


_JSON_RULES = (
    "Return exactly one JSON object and nothing else. Use plain JSON numbers "
    "(decimals, never fractions or units inside numbers). Use lowercase day names "
    "(monday..sunday) and meal types (breakfast, lunch, dinner, snack)."
)


def build_meal_plan_prompt(request: AIMealPlanRequest, recipes: List[Recipe]) -> str:
    prefs = request.preferences
    return f"""You are a professional nutritionist and meal planning expert. Create a personalized meal plan for the following user:

{_profile_block(request.user_profile)}
MEAL PLAN PERIOD:
- Start Date: {request.start_date.isoformat()}
- End Date: {request.end_date.isoformat()}

PREFERENCES:
- Cuisine Preferences: {_listing(prefs.cuisine_preferences, 'Any')}
- Meal Preferences: {_listing(prefs.meal_preferences, 'Any')}
- Budget Constraints: {prefs.budget_constraints or 'None'}
- Cooking Skill Level: {prefs.cooking_skill_level.value if prefs.cooking_skill_level else 'Any'}
- Meals per Day: {prefs.meals_per_day or 4}
- Daily Calorie Target: {prefs.calorie_target or 'Not specified'}

AVAILABLE RECIPES:
{_recipe_lines(recipes)}

RULES:
1. Balance the plan for the user's goal, activity level and calorie target.
2. Respect dietary preferences and never include allergens.
3. Every meal has either a recipe_id taken from AVAILABLE RECIPES or a custom_meal_name with custom_ingredients and custom_nutrition.
4. Do not invent recipe ids.
5. {_JSON_RULES}

JSON SHAPE:
{{
  "name": "string",
  "description": "string",
  "total_calories": 0,
  "total_protein": 0,
  "total_carbs": 0,
  "total_fat": 0,
  "meals": [
    {{
      "day_of_week": "monday",
      "meal_type": "breakfast",
      "recipe_id": 1,
      "custom_meal_name": null,
      "custom_ingredients": [{{"name": "string", "amount": 1, "unit": "string"}}],
      "custom_nutrition": {{"calories": 0, "protein": 0, "carbs": 0, "fat": 0}}
    }}
  ]
}}"""


def build_recipe_prompt(request: AIRecipeRequest) -> str:
    parts = ["Generate a complete recipe with the following requirements:", ""]
    parts.append(f"Title: {request.title or 'Create an original recipe name'}")
    if request.cuisine_type:
        parts.append(f"Cuisine Type: {request.cuisine_type}")
    if request.difficulty:
        parts.append(f"Difficulty Level: {request.difficulty.value}")
    if request.dietary_preferences:
        parts.append(f"Dietary Preferences: {', '.join(request.dietary_preferences)}")
    if request.ingredients_available:
        parts.append(f"Available Ingredients: {', '.join(request.ingredients_available)}")
    if request.cooking_time:
        parts.append(f"Cooking Time: {request.cooking_time} minutes")
    if request.servings:
        parts.append(f"Servings: {request.servings} people")
    if request.description:
        parts.append(f"Description: {request.description}")
    if request.user_profile:
        parts.extend(["", _profile_block(request.user_profile)])
    parts.extend(
        [
            "",
            _JSON_RULES,
            "",
            "JSON SHAPE:",
            """{
  "title": "string",
  "description": "string",
  "cuisine_type": "string",
  "difficulty": "easy|medium|hard",
  "prep_time": 15,
  "cook_time": 30,
  "servings": 4,
  "calories_per_serving": 350,
  "protein_per_serving": 25,
  "carbs_per_serving": 45,
  "fat_per_serving": 12,
  "fiber_per_serving": 8,
  "sugar_per_serving": 5,
  "sodium_per_serving": 400,
  "dietary_tags": ["string"],
  "ingredients": [{"name": "string", "amount": 2, "unit": "cups"}],
  "instructions": ["string"],
  "tips": "string"
}""",
        ]
    )
    return "\n".join(parts)


def build_weekly_prompt(request: AIWeeklyMealPlanRequest, recipes: List[Recipe]) -> str:
    prefs = request.preferences
    return f"""Generate a weekly meal plan for the seven days starting {request.week_start_date.isoformat()}.

{_profile_block(request.user_profile)}
PREFERENCES:
- Cuisine Preferences: {_listing(prefs.cuisine_preferences, 'Any')}
- Meal Preferences: {_listing(prefs.meal_preferences, 'Any')}
- Cooking Skill Level: {prefs.cooking_skill_level.value if prefs.cooking_skill_level else 'Any'}
- Meals per Day: {prefs.meals_per_day or 3}
- Daily Calorie Target: {prefs.calorie_target or 'Not specified'}

AVAILABLE RECIPES:
{_recipe_lines(recipes)}

RULES:
1. Each meal has a recipe_id from AVAILABLE RECIPES or a custom_meal_name.
2. Give calories, protein, carbs and fat for every meal.
3. {_JSON_RULES}

JSON SHAPE:
{{
  "name": "string",
  "description": "string",
  "total_calories": 0,
  "total_protein": 0,
  "total_carbs": 0,
  "total_fat": 0,
  "days": [
    {{
      "day_of_week": "monday",
      "meals": [
        {{"meal_type": "breakfast", "recipe_id": 1, "custom_meal_name": null, "calories": 400, "protein": 25, "carbs": 45, "fat": 15}}
      ]
    }}
  ]
}}"""


# ============================================================================
# Fallbacks
# ============================================================================


def _day_sequence(start: date, count: int) -> List[DayOfWeek]:
    return [DAYS[(start.weekday() + offset) % 7] for offset in range(count)]


def fallback_meal_plan(start: date, end: date, recipe_ids: List[int]) -> GeneratedMealPlan:
    """
    Static plan covering min(days in range, 7) days.

    Breakfast, lunch and dinner cycle through up to five available recipes
    (custom meals when there are none); each day ends with a fixed snack.
    """
    pool = recipe_ids[:FALLBACK_RECIPE_POOL]
    day_count = min((end - start).days + 1, 7)
    meals: List[GeneratedMeal] = []
    recipe_index = 0
    for day_index, day in enumerate(_day_sequence(start, day_count)):
        for meal_type in MAIN_MEALS:
            if pool:
                meals.append(
                    GeneratedMeal(
                        day_of_week=day,
                        meal_type=meal_type,
                        recipe_id=pool[recipe_index % len(pool)],
                    )
                )
                recipe_index += 1
            else:
                names = CUSTOM_MEAL_NAMES[meal_type]
                name = names[day_index % len(names)]
                meals.append(
                    GeneratedMeal(
                        day_of_week=day,
                        meal_type=meal_type,
                        custom_meal_name=name,
                        custom_ingredients=[
                            GeneratedIngredient(name=name, amount=1, unit="serving")
                        ],
                        custom_nutrition=GeneratedNutrition(**CUSTOM_MEAL_NUTRITION),
                    )
                )
        meals.append(
            GeneratedMeal(
                day_of_week=day,
                meal_type=MealType.SNACK,
                custom_meal_name=SNACK_NAMES[day_index % len(SNACK_NAMES)],
                custom_ingredients=[
                    GeneratedIngredient(name="Healthy Snack", amount=1, unit="serving")
                ],
                custom_nutrition=GeneratedNutrition(**SNACK_NUTRITION),
            )
        )
    return GeneratedMealPlan(
        name="AI Generated Meal Plan",
        description="A personalized meal plan generated using AI",
        meals=meals,
        **FALLBACK_TOTALS,
    )


def fallback_recipe(request: AIRecipeRequest) -> GeneratedRecipe:
    return GeneratedRecipe(
        title=request.title or "Generated Recipe",
        description="A delicious recipe generated by AI",
        instructions=[
            "Prepare your ingredients",
            "Follow cooking instructions",
            "Serve and enjoy!",
        ],
        ingredients=[
            GeneratedIngredient(name="Ingredient 1", amount=1, unit="piece"),
            GeneratedIngredient(name="Ingredient 2", amount=2, unit="pieces"),
        ],
        prep_time=10,
        cook_time=20,
        servings=request.servings or 4,
        difficulty=request.difficulty or Difficulty.MEDIUM,
        cuisine_type=request.cuisine_type or "general",
        dietary_tags=[],
        calories_per_serving=300,
        protein_per_serving=15,
        carbs_per_serving=30,
        fat_per_serving=10,
        fiber_per_serving=5,
        sugar_per_serving=8,
        sodium_per_serving=400,
    )


def fallback_weekly_plan(week_start: date, recipe_ids: List[int]) -> GeneratedWeeklyPlan:
    """The meal-plan fallback for seven days, grouped by day."""
    plan = fallback_meal_plan(week_start, week_start + timedelta(days=6), recipe_ids)
    days = []
    for day in _day_sequence(week_start, 7):
        day_meals = []
        for meal in plan.meals:
            if meal.day_of_week != day:
                continue
            nutrition = meal.custom_nutrition
            day_meals.append(
                GeneratedWeeklyMeal(
                    meal_type=meal.meal_type,
                    recipe_id=meal.recipe_id,
                    custom_meal_name=meal.custom_meal_name,
                    calories=nutrition.calories if nutrition else None,
                    protein=nutrition.protein if nutrition else None,
                    carbs=nutrition.carbs if nutrition else None,
                    fat=nutrition.fat if nutrition else None,
                    ingredients=meal.custom_ingredients,
                )
            )
        days.append(GeneratedWeeklyDay(day_of_week=day, meals=day_meals))
    return GeneratedWeeklyPlan(
        name="AI Generated Weekly Meal Plan",
        description=plan.description,
        days=days,
        **FALLBACK_TOTALS,
    )


# ============================================================================
# Service
# ============================================================================


def _custom_ingredients(ingredients: Optional[List[GeneratedIngredient]]):
    if not ingredients:
        return None
    return [{"name": i.name, "quantity": i.amount, "unit": i.unit} for i in ingredients]


class AIService:
    """Recipe and meal-plan generation backed by the Gemini adapter"""

    @staticmethod
    def _record(
        db: Session,
        user: User,
        analysis_type: AnalysisType,
        prompt: str,
        response: Optional[str],
        tokens: Optional[int],
        elapsed_ms: int,
        used_fallback: bool,
    ) -> None:
        """Write the audit row; a failure here never fails the request"""
        try:
            db.add(
                AIAnalysisLog(
                    user_id=user.id,
                    analysis_type=analysis_type,
                    prompt=prompt,
                    response=response,
                    tokens_used=tokens,
                    processing_time_ms=elapsed_ms,
                    used_fallback=used_fallback,
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"ai_log_failed user_id={user.id} error={e}")

    @staticmethod
    def _call_model(
        db: Session,
        user: User,
        analysis_type: AnalysisType,
        prompt: str,
        schema: Type[SchemaT],
        check: Optional[Callable[[SchemaT], None]] = None,
    ) -> Optional[SchemaT]:
        """
        Ask the model and parse its answer.

        Returns:
            the validated document, or None when the caller must use its fallback
        """
        started = time.perf_counter()
        raw: Optional[str] = None
        tokens: Optional[int] = None
        result: Optional[SchemaT] = None
        error: Optional[str] = None
        try:
            raw, tokens = gemini_adapter.generate_json(prompt)
            result = parse_model_json(raw, schema)
            if check is not None:
                check(result)
        except AIResponseRejected as e:
            result = None
            error = f"rejected: {e}"
        except Exception as e:
            # transport, quota and safety-block errors from the client
            result = None
            error = f"{type(e).__name__}: {e}"

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        used_fallback = result is None
        if used_fallback:
            logger.warning(
                f"ai_fallback type={analysis_type.value} user_id={user.id} reason={error}"
            )
        else:
            logger.info(
                f"ai_generated type={analysis_type.value} user_id={user.id} "
                f"tokens={tokens} ms={elapsed_ms}"
            )

        logged_response = raw if raw is not None else error
        if used_fallback and raw is not None:
            logged_response = f"{raw}\n\n[{error}]"
        AIService._record(
            db, user, analysis_type, prompt, logged_response, tokens, elapsed_ms, used_fallback
        )
        return result

    @staticmethod
    def _context_recipes(db: Session) -> List[Recipe]:
        return RecipeRepository(db).for_ai_context(settings.ai_recipe_context_limit)

    @staticmethod
    def generate_meal_plan(db: Session, user: User, request: AIMealPlanRequest) -> MealPlan:
        """Generate, validate and store a meal plan for the requested period"""
        recipes = AIService._context_recipes(db)
        offered = {r.id for r in recipes}
        prompt = build_meal_plan_prompt(request, recipes)

        plan = AIService._call_model(
            db,
            user,
            AnalysisType.MEAL_PLAN,
            prompt,
            GeneratedMealPlan,
            check=lambda p: check_recipe_ids([m.recipe_id for m in p.meals], offered),
        )
        if plan is None:
            plan = fallback_meal_plan(
                request.start_date, request.end_date, [r.id for r in recipes]
            )

        items = [
            MealPlanItem(
                recipe_id=m.recipe_id,
                meal_type=m.meal_type,
                day_of_week=m.day_of_week,
                custom_meal_name=m.custom_meal_name,
                custom_ingredients=_custom_ingredients(m.custom_ingredients),
                custom_nutrition=(
                    m.custom_nutrition.model_dump() if m.custom_nutrition else None
                ),
                notes=m.notes,
            )
            for m in plan.meals
        ]
        return MealPlanService.save_generated_plan(
            db,
            user,
            name=request.name or plan.name or "AI Generated Meal Plan",
            description=plan.description,
            start=request.start_date,
            end=request.end_date,
            items=items,
            totals=plan.model_dump(
                include={"total_calories", "total_protein", "total_carbs", "total_fat"}
            ),
            ai_prompt=request.model_dump_json(),
        )

    @staticmethod
    def generate_recipe(db: Session, user: User, request: AIRecipeRequest) -> Recipe:
        prompt = build_recipe_prompt(request)
        recipe = AIService._call_model(
            db, user, AnalysisType.RECIPE_GENERATION, prompt, GeneratedRecipe
        )
        if recipe is None:
            return RecipeService.save_generated_recipe(
                db, user, fallback_recipe(request), request, link_catalogue=False
            )
        return RecipeService.save_generated_recipe(db, user, recipe, request)

    @staticmethod
    def generate_weekly_plan(
        db: Session, user: User, request: AIWeeklyMealPlanRequest
    ) -> MealPlan:
        """Seven-day plan; per-meal macros are stored as custom nutrition"""
        recipes = AIService._context_recipes(db)[:WEEKLY_RECIPE_LIMIT]
        offered = {r.id for r in recipes}
        prompt = build_weekly_prompt(request, recipes)

        weekly = AIService._call_model(
            db,
            user,
            AnalysisType.WEEKLY_MEAL_PLAN,
            prompt,
            GeneratedWeeklyPlan,
            check=lambda w: check_recipe_ids(
                [m.recipe_id for d in w.days for m in d.meals], offered
            ),
        )
        if weekly is None:
            weekly = fallback_weekly_plan(request.week_start_date, [r.id for r in recipes])

        items = []
        for day in weekly.days:
            for meal in day.meals:
                macros = {
                    key: getattr(meal, key)
                    for key in ("calories", "protein", "carbs", "fat")
                    if getattr(meal, key) is not None
                }
                items.append(
                    MealPlanItem(
                        recipe_id=meal.recipe_id,
                        meal_type=meal.meal_type,
                        day_of_week=day.day_of_week,
                        custom_meal_name=meal.custom_meal_name,
                        custom_ingredients=_custom_ingredients(meal.ingredients),
                        custom_nutrition=macros or None,
                        notes=meal.notes,
                    )
                )

        start = request.week_start_date
        return MealPlanService.save_generated_plan(
            db,
            user,
            name=request.name or weekly.name or "AI Generated Weekly Meal Plan",
            description=weekly.description,
            start=start,
            end=start + timedelta(days=6),
            items=items,
            totals=weekly.model_dump(
                include={"total_calories", "total_protein", "total_carbs", "total_fat"}
            ),
            ai_prompt=request.model_dump_json(),
        )

"""
Repository layer tests.

These exercise the data access helpers directly against the test database:
pagination, conflict handling, lookups and the ordering each listing promises.
"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    db_session,
    make_user,
    make_admin,
    make_category,
    make_ingredient,
    make_recipe,
    make_meal_plan,
    make_profile,
    meal_item,
    make_meal_suggestion,
    unique_email,
)
from app.exceptions import ConflictError
from domain.enums import InteractionType, UserRole
from domain.models import (
    GroceryList,
    MealPlan,
    MealPlanItem,
    Recipe,
    RecipeLike,
    RecipeReview,
    User,
    UserProfile,
    WeeklyMealSuggestion,
    WeightLog,
)
from repositories import (
    UserRepository,
    RecipeRepository,
    ReviewRepository,
    IngredientRepository,
    CategoryRepository,
    MealPlanRepository,
    MealSuggestionRepository,
    WeeklySuggestionRepository,
    paginate,
)


# =============================================================================
# BASE REPOSITORY
# =============================================================================


def test_paginate_counts_without_order(db_session: Session):
    for title in ("One", "Two", "Three", "Four", "Five"):
        make_recipe(db_session, title=title)
    query = db_session.query(User).order_by(User.id)
    assert paginate(query, 1, 10) == ([], 0)

    rows, total = RecipeRepository(db_session).search(2, 2)
    assert total == 5
    assert [r.title for r in rows] == ["Three", "Two"]

    rows, total = RecipeRepository(db_session).search(4, 2)
    assert (rows, total) == ([], 5)


def test_create_conflict_uses_repository_message(db_session: Session):
    """
    Verifies:
    - A unique-key violation becomes ConflictError with the repository's message
    - The session is usable again afterwards
    """
    repo = UserRepository(db_session)
    email = unique_email("dup")
    repo.create(User(email=email, password="x", first_name="Ana", last_name="Silva"))

    with pytest.raises(ConflictError) as exc_info:
        repo.create(User(email=email, password="y", first_name="Ana", last_name="Silva"))
    assert exc_info.value.message == "User with this email already exists"
    assert exc_info.value.http_status == 409

    assert repo.count() == 1
    assert repo.get_by_email(email.upper()).first_name == "Ana"


def test_review_conflict_message(db_session: Session):
    user = make_user(db_session)
    recipe = make_recipe(db_session)
    repo = ReviewRepository(db_session)
    repo.create(RecipeReview(recipe_id=recipe.id, user_id=user.id, rating=4))

    with pytest.raises(ConflictError, match="You have already reviewed this recipe"):
        repo.create(RecipeReview(recipe_id=recipe.id, user_id=user.id, rating=5))

    assert repo.average_rating(recipe.id) == 4.0
    assert repo.count_for_recipe(recipe.id) == 1
    assert repo.average_rating(9999) == 0.0


def test_delete_and_exists(db_session: Session):
    category = make_category(db_session)
    repo = CategoryRepository(db_session)

    assert repo.exists(category.id) is True
    assert repo.delete(category.id) is True
    assert repo.exists(category.id) is False
    assert repo.delete(category.id) is False


# =============================================================================
# LOOKUPS
# =============================================================================


def test_name_lookups_are_case_insensitive(db_session: Session):
    vegetables = make_category(db_session)
    make_ingredient(db_session, "Sweet Potato", category=vegetables)

    assert IngredientRepository(db_session).get_by_name("  sweet potato ").name == "Sweet Potato"
    assert CategoryRepository(db_session).get_by_name("VEGETABLES").id == vegetables.id
    assert IngredientRepository(db_session).get_by_name("yam") is None


def test_ingredient_usage_checks(db_session: Session):
    vegetables = make_category(db_session)
    kale = make_ingredient(db_session, "Kale", category=vegetables)
    leek = make_ingredient(db_session, "Leek")
    make_recipe(db_session, ingredients=[(kale, 100, "g")])

    ingredients = IngredientRepository(db_session)
    assert ingredients.is_used_in_recipes(kale.id) is True
    assert ingredients.is_used_in_recipes(leek.id) is False
    assert CategoryRepository(db_session).has_ingredients(vegetables.id) is True

    counts = dict(
        (c.name, n) for c, n in CategoryRepository(db_session).list_with_counts()
    )
    assert counts == {"Vegetables": 1}


def test_user_search_filters(db_session: Session):
    make_user(db_session)
    make_user(db_session, profile_type="athlete", is_active=False)
    make_admin(db_session)
    repo = UserRepository(db_session)

    users, total = repo.search(1, 10, role=UserRole.USER)
    assert total == 2
    assert [u.first_name for u in users] == ["Michael", "Sarah"]

    users, _ = repo.search(1, 10, is_active=False)
    assert [u.last_name for u in users] == ["Chen"]

    users, _ = repo.search(1, 10, search="PATEL")
    assert [u.role for u in users] == [UserRole.ADMIN]
    assert len(repo.recent(2)) == 2


# =============================================================================
# RECIPES
# =============================================================================


def test_recipe_orderings(db_session: Session):
    """
    Verifies:
    - popular: approved only, most viewed first, id breaks ties
    - featured: featured and approved
    - AI context: featured first, then views
    """
    a = make_recipe(db_session, title="A", view_count=5)
    b = make_recipe(db_session, title="B", view_count=5, is_featured=True)
    make_recipe(db_session, title="C", view_count=50, is_approved=False, is_featured=True)
    d = make_recipe(db_session, title="D", view_count=20)
    repo = RecipeRepository(db_session)

    assert [r.title for r in repo.popular(10)] == ["D", "A", "B"]
    assert [r.title for r in repo.featured()] == ["B"]
    assert [r.title for r in repo.for_ai_context(10)] == ["B", "D", "A"]
    assert [r.title for r in repo.pending(1, 10)[0]] == ["C"]
    assert repo.existing_ids([a.id, d.id, 9999]) == {a.id, d.id}
    assert repo.existing_ids([]) == set()
    assert b.id in {r.id for r in repo.approved()}


def test_count_by_creator(db_session: Session):
    user = make_user(db_session)
    make_recipe(db_session, creator=user)
    make_recipe(db_session, creator=user, is_ai_generated=True)
    make_recipe(db_session)
    repo = RecipeRepository(db_session)

    assert repo.count_by_creator(user.id) == 2
    assert repo.count_by_creator(user.id, ai_only=True) == 1


# =============================================================================
# MEAL PLANS AND SUGGESTIONS
# =============================================================================


def test_meal_plan_queries(db_session: Session):
    sarah = make_user(db_session)
    michael = make_user(db_session, profile_type="athlete")
    make_meal_plan(db_session, sarah, name="Spring Cut", start_date=date(2026, 3, 2))
    make_meal_plan(db_session, michael, name="Bulk", is_approved=True)
    repo = MealPlanRepository(db_session)

    assert repo.exists_starting_on(sarah.id, date(2026, 3, 2)) is True
    assert repo.exists_starting_on(michael.id, date(2026, 3, 2)) is False

    plans, total = repo.search_all(1, 10, search="chen")
    assert (total, [p.name for p in plans]) == (1, ["Bulk"])

    plans, total = repo.list_approved(1, 10)
    assert [p.name for p in plans] == ["Bulk"]

    plans, total = repo.list_for_user(sarah.id, 1, 10)
    assert [p.name for p in plans] == ["Spring Cut"]


def test_curated_interactions(db_session: Session):
    user = make_user(db_session)
    oats = make_meal_suggestion(db_session)
    hidden = make_meal_suggestion(db_session, title="Hidden", is_active=False)
    repo = MealSuggestionRepository(db_session)

    assert repo.get_active(oats.id).id == oats.id
    assert repo.get_active(hidden.id) is None

    repo.add_interaction(oats.id, user.id, InteractionType.SAVE)
    repo.add_interaction(oats.id, user.id, InteractionType.LIKE)
    db_session.commit()

    assert repo.get_interaction(oats.id, user.id, InteractionType.SAVE) is not None
    assert repo.get_interaction(oats.id, user.id, InteractionType.TRY) is None
    assert [m.title for m in repo.saved_by(user.id)] == ["Overnight Oats"]

    rows, total = repo.search(1, 10, active_only=False)
    assert total == 2


def test_weekly_suggestion_unique_per_week(db_session: Session):
    admin = make_admin(db_session)
    user = make_user(db_session)
    repo = WeeklySuggestionRepository(db_session)

    def weekly():
        return WeeklyMealSuggestion(
            user_id=user.id,
            week_start_date=date(2026, 3, 2),
            week_end_date=date(2026, 3, 8),
            title="Week One",
            created_by=admin.id,
        )

    repo.create(weekly())
    assert repo.get_for_week(user.id, date(2026, 3, 2)).title == "Week One"
    assert repo.get_for_week(user.id, date(2026, 3, 9)) is None

    with pytest.raises(ConflictError, match="Weekly suggestion already exists"):
        repo.create(weekly())


def test_deleting_user_removes_owned_rows(db_session: Session):
    """
    Verifies:
    - Profile, weight logs, plans with items, grocery lists, reviews and likes go with the user
    - Recipes the user wrote stay in the catalogue without a creator
    """
    user = make_user(db_session)
    other = make_user(db_session, profile_type="athlete")
    make_profile(db_session, user)
    recipe = make_recipe(db_session, creator=user)
    plan = make_meal_plan(db_session, user, items=[meal_item(recipe_id=recipe.id)])
    make_meal_plan(db_session, other, name="Bulk")
    db_session.add_all(
        [
            WeightLog(user_id=user.id, weight=78.5, logged_on=date(2026, 3, 2)),
            GroceryList(user_id=user.id, meal_plan_id=plan.id, name="Week One Shop"),
            RecipeReview(recipe_id=recipe.id, user_id=user.id, rating=5),
            RecipeLike(recipe_id=recipe.id, user_id=user.id),
        ]
    )
    db_session.commit()

    assert UserRepository(db_session).delete(user.id) is True

    db_session.expire_all()
    for model in (UserProfile, WeightLog, GroceryList, RecipeReview, RecipeLike, MealPlanItem):
        assert db_session.query(model).count() == 0
    assert [p.name for p in db_session.query(MealPlan).all()] == ["Bulk"]
    assert db_session.get(Recipe, recipe.id).created_by is None
